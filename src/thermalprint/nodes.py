"""Helpers for building print node trees in Python.

Example:
    >>> styles = StyleSheet.create({"title": {"fontSize": 20, "textAlign": "center"}})
    >>> tree = document(
    ...     page(
    ...         text("My Store", style=styles["title"]),
    ...         view(text("Coffee"), text("3.50"), style={"flexDirection": "row"}),
    ...     )
    ... )
"""

from typing import Any

from thermalprint.models.node import ElementType, PrintNode
from thermalprint.styles import merge_styles

StyleArg = dict[str, Any] | list[dict[str, Any] | None] | None


def _node(
    element_type: ElementType,
    child_nodes: tuple[PrintNode, ...],
    style: StyleArg,
    props: dict[str, Any] | None = None,
) -> PrintNode:
    return PrintNode(
        type=element_type,
        props=props or {},
        style=style,  # lists are flattened by the model
        children=list(child_nodes),
    )


def document(*children: PrintNode) -> PrintNode:
    """Root wrapper of a printable document."""
    return _node(ElementType.DOCUMENT, children, None)


def page(*children: PrintNode, style: StyleArg = None) -> PrintNode:
    """A page. Thermal printers print continuously, so pages are only grouping."""
    return _node(ElementType.PAGE, children, style)


def view(*children: PrintNode, style: StyleArg = None) -> PrintNode:
    """A layout container; ``flexDirection: row`` lays children out as columns."""
    return _node(ElementType.VIEW, children, style)


def text(content: Any, style: StyleArg = None) -> PrintNode:
    """A block of text."""
    return _node(ElementType.TEXT, (), style, {"children": content})


def image(src: str | dict[str, str], style: StyleArg = None) -> PrintNode:
    """An image, given as a data URI, base64 string, file path or URL.

    ``{"uri": ...}`` sources are accepted too.
    """
    source = src.get("uri") if isinstance(src, dict) else src
    return _node(ElementType.IMAGE, (), style, {"source": source})


class StyleSheet:
    """Pass-through style sheet; styles need no compilation for printing."""

    @staticmethod
    def create(styles: dict[str, dict[str, Any]]) -> dict[str, dict[str, Any]]:
        return styles

    @staticmethod
    def flatten(styles: list[dict[str, Any] | None]) -> dict[str, Any]:
        """Flatten a list of styles into one; later styles win."""
        return merge_styles(*styles)

    @staticmethod
    def compose(*styles: dict[str, Any] | None) -> dict[str, Any]:
        return merge_styles(*styles)
