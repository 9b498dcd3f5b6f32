"""Print node tree models."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ElementType(StrEnum):
    """Standard element types that can be converted to printer commands."""

    DOCUMENT = "document"
    PAGE = "page"
    VIEW = "view"
    TEXT = "text"
    IMAGE = "image"
    TEXTNODE = "textnode"


class TextAlign(StrEnum):
    """Horizontal alignment supported by thermal printers."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


# Component names used by renderer front-ends, mapped to standard types
COMPONENT_TYPE_MAP: dict[str, ElementType] = {
    "document": ElementType.DOCUMENT,
    "page": ElementType.PAGE,
    "view": ElementType.VIEW,
    "div": ElementType.VIEW,
    "text": ElementType.TEXT,
    "span": ElementType.TEXT,
    "image": ElementType.IMAGE,
    "img": ElementType.IMAGE,
    "textnode": ElementType.TEXTNODE,
    "text_node": ElementType.TEXTNODE,
    "#text": ElementType.TEXTNODE,
}


def normalize_element_type(type_name: str) -> str:
    """Normalize a component type name to a standard element type.

    Unknown names are returned lowercased so the traverser can skip them.

    Args:
        type_name: Component or element type name (e.g. "Text", "TEXT_NODE").

    Returns:
        The standard element type value, or the lowercased input.
    """
    key = type_name.strip().lower()
    element_type = COMPONENT_TYPE_MAP.get(key)
    return element_type.value if element_type else key


class PrintNode(BaseModel):
    """A node of the universal print tree.

    The tree is produced by an external renderer and consumed by the
    converter. Style values are kept as given; malformed values are
    ignored when the style is resolved.
    """

    model_config = ConfigDict(frozen=True, ser_json_bytes="base64")

    type: str
    props: dict[str, Any] = Field(default_factory=dict)
    style: dict[str, Any] = Field(default_factory=dict)
    children: list["PrintNode"] = Field(default_factory=list)

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return normalize_element_type(value)
        return value

    @field_validator("style", mode="before")
    @classmethod
    def _flatten_style(cls, value: Any) -> Any:
        from thermalprint.styles import merge_styles

        if value is None:
            return {}
        if isinstance(value, list | tuple):
            return merge_styles(*value)
        return value

    @field_validator("props", mode="before")
    @classmethod
    def _default_props(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("children", mode="before")
    @classmethod
    def _default_children(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def element_type(self) -> ElementType | None:
        """Get the standard element type, or None for unknown types."""
        try:
            return ElementType(self.type)
        except ValueError:
            return None
