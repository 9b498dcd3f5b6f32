"""Print node tree traversal.

The traverser walks the tree depth-first and drives the command generator.
Formatting is tracked on an explicit stack of desired states: entering a
node pushes its parent's state overridden by the node's own style keys,
leaving it pops. The desired state is only applied to the generator right
before a node emits content, so nested identical settings are emitted once
and nothing is reset when a node is left.

Row containers (``flexDirection: row``) are laid out in two passes: every
child is first rendered to a fixed-width text block, then the blocks are
composed side by side and emitted line by line. Rows holding images are
printed as a stack instead.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any

from thermalprint.generator import CommandGenerator, FormattingState
from thermalprint.imaging import ImageLoader, get_image_source, image_to_raster
from thermalprint.models.node import ElementType, PrintNode, TextAlign
from thermalprint.styles import (
    ViewStyle,
    align_text_in_column,
    calculate_spacing,
    extract_text_style,
    extract_view_style,
    generate_divider_line,
    has_border,
    is_dashed_border,
    parse_width,
    wrap_text,
)

logger = logging.getLogger(__name__)

TEXT_TYPES = (ElementType.TEXT, ElementType.TEXTNODE)
CONTAINER_TYPES = (ElementType.DOCUMENT, ElementType.PAGE, ElementType.VIEW)


@dataclass
class CellBlock:
    """A row cell rendered to lines of exactly ``width`` characters."""

    width: int
    lines: list[str] = field(default_factory=list)
    bold: bool = False


def _scalar_text(value: Any) -> str | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str | int | float):
        return str(value)
    if isinstance(value, list | tuple):
        parts = [_scalar_text(item) for item in value]
        return "".join(part for part in parts if part is not None)
    return None


def collect_text(node: PrintNode) -> str:
    """Get the literal text content of a text or textnode.

    Content comes from ``props["children"]`` (or ``props["text"]`` for
    textnodes) when present, otherwise from the text of the node's text
    and textnode children.
    """
    keys = ("text", "children") if node.type == ElementType.TEXTNODE else ("children", "text")
    for key in keys:
        text = _scalar_text(node.props.get(key))
        if text is not None:
            return text
    return "".join(collect_text(child) for child in node.children if child.element_type in TEXT_TYPES)


def contains_image(node: PrintNode) -> bool:
    """Check whether an image node appears anywhere below ``node``.

    Rows holding images are laid out as a stack, since a raster cannot share
    a text line with other columns.
    """
    return any(child.element_type == ElementType.IMAGE or contains_image(child) for child in node.children)


def justify_default_align(justify: str | None, index: int, count: int) -> TextAlign | None:
    """Default alignment of the ``index``-th of ``count`` row cells."""
    if justify == "space-between":
        if index == 0:
            return TextAlign.LEFT
        if index == count - 1:
            return TextAlign.RIGHT
        return TextAlign.CENTER
    if justify == "flex-end":
        return TextAlign.RIGHT
    if justify in ("center", "space-around", "space-evenly"):
        return TextAlign.CENTER
    return None


def column_widths(children: list[PrintNode], total: int) -> list[int]:
    """Assign a width to each row child.

    Children with a ``width`` style get that many columns (absolute or
    percentage). The remaining columns are split evenly between the other
    children, the last of them taking the remainder.
    """
    widths: list[int | None] = []
    used = 0
    for child in children:
        width = parse_width(child.style["width"], total) if "width" in child.style else None
        if width is not None:
            width = min(width, total - used)
            used += width
        widths.append(width)

    auto = [i for i, width in enumerate(widths) if width is None]
    if auto:
        base, remainder = divmod(max(0, total - used), len(auto))
        for i in auto:
            widths[i] = base
        widths[auto[-1]] = base + remainder
    return [width or 0 for width in widths]


def compose_row(cells: list[CellBlock]) -> list[list[tuple[str, bool]]]:
    """Compose rendered cells side by side.

    Returns:
        One list of (text, bold) segments per output line. Adjacent
        segments with the same emphasis are merged and trailing spaces of
        the line are dropped.
    """
    height = max((len(cell.lines) for cell in cells), default=0)
    composed: list[list[tuple[str, bool]]] = []
    for i in range(height):
        segments: list[tuple[str, bool]] = []
        for cell in cells:
            text = cell.lines[i] if i < len(cell.lines) else " " * cell.width
            if segments and segments[-1][1] == cell.bold:
                segments[-1] = (segments[-1][0] + text, cell.bold)
            else:
                segments.append((text, cell.bold))
        while segments and not segments[-1][0].rstrip():
            segments.pop()
        if segments:
            segments[-1] = (segments[-1][0].rstrip(), segments[-1][1])
        composed.append(segments)
    return composed


class TreeTraverser:
    """Walks a print node tree and emits commands through a generator."""

    def __init__(
        self,
        generator: CommandGenerator,
        image_loader: ImageLoader | None = None,
        dots_per_column: int = 12,
        image_threshold: int = 128,
    ) -> None:
        self.generator = generator
        self.image_loader = image_loader or ImageLoader()
        self.dots_per_column = dots_per_column
        self.image_threshold = image_threshold
        self._stack: list[FormattingState] = [FormattingState()]

    @property
    def ambient(self) -> FormattingState:
        """Get the formatting state of the node being visited."""
        return self._stack[-1]

    def columns_for(self, state: FormattingState) -> int:
        """Get the characters per line at the state's character width."""
        return max(1, self.generator.paper_width // state.width)

    async def traverse(self, node: PrintNode) -> None:
        """Emit commands for a whole tree in document order."""
        await self._visit(node)

    async def _visit(self, node: PrintNode) -> None:
        element_type = node.element_type
        if element_type is None:
            logger.debug(f"Skipping unknown node type '{node.type}'")
            return

        state = self.ambient.with_style(extract_text_style(node.style))
        self._stack.append(state)
        try:
            if element_type == ElementType.TEXTNODE:
                self._emit_text(node, state)
                return

            before, after = calculate_spacing(node.style)
            self._emit_feed(before)
            self._emit_border(node.style.get("borderTop"), state)

            if element_type == ElementType.TEXT:
                self._emit_text(node, state)
            elif element_type == ElementType.IMAGE:
                await self._emit_image(node, state)
            else:
                view_style = extract_view_style(node.style)
                if view_style.flex_row and not contains_image(node):
                    self._emit_row(node, state, view_style)
                else:
                    for child in node.children:
                        await self._visit(child)

            self._emit_border(node.style.get("borderBottom"), state)
            self._emit_feed(after)
        finally:
            self._stack.pop()

    def _emit_feed(self, lines: int) -> None:
        if lines > 0:
            self.generator.break_line()
            self.generator.feed(lines)

    def _emit_border(self, border: Any, state: FormattingState) -> None:
        if not has_border(border):
            return
        self.generator.break_line()
        self.generator.apply(state)
        self.generator.emit_text(generate_divider_line(self.columns_for(state), is_dashed_border(border)))

    def _emit_text(self, node: PrintNode, state: FormattingState) -> None:
        text = collect_text(node)
        if not text:
            return
        self.generator.break_line()
        self.generator.apply(state)
        self.generator.emit_text("\n".join(wrap_text(text, self.columns_for(state))))

    async def _emit_image(self, node: PrintNode, state: FormattingState) -> None:
        source = get_image_source(node.props)
        image = await self.image_loader.load(source)

        max_width = self.generator.paper_width * self.dots_per_column
        target = parse_width(node.style.get("width"), max_width) if "width" in node.style else None
        raster = image_to_raster(image, max_width, self.image_threshold, target_width=target)

        self.generator.break_line()
        self.generator.set_align(state.align)
        self.generator.print_image(raster)

    def _emit_row(self, node: PrintNode, state: FormattingState, view_style: ViewStyle) -> None:
        cells = self.render_row(node, self.columns_for(state), state, view_style)
        lines = compose_row(cells)
        if not lines:
            return

        self.generator.break_line()
        self.generator.apply(replace(state, align=TextAlign.LEFT))
        for segments in lines:
            self.generator.break_line()
            if not segments:
                self.generator.emit_text("\n")
                continue
            for text, bold in segments:
                self.generator.set_bold(bold)
                self.generator.emit_text(text)

    def render_row(
        self,
        node: PrintNode,
        width: int,
        state: FormattingState,
        view_style: ViewStyle | None = None,
    ) -> list[CellBlock]:
        """Render each child of a row container to a cell block.

        This pass emits nothing; it only computes the text of every cell.

        Args:
            node: Row container.
            width: Row width in characters.
            state: Formatting state of the row container.
            view_style: Resolved container style.
        """
        view_style = view_style or extract_view_style(node.style)
        children = [child for child in node.children if self._is_text_renderable(child)]
        widths = column_widths(children, width)

        cells = []
        for index, (child, cell_width) in enumerate(zip(children, widths, strict=True)):
            inherited = state
            default_align = justify_default_align(view_style.justify, index, len(children))
            if default_align is not None and "textAlign" not in child.style:
                inherited = replace(state, align=default_align)
            cell_state = inherited.with_style(extract_text_style(child.style))
            cells.append(
                CellBlock(
                    width=cell_width,
                    lines=self.render_lines(child, cell_width, inherited),
                    bold=cell_state.bold,
                )
            )
        return cells

    def render_lines(self, node: PrintNode, width: int, inherited: FormattingState) -> list[str]:
        """Render a subtree to text lines of exactly ``width`` characters."""
        if width <= 0:
            return []

        state = inherited.with_style(extract_text_style(node.style))
        element_type = node.element_type

        if element_type in TEXT_TYPES:
            text = collect_text(node)
            if not text:
                return []
            return [align_text_in_column(line, width, state.align) for line in wrap_text(text, width)]

        if element_type not in CONTAINER_TYPES:
            return []

        lines: list[str] = []
        if has_border(node.style.get("borderTop")):
            lines.append(generate_divider_line(width, is_dashed_border(node.style["borderTop"])))

        view_style = extract_view_style(node.style)
        if view_style.flex_row:
            for segments in compose_row(self.render_row(node, width, state, view_style)):
                lines.append(align_text_in_column("".join(text for text, _ in segments), width))
        else:
            for child in node.children:
                lines.extend(self.render_lines(child, width, state))

        if has_border(node.style.get("borderBottom")):
            lines.append(generate_divider_line(width, is_dashed_border(node.style["borderBottom"])))
        return lines

    @staticmethod
    def _is_text_renderable(node: PrintNode) -> bool:
        return node.element_type in TEXT_TYPES or node.element_type in CONTAINER_TYPES
