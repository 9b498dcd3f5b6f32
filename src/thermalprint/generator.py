"""Stateful printer command buffer builder."""

import logging
from dataclasses import dataclass, field, replace

from thermalprint.adapters.base import CommandAdapter, Raster, clamp_size
from thermalprint.models.node import TextAlign
from thermalprint.styles import TextStyle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormattingState:
    """Text formatting: alignment, character size and emphasis.

    The default value matches printer power-on defaults.
    """

    align: TextAlign = TextAlign.LEFT
    width: int = 1
    height: int = 1
    bold: bool = False

    def with_style(self, style: TextStyle) -> "FormattingState":
        """Return this state overridden by the fields a style sets."""
        state = self
        if style.align is not None:
            state = replace(state, align=style.align)
        if style.size is not None:
            state = replace(state, width=style.size[0], height=style.size[1])
        if style.bold is not None:
            state = replace(state, bold=style.bold)
        return state


@dataclass
class ConversionContext:
    """Mutable state of a single conversion.

    ``current_*`` fields hold the last formatting emitted to the buffer.
    """

    paper_width: int
    encoding: str
    debug: bool = False
    current_align: TextAlign = TextAlign.LEFT
    current_size: tuple[int, int] = (1, 1)
    current_bold: bool = False
    line_open: bool = False  # Text emitted since the last line feed
    buffer: list[bytes] = field(default_factory=list)


class CommandGenerator:
    """Builds the command buffer for one conversion.

    Formatting setters only emit bytes when the requested value differs
    from the last emitted one. Byte encoding is delegated to the command
    adapter. Not thread-safe; create one generator per conversion.
    """

    def __init__(
        self,
        paper_width: int,
        encoding: str,
        adapter: CommandAdapter,
        debug: bool = False,
    ) -> None:
        """Initialize the generator and emit the adapter's init sequence.

        Args:
            paper_width: Paper width in character columns.
            encoding: Code page used to encode text.
            adapter: Command adapter for the target protocol.
            debug: Log every emitted command.
        """
        self.adapter = adapter
        self.context = ConversionContext(paper_width=paper_width, encoding=encoding, debug=debug)
        self._append(adapter.initialize(), "initialize")

    @property
    def paper_width(self) -> int:
        return self.context.paper_width

    @property
    def state(self) -> FormattingState:
        """Get the last emitted formatting state."""
        width, height = self.context.current_size
        return FormattingState(
            align=self.context.current_align,
            width=width,
            height=height,
            bold=self.context.current_bold,
        )

    def _append(self, data: bytes, label: str) -> None:
        if not data:
            return
        if self.context.debug:
            logger.debug(f"{label}: {data.hex(' ')}")
        self.context.buffer.append(data)

    def emit_text(self, text: str) -> None:
        """Encode and append text without changing the formatting state."""
        if not text:
            return
        self._append(self.adapter.encode_text(text, self.context.encoding), "text")
        self.context.line_open = not text.endswith("\n")

    def break_line(self) -> None:
        """End the current line if text has been emitted on it."""
        if self.context.line_open:
            self.emit_text("\n")

    def set_align(self, align: TextAlign) -> None:
        if align == self.context.current_align:
            return
        self._append(self.adapter.set_align(align), f"align {align}")
        self.context.current_align = TextAlign(align)

    def set_size(self, width: int, height: int) -> None:
        size = (clamp_size(width), clamp_size(height))
        if size == self.context.current_size:
            return
        self._append(self.adapter.set_character_size(*size), f"size {size[0]}x{size[1]}")
        self.context.current_size = size

    def set_bold(self, bold: bool) -> None:
        if bold == self.context.current_bold:
            return
        self._append(self.adapter.set_bold(bold), f"bold {bold}")
        self.context.current_bold = bold

    def apply(self, state: FormattingState) -> None:
        """Apply a formatting state, emitting only the fields that change."""
        self.set_align(state.align)
        self.set_size(state.width, state.height)
        self.set_bold(state.bold)

    def feed(self, lines: int) -> None:
        if lines <= 0:
            return
        self._append(self.adapter.feed(lines), f"feed {lines}")
        self.context.line_open = False

    def cut_full_with_feed(self, lines: int) -> None:
        self._append(self.adapter.cut_full(lines), f"cut full, feed {lines}")
        self.context.line_open = False

    def cut_partial_with_feed(self, lines: int) -> None:
        self._append(self.adapter.cut_partial(lines), f"cut partial, feed {lines}")
        self.context.line_open = False

    def print_image(self, raster: Raster) -> None:
        self._append(self.adapter.print_image(raster), f"image {raster.width}x{raster.height}")

    def get_buffer(self) -> bytes:
        """Get all emitted commands. The buffer is not cleared."""
        return b"".join(self.context.buffer)
