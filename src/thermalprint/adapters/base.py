"""Abstract base class for printer command adapters."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from thermalprint.encodings import SUBSTITUTION_CHAR, encode_to_codepage

MIN_CHAR_SIZE = 1
MAX_CHAR_SIZE = 8


@dataclass(frozen=True)
class CharacterSize:
    """Character magnification (width x height multipliers)."""

    width: int = 1
    height: int = 1


@dataclass(frozen=True)
class Raster:
    """Monochrome bitmap packed MSB-first, one bit per dot.

    Each row occupies ``bytes_per_row`` bytes; a set bit prints a black dot.
    """

    width: int
    height: int
    data: bytes

    @property
    def bytes_per_row(self) -> int:
        return (self.width + 7) // 8

    def validate(self) -> None:
        """Check that the packed data matches the dimensions.

        Raises:
            ValueError: If the data length does not match.
        """
        expected = self.bytes_per_row * self.height
        if len(self.data) != expected:
            raise ValueError(f"Raster data is {len(self.data)} bytes, expected {expected}")


def clamp_size(value: int) -> int:
    """Clamp a character size multiplier to the supported 1-8 range."""
    return max(MIN_CHAR_SIZE, min(MAX_CHAR_SIZE, int(value)))


class CommandAdapter(ABC):
    """Protocol-specific encoder for logical printer operations.

    Adapters are stateless: every method maps its arguments to a byte
    sequence. A capability the protocol lacks returns ``b""`` so that
    conversion still completes on printers without the feature.
    """

    substitution_char = SUBSTITUTION_CHAR

    @abstractmethod
    def get_name(self) -> str:
        """Get the protocol identifier, for diagnostics."""
        pass

    @abstractmethod
    def initialize(self) -> bytes:
        """Get the reset/initialize sequence emitted once per conversion."""
        pass

    @abstractmethod
    def set_align(self, align: str) -> bytes:
        """Get the command selecting "left", "center" or "right" justification."""
        pass

    @abstractmethod
    def set_character_size(self, width: int, height: int) -> bytes:
        """Get the command selecting character magnification.

        Args:
            width: Width multiplier, 1-8.
            height: Height multiplier, 1-8.
        """
        pass

    @abstractmethod
    def set_bold(self, enabled: bool) -> bytes:
        """Get the command turning emphasized (bold) mode on or off."""
        pass

    def encode_text(self, text: str, code_page: str) -> bytes:
        """Encode text with a single-byte code page.

        Characters outside the table become the substitution byte.
        """
        return encode_to_codepage(text, code_page, substitution=self.substitution_char)

    @abstractmethod
    def feed(self, lines: int) -> bytes:
        """Get the command feeding ``lines`` lines."""
        pass

    @abstractmethod
    def cut_full(self, feed_lines: int) -> bytes:
        """Get the command feeding ``feed_lines`` lines then cutting fully."""
        pass

    @abstractmethod
    def cut_partial(self, feed_lines: int) -> bytes:
        """Get the command feeding ``feed_lines`` lines then cutting partially."""
        pass

    @abstractmethod
    def print_image(self, raster: Raster) -> bytes:
        """Get the command printing a monochrome raster image."""
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.get_name()}>"
