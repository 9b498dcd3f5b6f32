"""Bematech ESC/Bematech command adapter."""

from thermalprint.adapters.base import CommandAdapter, Raster, clamp_size

ESC = b"\x1b"
LF = b"\n"

ALIGN_CODES = {"left": 0, "center": 1, "right": 2}


class ESCBematechCommandAdapter(CommandAdapter):
    """ESC/Bematech dialect (Bematech MP-4200 TH and MP-100S TH in native mode).

    The dialect only knows single and double width/height, so any
    multiplier above 1 selects the doubled mode. Raster images are not
    supported and produce no bytes.
    """

    def get_name(self) -> str:
        return "ESC/Bematech"

    def initialize(self) -> bytes:
        # ESC @
        return ESC + b"@"

    def set_align(self, align: str) -> bytes:
        # ESC a n
        return ESC + b"a" + bytes([ALIGN_CODES.get(str(align), 0)])

    def set_character_size(self, width: int, height: int) -> bytes:
        # ESC W n (double width) + ESC d n (double height)
        double_width = clamp_size(width) > 1
        double_height = clamp_size(height) > 1
        return ESC + b"W" + bytes([int(double_width)]) + ESC + b"d" + bytes([int(double_height)])

    def set_bold(self, enabled: bool) -> bytes:
        # ESC E (on) / ESC F (off)
        return ESC + (b"E" if enabled else b"F")

    def feed(self, lines: int) -> bytes:
        return LF * max(0, int(lines))

    def cut_full(self, feed_lines: int) -> bytes:
        # ESC w
        return self.feed(feed_lines) + ESC + b"w"

    def cut_partial(self, feed_lines: int) -> bytes:
        # ESC m
        return self.feed(feed_lines) + ESC + b"m"

    def print_image(self, raster: Raster) -> bytes:
        return b""
