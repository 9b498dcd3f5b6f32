"""Epson ESC/POS command adapter."""

from thermalprint.adapters.base import CommandAdapter, Raster, clamp_size

ESC = b"\x1b"
GS = b"\x1d"
LF = b"\n"

ALIGN_CODES = {"left": 0, "center": 1, "right": 2}

# GS v 0 bands; taller images are sent as several raster commands
MAX_RASTER_ROWS = 960


class ESCPOSCommandAdapter(CommandAdapter):
    """Standard ESC/POS dialect (Epson TM series and compatibles)."""

    def get_name(self) -> str:
        return "ESC/POS"

    def initialize(self) -> bytes:
        # ESC @
        return ESC + b"@"

    def set_align(self, align: str) -> bytes:
        # ESC a n
        return ESC + b"a" + bytes([ALIGN_CODES.get(str(align), 0)])

    def set_character_size(self, width: int, height: int) -> bytes:
        # GS ! n - high nibble = width - 1, low nibble = height - 1
        n = ((clamp_size(width) - 1) << 4) | (clamp_size(height) - 1)
        return GS + b"!" + bytes([n])

    def set_bold(self, enabled: bool) -> bytes:
        # ESC E n
        return ESC + b"E" + (b"\x01" if enabled else b"\x00")

    def feed(self, lines: int) -> bytes:
        """Feed paper using ESC d n, split for counts above 255."""
        output = bytearray()
        remaining = max(0, int(lines))
        while remaining > 0:
            chunk = min(remaining, 255)
            output.extend(ESC + b"d" + bytes([chunk]))
            remaining -= chunk
        return bytes(output)

    def cut_full(self, feed_lines: int) -> bytes:
        # GS V 0
        return self.feed(feed_lines) + GS + b"V\x00"

    def cut_partial(self, feed_lines: int) -> bytes:
        # GS V 1
        return self.feed(feed_lines) + GS + b"V\x01"

    def print_image(self, raster: Raster) -> bytes:
        """Print a raster with GS v 0 (normal density).

        Format: GS v 0 m xL xH yL yH d1...dk, where x is the width in bytes
        and y the height in dots.
        """
        raster.validate()
        if raster.width == 0 or raster.height == 0:
            return b""

        bytes_per_row = raster.bytes_per_row
        output = bytearray()
        for top in range(0, raster.height, MAX_RASTER_ROWS):
            rows = min(MAX_RASTER_ROWS, raster.height - top)
            output.extend(GS + b"v0\x00")
            output.extend(bytes_per_row.to_bytes(2, "little"))
            output.extend(rows.to_bytes(2, "little"))
            output.extend(raster.data[top * bytes_per_row : (top + rows) * bytes_per_row])
        return bytes(output)
