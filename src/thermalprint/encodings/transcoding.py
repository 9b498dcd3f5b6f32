"""Text to single-byte code page encoding.

Each character is first encoded directly in the target code page, so
characters native to the table are kept. Characters missing from the table
are replaced by an ASCII look-alike when one exists, and by the
substitution byte otherwise. Encoding never raises.
"""

import logging
import unicodedata

from thermalprint.encodings.codepages import get_codec_name

logger = logging.getLogger(__name__)

SUBSTITUTION_CHAR = "?"

# ASCII fallbacks for characters absent from the target code page
LOOKALIKE_MAP: dict[str, str] = {
    "\N{LEFT SINGLE QUOTATION MARK}": "'",
    "\N{RIGHT SINGLE QUOTATION MARK}": "'",
    "\N{SINGLE LOW-9 QUOTATION MARK}": ",",
    "\N{LEFT DOUBLE QUOTATION MARK}": '"',
    "\N{RIGHT DOUBLE QUOTATION MARK}": '"',
    "\N{DOUBLE LOW-9 QUOTATION MARK}": '"',
    "\N{LEFT-POINTING DOUBLE ANGLE QUOTATION MARK}": "<<",
    "\N{RIGHT-POINTING DOUBLE ANGLE QUOTATION MARK}": ">>",
    "\N{HYPHEN}": "-",
    "\N{NON-BREAKING HYPHEN}": "-",
    "\N{EN DASH}": "-",
    "\N{EM DASH}": "--",
    "\N{MINUS SIGN}": "-",
    "\N{NO-BREAK SPACE}": " ",
    "\N{THIN SPACE}": " ",
    "\N{NARROW NO-BREAK SPACE}": " ",
    "\N{ZERO WIDTH SPACE}": "",
    "\N{ZERO WIDTH NO-BREAK SPACE}": "",
    "\N{HORIZONTAL ELLIPSIS}": "...",
    "\N{MIDDLE DOT}": ".",
    "\N{BULLET}": "*",
    "\N{RIGHTWARDS ARROW}": "->",
    "\N{LEFTWARDS ARROW}": "<-",
    "\N{EURO SIGN}": "EUR",
    "\N{TRADE MARK SIGN}": "TM",
    "\N{COPYRIGHT SIGN}": "(C)",
    "\N{REGISTERED SIGN}": "(R)",
}


def normalize_unicode(text: str) -> str:
    """Compose decomposed sequences so accented letters map to one code point."""
    return unicodedata.normalize("NFC", text)


def encode_to_codepage(
    text: str,
    codepage: str,
    substitution: str = SUBSTITUTION_CHAR,
    apply_lookalikes: bool = True,
) -> bytes:
    """Encode text to a single-byte code page.

    Args:
        text: Unicode text to encode.
        codepage: Target code page name (e.g. "CP860").
        substitution: Character used for unmappable characters.
        apply_lookalikes: Whether to try ASCII look-alikes before substituting.

    Returns:
        Encoded bytes.
    """
    if not text:
        return b""

    codec = get_codec_name(codepage)
    try:
        "".encode(codec)
    except LookupError:
        logger.warning(f"Unknown code page '{codepage}', using ASCII")
        codec = "ascii"

    fallback = substitution.encode(codec, errors="replace")
    result = bytearray()

    for char in normalize_unicode(text):
        try:
            result.extend(char.encode(codec))
            continue
        except UnicodeEncodeError:
            pass

        if apply_lookalikes and char in LOOKALIKE_MAP:
            try:
                result.extend(LOOKALIKE_MAP[char].encode(codec))
                continue
            except UnicodeEncodeError:
                pass

        result.extend(fallback)

    return bytes(result)


def encode_cp860(text: str) -> bytes:
    """Encode text to CP860 (Portuguese), the default receipt code page."""
    return encode_to_codepage(text, "CP860")
