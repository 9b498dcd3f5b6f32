"""Code page encodings for printer text."""

from thermalprint.encodings.codepages import CODEPAGE_ALIASES, PRINTER_CODE_PAGES, get_codec_name
from thermalprint.encodings.transcoding import (
    LOOKALIKE_MAP,
    SUBSTITUTION_CHAR,
    encode_cp860,
    encode_to_codepage,
    normalize_unicode,
)

__all__ = [
    "CODEPAGE_ALIASES",
    "LOOKALIKE_MAP",
    "PRINTER_CODE_PAGES",
    "SUBSTITUTION_CHAR",
    "encode_cp860",
    "encode_to_codepage",
    "get_codec_name",
    "normalize_unicode",
]
