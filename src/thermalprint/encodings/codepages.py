"""Receipt printer character tables and their Python codecs.

Printer manuals name the ESC t character tables "PC437", "PC860",
"WPC1252" and so on. Those names, the usual "CP860" spelling and a few
language aliases all resolve to the matching single-byte Python codec.
"""

# Character tables found on ESC/POS and Bematech receipt printers
PRINTER_CODE_PAGES: dict[str, str] = {
    "PC437": "cp437",  # USA, standard Europe
    "PC850": "cp850",  # Multilingual
    "PC852": "cp852",  # Latin 2
    "PC858": "cp858",  # Multilingual with euro sign
    "PC860": "cp860",  # Portuguese
    "PC863": "cp863",  # Canadian French
    "PC865": "cp865",  # Nordic
    "PC866": "cp866",  # Cyrillic #2
    "WPC1252": "cp1252",  # Windows Latin 1
}

CODEPAGE_ALIASES: dict[str, str] = {
    "ASCII": "ascii",
    "LATIN1": "latin-1",
    "USA": "cp437",
    "MULTILINGUAL": "cp850",
    "PORTUGUESE": "cp860",
    "CANADIANFRENCH": "cp863",
    "NORDIC": "cp865",
    "CYRILLIC": "cp866",
}

TABLE_PREFIXES = ("WPC", "PC", "CP")


def get_codec_name(codepage: str) -> str:
    """Get the Python codec name for a printer code page.

    Separators and case are ignored, so "CP-850", "cp_850" and "PC850" all
    resolve to "cp850". Unrecognized names are returned lowercased for the
    codec registry to judge.

    Args:
        codepage: Code page name (e.g. "CP860", "PC858", "ISO-8859-15").

    Returns:
        Python codec name.
    """
    key = codepage.strip().upper().replace("-", "").replace("_", "").replace(" ", "")

    if key in PRINTER_CODE_PAGES:
        return PRINTER_CODE_PAGES[key]
    if key in CODEPAGE_ALIASES:
        return CODEPAGE_ALIASES[key]

    for prefix in TABLE_PREFIXES:
        number = key.removeprefix(prefix)
        if number != key and number.isdigit():
            return f"cp{number}"

    if key.startswith("ISO8859") and key[7:].isdigit():
        return f"iso-8859-{key[7:]}"

    return codepage.strip().lower()
