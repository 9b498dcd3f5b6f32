"""Style resolution for thermal printer output.

Maps CSS-like style attributes to printer primitives (alignment, character
size, emphasis, feed lines, divider strings) and provides the plain-text
layout helpers used for column composition. All functions are pure and
never raise on malformed style values: a value that cannot be interpreted
resolves to None so the ambient state is kept.
"""

import math
from dataclasses import dataclass
from typing import Any

from thermalprint.models.node import TextAlign

# Font size thresholds (points) for character magnification
SIZE_THRESHOLDS: list[tuple[float, tuple[int, int]]] = [
    (25, (2, 2)),
    (19, (2, 1)),
    (13, (1, 2)),
]
BOLD_WEIGHT = 700
POINTS_PER_LINE = 20
SPACING_BEFORE_KEYS = ("margin", "marginTop", "marginVertical", "padding", "paddingTop", "paddingVertical")
SPACING_AFTER_KEYS = ("margin", "marginBottom", "marginVertical", "padding", "paddingBottom", "paddingVertical")

JUSTIFY_VALUES = {
    "flex-start",
    "flex-end",
    "center",
    "space-between",
    "space-around",
    "space-evenly",
}


@dataclass(frozen=True)
class TextStyle:
    """Printer text formatting resolved from a style; None means inherit."""

    align: TextAlign | None = None
    size: tuple[int, int] | None = None
    bold: bool | None = None


@dataclass(frozen=True)
class ViewStyle:
    """Container layout resolved from a style."""

    align: TextAlign | None = None
    flex_row: bool = False
    justify: str | None = None


def _to_number(value: Any) -> float | None:
    """Interpret a style value as a finite number ("12", "12px", 12.5)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip().lower()
        for suffix in ("px", "pt"):
            if text.endswith(suffix):
                text = text[: -len(suffix)].strip()
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def map_font_size(font_size: Any) -> tuple[int, int] | None:
    """Map a font size in points to (width, height) character multipliers.

    Returns None for missing, non-numeric or non-positive sizes.
    """
    size = _to_number(font_size)
    if size is None or size <= 0:
        return None
    for threshold, multipliers in SIZE_THRESHOLDS:
        if size >= threshold:
            return multipliers
    return (1, 1)


def map_text_align(text_align: Any) -> TextAlign | None:
    """Map a textAlign value to a printer alignment.

    "justify" prints left aligned; other unknown values return None.
    """
    if not isinstance(text_align, str):
        return None
    value = text_align.strip().lower()
    if value == "justify":
        return TextAlign.LEFT
    try:
        return TextAlign(value)
    except ValueError:
        return None


def is_bold(font_weight: Any) -> bool | None:
    """Check whether a fontWeight value selects bold.

    "bold"/"bolder" and numeric weights of 700 or more are bold; "normal",
    "lighter" and lower numeric weights are not. Anything else is None.
    """
    if isinstance(font_weight, str):
        value = font_weight.strip().lower()
        if value in ("bold", "bolder"):
            return True
        if value in ("normal", "lighter"):
            return False
    weight = _to_number(font_weight)
    if weight is None or weight < 1:
        return None
    return weight >= BOLD_WEIGHT


def extract_text_style(style: dict[str, Any] | None) -> TextStyle:
    """Resolve alignment, character size and emphasis from a style."""
    style = style or {}
    return TextStyle(
        align=map_text_align(style.get("textAlign")),
        size=map_font_size(style.get("fontSize")),
        bold=is_bold(style.get("fontWeight")),
    )


def extract_view_style(style: dict[str, Any] | None) -> ViewStyle:
    """Resolve container alignment, row direction and justification."""
    style = style or {}
    direction = style.get("flexDirection")
    justify = style.get("justifyContent")
    if isinstance(justify, str):
        justify = justify.strip().lower()
    return ViewStyle(
        align=map_text_align(style.get("textAlign")),
        flex_row=isinstance(direction, str) and direction.strip().lower() == "row",
        justify=justify if justify in JUSTIFY_VALUES else None,
    )


def _spacing_lines(style: dict[str, Any], *keys: str) -> int:
    total = 0.0
    for key in keys:
        value = _to_number(style.get(key))
        if value is not None and value > 0:
            total += value
    return int(total // POINTS_PER_LINE)


def calculate_spacing(style: dict[str, Any] | None) -> tuple[int, int]:
    """Convert vertical margins and paddings to feed lines.

    Returns:
        Tuple of (lines_before, lines_after).
    """
    style = style or {}
    before = _spacing_lines(style, *SPACING_BEFORE_KEYS)
    after = _spacing_lines(style, *SPACING_AFTER_KEYS)
    return before, after


def has_border(value: Any) -> bool:
    """Check whether a border value draws a line."""
    if value is None or value is False:
        return False
    if isinstance(value, str):
        text = value.strip().lower()
        return bool(text) and text not in ("none", "0", "hidden")
    number = _to_number(value)
    return number is not None and number > 0


def is_dashed_border(value: Any) -> bool:
    """Check whether a border description is dashed."""
    return isinstance(value, str) and "dashed" in value


def generate_divider_line(width: int, dashed: bool = False) -> str:
    """Build a divider line of ``width`` characters ('-' dashed, '=' solid)."""
    return ("-" if dashed else "=") * max(0, int(width))


def merge_styles(*styles: Any) -> dict[str, Any]:
    """Merge style mappings, later styles overriding earlier ones.

    Keys absent from a later style keep their earlier value; a key explicitly
    set to None is removed. None arguments are skipped and nested lists
    (style arrays) are flattened in order.
    """
    result: dict[str, Any] = {}
    for style in styles:
        if not style:
            continue
        if isinstance(style, list | tuple):
            style = merge_styles(*style)
        for key, value in style.items():
            if value is None:
                result.pop(key, None)
            else:
                result[key] = value
    return result


def parse_width(value: Any, paper_width: int) -> int | None:
    """Parse a width as character columns.

    Accepts an absolute column count or a percentage string of
    ``paper_width``. The result is rounded to the nearest integer and
    clamped to [0, paper_width]. Malformed values return None.
    """
    if isinstance(value, str) and value.strip().endswith("%"):
        percent = _to_number(value.strip()[:-1])
        if percent is None:
            return None
        columns = paper_width * percent / 100
    else:
        columns = _to_number(value)
        if columns is None:
            return None
    return max(0, min(paper_width, _round_half_up(columns)))


def align_text_in_column(text: str, width: int, align: str = TextAlign.LEFT) -> str:
    """Pad text with spaces to fill a column of ``width`` characters.

    Center alignment puts the extra space on the right when the padding is
    odd. Text longer than the column is truncated.
    """
    width = max(0, width)
    if len(text) >= width:
        return text[:width]
    padding = width - len(text)
    if align == TextAlign.RIGHT:
        return " " * padding + text
    if align == TextAlign.CENTER:
        left = padding // 2
        return " " * left + text + " " * (padding - left)
    return text + " " * padding


def wrap_text(text: str, width: int) -> list[str]:
    """Greedy word wrap.

    Lines that fit in ``width`` are kept verbatim, spacing included. Longer
    lines are re-flowed word by word, and words longer than ``width`` are
    broken at the width boundary. Explicit newlines start a new line. Empty
    input yields a single empty line.
    """
    if width < 1:
        return [text]

    lines: list[str] = []
    for paragraph in text.split("\n"):
        if len(paragraph) <= width:
            lines.append(paragraph)
            continue
        start = len(lines)
        current = ""
        for word in paragraph.split():
            while len(word) > width:
                if current:
                    lines.append(current)
                    current = ""
                lines.append(word[:width])
                word = word[width:]
            if not word:
                continue
            if not current:
                current = word
            elif len(current) + 1 + len(word) <= width:
                current = f"{current} {word}"
            else:
                lines.append(current)
                current = word
        if current or len(lines) == start:
            lines.append(current)
    return lines
