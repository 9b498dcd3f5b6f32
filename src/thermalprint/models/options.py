"""Conversion option models."""

import codecs
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from thermalprint.adapters.base import CommandAdapter
from thermalprint.encodings import get_codec_name

DEFAULT_PAPER_WIDTH = 48  # 80mm paper, font A
DEFAULT_ENCODING = "cp860"
DEFAULT_FEED_BEFORE_CUT = 3


class CutMode(StrEnum):
    """Paper cut performed after the document."""

    FULL = "full"
    PARTIAL = "partial"


class AdapterType(StrEnum):
    """Built-in command adapters."""

    ESCPOS = "escpos"
    ESCBEMATECH = "escbematech"


class ConversionOptions(BaseModel):
    """Options for converting a print node tree to printer commands.

    Keys may be given in snake_case or camelCase (``paperWidth``).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
        frozen=True,
    )

    paper_width: int = Field(default=DEFAULT_PAPER_WIDTH, gt=0)  # Width in characters
    encoding: str = DEFAULT_ENCODING
    debug: bool = False
    cut: CutMode | None = CutMode.FULL  # None = no cut
    feed_before_cut: int = Field(default=DEFAULT_FEED_BEFORE_CUT, ge=0)
    command_adapter: str | CommandAdapter = AdapterType.ESCPOS.value

    # Image rasterization
    dots_per_column: int = Field(default=12, gt=0)  # 12 dots = font A column width
    image_threshold: int = Field(default=128, ge=0, le=255)

    @field_validator("cut", mode="before")
    @classmethod
    def _normalize_cut(cls, value: Any) -> Any:
        if value is True:
            return CutMode.FULL
        if value is False or value is None:
            return None
        if isinstance(value, str):
            value = value.strip().lower()
            if value in ("", "none", "false", "no", "off"):
                return None
            if value == "true":
                return CutMode.FULL
        return value

    @field_validator("encoding")
    @classmethod
    def _check_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(get_codec_name(value))
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {value}") from e
        return value

    @property
    def image_max_width(self) -> int:
        """Maximum image width in dots for the configured paper."""
        return self.paper_width * self.dots_per_column
