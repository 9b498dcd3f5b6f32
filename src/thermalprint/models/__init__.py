"""Pydantic models for thermalprint."""

from thermalprint.models.node import ElementType, PrintNode, TextAlign, normalize_element_type
from thermalprint.models.options import AdapterType, ConversionOptions, CutMode

__all__ = [
    "AdapterType",
    "ConversionOptions",
    "CutMode",
    "ElementType",
    "PrintNode",
    "TextAlign",
    "normalize_element_type",
]
