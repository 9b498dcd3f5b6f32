"""thermalprint: convert print node trees to thermal printer commands.

Main API: ``await print_nodes_to_escpos(print_node, options) -> bytes``
"""

from thermalprint.adapters import (
    CharacterSize,
    CommandAdapter,
    ESCBematechCommandAdapter,
    ESCPOSCommandAdapter,
    Raster,
    create_command_adapter,
)
from thermalprint.converter import print_nodes_to_escpos
from thermalprint.encodings import encode_cp860
from thermalprint.errors import ConversionError, ImageDecodeError
from thermalprint.generator import CommandGenerator, ConversionContext, FormattingState
from thermalprint.models import ConversionOptions, CutMode, ElementType, PrintNode
from thermalprint.nodes import StyleSheet, document, image, page, text, view
from thermalprint.styles import (
    align_text_in_column,
    calculate_spacing,
    extract_text_style,
    extract_view_style,
    generate_divider_line,
    is_bold,
    is_dashed_border,
    map_font_size,
    map_text_align,
    merge_styles,
    parse_width,
    wrap_text,
)
from thermalprint.traverser import TreeTraverser

__version__ = "0.1.0"

__all__ = [
    "CharacterSize",
    "CommandAdapter",
    "CommandGenerator",
    "ConversionContext",
    "ConversionError",
    "ConversionOptions",
    "CutMode",
    "ESCBematechCommandAdapter",
    "ESCPOSCommandAdapter",
    "ElementType",
    "FormattingState",
    "ImageDecodeError",
    "PrintNode",
    "Raster",
    "StyleSheet",
    "TreeTraverser",
    "align_text_in_column",
    "calculate_spacing",
    "create_command_adapter",
    "document",
    "encode_cp860",
    "extract_text_style",
    "extract_view_style",
    "generate_divider_line",
    "image",
    "is_bold",
    "is_dashed_border",
    "map_font_size",
    "map_text_align",
    "merge_styles",
    "page",
    "parse_width",
    "print_nodes_to_escpos",
    "text",
    "view",
    "wrap_text",
]
