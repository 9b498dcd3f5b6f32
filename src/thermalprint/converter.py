"""Print node tree to printer command conversion."""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic.alias_generators import to_snake

from thermalprint.adapters import create_command_adapter
from thermalprint.generator import CommandGenerator
from thermalprint.imaging import ImageLoader
from thermalprint.models.node import PrintNode
from thermalprint.models.options import ConversionOptions, CutMode
from thermalprint.traverser import TreeTraverser

logger = logging.getLogger(__name__)


async def print_nodes_to_escpos(
    print_node: PrintNode | Mapping[str, Any],
    options: ConversionOptions | Mapping[str, Any] | None = None,
    image_loader: ImageLoader | None = None,
    **overrides: Any,
) -> bytes:
    """Convert a print node tree to a printer command buffer.

    The buffer holds, in order: the adapter's initialize sequence, the
    commands for the tree in document order, and the optional
    cut-with-feed command.

    Args:
        print_node: Root of the tree, as a PrintNode or a plain mapping.
        options: Conversion options (model or mapping; camelCase keys accepted).
        image_loader: Loader used for image nodes (default: ImageLoader()).
        **overrides: Individual options overriding ``options``.

    Returns:
        Commands ready to be sent to the printer.

    Raises:
        ImageDecodeError: If an image node cannot be loaded. No partial
            buffer is returned.
        pydantic.ValidationError: If the tree or the options are invalid.

    Example:
        >>> tree = {
        ...     "type": "document",
        ...     "children": [
        ...         {"type": "text", "props": {"children": "Hello"}, "style": {"textAlign": "center"}},
        ...     ],
        ... }
        >>> data = await print_nodes_to_escpos(tree, paper_width=48, cut="full")
    """
    options = resolve_options(options, **overrides)
    if not isinstance(print_node, PrintNode):
        print_node = PrintNode.model_validate(print_node)

    adapter = create_command_adapter(options.command_adapter)

    if options.debug:
        logger.debug(f"Using command adapter: {adapter.get_name()}")
        logger.debug(f"Print node tree:\n{print_node.model_dump_json(indent=2)}")

    generator = CommandGenerator(options.paper_width, options.encoding, adapter, debug=options.debug)
    traverser = TreeTraverser(
        generator,
        image_loader=image_loader,
        dots_per_column=options.dots_per_column,
        image_threshold=options.image_threshold,
    )
    await traverser.traverse(print_node)

    if options.cut == CutMode.FULL:
        generator.cut_full_with_feed(options.feed_before_cut)
    elif options.cut == CutMode.PARTIAL:
        generator.cut_partial_with_feed(options.feed_before_cut)

    return generator.get_buffer()


def resolve_options(
    options: ConversionOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> ConversionOptions:
    """Build conversion options from a model or mapping plus overrides."""
    if options is None:
        data: dict[str, Any] = {}
    elif isinstance(options, ConversionOptions):
        if not overrides:
            return options
        data = options.model_dump()
    else:
        data = {to_snake(key): value for key, value in options.items()}
    data.update({to_snake(key): value for key, value in overrides.items()})
    return ConversionOptions.model_validate(data)
