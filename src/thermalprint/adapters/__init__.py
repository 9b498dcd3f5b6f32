"""Printer command adapters for thermalprint."""

import logging

from thermalprint.adapters.base import CharacterSize, CommandAdapter, Raster
from thermalprint.adapters.escbematech import ESCBematechCommandAdapter
from thermalprint.adapters.escpos import ESCPOSCommandAdapter

logger = logging.getLogger(__name__)

__all__ = [
    "CharacterSize",
    "CommandAdapter",
    "ESCBematechCommandAdapter",
    "ESCPOSCommandAdapter",
    "Raster",
    "create_command_adapter",
]

ADAPTER_CLASSES: dict[str, type[CommandAdapter]] = {
    "escpos": ESCPOSCommandAdapter,
    "escbematech": ESCBematechCommandAdapter,
}


def create_command_adapter(config: CommandAdapter | str | None = None) -> CommandAdapter:
    """Factory function to create a command adapter.

    Args:
        config: An adapter instance (returned as-is), a built-in adapter
            name ("escpos", "escbematech"), or None for the default.

    Returns:
        A command adapter. Unknown names fall back to ESC/POS.
    """
    if config is None:
        return ESCPOSCommandAdapter()

    if isinstance(config, CommandAdapter):
        return config

    adapter_class = ADAPTER_CLASSES.get(str(config).strip().lower())
    if not adapter_class:
        logger.warning(f"Unknown command adapter '{config}', using ESC/POS")
        return ESCPOSCommandAdapter()
    return adapter_class()
