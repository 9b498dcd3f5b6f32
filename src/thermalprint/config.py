"""Configuration management for thermalprint."""

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic.alias_generators import to_snake
from pydantic_settings import BaseSettings, SettingsConfigDict

from thermalprint.models.node import PrintNode
from thermalprint.models.options import (
    DEFAULT_ENCODING,
    DEFAULT_FEED_BEFORE_CUT,
    DEFAULT_PAPER_WIDTH,
    AdapterType,
    ConversionOptions,
)

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Environment-based defaults for conversions."""

    model_config = SettingsConfigDict(
        env_prefix="THERMALPRINT_",
        env_file=".env",
        extra="ignore",
    )

    paper_width: int = DEFAULT_PAPER_WIDTH
    encoding: str = DEFAULT_ENCODING
    command_adapter: str = AdapterType.ESCPOS.value
    cut: str = "full"  # full, partial or none
    feed_before_cut: int = DEFAULT_FEED_BEFORE_CUT
    debug: bool = False

    def to_options(self, **overrides: Any) -> ConversionOptions:
        """Build conversion options from these settings."""
        data: dict[str, Any] = {
            "paper_width": self.paper_width,
            "encoding": self.encoding,
            "command_adapter": self.command_adapter,
            "cut": self.cut,
            "feed_before_cut": self.feed_before_cut,
            "debug": self.debug,
        }
        data.update({to_snake(key): value for key, value in overrides.items()})
        return ConversionOptions.model_validate(data)


def _read_data_file(path: Path) -> Any:
    """Read a JSON or YAML file."""
    with open(path) as f:
        if path.suffix.lower() == ".json":
            return json.load(f)
        return yaml.safe_load(f)


def load_options(path: Path, settings: Settings | None = None, **overrides: Any) -> ConversionOptions:
    """Load conversion options from a YAML file.

    Keys missing from the file fall back to ``settings`` (environment
    defaults); ``overrides`` take precedence over the file. A missing or
    empty file yields the defaults.
    """
    settings = settings or Settings()
    if not path.exists():
        logger.info(f"Options file {path} not found, using defaults")
        return settings.to_options(**overrides)

    data = _read_data_file(path) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Options file {path} must contain a mapping")

    data = {to_snake(key): value for key, value in data.items()}
    data.update(overrides)
    return settings.to_options(**data)


def load_tree(path: Path) -> PrintNode:
    """Load a print node tree from a JSON or YAML file."""
    data = _read_data_file(path)
    if not isinstance(data, dict):
        raise ValueError(f"Tree file {path} must contain a mapping")
    return PrintNode.model_validate(data)
