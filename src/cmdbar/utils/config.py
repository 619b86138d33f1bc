"""Configuration management."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from ..core.errors import ConfigError

DEFAULT_BAR_WIDTH = 50
DEFAULT_LABEL_WIDTH = 35
DEFAULT_ACCENT_COLOR = "bright_blue"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass
class BarConfig:
    """Display settings for a progress bar.

    There is no configuration file; values come from code or from the
    ``CMDBAR_*`` environment variables.
    """
    bar_width: int = DEFAULT_BAR_WIDTH
    label_width: int = DEFAULT_LABEL_WIDTH
    accent_color: str = DEFAULT_ACCENT_COLOR
    idle: bool = False

    def __post_init__(self):
        """Validate widths."""
        if self.bar_width <= 0:
            raise ConfigError(f"bar_width must be positive, got {self.bar_width}")
        if self.label_width <= 0:
            raise ConfigError(f"label_width must be positive, got {self.label_width}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BarConfig":
        """Build configuration from environment variables.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``)

        Returns:
            Configuration with any overrides applied

        Raises:
            ConfigError: If a variable holds an invalid value
        """
        if environ is None:
            environ = os.environ

        return cls(
            bar_width=_read_int(environ, "CMDBAR_BAR_WIDTH", DEFAULT_BAR_WIDTH),
            label_width=_read_int(environ, "CMDBAR_LABEL_WIDTH", DEFAULT_LABEL_WIDTH),
            idle=_read_bool(environ, "CMDBAR_IDLE", False),
        )


def _read_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}", variable=name)
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}", variable=name)
    return value


def _read_bool(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean flag, got {raw!r}", variable=name)
