"""Console progress bar for command-line tools."""

__version__ = "0.1.0"

from .core.errors import (
    ConfigError,
    NotStartedError,
    ProgressError,
    ProgressErrorKind,
    ZeroTotalError,
)
from .core.session import ProgressBar
from .ui.renderer import BarRenderer
from .ui.terminal import (
    AnsiTerminal,
    NativeConsoleTerminal,
    TerminalController,
    create_terminal,
)
from .utils.config import BarConfig
from .utils.duration import format_duration

__all__ = [
    "__version__",
    "ProgressBar", "BarRenderer", "BarConfig",
    "TerminalController", "AnsiTerminal", "NativeConsoleTerminal", "create_terminal",
    "ProgressError", "ProgressErrorKind", "ZeroTotalError", "NotStartedError", "ConfigError",
    "format_duration",
]
