"""Exceptions raised by the progress bar."""

from enum import Enum
from typing import Optional


class ProgressErrorKind(Enum):
    """Kinds of lifecycle misuse reported to callers."""
    ZERO_TOTAL = "zero_total"
    NOT_STARTED = "not_started"


class ProgressError(Exception):
    """Base exception for progress lifecycle errors."""

    def __init__(self, message: str, kind: ProgressErrorKind):
        super().__init__(message)
        self.kind = kind


class ZeroTotalError(ProgressError):
    """Raised when a session is started with a total of zero."""

    def __init__(self, message: str = "Progress total is zero."):
        super().__init__(message, ProgressErrorKind.ZERO_TOTAL)


class NotStartedError(ProgressError):
    """Raised when a session is advanced before it was started."""

    def __init__(self, message: str = "Progress total is zero. Call start() first."):
        super().__init__(message, ProgressErrorKind.NOT_STARTED)


class ConfigError(ValueError):
    """Raised when a configuration value is invalid."""

    def __init__(self, message: str, variable: Optional[str] = None):
        super().__init__(message)
        self.variable = variable
