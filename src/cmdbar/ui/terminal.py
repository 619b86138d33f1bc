"""Terminal cursor and color control.

Two variants share one interface: ``AnsiTerminal`` writes escape sequences
and ``NativeConsoleTerminal`` drives the legacy Windows console API through
``ctypes``. ``create_terminal`` picks one for the current platform.

Every operation is a no-op when the output stream is not an interactive
terminal, so rendering degrades to plain text rather than failing.
"""

import ctypes
import logging
import sys
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Iterator, Optional, TextIO

import click
from rich.console import Console
from rich.control import Control

from ..utils.config import DEFAULT_ACCENT_COLOR

# Configure logging
logger = logging.getLogger(__name__)

STD_OUTPUT_HANDLE = -11
INVALID_HANDLE_VALUE = ctypes.c_void_p(-1).value

FOREGROUND_BLUE = 0x0001
FOREGROUND_GREEN = 0x0002
FOREGROUND_RED = 0x0004
FOREGROUND_INTENSITY = 0x0008
FOREGROUND_MASK = FOREGROUND_RED | FOREGROUND_GREEN | FOREGROUND_BLUE | FOREGROUND_INTENSITY

_CONSOLE_COLORS = {
    "black": 0,
    "blue": FOREGROUND_BLUE,
    "green": FOREGROUND_GREEN,
    "cyan": FOREGROUND_GREEN | FOREGROUND_BLUE,
    "red": FOREGROUND_RED,
    "magenta": FOREGROUND_RED | FOREGROUND_BLUE,
    "yellow": FOREGROUND_RED | FOREGROUND_GREEN,
    "white": FOREGROUND_RED | FOREGROUND_GREEN | FOREGROUND_BLUE,
}


class COORD(ctypes.Structure):
    _fields_ = [("X", ctypes.c_short), ("Y", ctypes.c_short)]


class SMALL_RECT(ctypes.Structure):
    _fields_ = [
        ("Left", ctypes.c_short),
        ("Top", ctypes.c_short),
        ("Right", ctypes.c_short),
        ("Bottom", ctypes.c_short),
    ]


class CONSOLE_SCREEN_BUFFER_INFO(ctypes.Structure):
    _fields_ = [
        ("dwSize", COORD),
        ("dwCursorPosition", COORD),
        ("wAttributes", ctypes.c_ushort),
        ("srWindow", SMALL_RECT),
        ("dwMaximumWindowSize", COORD),
    ]


class CONSOLE_CURSOR_INFO(ctypes.Structure):
    _fields_ = [("dwSize", ctypes.c_uint32), ("bVisible", ctypes.c_int)]


def declare_console_api(kernel32: Any) -> Any:
    """Declare argument and result types for the console functions used here.

    Without them ctypes passes handles as 32-bit ints, which truncates
    handles on 64-bit Windows.
    """
    from ctypes import wintypes

    kernel32.GetStdHandle.argtypes = [wintypes.DWORD]
    kernel32.GetStdHandle.restype = wintypes.HANDLE
    kernel32.GetConsoleScreenBufferInfo.argtypes = [
        wintypes.HANDLE, ctypes.POINTER(CONSOLE_SCREEN_BUFFER_INFO)
    ]
    kernel32.GetConsoleScreenBufferInfo.restype = wintypes.BOOL
    kernel32.SetConsoleTextAttribute.argtypes = [wintypes.HANDLE, wintypes.WORD]
    kernel32.SetConsoleTextAttribute.restype = wintypes.BOOL
    kernel32.GetConsoleCursorInfo.argtypes = [
        wintypes.HANDLE, ctypes.POINTER(CONSOLE_CURSOR_INFO)
    ]
    kernel32.GetConsoleCursorInfo.restype = wintypes.BOOL
    kernel32.SetConsoleCursorInfo.argtypes = [
        wintypes.HANDLE, ctypes.POINTER(CONSOLE_CURSOR_INFO)
    ]
    kernel32.SetConsoleCursorInfo.restype = wintypes.BOOL
    return kernel32


def console_color_attribute(color: str) -> int:
    """Map a color name such as ``bright_blue`` to console foreground bits.

    Args:
        color: Color name as accepted by ``click.style``

    Returns:
        Foreground attribute bits
    """
    name = color.lower()
    bright = name.startswith("bright_")
    if bright:
        name = name[len("bright_"):]
    if name not in _CONSOLE_COLORS:
        raise ValueError(f"Unsupported console color: {color}")
    bits = _CONSOLE_COLORS[name]
    if bright:
        bits |= FOREGROUND_INTENSITY
    return bits


class TerminalController(ABC):
    """Cursor visibility and accent color control for one output stream."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        accent_color: str = DEFAULT_ACCENT_COLOR,
        interactive: Optional[bool] = None
    ):
        """Initialize terminal controller.

        Args:
            stream: Output stream (defaults to ``sys.stdout``)
            accent_color: Color used for the bar interior
            interactive: Force terminal detection on or off
        """
        self.stream = stream if stream is not None else sys.stdout
        self.accent_color = accent_color
        self._console = Console(file=self.stream, force_terminal=interactive)

    @property
    def interactive(self) -> bool:
        """Whether the stream is an interactive terminal."""
        return self._console.is_terminal

    def write(self, text: str) -> None:
        self.stream.write(text)

    def flush(self) -> None:
        self.stream.flush()

    @abstractmethod
    def hide_cursor(self) -> None:
        """Hide the terminal cursor."""

    @abstractmethod
    def show_cursor(self) -> None:
        """Show the terminal cursor."""

    @abstractmethod
    def begin_accent_color(self) -> bool:
        """Switch the foreground to the accent color.

        Returns:
            True if the color was changed and must be restored
        """

    @abstractmethod
    def end_accent_color(self, colored: bool) -> None:
        """Restore the color saved by ``begin_accent_color``.

        Args:
            colored: Result of the matching ``begin_accent_color`` call
        """

    @contextmanager
    def accent_color_scope(self) -> Iterator[bool]:
        """Hold the accent color for the duration of a ``with`` block."""
        colored = self.begin_accent_color()
        try:
            yield colored
        finally:
            self.end_accent_color(colored)


class AnsiTerminal(TerminalController):
    """Terminal control through ANSI escape sequences."""

    def hide_cursor(self) -> None:
        if not self.interactive:
            return
        self.write(str(Control.show_cursor(False)))
        self.flush()

    def show_cursor(self) -> None:
        if not self.interactive:
            return
        self.write(str(Control.show_cursor(True)))
        self.flush()

    def begin_accent_color(self) -> bool:
        if not self.interactive:
            return False
        self.write(click.style("", fg=self.accent_color, reset=False))
        return True

    def end_accent_color(self, colored: bool) -> None:
        if not colored:
            return
        self.write(click.style("", reset=True))


class NativeConsoleTerminal(TerminalController):
    """Terminal control through the Windows console API."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        accent_color: str = DEFAULT_ACCENT_COLOR,
        interactive: Optional[bool] = None,
        kernel32: Any = None
    ):
        """Initialize native console controller.

        Args:
            stream: Output stream (defaults to ``sys.stdout``)
            accent_color: Color used for the bar interior
            interactive: Force terminal detection on or off
            kernel32: Loaded kernel32 library (loaded lazily when omitted)
        """
        super().__init__(stream, accent_color, interactive)
        self._kernel32 = kernel32
        self._accent_bits = console_color_attribute(accent_color)
        self._saved_attributes: Optional[int] = None

    @property
    def kernel32(self) -> Any:
        if self._kernel32 is None:
            self._kernel32 = declare_console_api(
                ctypes.WinDLL("kernel32", use_last_error=True)
            )
        return self._kernel32

    def _handle(self) -> Optional[int]:
        handle = self.kernel32.GetStdHandle(STD_OUTPUT_HANDLE)
        if handle is None or handle == INVALID_HANDLE_VALUE:
            return None
        return handle

    def _set_cursor_visible(self, visible: bool) -> None:
        if not self.interactive:
            return
        handle = self._handle()
        if handle is None:
            return

        info = CONSOLE_CURSOR_INFO()
        if not self.kernel32.GetConsoleCursorInfo(handle, ctypes.byref(info)):
            return

        info.bVisible = 1 if visible else 0
        self.kernel32.SetConsoleCursorInfo(handle, ctypes.byref(info))

    def hide_cursor(self) -> None:
        self._set_cursor_visible(False)

    def show_cursor(self) -> None:
        self._set_cursor_visible(True)

    def begin_accent_color(self) -> bool:
        if not self.interactive:
            return False
        handle = self._handle()
        if handle is None:
            return False

        csbi = CONSOLE_SCREEN_BUFFER_INFO()
        if not self.kernel32.GetConsoleScreenBufferInfo(handle, ctypes.byref(csbi)):
            return False

        saved = csbi.wAttributes
        accent = (saved & ~FOREGROUND_MASK) | self._accent_bits

        # Text already buffered must keep the old attribute.
        self.flush()
        if not self.kernel32.SetConsoleTextAttribute(handle, accent):
            return False

        self._saved_attributes = saved
        return True

    def end_accent_color(self, colored: bool) -> None:
        if not colored or self._saved_attributes is None:
            return
        saved, self._saved_attributes = self._saved_attributes, None

        handle = self._handle()
        if handle is None:
            return

        self.flush()
        self.kernel32.SetConsoleTextAttribute(handle, saved)


def create_terminal(
    stream: Optional[TextIO] = None,
    accent_color: str = DEFAULT_ACCENT_COLOR,
    interactive: Optional[bool] = None,
    platform: Optional[str] = None
) -> TerminalController:
    """Create the terminal controller suited to the current platform.

    The native console variant is used only on Windows consoles that do not
    understand escape sequences; everything else gets ANSI output.

    Args:
        stream: Output stream (defaults to ``sys.stdout``)
        accent_color: Color used for the bar interior
        interactive: Force terminal detection on or off
        platform: Platform name (defaults to ``sys.platform``)

    Returns:
        Terminal controller instance
    """
    stream = stream if stream is not None else sys.stdout
    platform = platform or sys.platform

    if platform == "win32" and Console(file=stream, force_terminal=interactive).legacy_windows:
        logger.debug("Using native console terminal control")
        return NativeConsoleTerminal(stream, accent_color, interactive)

    logger.debug("Using ANSI terminal control")
    return AnsiTerminal(stream, accent_color, interactive)
