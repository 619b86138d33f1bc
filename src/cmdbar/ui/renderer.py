"""Progress line rendering."""

from typing import Optional, Tuple

from .terminal import TerminalController, create_terminal
from ..utils.config import DEFAULT_BAR_WIDTH, DEFAULT_LABEL_WIDTH

ELLIPSIS = "..."
SUMMARY_SEPARATOR = "  ->  "


def truncate_label(text: str, width: int = DEFAULT_LABEL_WIDTH) -> str:
    """Fit a label into the label field.

    Args:
        text: Label text
        width: Label field width

    Returns:
        Label cut to ``width`` characters, ending in an ellipsis when the
        field has room for one
    """
    if len(text) <= width:
        return text
    if width >= len(ELLIPSIS):
        return text[:width - len(ELLIPSIS)] + ELLIPSIS
    return text[:width]


def fill_position(percent: int, bar_width: int = DEFAULT_BAR_WIDTH) -> int:
    """Bar cell index up to which the bar is drawn complete.

    Rounds half up using integer arithmetic.
    """
    return (bar_width * percent + 50) // 100


def bar_glyphs(percent: int, bar_width: int = DEFAULT_BAR_WIDTH) -> str:
    """Bar interior for a percentage, e.g. ``'=====>    '``."""
    position = fill_position(percent, bar_width)
    cells = []
    for index in range(bar_width):
        if index < position:
            cells.append("=")
        elif index == position:
            cells.append(">")
        else:
            cells.append(" ")
    return "".join(cells)


def bar_line_parts(
    label: str,
    percent: int,
    bar_width: int = DEFAULT_BAR_WIDTH,
    label_width: int = DEFAULT_LABEL_WIDTH
) -> Tuple[str, str, str]:
    """Split a progress line into text before, inside and after the bar.

    The middle part is the bar interior, which is the only colored part.
    """
    return (
        f"{label.ljust(label_width)} [",
        bar_glyphs(percent, bar_width),
        f"] {percent}%",
    )


def format_bar_line(
    label: str,
    percent: int,
    bar_width: int = DEFAULT_BAR_WIDTH,
    label_width: int = DEFAULT_LABEL_WIDTH
) -> str:
    """Uncolored progress line, without the leading carriage return."""
    return "".join(bar_line_parts(label, percent, bar_width, label_width))


class BarRenderer:
    """Writes progress lines to a terminal."""

    def __init__(
        self,
        terminal: Optional[TerminalController] = None,
        bar_width: int = DEFAULT_BAR_WIDTH,
        label_width: int = DEFAULT_LABEL_WIDTH
    ):
        """Initialize renderer.

        Args:
            terminal: Terminal controller (created for stdout when omitted)
            bar_width: Number of bar cells
            label_width: Label field width
        """
        self.terminal = terminal or create_terminal()
        self.bar_width = bar_width
        self.label_width = label_width
        self.render_count = 0

    def render(self, label: str, percent: int) -> None:
        """Overwrite the current line with the bar at ``percent``.

        Only the bar interior is colored; the color is restored before the
        closing bracket.
        """
        terminal = self.terminal
        before, glyphs, after = bar_line_parts(
            label, percent, self.bar_width, self.label_width
        )
        terminal.write("\r" + before)

        with terminal.accent_color_scope():
            terminal.write(glyphs)

        terminal.write(after)
        terminal.flush()
        self.render_count += 1

    def finish(self, label: str, duration_text: str) -> None:
        """Render the completed bar followed by the elapsed time summary."""
        self.render(label, 100)
        self.terminal.write(f"{SUMMARY_SEPARATOR}{duration_text}\n")
        self.terminal.flush()

    def abandon(self) -> None:
        """End a partially drawn line without a summary."""
        self.terminal.write("\n")
        self.terminal.flush()

    def hide_cursor(self) -> None:
        self.terminal.hide_cursor()

    def show_cursor(self) -> None:
        self.terminal.show_cursor()
