"""Tests for progress line rendering."""

import pytest
from io import StringIO

from cmdbar.ui.renderer import (
    BarRenderer,
    bar_glyphs,
    bar_line_parts,
    fill_position,
    format_bar_line,
    truncate_label
)
from cmdbar.ui.terminal import AnsiTerminal


@pytest.fixture
def plain_renderer():
    """Renderer over a non-interactive stream."""
    return BarRenderer(AnsiTerminal(StringIO(), interactive=False))


@pytest.fixture
def color_renderer():
    """Renderer over an interactive stream."""
    return BarRenderer(AnsiTerminal(StringIO(), interactive=True))


def output_of(renderer):
    return renderer.terminal.stream.getvalue()


class TestTruncateLabel:
    """Test label truncation."""

    def test_short_label_unchanged(self):
        """Labels within the field width are returned as-is."""
        assert truncate_label("Copy", 35) == "Copy"
        assert truncate_label("x" * 35, 35) == "x" * 35

    def test_long_label_ellipsized(self):
        """Long labels end with an ellipsis."""
        assert truncate_label("abcdefghij", 8) == "abcde..."

    def test_exact_ellipsis_width(self):
        """A width of three leaves only the ellipsis."""
        assert truncate_label("abcdef", 3) == "..."

    def test_narrow_field_without_ellipsis(self):
        """Fields narrower than the ellipsis are cut plainly."""
        assert truncate_label("abcdef", 2) == "ab"


class TestFillPosition:
    """Test bar fill position."""

    @pytest.mark.parametrize("percent,expected", [
        (0, 0),
        (1, 1),
        (2, 1),
        (3, 2),
        (33, 17),
        (50, 25),
        (99, 50),
        (100, 50),
    ])
    def test_default_width(self, percent, expected):
        """Half cells round up on the default 50-cell bar."""
        assert fill_position(percent) == expected

    def test_custom_width(self):
        """Fill position scales with bar width."""
        assert fill_position(50, 10) == 5
        assert fill_position(25, 10) == 3


class TestBarGlyphs:
    """Test bar interior glyphs."""

    def test_empty_bar(self):
        """0% draws only the head."""
        assert bar_glyphs(0, 10) == ">" + " " * 9

    def test_half_bar(self):
        """50% fills half the cells."""
        assert bar_glyphs(50, 10) == "=====>    "

    def test_full_bar(self):
        """100% fills every cell with no head."""
        assert bar_glyphs(100, 10) == "=" * 10

    def test_width_preserved(self):
        """The interior is always bar_width cells."""
        for percent in range(101):
            assert len(bar_glyphs(percent)) == 50


class TestFormatBarLine:
    """Test plain line formatting."""

    def test_line_layout(self):
        """Label, bracketed bar and percent in the fixed layout."""
        line = format_bar_line("Copy", 50, bar_width=10, label_width=8)
        assert line == "Copy     [=====>    ] 50%"

    def test_default_layout_width(self):
        """Default line is label field, space, bracketed bar, percent."""
        line = format_bar_line("Copy", 0)
        assert line.startswith("Copy" + " " * 31 + " [>")
        assert line.endswith("] 0%")


class TestBarRenderer:
    """Test BarRenderer output."""

    def test_render_plain(self, plain_renderer):
        """Non-interactive output carries no escape sequences."""
        plain_renderer.render("Copy", 25)

        expected = "\r" + format_bar_line("Copy", 25)
        assert output_of(plain_renderer) == expected
        assert plain_renderer.render_count == 1

    def test_render_colors_only_bar_interior(self, color_renderer):
        """Color starts after the opening bracket and ends before the closing one."""
        color_renderer.render("Copy", 50)

        output = output_of(color_renderer)
        label_field = "Copy".ljust(35)
        assert output == (
            "\r" + label_field + " [" + "\x1b[94m" + bar_glyphs(50)
            + "\x1b[0m" + "] 50%"
        )

    def test_render_counts(self, plain_renderer):
        """Each render call is counted."""
        plain_renderer.render("Copy", 0)
        plain_renderer.render("Copy", 10)
        assert plain_renderer.render_count == 2

    def test_finish_appends_summary(self, plain_renderer):
        """finish() draws 100% followed by the duration and a newline."""
        plain_renderer.finish("Copy", "3 seconds")

        output = output_of(plain_renderer)
        assert output == "\r" + format_bar_line("Copy", 100) + "  ->  3 seconds\n"

    def test_abandon_ends_line(self, plain_renderer):
        """abandon() only terminates the line."""
        plain_renderer.render("Copy", 10)
        plain_renderer.abandon()
        assert output_of(plain_renderer).endswith("10%\n")


class TestBarLineParts:
    """Test the shared line pieces."""

    def test_parts_join_to_line(self):
        """The pieces concatenate to the plain line."""
        parts = bar_line_parts("Copy", 40, bar_width=10, label_width=6)
        assert parts == ("Copy   [", "====>     ", "] 40%")
        assert "".join(parts) == format_bar_line("Copy", 40, bar_width=10, label_width=6)

    def test_render_matches_format(self):
        """Rendered output is the formatted line with a carriage return."""
        renderer = BarRenderer(
            AnsiTerminal(StringIO(), interactive=False), bar_width=12, label_width=5
        )
        renderer.render("Longer label", 33)

        expected = "\r" + format_bar_line("Longer label", 33, bar_width=12, label_width=5)
        assert renderer.terminal.stream.getvalue() == expected
