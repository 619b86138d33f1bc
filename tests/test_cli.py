"""CLI tests."""

import pytest
from click.testing import CliRunner

from cmdbar.cli import main, demo_command, duration_command


@pytest.fixture
def runner():
    """Click test runner."""
    return CliRunner()


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_help(self, runner):
        """CLI --help lists the commands."""
        result = runner.invoke(main, ['--help'])

        assert result.exit_code == 0
        assert "Usage:" in result.output
        assert "demo" in result.output
        assert "duration" in result.output

    def test_cli_version(self, runner):
        """CLI --version displays version."""
        result = runner.invoke(main, ['--version'])

        assert result.exit_code == 0
        assert "version" in result.output.lower()

    def test_verbose_flag(self, runner):
        """--verbose announces itself."""
        result = runner.invoke(main, ['--verbose', 'duration', '5'])

        assert result.exit_code == 0
        assert "Verbose mode enabled" in result.output


class TestDemoCommand:
    """Test the demo command."""

    def test_demo_runs_to_completion(self, runner):
        """The bar reaches 100% and prints the elapsed time."""
        result = runner.invoke(main, ['demo', '--label', 'Copy', '--total', '4', '--delay', '0'])

        assert result.exit_code == 0
        assert "Copy" in result.output
        assert "] 25%" in result.output
        assert "] 100%  ->  " in result.output
        assert result.output.count("\n") == 1

    def test_demo_zero_total(self, runner):
        """A zero total is reported as an error."""
        result = runner.invoke(main, ['demo', '--total', '0', '--delay', '0'])

        assert result.exit_code == 1
        assert "Progress total is zero." in result.output

    def test_demo_negative_total_rejected(self, runner):
        """Negative totals fail option validation."""
        result = runner.invoke(main, ['demo', '--total', '-3'])

        assert result.exit_code != 0

    def test_demo_idle(self, runner):
        """Idle mode draws nothing."""
        result = runner.invoke(main, ['demo', '--total', '4', '--delay', '0', '--idle'])

        assert result.exit_code == 0
        assert "%" not in result.output
        assert "Completed 4 steps" in result.output

    def test_demo_idle_from_environment(self, runner):
        """CMDBAR_IDLE turns drawing off."""
        result = runner.invoke(
            main, ['demo', '--total', '3', '--delay', '0'], env={"CMDBAR_IDLE": "1"}
        )

        assert result.exit_code == 0
        assert "Completed 3 steps" in result.output

    def test_demo_bad_environment(self, runner):
        """Invalid configuration variables are reported."""
        result = runner.invoke(
            main, ['demo', '--total', '3', '--delay', '0'], env={"CMDBAR_IDLE": "maybe"}
        )

        assert result.exit_code == 1
        assert "CMDBAR_IDLE" in result.output

    def test_demo_command_standalone(self, runner):
        """The command object can be invoked directly."""
        result = runner.invoke(demo_command, ['--total', '2', '--delay', '0'])

        assert result.exit_code == 0
        assert "Processing" in result.output


class TestDurationCommand:
    """Test the duration command."""

    @pytest.mark.parametrize("value,expected", [
        ("65000000", "00:01:05"),
        ("500000", "500 milliseconds"),
        ("42", "42 microseconds"),
    ])
    def test_duration_output(self, runner, value, expected):
        """Durations are printed as the summary line shows them."""
        result = runner.invoke(duration_command, [value])

        assert result.exit_code == 0
        assert result.output == expected + "\n"

    def test_duration_negative_rejected(self, runner):
        """Negative values fail validation."""
        result = runner.invoke(main, ['duration', '--', '-1'])

        assert result.exit_code != 0
