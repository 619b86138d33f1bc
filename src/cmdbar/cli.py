"""Main CLI entry point for cmdbar."""

import logging
import sys
import time
from datetime import timedelta

import click
from rich.console import Console

from cmdbar import __version__
from cmdbar.core.errors import ConfigError, ProgressError
from cmdbar.core.session import ProgressBar
from cmdbar.utils.config import BarConfig
from cmdbar.utils.duration import format_duration

# Configure logging
logging.basicConfig(level=logging.WARNING)
logger = logging.getLogger(__name__)

console = Console(stderr=True)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def main(verbose: bool) -> None:
    """cmdbar - Console progress bar for command-line tools."""
    if verbose:
        console.print(f"[bold green]cmdbar v{__version__}[/bold green]")
        console.print("Verbose mode enabled")
        logging.getLogger().setLevel(logging.INFO)


@main.command("demo")
@click.option("--label", default="Processing", help="Text shown next to the bar")
@click.option("--total", default=100, type=click.IntRange(min=0), help="Number of steps to run")
@click.option("--delay", default=0.02, type=click.FloatRange(min=0), help="Seconds to wait per step")
@click.option("--idle", is_flag=True, help="Run without drawing anything")
def demo_command(label: str, total: int, delay: float, idle: bool) -> None:
    """Run a progress bar through TOTAL simulated steps.

    Examples:

        # Default run
        cmdbar demo

        # Slow run with a long label
        cmdbar demo --label "Copying a very long list of files" --delay 0.1
    """
    try:
        config = BarConfig.from_env()
        bar = ProgressBar(config)
        if idle:
            bar.set_idle(True)

        with bar.session(label, total):
            for _ in range(total):
                if delay > 0:
                    time.sleep(delay)
                bar.advance()

        if bar.is_idle():
            console.print(f"[green]Completed {total} steps[/green]")

    except (ProgressError, ConfigError) as e:
        console.print(f"[red]Error: {str(e)}[/red]")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user.[/yellow]")
        sys.exit(1)


@main.command("duration")
@click.argument("microseconds", type=click.IntRange(min=0))
def duration_command(microseconds: int) -> None:
    """Print MICROSECONDS formatted the way the summary line shows it."""
    click.echo(format_duration(timedelta(microseconds=microseconds)))


if __name__ == "__main__":
    main()
