"""Elapsed time formatting for the progress summary line."""

from datetime import timedelta


def format_duration(elapsed: timedelta) -> str:
    """Format elapsed time using the coarsest non-empty unit.

    Anything of a minute or more is shown as ``HH:MM:SS`` (hours are not
    wrapped at 24). Shorter durations are shown as whole seconds, then
    milliseconds, then microseconds.

    Args:
        elapsed: Elapsed time

    Returns:
        Formatted duration string
    """
    total_us = elapsed // timedelta(microseconds=1)
    if total_us < 0:
        total_us = 0

    total_seconds, remainder_us = divmod(total_us, 1_000_000)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    milliseconds, microseconds = divmod(remainder_us, 1000)

    if hours > 0 or minutes > 0:
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    elif seconds > 0:
        return f"{seconds} seconds"
    elif milliseconds > 0:
        return f"{milliseconds} milliseconds"
    else:
        return f"{microseconds} microseconds"


def elapsed_between(start_ns: int, end_ns: int) -> timedelta:
    """Convert two monotonic nanosecond readings into a timedelta."""
    return timedelta(microseconds=max(end_ns - start_ns, 0) // 1000)
