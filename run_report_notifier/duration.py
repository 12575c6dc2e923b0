"""Time arithmetic helpers for run durations (all values in milliseconds)."""

import math

MS_PER_MINUTE = 60_000
MS_PER_SECOND = 1_000


def elapsed(start: int, end: int) -> int:
    """Return ``end - start`` without validating the ordering."""
    return end - start


def format_duration(duration: int) -> str:
    """Format a duration as ``"{minutes}m {seconds}s"``.

    Minutes are floor-divided and never wrapped into hours. A negative
    duration clamps minutes to zero while the seconds remainder keeps the
    sign of the input before its absolute value is taken.
    """
    minutes = math.floor(duration / MS_PER_MINUTE)
    seconds = math.floor(math.fmod(duration, MS_PER_MINUTE) / MS_PER_SECOND)
    return f"{max(minutes, 0)}m {abs(seconds)}s"
