"""Formatting helpers for the system monitor."""

from __future__ import annotations


def _truncating_divmod(value: int, divisor: int) -> tuple[int, int]:
    """Quotient rounded toward zero, and the remainder that goes with it."""
    quotient = abs(value) // divisor
    if value < 0:
        quotient = -quotient
    return quotient, value - quotient * divisor


def elapsed_time(seconds: int) -> str:
    """Format a number of seconds as ``H:M:S`` without zero padding."""
    total_minutes, secs = _truncating_divmod(int(seconds), 60)
    hours, minutes = _truncating_divmod(total_minutes, 60)
    return f"{hours}:{minutes}:{secs}"