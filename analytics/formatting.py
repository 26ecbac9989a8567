"""Display helpers shared by the report and dashboard payloads."""

from __future__ import annotations


def format_duration(seconds: int) -> str:
    """125 -> '2m 5s'."""
    minutes, remainder = divmod(seconds, 60)
    return f"{minutes}m {remainder}s"
