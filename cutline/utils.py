"""
cutline.utils - Shared utility functions.

Contains common functions used across multiple modules to avoid duplication.
"""

from __future__ import annotations


def format_time(seconds: float) -> str:
    """Format seconds as H:MM:SS or M:SS for timeline labels.

    Args:
        seconds: Time in seconds (negative values display as 0:00)

    Returns:
        Formatted string (H:MM:SS if >= 1 hour, otherwise M:SS)
    """
    seconds = max(0.0, seconds)
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(value, high))
