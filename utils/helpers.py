"""
Helper Utility Module

This module provides various helper functions used throughout the Blog Admin client.
"""

import time
from typing import Optional

from config import settings


def normalize_post_content(content: str) -> str:
    """
    Trim surrounding whitespace and newlines from post content.

    Args:
        content: The raw content typed by the user

    Returns:
        str: The trimmed content
    """
    return (content or "").strip()


def is_valid_post_content(content: str) -> bool:
    """
    Check if already-trimmed content can be posted.

    Args:
        content: The trimmed content

    Returns:
        bool: True if the content has 1 to MAX_POST_LENGTH code points
    """
    return 0 < len(content) <= settings.MAX_POST_LENGTH


def truncate_text(text: str, max_length: int = 100, add_ellipsis: bool = True) -> str:
    """
    Truncate text to a maximum length.

    Args:
        text: The text to truncate
        max_length: Maximum length
        add_ellipsis: Whether to add an ellipsis if text is truncated

    Returns:
        str: Truncated text
    """
    if not text or len(text) <= max_length:
        return text

    truncated = text[:max_length].rstrip()
    if add_ellipsis:
        truncated += "..."

    return truncated


def format_relative_time(timestamp_ms: int, now_ms: Optional[int] = None) -> str:
    """
    Format an epoch-millis timestamp as an abbreviated "time ago" string.

    Args:
        timestamp_ms: The timestamp in milliseconds since the epoch
        now_ms: The reference time in milliseconds (defaults to now)

    Returns:
        str: e.g. "just now", "5 min. ago", "3 hr. ago", "2 days ago", "in 4 min."
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)

    delta = (now_ms - timestamp_ms) // 1000
    future = delta < 0
    seconds = abs(delta)

    if seconds < 60:
        return "just now"

    units = [
        (365 * 24 * 3600, "yr."),
        (30 * 24 * 3600, "mo."),
        (7 * 24 * 3600, "wk."),
        (24 * 3600, "day"),
        (3600, "hr."),
        (60, "min."),
    ]
    for size, label in units:
        if seconds >= size:
            count = seconds // size
            if label == "day":
                label = "day" if count == 1 else "days"
            text = f"{count} {label}"
            return f"in {text}" if future else f"{text} ago"

    return "just now"
