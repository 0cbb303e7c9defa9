"""
Helper utility functions for the Absorbey application.
"""

import math
import re
import time
from typing import Optional


YOUTUBE_ID_PATTERN = re.compile(
    r'(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?)/|.*[?&]v=)|youtu\.be/)([^"&?/\s]{11})'
)


def extract_video_id(url: str) -> Optional[str]:
    """
    Extract the video ID from a YouTube URL.

    Handles watch, short (youtu.be), embed, /v/ and /e/ links as well as any
    query string carrying a ``v`` parameter.

    Args:
        url: YouTube URL

    Returns:
        The 11-character video ID, or None if the URL is not recognised
    """
    if not url:
        return None

    match = YOUTUBE_ID_PATTERN.search(url)
    return match.group(1) if match else None


def format_timestamp(seconds: float) -> str:
    """
    Format a number of seconds as M:SS.

    Args:
        seconds: Offset in seconds

    Returns:
        Timestamp string, minutes are not wrapped into hours
    """
    mins = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{mins}:{secs:02d}"


def get_timestamp() -> str:
    """Current UTC time as an ISO-8601 string."""
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


def truncate_text(text: str, max_length: int = 100, suffix: str = "...") -> str:
    """
    Truncate text to a maximum length.

    Args:
        text: Text to truncate
        max_length: Maximum length of the kept text
        suffix: Suffix to add if truncated

    Returns:
        Truncated text
    """
    if len(text) <= max_length:
        return text
    return text[:max_length] + suffix


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))
