"""Formatting utilities for display"""

from datetime import datetime
from typing import Union

from ..constants import RELEASE_ID_FORMAT


def format_duration(seconds: float) -> str:
    """Format duration in seconds to human readable format

    Args:
        seconds: Duration in seconds

    Returns:
        Human readable duration string

    Examples:
        >>> format_duration(1.5)
        '1.5s'
        >>> format_duration(65)
        '1m 5s'
    """
    if seconds < 0:
        return "Invalid duration"

    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"

    minutes, seconds = divmod(int(seconds), 60)
    return f"{minutes}m {seconds}s"


def format_release(release: Union[int, str]) -> str:
    """Format a release identifier with its creation date

    Examples:
        >>> format_release(20240120101500)
        '20240120101500 (2024-01-20 10:15:00)'
        >>> format_release(15)
        '15'
    """
    try:
        created = datetime.strptime(str(release), RELEASE_ID_FORMAT)
    except ValueError:
        return str(release)

    return f"{release} ({created:%Y-%m-%d %H:%M:%S})"
