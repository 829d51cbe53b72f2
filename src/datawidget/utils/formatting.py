"""
Pure formatting helpers shared by every data source.

All functions are deterministic apart from ``format_time_ago`` and
``format_update_time``, which read the clock unless a reference time is passed.
"""

import re
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional, Union

ELLIPSIS = "…"

# Fixed-length approximations, largest first
TIME_UNITS = (
    ("year", 31_536_000),
    ("month", 2_592_000),
    ("week", 604_800),
    ("day", 86_400),
    ("hour", 3600),
    ("minute", 60),
)

_FEAT_PATTERN = re.compile(r"\[feat\. .*?\]", re.IGNORECASE)
_PAREN_PATTERN = re.compile(r"\(.*?\)")


def truncate(text: Optional[str], max_length: int) -> str:
    """
    Shorten text to at most ``max_length`` characters.

    Text longer than the limit keeps its first ``max_length - 1`` characters
    followed by a single ellipsis character.

    Example:
        >>> truncate("hello world", 5)
        'hell…'
        >>> truncate("hi", 5)
        'hi'
    """
    if max_length < 1:
        raise ValueError(f"max_length must be at least 1, got {max_length}")
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[: max_length - 1] + ELLIPSIS


def format_number(num: Union[int, float]) -> str:
    """
    Format large counts with K and M suffixes.

    One decimal digit is kept; rounding follows Python's ``format`` (round
    half to even on the binary value).

    Example:
        >>> format_number(1500)
        '1.5K'
    """
    if num >= 1_000_000:
        return f"{num / 1_000_000:.1f}M"
    if num >= 1000:
        return f"{num / 1000:.1f}K"
    return str(num)


def _parse_timestamp(timestamp: Union[int, float, str]) -> Optional[datetime]:
    """Turn epoch milliseconds or a date string into an aware datetime."""
    if isinstance(timestamp, bool):
        return None

    if isinstance(timestamp, (int, float)):
        try:
            return datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    text = str(timestamp).strip()
    if not text:
        return None

    parsed = None
    try:
        # fromisoformat() only learned the trailing "Z" in 3.11
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        try:
            parsed = parsedate_to_datetime(text)
        except (TypeError, ValueError, IndexError):
            return None

    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_time_ago(
    timestamp: Union[int, float, str, None], now: Optional[datetime] = None
) -> str:
    """
    Convert a timestamp to a compact relative time string.

    Args:
        timestamp: Epoch milliseconds or a parseable date string
            (ISO 8601 or RFC 2822)
        now: Reference time, defaults to the current UTC time

    Returns:
        "Unknown" for missing, zero or unparseable input, "Just now" for future
        timestamps and deltas under a minute, otherwise e.g. "3d ago"
    """
    if not timestamp:
        return "Unknown"

    moment = _parse_timestamp(timestamp)
    if moment is None:
        return "Unknown"

    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    seconds = int((now - moment).total_seconds())
    if seconds <= 0:
        return "Just now"

    for unit, unit_seconds in TIME_UNITS:
        count = seconds // unit_seconds
        if count >= 1:
            return f"{count}{unit[0]} ago"

    return "Just now"


def format_duration(hours: float) -> str:
    """Format play time: minutes below one hour, otherwise one-decimal hours."""
    if hours < 1:
        return f"{round(hours * 60)}m"
    return f"{hours:.1f}h"


def clean_title(title: Optional[str]) -> str:
    """Strip "[feat. ...]" and parenthesized annotations from a title."""
    if not title:
        return ""
    title = _FEAT_PATTERN.sub("", title)
    title = _PAREN_PATTERN.sub("", title)
    return title.strip()


def format_update_time(moment: Optional[datetime] = None) -> str:
    """Footer label with the local wall-clock time of the update."""
    moment = moment or datetime.now()
    return f"Updated {moment:%H:%M}"
