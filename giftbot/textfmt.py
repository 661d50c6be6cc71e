"""Small text helpers for the status display and account listings."""

from __future__ import annotations

import math
from datetime import datetime, timedelta

_HIDDEN = "********"


def redact(cookie: str) -> str:
    """Hide most of a cookie, keeping four characters at each end."""
    if len(cookie) <= 8:
        return _HIDDEN
    return f"{cookie[:4]}…{cookie[-4:]}"


def truncate(text: str, limit: int) -> str:
    """Limit ``text`` to ``limit`` characters, ending with an ellipsis if cut."""
    if len(text) <= limit:
        return text
    return text[: limit - 1] + "…"


def or_dash(text: str) -> str:
    """Return ``text``, or a dash when it is empty."""
    return text or "-"


def _round_seconds(seconds: float) -> int:
    magnitude = math.floor(abs(seconds) + 0.5)
    return -magnitude if seconds < 0 else magnitude


def format_duration(seconds: float | timedelta) -> str:
    """Render a duration rounded to whole seconds, such as ``1h2m3s``."""
    if isinstance(seconds, timedelta):
        seconds = seconds.total_seconds()
    total = _round_seconds(seconds)
    if total == 0:
        return "0s"
    sign = "-" if total < 0 else ""
    hours, rest = divmod(abs(total), 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{sign}{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{sign}{minutes}m{secs}s"
    return f"{sign}{secs}s"


def _now_like(when: datetime) -> datetime:
    return datetime.now(tz=when.tzinfo)


def humanize_until(when: datetime) -> str:
    """Describe how far in the future ``when`` is, or ``now`` if it has passed."""
    remaining = (when - _now_like(when)).total_seconds()
    if _round_seconds(remaining) <= 0:
        return "now"
    return "in " + format_duration(remaining)


def humanize_ago(when: datetime) -> str:
    """Describe how long ago ``when`` was."""
    return format_duration((_now_like(when) - when).total_seconds()) + " ago"