"""Scrollable, auto-following view of the bot's structured log file."""

from __future__ import annotations

import json
import os
import re
import unicodedata
from datetime import datetime
from pathlib import Path
from typing import Any, BinaryIO

from giftbot.styles import (
    LOG_ACCOUNT,
    LOG_DEBUG,
    LOG_ERROR,
    LOG_INFO,
    LOG_KEY,
    LOG_MSG,
    LOG_TIME,
    LOG_VAL,
    LOG_WARN,
    STYLE_DIM,
    STYLE_ERR,
    STYLE_PROGRESS_EMPTY,
    STYLE_THUMB,
    footer_hint,
)

MAX_LOG_LINES = 500
TAIL_BYTES = 32768

_ANSI_SEQ = re.compile(r"\x1b\[[^A-Za-z]*[A-Za-z]?")
_RFC3339 = re.compile(
    r"(\d{4}-\d{2}-\d{2}T(\d{2}:\d{2}:\d{2}))(?:\.\d+)?(?:Z|[+-]\d{2}:\d{2})\Z"
)
_LEVEL_STYLES = {"DEBUG": LOG_DEBUG, "INFO": LOG_INFO, "WARN": LOG_WARN, "ERROR": LOG_ERROR}
_CORE_FIELDS = frozenset({"time", "level", "msg", "account"})


def _char_width(ch: str) -> int:
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1


def _visible_width(text: str) -> int:
    return sum(_char_width(ch) for ch in _ANSI_SEQ.sub("", text))


def _clock(value: str) -> str | None:
    match = _RFC3339.match(value)
    if match is None:
        return None
    try:
        datetime.strptime(match.group(1), "%Y-%m-%dT%H:%M:%S")
    except ValueError:
        return None
    return match.group(2)


def _go_value(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value) if abs(value) < 10**21 else repr(float(value))
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if isinstance(value, dict):
        inner = " ".join(f"{k}:{_go_value(value[k])}" for k in sorted(value))
        return f"map[{inner}]"
    if isinstance(value, list):
        return "[" + " ".join(_go_value(v) for v in value) + "]"
    return str(value)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def format_log_line(raw: str) -> str:
    """Render one JSON log record for display; other text is returned as is."""
    raw = raw.strip()
    if not raw:
        return ""
    try:
        fields = json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        return raw
    if fields is None:
        fields = {}
    if not isinstance(fields, dict):
        return raw

    parts: list[str] = []
    stamp = fields.get("time")
    if isinstance(stamp, str):
        parts.append(LOG_TIME.render(_clock(stamp) or stamp) + " ")

    level = fields.get("level")
    if isinstance(level, str):
        padded = f"{level:<5}"
        style = _LEVEL_STYLES.get(level.upper())
        parts.append((style.render(padded) if style else padded) + " ")

    account = fields.get("account")
    if isinstance(account, str):
        parts.append(LOG_ACCOUNT.render(f"[{account}]") + " ")

    msg = fields.get("msg")
    if isinstance(msg, str):
        parts.append(LOG_MSG.render(msg))

    extras = [
        LOG_KEY.render(key) + "=" + LOG_VAL.render(_go_value(fields[key]))
        for key in sorted(k for k in fields if k not in _CORE_FIELDS)
    ]
    if extras:
        parts.append("  " + " ".join(extras))
    return "".join(parts)


def hslice(text: str, start: int, width: int) -> str:
    """Cut ``width`` visible characters from ``text`` starting at ``start``.

    Escape sequences seen before the cut are kept so the styling carries over.
    """
    if start <= 0 and width <= 0:
        return text
    pending: list[str] = []
    result: list[str] = []
    visible = 0
    captured = 0
    started = False
    i = 0
    while i < len(text):
        if text.startswith("\x1b[", i):
            j = i + 2
            while j < len(text):
                letter = text[j].isascii() and text[j].isalpha()
                j += 1
                if letter:
                    break
            (result if started else pending).append(text[i:j])
            i = j
            continue
        visible += 1
        if visible > start:
            if width > 0 and captured >= width:
                break
            if not started:
                started = True
                result.extend(pending)
            result.append(text[i])
            captured += 1
        i += 1
    return "".join(result)


class LogView:
    """Tail of a log file with vertical and horizontal scrolling."""

    breadcrumb = "service logs"

    def __init__(self, path: str | os.PathLike[str], width: int = 0, height: int = 0) -> None:
        self.path = Path(path)
        self.width = width
        self.height = height
        self.lines: list[str] = []
        self.scroll = 0
        self.hscroll = 0
        self.max_line_width = 0
        self.error: OSError | None = None
        self.done = False
        self._file: BinaryIO | None = None
        try:
            handle = open(self.path, "rb")
        except OSError as exc:
            self.error = exc
            return
        self._file = handle
        try:
            if os.fstat(handle.fileno()).st_size > TAIL_BYTES:
                handle.seek(-TAIL_BYTES, os.SEEK_END)
                handle.readline()
        except OSError as exc:
            self.error = exc
            return
        self.read_available()
        self.scroll_to_bottom()

    def __enter__(self) -> LogView:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def read_available(self) -> None:
        """Read whatever was appended to the file, following it if at the bottom."""
        if self._file is None:
            return
        previous = len(self.lines)
        at_bottom = self.scroll >= previous - self.view_height() - 1
        text = self._file.read().decode("utf-8", "replace")
        for piece in text.split("\n"):
            line = piece.rstrip("\r\n")
            if not line:
                continue
            formatted = format_log_line(line)
            if formatted:
                self.lines.append(formatted)
                self.max_line_width = max(self.max_line_width, _visible_width(formatted))
        if len(self.lines) > MAX_LOG_LINES:
            del self.lines[: len(self.lines) - MAX_LOG_LINES]
        if at_bottom and len(self.lines) > previous:
            self.scroll_to_bottom()

    def view_height(self) -> int:
        if self.height < 3:
            return 20
        if self.max_line_width > self.width:
            return self.height - 1
        return self.height

    def _max_scroll(self) -> int:
        return max(len(self.lines) - self.view_height(), 0)

    def scroll_to_bottom(self) -> None:
        self.scroll = self._max_scroll()

    def handle_key(self, key: str) -> bool:
        """Apply a key press; returns True once the view should close."""
        if key in ("esc", "q"):
            self.close()
            self.done = True
        elif key in ("up", "w"):
            self.scroll = max(self.scroll - 1, 0)
        elif key in ("down", "s"):
            if self.scroll < self._max_scroll():
                self.scroll += 1
        elif key in ("left", "a"):
            self.hscroll = max(self.hscroll - 8, 0)
        elif key in ("right", "d"):
            limit = self.max_line_width - self.width
            if limit > 0 and self.hscroll < limit:
                self.hscroll = min(self.hscroll + 8, limit)
        elif key == "pgup":
            self.scroll = max(self.scroll - self.view_height(), 0)
        elif key == "pgdown":
            self.scroll = min(self.scroll + self.view_height(), self._max_scroll())
        elif key in ("home", "g"):
            self.scroll = 0
            self.hscroll = 0
        elif key in ("end", "G"):
            self.scroll_to_bottom()
        return self.done

    def render(self) -> str:
        if self.error is not None:
            return "\n  " + STYLE_ERR.render(str(self.error)) + "\n"
        if not self.lines:
            return "\n  " + STYLE_DIM.render("no log entries found") + "\n"
        shown = self.lines[self.scroll : self.scroll + self.view_height()]
        if self.hscroll > 0:
            shown = [hslice(line, self.hscroll, self.width) for line in shown]
        return "".join(line + "\n" for line in shown) + self._hscroll_bar()

    def _hscroll_bar(self) -> str:
        if self.max_line_width <= self.width or self.width < 10:
            return ""
        bar_width = self.width - 2
        thumb_size = max(int(bar_width * (self.width / self.max_line_width)), 1)
        max_h = self.max_line_width - self.width
        thumb_pos = 0
        if max_h > 0 and self.hscroll > 0:
            thumb_pos = int(self.hscroll / max_h * (bar_width - thumb_size))
        cells = (
            STYLE_THUMB.render("━")
            if thumb_pos <= i < thumb_pos + thumb_size
            else STYLE_PROGRESS_EMPTY.render("─")
            for i in range(bar_width)
        )
        return STYLE_DIM.render("◀") + "".join(cells) + STYLE_DIM.render("▶")

    def footer_status(self) -> str:
        parts: list[str] = []
        visible = self.view_height()
        if len(self.lines) > visible:
            limit = len(self.lines) - visible
            pct = self.scroll * 100 // limit if limit > 0 else 0
            parts.append(f"{self.scroll + visible}/{len(self.lines)} ({pct}%)")
        if self.hscroll > 0:
            parts.append(f"col {self.hscroll + 1}")
        return STYLE_DIM.render("  ".join(parts)) if parts else ""

    @property
    def footer_keys(self) -> str:
        keys = [footer_hint("esc/q", "back"), footer_hint("↑↓/ws", "scroll")]
        if self.max_line_width > self.width:
            keys.append(footer_hint("←→/ad", "pan"))
        keys += [footer_hint("g/G", "top/bottom"), footer_hint("PgUp/PgDn", "page")]
        return "    ".join(keys)

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None