"""Live status of one account's runner and the rules for giving up on a giveaway."""

from __future__ import annotations

import dataclasses
import threading
from dataclasses import dataclass, field
from datetime import datetime

RECENT_ENTRIES_CAP = 20


@dataclass(frozen=True)
class EnteredGiveaway:
    """One row in the recent-entries rolling window."""

    when: datetime
    name: str
    code: str
    cost: int


@dataclass
class Status:
    """A snapshot of what an account's runner is doing."""

    name: str = ""
    username: str = ""
    points: int = 0
    last_run: datetime | None = None
    next_run: datetime | None = None
    last_error: str = ""
    entries_attempt: int = 0
    entries_ok: int = 0
    recent_entries: list[EnteredGiveaway] = field(default_factory=list)


def _now() -> datetime:
    return datetime.now().astimezone()


class StatusTracker:
    """Thread-safe holder of a runner's status and rejected giveaway codes."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._lock = threading.Lock()
        self._status = Status(name=name)
        self._failed_codes: set[str] = set()

    def record_error(self, message: object) -> None:
        with self._lock:
            self._status.last_error = str(message)

    def record_run(self, username: str, points: int) -> None:
        with self._lock:
            self._status.last_run = _now()
            self._status.last_error = ""
            self._status.username = username
            self._status.points = points

    def record_entry(self, name: str, code: str, cost: int, ok: bool) -> None:
        with self._lock:
            self._status.entries_attempt += 1
            if not ok:
                return
            self._status.entries_ok += 1
            entries = self._status.recent_entries
            entries.append(EnteredGiveaway(when=_now(), name=name, code=code, cost=cost))
            if len(entries) > RECENT_ENTRIES_CAP:
                del entries[: len(entries) - RECENT_ENTRIES_CAP]

    def record_failed_code(self, code: str) -> None:
        """Remember a code the server rejected so later cycles skip it."""
        with self._lock:
            self._failed_codes.add(code)

    def is_failed_code(self, code: str) -> bool:
        with self._lock:
            return code in self._failed_codes

    def set_next_run(self, when: datetime) -> None:
        with self._lock:
            self._status.next_run = when

    def snapshot(self) -> Status:
        """Return an independent copy of the current status."""
        with self._lock:
            return dataclasses.replace(
                self._status,
                name=self.name,
                recent_entries=list(self._status.recent_entries),
            )


def is_permanent_rejection(error: object) -> bool:
    """Whether a server rejection will not change on retry."""
    msg = str(error)
    if "Missing Base Game" in msg or "Exists in Account" in msg or "Previously Won" in msg:
        return True
    return "Level" in msg and "Required" in msg