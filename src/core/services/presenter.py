"""Operation log (result presenter).

One entry per user-triggered operation, success or failure. The log owns the
sequence counter and the "active" marker; rendering is delegated to a
`LogView` port so the same log feeds the terminal panel and the exporters.
"""

from __future__ import annotations

import itertools
import logging
from datetime import datetime
from typing import Any, Callable

from core.domain.models import LogEntry
from core.interfaces.ui import LogView

logger = logging.getLogger(__name__)

_NO_PAYLOAD: Any = object()


def _local_time(now: datetime) -> str:
    return now.strftime("%H:%M:%S")


class OperationLog:
    """Append-only, chronologically navigable log of panel operations."""

    def __init__(
        self,
        view: LogView,
        *,
        newest_first: bool = True,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._view = view
        self._newest_first = newest_first
        self._clock = clock
        self._counter = itertools.count()
        self._entries: list[LogEntry] = []
        self._active: str | None = None

    @property
    def newest_first(self) -> bool:
        return self._newest_first

    @property
    def entries(self) -> tuple[LogEntry, ...]:
        """Entries in insertion order."""

        return tuple(self._entries)

    @property
    def active_anchor(self) -> str | None:
        return self._active

    def __len__(self) -> int:
        return len(self._entries)

    def ordered(self) -> list[LogEntry]:
        """Entries in display order (see `newest_first`)."""

        if self._newest_first:
            return list(reversed(self._entries))
        return list(self._entries)

    def get(self, anchor: str) -> LogEntry | None:
        for entry in self._entries:
            if entry.anchor == anchor:
                return entry
        return None

    def append(self, header: str, detail_html: str = "", payload: Any = _NO_PAYLOAD) -> LogEntry:
        """Record an operation outcome and render it right away.

        Omitting `payload` leaves the entry without a payload block; an explicit
        `None` is kept and rendered as JSON `null`.
        """

        has_payload = payload is not _NO_PAYLOAD

        now = self._clock()
        entry = LogEntry(
            sequence=next(self._counter),
            header=f"{header} : {_local_time(now)}",
            detail_html=detail_html,
            payload=payload if has_payload else None,
            has_payload=has_payload,
            created_at=now,
        )
        self._entries.append(entry)
        logger.debug("log entry %s: %s", entry.anchor, entry.header)

        previous = self._active
        self._active = entry.anchor
        self._view.show_entry(entry, newest_first=self._newest_first)
        self._view.set_active(entry.anchor, previous)
        self._view.refresh()
        return entry
