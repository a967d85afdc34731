"""Cache of DNS records that expire after their TTL."""

from __future__ import annotations

import asyncio
import copy
from dataclasses import dataclass, field
from typing import Optional

from .abstractserver import Signal, Timer
from .dns import RecordType
from .record import Record

__all__ = ["Cache"]

_QUERY_POINTS = (0.5, 0.85, 0.9, 0.95)
"""Fractions of a record's lifetime at which a new query is suggested."""

_GOODBYE_DELAY = 1.0
"""Seconds a record announced with a TTL of 0 is kept before it expires."""

_EPSILON = 1e-3


@dataclass
class _Entry:
    record: Record
    expires: float
    query_times: list[float] = field(default_factory=list)


class Cache:
    """Store DNS records until their TTL runs out.

    ``should_query`` is emitted with a record at about 50%, 85%, 90% and
    95% of its lifetime; ``record_expired`` is emitted when it is purged.
    """

    def __init__(self, *, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop
        self._entries: list[_Entry] = []
        self._timer = Timer(self._on_timeout, single_shot=True, loop=loop)
        self.should_query = Signal()
        self.record_expired = Signal()

    def _now(self) -> float:
        loop = self._loop if self._loop is not None else asyncio.get_running_loop()
        return loop.time()

    def add_record(self, record: Record) -> None:
        """Add ``record``, replacing an equal one and resetting its expiry.

        A record with the cache-flush flag replaces every record of the same
        name and type. A TTL of 0 makes the record expire one second later.
        """
        now = self._now()
        if record.flush_cache:
            self._entries = [
                entry
                for entry in self._entries
                if not (entry.record.name == record.name and entry.record.type == record.type)
            ]
        else:
            self._entries = [entry for entry in self._entries if entry.record != record]

        stored = copy.deepcopy(record)
        if record.ttl == 0:
            entry = _Entry(stored, now + _GOODBYE_DELAY)
        else:
            entry = _Entry(
                stored,
                now + record.ttl,
                [now + record.ttl * point for point in _QUERY_POINTS],
            )
        self._entries.append(entry)
        self._reschedule(now)

    def lookup_record(self, name: Optional[bytes], type: int) -> Optional[Record]:
        """Return the first record matching ``name`` and ``type``, or None."""
        records = self.lookup_records(name, type)
        return records[0] if records else None

    def lookup_records(self, name: Optional[bytes], type: int) -> list[Record]:
        """Return copies of all records matching ``name`` and ``type``.

        An empty or None name matches any name; ANY matches any type.
        """
        return [
            copy.deepcopy(entry.record)
            for entry in self._entries
            if (not name or entry.record.name == name)
            and (type == RecordType.ANY or entry.record.type == type)
        ]

    def close(self) -> None:
        """Stop the expiry timer and drop every record."""
        self._timer.stop()
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def _on_timeout(self) -> None:
        now = self._now()
        deadline = now + _EPSILON
        expired: list[Record] = []
        to_query: list[Record] = []
        remaining: list[_Entry] = []
        for entry in self._entries:
            if entry.expires <= deadline:
                expired.append(entry.record)
                continue
            if entry.query_times and entry.query_times[0] <= deadline:
                entry.query_times = [t for t in entry.query_times if t > deadline]
                to_query.append(entry.record)
            remaining.append(entry)
        self._entries = remaining

        for record in to_query:
            self.should_query.emit(copy.deepcopy(record))
        for record in expired:
            self.record_expired.emit(record)
        self._reschedule(now)

    def _reschedule(self, now: float) -> None:
        times = [entry.expires for entry in self._entries]
        times.extend(entry.query_times[0] for entry in self._entries if entry.query_times)
        if not times:
            self._timer.stop()
            return
        self._timer.start(max(0.0, min(times) - now))