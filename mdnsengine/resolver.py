"""Resolve a hostname to its addresses."""

from __future__ import annotations

import asyncio
from typing import Optional

from .abstractserver import AbstractServer, Signal, Timer
from .cache import Cache
from .dns import RecordType
from .message import Message
from .query import Query
from .record import IPAddress, Record

__all__ = ["Resolver"]


class Resolver:
    """Look up the A and AAAA records of a name.

    ``resolved`` is emitted once per address found; addresses already in the
    cache are emitted shortly after construction.
    """

    def __init__(
        self,
        server: AbstractServer,
        name: bytes,
        cache: Optional[Cache] = None,
        *,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self._server = server
        self._name = name
        self._owns_cache = cache is None
        self._cache = cache if cache is not None else Cache(loop=loop)
        self._addresses: set[IPAddress] = set()
        self._connected = True
        self.resolved = Signal()

        server.message_received.connect(self._on_message_received)
        self._timer = Timer(self._on_timeout, 0.0, single_shot=True, loop=loop)

        self._query()
        self._timer.start()

    @property
    def name(self) -> bytes:
        """The name being resolved."""
        return self._name

    def close(self) -> None:
        """Stop listening to the server and release an owned cache."""
        self._timer.stop()
        if self._connected:
            self._server.message_received.disconnect(self._on_message_received)
            self._connected = False
        if self._owns_cache:
            self._cache.close()

    def _existing(self) -> list[Record]:
        return self._cache.lookup_records(self._name, RecordType.A) + self._cache.lookup_records(
            self._name, RecordType.AAAA
        )

    def _query(self) -> None:
        message = Message()
        message.add_query(Query(name=self._name, type=RecordType.A))
        message.add_query(Query(name=self._name, type=RecordType.AAAA))
        for record in self._existing():
            message.add_record(record)
        self._server.send_message_to_all(message)

    def _on_message_received(self, message: Message) -> None:
        if not message.is_response:
            return
        for record in message.records:
            if record.name == self._name and record.type in (RecordType.A, RecordType.AAAA):
                self._cache.add_record(record)
                if record.address not in self._addresses:
                    self.resolved.emit(record.address)
                    self._addresses.add(record.address)

    def _on_timeout(self) -> None:
        for record in self._existing():
            self.resolved.emit(record.address)