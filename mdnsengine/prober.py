"""Probe the network to confirm that a record's name is unique."""

import asyncio
import copy
from typing import Optional

from .abstractserver import AbstractServer, Signal, Timer
from .dns import RecordType
from .message import Message
from .query import Query
from .record import Record

__all__ = ["Prober"]


class Prober:
    """Find a unique name for a record, adding "-2", "-3", ... on conflict.

    ``name_confirmed`` is emitted with the name once no conflicting record
    has been seen for ``timeout`` seconds after the latest probe.
    """

    def __init__(
        self,
        server: AbstractServer,
        record: Record,
        *,
        timeout: float = 2.0,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        base, dot, rest = record.name.partition(b".")
        if not dot:
            raise ValueError(f"record name has no '.': {record.name!r}")
        self._base = base
        self._domain = dot + rest
        self._server: Optional[AbstractServer] = server
        self._proposed = copy.deepcopy(record)
        self._suffix = 1
        self._confirmed = False
        self.name_confirmed = Signal()
        self._timer = Timer(self._on_timeout, timeout, single_shot=True, loop=loop)

        server.message_received.connect(self._on_message_received)
        self._probe()

    @property
    def confirmed(self) -> bool:
        """True once the proposed name has been confirmed."""
        return self._confirmed

    def close(self) -> None:
        """Stop probing and stop listening to the server."""
        self._timer.stop()
        server, self._server = self._server, None
        if server is not None:
            server.message_received.disconnect(self._on_message_received)

    def _candidate(self) -> bytes:
        if self._suffix == 1:
            return self._base + self._domain
        return b"%s-%d%s" % (self._base, self._suffix, self._domain)

    def _probe(self) -> None:
        self._proposed.name = self._candidate()
        probe = Message()
        probe.add_query(Query(name=self._proposed.name, type=RecordType.ANY))
        probe.add_record(self._proposed)
        self._server.send_message_to_all(probe)
        self._timer.start()

    def _conflicts(self, record: Record) -> bool:
        return (record.name, record.type) == (self._proposed.name, self._proposed.type)

    def _on_message_received(self, message: Message) -> None:
        if self._confirmed or not message.is_response:
            return
        for record in message.records:
            if self._conflicts(record):
                self._suffix += 1
                self._probe()

    def _on_timeout(self) -> None:
        self._confirmed = True
        self.name_confirmed.emit(self._proposed.name)