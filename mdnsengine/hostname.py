"""Claim a unique hostname on the local network and answer for it."""

from __future__ import annotations

import asyncio
import ipaddress
import socket
from typing import Callable, Iterable, Optional, Sequence, Union

import psutil

from .abstractserver import AbstractServer, Signal, Timer
from .dns import RecordType
from .message import Message
from .query import Query
from .record import IPAddress, Record

__all__ = ["Hostname"]

IPInterface = Union[ipaddress.IPv4Interface, ipaddress.IPv6Interface]
InterfaceSource = Callable[[], Iterable[Sequence[IPInterface]]]


def _system_interfaces() -> list[list[IPInterface]]:
    """Return the addresses of each local network interface."""
    result: list[list[IPInterface]] = []
    for addresses in psutil.net_if_addrs().values():
        entries: list[IPInterface] = []
        for entry in addresses:
            if entry.family not in (socket.AF_INET, socket.AF_INET6):
                continue
            try:
                address = ipaddress.ip_address(entry.address.split("%", 1)[0])
                prefix = address.max_prefixlen
                if entry.netmask:
                    netmask = ipaddress.ip_address(entry.netmask.split("/", 1)[0])
                    prefix = bin(int(netmask)).count("1")
                entries.append(ipaddress.ip_interface(f"{address}/{prefix}"))
            except ValueError:
                continue
        result.append(entries)
    return result


class Hostname:
    """Assert a unique "<host>.local." name and answer A and AAAA queries.

    ``hostname_changed`` is emitted with the new name whenever registration
    completes with a name different from the previous one.
    """

    def __init__(
        self,
        server: AbstractServer,
        *,
        local_hostname: Optional[str] = None,
        interfaces: Optional[InterfaceSource] = None,
        registration_interval: float = 2.0,
        rebroadcast_interval: float = 30 * 60.0,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self._server = server
        self._local_hostname = local_hostname
        self._interfaces = interfaces if interfaces is not None else _system_interfaces
        self._hostname = b""
        self._hostname_prev = b""
        self._registered = False
        self._suffix = 1
        self._connected = True
        self.hostname_changed = Signal()

        self._registration_timer = Timer(
            self._on_registration_timeout, registration_interval, single_shot=True, loop=loop
        )
        self._rebroadcast_timer = Timer(
            self._on_rebroadcast_timeout, rebroadcast_interval, single_shot=True, loop=loop
        )
        server.message_received.connect(self._on_message_received)

        self._on_rebroadcast_timeout()

    @property
    def hostname(self) -> bytes:
        """The current hostname; meaningful only once registered."""
        return self._hostname

    def is_registered(self) -> bool:
        """Return True once probing found the hostname unused."""
        return self._registered

    def close(self) -> None:
        """Stop the timers and stop listening to the server."""
        self._registration_timer.stop()
        self._rebroadcast_timer.stop()
        if self._connected:
            self._server.message_received.disconnect(self._on_message_received)
            self._connected = False

    def _assert_hostname(self) -> None:
        local = (self._local_hostname or socket.gethostname()).encode("utf-8")
        local = local.replace(b".", b"-")
        if self._suffix != 1:
            local += b"-" + str(self._suffix).encode()
        self._hostname = local + b".local."

        message = Message()
        message.add_query(Query(name=self._hostname, type=RecordType.A))
        message.add_query(Query(name=self._hostname, type=RecordType.AAAA))
        self._server.send_message_to_all(message)

        self._registration_timer.start()

    def _generate_record(self, src_address: Optional[IPAddress], type: int) -> Optional[Record]:
        if src_address is None:
            return None
        for entries in self._interfaces():
            entries = list(entries)
            for entry in entries:
                if entry.version == src_address.version and src_address in entry.network:
                    for candidate in entries:
                        if (candidate.version == 4 and type == RecordType.A) or (
                            candidate.version == 6 and type == RecordType.AAAA
                        ):
                            return Record(name=self._hostname, type=type, address=candidate.ip)
        return None

    def _on_message_received(self, message: Message) -> None:
        if message.is_response:
            if self._registered:
                return
            for record in message.records:
                if record.type in (RecordType.A, RecordType.AAAA) and record.name == self._hostname:
                    self._suffix += 1
                    self._assert_hostname()
        else:
            if not self._registered:
                return
            reply = Message()
            reply.reply(message)
            for query in message.queries:
                if query.type in (RecordType.A, RecordType.AAAA) and query.name == self._hostname:
                    record = self._generate_record(message.address, query.type)
                    if record is not None:
                        reply.add_record(record)
            if reply.records:
                self._server.send_message_to_all(reply)

    def _on_registration_timeout(self) -> None:
        self._registered = True
        if self._hostname != self._hostname_prev:
            self.hostname_changed.emit(self._hostname)
        self._rebroadcast_timer.start()

    def _on_rebroadcast_timeout(self) -> None:
        self._hostname_prev = self._hostname
        self._registered = False
        self._suffix = 1
        self._assert_hostname()