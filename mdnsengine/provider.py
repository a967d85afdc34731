"""Provide a single service on the local network."""

from __future__ import annotations

import asyncio
import copy
from typing import Optional

from .abstractserver import AbstractServer
from .dns import RecordType
from .hostname import Hostname
from .mdns import MDNS_BROWSE_TYPE
from .message import Message
from .prober import Prober
from .record import Record
from .service import Service

__all__ = ["Provider"]


class Provider:
    """Answer DNS queries for one service.

    Nothing is answered until the hostname is registered and update() has
    been called. The service name is probed for uniqueness before its
    records are published.
    """

    def __init__(
        self,
        server: AbstractServer,
        hostname: Hostname,
        *,
        probe_timeout: float = 2.0,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self._server = server
        self._hostname = hostname
        self._probe_timeout = probe_timeout
        self._loop = loop
        self._prober: Optional[Prober] = None
        self._initialized = False
        self._confirmed = False
        self._connected = True

        self._browse_ptr_proposed = Record(name=MDNS_BROWSE_TYPE, type=RecordType.PTR)
        self._ptr_proposed = Record(type=RecordType.PTR)
        self._srv_proposed = Record(type=RecordType.SRV)
        self._txt_proposed = Record(type=RecordType.TXT)

        self._browse_ptr_record = Record()
        self._ptr_record = Record()
        self._srv_record = Record()
        self._txt_record = Record()

        server.message_received.connect(self._on_message_received)
        hostname.hostname_changed.connect(self._on_hostname_changed)

    @property
    def confirmed(self) -> bool:
        """True once the service name has been confirmed and published."""
        return self._confirmed

    def update(self, service: Service) -> None:
        """Update the provided service; a changed name is probed first."""
        self._initialized = True

        service_name = service.name.replace(b".", b"-")
        fq_name = service_name + b"." + service.type

        self._browse_ptr_proposed.target = service.type
        self._ptr_proposed.name = service.type
        self._ptr_proposed.target = fq_name
        self._srv_proposed.name = fq_name
        self._srv_proposed.port = service.port
        self._srv_proposed.target = self._hostname.hostname
        self._txt_proposed.name = fq_name
        self._txt_proposed.attributes = dict(service.attributes)

        if self._hostname.is_registered():
            if not self._confirmed or fq_name != self._srv_record.name:
                self._confirm()
            else:
                self._publish()

    def close(self) -> None:
        """Withdraw published records and stop listening."""
        if self._confirmed:
            self._farewell()
        self._drop_prober()
        if self._connected:
            self._server.message_received.disconnect(self._on_message_received)
            self._hostname.hostname_changed.disconnect(self._on_hostname_changed)
            self._connected = False

    def _drop_prober(self) -> None:
        if self._prober is not None:
            self._prober.close()
            self._prober = None

    def _announce(self) -> None:
        message = Message(is_response=True)
        message.add_record(self._ptr_record)
        message.add_record(self._srv_record)
        message.add_record(self._txt_record)
        self._server.send_message_to_all(message)

    def _confirm(self) -> None:
        self._drop_prober()
        self._prober = Prober(
            self._server, self._srv_proposed, timeout=self._probe_timeout, loop=self._loop
        )
        self._prober.name_confirmed.connect(self._on_name_confirmed)

    def _on_name_confirmed(self, name: bytes) -> None:
        if self._confirmed:
            self._farewell()
        else:
            self._confirmed = True

        self._ptr_proposed.target = name
        self._srv_proposed.name = name
        self._txt_proposed.name = name

        self._publish()
        self._drop_prober()

    def _farewell(self) -> None:
        self._ptr_record.ttl = 0
        self._srv_record.ttl = 0
        self._txt_record.ttl = 0
        self._announce()

    def _publish(self) -> None:
        self._browse_ptr_record = copy.deepcopy(self._browse_ptr_proposed)
        self._ptr_record = copy.deepcopy(self._ptr_proposed)
        self._srv_record = copy.deepcopy(self._srv_proposed)
        self._txt_record = copy.deepcopy(self._txt_proposed)
        self._announce()

    def _on_message_received(self, message: Message) -> None:
        if not self._confirmed or message.is_response:
            return

        send_browse_ptr = send_ptr = send_srv = send_txt = False

        for query in message.queries:
            if query.type == RecordType.PTR and query.name == MDNS_BROWSE_TYPE:
                send_browse_ptr = True
            elif query.type == RecordType.PTR and query.name == self._ptr_record.name:
                send_ptr = True
            elif query.type == RecordType.SRV and query.name == self._srv_record.name:
                send_srv = True
            elif query.type == RecordType.TXT and query.name == self._txt_record.name:
                send_txt = True

        for record in message.records:
            if record == self._ptr_record:
                send_ptr = False
            elif record == self._srv_record:
                send_srv = False
            elif record == self._txt_record:
                send_txt = False

        if send_ptr:
            send_srv = send_txt = True

        if not (send_browse_ptr or send_ptr or send_srv or send_txt):
            return

        reply = Message()
        reply.reply(message)
        if send_browse_ptr:
            reply.add_record(self._browse_ptr_record)
        if send_ptr:
            reply.add_record(self._ptr_record)
        if send_srv:
            reply.add_record(self._srv_record)
        if send_txt:
            reply.add_record(self._txt_record)
        self._server.send_message_to_all(reply)

    def _on_hostname_changed(self, new_hostname: bytes) -> None:
        self._srv_proposed.target = new_hostname
        if self._initialized:
            self._confirm()