"""DNS message."""

from __future__ import annotations

import copy
import ipaddress
from dataclasses import dataclass, field
from typing import Optional

from .mdns import MDNS_IPV4_ADDRESS, MDNS_IPV6_ADDRESS, MDNS_PORT, is_ipv4
from .query import Query
from .record import IPAddress, Record

__all__ = ["Message"]


@dataclass
class Message:
    """A DNS message: a header plus zero or more queries and records.

    For received messages ``address`` and ``port`` name the sender; for
    outgoing messages they name the destination.
    """

    address: Optional[IPAddress] = None
    port: int = 0
    transaction_id: int = 0
    is_response: bool = False
    is_truncated: bool = False
    queries: list[Query] = field(default_factory=list)
    records: list[Record] = field(default_factory=list)

    def __post_init__(self) -> None:
        if isinstance(self.address, str):
            self.address = ipaddress.ip_address(self.address)

    def add_query(self, query: Query) -> None:
        """Append a copy of ``query`` to the message."""
        self.queries.append(copy.deepcopy(query))

    def add_record(self, record: Record) -> None:
        """Append a copy of ``record`` to the message."""
        self.records.append(copy.deepcopy(record))

    def reply(self, other: Message) -> None:
        """Initialise this message as a response to ``other``.

        Replies to mDNS-port messages go to the multicast group of the
        sender's protocol; others go back to the sender directly.
        """
        if other.port == MDNS_PORT:
            self.address = MDNS_IPV4_ADDRESS if is_ipv4(other.address) else MDNS_IPV6_ADDRESS
        else:
            self.address = other.address
        self.port = other.port
        self.transaction_id = other.transaction_id
        self.is_response = True