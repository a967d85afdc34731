"""DNS records and NSEC bitmaps."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field
from typing import Optional, Union

from .dns import type_name

__all__ = ["Bitmap", "Record", "IPAddress"]

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

_MAX_BITMAP_LENGTH = 0xFF


@dataclass
class Bitmap:
    """Block 0 of an NSEC type bitmap."""

    data: bytes = b""

    @property
    def length(self) -> int:
        """Number of valid bytes in the bitmap."""
        return len(self.data)

    def set_data(self, length: int, data: bytes) -> None:
        """Copy the first ``length`` bytes of ``data`` into the bitmap."""
        if not 0 <= length <= _MAX_BITMAP_LENGTH:
            raise ValueError(f"bitmap length out of range: {length}")
        if len(data) < length:
            raise ValueError(
                f"bitmap data holds {len(data)} bytes, {length} required"
            )
        self.data = bytes(data[:length])


@dataclass
class Record:
    """A DNS record; not every type uses every field.

    Equality ignores the TTL and the cache-flush flag.
    """

    name: bytes = b""
    type: int = 0
    flush_cache: bool = field(default=False, compare=False)
    ttl: int = field(default=3600, compare=False)
    address: Optional[IPAddress] = None
    target: bytes = b""
    next_domain_name: bytes = b""
    priority: int = 0
    weight: int = 0
    port: int = 0
    attributes: dict[bytes, Optional[bytes]] = field(default_factory=dict)
    bitmap: Bitmap = field(default_factory=Bitmap)

    def __post_init__(self) -> None:
        if isinstance(self.address, str):
            self.address = ipaddress.ip_address(self.address)

    def add_attribute(self, key: bytes, value: Optional[bytes]) -> None:
        """Add or replace a TXT attribute."""
        self.attributes[key] = value

    def __str__(self) -> str:
        return f"Record({type_name(self.type)} {self.name.decode('utf-8', 'replace')})"