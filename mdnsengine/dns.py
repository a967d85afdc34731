"""DNS record type constants and helpers."""

from __future__ import annotations

import enum

__all__ = ["RecordType", "type_name"]


class RecordType(enum.IntEnum):
    """Numeric resource record types that the engine understands.

    A and AAAA carry host addresses, PTR and SRV point at other names,
    TXT carries key/value metadata and NSEC lists the types a name owns.
    ANY matches every type when querying or looking up the cache.
    """

    A = 1
    PTR = 12
    TXT = 16
    AAAA = 28
    SRV = 33
    NSEC = 47
    ANY = 255


def type_name(type: int) -> str:
    """Return a readable label for a numeric record type."""
    try:
        return RecordType(type).name
    except ValueError:
        return f"TYPE{int(type)}"