"""Description of a service on the local network."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

__all__ = ["Service"]


@dataclass
class Service:
    """A service made available on the local network.

    Attributes with a value of ``None`` are boolean attributes. Equality
    compares type, name, port and attributes, not the hostname.
    """

    type: bytes = b""
    name: bytes = b""
    hostname: bytes = field(default=b"", compare=False)
    port: int = 0
    attributes: dict[bytes, Optional[bytes]] = field(default_factory=dict)

    def add_attribute(self, key: bytes, value: Optional[bytes]) -> None:
        """Add or replace an attribute."""
        self.attributes[key] = value

    def __str__(self) -> str:
        def text(value: bytes) -> str:
            return value.decode("utf-8", "replace")

        attributes = {
            text(k): None if v is None else text(v) for k, v in self.attributes.items()
        }
        return (
            f"Service(name: {text(self.name)}, type: {text(self.type)}, "
            f"hostname: {text(self.hostname)}, port: {self.port}, "
            f"attributes: {attributes})"
        )