"""DNS query."""

from dataclasses import dataclass

from .dns import type_name

__all__ = ["Query"]


@dataclass
class Query:
    """A request for records of one name and type."""

    name: bytes = b""
    type: int = 0
    unicast_response: bool = False

    def __str__(self) -> str:
        label = self.name.decode("utf-8", "replace")
        return "Query({} {})".format(type_name(self.type), label)