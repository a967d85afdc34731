"""Well-known mDNS constants."""

from __future__ import annotations

import ipaddress
from typing import Optional, Union

__all__ = [
    "MDNS_PORT",
    "MDNS_IPV4_ADDRESS",
    "MDNS_IPV6_ADDRESS",
    "MDNS_BROWSE_TYPE",
    "is_ipv4",
]

MDNS_PORT = 5353
"""Standard port for mDNS."""

MDNS_IPV4_ADDRESS = ipaddress.IPv4Address("224.0.0.251")
"""Standard IPv4 multicast address for mDNS."""

MDNS_IPV6_ADDRESS = ipaddress.IPv6Address("ff02::fb")
"""Standard IPv6 multicast address for mDNS."""

MDNS_BROWSE_TYPE = b"_services._dns-sd._udp.local."
"""Service type used for browsing service types."""


def is_ipv4(
    address: Optional[Union[str, ipaddress.IPv4Address, ipaddress.IPv6Address]],
) -> bool:
    """Return True if ``address`` is an IPv4 address.

    Strings are parsed; ``None`` and unparsable strings are not IPv4.
    """
    if address is None:
        return False
    if isinstance(address, str):
        try:
            address = ipaddress.ip_address(address)
        except ValueError:
            return False
    return isinstance(address, ipaddress.IPv4Address)