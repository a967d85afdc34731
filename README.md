# mdnsengine

A small multicast DNS (mDNS / DNS-SD) engine: the record, query and message
types, plus the logic that claims a hostname, probes a name for uniqueness,
publishes a service and resolves a host's addresses.

## Installation

```
pip install mdnsengine
```

`psutil` is installed with it; `Hostname` uses it to list the addresses of
the local network interfaces.

## What it provides

- `mdnsengine.dns`: the `RecordType` enumeration (`A`, `PTR`, `TXT`, `AAAA`,
  `SRV`, `NSEC`, `ANY`) and `type_name()`, which gives the enumeration name
  of a type or `TYPE<n>` for unknown numbers.
- `mdnsengine.query.Query`: a dataclass with `name`, `type` and
  `unicast_response`.
- `mdnsengine.record.Record`: a dataclass for a DNS record (`name`, `type`,
  `flush_cache`, `ttl`, `address`, `target`, `next_domain_name`, `priority`,
  `weight`, `port`, `attributes`, `bitmap`) with `add_attribute()`. Equality
  ignores `ttl` and `flush_cache`. A string `address` is parsed into an
  `ipaddress` object.
- `mdnsengine.record.Bitmap`: block 0 of an NSEC type bitmap, with `data`,
  `length` and `set_data(length, data)`, which raises `ValueError` for a
  length outside 0 to 255 or longer than the data.
- `mdnsengine.message.Message`: a DNS message with `address`, `port`,
  `transaction_id`, `is_response`, `is_truncated`, `queries` and `records`.
  `add_query()` and `add_record()` append copies. `reply(other)` sets the
  message up as a response: to a message from the mDNS port it is addressed
  to the mDNS multicast group of the sender's IP version, otherwise back to
  the sender.
- `mdnsengine.mdns`: `MDNS_PORT` (5353), `MDNS_IPV4_ADDRESS` (224.0.0.251),
  `MDNS_IPV6_ADDRESS` (ff02::fb), `MDNS_BROWSE_TYPE`
  (`_services._dns-sd._udp.local.`) and `is_ipv4()`.
- `mdnsengine.service.Service`: a dataclass with `type`, `name`, `hostname`,
  `port` and `attributes`, and `add_attribute()`. Equality does not compare
  the hostname.
- `mdnsengine.abstractserver`:
  - `Signal`: `connect()`, `disconnect()` (raises `ValueError` for a slot
    that is not connected) and `emit(*args)`.
  - `Timer`: a restartable timer on the asyncio event loop, with `start()`,
    `stop()`, `is_active()`, an `interval` in seconds and a `single_shot`
    flag.
  - `AbstractServer`: the abstract base with `send_message()` and
    `send_message_to_all()`, and the `message_received` and `error` signals.
- `mdnsengine.cache.Cache`: keeps records until their TTL runs out.
  `add_record()`, `lookup_record(name, type)` (first match or `None`),
  `lookup_records(name, type)` (an empty or `None` name matches every name,
  `RecordType.ANY` every type) and `close()`. The `should_query` signal fires
  at about 50%, 85%, 90% and 95% of a record's lifetime and `record_expired`
  when a record is dropped. A record with `flush_cache` set replaces all
  records of its name and type; a TTL of 0 makes a record expire one second
  later.
- `mdnsengine.prober.Prober`: probes a record's name, appending `-2`, `-3`,
  ... after the first label whenever a response carries a record of the same
  name and type. `name_confirmed` fires with the name once no conflict has
  been seen for `timeout` seconds (2 by default). Raises `ValueError` for a
  name without a `.`.
- `mdnsengine.hostname.Hostname`: claims `<host>.local.` (dots in the local
  host name become `-`, with a numeric suffix on conflict), answers A and
  AAAA queries with an address from the interface on the querier's subnet,
  and re-asserts the name every 30 minutes. `hostname`, `is_registered()`,
  `close()` and the `hostname_changed` signal. The local host name, the
  interface list and both intervals can be passed in.
- `mdnsengine.provider.Provider`: publishes a service's PTR, SRV and TXT
  records once its name is confirmed, answers queries for them and for the
  browse type, and sends the records with a TTL of 0 when the name changes
  or on `close()`. `update(service)` and `confirmed`.
- `mdnsengine.resolver.Resolver`: sends A and AAAA queries for a name and
  emits `resolved` once for each new address in a response; addresses
  already in the cache are emitted just after construction. `name` and
  `close()`.

## Example

Timers run on the asyncio event loop, so create these objects inside a
running loop (or pass `loop=`). Supply a server by deriving from
`AbstractServer`:

```python
import asyncio

from mdnsengine.abstractserver import AbstractServer
from mdnsengine.hostname import Hostname
from mdnsengine.provider import Provider
from mdnsengine.resolver import Resolver
from mdnsengine.service import Service


class RecordingServer(AbstractServer):
    def __init__(self):
        super().__init__()
        self.sent = []

    def send_message(self, message):
        self.sent.append(message)

    def send_message_to_all(self, message):
        self.sent.append(message)


async def main():
    server = RecordingServer()
    hostname = Hostname(server)
    hostname.hostname_changed.connect(lambda name: print("Hostname:", name))

    provider = Provider(server, hostname)
    provider.update(Service(type=b"_http._tcp.local.", name=b"My Service", port=1234))

    resolver = Resolver(server, b"myhost.local.")
    resolver.resolved.connect(lambda address: print("Address:", address))

    await asyncio.sleep(5)
    for obj in (resolver, provider, hostname):
        obj.close()


asyncio.run(main())
```

Incoming messages are handed to the engine by emitting
`server.message_received` with a `Message`.

Call `close()` on a `Hostname`, `Prober`, `Provider`, `Resolver` or `Cache`
when it is no longer needed; this stops its timers and disconnects it from
the server.

## What it does not do

- There is no concrete server: nothing here opens sockets, joins multicast
  groups or sends datagrams. `AbstractServer` must be implemented by the
  user.
- Messages are not encoded to or decoded from the DNS wire format.
- There is no browser for discovering services of a given type.

## Running the tests

```
pip install -e ".[test]"
pytest
```