import asyncio
import ipaddress

import pytest
import pytest_asyncio

from mdnsengine.abstractserver import AbstractServer
from mdnsengine.dns import RecordType
from mdnsengine.hostname import Hostname
from mdnsengine.mdns import MDNS_IPV4_ADDRESS, MDNS_PORT
from mdnsengine.message import Message
from mdnsengine.query import Query
from mdnsengine.record import Record

pytestmark = pytest.mark.asyncio

INTERVAL = 0.03
HOST = b"my-host.local."
IPV4 = ipaddress.ip_interface("192.168.1.10/24")
IPV6 = ipaddress.ip_interface("fe80::1/64")


class LoopbackServer(AbstractServer):
    """Collects every outgoing message."""

    def __init__(self):
        super().__init__()
        self.sent = []

    def send_message(self, message):
        self.sent.append(message)

    def send_message_to_all(self, message):
        self.send_message(message)


def build(server, **overrides):
    options = {
        "local_hostname": "my.host",
        "interfaces": lambda: [[IPV4, IPV6]],
        "registration_interval": INTERVAL,
    }
    options.update(overrides)
    return Hostname(server, **options)


def ask(server, address="192.168.1.20", name=HOST, kind=RecordType.A):
    server.message_received.emit(
        Message(address=address, port=MDNS_PORT, queries=[Query(name, kind)])
    )


def claim(server, name=HOST):
    server.message_received.emit(
        Message(is_response=True, records=[Record(name=name, type=RecordType.A)])
    )


async def settle(factor=4):
    await asyncio.sleep(INTERVAL * factor)


@pytest.fixture
def server():
    return LoopbackServer()


@pytest_asyncio.fixture
async def hostname(server):
    instance = build(server)
    yield instance
    instance.close()


@pytest_asyncio.fixture
async def registered(server, hostname):
    await settle()
    server.sent.clear()
    return hostname


@pytest.fixture
def changes(hostname):
    seen = []
    hostname.hostname_changed.connect(seen.append)
    return seen


async def test_initial_probe_queries_a_and_aaaa(server, hostname):
    assert hostname.hostname == HOST
    assert hostname.is_registered() is False
    assert [(q.name, q.type) for q in server.sent[0].queries] == [
        (HOST, RecordType.A),
        (HOST, RecordType.AAAA),
    ]


async def test_registration_emits_change(hostname, changes):
    await settle()
    assert hostname.is_registered() is True
    assert changes == [HOST]


async def test_conflict_picks_suffixed_name(server, hostname, changes):
    claim(server)
    new_name = b"my-host-2.local."
    assert server.sent[-1].queries[0].name == new_name
    await settle()
    assert hostname.hostname == new_name
    assert changes == [new_name]


@pytest.mark.parametrize(
    "kind, expected", [(RecordType.A, IPV4.ip), (RecordType.AAAA, IPV6.ip)]
)
async def test_answers_query_from_matching_subnet(server, registered, kind, expected):
    ask(server, kind=kind)
    (reply,) = server.sent
    assert reply.is_response is True
    assert reply.address == MDNS_IPV4_ADDRESS
    assert [(r.name, r.type, r.address) for r in reply.records] == [(HOST, kind, expected)]


async def test_no_reply_for_unknown_subnet_or_name(server, registered):
    ask(server, address="10.0.0.5")
    ask(server, name=b"other.local.")
    assert server.sent == []
    assert registered.is_registered() is True
    assert registered.hostname == HOST


async def test_queries_ignored_before_registration(server, hostname):
    ask(server)
    assert [m.is_response for m in server.sent] == [False]
    assert hostname.is_registered() is False
    assert hostname.hostname == HOST


async def test_responses_ignored_after_registration(server, registered):
    claim(server)
    assert server.sent == []
    assert registered.hostname == HOST


async def test_rebroadcast_keeps_name_without_new_signal(server):
    instance = build(server, rebroadcast_interval=INTERVAL)
    seen = []
    instance.hostname_changed.connect(seen.append)
    await settle(8)
    instance.close()
    assert seen == [HOST]
    assert len(server.sent) >= 2
    assert all(m.queries[0].name == HOST for m in server.sent)


async def test_close_stops_listening(server):
    instance = build(server)
    instance.close()
    await settle()
    assert instance.is_registered() is False
    assert len(server.message_received) == 0