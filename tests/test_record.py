import ipaddress

import pytest

from mdnsengine.dns import RecordType
from mdnsengine.record import Bitmap, Record


def test_record_defaults():
    record = Record()
    assert record.name == b""
    assert record.type == 0
    assert record.flush_cache is False
    assert record.ttl == 3600
    assert record.address is None
    assert record.priority == 0
    assert record.weight == 0
    assert record.port == 0
    assert record.attributes == {}
    assert record.bitmap.length == 0


def test_address_string_is_converted():
    record = Record(b"host.local.", RecordType.A, address="127.0.0.1")
    assert record.address == ipaddress.IPv4Address("127.0.0.1")


def test_invalid_address_string_raises():
    with pytest.raises(ValueError):
        Record(address="not an address")


def test_equality_ignores_ttl_and_flush_cache():
    first = Record(b"svc._http._tcp.local.", RecordType.SRV, port=1234, ttl=0)
    second = Record(
        b"svc._http._tcp.local.", RecordType.SRV, port=1234, ttl=120, flush_cache=True
    )
    assert first == second


@pytest.mark.parametrize(
    "changes",
    [
        {"name": b"other.local."},
        {"type": RecordType.TXT},
        {"target": b"host.local."},
        {"next_domain_name": b"next.local."},
        {"priority": 5},
        {"weight": 7},
        {"port": 80},
        {"attributes": {b"a": b"value1"}},
        {"bitmap": Bitmap(b"\x40")},
        {"address": ipaddress.ip_address("::1")},
    ],
)
def test_equality_compares_content_fields(changes):
    base = Record(b"svc.local.", RecordType.SRV)
    assert base != Record(b"svc.local.", RecordType.SRV).__class__(
        **{**{"name": b"svc.local.", "type": RecordType.SRV}, **changes}
    )


def test_add_attribute_inserts_and_replaces():
    record = Record(b"My Service._http._tcp.local.", RecordType.TXT)
    record.add_attribute(b"a", b"value1")
    record.add_attribute(b"b", b"value2")
    record.add_attribute(b"a", b"value3")
    assert record.attributes == {b"a": b"value3", b"b": b"value2"}


def test_add_attribute_allows_null_value():
    record = Record()
    record.add_attribute(b"flag", None)
    assert b"flag" in record.attributes
    assert record.attributes[b"flag"] is None


def test_records_do_not_share_attributes():
    first = Record()
    second = Record()
    first.add_attribute(b"k", b"v")
    assert second.attributes == {}


def test_str_shows_type_and_name():
    record = Record(b"host.local.", RecordType.AAAA)
    assert str(record) == "Record(AAAA host.local.)"


def test_bitmap_set_data_copies_prefix():
    bitmap = Bitmap()
    source = bytearray(b"\x40\x00\x00\x08\xff")
    bitmap.set_data(4, source)
    source[0] = 0
    assert bitmap.data == b"\x40\x00\x00\x08"
    assert bitmap.length == 4


def test_bitmap_equality():
    first = Bitmap()
    first.set_data(2, b"\x01\x02")
    second = Bitmap(b"\x01\x02")
    assert first == second
    assert first != Bitmap(b"\x01")


def test_bitmap_set_data_rejects_short_data():
    with pytest.raises(ValueError):
        Bitmap().set_data(3, b"\x01")


@pytest.mark.parametrize("length", [-1, 256])
def test_bitmap_set_data_rejects_bad_length(length):
    with pytest.raises(ValueError):
        Bitmap().set_data(length, bytes(300))