import pytest

from mdnsengine.dns import RecordType, type_name


@pytest.mark.parametrize(
    "member, value",
    [
        (RecordType.A, 1),
        (RecordType.AAAA, 28),
        (RecordType.ANY, 255),
        (RecordType.NSEC, 47),
        (RecordType.PTR, 12),
        (RecordType.SRV, 33),
        (RecordType.TXT, 16),
    ],
)
def test_record_type_values(member, value):
    assert int(member) == value
    assert RecordType(value) is member


@pytest.mark.parametrize("member", list(RecordType))
def test_type_name_of_known_types(member):
    assert type_name(member) == member.name
    assert type_name(int(member)) == member.name


def test_type_name_of_specific_types():
    assert type_name(1) == "A"
    assert type_name(28) == "AAAA"
    assert type_name(33) == "SRV"


def test_type_name_of_unknown_type_mentions_number():
    name = type_name(99)
    assert "99" in name
    assert name not in {member.name for member in RecordType}