"""
Tests for the Dynu record and domain models
"""

import pytest

from dynupdater.dynu.exceptions import MissingIdentityError
from dynupdater.dynu.types import (
    Addresses,
    ARecord,
    Domain,
    SoaRecord,
    TxtRecord,
    record_adapter,
    record_id,
    require_id,
)

DOMAIN_PAYLOAD = {
    "id": 10053136,
    "name": "example.dynu.net",
    "unicodeName": "example.dynu.net",
    "token": None,
    "state": "Complete",
    "group": "",
    "ipv4Address": "203.0.113.5",
    "ipv6Address": None,
    "ttl": 90,
    "ipv4": True,
    "ipv6": False,
    "ipv4WildcardAlias": True,
    "ipv6WildcardAlias": False,
    "createdOn": "2023-01-01T00:00:00",
    "updatedOn": "2024-01-01T00:00:00",
}

SOA_PAYLOAD = {
    "id": 1,
    "domainId": 10053136,
    "domainName": "example.dynu.net",
    "nodeName": "",
    "hostname": "example.dynu.net",
    "recordType": "SOA",
    "ttl": 300,
    "state": True,
    "content": "example.dynu.net. 300 IN SOA ns1.dynu.com. ...",
    "updatedOn": "2024-01-01T00:00:00",
    "masterName": "ns1.dynu.com",
    "responsibleName": "administrator.dynu.com",
    "refresh": 3600,
    "retry": 600,
    "expire": 604800,
    "negativeTTL": 300,
}


def test_txt_record_new_has_no_identity():
    record = TxtRecord.new("_acme-challenge", "token", 120)

    assert record.id is None
    assert record_id(record) is None
    assert record.node_name == "_acme-challenge"
    assert record.text_data == "token"
    assert record.ttl == 120
    assert record.state is True
    assert record.record_type == "TXT"


def test_txt_record_targeting_keeps_identity():
    record = TxtRecord.targeting(10926510, "k", "v2", 60)

    assert record_id(record) == 10926510
    assert require_id(record) == 10926510
    assert record.text_data == "v2"
    assert record.ttl == 60


def test_txt_record_accepts_empty_payload():
    record = TxtRecord.new("k", "", 120)
    assert record.text_data == ""


def test_require_id_rejects_records_not_created():
    with pytest.raises(MissingIdentityError):
        require_id(TxtRecord.new("k", "v", 120))


def test_require_id_rejects_domain_without_id():
    with pytest.raises(MissingIdentityError):
        require_id(Domain(name="example.dynu.net"))


def test_txt_record_wire_format():
    wire = TxtRecord.new("k", "v", 120).to_wire()

    assert wire["recordType"] == "TXT"
    assert wire["nodeName"] == "k"
    assert wire["textData"] == "v"
    assert wire["ttl"] == 120
    assert wire["state"] is True
    assert wire["id"] is None
    assert "node_name" not in wire


def test_parse_records_by_record_type():
    txt = record_adapter.validate_python(
        {"id": 5, "nodeName": "k", "recordType": "TXT", "ttl": 120, "textData": "v"}
    )
    a = record_adapter.validate_python(
        {"id": 6, "nodeName": "www", "recordType": "A", "ttl": 120, "group": "g"}
    )
    soa = record_adapter.validate_python(SOA_PAYLOAD)

    assert isinstance(txt, TxtRecord)
    assert txt.text_data == "v"
    assert isinstance(a, ARecord)
    assert a.group == "g"
    assert isinstance(soa, SoaRecord)
    assert soa.negative_ttl == 300
    assert soa.master_name == "ns1.dynu.com"
    assert record_id(soa) == 1


def test_soa_record_wire_uses_negative_ttl_alias():
    soa = record_adapter.validate_python(SOA_PAYLOAD)
    wire = soa.to_wire()

    assert wire["negativeTTL"] == 300
    assert wire["responsibleName"] == "administrator.dynu.com"


def test_parse_domain():
    domain = Domain.model_validate(DOMAIN_PAYLOAD)

    assert domain.id == 10053136
    assert domain.ipv4_address == "203.0.113.5"
    assert domain.ipv6_address is None
    assert domain.ipv4_wildcard_alias is True
    assert domain.addresses == Addresses(v4="203.0.113.5", v6=None)


def test_domain_wire_round_trip_keeps_camel_case():
    wire = Domain.model_validate(DOMAIN_PAYLOAD).to_wire()
    assert wire == DOMAIN_PAYLOAD


def test_addresses_default_to_absent():
    assert Addresses() == Addresses(v4=None, v6=None)
