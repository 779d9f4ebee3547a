"""
Reconciliation decisions for Dynu domains and TXT records.

Everything here is pure: callers gather the current state, ask these
functions what to do, and perform the returned actions themselves.
"""

from typing import NamedTuple, Optional, Sequence

from ..logger import logger
from .exceptions import RecordNotFoundError
from .types import Addresses, Domain, Record, RecordIdT, TxtRecord, require_id


class CreateRecord(NamedTuple):
    record: TxtRecord


class UpdateRecord(NamedTuple):
    record: TxtRecord


class DeleteRecord(NamedTuple):
    record_id: RecordIdT


RecordAction = CreateRecord | UpdateRecord | DeleteRecord
RecordActionListT = list[RecordAction]


def addresses_differ(detected: Addresses, published: Addresses) -> bool:
    """
    Exact comparison of both families; a missing address only equals a
    missing address.
    """
    return detected.v4 != published.v4 or detected.v6 != published.v6


def apply_addresses(domain: Domain, detected: Addresses) -> Domain:
    """
    Return a copy of domain publishing the detected addresses.

    A family without a detected address is disabled and its address cleared.
    """
    return domain.model_copy(
        update={
            "ipv4": detected.v4 is not None,
            "ipv6": detected.v6 is not None,
            "ipv4_address": detected.v4,
            "ipv6_address": detected.v6,
        }
    )


def find_domain(domains: Sequence[Domain], domain_name: str) -> Optional[Domain]:
    for domain in domains:
        if domain.name == domain_name:
            return domain
    return None


def find_text_record(records: Sequence[Record], node_name: str) -> Optional[TxtRecord]:
    """
    First TXT record whose node name matches exactly.

    Node names are expected to be unique per domain, but Dynu does not enforce
    it; when several records share the name the first one listed wins.
    """
    matches = [
        record
        for record in records
        if isinstance(record, TxtRecord) and record.node_name == node_name
    ]
    if not matches:
        return None
    if len(matches) > 1:
        logger.warning(
            f"{len(matches)} TXT records share node_name={node_name}, "
            f"using the first one (id={matches[0].id})"
        )
    return matches[0]


def plan_text_upsert(
    records: Sequence[Record], node_name: str, text_data: str, ttl: int
) -> RecordActionListT:
    """
    Decide how to make node_name hold text_data.

    Creates the record when it is missing, otherwise replaces the existing
    record's controlled fields while keeping its id.
    """
    existing = find_text_record(records, node_name)
    if existing is None:
        return [CreateRecord(TxtRecord.new(node_name, text_data, ttl))]

    return [
        UpdateRecord(
            TxtRecord.targeting(require_id(existing), node_name, text_data, ttl)
        )
    ]


def plan_text_delete(
    records: Sequence[Record], node_name: str, domain_name: str = ""
) -> RecordActionListT:
    """
    Decide how to remove node_name.

    Raises:
        RecordNotFoundError: no TXT record has this node name
    """
    existing = find_text_record(records, node_name)
    if existing is None:
        raise RecordNotFoundError(domain_name, node_name)
    return [DeleteRecord(require_id(existing))]
