"""
Dynu updater

Gathers the current state from the network probe and the Dynu API, asks the
decision functions in utils what to change, and performs those changes.
Every call is awaited in turn; nothing runs concurrently.
"""

from typing import Optional

from ..logger import log_exception, logger
from .client import DynuClient
from .exceptions import DomainNotFoundError
from .probe import NetworkProbe
from .types import Domain, DomainIdT, RecordIdT, RecordListT, require_id
from .utils import (
    CreateRecord,
    DeleteRecord,
    RecordActionListT,
    UpdateRecord,
    addresses_differ,
    apply_addresses,
    find_domain,
    plan_text_delete,
    plan_text_upsert,
)


class DynuUpdater:
    """
    Keeps one Dynu domain in line with the observed network state.

    Provides three operations:
    1. refresh(): publish the host's public addresses when they changed
    2. upsert_text(): create or replace the TXT record of a node name
    3. delete_text(): remove the TXT record of a node name
    """

    def __init__(self, client: DynuClient, probe: NetworkProbe):
        self._client = client
        self._probe = probe

    async def _get_domain_by_name(self, domain_name: str) -> Domain:
        domains = await self._client.get_domains()
        domain = find_domain(domains, domain_name)
        if domain is None:
            raise DomainNotFoundError(domain_name)
        logger.debug(f"found {domain!r}")
        return domain

    async def refresh(self, domain_name: str) -> bool:
        """
        Publish the host's public addresses on domain_name if they differ from
        the addresses the domain currently resolves to.

        Returns:
            True if the domain was updated, False if it was already current

        Raises:
            DomainNotFoundError: the addresses changed but the domain is unknown to Dynu
            DynuClientError: a Dynu request failed
        """
        detected = await self._probe.public_addresses()
        logger.info(f"detected ipv4='{detected.v4 or ''}', ipv6='{detected.v6 or ''}'")

        resolved = await self._probe.resolve(domain_name)
        logger.info(
            f"domain={domain_name}, resolved ipv4='{resolved.v4 or ''}', "
            f"resolved ipv6='{resolved.v6 or ''}'"
        )

        if not addresses_differ(detected, resolved):
            logger.info(
                f"resolved addresses are identical to the detected ones, "
                f"not updating domain={domain_name}"
            )
            return False

        logger.info(
            f"resolved addresses differ from the detected ones, "
            f"updating domain={domain_name}"
        )
        domain = await self._get_domain_by_name(domain_name)
        updated = apply_addresses(domain, detected)
        await self._client.update_domain(updated)

        await self._log_updated_domain(require_id(updated))
        return True

    async def upsert_text(
        self, domain_name: str, node_name: str, text_data: str, ttl: int
    ) -> RecordIdT:
        """
        Make the TXT record node_name of domain_name hold text_data.

        The record is created when missing and replaced in place otherwise.

        Returns:
            Id of the created or updated record
        """
        domain = await self._get_domain_by_name(domain_name)
        domain_id = require_id(domain)
        records = await self._client.get_records(domain_id)

        actions = plan_text_upsert(records, node_name, text_data, ttl)
        record_id = await self._apply_actions(domain_id, actions)

        await self._log_record(domain_id, record_id)
        return record_id

    async def delete_text(self, domain_name: str, node_name: str) -> RecordIdT:
        """
        Remove the TXT record node_name of domain_name.

        Raises:
            RecordNotFoundError: there is no such TXT record
        """
        domain = await self._get_domain_by_name(domain_name)
        domain_id = require_id(domain)
        records = await self._client.get_records(domain_id)

        actions = plan_text_delete(records, node_name, domain_name)
        return await self._apply_actions(domain_id, actions)

    async def list_records(self, domain_name: str) -> RecordListT:
        domain = await self._get_domain_by_name(domain_name)
        return await self._client.get_records(require_id(domain))

    async def _apply_actions(
        self, domain_id: DomainIdT, actions: RecordActionListT
    ) -> RecordIdT:
        """Perform the planned actions in order and return the last record id touched"""
        record_id: Optional[RecordIdT] = None
        for action in actions:
            match action:
                case CreateRecord(record=record):
                    record_id = await self._client.create_record(domain_id, record)
                    logger.info(
                        f"created TXT record node_name={record.node_name} id={record_id}"
                    )
                case UpdateRecord(record=record):
                    await self._client.update_record(domain_id, record)
                    record_id = require_id(record)
                    logger.info(
                        f"updated TXT record node_name={record.node_name} id={record_id}"
                    )
                case DeleteRecord(record_id=target):
                    await self._client.delete_record(domain_id, target)
                    record_id = target
                    logger.info(f"deleted record id={record_id}")

        if record_id is None:
            raise RuntimeError("no record action was planned")
        return record_id

    @log_exception("verify domain {domain_id}")
    async def _log_updated_domain(self, domain_id: DomainIdT):
        domain = await self._client.get_domain(domain_id)
        logger.info(f"updated domain={domain!r}")

    @log_exception("verify record {record_id}")
    async def _log_record(self, domain_id: DomainIdT, record_id: RecordIdT):
        record = await self._client.get_record(domain_id, record_id)
        logger.info(f"record after write={record!r}")
