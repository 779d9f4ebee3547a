"""
Dynu API client

Thin asynchronous wrapper over the Dynu REST API v2 covering the domain and
DNS record endpoints the updater needs.
"""

import asyncio
import json as jsonlib
from typing import Any, Literal, Optional

import aiohttp
from pydantic import ValidationError

from ..logger import logger
from .exceptions import DynuRequestError, DynuTransportError
from .types import (
    RECORD_TYPES,
    Domain,
    DomainIdT,
    Record,
    RecordIdT,
    RecordListT,
    TxtRecord,
    record_adapter,
    require_id,
)

MethodT = Literal["GET", "POST", "DELETE"]


class DynuClient:
    """
    Dynu API client.

    Every method performs exactly one HTTP request. Non-success responses raise
    DynuRequestError, except for the single entity lookups get_domain() and
    get_record() which return None. Network failures raise DynuTransportError.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.dynu.com",
        timeout: float = 15.0,
    ) -> None:
        self._api_key = api_key
        self._timeout = timeout
        self._session: aiohttp.ClientSession | None = None

        self._base_url = base_url
        if not self._base_url.endswith("/"):
            self._base_url += "/"

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout),
                headers={"Accept": "application/json", "api-key": self._api_key},
            )
        return self._session

    async def _send_request(
        self,
        method: MethodT,
        path: str,
        json: Optional[dict[str, Any]] = None,
        allow_missing: bool = False,
    ) -> Optional[Any]:
        """
        Send one request and decode the JSON answer.

        Args:
            method: HTTP method
            path: Path relative to the API base url
            json: Optional body, sent as application/json
            allow_missing: Return None instead of raising on non-success status

        Returns:
            Decoded JSON body, or None for an empty body
        """
        url = self._base_url + path
        headers = {"Content-Type": "application/json"} if json is not None else None
        logger.debug(f"{method} {url}")

        try:
            async with self._get_session().request(
                method, url, headers=headers, json=json
            ) as response:
                response_str = await response.text()
                status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise DynuTransportError(method, url, f"{type(e).__name__}: {e}") from e

        if not 200 <= status < 300:
            if allow_missing:
                logger.debug(f"{method} {url} returned status_code={status}")
                return None
            raise DynuRequestError(method, url, status, response_str)

        if not response_str:
            return None
        try:
            return jsonlib.loads(response_str)
        except ValueError as e:
            raise DynuTransportError(method, url, f"invalid JSON body: {e}") from e

    async def get_domains(self) -> list[Domain]:
        """List every domain of the account"""
        response = await self._send_request("GET", "v2/dns")
        return [Domain.model_validate(item) for item in (response or {}).get("domains", [])]

    async def get_domain(self, domain_id: DomainIdT) -> Optional[Domain]:
        """Get a domain by id, None if Dynu does not answer with success"""
        response = await self._send_request(
            "GET", f"v2/dns/{domain_id}", allow_missing=True
        )
        if response is None:
            return None
        return Domain.model_validate(response)

    async def update_domain(self, domain: Domain):
        domain_id = require_id(domain)
        await self._send_request("POST", f"v2/dns/{domain_id}", json=domain.to_wire())

    async def get_records(self, domain_id: DomainIdT) -> RecordListT:
        """
        List the DNS records of a domain.

        Records of kinds the updater does not model (CNAME, MX, ...) are skipped.
        """
        response = await self._send_request("GET", f"v2/dns/{domain_id}/record")
        records = RecordListT()
        for item in (response or {}).get("dnsRecords", []):
            if item.get("recordType") not in RECORD_TYPES:
                logger.debug(
                    f"skipping record id={item.get('id')} of type {item.get('recordType')}"
                )
                continue
            records.append(self._parse_record(item))
        return records

    async def get_record(
        self, domain_id: DomainIdT, record_id: RecordIdT
    ) -> Optional[Record]:
        """Get a record by id, None if Dynu does not answer with success"""
        response = await self._send_request(
            "GET", f"v2/dns/{domain_id}/record/{record_id}", allow_missing=True
        )
        if response is None or response.get("recordType") not in RECORD_TYPES:
            return None
        return self._parse_record(response)

    async def create_record(self, domain_id: DomainIdT, record: TxtRecord) -> RecordIdT:
        """Create a record and return the id Dynu assigned to it"""
        path = f"v2/dns/{domain_id}/record"
        response = await self._send_request("POST", path, json=record.to_wire())
        if not response or "id" not in response:
            raise DynuTransportError(
                "POST", self._base_url + path, f"no record id in response: {response!r}"
            )
        return int(response["id"])

    async def update_record(self, domain_id: DomainIdT, record: TxtRecord):
        record_id = require_id(record)
        await self._send_request(
            "POST", f"v2/dns/{domain_id}/record/{record_id}", json=record.to_wire()
        )

    async def delete_record(self, domain_id: DomainIdT, record_id: RecordIdT):
        await self._send_request("DELETE", f"v2/dns/{domain_id}/record/{record_id}")

    def _parse_record(self, item: dict[str, Any]) -> Record:
        try:
            return record_adapter.validate_python(item)
        except ValidationError as e:
            raise DynuTransportError(
                "GET", self._base_url, f"unexpected record payload: {e}"
            ) from e

    async def close(self):
        """Clean up the session"""
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "DynuClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
