"""
Network state probe

Detects the public addresses of this host and the addresses a domain
currently resolves to.
"""

import asyncio
import ipaddress
import socket
from typing import Optional

import aiohttp

from ..logger import logger
from .types import Addresses, IPFamily


class NetworkProbe:
    """
    Both lookups treat failure as absence: a host without IPv6 connectivity
    simply has no public IPv6, and a domain that does not resolve publishes
    nothing.
    """

    def __init__(
        self,
        ipv4_api: str = "https://api.ipify.org",
        ipv6_api: str = "https://api6.ipify.org",
        timeout: float = 15.0,
    ) -> None:
        self._apis = {IPFamily.V4: ipv4_api, IPFamily.V6: ipv6_api}
        self._timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout)
            )
        return self._session

    async def _fetch_text(self, url: str) -> str:
        async with self._get_session().get(url) as response:
            response.raise_for_status()
            return await response.text()

    async def public_ip(self, family: IPFamily) -> Optional[str]:
        """Public address of this host for the given family, None if undetectable"""
        url = self._apis[family]
        try:
            text = (await self._fetch_text(url)).strip()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.debug(f"no public {family.value} detected via {url}: {e}")
            return None

        try:
            address = ipaddress.ip_address(text)
        except ValueError:
            logger.warning(f"{url} returned a value that is not an address: {text!r}")
            return None

        if (family is IPFamily.V4) != (address.version == 4):
            logger.warning(f"{url} returned {text} which is not an {family.value} address")
            return None
        return str(address)

    async def public_addresses(self) -> Addresses:
        """Public IPv4 and IPv6 of this host, probed one after the other"""
        v4 = await self.public_ip(IPFamily.V4)
        v6 = await self.public_ip(IPFamily.V6)
        return Addresses(v4=v4, v6=v6)

    async def resolve(self, domain_name: str) -> Addresses:
        """
        Addresses domain_name currently resolves to.

        Keeps the first address of each family as returned by the resolver.
        """
        loop = asyncio.get_running_loop()
        try:
            infos = await loop.getaddrinfo(domain_name, None, type=socket.SOCK_STREAM)
        except (socket.gaierror, UnicodeError) as e:
            logger.debug(f"domain={domain_name} does not resolve: {e}")
            return Addresses()

        v4: Optional[str] = None
        v6: Optional[str] = None
        for family, _, _, _, sockaddr in infos:
            if family == socket.AF_INET and v4 is None:
                v4 = str(sockaddr[0])
            elif family == socket.AF_INET6 and v6 is None:
                v6 = str(sockaddr[0])
        return Addresses(v4=v4, v6=v6)

    async def close(self):
        """Clean up the session"""
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "NetworkProbe":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
