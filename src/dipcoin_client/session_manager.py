"""
Session management for DipCoin client.

One aiohttp session per SDK instance, opened on first use and released by
``close_session``. The configured timeout bounds every request made on it.
"""

import logging
from typing import Optional

import aiohttp

from .constants import CONNECTION_LIMIT, CONNECTION_LIMIT_PER_HOST, DNS_CACHE_TTL, USER_AGENT
from .models.config import SDKConfig

logger = logging.getLogger(__name__)


class SessionManager:
    """Owns the HTTP session of a DipCoin SDK instance."""

    def __init__(self, config: SDKConfig):
        self._config = config
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def is_open(self) -> bool:
        return self._session is not None and not self._session.closed

    async def create_session(self) -> aiohttp.ClientSession:
        """Return the open session, creating it on first use."""
        if self.is_open:
            return self._session

        self._session = aiohttp.ClientSession(
            connector=aiohttp.TCPConnector(
                limit=CONNECTION_LIMIT,
                limit_per_host=CONNECTION_LIMIT_PER_HOST,
                ttl_dns_cache=DNS_CACHE_TTL,
            ),
            timeout=aiohttp.ClientTimeout(total=self._config.timeout),
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        )
        logger.debug(
            f"HTTP session opened for {self._config.api_base_url} "
            f"(timeout={self._config.timeout:g}s)"
        )
        return self._session

    async def close_session(self) -> None:
        """Close the session if one is open."""
        if self.is_open:
            await self._session.close()
            logger.debug("HTTP session closed")
        self._session = None
