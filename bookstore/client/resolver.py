"""
API Endpoint Resolver

Finds a reachable bookstore API among a prioritized list of base URLs.

How it works:
=============
1. The first caller probes each base URL in order with
   GET {base}/Books?pageNumber=1&pageSize=1 and a short timeout (5s)
2. The first endpoint answering 200 is cached for the resolver's lifetime
3. If none answers, the resolver switches to sample-data mode

Once in sample-data mode the resolver never probes again; restart the
client to retry. Concurrent callers share a single probe pass.

The resolver is an explicit object handed to BookstoreClient (instead of
module globals) so tests and separate sessions get independent state.
"""

import asyncio
import logging
from collections.abc import Sequence

import httpx

from bookstore.config import get_settings

logger = logging.getLogger(__name__)

PROBE_PATH = "/Books"


class ApiResolver:
    """
    Resolves and caches the API base URL.

    Attributes:
        endpoints: Base URLs in priority order (e.g. "http://localhost:5300/api")
        probe_timeout: Seconds allowed for each probe
    """

    def __init__(
        self,
        endpoints: Sequence[str] | None = None,
        probe_timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the resolver.

        Args:
            endpoints: Base URLs to probe; defaults to the API_ENDPOINTS setting
            probe_timeout: Per-probe timeout; defaults to API_PROBE_TIMEOUT
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        settings = get_settings()
        if endpoints is None:
            endpoints = settings.api_endpoints_list
        self.endpoints = [endpoint.rstrip("/") for endpoint in endpoints]
        self.probe_timeout = probe_timeout or settings.api_probe_timeout
        self._transport = transport

        self._base_url: str | None = None
        self._using_sample_data = False
        self._resolved = False
        self._lock = asyncio.Lock()

    @property
    def base_url(self) -> str | None:
        """The cached base URL, or None if unresolved or unavailable."""
        if self._using_sample_data:
            return None
        return self._base_url

    @property
    def using_sample_data(self) -> bool:
        return self._using_sample_data

    @property
    def is_live(self) -> bool:
        """True once a real API endpoint has been found and is in use."""
        return self.base_url is not None

    async def resolve_base_url(self) -> str | None:
        """
        Return the working base URL, probing on first use.

        Returns:
            The base URL, or None when no endpoint is reachable
            (the resolver is then in sample-data mode)
        """
        if self._resolved:
            return self.base_url

        async with self._lock:
            # Another caller may have finished probing while we waited
            if self._resolved:
                return self.base_url

            logger.info("Testing API endpoints to find a working one...")
            async with httpx.AsyncClient(
                timeout=self.probe_timeout,
                transport=self._transport,
            ) as client:
                for endpoint in self.endpoints:
                    if await self._probe(client, endpoint):
                        logger.info(f"Found working endpoint: {endpoint}")
                        self._base_url = endpoint
                        self._resolved = True
                        return endpoint

            logger.error("No working API endpoints found. Using sample data as fallback.")
            self._using_sample_data = True
            self._resolved = True
            return None

    async def _probe(self, client: httpx.AsyncClient, endpoint: str) -> bool:
        """
        Check one endpoint; any transport error or non-200 counts as down.

        probe_timeout bounds the whole request. httpx applies its timeout
        to each phase (connect, read, ...) separately.
        """
        logger.debug(f"Trying endpoint: {endpoint}")
        try:
            response = await asyncio.wait_for(
                client.get(
                    f"{endpoint}{PROBE_PATH}",
                    params={"pageNumber": 1, "pageSize": 1},
                ),
                timeout=self.probe_timeout,
            )
        except asyncio.TimeoutError:
            logger.info(f"Endpoint {endpoint} timed out after {self.probe_timeout}s")
            return False
        except httpx.HTTPError as e:
            logger.info(f"Endpoint {endpoint} failed: {e!r}")
            return False

        if response.status_code != 200:
            logger.info(f"Endpoint {endpoint} answered {response.status_code}")
            return False

        return True

    def switch_to_sample_data(self, reason: str) -> None:
        """
        Stop using the API for the rest of this session.

        Called by the client when a request against the resolved
        endpoint fails; there is no re-probe afterwards.
        """
        if not self._using_sample_data:
            logger.warning(f"Switching to sample data after API failure: {reason}")
        self._using_sample_data = True
        self._resolved = True
