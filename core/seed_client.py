"""
Async HTTP client for the remote seed dataset.

The seed source is a plain HTTP GET returning a JSON array of sale records.
Requests are made once; nothing is retried.
"""
from typing import Any, Dict, List, Optional

import httpx

from core.config import SEED_TIMEOUT, SEED_URL
from core.exceptions import SeedDataError, SeedSourceError
from core.observability import Timer, get_correlation_id, get_logger

logger = get_logger(__name__)


class SeedClient:
    """
    Async client for the seed dataset.

    Usage:
        async with SeedClient() as client:
            records = await client.fetch_records()
    """

    def __init__(
        self,
        url: str = None,
        timeout: float = SEED_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize seed client.

        Args:
            url: Seed dataset URL (defaults to SEED_URL env var)
            timeout: Request timeout in seconds
            transport: Optional httpx transport (e.g. httpx.MockTransport)
        """
        self.url = url or SEED_URL
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def headers(self) -> Dict[str, str]:
        return {"Accept": "application/json"}

    async def connect(self) -> None:
        """Create the underlying HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers=self.headers,
                timeout=self.timeout,
                transport=self._transport,
                follow_redirects=True,
            )

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "SeedClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _get(self) -> httpx.Response:
        if not self._client:
            await self.connect()

        request_headers = {}
        correlation_id = get_correlation_id()
        if correlation_id:
            request_headers["X-Request-ID"] = correlation_id

        try:
            with Timer("seed_fetch", logger):
                response = await self._client.get(
                    self.url,
                    headers=request_headers or None,
                )
        except httpx.TimeoutException as e:
            logger.error(
                f"Seed request timeout: {self.url}",
                extra={"url": self.url, "timeout": self.timeout}
            )
            raise SeedSourceError(f"Request timeout after {self.timeout}s") from e
        except httpx.RequestError as e:
            logger.error(
                f"Seed request failed: {self.url} - {e}",
                extra={"url": self.url, "error": str(e)}
            )
            raise SeedSourceError("Seed request failed", str(e)) from e

        if response.status_code >= 400:
            error_text = response.text[:500]
            logger.error(
                f"Seed source error {response.status_code}: {error_text}",
                extra={"url": self.url, "status_code": response.status_code}
            )
            raise SeedSourceError(
                f"Seed source returned {response.status_code}",
                details=error_text,
                status_code=response.status_code,
            )

        return response

    async def fetch_records(self) -> List[Dict[str, Any]]:
        """
        Fetch the seed dataset.

        Returns:
            Decoded JSON array (raw dicts, not yet validated)

        Raises:
            SeedSourceError: Network/timeout errors or error status
            SeedDataError: Body is not a JSON array
        """
        response = await self._get()

        try:
            payload = response.json()
        except ValueError as e:
            raise SeedDataError("Seed response is not valid JSON", str(e)) from e

        if not isinstance(payload, list):
            raise SeedDataError(
                "Invalid seed payload type",
                expected="list",
                got=type(payload).__name__,
            )

        logger.info(f"Fetched {len(payload)} seed records", extra={"url": self.url})
        return payload
