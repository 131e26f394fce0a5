"""HTTP transport for the freestuff API."""

from typing import Any

import httpx
import structlog

from ..models.config import DEFAULT_USER_AGENT
from .errors import InvalidResponseError, RateLimitedError, TransportError

log = structlog.stdlib.get_logger()


class HttpClientService:
    """Authenticated, HTTPS-only GET requests against the API.

    Requests are sent exactly once: there is no retry, backoff or caching.
    Status handling is left to the caller through the raised error type.
    """

    def __init__(
        self,
        api_key: str,
        timeout: float = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client service.

        Args:
            api_key: Raw API key, sent verbatim in the Authorization header
            timeout: Request timeout in seconds
            user_agent: User-Agent header value
            transport: Optional httpx transport, mainly for tests
        """
        self.timeout = timeout

        # The API expects the raw key after "Basic", not base64 credentials
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers={
                "Authorization": f"Basic {api_key}",
                "User-Agent": user_agent,
                "Accept": "application/json",
            },
            follow_redirects=False,
            transport=transport,
        )

        log.debug("HTTP client service initialized", timeout=timeout)

    async def get(self, url: str) -> httpx.Response:
        """Make a single authorized GET request.

        Args:
            url: Absolute https URL to request

        Returns:
            The response, always with a 2xx status

        Raises:
            TransportError: If the URL is not https or the request fails
            RateLimitedError: If the API answers with 429
            InvalidResponseError: For any other non-2xx status
        """
        try:
            scheme = httpx.URL(url).scheme
        except httpx.InvalidURL as e:
            raise TransportError("Invalid request URL", original_error=e, url=url) from e
        if scheme != "https":
            raise TransportError(f"Refusing to send request over {scheme or 'unknown scheme'}, https is required", url=url)

        log.debug("Making HTTP GET request", url=url)
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as e:
            raise TransportError("Request to the API failed", original_error=e, url=url) from e

        log.debug(
            "HTTP GET request finished",
            url=url,
            status_code=response.status_code,
            content_length=len(response.content),
        )

        if response.is_success:
            return response
        if response.status_code == 429:
            raise RateLimitedError(url=url, retry_after=self._retry_after(response))
        raise InvalidResponseError(status_code=response.status_code)

    @staticmethod
    def _retry_after(response: httpx.Response) -> float | None:
        retry_after = response.headers.get("retry-after")
        if retry_after is None:
            return None
        try:
            return float(retry_after)
        except ValueError:
            # HTTP-date form is not interpreted
            return None

    async def close(self) -> None:
        """Close the HTTP client and clean up resources."""
        await self._client.aclose()
        log.debug("HTTP client closed")

    async def __aenter__(self) -> "HttpClientService":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type[Exception] | None, exc_val: Exception | None, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
