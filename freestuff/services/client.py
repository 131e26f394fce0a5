"""Client for the freestuffbot.xyz API.

A client is configured through ``ClientBuilder``::

    client = FreestuffClient.builder().key(api_key).build()
    async with client:
        ids = await client.game_list(GameCategory.FREE)
        games = await client.game_details(ids[:MAX_BATCH_SIZE])

An API key can be requested at https://docs.freestuffbot.xyz.
"""

from collections.abc import Sequence
from typing import Any
from urllib.parse import quote

import httpx
import structlog

from ..models import ClientConfig, GameCategory, GameInfo
from ..models.config import DEFAULT_API_DOMAIN, DEFAULT_USER_AGENT
from .config import ConfigurationService, is_valid_api_domain
from .decoding import MAX_GAME_ID, decode_game_details_response, decode_game_list_response
from .errors import ConfigurationError, InvalidResponseError
from .http_client import HttpClientService

log = structlog.stdlib.get_logger()

# The API answers at most this many games per details request. Not enforced here.
MAX_BATCH_SIZE = 5


class ClientBuilder:
    """Fluent builder for ``FreestuffClient``. An API key is required."""

    def __init__(self) -> None:
        self._api_domain: str = DEFAULT_API_DOMAIN
        self._api_key: str | None = None
        self._timeout: float = 30.0
        self._user_agent: str = DEFAULT_USER_AGENT
        self._transport: httpx.AsyncBaseTransport | None = None

    def api_domain(self, domain: str) -> "ClientBuilder":
        """Set the API domain. Defaults to https://api.freestuffbot.xyz."""
        if not is_valid_api_domain(domain):
            raise ConfigurationError(
                "Failed to convert into a valid URL",
                setting="api_domain",
                current_value=domain,
            )
        self._api_domain = domain
        return self

    def key(self, api_key: str) -> "ClientBuilder":
        """Set the API key. Required, as there is no public API."""
        self._api_key = api_key
        return self

    def timeout(self, seconds: float) -> "ClientBuilder":
        self._timeout = seconds
        return self

    def user_agent(self, user_agent: str) -> "ClientBuilder":
        self._user_agent = user_agent
        return self

    def transport(self, transport: httpx.AsyncBaseTransport) -> "ClientBuilder":
        """Use a custom httpx transport instead of the network."""
        self._transport = transport
        return self

    def build(self) -> "FreestuffClient":
        """Validate the settings and construct the client.

        Raises:
            ConfigurationError: If no API key was set or a setting is invalid
        """
        if self._api_key is None:
            raise ConfigurationError("No API key was set", setting="api_key")

        config = ClientConfig(
            api_key=self._api_key,
            api_domain=self._api_domain,
            timeout=self._timeout,
            user_agent=self._user_agent,
        )
        return FreestuffClient.from_config(config, transport=self._transport)


class FreestuffClient:
    """Async client for the freestuff API.

    Every method sends at most one request. Errors propagate unchanged as
    ``FreestuffError`` subclasses; nothing is retried and no partial results
    are returned.
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._http = HttpClientService(
            api_key=config.api_key,
            timeout=config.timeout,
            user_agent=config.user_agent,
            transport=transport,
        )

    @staticmethod
    def builder() -> ClientBuilder:
        return ClientBuilder()

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "FreestuffClient":
        """Construct a client from a validated configuration."""
        validation_result = ConfigurationService.validate_config(config)
        if not validation_result.is_valid:
            raise ConfigurationError(f"Invalid configuration: {', '.join(validation_result.errors)}")
        return cls(config, transport=transport)

    def _endpoint(self, path: str) -> str:
        return str(httpx.URL(self.config.api_domain).join(path))

    async def ping(self) -> bool:
        """Ping the API. Returns True when the API answers successfully."""
        response = await self._http.get(self._endpoint("/v1/ping"))
        return response.is_success

    async def game_list(self, category: GameCategory | str) -> list[int]:
        """Fetch the ids of all games in a category.

        Valid categories are ``all``, ``approved`` and ``free``.
        """
        tag = category.value if isinstance(category, GameCategory) else category
        path = f"/v1/games/{quote(tag, safe='')}"

        log.debug("Fetching game list", category=tag)
        response = await self._http.get(self._endpoint(path))
        return decode_game_list_response(response.content)

    async def game_details(self, games: Sequence[int]) -> dict[str, GameInfo]:
        """Fetch info about several games, keyed by stringified game id.

        The API answers at most ``MAX_BATCH_SIZE`` games per request. An empty
        ``games`` returns an empty mapping without contacting the API.
        """
        if not games:
            return {}

        for game_id in games:
            if isinstance(game_id, bool) or not isinstance(game_id, int) or not 0 <= game_id <= MAX_GAME_ID:
                raise ValueError(f"Game ids must be unsigned 64-bit integers, got {game_id!r}")

        path = f"/v1/game/{'+'.join(str(game_id) for game_id in games)}/info"

        log.debug("Fetching game details", count=len(games))
        response = await self._http.get(self._endpoint(path))
        return decode_game_details_response(response.content)

    async def game_detail(self, game: int) -> GameInfo:
        """Fetch info about a single game."""
        details = await self.game_details([game])
        for info in details.values():
            return info
        raise InvalidResponseError("Invalid response from API: no game info returned", field="data")

    async def close(self) -> None:
        await self._http.close()

    async def __aenter__(self) -> "FreestuffClient":
        return self

    async def __aexit__(self, exc_type: type[Exception] | None, exc_val: Exception | None, exc_tb: Any) -> None:
        await self.close()
