"""Async client for the freestuffbot.xyz game deals API.

The main interface is ``FreestuffClient``, constructed with
``FreestuffClient.builder()``. An API key can be requested at
https://docs.freestuffbot.xyz.
"""

from .models import (
    AnnouncementKind,
    ClientConfig,
    GameCategory,
    GameFlags,
    GameInfo,
    LocalizedGameInfo,
    Price,
    ProductKind,
    ServiceStatus,
    Store,
    Thumbnail,
    Urls,
)
from .services import (
    MAX_BATCH_SIZE,
    ApiError,
    ClientBuilder,
    ConfigurationError,
    FreestuffClient,
    FreestuffError,
    InvalidResponseError,
    RateLimitedError,
    TransportError,
)

__version__ = "0.1.0"

__all__ = [
    "AnnouncementKind",
    "ApiError",
    "ClientBuilder",
    "ClientConfig",
    "ConfigurationError",
    "FreestuffClient",
    "FreestuffError",
    "GameCategory",
    "GameFlags",
    "GameInfo",
    "InvalidResponseError",
    "LocalizedGameInfo",
    "MAX_BATCH_SIZE",
    "Price",
    "ProductKind",
    "RateLimitedError",
    "ServiceStatus",
    "Store",
    "Thumbnail",
    "TransportError",
    "Urls",
]
