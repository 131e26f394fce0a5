"""Data models for the freestuff API client."""

from .config import DEFAULT_API_DOMAIN, ClientConfig
from .enums import (
    AnnouncementKind,
    GameCategory,
    OpenEnum,
    ProductKind,
    ServiceStatus,
    Store,
)
from .game import GameFlags, GameInfo, LocalizedGameInfo, Price, Thumbnail, Urls

__all__ = [
    "AnnouncementKind",
    "ClientConfig",
    "DEFAULT_API_DOMAIN",
    "GameCategory",
    "GameFlags",
    "GameInfo",
    "LocalizedGameInfo",
    "OpenEnum",
    "Price",
    "ProductKind",
    "ServiceStatus",
    "Store",
    "Thumbnail",
    "Urls",
]
