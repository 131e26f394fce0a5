"""Enumerations used by the game models.

Stores, product kinds and announcement kinds are *open*: the API may add new
values at any time, so an unrecognized string becomes a pseudo-member that
keeps the received text as its value instead of raising.
"""

from enum import Enum


class OpenEnum(str, Enum):
    """String enum that accepts unknown values.

    Unknown values produce a pseudo-member named after ``_fallback_name()``
    whose ``value`` is the original string, unchanged.
    """

    @classmethod
    def _fallback_name(cls) -> str:
        return "OTHER"

    @classmethod
    def _missing_(cls, value: object) -> "OpenEnum | None":
        if not isinstance(value, str):
            return None
        member = str.__new__(cls, value)
        member._name_ = cls._fallback_name()
        member._value_ = value
        return member

    @property
    def is_known(self) -> bool:
        """Whether this value is one of the declared members."""
        return self._name_ in type(self).__members__


class Store(OpenEnum):
    """Storefront a product is offered on."""
    STEAM = "steam"
    EPIC = "epic"
    HUMBLE = "humble"
    GOG = "gog"
    ORIGIN = "origin"
    UPLAY = "uplay"
    TWITCH = "twitch"
    ITCH = "itch"
    DISCORD = "discord"
    APPLE = "apple"
    GOOGLE = "google"
    SWITCH = "switch"
    PS = "ps"
    XBOX = "xbox"


class AnnouncementKind(OpenEnum):
    """Type of announcement."""
    FREE = "free"  # free to keep
    WEEKEND = "weekend"  # playable during a weekend
    DISCOUNT = "discount"
    AD = "ad"

    @classmethod
    def _fallback_name(cls) -> str:
        return "UNKNOWN"


class ProductKind(OpenEnum):
    """Type of product."""
    GAME = "game"
    DLC = "dlc"
    SOFTWARE = "software"
    ART = "art"
    OST = "ost"
    BOOK = "book"


class ServiceStatus(str, Enum):
    """Health of the remote service. Closed: unknown values are rejected."""
    OK = "ok"
    PARTIAL = "partial"  # partial disconnects / issues
    REBOOTING = "rebooting"  # sent on server startup
    FATAL = "fatal"  # requires human interaction


class GameCategory(str, Enum):
    """Categories accepted by the game list endpoint."""
    ALL = "all"
    APPROVED = "approved"
    FREE = "free"
