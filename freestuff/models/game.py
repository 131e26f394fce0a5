"""Game-related data models."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone

from .enums import AnnouncementKind, ProductKind, Store


@dataclass(frozen=True)
class Urls:
    """URLs pointing at a product."""
    default: str  # recommended
    browser: str
    client: str | None  # opens the related desktop client, e.g. steam://
    org: str  # original store URL


@dataclass(frozen=True)
class Price:
    """Price in each supported currency. Either, neither or both may be set."""
    euro: float | None = None
    dollar: float | None = None


@dataclass(frozen=True)
class Thumbnail:
    """Thumbnail image variants."""
    org: str  # original image
    blank: str  # proxied and cropped
    full: str  # proxied, with all available extra info
    tags: str  # proxied, with game tags above the image


@dataclass(frozen=True)
class LocalizedGameInfo:
    """Pre-rendered display strings for one locale."""
    lang_name: str
    lang_name_en: str
    lang_flag_emoji: str
    platform: str
    claim_long: str
    claim_short: str
    free: str
    header: str
    footer: str
    org_price_eur: str
    org_price_usd: str
    until: str
    until_alt: str
    flags: tuple[str, ...]


@dataclass(frozen=True)
class GameFlags:
    """Bit-packed product flags stored in a single byte."""
    raw: int = 0

    TRASH_BIT = 0
    THIRDPARTY_BIT = 1

    def __post_init__(self) -> None:
        if isinstance(self.raw, bool) or not isinstance(self.raw, int) or not 0 <= self.raw <= 0xFF:
            raise ValueError(f"GameFlags must be an integer in 0..255, got {self.raw!r}")

    def bit(self, index: int) -> bool:
        return (self.raw >> index) & 1 == 1

    @property
    def trash(self) -> bool:
        """Low quality product."""
        return self.bit(self.TRASH_BIT)

    @property
    def thirdparty(self) -> bool:
        """Key is provided by a third party."""
        return self.bit(self.THIRDPARTY_BIT)


@dataclass(frozen=True)
class GameInfo:
    """A single promotion as announced by the API."""
    urls: Urls
    url: str  # deprecated, same as urls.default
    org_url: str  # deprecated, same as urls.org
    title: str
    org_price: Price | None
    price: Price | None
    thumbnail: Thumbnail | None
    kind: ProductKind
    tags: tuple[str, ...]
    description: str | None
    rating: float | None  # 0-5 scale, not range checked
    notice: str | None
    until: float | None  # seconds since epoch
    store: Store
    flags: GameFlags
    announcement: AnnouncementKind
    # read-only mapping, left out of the hash
    localized: Mapping[str, LocalizedGameInfo] | None = field(default=None, hash=False)

    @property
    def expires_at(self) -> datetime | None:
        """Expiry time as an aware UTC datetime, if the promotion has one."""
        if self.until is None:
            return None
        return datetime.fromtimestamp(self.until, tz=timezone.utc)
