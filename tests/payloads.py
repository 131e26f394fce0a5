"""Sample API payloads shared by the tests."""

import json
from typing import Any


def localized_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "lang_name": "Deutsch",
        "lang_name_en": "German",
        "lang_flag_emoji": "🇩🇪",
        "platform": "Steam",
        "claim_long": "Jetzt kostenlos sichern",
        "claim_short": "Kostenlos",
        "free": "Gratis",
        "header": "Kostenloses Spiel",
        "footer": "via freestuffbot.xyz",
        "org_price_eur": "19,99 €",
        "org_price_usd": "$19.99",
        "until": "bis Donnerstag",
        "until_alt": "bis 24.10.",
        "flags": ["Drittanbieter"],
    }
    payload.update(overrides)
    return payload


def game_payload(**overrides: Any) -> dict[str, Any]:
    """A fully populated game record as the API sends it."""
    payload: dict[str, Any] = {
        "urls": {
            "default": "https://redirect.freestuffbot.xyz/game/1234",
            "browser": "https://store.steampowered.com/app/1234",
            "client": "steam://store/1234",
            "org": "https://store.steampowered.com/app/1234",
        },
        "url": "https://redirect.freestuffbot.xyz/game/1234",
        "org_url": "https://store.steampowered.com/app/1234",
        "title": "Example Game",
        "org_price": {"euro": 19.99, "dollar": 19.99},
        "price": {"euro": 0, "dollar": 0},
        "thumbnail": {
            "org": "https://cdn.example.com/org.jpg",
            "blank": "https://cdn.example.com/blank.jpg",
            "full": "https://cdn.example.com/full.jpg",
            "tags": "https://cdn.example.com/tags.jpg",
        },
        "kind": "game",
        "tags": ["Action", "Indie"],
        "description": "A game used in tests.",
        "rating": 4.2,
        "notice": None,
        "until": 1760000000.0,
        "store": "steam",
        "flags": 0,
        "type": "free",
        "localized": {"de-DE": localized_payload()},
    }
    payload.update(overrides)
    return payload


def envelope(data: Any, message: str | None = None, success: bool = True, error: str | None = None) -> bytes:
    body: dict[str, Any] = {"success": success, "data": data}
    if error is not None:
        body["error"] = error
    if message is not None:
        body["message"] = message
    return json.dumps(body).encode("utf-8")
