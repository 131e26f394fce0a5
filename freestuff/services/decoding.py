"""Decoding of API responses into the typed models.

Everything in this module is a pure function of its input: no I/O, no logging
and no shared state, so it is safe to call from any thread or task.

Each decoder takes the raw JSON value plus the dotted path it was found at;
the path ends up in ``InvalidResponseError.field`` when decoding fails.
"""

import json
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any, TypeVar

from ..models import (
    AnnouncementKind,
    GameFlags,
    GameInfo,
    LocalizedGameInfo,
    OpenEnum,
    Price,
    ProductKind,
    ServiceStatus,
    Store,
    Thumbnail,
    Urls,
)
from .errors import ApiError, InvalidResponseError

T = TypeVar("T")
E = TypeVar("E", bound=OpenEnum)

MAX_GAME_ID = 2**64 - 1

_JSON_TYPE_NAMES = {
    bool: "boolean",
    int: "integer",
    float: "number",
    str: "string",
    list: "array",
    dict: "object",
}


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    return _JSON_TYPE_NAMES.get(type(value), type(value).__name__)


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _invalid(path: str, reason: str, original_error: Exception | None = None) -> InvalidResponseError:
    return InvalidResponseError(
        f"Invalid response from API: {reason}" + (f" at '{path}'" if path else ""),
        field=path or None,
        original_error=original_error,
    )


# Primitive readers

def _object(value: Any, path: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise _invalid(path, f"expected an object, got {_type_name(value)}")
    return value


def _required(obj: dict[str, Any], key: str, path: str) -> Any:
    if key not in obj:
        raise _invalid(_join(path, key), "missing field")
    return obj[key]


def _string(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise _invalid(path, f"expected a string, got {_type_name(value)}")
    return value


def _number(value: Any, path: str) -> float:
    # bool is an int subclass but JSON true/false is never a number
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _invalid(path, f"expected a number, got {_type_name(value)}")
    return float(value)


def _string_list(value: Any, path: str) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise _invalid(path, f"expected an array, got {_type_name(value)}")
    return tuple(_string(item, f"{path}[{index}]") for index, item in enumerate(value))


def _required_string(obj: dict[str, Any], key: str, path: str) -> str:
    return _string(_required(obj, key, path), _join(path, key))


def _optional_string(obj: dict[str, Any], key: str, path: str) -> str | None:
    value = obj.get(key)
    return None if value is None else _string(value, _join(path, key))


def _optional_number(obj: dict[str, Any], key: str, path: str) -> float | None:
    value = obj.get(key)
    return None if value is None else _number(value, _join(path, key))


# Optional-object coalescing

def _is_populated_object(value: Any) -> bool:
    return isinstance(value, dict) and len(value) > 0


def _is_empty_object(value: Any) -> bool:
    return isinstance(value, dict) and len(value) == 0


def _is_null(value: Any) -> bool:
    return value is None


def _absent(value: Any, path: str) -> None:
    return None


def _optional_object(
    obj: dict[str, Any],
    key: str,
    path: str,
    decode: Callable[[Any, str], T],
) -> T | None:
    """Decode a field that the API sends as a full object, ``{}`` or ``null``.

    The alternatives are tried in order: the full target type, an object with
    zero keys, then null. The last two (and a missing key) mean "absent". An
    object with any key at all, known or not, must decode as the full type.
    """
    value = obj.get(key)
    field_path = _join(path, key)
    alternatives: tuple[tuple[Callable[[Any], bool], Callable[[Any, str], T | None]], ...] = (
        (_is_populated_object, decode),
        (_is_empty_object, _absent),
        (_is_null, _absent),
    )
    for matches, build in alternatives:
        if matches(value):
            return build(value, field_path)
    raise _invalid(field_path, f"expected an object or null, got {_type_name(value)}")


# Enums

def _open_enum(enum_type: type[E], value: Any, path: str) -> E:
    """Map a tag onto ``enum_type``; unknown tags become the fallback member."""
    return enum_type(_string(value, path))


def decode_service_status(value: Any, path: str = "status") -> ServiceStatus:
    """Decode a service status. Unknown values are an invalid response."""
    tag = _string(value, path)
    try:
        return ServiceStatus(tag)
    except ValueError as e:
        raise _invalid(path, f"unknown service status {tag!r}", original_error=e) from e


def _flags(value: Any, path: str) -> GameFlags:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 0xFF:
        raise _invalid(path, f"expected an integer in 0..255, got {value!r}")
    return GameFlags(value)


# Models

def _urls(value: Any, path: str) -> Urls:
    obj = _object(value, path)
    return Urls(
        default=_required_string(obj, "default", path),
        browser=_required_string(obj, "browser", path),
        client=_optional_string(obj, "client", path),
        org=_required_string(obj, "org", path),
    )


def _price(value: Any, path: str) -> Price:
    obj = _object(value, path)
    return Price(
        euro=_optional_number(obj, "euro", path),
        dollar=_optional_number(obj, "dollar", path),
    )


def _thumbnail(value: Any, path: str) -> Thumbnail:
    obj = _object(value, path)
    return Thumbnail(
        org=_required_string(obj, "org", path),
        blank=_required_string(obj, "blank", path),
        full=_required_string(obj, "full", path),
        tags=_required_string(obj, "tags", path),
    )


def _localized_game_info(value: Any, path: str) -> LocalizedGameInfo:
    obj = _object(value, path)
    return LocalizedGameInfo(
        lang_name=_required_string(obj, "lang_name", path),
        lang_name_en=_required_string(obj, "lang_name_en", path),
        lang_flag_emoji=_required_string(obj, "lang_flag_emoji", path),
        platform=_required_string(obj, "platform", path),
        claim_long=_required_string(obj, "claim_long", path),
        claim_short=_required_string(obj, "claim_short", path),
        free=_required_string(obj, "free", path),
        header=_required_string(obj, "header", path),
        footer=_required_string(obj, "footer", path),
        org_price_eur=_required_string(obj, "org_price_eur", path),
        org_price_usd=_required_string(obj, "org_price_usd", path),
        until=_required_string(obj, "until", path),
        until_alt=_required_string(obj, "until_alt", path),
        flags=_string_list(_required(obj, "flags", path), _join(path, "flags")),
    )


def _localized(obj: dict[str, Any], path: str) -> Mapping[str, LocalizedGameInfo] | None:
    value = obj.get("localized")
    if value is None:
        return None
    field_path = _join(path, "localized")
    return MappingProxyType({
        locale: _localized_game_info(info, _join(field_path, locale))
        for locale, info in _object(value, field_path).items()
    })


def decode_game_info(data: Any, path: str = "") -> GameInfo:
    """Decode a single game record."""
    obj = _object(data, path)
    return GameInfo(
        urls=_urls(_required(obj, "urls", path), _join(path, "urls")),
        url=_required_string(obj, "url", path),
        org_url=_required_string(obj, "org_url", path),
        title=_required_string(obj, "title", path),
        org_price=_optional_object(obj, "org_price", path, _price),
        price=_optional_object(obj, "price", path, _price),
        thumbnail=_optional_object(obj, "thumbnail", path, _thumbnail),
        kind=_open_enum(ProductKind, _required(obj, "kind", path), _join(path, "kind")),
        tags=_string_list(_required(obj, "tags", path), _join(path, "tags")),
        description=_optional_string(obj, "description", path),
        rating=_optional_number(obj, "rating", path),
        notice=_optional_string(obj, "notice", path),
        until=_optional_number(obj, "until", path),
        store=_open_enum(Store, _required(obj, "store", path), _join(path, "store")),
        flags=_flags(_required(obj, "flags", path), _join(path, "flags")),
        announcement=_open_enum(AnnouncementKind, _required(obj, "type", path), _join(path, "type")),
        localized=_localized(obj, path),
    )


def decode_game_info_map(data: Any, path: str = "") -> dict[str, GameInfo]:
    """Decode a mapping of stringified game id to game record."""
    return {
        game_id: decode_game_info(info, _join(path, game_id))
        for game_id, info in _object(data, path).items()
    }


def decode_game_ids(data: Any, path: str = "") -> list[int]:
    """Decode a list of unsigned 64-bit game ids."""
    if not isinstance(data, list):
        raise _invalid(path, f"expected an array, got {_type_name(data)}")

    ids: list[int] = []
    for index, value in enumerate(data):
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= MAX_GAME_ID:
            raise _invalid(f"{path}[{index}]", f"expected an unsigned 64-bit integer, got {value!r}")
        ids.append(value)
    return ids


# Envelope

def parse_json(body: bytes | str) -> Any:
    """Parse a response body, turning syntax errors into invalid responses."""
    try:
        return json.loads(body)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors;
        # RecursionError comes from pathologically nested documents
        raise _invalid("", "malformed JSON", original_error=e) from e


def decode_envelope(body: bytes | str, decode_data: Callable[[Any, str], T]) -> T:
    """Decode a full response body and return its payload.

    The envelope and payload are decoded first. If the envelope then carries a
    ``message``, an ``ApiError`` is raised in place of the payload, even when
    ``success`` is true and the data is valid.
    """
    envelope = _object(parse_json(body), "")

    success = _required(envelope, "success", "")
    if not isinstance(success, bool):
        raise _invalid("success", f"expected a boolean, got {_type_name(success)}")
    error = _optional_string(envelope, "error", "")
    message = _optional_string(envelope, "message", "")
    data = decode_data(_required(envelope, "data", ""), "data")

    if message is not None:
        raise ApiError(message, api_error=error)
    return data


def decode_game_list_response(body: bytes | str) -> list[int]:
    return decode_envelope(body, decode_game_ids)


def decode_game_details_response(body: bytes | str) -> dict[str, GameInfo]:
    return decode_envelope(body, decode_game_info_map)
