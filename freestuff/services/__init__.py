"""Service layer: transport, decoding, configuration and the API client."""

from .client import MAX_BATCH_SIZE, ClientBuilder, FreestuffClient
from .config import ConfigurationService, ValidationResult
from .decoding import (
    decode_envelope,
    decode_game_details_response,
    decode_game_ids,
    decode_game_info,
    decode_game_info_map,
    decode_game_list_response,
    decode_service_status,
)
from .errors import (
    ApiError,
    ConfigurationError,
    ErrorCategory,
    FreestuffError,
    InvalidResponseError,
    RateLimitedError,
    TransportError,
    UserFriendlyError,
    create_user_message,
)
from .http_client import HttpClientService

__all__ = [
    "ApiError",
    "ClientBuilder",
    "ConfigurationError",
    "ConfigurationService",
    "ErrorCategory",
    "FreestuffClient",
    "FreestuffError",
    "HttpClientService",
    "InvalidResponseError",
    "MAX_BATCH_SIZE",
    "RateLimitedError",
    "TransportError",
    "UserFriendlyError",
    "ValidationResult",
    "create_user_message",
    "decode_envelope",
    "decode_game_details_response",
    "decode_game_ids",
    "decode_game_info",
    "decode_game_info_map",
    "decode_game_list_response",
    "decode_service_status",
]
