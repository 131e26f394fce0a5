"""Error types raised by the freestuff client.

Every failure surfaces to the caller as a subclass of ``FreestuffError``:

- ``TransportError``: connection, TLS or plaintext-URL failures
- ``RateLimitedError``: HTTP 429, kept separate so callers can back off
- ``InvalidResponseError``: unexpected status or a body that does not decode
- ``ApiError``: the API answered with a message instead of data
- ``ConfigurationError``: the client could not be configured

Nothing here logs or retries; errors are meant to propagate.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(Enum):
    """Categories of errors for classification and handling."""
    TRANSPORT = "transport"
    RATE_LIMITED = "rate_limited"
    INVALID_RESPONSE = "invalid_response"
    API = "api"
    CONFIGURATION = "configuration"


@dataclass(frozen=True)
class UserFriendlyError:
    """User-friendly error representation with suggested actions."""
    message: str
    category: ErrorCategory
    suggested_actions: list[str]
    technical_details: str | None = None


class FreestuffError(Exception):
    """Base exception class for client errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        suggested_actions: list[str] | None = None,
        technical_details: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category
        self.suggested_actions = suggested_actions or []
        self.technical_details = technical_details

    def to_user_friendly(self) -> UserFriendlyError:
        """Convert to user-friendly error representation."""
        return UserFriendlyError(
            message=self.message,
            category=self.category,
            suggested_actions=self.suggested_actions,
            technical_details=self.technical_details,
        )


class TransportError(FreestuffError):
    """The request could not be carried out."""

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        url: str | None = None,
    ) -> None:
        technical_details = None
        if original_error:
            technical_details = f"{type(original_error).__name__}: {original_error}"
        if url:
            technical_details = f"URL: {url}" + (f"\n{technical_details}" if technical_details else "")

        super().__init__(
            message=message,
            category=ErrorCategory.TRANSPORT,
            suggested_actions=[
                "Check your internet connection",
                "Make sure the API domain uses https",
            ],
            technical_details=technical_details,
        )
        self.original_error = original_error
        self.url = url


class RateLimitedError(FreestuffError):
    """The API answered with HTTP 429."""

    def __init__(self, url: str | None = None, retry_after: float | None = None) -> None:
        technical_details = f"URL: {url}" if url else None
        if retry_after is not None:
            technical_details = (technical_details or "") + f"\nRetry-After: {retry_after}"

        super().__init__(
            message="Too many requests",
            category=ErrorCategory.RATE_LIMITED,
            suggested_actions=[
                "Wait a few minutes before retrying",
                "Reduce the request frequency",
            ],
            technical_details=technical_details.strip() if technical_details else None,
        )
        self.url = url
        self.retry_after = retry_after


class InvalidResponseError(FreestuffError):
    """The API answered with an unexpected status or an undecodable body."""

    def __init__(
        self,
        message: str = "Invalid response from API",
        status_code: int | None = None,
        field: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        technical_details = None
        if status_code is not None:
            technical_details = f"Status: {status_code}"
        if field:
            technical_details = (technical_details or "") + f"\nField: {field}"
        if original_error:
            technical_details = (technical_details or "") + f"\nError: {type(original_error).__name__}: {original_error}"

        super().__init__(
            message=message,
            category=ErrorCategory.INVALID_RESPONSE,
            suggested_actions=[
                "Check that the API key is valid",
                "The API may have changed; try updating the client",
            ],
            technical_details=technical_details.strip() if technical_details else None,
        )
        self.status_code = status_code
        self.field = field
        self.original_error = original_error


class ApiError(FreestuffError):
    """The API reported an error message in the response envelope."""

    def __init__(self, api_message: str, api_error: str | None = None) -> None:
        super().__init__(
            message=f"API error: {api_message}",
            category=ErrorCategory.API,
            suggested_actions=["Read the message returned by the API"],
            technical_details=f"Error: {api_error}" if api_error else None,
        )
        self.api_message = api_message
        self.api_error = api_error


class ConfigurationError(FreestuffError):
    """The client configuration is missing or invalid."""

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        current_value: object = None,
    ) -> None:
        technical_details = None
        if setting:
            technical_details = f"Setting: {setting}"
        if current_value is not None:
            technical_details = (technical_details or "") + f"\nCurrent: {current_value}"

        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            suggested_actions=[
                "Set an API key with --api-key or the FSA_API environment variable",
                "Check the configuration file",
            ],
            technical_details=technical_details.strip() if technical_details else None,
        )
        self.setting = setting
        self.current_value = current_value


def create_user_message(error: FreestuffError, include_suggestions: bool = True) -> str:
    """Create a formatted user message from an error.

    Args:
        error: The error to describe
        include_suggestions: Whether to include suggested actions

    Returns:
        Formatted message string
    """
    friendly = error.to_user_friendly()
    parts = [friendly.message]

    if include_suggestions and friendly.suggested_actions:
        parts.append("\nSuggested actions:")
        for action in friendly.suggested_actions[:3]:
            parts.append(f"  • {action}")

    return "\n".join(parts)
