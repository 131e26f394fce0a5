"""Configuration data models."""

from dataclasses import dataclass

DEFAULT_API_DOMAIN = "https://api.freestuffbot.xyz"
DEFAULT_USER_AGENT = "freestuff-python/0.1.0"


@dataclass(frozen=True)
class ClientConfig:
    """Settings needed to talk to the API."""
    api_key: str
    api_domain: str = DEFAULT_API_DOMAIN
    timeout: float = 30.0  # seconds
    user_agent: str = DEFAULT_USER_AGENT
