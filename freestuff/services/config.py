"""Configuration service for loading and validating client settings."""

import json
import os
from pathlib import Path

import httpx
import structlog

from ..models import ClientConfig
from ..models.config import DEFAULT_API_DOMAIN, DEFAULT_USER_AGENT
from .errors import ConfigurationError

log = structlog.stdlib.get_logger()

API_KEY_ENV_VAR = "FSA_API"


class ValidationResult:
    """Result of configuration validation."""

    def __init__(self, is_valid: bool, errors: list[str] | None = None) -> None:
        self.is_valid: bool = is_valid
        self.errors: list[str] = errors or []


def is_valid_api_domain(domain: str) -> bool:
    """Whether ``domain`` is an absolute http(s) URL."""
    try:
        url = httpx.URL(domain)
    except (httpx.InvalidURL, TypeError):
        return False
    return url.scheme in ("http", "https") and bool(url.host)


class ConfigurationService:
    """Service for managing client configuration.

    Settings are read from a JSON file. The ``FSA_API`` environment variable,
    when set, overrides the API key from the file.
    """

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path: Path = config_path or Path.home() / ".config" / "freestuff" / "config.json"
        log.debug("Configuration service initialized", config_path=str(self.config_path))

    def load_config(self) -> ClientConfig:
        """Load configuration from file and environment.

        Raises:
            ConfigurationError: If the file is unreadable or the result is invalid
        """
        data: dict[str, str | float] = {}
        if self.config_path.exists():
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    loaded = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                raise ConfigurationError(
                    f"Failed to read configuration file: {e}",
                    setting="config_path",
                    current_value=str(self.config_path),
                ) from e
            if not isinstance(loaded, dict):
                raise ConfigurationError("Configuration file must contain a JSON object", setting="config_path")
            data = loaded
        else:
            log.debug("Configuration file not found, using defaults")

        env_key = os.environ.get(API_KEY_ENV_VAR)
        if env_key:
            data["api_key"] = env_key

        config = self._dict_to_config(data)
        validation_result = self.validate_config(config)
        if not validation_result.is_valid:
            raise ConfigurationError(f"Invalid configuration: {', '.join(validation_result.errors)}")

        log.debug("Configuration loaded successfully", api_domain=config.api_domain)
        return config

    def save_config(self, config: ClientConfig) -> None:
        """Save configuration to file."""
        validation_result = self.validate_config(config)
        if not validation_result.is_valid:
            raise ConfigurationError(f"Invalid configuration: {', '.join(validation_result.errors)}")

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(self._config_to_dict(config), f, indent=2, ensure_ascii=False)

        log.debug("Configuration saved successfully", config_path=str(self.config_path))

    @staticmethod
    def validate_config(config: ClientConfig) -> ValidationResult:
        """Validate configuration settings."""
        errors = []

        if not isinstance(config.api_key, str) or not config.api_key.strip():
            errors.append("api_key must be a non-empty string")

        if not isinstance(config.api_domain, str) or not is_valid_api_domain(config.api_domain):
            errors.append("api_domain must be an absolute http(s) URL")

        if isinstance(config.timeout, bool) or not isinstance(config.timeout, (int, float)) or config.timeout <= 0:
            errors.append("timeout must be a positive number")

        if not isinstance(config.user_agent, str) or not config.user_agent:
            errors.append("user_agent must be a non-empty string")

        return ValidationResult(len(errors) == 0, errors)

    @staticmethod
    def _config_to_dict(config: ClientConfig) -> dict[str, str | float]:
        """Convert ClientConfig to dictionary for JSON serialization."""
        return {
            "api_key": config.api_key,
            "api_domain": config.api_domain,
            "timeout": config.timeout,
            "user_agent": config.user_agent,
        }

    @staticmethod
    def _dict_to_config(data: dict[str, str | float]) -> ClientConfig:
        """Convert dictionary to ClientConfig, leaving validation to the caller."""
        timeout_raw = data.get("timeout", 30.0)
        timeout = float(timeout_raw) if isinstance(timeout_raw, (int, float)) and not isinstance(timeout_raw, bool) else 0.0

        api_key = data.get("api_key")
        api_domain = data.get("api_domain", DEFAULT_API_DOMAIN)
        user_agent = data.get("user_agent", DEFAULT_USER_AGENT)

        return ClientConfig(
            api_key=api_key if isinstance(api_key, str) else "",
            api_domain=api_domain if isinstance(api_domain, str) else "",
            timeout=timeout,
            user_agent=user_agent if isinstance(user_agent, str) else "",
        )
