"""Environment-backed settings primitives for :mod:`altmetric_mcp`."""

from __future__ import annotations

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["AltmetricSettings", "ConfigurationError", "get_settings"]

DEFAULT_DETAILS_API_BASE_URL = "https://api.altmetric.com"
DEFAULT_EXPLORER_API_BASE_URL = "https://www.altmetric.com"
DEFAULT_REQUEST_TIMEOUT = 30.0


class ConfigurationError(RuntimeError):
    """Raised when neither Altmetric API has usable credentials."""


class AltmetricSettings(BaseSettings):
    """Expose environment-derived configuration for the Altmetric tools.

    All environment lookups go through this class. Values are read from the
    process environment and, when present, a ``.env`` file in the working
    directory. Instances are passed explicitly to the clients and the server
    rather than consulted as module globals.

    Attributes:
        details_api_key: Details Page API key.
        details_api_base_url: Base URL of the Details Page API.
        explorer_api_key: Explorer API key.
        explorer_api_secret: Shared secret used to sign Explorer requests.
        explorer_api_base_url: Base URL of the Explorer API.
        request_timeout: HTTP timeout in seconds for outgoing requests.
        log_level: Logging level name for the server process.
    """

    details_api_key: str | None = Field(
        default=None, alias="ALTMETRIC_DETAILS_API_KEY"
    )
    details_api_base_url: str = Field(
        default=DEFAULT_DETAILS_API_BASE_URL, alias="ALTMETRIC_DETAILS_API_BASE_URL"
    )
    explorer_api_key: str | None = Field(
        default=None, alias="ALTMETRIC_EXPLORER_API_KEY"
    )
    explorer_api_secret: SecretStr | None = Field(
        default=None, alias="ALTMETRIC_EXPLORER_API_SECRET"
    )
    explorer_api_base_url: str = Field(
        default=DEFAULT_EXPLORER_API_BASE_URL, alias="ALTMETRIC_EXPLORER_API_BASE_URL"
    )
    request_timeout: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT, alias="ALTMETRIC_REQUEST_TIMEOUT"
    )
    log_level: str = Field(default="INFO", alias="ALTMETRIC_LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore", populate_by_name=True
    )

    @field_validator(
        "details_api_key", "explorer_api_key", "explorer_api_secret", mode="before"
    )
    @classmethod
    def _blank_as_none(cls, value: object) -> object:
        """Treat empty or whitespace-only credentials as unset."""

        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("request_timeout", mode="before")
    @classmethod
    def _parse_timeout(cls, value: object) -> float:
        """Parse the timeout while tolerating malformed input.

        Args:
            value: Raw environment value.

        Returns:
            Parsed positive float, otherwise the default timeout.
        """

        if isinstance(value, bool):
            return DEFAULT_REQUEST_TIMEOUT
        if isinstance(value, (int, float)):
            parsed = float(value)
        elif isinstance(value, str):
            try:
                parsed = float(value.strip())
            except ValueError:
                return DEFAULT_REQUEST_TIMEOUT
        else:
            return DEFAULT_REQUEST_TIMEOUT
        return parsed if parsed > 0 else DEFAULT_REQUEST_TIMEOUT

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_level(cls, value: object) -> str:
        if isinstance(value, str) and value.strip():
            return value.strip().upper()
        return "INFO"

    @property
    def explorer_secret_value(self) -> str | None:
        """Return the raw Explorer secret, or ``None`` when unset."""

        if self.explorer_api_secret is None:
            return None
        return self.explorer_api_secret.get_secret_value()

    @property
    def has_details_api(self) -> bool:
        return bool(self.details_api_key)

    @property
    def has_explorer_api(self) -> bool:
        return bool(self.explorer_api_key and self.explorer_secret_value)

    def require_any_api(self) -> None:
        """Ensure at least one API is usable.

        Raises:
            ConfigurationError: If neither the Details key nor the Explorer
                key and secret pair is configured.
        """

        if not (self.has_details_api or self.has_explorer_api):
            raise ConfigurationError("At least one API configuration is required")


def get_settings() -> AltmetricSettings:
    """Return an :class:`AltmetricSettings` instance.

    Returns:
        Settings parsed from environment variables and ``.env``.
    """

    return AltmetricSettings()
