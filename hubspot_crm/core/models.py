"""Core data models for the HubSpot CRM client."""

from dataclasses import dataclass
from typing import Any


DEFAULT_API_BASE_URL = "https://api.hubapi.com"
DEFAULT_OBJECT_PATH = "crm/v3/objects"


@dataclass
class ClientConfig:
    """Connection settings for the HubSpot API."""
    access_token: str | None = None
    api_key: str | None = None
    api_base_url: str = DEFAULT_API_BASE_URL
    object_path: str = DEFAULT_OBJECT_PATH
    timeout_seconds: float = 10.0
    max_retries: int = 3

    def to_dict(self) -> dict[str, Any]:
        """Convert ClientConfig to a dictionary."""
        return {
            "access_token": self.access_token,
            "api_key": self.api_key,
            "api_base_url": self.api_base_url,
            "object_path": self.object_path,
            "timeout_seconds": self.timeout_seconds,
            "max_retries": self.max_retries,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClientConfig":
        """Create ClientConfig from a dictionary."""
        return cls(
            access_token=data.get("access_token"),
            api_key=data.get("api_key"),
            api_base_url=data.get("api_base_url") or DEFAULT_API_BASE_URL,
            object_path=data.get("object_path") or DEFAULT_OBJECT_PATH,
            timeout_seconds=float(data.get("timeout_seconds", 10.0)),
            max_retries=int(data.get("max_retries", 3)),
        )

    @property
    def credentials(self) -> dict[str, str]:
        """Credentials in the form expected by HubSpotClient."""
        credentials = {}
        if self.access_token:
            credentials["access_token"] = self.access_token
        if self.api_key:
            credentials["api_key"] = self.api_key
        return credentials


class HubSpotError(Exception):
    """Base class for all errors raised by the client."""
    pass


class ConfigError(HubSpotError):
    """Raised when there is an error loading or saving configuration."""
    pass


class PropertyDecodeError(HubSpotError):
    """Raised when a response cannot be decoded into the target structure."""
    pass


class APIError(HubSpotError):
    """Raised when API requests fail after retries."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

        # HubSpot error bodies look like
        # {"status": "error", "message": ..., "correlationId": ..., "category": ...}
        if isinstance(body, dict):
            self.category = body.get("category")
            self.correlation_id = body.get("correlationId")
        else:
            self.category = None
            self.correlation_id = None
