"""
Builder for configured HubSpot clients.

Ties together stored configuration, the HTTP transport and the resource
services.
"""

import logging

from ..core.config_store import load_config
from ..core.models import ClientConfig, ConfigError
from ..resources.company import CompanyService
from .transport import HubSpotClient

logger = logging.getLogger(__name__)


class HubSpot:
    """
    Entry point bundling a transport with the resource services.

    Example:
        >>> with build_client() as hubspot:
        ...     company = Company()
        ...     hubspot.companies.get("42", company)
    """

    def __init__(self, client: HubSpotClient):
        self.client = client
        self.companies = CompanyService(client)

    def close(self) -> None:
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


def build_client(config: ClientConfig | None = None) -> HubSpot:
    """
    Build a HubSpot client from configuration.

    Args:
        config: Configuration to use (loaded from disk and environment if None)

    Returns:
        Configured HubSpot ready to use

    Raises:
        ConfigError: If no access token or API key is configured
    """
    if config is None:
        config = load_config()

    credentials = config.credentials
    if not credentials:
        raise ConfigError(
            "No HubSpot credentials configured. "
            "Set HUBSPOT_ACCESS_TOKEN or run 'hubspot-crm configure --token ...'."
        )

    logger.debug(f"Building client for {config.api_base_url}")
    transport = HubSpotClient(
        credentials=credentials,
        api_base_url=config.api_base_url,
        object_path=config.object_path,
        timeout_seconds=config.timeout_seconds,
        max_retries=config.max_retries,
    )
    return HubSpot(transport)
