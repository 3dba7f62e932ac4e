"""Configuration persistence for the HubSpot CRM client."""

import json
import logging
import os
from pathlib import Path

from .models import ClientConfig, ConfigError

logger = logging.getLogger(__name__)

# Environment variables that override values stored on disk
ENV_OVERRIDES = {
    "HUBSPOT_ACCESS_TOKEN": "access_token",
    "HUBSPOT_API_KEY": "api_key",
    "HUBSPOT_API_BASE_URL": "api_base_url",
}


def get_base_dir() -> Path:
    """
    Get the base directory for storing configuration.

    The directory is determined by:
    1. Environment variable HUBSPOT_CRM_HOME if set
    2. Otherwise, ~/.hubspot_crm

    The directory is created if it does not exist.

    Returns:
        Path to the base directory
    """
    env_home = os.environ.get("HUBSPOT_CRM_HOME")
    if env_home:
        base_dir = Path(env_home)
    else:
        base_dir = Path.home() / ".hubspot_crm"

    base_dir.mkdir(parents=True, exist_ok=True)
    return base_dir


def config_path() -> Path:
    """Get the path of the configuration file."""
    return get_base_dir() / "config.json"


def save_config(config: ClientConfig) -> Path:
    """
    Save a ClientConfig as JSON.

    Args:
        config: Configuration to save

    Returns:
        Path to the saved file

    Raises:
        ConfigError: If the file cannot be written
    """
    path = config_path()

    try:
        with open(path, "w") as f:
            json.dump(config.to_dict(), f, indent=2)
        logger.debug(f"Saved configuration to {path}")
        return path
    except OSError as e:
        raise ConfigError(f"Failed to save configuration to {path}: {e}")


def load_config() -> ClientConfig:
    """
    Load the client configuration.

    Values stored on disk are read first (a missing file yields defaults),
    then HUBSPOT_ACCESS_TOKEN, HUBSPOT_API_KEY and HUBSPOT_API_BASE_URL
    override them when set.

    Returns:
        The loaded ClientConfig

    Raises:
        ConfigError: If the file exists but is not valid configuration
    """
    path = config_path()
    data = {}

    if path.exists():
        try:
            with open(path, "r") as f:
                data = json.load(f)
            logger.debug(f"Loaded configuration from {path}")
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}")
        except OSError as e:
            raise ConfigError(f"Failed to load configuration from {path}: {e}")

        if not isinstance(data, dict):
            raise ConfigError(f"Invalid configuration in {path}: expected an object")

    for env_var, key in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            data[key] = value

    try:
        return ClientConfig.from_dict(data)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Failed to parse configuration: {e}")
