"""
HTTP transport and client construction.

This module provides the httpx transport used by the resource services
and the helper that builds it from stored configuration.
"""

from .transport import HubSpotClient, build_auth_headers
from .builder import HubSpot, build_client

__all__ = [
    "HubSpotClient",
    "build_auth_headers",
    "HubSpot",
    "build_client",
]
