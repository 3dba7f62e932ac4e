"""Typed client for HubSpot CRM objects."""

from .core import (
    ClientConfig,
    HubSpotError,
    APIError,
    ConfigError,
    PropertyDecodeError,
    HsStr,
    HsTime,
    new_string,
    new_time,
    FilterOperator,
    SortDirection,
    Filter,
    FilterGroup,
    Sort,
    RequestQueryOption,
    RequestSearchOption,
    PropertyBag,
    property_field,
    AssociationResult,
    ResponseResource,
    ResponseResourceMulti,
)
from .resources import Company, CompanyService, ResourceService
from .client import HubSpot, HubSpotClient, build_client

__all__ = [
    "ClientConfig",
    "HubSpotError",
    "APIError",
    "ConfigError",
    "PropertyDecodeError",
    "HsStr",
    "HsTime",
    "new_string",
    "new_time",
    "FilterOperator",
    "SortDirection",
    "Filter",
    "FilterGroup",
    "Sort",
    "RequestQueryOption",
    "RequestSearchOption",
    "PropertyBag",
    "property_field",
    "AssociationResult",
    "ResponseResource",
    "ResponseResourceMulti",
    "Company",
    "CompanyService",
    "ResourceService",
    "HubSpot",
    "HubSpotClient",
    "build_client",
]
