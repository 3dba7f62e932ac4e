"""Core components of the HubSpot CRM client."""

from .models import (
    ClientConfig,
    HubSpotError,
    APIError,
    ConfigError,
    PropertyDecodeError,
)
from .scalars import HsStr, HsTime, new_string, new_time
from .options import (
    FilterOperator,
    SortDirection,
    Filter,
    FilterGroup,
    Sort,
    RequestQueryOption,
    RequestSearchOption,
)
from .envelope import (
    PropertyBag,
    property_field,
    RequestPayload,
    Paging,
    AssociationRef,
    AssociationResult,
    ResponseResource,
    ResponseResourceMulti,
)
from .config_store import get_base_dir, config_path, save_config, load_config

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
    "RequestPayload",
    "Paging",
    "AssociationRef",
    "AssociationResult",
    "ResponseResource",
    "ResponseResourceMulti",
    "get_base_dir",
    "config_path",
    "save_config",
    "load_config",
]
