"""
Query and search options sent with CRM object requests.

RequestQueryOption becomes query parameters on GET requests.
RequestSearchOption becomes the JSON body of POST {base}/search.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any


class FilterOperator(Enum):
    """Comparison operators accepted by the search endpoint."""
    EQ = "EQ"
    NEQ = "NEQ"
    LT = "LT"
    LTE = "LTE"
    GT = "GT"
    GTE = "GTE"
    BETWEEN = "BETWEEN"
    IN = "IN"
    NOT_IN = "NOT_IN"
    HAS_PROPERTY = "HAS_PROPERTY"
    NOT_HAS_PROPERTY = "NOT_HAS_PROPERTY"
    CONTAINS_TOKEN = "CONTAINS_TOKEN"
    NOT_CONTAINS_TOKEN = "NOT_CONTAINS_TOKEN"


class SortDirection(Enum):
    """Sort order for search results."""
    ASCENDING = "ASCENDING"
    DESCENDING = "DESCENDING"


@dataclass
class RequestQueryOption:
    """
    Options for GET requests on CRM objects.

    If properties is empty, the resource's default field list is requested.
    A non-empty list replaces the default list entirely, so include every
    field you need (e.g. RequestQueryOption(properties=["name", "custom_a"])).
    Property names that do not exist on the object are ignored by HubSpot.
    """
    properties: list[str] = field(default_factory=list)
    associations: list[str] = field(default_factory=list)
    paginate_associations: bool = False
    archived: bool = False
    id_property: str | None = None
    limit: int | None = None
    after: str | None = None

    def setup_properties(self, default_fields: list[str]) -> "RequestQueryOption":
        """
        Return a copy of this option with the property list resolved.

        Args:
            default_fields: Field names to request when none were specified

        Returns:
            New RequestQueryOption; neither self nor default_fields is modified
        """
        if self.properties:
            properties = list(self.properties)
        else:
            properties = list(default_fields)
        return replace(self, properties=properties, associations=list(self.associations))

    def to_query_params(self) -> dict[str, str]:
        """Render the option as query parameters for the transport."""
        params: dict[str, str] = {}
        if self.properties:
            params["properties"] = ",".join(self.properties)
        if self.associations:
            params["associations"] = ",".join(self.associations)
        if self.paginate_associations:
            params["paginateAssociations"] = "true"
        if self.archived:
            params["archived"] = "true"
        if self.id_property:
            params["idProperty"] = self.id_property
        if self.limit is not None:
            params["limit"] = str(self.limit)
        if self.after:
            params["after"] = self.after
        return params


@dataclass
class Filter:
    """A single search condition on one property."""
    property_name: str
    operator: FilterOperator
    value: str | None = None
    values: list[str] | None = None
    high_value: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "propertyName": self.property_name,
            "operator": self.operator.value,
        }
        if self.value is not None:
            data["value"] = self.value
        if self.values is not None:
            data["values"] = list(self.values)
        if self.high_value is not None:
            data["highValue"] = self.high_value
        return data


@dataclass
class FilterGroup:
    """Filters combined with AND; groups are combined with OR."""
    filters: list[Filter] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"filters": [f.to_dict() for f in self.filters]}


@dataclass
class Sort:
    property_name: str
    direction: SortDirection = SortDirection.ASCENDING

    def to_dict(self) -> dict[str, str]:
        return {"propertyName": self.property_name, "direction": self.direction.value}


@dataclass
class RequestSearchOption:
    """
    Body of a search request.

    Sent as-is: unlike RequestQueryOption there is no default field
    substitution, so list the properties you want returned.
    """
    filter_groups: list[FilterGroup] = field(default_factory=list)
    sorts: list[Sort] = field(default_factory=list)
    query: str | None = None
    properties: list[str] = field(default_factory=list)
    limit: int | None = None
    after: str | None = None

    def to_body(self) -> dict[str, Any]:
        """Render the option as the JSON body of a search request."""
        body: dict[str, Any] = {
            "filterGroups": [group.to_dict() for group in self.filter_groups],
        }
        if self.sorts:
            body["sorts"] = [sort.to_dict() for sort in self.sorts]
        if self.query:
            body["query"] = self.query
        if self.properties:
            body["properties"] = list(self.properties)
        if self.limit is not None:
            body["limit"] = self.limit
        if self.after:
            body["after"] = self.after
        return body
