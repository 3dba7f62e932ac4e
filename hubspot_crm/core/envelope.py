"""
Property-bag envelopes for CRM object requests and responses.

HubSpot represents every object as a flat mapping of named properties
wrapped in an envelope:

    {"id": "1", "properties": {"name": "Acme"}, "createdAt": ..., "updatedAt": ...}

PropertyBag maps that mapping onto a dataclass. Each field is declared with
property_field(), which records the wire name and the scalar wrapper kind in
the field metadata. Custom fields are added by subclassing:

    @dataclass
    class MyCompany(Company):
        region: HsStr = property_field("region")

and no registration step is needed; the subclass's extra fields are picked up
by to_properties() and from_properties() like the inherited ones.
"""

import logging
from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any

from .models import PropertyDecodeError
from .scalars import HsStr, HsTime

logger = logging.getLogger(__name__)


def property_field(name: str, kind: type = HsStr) -> Any:
    """
    Declare a dataclass field bound to a HubSpot property.

    Args:
        name: Property name on the wire (e.g. "hs_createdate")
        kind: Scalar wrapper class, HsStr or HsTime

    Returns:
        A dataclass field defaulting to an absent wrapper
    """
    return field(default_factory=kind, metadata={"property": name, "kind": kind})


@dataclass
class PropertyBag:
    """
    Base class for structures that serialize to a HubSpot property bag.

    Fields may be assigned plain literals (str, datetime) or None; they are
    wrapped in the declared kind on construction.
    """

    def __post_init__(self):
        for f in fields(self):
            kind = f.metadata.get("kind")
            if kind is None:
                continue
            value = getattr(self, f.name)
            if isinstance(value, kind):
                continue
            if isinstance(value, datetime):
                setattr(self, f.name, kind(value))
            else:
                setattr(self, f.name, kind.from_wire(value))

    @classmethod
    def property_names(cls) -> list[str]:
        """Wire names of every declared property, in declaration order."""
        return [f.metadata["property"] for f in fields(cls) if "property" in f.metadata]

    def to_properties(self) -> dict[str, Any]:
        """
        Serialize present properties to a wire mapping.

        Absent properties are omitted so that HubSpot leaves the stored
        value untouched on partial updates.
        """
        properties = {}
        for f in fields(self):
            name = f.metadata.get("property")
            if name is None:
                continue
            value = getattr(self, f.name)
            if value.is_set:
                properties[name] = value.to_wire()
        return properties

    def from_properties(self, properties: dict[str, Any]) -> "PropertyBag":
        """
        Populate this structure in place from a wire mapping.

        Unknown names in the mapping are ignored. Declared properties missing
        from the mapping keep their current value. Every value is decoded
        before any is assigned, so a decode failure leaves self unchanged.

        Raises:
            PropertyDecodeError: If the mapping or one of its values is invalid
        """
        if not isinstance(properties, dict):
            raise PropertyDecodeError(
                f"Expected a properties object, got {type(properties).__name__}"
            )

        decoded = {}
        for f in fields(self):
            name = f.metadata.get("property")
            if name is None or name not in properties:
                continue
            try:
                decoded[f.name] = f.metadata["kind"].from_wire(properties[name])
            except PropertyDecodeError as e:
                raise PropertyDecodeError(f"Property '{name}': {e}") from e

        for attr, value in decoded.items():
            setattr(self, attr, value)
        return self


@dataclass
class RequestPayload:
    """Body of create and update requests."""
    properties: PropertyBag

    def to_dict(self) -> dict[str, Any]:
        return {"properties": self.properties.to_properties()}


@dataclass
class Paging:
    """Cursor for the next page of a list response."""
    next_after: str | None = None
    next_link: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "Paging | None":
        if not data:
            return None
        if not isinstance(data, dict):
            raise PropertyDecodeError(f"Expected a paging object, got {type(data).__name__}")
        next_page = data.get("next") or {}
        if not isinstance(next_page, dict):
            raise PropertyDecodeError(f"Expected a paging.next object, got {type(next_page).__name__}")
        return cls(next_after=next_page.get("after"), next_link=next_page.get("link"))


@dataclass
class AssociationRef:
    """A single associated object."""
    id: str
    type: str | None = None


@dataclass
class AssociationResult:
    """
    Response of {base}/{id}/associations/{type}.

    Carries the ids of the associated objects rather than a property bag.
    """
    results: list[AssociationRef] = field(default_factory=list)
    paging: Paging | None = None

    @property
    def ids(self) -> list[str]:
        return [ref.id for ref in self.results]

    def load(self, data: Any) -> "AssociationResult":
        """Populate from a decoded JSON response."""
        if not isinstance(data, dict):
            raise PropertyDecodeError(f"Expected an object, got {type(data).__name__}")
        raw_results = data.get("results") or []
        if not isinstance(raw_results, list):
            raise PropertyDecodeError("Expected 'results' to be a list")

        results = []
        for item in raw_results:
            if not isinstance(item, dict):
                raise PropertyDecodeError("Expected association entries to be objects")
            # v4 responses use toObjectId instead of id
            object_id = item.get("id", item.get("toObjectId"))
            if object_id is None:
                raise PropertyDecodeError("Association entry without an id")
            results.append(AssociationRef(id=str(object_id), type=item.get("type")))

        paging = Paging.from_dict(data.get("paging"))
        self.results = results
        self.paging = paging
        return self


@dataclass
class ResponseResource:
    """
    Envelope of a single object response.

    properties is the caller's structure; load() populates it in place.
    """
    properties: PropertyBag | None = None
    id: str | None = None
    archived: bool = False
    created_at: HsTime = field(default_factory=HsTime)
    updated_at: HsTime = field(default_factory=HsTime)
    archived_at: HsTime = field(default_factory=HsTime)
    associations: dict[str, AssociationResult] = field(default_factory=dict)

    def load(self, data: Any) -> "ResponseResource":
        """
        Populate the envelope and its target from a decoded JSON response.

        The envelope id is copied into the target's "id" property when the
        response properties do not include one.

        Raises:
            PropertyDecodeError: If the response does not fit the envelope
        """
        if not isinstance(data, dict):
            raise PropertyDecodeError(f"Expected an object, got {type(data).__name__}")

        raw_properties = data.get("properties")
        if raw_properties is None:
            raw_properties = {}
        if not isinstance(raw_properties, dict):
            raise PropertyDecodeError(
                f"Expected a properties object, got {type(raw_properties).__name__}"
            )

        object_id = data.get("id")
        created_at = HsTime.from_wire(data.get("createdAt"))
        updated_at = HsTime.from_wire(data.get("updatedAt"))
        archived_at = HsTime.from_wire(data.get("archivedAt"))

        raw_associations = data.get("associations") or {}
        if not isinstance(raw_associations, dict):
            raise PropertyDecodeError("Expected 'associations' to be an object")
        associations = {
            name: AssociationResult().load(value)
            for name, value in raw_associations.items()
        }

        if self.properties is not None:
            if object_id is not None and "id" not in raw_properties:
                raw_properties = {**raw_properties, "id": object_id}
            self.properties.from_properties(raw_properties)

        self.id = str(object_id) if object_id is not None else None
        self.archived = data.get("archived") is True
        self.created_at = created_at
        self.updated_at = updated_at
        self.archived_at = archived_at
        self.associations = associations
        return self


@dataclass
class ResponseResourceMulti:
    """
    Envelope of a list or search response.

    Each result is decoded into a fresh instance of model.
    """
    model: type[PropertyBag]
    results: list[ResponseResource] = field(default_factory=list)
    paging: Paging | None = None

    def load(self, data: Any) -> "ResponseResourceMulti":
        """
        Populate from a decoded JSON response.

        Raises:
            PropertyDecodeError: If the response does not fit the envelope
        """
        if not isinstance(data, dict):
            raise PropertyDecodeError(f"Expected an object, got {type(data).__name__}")
        raw_results = data.get("results") or []
        if not isinstance(raw_results, list):
            raise PropertyDecodeError("Expected 'results' to be a list")

        results = [
            ResponseResource(properties=self.model()).load(item)
            for item in raw_results
        ]
        paging = Paging.from_dict(data.get("paging"))

        logger.debug(f"Decoded {len(results)} {self.model.__name__} results")
        self.results = results
        self.paging = paging
        return self

    @property
    def items(self) -> list[PropertyBag]:
        """The decoded structures, in response order."""
        return [resource.properties for resource in self.results]
