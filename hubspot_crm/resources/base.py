"""Base class for CRM object services."""

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ..core.envelope import (
    AssociationResult,
    PropertyBag,
    RequestPayload,
    ResponseResource,
    ResponseResourceMulti,
)
from ..core.options import RequestQueryOption, RequestSearchOption

if TYPE_CHECKING:
    from ..client.transport import HubSpotClient

logger = logging.getLogger(__name__)


class ResourceService(ABC):
    """
    CRUD, search and association operations for one CRM object type.

    Each object type (companies, contacts, deals, ...) subclasses this and
    supplies its base path, default field list and model class. Every
    operation is a single transport call; errors from the transport
    propagate unchanged.
    """

    def __init__(self, client: "HubSpotClient"):
        """
        Initialize the service.

        Args:
            client: Transport used for every request
        """
        self.client = client

    @property
    @abstractmethod
    def base_path(self) -> str:
        """Path of the object type under the objects API (e.g. 'companies')."""
        pass

    @property
    @abstractmethod
    def default_fields(self) -> list[str]:
        """Property names requested when the caller does not name any."""
        pass

    @property
    @abstractmethod
    def model(self) -> type[PropertyBag]:
        """Structure that list and search results decode into by default."""
        pass

    def _object_path(self, object_id: str) -> str:
        return f"{self.base_path}/{object_id}"

    def get(
        self,
        object_id: str,
        target: PropertyBag,
        option: RequestQueryOption | None = None,
    ) -> ResponseResource | AssociationResult:
        """
        Get a single object and decode it into target.

        To request custom fields, name every property you need, e.g.
        RequestQueryOption(properties=["name", "custom_a"]). Names that do
        not exist are ignored.

        If option.associations is set, the associated object ids for the
        first association type are fetched instead and an AssociationResult
        is returned; target is left untouched. Fetch further association
        types with separate calls. The query is resolved against the default
        fields on both paths.

        Args:
            object_id: HubSpot object ID
            target: Structure to populate
            option: Query option (defaults to the default field list)

        Returns:
            ResponseResource wrapping target, or AssociationResult
        """
        option = option or RequestQueryOption()
        path = self._object_path(object_id)

        if option.associations:
            path += "/associations/" + option.associations[0]
            logger.debug(f"Fetching {option.associations[0]} associations of {path}")
            return self.client.get(path, AssociationResult(), option.setup_properties(self.default_fields))

        resource = ResponseResource(properties=target)
        logger.debug(f"Fetching {path}")
        return self.client.get(path, resource, option.setup_properties(self.default_fields))

    def get_all(
        self,
        model: type[PropertyBag] | None = None,
        option: RequestQueryOption | None = None,
    ) -> ResponseResourceMulti:
        """
        Get a page of objects.

        Args:
            model: Structure each result decodes into (defaults to self.model)
            option: Query option; pass option.after to fetch the next page

        Returns:
            ResponseResourceMulti with results and paging cursor
        """
        option = option or RequestQueryOption()
        resource = ResponseResourceMulti(model=model or self.model)
        logger.debug(f"Listing {self.base_path}")
        return self.client.get(self.base_path, resource, option.setup_properties(self.default_fields))

    def search(
        self,
        model: type[PropertyBag] | None,
        option: RequestSearchOption,
    ) -> ResponseResourceMulti:
        """
        Search objects.

        The option is sent as the request body unchanged; no default fields
        are added, so list the properties you want in option.properties.

        Args:
            model: Structure each result decodes into (defaults to self.model)
            option: Filters, sorts and properties

        Returns:
            ResponseResourceMulti with results and paging cursor
        """
        resource = ResponseResourceMulti(model=model or self.model)
        path = f"{self.base_path}/search"
        logger.debug(f"Searching {path}")
        return self.client.post(path, option, resource)

    def create(self, target: PropertyBag) -> ResponseResource:
        """
        Create an object.

        target is sent as the properties of the request and is populated in
        place from the response (generated id, server-set properties).
        Subclass the model to send custom fields.
        """
        request = RequestPayload(properties=target)
        resource = ResponseResource(properties=target)
        logger.debug(f"Creating object in {self.base_path}")
        return self.client.post(self.base_path, request, resource)

    def update(self, object_id: str, target: PropertyBag) -> ResponseResource:
        """
        Update an object.

        Only properties set on target are sent; absent ones keep their
        stored value. target is populated in place from the response.
        """
        request = RequestPayload(properties=target)
        resource = ResponseResource(properties=target)
        path = self._object_path(object_id)
        logger.debug(f"Updating {path}")
        return self.client.patch(path, request, resource)

    def delete(self, object_id: str) -> None:
        """Delete (archive) an object by its HubSpot ID."""
        path = self._object_path(object_id)
        logger.debug(f"Deleting {path}")
        self.client.delete(path)
