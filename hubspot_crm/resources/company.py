"""
HubSpot companies.

HubSpot companies store information about company entities.
Reference: https://developers.hubspot.com/docs/api/crm/companies
"""

from dataclasses import dataclass

from ..core.envelope import PropertyBag, property_field
from ..core.scalars import HsStr, HsTime
from .base import ResourceService

COMPANY_BASE_PATH = "companies"

# Separator of the tokens stored in the products property
PRODUCT_NAME_DELIMITER = ";"

DEFAULT_COMPANY_FIELDS = [
    "id",
    "name",
    "industry",
    "domain",
    "phone",
    "city",
    "state",
    "hs_createdate",
    "hs_lastmodifieddate",
    "hs_object_id",
    "hubspot_owner_assigneddate",
    "hubspot_owner_id",

    # custom defined properties
    "products",
    "trial_status",
    "trial_end_date",
]


@dataclass
class Company(PropertyBag):
    """
    Company properties.

    To use further custom properties, subclass and declare them:

        @dataclass
        class MyCompany(Company):
            region: HsStr = property_field("region")
    """
    id: HsStr = property_field("id")
    name: HsStr = property_field("name")
    industry: HsStr = property_field("industry")
    domain: HsStr = property_field("domain")
    phone: HsStr = property_field("phone")
    city: HsStr = property_field("city")
    state: HsStr = property_field("state")
    hs_create_date: HsTime = property_field("hs_createdate", HsTime)
    hs_last_modified_date: HsTime = property_field("hs_lastmodifieddate", HsTime)
    hs_object_id: HsStr = property_field("hs_object_id")
    hubspot_owner_assigned_date: HsTime = property_field("hubspot_owner_assigneddate", HsTime)
    hubspot_owner_id: HsStr = property_field("hubspot_owner_id")

    # custom defined properties
    product_names: HsStr = property_field("products")
    trial_status: HsStr = property_field("trial_status")
    trial_end_date: HsStr = property_field("trial_end_date")

    def product_name_list(self) -> list[str]:
        """Tokens of the products property; empty when absent or empty."""
        if not self.product_names.is_set or str(self.product_names) == "":
            return []
        return str(self.product_names).split(PRODUCT_NAME_DELIMITER)

    def add_product_name(self, name: str) -> None:
        """Append a product name. Existing names are not deduplicated."""
        names = self.product_name_list()
        names.append(name)
        self.product_names = HsStr(PRODUCT_NAME_DELIMITER.join(names))

    def remove_product_name(self, name: str) -> None:
        """
        Remove the first occurrence of a product name.

        The property becomes absent, not "", once no names remain.
        """
        if not self.product_names.is_set:
            return
        names = str(self.product_names).split(PRODUCT_NAME_DELIMITER)
        if name in names:
            names.remove(name)
        if not names:
            self.product_names = HsStr()
            return
        self.product_names = HsStr(PRODUCT_NAME_DELIMITER.join(names))


class CompanyService(ResourceService):
    """Company endpoints of the HubSpot CRM API."""

    @property
    def base_path(self) -> str:
        return COMPANY_BASE_PATH

    @property
    def default_fields(self) -> list[str]:
        return DEFAULT_COMPANY_FIELDS

    @property
    def model(self) -> type[PropertyBag]:
        return Company
