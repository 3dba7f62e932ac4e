"""End-to-end tests through httpx with a mocked network layer."""

import json
from dataclasses import dataclass

import httpx
import pytest

from hubspot_crm import (
    APIError,
    Company,
    Filter,
    FilterGroup,
    FilterOperator,
    HsStr,
    RequestQueryOption,
    RequestSearchOption,
    property_field,
)
from hubspot_crm.client import HubSpot, HubSpotClient
from hubspot_crm.core.envelope import AssociationResult


@dataclass
class TrialCompany(Company):
    """Company with a custom property."""
    plan: HsStr = property_field("plan")


class FakeHubSpot:
    """Records requests and replies with queued responses."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responses: list[httpx.Response] = []

    def reply(self, status_code: int, payload=None):
        if payload is None:
            self.responses.append(httpx.Response(status_code))
        else:
            self.responses.append(httpx.Response(status_code, json=payload))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responses.pop(0)


@pytest.fixture
def fake():
    return FakeHubSpot()


@pytest.fixture
def hubspot(fake):
    """HubSpot bundle whose transport talks to the fake server."""
    http_client = httpx.Client(transport=httpx.MockTransport(fake))
    transport = HubSpotClient(
        credentials={"access_token": "pat-123"},
        http_client=http_client,
        max_retries=1,
    )
    yield HubSpot(transport)
    http_client.close()


def test_create_company(hubspot, fake):
    """Test create sends the property bag and fills in the new id."""
    fake.reply(201, {
        "id": "1",
        "properties": {"name": "Acme", "hs_object_id": "1"},
        "createdAt": "2024-05-01T10:00:00.000Z",
        "updatedAt": "2024-05-01T10:00:00.000Z",
        "archived": False,
    })
    company = Company(name=HsStr("Acme"))

    resource = hubspot.companies.create(company)

    request = fake.requests[0]
    assert request.method == "POST"
    assert str(request.url) == "https://api.hubapi.com/crm/v3/objects/companies"
    assert request.headers["Authorization"] == "Bearer pat-123"
    assert json.loads(request.content) == {"properties": {"name": "Acme"}}
    assert company.id == "1"
    assert company.name == "Acme"
    assert company.hs_object_id == "1"
    assert resource.created_at.is_set


def test_get_company_with_custom_fields(hubspot, fake):
    """Test get requests the named properties and decodes custom ones."""
    fake.reply(200, {
        "id": "42",
        "properties": {"name": "Acme", "plan": "enterprise", "ignored": "x"},
    })
    company = TrialCompany()

    hubspot.companies.get("42", company, RequestQueryOption(properties=["name", "plan"]))

    request = fake.requests[0]
    assert request.url.path == "/crm/v3/objects/companies/42"
    assert request.url.params["properties"] == "name,plan"
    assert company.plan == "enterprise"
    assert company.name == "Acme"


def test_get_company_default_properties(hubspot, fake):
    """Test get without properties requests the default field list."""
    fake.reply(200, {"id": "42", "properties": {}})

    hubspot.companies.get("42", Company())

    requested = fake.requests[0].url.params["properties"].split(",")
    assert requested == Company.property_names()


def test_get_company_associations(hubspot, fake):
    """Test association lookup hits the association sub-path."""
    fake.reply(200, {"results": [{"id": "501", "type": "company_to_contact"}]})

    result = hubspot.companies.get(
        "42", Company(), RequestQueryOption(associations=["contacts"])
    )

    assert fake.requests[0].url.path == "/crm/v3/objects/companies/42/associations/contacts"
    assert fake.requests[0].url.params["properties"].split(",") == Company.property_names()
    assert isinstance(result, AssociationResult)
    assert result.ids == ["501"]


def test_list_companies_with_paging(hubspot, fake):
    """Test list decodes every result and the paging cursor."""
    fake.reply(200, {
        "results": [
            {"id": "1", "properties": {"name": "Acme"}},
            {"id": "2", "properties": {"name": "Globex"}},
        ],
        "paging": {"next": {"after": "2", "link": "?after=2"}},
    })

    page = hubspot.companies.get_all(Company, RequestQueryOption(limit=2))

    assert fake.requests[0].url.params["limit"] == "2"
    assert [str(c.name) for c in page.items] == ["Acme", "Globex"]
    assert page.paging.next_after == "2"


def test_search_companies(hubspot, fake):
    """Test search posts the filters as the request body."""
    fake.reply(200, {"total": 1, "results": [{"id": "1", "properties": {"domain": "acme.com"}}]})
    option = RequestSearchOption(
        filter_groups=[FilterGroup(filters=[Filter("domain", FilterOperator.EQ, value="acme.com")])],
        properties=["domain"],
    )

    page = hubspot.companies.search(Company, option)

    request = fake.requests[0]
    assert request.url.path == "/crm/v3/objects/companies/search"
    assert json.loads(request.content) == {
        "filterGroups": [
            {"filters": [{"propertyName": "domain", "operator": "EQ", "value": "acme.com"}]},
        ],
        "properties": ["domain"],
    }
    assert page.items[0].domain == "acme.com"


def test_update_sends_only_set_properties(hubspot, fake):
    """Test update omits absent properties and sends empty strings."""
    fake.reply(200, {"id": "9", "properties": {"phone": "", "city": "Berlin"}})
    company = Company(phone=HsStr(""))

    hubspot.companies.update("9", company)

    request = fake.requests[0]
    assert request.method == "PATCH"
    assert json.loads(request.content) == {"properties": {"phone": ""}}
    assert company.city == "Berlin"
    assert company.phone == ""


def test_delete_missing_company(hubspot, fake):
    """Test deleting a missing company raises the API error unchanged."""
    fake.reply(404, {
        "status": "error",
        "message": "resource not found",
        "correlationId": "c0ffee",
        "category": "OBJECT_NOT_FOUND",
    })

    with pytest.raises(APIError) as exc_info:
        hubspot.companies.delete("1")

    assert exc_info.value.status_code == 404
    assert exc_info.value.category == "OBJECT_NOT_FOUND"
    assert fake.requests[0].method == "DELETE"


def test_delete_company(hubspot, fake):
    """Test a successful delete returns None."""
    fake.reply(204)

    assert hubspot.companies.delete("1") is None
    assert fake.requests[0].url.path == "/crm/v3/objects/companies/1"


def test_failed_get_leaves_target_untouched(hubspot, fake):
    """Test a server error does not modify the caller's structure."""
    fake.reply(500, {"status": "error", "message": "boom"})
    company = Company(name="Before")

    with pytest.raises(APIError):
        hubspot.companies.get("42", company)

    assert company.name == "Before"
    assert company.id.is_set is False
