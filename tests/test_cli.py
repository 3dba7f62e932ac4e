"""Tests for the CLI."""

import json
from unittest.mock import MagicMock, Mock, patch

import pytest

from hubspot_crm.cli.main import main, parse_assignments, parse_filter, parse_sort
from hubspot_crm.core.envelope import AssociationResult, ResponseResource, ResponseResourceMulti
from hubspot_crm.core.models import APIError
from hubspot_crm.core.options import FilterOperator, SortDirection
from hubspot_crm.resources.company import Company, CompanyService


@pytest.fixture
def temp_config_dir(tmp_path, monkeypatch):
    """Create temporary config directory."""
    config_dir = tmp_path / "hubspot_config"
    config_dir.mkdir()
    monkeypatch.setenv("HUBSPOT_CRM_HOME", str(config_dir))
    for var in ("HUBSPOT_ACCESS_TOKEN", "HUBSPOT_API_KEY", "HUBSPOT_API_BASE_URL"):
        monkeypatch.delenv(var, raising=False)
    return config_dir


@pytest.fixture
def companies():
    """Mock company service behind a patched build_client."""
    service = Mock(spec=CompanyService)
    hubspot = MagicMock()
    hubspot.__enter__.return_value = hubspot
    hubspot.companies = service
    with patch("hubspot_crm.cli.main.build_client", return_value=hubspot):
        yield service


# ===== Parsing Tests =====

def test_parse_assignments():
    """Test name=value parsing keeps '=' in values."""
    assert parse_assignments(["name=Acme", "domain=a=b.com"]) == {
        "name": "Acme",
        "domain": "a=b.com",
    }


def test_parse_assignments_rejects_unknown_and_malformed():
    """Test unknown properties and missing '=' are rejected."""
    with pytest.raises(ValueError):
        parse_assignments(["nonexistent=1"])
    with pytest.raises(ValueError):
        parse_assignments(["name"])


def test_parse_filter_variants():
    """Test filter parsing for each operator shape."""
    eq = parse_filter("domain:eq:acme.com")
    assert eq.operator == FilterOperator.EQ
    assert eq.value == "acme.com"

    within = parse_filter("state:IN:CA,NY")
    assert within.values == ["CA", "NY"]

    between = parse_filter("n:BETWEEN:1,5")
    assert (between.value, between.high_value) == ("1", "5")

    has = parse_filter("phone:HAS_PROPERTY")
    assert has.value is None


def test_parse_filter_errors():
    """Test malformed filters raise ValueError."""
    for text in ["domain", "domain:LIKE:x", "domain:EQ", "n:BETWEEN:1"]:
        with pytest.raises(ValueError):
            parse_filter(text)


def test_parse_sort():
    """Test sort parsing."""
    assert parse_sort("name").direction == SortDirection.ASCENDING
    assert parse_sort("name:desc").direction == SortDirection.DESCENDING


# ===== Command Tests =====

def test_configure_saves_token(temp_config_dir, capsys):
    """Test configure writes the token to the config file."""
    main(["configure", "--token", "abc"])

    with open(temp_config_dir / "config.json") as f:
        assert json.load(f)["access_token"] == "abc"
    assert "Configuration saved" in capsys.readouterr().out


def test_companies_get(companies, capsys):
    """Test 'companies get' prints the decoded company."""
    def get(company_id, target, option):
        return ResponseResource(properties=target).load(
            {"id": company_id, "properties": {"name": "Acme"}}
        )

    companies.get.side_effect = get

    main(["companies", "get", "42", "--properties", "name,domain"])

    company_id, target, option = companies.get.call_args[0]
    assert company_id == "42"
    assert isinstance(target, Company)
    assert option.properties == ["name", "domain"]
    output = json.loads(capsys.readouterr().out)
    assert output["id"] == "42"
    assert output["properties"] == {"id": "42", "name": "Acme"}


def test_companies_get_association(companies, capsys):
    """Test 'companies get --association' prints associated ids."""
    companies.get.return_value = AssociationResult().load(
        {"results": [{"id": "7", "type": "company_to_contact"}]}
    )

    main(["companies", "get", "42", "--association", "contacts"])

    option = companies.get.call_args[0][2]
    assert option.associations == ["contacts"]
    output = json.loads(capsys.readouterr().out)
    assert output == {"results": [{"id": "7", "type": "company_to_contact"}]}


def test_companies_list(companies, capsys):
    """Test 'companies list' prints results and the next cursor."""
    companies.get_all.return_value = ResponseResourceMulti(model=Company).load({
        "results": [{"id": "1", "properties": {"name": "Acme"}}],
        "paging": {"next": {"after": "1"}},
    })

    main(["companies", "list", "--limit", "1"])

    model, option = companies.get_all.call_args[0]
    assert model is Company
    assert option.limit == 1
    output = json.loads(capsys.readouterr().out)
    assert output["results"][0]["properties"]["name"] == "Acme"
    assert output["next_after"] == "1"


def test_companies_search(companies, capsys):
    """Test 'companies search' builds the search option."""
    companies.search.return_value = ResponseResourceMulti(model=Company).load({"results": []})

    main([
        "companies", "search",
        "--filter", "domain:EQ:acme.com",
        "--sort", "name:desc",
        "--properties", "name",
    ])

    model, option = companies.search.call_args[0]
    assert option.to_body() == {
        "filterGroups": [
            {"filters": [{"propertyName": "domain", "operator": "EQ", "value": "acme.com"}]},
        ],
        "sorts": [{"propertyName": "name", "direction": "DESCENDING"}],
        "properties": ["name"],
    }
    assert json.loads(capsys.readouterr().out) == {"results": []}


def test_companies_create(companies, capsys):
    """Test 'companies create' sends the assigned properties."""
    companies.create.return_value = ResponseResource(
        properties=Company(name="Acme", city="Berlin"), id="1"
    )

    main(["companies", "create", "--set", "name=Acme", "--set", "city=Berlin"])

    target = companies.create.call_args[0][0]
    assert target.to_properties() == {"name": "Acme", "city": "Berlin"}
    output = json.loads(capsys.readouterr().out)
    assert output == {"id": "1", "properties": {"name": "Acme", "city": "Berlin"}}


def test_companies_update(companies, capsys):
    """Test 'companies update' passes the id and properties."""
    companies.update.return_value = ResponseResource(properties=Company(phone="555"), id="9")

    main(["companies", "update", "9", "--set", "phone=555"])

    company_id, target = companies.update.call_args[0]
    assert company_id == "9"
    assert target.to_properties() == {"phone": "555"}
    output = json.loads(capsys.readouterr().out)
    assert output == {"id": "9", "properties": {"phone": "555"}}


def test_companies_delete(companies, capsys):
    """Test 'companies delete' deletes and confirms."""
    main(["companies", "delete", "1"])

    companies.delete.assert_called_once_with("1")
    assert "Deleted company 1" in capsys.readouterr().out


def test_api_error_exits(companies, capsys):
    """Test API errors print to stderr and exit with status 1."""
    companies.delete.side_effect = APIError(
        "API request failed: 404",
        status_code=404,
        body={"correlationId": "abc"},
    )

    with pytest.raises(SystemExit) as exc_info:
        main(["companies", "delete", "1"])

    assert exc_info.value.code == 1
    err = capsys.readouterr().err
    assert "Error: API request failed: 404" in err
    assert "abc" in err


def test_missing_credentials_exits(temp_config_dir, capsys):
    """Test commands fail cleanly without credentials."""
    with pytest.raises(SystemExit) as exc_info:
        main(["companies", "delete", "1"])

    assert exc_info.value.code == 1
    assert "No HubSpot credentials" in capsys.readouterr().err


def test_no_command_prints_help(capsys):
    """Test running without a command prints help and exits."""
    with pytest.raises(SystemExit) as exc_info:
        main([])

    assert exc_info.value.code == 1
    assert "usage" in capsys.readouterr().out
