"""Main CLI entry point for the HubSpot CRM client."""

import argparse
import json
import logging
import sys

from hubspot_crm.client import build_client
from hubspot_crm.core import (
    APIError,
    HubSpotError,
    Filter,
    FilterGroup,
    FilterOperator,
    RequestQueryOption,
    RequestSearchOption,
    Sort,
    SortDirection,
    load_config,
    save_config,
)
from hubspot_crm.core.envelope import AssociationResult, ResponseResource
from hubspot_crm.resources import Company

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def _split_list(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_assignments(pairs: list[str]) -> dict[str, str]:
    """
    Parse 'name=value' pairs into a properties mapping.

    Raises:
        ValueError: If a pair has no '=' or names an unknown property
    """
    known = set(Company.property_names())
    properties = {}
    for pair in pairs:
        if "=" not in pair:
            raise ValueError(f"Expected name=value, got '{pair}'")
        name, value = pair.split("=", 1)
        name = name.strip()
        if name not in known:
            raise ValueError(f"Unknown company property '{name}'")
        properties[name] = value
    return properties


def parse_filter(text: str) -> Filter:
    """
    Parse a filter of the form 'property:OPERATOR[:value]'.

    IN and NOT_IN take a comma-separated list of values; BETWEEN takes
    'low,high'; HAS_PROPERTY and NOT_HAS_PROPERTY take no value.

    Raises:
        ValueError: If the filter is malformed
    """
    parts = text.split(":", 2)
    if len(parts) < 2:
        raise ValueError(f"Expected property:OPERATOR[:value], got '{text}'")

    property_name, operator_name = parts[0].strip(), parts[1].strip().upper()
    try:
        operator = FilterOperator(operator_name)
    except ValueError:
        raise ValueError(f"Unknown filter operator '{operator_name}'")
    value = parts[2] if len(parts) == 3 else None

    if operator in (FilterOperator.HAS_PROPERTY, FilterOperator.NOT_HAS_PROPERTY):
        return Filter(property_name=property_name, operator=operator)
    if value is None:
        raise ValueError(f"Operator {operator_name} requires a value")
    if operator in (FilterOperator.IN, FilterOperator.NOT_IN):
        return Filter(property_name=property_name, operator=operator, values=_split_list(value))
    if operator == FilterOperator.BETWEEN:
        bounds = _split_list(value)
        if len(bounds) != 2:
            raise ValueError("BETWEEN requires 'low,high'")
        return Filter(
            property_name=property_name,
            operator=operator,
            value=bounds[0],
            high_value=bounds[1],
        )
    return Filter(property_name=property_name, operator=operator, value=value)


def parse_sort(text: str) -> Sort:
    """Parse a sort of the form 'property[:asc|desc]'."""
    name, _, direction = text.partition(":")
    if direction.lower() in ("desc", "descending"):
        return Sort(property_name=name, direction=SortDirection.DESCENDING)
    return Sort(property_name=name)


def resource_to_dict(resource: ResponseResource) -> dict:
    """Render a response envelope for output."""
    data = {
        "id": resource.id,
        "properties": resource.properties.to_properties() if resource.properties else {},
    }
    if resource.created_at.is_set:
        data["createdAt"] = str(resource.created_at)
    if resource.updated_at.is_set:
        data["updatedAt"] = str(resource.updated_at)
    if resource.archived:
        data["archived"] = True
    return data


def _print_json(data) -> None:
    print(json.dumps(data, indent=2))


def _fail(message: str, args) -> None:
    print(f"Error: {message}", file=sys.stderr)
    if getattr(args, "verbose", False):
        import traceback
        traceback.print_exc()
    sys.exit(1)


def cmd_configure(args):
    """Handle the configure command."""
    config = load_config()
    config.access_token = args.token
    if args.base_url:
        config.api_base_url = args.base_url
    path = save_config(config)
    print(f"Configuration saved to: {path}")


def cmd_company_get(args):
    """Handle 'companies get'."""
    option = RequestQueryOption(properties=_split_list(args.properties))
    if args.association:
        option.associations = [args.association]

    with build_client() as hubspot:
        result = hubspot.companies.get(args.id, Company(), option)

    if isinstance(result, AssociationResult):
        _print_json({"results": [{"id": ref.id, "type": ref.type} for ref in result.results]})
    else:
        _print_json(resource_to_dict(result))


def cmd_company_list(args):
    """Handle 'companies list'."""
    option = RequestQueryOption(
        properties=_split_list(args.properties),
        limit=args.limit,
        after=args.after,
    )
    with build_client() as hubspot:
        result = hubspot.companies.get_all(Company, option)

    output = {"results": [resource_to_dict(r) for r in result.results]}
    if result.paging and result.paging.next_after:
        output["next_after"] = result.paging.next_after
    _print_json(output)


def cmd_company_search(args):
    """Handle 'companies search'."""
    filters = [parse_filter(text) for text in args.filter or []]
    option = RequestSearchOption(
        filter_groups=[FilterGroup(filters=filters)] if filters else [],
        sorts=[parse_sort(text) for text in args.sort or []],
        query=args.query,
        properties=_split_list(args.properties),
        limit=args.limit,
        after=args.after,
    )
    with build_client() as hubspot:
        result = hubspot.companies.search(Company, option)

    output = {"results": [resource_to_dict(r) for r in result.results]}
    if result.paging and result.paging.next_after:
        output["next_after"] = result.paging.next_after
    _print_json(output)


def cmd_company_create(args):
    """Handle 'companies create'."""
    company = Company().from_properties(parse_assignments(args.set))
    with build_client() as hubspot:
        result = hubspot.companies.create(company)
    _print_json(resource_to_dict(result))


def cmd_company_update(args):
    """Handle 'companies update'."""
    company = Company().from_properties(parse_assignments(args.set))
    with build_client() as hubspot:
        result = hubspot.companies.update(args.id, company)
    _print_json(resource_to_dict(result))


def cmd_company_delete(args):
    """Handle 'companies delete'."""
    with build_client() as hubspot:
        hubspot.companies.delete(args.id)
    print(f"Deleted company {args.id}")


def run_command(args):
    """Run a companies sub-command, turning failures into an exit status."""
    try:
        args.func(args)
    except APIError as e:
        message = str(e)
        if e.correlation_id:
            message += f" (correlation id {e.correlation_id})"
        _fail(message, args)
    except (HubSpotError, ValueError) as e:
        _fail(str(e), args)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="hubspot-crm",
        description="HubSpot CRM client CLI",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Configure command
    configure_parser = subparsers.add_parser("configure", help="Save credentials and API settings")
    configure_parser.add_argument("--token", required=True, help="Private app or OAuth access token")
    configure_parser.add_argument("--base-url", help="API base URL (default: https://api.hubapi.com)")
    configure_parser.set_defaults(func=cmd_configure)

    # Companies command group
    companies_parser = subparsers.add_parser("companies", help="Work with companies")
    company_commands = companies_parser.add_subparsers(dest="action", help="Company operation")

    get_parser = company_commands.add_parser("get", help="Get a company")
    get_parser.add_argument("id", help="HubSpot company ID")
    get_parser.add_argument("--properties", help="Comma-separated property names")
    get_parser.add_argument("--association", help="Association type to fetch instead (e.g. 'contacts')")
    get_parser.set_defaults(func=cmd_company_get)

    list_parser = company_commands.add_parser("list", help="List companies")
    list_parser.add_argument("--properties", help="Comma-separated property names")
    list_parser.add_argument("--limit", type=int, help="Page size")
    list_parser.add_argument("--after", help="Paging cursor from a previous call")
    list_parser.set_defaults(func=cmd_company_list)

    search_parser = company_commands.add_parser("search", help="Search companies")
    search_parser.add_argument(
        "--filter",
        action="append",
        help="Filter as property:OPERATOR[:value] (repeatable, combined with AND)",
    )
    search_parser.add_argument("--sort", action="append", help="Sort as property[:asc|desc]")
    search_parser.add_argument("--query", help="Free-text query")
    search_parser.add_argument("--properties", help="Comma-separated property names")
    search_parser.add_argument("--limit", type=int, help="Page size")
    search_parser.add_argument("--after", help="Paging cursor from a previous call")
    search_parser.set_defaults(func=cmd_company_search)

    create_parser = company_commands.add_parser("create", help="Create a company")
    create_parser.add_argument("--set", action="append", required=True, help="Property as name=value (repeatable)")
    create_parser.set_defaults(func=cmd_company_create)

    update_parser = company_commands.add_parser("update", help="Update a company")
    update_parser.add_argument("id", help="HubSpot company ID")
    update_parser.add_argument("--set", action="append", required=True, help="Property as name=value (repeatable)")
    update_parser.set_defaults(func=cmd_company_update)

    delete_parser = company_commands.add_parser("delete", help="Delete a company")
    delete_parser.add_argument("id", help="HubSpot company ID")
    delete_parser.set_defaults(func=cmd_company_delete)

    return parser


def main(argv: list[str] | None = None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if not args.command or not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    run_command(args)


if __name__ == "__main__":
    main()
