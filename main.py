#!/usr/bin/env python3
"""OpenAPI Resource Explorer - Entry point."""
import logging
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import click
from colorama import Fore, Style, init

from config import AppConfig
from resource_explorer.cli.display import (
    echo_json,
    print_document_info,
    print_resource_tree,
    print_statistics,
)
from resource_explorer.cli.interactive import InteractiveExplorer
from resource_explorer.introspection.document_fetcher import DocumentFetcher
from resource_explorer.introspection.document_parser import OpenAPIDocumentParser
from resource_explorer.introspection.errors import OpenAPIDocumentError
from resource_explorer.render.schema_renderer import (
    FormSchemaOptions,
    SchemaRenderer,
    TableSchemaOptions,
)

# Initialize colorama
init(autoreset=True)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def print_banner():
    """Print application banner."""
    print(f"{Fore.CYAN}{'=' * 44}")
    print(f"{Fore.CYAN}║   {Fore.WHITE}OpenAPI Resource Explorer{Fore.CYAN}            ║")
    print(f"{Fore.CYAN}║   {Fore.WHITE}Resources, schemas, forms, tables{Fore.CYAN}    ║")
    print(f"{Fore.CYAN}{'=' * 44}{Style.RESET_ALL}")
    print()


def fail(message: str):
    """Report a fatal error and exit with status 1."""
    click.echo(f"{Fore.RED}Error: {message}", err=True)
    sys.exit(1)


def load_parser(ctx: click.Context) -> OpenAPIDocumentParser:
    """Fetch and parse the document named by --source or the environment."""
    app_config: AppConfig = ctx.obj["config"]
    source = ctx.obj["source"] or app_config.source.url
    if not source:
        fail("No document source. Use --source or set OPENAPI_EXPLORER_URL")

    fetcher = DocumentFetcher(
        token=app_config.source.token or None,
        timeout=app_config.source.timeout,
        cache_dir=app_config.source.cache_dir,
        cache_ttl=app_config.source.cache_ttl,
    )
    parser = OpenAPIDocumentParser(fetcher=fetcher, fallback_origin=app_config.fallback_origin)

    try:
        parser.parse_document(source)
    except OpenAPIDocumentError as e:
        fail(str(e))

    return parser


def load_schema(parser: OpenAPIDocumentParser, name: str):
    """Instance schema of a resource, exiting when there is none."""
    resource = parser.find_resource(name)
    if resource is None:
        fail(f"Resource not found: {name}")

    schema = parser.get_instance_schema(resource)
    if schema is None:
        fail(f"No instance schema available for resource: {name}")

    return resource, schema


@click.group()
@click.version_option(version="0.1.0")
@click.option(
    "--source",
    "-s",
    help="OpenAPI document URL or local JSON/YAML file",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging",
)
@click.pass_context
def cli(ctx, source, verbose):
    """OpenAPI Resource Explorer - Browse the resources described by an OpenAPI document."""
    app_config = AppConfig.from_env()
    logging.basicConfig(
        level=logging.DEBUG if verbose else app_config.log_level,
        format=LOG_FORMAT,
    )
    ctx.obj = {"config": app_config, "source": source}


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print as JSON")
@click.pass_context
def info(ctx, as_json):
    """Show document title, version and servers."""
    document_info = load_parser(ctx).get_document_info()

    if as_json:
        echo_json(document_info.to_dict())
    else:
        print_document_info(document_info)


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print as JSON")
@click.pass_context
def resources(ctx, as_json):
    """List resources with their sub-resources."""
    parser = load_parser(ctx)
    top_level = parser.get_top_level_resources()

    if as_json:
        echo_json([resource.to_dict() for resource in top_level])
    elif not top_level:
        click.echo(f"{Fore.YELLOW}No RESTful resources found")
    else:
        print_resource_tree(top_level)


@cli.command()
@click.argument("name")
@click.pass_context
def schema(ctx, name):
    """Print the resolved instance schema of a resource."""
    _, instance_schema = load_schema(load_parser(ctx), name)
    echo_json(instance_schema)


@cli.command()
@click.argument("method")
@click.argument("path")
@click.pass_context
def operation(ctx, method, path):
    """Print the definition of one operation (e.g. GET /users/{id})."""
    operation_info = load_parser(ctx).get_operation_info(method, path)
    if operation_info is None:
        fail(f"Operation not found: {method.upper()} {path}")

    echo_json(operation_info.to_dict())


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print as JSON")
@click.pass_context
def stats(ctx, as_json):
    """Show resource and operation counts."""
    statistics = load_parser(ctx).get_resource_statistics()

    if as_json:
        echo_json(statistics.to_dict())
    else:
        print_statistics(statistics)


@cli.command()
@click.argument("name")
@click.option(
    "--mode",
    type=click.Choice(["create", "edit", "view"]),
    default="create",
    show_default=True,
    help="Form flavour",
)
@click.option("--include", "include_fields", multiple=True, help="Only these fields")
@click.option("--exclude", "exclude_fields", multiple=True, help="Leave these fields out")
@click.option("--order", "field_order", multiple=True, help="Field order")
@click.pass_context
def form(ctx, name, mode, include_fields, exclude_fields, field_order):
    """Print the form schema (schema / uiSchema / formData) of a resource."""
    parser = load_parser(ctx)
    resource, instance_schema = load_schema(parser, name)

    renderer = SchemaRenderer()
    options = FormSchemaOptions(
        readonly=mode == "view",
        include_fields=list(include_fields) or None,
        exclude_fields=list(exclude_fields),
        field_order=list(field_order) or None,
        schema_resolver=parser.resolve_ref,
    )

    if mode == "create":
        result = renderer.get_create_form_schema(instance_schema, options)
    elif mode == "edit":
        result = renderer.get_edit_form_schema(instance_schema, options, identifier_field=resource.identifier_field)
    else:
        result = renderer.get_form_schema(instance_schema, options)

    echo_json(result.to_dict())


@cli.command()
@click.argument("name")
@click.option("--column", "columns", multiple=True, help="Only these columns")
@click.option("--exclude", "exclude_columns", multiple=True, help="Leave these columns out")
@click.option("--order", "column_order", multiple=True, help="Column order")
@click.pass_context
def table(ctx, name, columns, exclude_columns, column_order):
    """Print the table schema (columns / sort / pagination) of a resource."""
    parser = load_parser(ctx)
    _, instance_schema = load_schema(parser, name)

    options = TableSchemaOptions(
        columns=list(columns) or None,
        exclude_columns=list(exclude_columns),
        column_order=list(column_order) or None,
        schema_resolver=parser.resolve_ref,
    )
    echo_json(SchemaRenderer().get_table_schema(instance_schema, options).to_dict())


@cli.command()
@click.pass_context
def explore(ctx):
    """Browse the document interactively."""
    print_banner()

    parser = load_parser(ctx)
    click.echo(f"{Fore.GREEN}Loaded {parser.get_document_info().title}")

    InteractiveExplorer(parser).run()


if __name__ == "__main__":
    cli()
