"""Terminal output helpers shared by the commands and the interactive explorer."""
import json
from typing import Any, List

import click
from colorama import Fore, Style

from resource_explorer.resources.models import DocumentInfo, ResourceInfo, ResourceStatistics

METHOD_COLORS = {
    "GET": Fore.GREEN,
    "POST": Fore.YELLOW,
    "PUT": Fore.BLUE,
    "PATCH": Fore.CYAN,
    "DELETE": Fore.RED,
}


def print_header(title: str):
    """Print a section header."""
    click.echo(f"\n{Fore.CYAN}{'━' * 45}")
    click.echo(f"{Fore.CYAN}{title}")
    click.echo(f"{Fore.CYAN}{'━' * 45}{Style.RESET_ALL}\n")


def echo_json(data: Any):
    """Print data as indented JSON."""
    click.echo(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def print_document_info(info: DocumentInfo):
    click.echo(f"{Fore.GREEN}{info.title} {Fore.WHITE}v{info.version}")
    click.echo(f"   OpenAPI: {info.openapi_version}")
    if info.description:
        click.echo(f"   {info.description}")
    if info.servers:
        click.echo("   Servers:")
        for server in info.servers:
            click.echo(f"   • {server}")


def print_resource_tree(resources: List[ResourceInfo], depth: int = 0):
    """Print resources with their sub-resources indented below them."""
    for resource in resources:
        indent = "   " * depth
        methods = ", ".join(resource.methods())
        click.echo(
            f"{indent}• {Fore.GREEN}{resource.name:20s}{Style.RESET_ALL} "
            f"{resource.path_pattern:35s} [{methods}] id={resource.identifier_field}"
        )
        print_resource_tree(resource.sub_resources, depth + 1)


def print_resource_details(resource: ResourceInfo):
    click.echo(f"{Fore.GREEN}{resource.name}")
    click.echo(f"   Path pattern: {resource.path_pattern}")
    click.echo(f"   Base path: {resource.base_path}")
    click.echo(f"   Identifier: {resource.identifier_field}")
    if resource.tags:
        click.echo(f"   Tags: {', '.join(resource.tags)}")

    click.echo("   Operations:")
    for operation in resource.operations:
        color = METHOD_COLORS.get(operation.method, Fore.WHITE)
        summary = f"  {operation.summary}" if operation.summary else ""
        click.echo(f"   {color}{operation.method:7s}{Style.RESET_ALL} {operation.path}{summary}")

    if resource.sub_resources:
        click.echo(f"   Sub-resources: {', '.join(sub.name for sub in resource.sub_resources)}")


def print_statistics(stats: ResourceStatistics):
    click.echo(f"   Resources: {stats.total_resources} ({stats.restful_resources} RESTful)")
    click.echo(f"   Paths: {stats.total_paths}")
    click.echo(f"   Operations: {stats.total_operations}")

    if stats.method_counts:
        click.echo("   By method:")
        for method, count in stats.method_counts.items():
            color = METHOD_COLORS.get(method, Fore.WHITE)
            click.echo(f"   {color}{method:7s}{Style.RESET_ALL} {count}")

    if stats.tag_counts:
        click.echo("   By tag:")
        for tag, count in sorted(stats.tag_counts.items(), key=lambda item: -item[1]):
            click.echo(f"   {tag:20s} {count}")
