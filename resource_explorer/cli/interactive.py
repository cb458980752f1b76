"""Interactive explorer for a parsed OpenAPI document."""
from typing import Optional

import click
from colorama import Fore

from resource_explorer.cli.display import (
    echo_json,
    print_document_info,
    print_header,
    print_resource_details,
    print_statistics,
)
from resource_explorer.cli.resource_selector import ResourceSelector
from resource_explorer.introspection.document_parser import OpenAPIDocumentParser
from resource_explorer.introspection.errors import OpenAPIDocumentError
from resource_explorer.render.schema_renderer import SchemaRenderer
from resource_explorer.resources.models import ResourceInfo


class InteractiveExplorer:
    """Menu-driven browsing of resources, schemas, forms and tables."""

    def __init__(self, parser: OpenAPIDocumentParser, renderer: Optional[SchemaRenderer] = None):
        """Initialize explorer over an already parsed document."""
        self.parser = parser
        self.renderer = renderer or SchemaRenderer()

    def run(self):
        """Run interactive explorer."""
        while True:
            print_header("Main Menu")
            click.echo("1. Document Info")
            click.echo("2. Browse Resources")
            click.echo("3. Statistics")
            click.echo("4. Exit\n")

            choice = click.prompt("Choose", type=int, default=2)

            try:
                if choice == 1:
                    self.show_document_info()
                elif choice == 2:
                    self.browse_resources()
                elif choice == 3:
                    self.show_statistics()
                elif choice == 4:
                    click.echo(f"{Fore.YELLOW}Goodbye!")
                    break
                else:
                    click.echo(f"{Fore.RED}Invalid choice")
            except OpenAPIDocumentError as e:
                click.echo(f"{Fore.RED}Error: {e}")

    def show_document_info(self):
        print_header("Document Info")
        print_document_info(self.parser.get_document_info())

    def show_statistics(self):
        print_header("Statistics")
        print_statistics(self.parser.get_resource_statistics())

    def browse_resources(self):
        """Pick a resource, then act on it until the user goes back."""
        print_header("Resources")
        selector = ResourceSelector(self.parser.get_all_resources())
        resource = selector.prompt_selection()
        if resource is None:
            return

        while True:
            print_header(f"Resource: {resource.name}")
            click.echo("1. Details")
            click.echo("2. Instance Schema")
            click.echo("3. Create Form")
            click.echo("4. Edit Form")
            click.echo("5. Table Columns")
            click.echo("6. Operation Details")
            click.echo("7. Back\n")

            choice = click.prompt("Choose", type=int, default=1)

            if choice == 1:
                print_resource_details(resource)
            elif choice in (2, 3, 4, 5):
                self._show_derived_schema(resource, choice)
            elif choice == 6:
                operation = ResourceSelector.prompt_operation(resource)
                if operation is not None:
                    echo_json(operation.to_dict())
            elif choice == 7:
                break
            else:
                click.echo(f"{Fore.RED}Invalid choice")

    def _show_derived_schema(self, resource: ResourceInfo, choice: int):
        schema = self.parser.get_instance_schema(resource)
        if schema is None:
            click.echo(f"{Fore.YELLOW}No instance schema available for {resource.name}")
            return

        if choice == 2:
            echo_json(schema)
        elif choice == 3:
            echo_json(self.renderer.get_create_form_schema(schema).to_dict())
        elif choice == 4:
            form = self.renderer.get_edit_form_schema(schema, identifier_field=resource.identifier_field)
            echo_json(form.to_dict())
        else:
            echo_json(self.renderer.get_table_schema(schema).to_dict())
