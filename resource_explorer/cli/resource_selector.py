"""Interactive resource and operation selection."""
from typing import List, Optional, Tuple

import click
from colorama import Fore

from resource_explorer.resources.models import ResourceInfo, ResourceOperation


class ResourceSelector:
    """Numbered selection of resources from a resource forest."""

    def __init__(self, resources: List[ResourceInfo]):
        """Initialize selector."""
        self.resources = resources
        self.entries: List[Tuple[int, ResourceInfo]] = self._flatten(resources)

    @staticmethod
    def _flatten(resources: List[ResourceInfo], depth: int = 0) -> List[Tuple[int, ResourceInfo]]:
        """Depth-first (depth, resource) pairs."""
        entries = []
        for resource in resources:
            entries.append((depth, resource))
            entries.extend(ResourceSelector._flatten(resource.sub_resources, depth + 1))
        return entries

    def prompt_selection(self) -> Optional[ResourceInfo]:
        """
        Prompt user to pick a resource.

        Returns:
            Optional[ResourceInfo]: Selected resource, None when skipped
        """
        if not self.entries:
            click.echo(f"{Fore.YELLOW}No resources found in document")
            return None

        click.echo(f"\n{Fore.CYAN}Select a resource:")
        click.echo(f"{Fore.CYAN}{'=' * 60}\n")

        for i, (depth, resource) in enumerate(self.entries, 1):
            label = "   " * depth + resource.name
            click.echo(f"{i:2d}. {label:30s} {resource.path_pattern}")

        click.echo(f"\n{Fore.YELLOW}Enter a resource number, or press ENTER to go back\n")

        while True:
            selection = click.prompt("Select resource", default="", type=str).strip()

            if not selection:
                return None

            try:
                index = int(selection) - 1
            except ValueError:
                click.echo(f"{Fore.RED}Invalid input. Please enter a number.")
                continue

            if 0 <= index < len(self.entries):
                return self.entries[index][1]
            click.echo(f"{Fore.RED}Invalid resource number: {selection}")

    @staticmethod
    def prompt_operation(resource: ResourceInfo) -> Optional[ResourceOperation]:
        """Prompt user to pick one operation of a resource."""
        if not resource.operations:
            click.echo(f"{Fore.YELLOW}Resource has no operations")
            return None

        for i, operation in enumerate(resource.operations, 1):
            click.echo(f"{i:2d}. {operation.method:7s} {operation.path}")

        choice = click.prompt("Select operation", type=int, default=1)
        if 1 <= choice <= len(resource.operations):
            return resource.operations[choice - 1]

        click.echo(f"{Fore.RED}Invalid choice")
        return None
