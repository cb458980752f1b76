"""Aggregate statistics over a resource forest."""
from typing import List

from .models import ResourceInfo, ResourceStatistics


def collect_statistics(resources: List[ResourceInfo], total_paths: int) -> ResourceStatistics:
    """
    Count resources, operations, methods and tags.

    Only the given (top-level) resources are counted; operations of nested
    sub-resources are not included.

    Args:
        resources: Top-level resources
        total_paths: Number of path templates in the document

    Returns:
        ResourceStatistics: Fresh statistics object
    """
    stats = ResourceStatistics(total_resources=len(resources), total_paths=total_paths)

    for resource in resources:
        if resource.is_restful:
            stats.restful_resources += 1

        for operation in resource.operations:
            stats.total_operations += 1
            stats.method_counts[operation.method] = stats.method_counts.get(operation.method, 0) + 1

            for tag in operation.tags:
                stats.tag_counts[tag] = stats.tag_counts.get(tag, 0) + 1

    return stats
