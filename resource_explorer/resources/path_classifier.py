"""Classify OpenAPI path templates into resource chains."""
from typing import Dict, List
from urllib.parse import quote


class PathClassifier:
    """Turns path templates into ordered resource-name chains."""

    # Tokens that never name a resource: version markers and cross-cutting actions.
    # A real resource literally named like one of these is dropped too.
    NON_RESOURCE_SEGMENTS = frozenset({
        'api', 'v1', 'v2', 'v3', 'version',
        'search', 'filter', 'export', 'import',
        'status', 'health', 'metrics',
        'login', 'logout', 'auth', 'oauth',
        'upload', 'download', 'files',
    })

    @staticmethod
    def extract_resource_chain(path: str) -> List[str]:
        """
        Extract the resource chain from a path template.

        e.g. "/users/{id}/posts/{postId}/comments" -> ["users", "posts", "comments"]

        Args:
            path: OpenAPI path template

        Returns:
            list: Resource name tokens, possibly empty
        """
        chain = []
        for segment in split_path(path):
            if is_path_parameter(segment):
                continue
            if PathClassifier.is_non_resource_segment(segment):
                continue
            chain.append(segment)
        return chain

    @staticmethod
    def is_non_resource_segment(segment: str) -> bool:
        """Check a segment against the non-resource denylist."""
        return segment.lower() in PathClassifier.NON_RESOURCE_SEGMENTS

    @staticmethod
    def is_collection_path(path: str) -> bool:
        """A collection path does not end with a parameter placeholder."""
        segments = split_path(path)
        return not (segments and is_path_parameter(segments[-1]))


def split_path(path: str) -> List[str]:
    """Split a path on '/' dropping empty segments."""
    return [segment for segment in path.split('/') if segment]


def is_path_parameter(segment: str) -> bool:
    """Check whether a segment is a {placeholder}."""
    return segment.startswith('{') and segment.endswith('}')


def extract_param_names(path_pattern: str) -> List[str]:
    """
    List parameter names of a path template in order.

    e.g. "/authors/{authorId}/books/{bookId}" -> ["authorId", "bookId"]
    """
    return [segment[1:-1] for segment in split_path(path_pattern) if is_path_parameter(segment)]


def build_path(path_pattern: str, path_params: Dict[str, str]) -> str:
    """Substitute parameter values (URL-encoded) into a path template."""
    result = path_pattern
    for name, value in path_params.items():
        result = result.replace('{' + name + '}', quote(str(value), safe=''))
    return result


def extract_path_params(path_pattern: str, actual_path: str) -> Dict[str, str]:
    """
    Match an actual path against a template and collect parameter values.

    Static segments are not required to match; extraction stops at the
    shorter of the two paths.
    """
    params = {}
    for pattern_segment, actual_segment in zip(split_path(path_pattern), split_path(actual_path)):
        if is_path_parameter(pattern_segment):
            params[pattern_segment[1:-1]] = actual_segment
    return params
