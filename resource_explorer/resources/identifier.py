"""Heuristic inference of a resource's identifier field."""
import re
from typing import Any, Callable, Dict, List, Optional, Tuple

from .path_classifier import is_path_parameter, split_path

PathEntry = Tuple[str, Dict[str, Any]]


def singularize(word: str) -> str:
    """
    Naive singular form of a plural resource name.

    categories -> category, boxes -> box, users -> user, address -> address
    """
    name = word.lower()
    if name.endswith('ies'):
        return name[:-3] + 'y'
    if name.endswith('es'):
        return name[:-2]
    if name.endswith('s') and not name.endswith('ss'):
        return name[:-1]
    return name


class IdentifierInferencer:
    """Picks and normalizes the field that identifies a resource instance."""

    GENERIC_IDENTIFIER_TOKENS = ['uuid', 'guid', 'key', 'identifier', 'code', 'name']

    FIELD_MAPPINGS = {
        'id': 'id',
        'identifier': 'id',
        'key': 'id',
        'uuid': 'id',
        'guid': 'id',
        'name': 'name',
        'title': 'name',
        'code': 'code',
        'number': 'number',
        'num': 'number',
    }

    def __init__(self, parameter_resolver: Optional[Callable[[Dict[str, Any]], Optional[Dict[str, Any]]]] = None):
        """
        Args:
            parameter_resolver: Resolves a `$ref` parameter object, optional
        """
        self.parameter_resolver = parameter_resolver

    def infer(self, resource_name: str, candidates: List[str]) -> str:
        """Infer the canonical identifier field from path parameter candidates."""
        if not candidates:
            return 'id'
        best = self.select_best_identifier(resource_name, candidates)
        return self.normalize_identifier_field(resource_name, best)

    def infer_from_paths(self, resource_name: str, path_entries: List[PathEntry]) -> str:
        """Collect candidates from a path group and infer the identifier."""
        return self.infer(resource_name, self.collect_candidates(path_entries))

    def collect_candidates(self, path_entries: List[PathEntry]) -> List[str]:
        """
        Collect path parameter names from a group of paths.

        Placeholders in the template come first for each path, followed by
        explicitly declared `in: path` parameters. Duplicates are dropped,
        discovery order is kept.
        """
        candidates: Dict[str, None] = {}

        for path, path_item in path_entries:
            for segment in split_path(path):
                if is_path_parameter(segment):
                    candidates.setdefault(segment[1:-1], None)

            if not isinstance(path_item, dict):
                continue

            parameters = list(path_item.get('parameters') or [])
            for operation in path_item.values():
                if isinstance(operation, dict):
                    parameters.extend(operation.get('parameters') or [])

            for param in parameters:
                param = self._resolve_parameter(param)
                if param and param.get('in') == 'path' and param.get('name'):
                    candidates.setdefault(param['name'], None)

        return list(candidates)

    def select_best_identifier(self, resource_name: str, candidates: List[str]) -> str:
        """
        Select the most likely identifier parameter.

        Priority: id > {singular}Id > {singular}(Name|Code|Key|Identifier) >
        contains singular > contains generic token > first candidate
        """
        singular = singularize(resource_name)

        if 'id' in candidates:
            return 'id'

        resource_id = re.compile(f'^{re.escape(singular)}Id$', re.IGNORECASE)
        for candidate in candidates:
            if resource_id.match(candidate):
                return candidate

        resource_field = re.compile(f'^{re.escape(singular)}(Name|Code|Key|Identifier)$', re.IGNORECASE)
        for candidate in candidates:
            if resource_field.match(candidate):
                return candidate

        for candidate in candidates:
            if singular in candidate.lower():
                return candidate

        for candidate in candidates:
            if any(token in candidate.lower() for token in self.GENERIC_IDENTIFIER_TOKENS):
                return candidate

        return candidates[0] if candidates else 'id'

    def normalize_identifier_field(self, resource_name: str, identifier: str) -> str:
        """
        Reduce a compound parameter name to a plain field name.

        bookId -> id, authorName -> name, nameOfBook -> nameOf
        """
        if identifier.lower() == 'id':
            return 'id'

        singular = singularize(resource_name)
        if not singular:
            return identifier

        lowered = identifier.lower()
        if lowered.startswith(singular):
            remainder = identifier[len(singular):]
        elif lowered.endswith(singular):
            remainder = identifier[:len(identifier) - len(singular)]
        else:
            return identifier

        if not remainder:
            return identifier
        return self.FIELD_MAPPINGS.get(remainder.lower(), remainder)

    def _resolve_parameter(self, param: Any) -> Optional[Dict[str, Any]]:
        if not isinstance(param, dict):
            return None
        if '$ref' in param and self.parameter_resolver:
            return self.parameter_resolver(param)
        return param
