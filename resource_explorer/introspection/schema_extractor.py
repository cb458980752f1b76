"""
Schema Extractor - Finds the schema of a single resource instance.

The instance schema is read from the resource's GET success response and
unwrapped from list / envelope wrappers by an ordered list of named rules:

1. array-items            -> [Item]                         => Item
2. wrapper:<field>        -> {data|items|list|...: [Item]}   => Item
3. single-array-property  -> {anything: [Item], total: int}  => Item

When no rule matches, the response object itself is the instance schema.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from resource_explorer.resources.models import ResourceInfo

from .ref_resolver import ReferenceResolver

logger = logging.getLogger(__name__)

SUCCESS_STATUS_CODES = ("200", "201", "default")
PREFERRED_MEDIA_TYPES = ("application/json", "application/vnd.api+json")
WRAPPER_FIELDS = ("data", "items", "list", "results", "content", "records")

Schema = Dict[str, Any]


@dataclass(frozen=True)
class UnwrapRule:
    """A named unwrapping step: returns the candidate schema or None when it does not apply"""
    name: str
    apply: Callable[[Schema, ReferenceResolver], Optional[Any]]


def _is_array(schema: Optional[Schema]) -> bool:
    return isinstance(schema, dict) and schema.get("type") == "array" and bool(schema.get("items"))


def _is_object(schema: Optional[Schema]) -> bool:
    return (
        isinstance(schema, dict)
        and schema.get("type", "object") == "object"
        and isinstance(schema.get("properties"), dict)
    )


def unwrap_array_items(schema: Schema, resolver: ReferenceResolver) -> Optional[Any]:
    """A list response: the items are the instance"""
    if _is_array(schema):
        return schema["items"]
    return None


def make_wrapper_rule(field_name: str) -> UnwrapRule:
    """Build the rule probing one envelope field name"""

    def unwrap_wrapper_field(schema: Schema, resolver: ReferenceResolver) -> Optional[Any]:
        if not _is_object(schema) or field_name not in schema["properties"]:
            return None

        wrapped = resolver.resolve(schema["properties"][field_name])
        if _is_array(wrapped):
            return wrapped["items"]
        if isinstance(wrapped, dict) and wrapped.get("type") == "object":
            return wrapped
        return None

    return UnwrapRule(name=f"wrapper:{field_name}", apply=unwrap_wrapper_field)


def unwrap_single_array_property(schema: Schema, resolver: ReferenceResolver) -> Optional[Any]:
    """An envelope with exactly one array-typed property"""
    if not _is_object(schema):
        return None

    arrays = []
    for prop_schema in schema["properties"].values():
        resolved = resolver.resolve(prop_schema)
        if isinstance(resolved, dict) and resolved.get("type") == "array":
            arrays.append(resolved)

    if len(arrays) == 1 and _is_array(arrays[0]):
        return arrays[0]["items"]
    return None


UNWRAP_RULES: List[UnwrapRule] = (
    [UnwrapRule(name="array-items", apply=unwrap_array_items)]
    + [make_wrapper_rule(field_name) for field_name in WRAPPER_FIELDS]
    + [UnwrapRule(name="single-array-property", apply=unwrap_single_array_property)]
)


class SchemaExtractor:
    """Extracts fully dereferenced instance schemas for resources"""

    def __init__(self, resolver: ReferenceResolver, rules: Optional[List[UnwrapRule]] = None):
        self.resolver = resolver
        self.rules = rules if rules is not None else UNWRAP_RULES

    def extract_instance_schema(self, resource: ResourceInfo) -> Optional[Schema]:
        """
        Get the schema of one instance of a resource

        Args:
            resource: Resource whose GET operation describes the instance

        Returns:
            Fully resolved schema, or None if there is no GET operation or no
            response schema
        """
        get_operation = resource.get_operation("GET")
        if get_operation is None:
            logger.warning(f"No GET operation found for resource: {resource.name}")
            return None

        response_schema = self.extract_response_schema(get_operation.responses)
        if response_schema is None:
            logger.warning(f"No response schema found for GET operation of resource: {resource.name}")
            return None

        _, candidate = self.apply_unwrap_rules(response_schema)
        return self.resolver.fully_resolve(candidate)

    def extract_response_schema(self, responses: Any) -> Optional[Any]:
        """Body schema of the first success response (200, 201, then default)"""
        if not isinstance(responses, dict):
            return None

        response = None
        for status_code in SUCCESS_STATUS_CODES:
            for key in (status_code, int(status_code) if status_code.isdigit() else None):
                if key in responses:
                    response = responses[key]
                    break
            if response is not None:
                break

        if isinstance(response, dict) and "$ref" in response:
            response = self.resolver.resolve(response)
        if not isinstance(response, dict):
            return None

        content = response.get("content")
        if isinstance(content, dict) and content:
            media = None
            for media_type in PREFERRED_MEDIA_TYPES:
                if media_type in content:
                    media = content[media_type]
                    break
            if media is None:
                media = next(iter(content.values()))
            return media.get("schema") if isinstance(media, dict) else None

        # Swagger 2.0
        return response.get("schema")

    def apply_unwrap_rules(self, response_schema: Any) -> Tuple[Optional[str], Any]:
        """
        Run the unwrap rules top to bottom

        Returns:
            (name of the matching rule or None, candidate schema)
        """
        resolved = self.resolver.resolve(response_schema)
        if resolved is None:
            return None, response_schema

        for rule in self.rules:
            candidate = rule.apply(resolved, self.resolver)
            if candidate is not None:
                logger.debug(f"Response schema unwrapped by rule {rule.name}")
                return rule.name, candidate

        return None, resolved
