"""
Reference Resolver - Dereferences $ref / allOf / anyOf / oneOf in OpenAPI schemas.

Supports:
- Local JSON pointers (#/components/schemas/Name, #/definitions/Name)
- Reference chains (a $ref whose target is another $ref)
- Composition keywords (first resolvable branch, no merge)
- Recursive, cycle-safe full dereferencing

Never raises on malformed input: unresolvable or cyclic references degrade
to a generic empty object schema.
"""

import copy
import logging
from typing import Any, Dict, List, Optional, Set

logger = logging.getLogger(__name__)

COMPOSITION_KEYWORDS = ("allOf", "anyOf", "oneOf")

# Keywords holding a single nested schema
_SCHEMA_KEYWORDS = ("items", "additionalProperties", "not", "contains", "if", "then", "else")
# Keywords holding a name -> schema mapping
_SCHEMA_MAP_KEYWORDS = ("properties", "patternProperties", "dependentSchemas")
# Keywords holding a list of schemas
_SCHEMA_LIST_KEYWORDS = COMPOSITION_KEYWORDS + ("prefixItems",)


def generic_object_schema() -> Dict[str, Any]:
    """Fallback shape substituted for anything that cannot be resolved"""
    return {"type": "object", "properties": {}}


class ReferenceResolver:
    """
    Resolves schema references against a single OpenAPI document

    Usage:
    ```python
    resolver = ReferenceResolver(document)
    user = resolver.fully_resolve({"$ref": "#/components/schemas/User"})
    ```
    """

    def __init__(self, document: Dict[str, Any]):
        self.document = document

    def resolve_ref(self, ref: str, _seen: Optional[Set[str]] = None) -> Optional[Dict[str, Any]]:
        """
        Walk the document along a local reference path

        Args:
            ref: Reference string (e.g., "#/components/schemas/User")

        Returns:
            The referenced schema object, or None when it cannot be resolved
        """
        if not isinstance(ref, str) or not ref.startswith("#/"):
            logger.warning(f"Cannot resolve non-local reference: {ref}")
            return None

        seen = _seen if _seen is not None else set()
        if ref in seen:
            logger.warning(f"Circular reference chain detected: {ref}")
            return None
        seen.add(ref)

        current: Any = self.document
        for part in ref[2:].split("/"):
            key = part.replace("~1", "/").replace("~0", "~")
            if isinstance(current, dict) and key in current:
                current = current[key]
            elif isinstance(current, list) and key.isdigit() and int(key) < len(current):
                current = current[int(key)]
            else:
                logger.warning(f"Cannot resolve reference path: {ref}")
                return None

        if isinstance(current, dict) and "$ref" in current:
            return self.resolve_ref(current["$ref"], seen)

        if not isinstance(current, dict):
            logger.warning(f"Reference {ref} does not point to an object")
            return None

        return current

    def resolve(self, schema: Any) -> Optional[Dict[str, Any]]:
        """Resolve the top level of a schema (one $ref or composition step)"""
        return self._resolve_tracking(schema, [])

    def _resolve_tracking(self, schema: Any, followed: List[str]) -> Optional[Dict[str, Any]]:
        """Same as resolve(), recording every $ref it follows into `followed`"""
        if not isinstance(schema, dict):
            return None

        if "$ref" in schema:
            followed.append(schema["$ref"])
            return self.resolve_ref(schema["$ref"])

        all_of = schema.get("allOf")
        if isinstance(all_of, list):
            # First resolvable branch wins, branches are not merged
            for sub_schema in all_of:
                branch_refs: List[str] = []
                resolved = self._resolve_tracking(sub_schema, branch_refs)
                if resolved is not None:
                    followed.extend(branch_refs)
                    return resolved

        for keyword in ("anyOf", "oneOf"):
            members = schema.get(keyword)
            if isinstance(members, list) and members:
                return self._resolve_tracking(members[0], followed)

        return schema

    def fully_resolve(self, schema: Any, visited: Optional[Set[str]] = None) -> Dict[str, Any]:
        """
        Recursively dereference a schema so that no $ref remains anywhere

        The visited set holds the refs already expanded on the current branch;
        each child branch gets its own copy.

        Returns:
            A deep copy of the resolved schema, safe for callers to mutate
        """
        visited = set() if visited is None else visited

        if isinstance(schema, dict) and schema.get("$ref") in visited:
            logger.warning(f"Circular reference detected: {schema['$ref']}. Using generic object schema.")
            return generic_object_schema()

        try:
            followed: List[str] = []
            resolved = self._resolve_tracking(schema, followed)
            if resolved is None:
                return generic_object_schema()

            for ref in followed:
                if ref in visited:
                    logger.warning(f"Circular reference detected: {ref}. Using generic object schema.")
                    return generic_object_schema()

            branch = visited | set(followed)
            result = copy.deepcopy(resolved)

            for keyword in _SCHEMA_MAP_KEYWORDS:
                if isinstance(result.get(keyword), dict):
                    result[keyword] = {
                        name: self.fully_resolve(sub_schema, set(branch))
                        for name, sub_schema in result[keyword].items()
                    }

            for keyword in _SCHEMA_KEYWORDS:
                if isinstance(result.get(keyword), dict):
                    result[keyword] = self.fully_resolve(result[keyword], set(branch))

            # Tuple-style items (Swagger / draft 4)
            if isinstance(result.get("items"), list):
                result["items"] = [self.fully_resolve(item, set(branch)) for item in result["items"]]

            for keyword in _SCHEMA_LIST_KEYWORDS:
                if isinstance(result.get(keyword), list):
                    result[keyword] = [self.fully_resolve(sub_schema, set(branch)) for sub_schema in result[keyword]]

        except Exception as e:
            logger.warning(f"Error while fully resolving schema: {e}")
            return generic_object_schema()

        if not result.get("type") and not any(keyword in result for keyword in COMPOSITION_KEYWORDS):
            result["type"] = "object"
            result.setdefault("properties", {})

        return result
