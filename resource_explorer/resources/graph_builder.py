"""
Resource Graph Builder - Groups OpenAPI paths into a forest of RESTful resources.

Steps:
- Classify every path into a resource chain
- Group paths by chain
- Keep only groups exposing a list endpoint (GET on a collection path)
- Collect operations, tags, representative paths and the identifier field
- Attach deeper chains below their parent chain
"""

import copy
import logging
from typing import Any, Dict, List, Optional, Tuple

from .identifier import IdentifierInferencer
from .models import ResourceInfo, ResourceOperation
from .path_classifier import PathClassifier, is_path_parameter, split_path

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "post", "put", "patch", "delete", "head", "options")

PathEntry = Tuple[str, Dict[str, Any]]
ResourceChain = Tuple[str, ...]


class ResourceGraphBuilder:
    """Builds the resource forest for one document"""

    def __init__(self, resolver=None):
        """
        Args:
            resolver: ReferenceResolver used for `$ref` parameters (optional)
        """
        self.resolver = resolver
        self.identifier_inferencer = IdentifierInferencer(
            parameter_resolver=resolver.resolve if resolver else None
        )

    def build(self, paths: Any) -> List[ResourceInfo]:
        """
        Build the resource forest from a document's `paths` object

        Args:
            paths: The `paths` mapping of an OpenAPI document

        Returns:
            Top-level resources, with nested sub-resources
        """
        if not isinstance(paths, dict):
            logger.warning("Document paths are missing or malformed, no resources built")
            return []

        groups = self.group_paths(paths)

        resource_map: Dict[ResourceChain, ResourceInfo] = {}
        for chain, path_group in groups.items():
            resource = self.build_resource(chain, path_group)
            if resource is not None:
                resource_map[chain] = resource

        roots = self.organize_hierarchy(resource_map)
        logger.info(f"Built {len(resource_map)} resources ({len(roots)} top-level) from {len(paths)} paths")
        return roots

    def group_paths(self, paths: Dict[str, Any]) -> Dict[ResourceChain, List[PathEntry]]:
        """Group path entries by resource chain, keeping document order"""
        groups: Dict[ResourceChain, List[PathEntry]] = {}
        for path, path_item in paths.items():
            if not isinstance(path, str) or not isinstance(path_item, dict):
                continue

            chain = tuple(PathClassifier.extract_resource_chain(path))
            if not chain:
                continue

            groups.setdefault(chain, []).append((path, path_item))
        return groups

    def build_resource(self, chain: ResourceChain, path_group: List[PathEntry]) -> Optional[ResourceInfo]:
        """Build a resource for one chain, or None if it has no list endpoint"""
        name = chain[-1]

        if self.find_list_endpoint(path_group) is None:
            logger.warning(f"No RESTful list endpoint found for resource: {name}")
            return None

        operations: List[ResourceOperation] = []
        tags: List[str] = []
        for path, path_item in path_group:
            for operation in self.extract_operations(path, path_item):
                operations.append(operation)
                for tag in operation.tags:
                    if tag not in tags:
                        tags.append(tag)

        return ResourceInfo(
            name=name,
            path_pattern=self.select_main_path([path for path, _ in path_group]),
            base_path=self.extract_base_path(path_group),
            operations=operations,
            identifier_field=self.identifier_inferencer.infer_from_paths(name, path_group),
            is_restful=True,
            tags=tags,
            sub_resources=[],
        )

    @staticmethod
    def find_list_endpoint(path_group: List[PathEntry]) -> Optional[PathEntry]:
        """Find a GET on a path not ending in a parameter (GET /users, not GET /users/{id})"""
        for path, path_item in path_group:
            if not isinstance(path_item.get("get"), dict):
                continue
            if PathClassifier.is_collection_path(path):
                return path, path_item
        return None

    @staticmethod
    def select_main_path(paths: List[str]) -> str:
        """Pick the simplest path: fewest static segments, fewest parameters, then lexicographic"""
        def complexity(path: str):
            segments = split_path(path)
            params = sum(1 for segment in segments if is_path_parameter(segment))
            return len(segments) - params, params, path

        return min(paths, key=complexity)

    @staticmethod
    def extract_base_path(path_group: List[PathEntry]) -> str:
        """Collection path of the group, else its first path"""
        for path, _ in path_group:
            if PathClassifier.is_collection_path(path):
                return path
        return path_group[0][0]

    def extract_operations(self, path: str, path_item: Dict[str, Any]) -> List[ResourceOperation]:
        """Build operations for every HTTP method declared on a path item"""
        operations = []
        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if isinstance(operation, dict):
                operations.append(self.build_operation(method, path, operation, path_item))
        return operations

    def build_operation(
        self,
        method: str,
        path: str,
        operation: Dict[str, Any],
        path_item: Optional[Dict[str, Any]] = None,
    ) -> ResourceOperation:
        """Build a normalized ResourceOperation from raw OpenAPI objects"""
        path_item = path_item or {}
        raw_parameters = list(path_item.get("parameters") or []) + list(operation.get("parameters") or [])
        raw_parameters = copy.deepcopy([self._resolve_parameter(p) for p in raw_parameters])

        return ResourceOperation(
            method=method.upper(),
            path=path,
            operation_id=operation.get("operationId"),
            summary=operation.get("summary"),
            description=operation.get("description"),
            parameters=self.normalize_parameters(raw_parameters),
            request_body=self.normalize_request_body(operation, raw_parameters),
            responses=copy.deepcopy(operation.get("responses") or {}),
            tags=list(operation.get("tags") or []),
        )

    @staticmethod
    def normalize_parameters(parameters: List[Any]) -> List[Dict[str, Any]]:
        """
        Normalize parameters to the OpenAPI 3 shape

        Swagger 2.0 body parameters are listed as query parameters carrying
        the body schema; unresolved `$ref` parameters are kept as-is.
        """
        normalized = []
        for param in parameters:
            if not isinstance(param, dict):
                continue

            if "$ref" in param:
                normalized.append(param)
                continue

            if param.get("in") == "body":
                normalized.append({
                    "name": param.get("name") or "body",
                    "in": "query",
                    "required": bool(param.get("required", False)),
                    "schema": param.get("schema") or {"type": "object"},
                })
                continue

            schema = param.get("schema")
            if schema is None and "type" in param:
                # Swagger 2.0 declares the type inline
                schema = {key: param[key] for key in ("type", "format", "items", "enum", "default") if key in param}

            normalized.append({
                "name": param.get("name"),
                "in": param.get("in"),
                "description": param.get("description"),
                "required": bool(param.get("required", False)),
                "schema": schema or {"type": "string"},
            })
        return normalized

    @staticmethod
    def normalize_request_body(operation: Dict[str, Any], parameters: List[Any]) -> Optional[Dict[str, Any]]:
        """OpenAPI 3 requestBody, or one synthesized from a Swagger 2.0 body parameter"""
        if operation.get("requestBody"):
            return copy.deepcopy(operation["requestBody"])

        for param in parameters:
            if isinstance(param, dict) and param.get("in") == "body":
                return {
                    "required": bool(param.get("required", False)),
                    "content": {
                        "application/json": {
                            "schema": param.get("schema") or {"type": "object"},
                        }
                    },
                }
        return None

    @staticmethod
    def organize_hierarchy(resource_map: Dict[ResourceChain, ResourceInfo]) -> List[ResourceInfo]:
        """
        Attach each resource below the resource of its parent chain

        Resources whose parent chain did not qualify are promoted to the top
        level. Sub-resources are deduplicated by name within one parent only.
        """
        roots: List[ResourceInfo] = []

        for chain, resource in sorted(resource_map.items(), key=lambda item: len(item[0])):
            if len(chain) == 1:
                roots.append(resource)
                continue

            parent = resource_map.get(chain[:-1])
            if parent is None:
                roots.append(resource)
            elif parent.get_sub_resource(resource.name) is None:
                parent.sub_resources.append(resource)

        return roots

    def _resolve_parameter(self, param: Any) -> Any:
        if isinstance(param, dict) and "$ref" in param and self.resolver:
            resolved = self.resolver.resolve(param)
            return resolved if resolved is not None else param
        return param
