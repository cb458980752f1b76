"""
OpenAPI Document Parser - Query surface over one parsed OpenAPI/Swagger document.

Features:
- OpenAPI 2.0 / 3.0 / 3.1 documents from URLs, local files or dicts
- Structural validation before use
- Cached resource forest and statistics, invalidated on re-parse
- Fully dereferenced instance schemas per resource
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from urllib.parse import urlparse

from resource_explorer.resources.graph_builder import ResourceGraphBuilder
from resource_explorer.resources.models import (
    DocumentInfo,
    ResourceInfo,
    ResourceOperation,
    ResourceStatistics,
)
from resource_explorer.resources.statistics import collect_statistics

from .document_fetcher import DocumentFetcher
from .errors import DocumentNotParsedError, DocumentValidationError, OpenAPIDocumentError
from .ref_resolver import ReferenceResolver
from .schema_extractor import SchemaExtractor

logger = logging.getLogger(__name__)

DocumentSource = Union[str, Path, Dict[str, Any]]


class OpenAPIDocumentParser:
    """
    Parses an OpenAPI document and exposes its resource model

    Usage:
    ```python
    parser = OpenAPIDocumentParser()
    parser.parse_document("https://api.example.com/openapi.json")
    for resource in parser.get_top_level_resources():
        print(resource.name, parser.get_resource_schema(resource.name))
    ```

    Each instance owns its document and caches; separate instances are
    independent of each other.
    """

    def __init__(self, fetcher: Optional[DocumentFetcher] = None, fallback_origin: Optional[str] = None):
        """
        Args:
            fetcher: DocumentFetcher used for URL sources
            fallback_origin: Origin for relative server URLs when the document
                was not loaded from a URL (e.g. "https://example.com")
        """
        self.fetcher = fetcher or DocumentFetcher()
        self.fallback_origin = fallback_origin.rstrip("/") if fallback_origin else None

        self._document: Optional[Dict[str, Any]] = None
        self._document_url: Optional[str] = None
        self._resolver: Optional[ReferenceResolver] = None
        self._resource_cache: Optional[List[ResourceInfo]] = None
        self._statistics_cache: Optional[ResourceStatistics] = None

    # ==================== Parsing ====================

    def parse_document(self, source: DocumentSource) -> None:
        """
        Load, validate and adopt a document, dropping all derived caches

        Args:
            source: Document URL, local file path, or document dict

        Raises:
            DocumentFetchError: If the document cannot be fetched or read
            DocumentValidationError: If required top-level fields are missing
        """
        try:
            document_url = None
            if isinstance(source, dict):
                document = source
            elif isinstance(source, str) and source.startswith(("http://", "https://")):
                document = self.fetcher.fetch(source)
                document_url = source
            elif isinstance(source, (str, Path)):
                document = self.fetcher.load_file(Path(source))
            else:
                document = source

            self.validate_document(document)

        except OpenAPIDocumentError as e:
            logger.error(f"Failed to parse OpenAPI document: {e}")
            raise

        self._document = document
        self._document_url = document_url
        self._resolver = ReferenceResolver(document)
        self._resource_cache = None
        self._statistics_cache = None

        logger.info(
            f"OpenAPI document parsed successfully: {document['info']['title']} "
            f"{document['info']['version']} (OpenAPI {self.get_openapi_version()})"
        )

    @staticmethod
    def validate_document(document: Any) -> None:
        """Minimal structural validation"""
        if not isinstance(document, dict):
            raise DocumentValidationError("Invalid OpenAPI document: must be an object")

        info = document.get("info")
        if not isinstance(info, dict) or not info.get("title") or not info.get("version"):
            raise DocumentValidationError("Invalid OpenAPI document: missing required info fields")

        if not document.get("openapi") and not document.get("swagger"):
            raise DocumentValidationError("Invalid OpenAPI document: missing version field")

        if not isinstance(document.get("paths"), dict):
            raise DocumentValidationError("Invalid OpenAPI document: missing or invalid paths")

    # ==================== Document information ====================

    def get_document(self) -> Optional[Dict[str, Any]]:
        """The raw document, or None before a successful parse"""
        return self._document

    def get_openapi_version(self) -> str:
        """Dialect string (e.g. "3.0.3", "2.0"), "unknown" if absent"""
        if self._document is None:
            return "unknown"
        return str(self._document.get("openapi") or self._document.get("swagger") or "unknown")

    def is_v3(self) -> bool:
        return self.get_openapi_version().startswith("3.")

    def get_document_info(self) -> DocumentInfo:
        """Title, version, description, dialect and server URLs"""
        document = self._require_document()
        info = document["info"]
        return DocumentInfo(
            title=info["title"],
            version=str(info["version"]),
            description=info.get("description"),
            openapi_version=self.get_openapi_version(),
            servers=self.get_servers(),
        )

    def get_servers(self) -> List[str]:
        """
        Server URLs of the API

        Relative OpenAPI 3 server URLs are prefixed with the origin the
        document was fetched from, else with the fallback origin.
        """
        document = self._require_document()

        if not self.is_v3():
            scheme = (document.get("schemes") or ["http"])[0]
            host = document.get("host") or "localhost"
            base_path = document.get("basePath") or ""
            return [f"{scheme}://{host}{base_path}"]

        servers = []
        for server in document.get("servers") or []:
            if not isinstance(server, dict) or not server.get("url"):
                continue
            url = self._substitute_server_variables(server["url"], server.get("variables") or {})
            if url.startswith("/"):
                origin = self._document_origin() or self.fallback_origin
                if origin:
                    url = f"{origin}{url}"
            servers.append(url)
        return servers

    # ==================== Resources ====================

    def get_all_resources(self) -> List[ResourceInfo]:
        """The resource forest (top-level resources with nested sub-resources)"""
        document = self._require_document()
        if self._resource_cache is None:
            builder = ResourceGraphBuilder(resolver=self._resolver)
            self._resource_cache = builder.build(document.get("paths"))
        return self._resource_cache

    def get_top_level_resources(self) -> List[ResourceInfo]:
        """Resources that are not a direct sub-resource of another resource"""
        resources = self.get_all_resources()
        return [
            resource for resource in resources
            if not any(other.get_sub_resource(resource.name) is not None for other in resources)
        ]

    def find_resource(self, name: str) -> Optional[ResourceInfo]:
        """Look up a resource by name: top level first, then depth-first below"""
        resources = self.get_all_resources()
        for resource in resources:
            if resource.name == name:
                return resource

        stack = [sub for resource in reversed(resources) for sub in reversed(resource.sub_resources)]
        while stack:
            resource = stack.pop()
            if resource.name == name:
                return resource
            stack.extend(reversed(resource.sub_resources))
        return None

    def get_resource_schema(self, name: str) -> Optional[Dict[str, Any]]:
        """Fully resolved instance schema of a resource, None if unavailable"""
        resource = self.find_resource(name)
        if resource is None:
            logger.warning(f"Resource schema for '{name}' not found")
            return None
        return self.get_instance_schema(resource)

    def get_instance_schema(self, resource: ResourceInfo) -> Optional[Dict[str, Any]]:
        """Fully resolved instance schema for a ResourceInfo"""
        self._require_document()
        return SchemaExtractor(self._resolver).extract_instance_schema(resource)

    def get_all_resource_schemas(self) -> Dict[str, Dict[str, Any]]:
        """Instance schemas of all top-level resources that have one"""
        schemas = {}
        for resource in self.get_all_resources():
            if resource.name in schemas:
                continue
            schema = self.get_instance_schema(resource)
            if schema is not None:
                schemas[resource.name] = schema
        return schemas

    def get_operation_info(self, method: str, path: str) -> Optional[ResourceOperation]:
        """Full definition of a single operation, None if not declared"""
        document = self._require_document()
        path_item = document["paths"].get(path)
        if not isinstance(path_item, dict):
            return None

        operation = path_item.get(method.lower())
        if not isinstance(operation, dict):
            return None

        return ResourceGraphBuilder(resolver=self._resolver).build_operation(method, path, operation, path_item)

    def get_resource_statistics(self) -> ResourceStatistics:
        """Aggregate counts, cached until the next parse"""
        document = self._require_document()
        if self._statistics_cache is None:
            self._statistics_cache = collect_statistics(self.get_all_resources(), len(document["paths"]))
        return self._statistics_cache

    def resolve_ref(self, ref: str) -> Optional[Dict[str, Any]]:
        """Resolve a single local reference against the current document"""
        self._require_document()
        return self._resolver.resolve_ref(ref)

    def fully_resolve(self, schema: Any) -> Dict[str, Any]:
        """Fully dereference any schema against the current document"""
        self._require_document()
        return self._resolver.fully_resolve(schema)

    # ==================== Helpers ====================

    def _require_document(self) -> Dict[str, Any]:
        if self._document is None:
            raise DocumentNotParsedError()
        return self._document

    def _document_origin(self) -> Optional[str]:
        if not self._document_url:
            return None
        parsed = urlparse(self._document_url)
        if not parsed.scheme or not parsed.netloc:
            logger.warning(f"Failed to parse document URL for relative server path: {self._document_url}")
            return None
        return f"{parsed.scheme}://{parsed.netloc}"

    @staticmethod
    def _substitute_server_variables(url: str, variables: Dict[str, Any]) -> str:
        for name, variable in variables.items():
            if isinstance(variable, dict) and "default" in variable:
                url = url.replace("{" + name + "}", str(variable["default"]))
        return url
