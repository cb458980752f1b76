"""
API Introspection Module

Discovers resources automatically from OpenAPI/Swagger documents.
Supports:
- OpenAPI 2.0 / 3.0 / 3.1 documents (URL, JSON/YAML file or dict)
- Cycle-safe $ref resolution
- Instance schema extraction from list and envelope responses
- Document caching (1 hour TTL)
"""

from .document_fetcher import DocumentFetcher
from .document_parser import OpenAPIDocumentParser
from .errors import (
    DocumentFetchError,
    DocumentNotParsedError,
    DocumentValidationError,
    OpenAPIDocumentError,
)
from .ref_resolver import ReferenceResolver, generic_object_schema
from .schema_extractor import SchemaExtractor, UnwrapRule, UNWRAP_RULES

__all__ = [
    "DocumentFetcher",
    "OpenAPIDocumentParser",
    "OpenAPIDocumentError",
    "DocumentValidationError",
    "DocumentFetchError",
    "DocumentNotParsedError",
    "ReferenceResolver",
    "generic_object_schema",
    "SchemaExtractor",
    "UnwrapRule",
    "UNWRAP_RULES",
]
