"""Errors raised while loading and querying OpenAPI documents."""


class OpenAPIDocumentError(Exception):
    """Base class for fatal document errors"""


class DocumentValidationError(OpenAPIDocumentError, ValueError):
    """The document is missing required top-level structure"""


class DocumentFetchError(OpenAPIDocumentError, RuntimeError):
    """The document could not be fetched or decoded"""


class DocumentNotParsedError(OpenAPIDocumentError, RuntimeError):
    """A query was made before a document was successfully parsed"""

    def __init__(self, message: str = "Document not parsed. Call parse_document() first."):
        super().__init__(message)
