"""
Render Module

Builds form (schema / uiSchema / formData) and table (columns / sort /
pagination) descriptions from resolved resource schemas.
"""

from .schema_renderer import (
    SchemaRenderer,
    FormSchemaOptions,
    TableSchemaOptions,
    FormSchema,
    TableColumn,
    TableSchema,
    humanize_field_name,
)

__all__ = [
    "SchemaRenderer",
    "FormSchemaOptions",
    "TableSchemaOptions",
    "FormSchema",
    "TableColumn",
    "TableSchema",
    "humanize_field_name",
]
