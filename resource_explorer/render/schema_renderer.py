"""
Schema Renderer - Derives form and table schemas from resource schemas.

Form schemas follow the react-jsonschema-form layout (schema, uiSchema,
formData). Table schemas describe columns, a default sort and pagination.
"""

import copy
import logging
import re
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_CREATE_EXCLUDE_FIELDS = ("id", "uid", "created_at", "createdAt", "updated_at", "updatedAt")
DEFAULT_EDIT_EXCLUDE_FIELDS = ("created_at", "createdAt")

# Top-level keywords with no meaning for form libraries
OPENAPI_ONLY_FIELDS = ("discriminator", "xml", "externalDocs", "example")

STRING_FORMAT_WIDGETS = {
    "date": "date",
    "date-time": "datetime",
    "email": "email",
    "uri": "uri",
}

COLUMN_FORMATS = {
    "date": "date",
    "date-time": "datetime",
    "email": "email",
    "uri": "url",
}

DEFAULT_SORTABLE_TYPES = ("string", "number", "integer", "boolean")
DEFAULT_FILTERABLE_TYPES = ("string", "boolean")
NUMERIC_TYPES = ("number", "integer")

DEFAULT_PAGE_SIZE = 20
TEXTAREA_MIN_LENGTH = 100

SchemaResolver = Callable[[str], Optional[Dict[str, Any]]]


@dataclass
class FormSchemaOptions:
    """Options for form schema generation"""
    readonly: bool = False
    include_fields: Optional[List[str]] = None
    exclude_fields: List[str] = field(default_factory=list)
    field_order: Optional[List[str]] = None
    field_config: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    schema_resolver: Optional[SchemaResolver] = None


@dataclass
class TableSchemaOptions:
    """Options for table schema generation"""
    columns: Optional[List[str]] = None
    exclude_columns: List[str] = field(default_factory=list)
    column_order: Optional[List[str]] = None
    sortable_columns: List[str] = field(default_factory=list)
    filterable_columns: List[str] = field(default_factory=list)
    column_widths: Dict[str, int] = field(default_factory=dict)
    custom_renderers: Dict[str, str] = field(default_factory=dict)
    schema_resolver: Optional[SchemaResolver] = None


@dataclass
class FormSchema:
    schema: Dict[str, Any]
    ui_schema: Dict[str, Any]
    form_data: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {"schema": self.schema, "uiSchema": self.ui_schema, "formData": self.form_data}


@dataclass
class TableColumn:
    key: str
    title: str
    data_type: str
    sortable: bool
    filterable: bool
    width: Optional[int] = None
    align: Optional[str] = None
    render: Optional[str] = None
    format: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "key": self.key,
            "title": self.title,
            "dataType": self.data_type,
            "sortable": self.sortable,
            "filterable": self.filterable,
        }
        for name in ("width", "align", "render", "format"):
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        return data


@dataclass
class TableSchema:
    columns: List[TableColumn]
    default_sort: Optional[Dict[str, str]] = None
    pagination: Dict[str, Any] = field(default_factory=lambda: {
        "pageSize": DEFAULT_PAGE_SIZE,
        "showSizeChanger": True,
        "showQuickJumper": True,
    })

    def to_dict(self) -> Dict[str, Any]:
        return {
            "columns": [column.to_dict() for column in self.columns],
            "defaultSort": self.default_sort,
            "pagination": self.pagination,
        }


def humanize_field_name(field_name: str) -> str:
    """userName / user_name -> "User Name" """
    text = re.sub(r"([A-Z])", r" \1", field_name)
    text = re.sub(r"[_-]", " ", text)
    text = re.sub(r"\b\w", lambda match: match.group(0).upper(), text)
    return " ".join(text.split())


class SchemaRenderer:
    """
    Builds form and table descriptions from a resolved resource schema

    Usage:
    ```python
    renderer = SchemaRenderer()
    form = renderer.get_create_form_schema(schema)
    table = renderer.get_table_schema(schema, TableSchemaOptions(columns=["id", "name"]))
    ```
    """

    # ==================== Forms ====================

    def get_form_schema(self, schema: Dict[str, Any], options: Optional[FormSchemaOptions] = None) -> FormSchema:
        """
        Convert a resource schema into a form description

        Args:
            schema: Resolved resource schema (not modified)
            options: Filtering, ordering and per-field UI configuration

        Returns:
            FormSchema with JSON schema, UI schema and initial form data
        """
        options = options or FormSchemaOptions()

        json_schema = self._convert_to_json_schema(
            schema,
            include_fields=options.include_fields,
            exclude_fields=options.exclude_fields,
            field_order=options.field_order,
            schema_resolver=options.schema_resolver,
        )
        ui_schema = self._generate_ui_schema(json_schema, options)
        form_data = self._generate_form_data(json_schema)

        return FormSchema(schema=json_schema, ui_schema=ui_schema, form_data=form_data)

    def get_create_form_schema(
        self, schema: Dict[str, Any], options: Optional[FormSchemaOptions] = None
    ) -> FormSchema:
        """Form for creating an instance: identity and timestamp fields are left out"""
        options = options or FormSchemaOptions()
        defaults = self._default_excludes(DEFAULT_CREATE_EXCLUDE_FIELDS, options)
        return self.get_form_schema(
            schema,
            replace(options, exclude_fields=defaults + list(options.exclude_fields)),
        )

    def get_edit_form_schema(
        self,
        schema: Dict[str, Any],
        options: Optional[FormSchemaOptions] = None,
        identifier_field: str = "id",
    ) -> FormSchema:
        """Form for editing an instance: creation timestamps hidden, identifier read-only"""
        options = options or FormSchemaOptions()
        defaults = self._default_excludes(DEFAULT_EDIT_EXCLUDE_FIELDS, options)

        field_config = {identifier_field: {"ui:readonly": True}}
        field_config.update(options.field_config)

        return self.get_form_schema(
            schema,
            replace(
                options,
                exclude_fields=defaults + list(options.exclude_fields),
                field_config=field_config,
            ),
        )

    # ==================== Tables ====================

    def get_table_schema(self, schema: Dict[str, Any], options: Optional[TableSchemaOptions] = None) -> TableSchema:
        """
        Convert a resource schema into table column definitions

        Args:
            schema: Resolved resource schema (not modified)
            options: Column selection, ordering, widths and renderers

        Returns:
            TableSchema with columns, default sort and pagination
        """
        options = options or TableSchemaOptions()

        json_schema = self._convert_to_json_schema(schema, schema_resolver=options.schema_resolver)
        columns = [self._build_column(name, field_schema, options)
                   for name, field_schema in self._extract_fields(json_schema)]

        if options.columns:
            columns = [column for column in columns if column.key in options.columns]
        columns = [column for column in columns if column.key not in options.exclude_columns]

        if options.column_order:
            order = options.column_order
            columns.sort(key=lambda column: order.index(column.key) if column.key in order else len(order))

        return TableSchema(columns=columns, default_sort=self._default_sort(columns))

    # ==================== Conversion ====================

    def _convert_to_json_schema(
        self,
        schema: Dict[str, Any],
        include_fields: Optional[List[str]] = None,
        exclude_fields: Optional[List[str]] = None,
        field_order: Optional[List[str]] = None,
        schema_resolver: Optional[SchemaResolver] = None,
    ) -> Dict[str, Any]:
        json_schema = copy.deepcopy(schema) if isinstance(schema, dict) else {}

        for keyword in OPENAPI_ONLY_FIELDS:
            json_schema.pop(keyword, None)

        if schema_resolver is not None:
            json_schema = self._resolve_all_references(json_schema, schema_resolver, set())

        if json_schema.get("type") == "object" and isinstance(json_schema.get("properties"), dict):
            self._process_object_fields(json_schema, include_fields, exclude_fields or [], field_order)

        if not json_schema.get("type"):
            json_schema["type"] = "object"

        return json_schema

    def _process_object_fields(
        self,
        json_schema: Dict[str, Any],
        include_fields: Optional[List[str]],
        exclude_fields: List[str],
        field_order: Optional[List[str]],
    ) -> None:
        properties = json_schema["properties"]

        if include_fields:
            properties = {name: value for name, value in properties.items() if name in include_fields}
        properties = {name: value for name, value in properties.items() if name not in exclude_fields}

        if isinstance(json_schema.get("required"), list):
            json_schema["required"] = [
                name for name in json_schema["required"]
                if name not in exclude_fields and (not include_fields or name in include_fields)
            ]

        if field_order:
            ordered = {name: properties[name] for name in field_order if name in properties}
            ordered.update((name, value) for name, value in properties.items() if name not in ordered)
            properties = ordered
        else:
            # sorted() is stable: equal x-order values keep declaration order
            properties = dict(sorted(properties.items(), key=lambda item: self._x_order(item[1])))

        json_schema["properties"] = properties

    @staticmethod
    def _x_order(field_schema: Any) -> float:
        if isinstance(field_schema, dict):
            value = field_schema.get("x-order", 0)
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                return value
        return 0

    def _resolve_all_references(self, value: Any, resolver: SchemaResolver, seen: set) -> Any:
        if isinstance(value, list):
            return [self._resolve_all_references(item, resolver, seen) for item in value]
        if not isinstance(value, dict):
            return value

        ref = value.get("$ref")
        if isinstance(ref, str):
            if ref in seen:
                logger.warning(f"Circular reference left unresolved: {ref}")
                return value
            resolved = resolver(ref)
            if not resolved:
                return value
            return self._resolve_all_references(copy.deepcopy(resolved), resolver, seen | {ref})

        return {key: self._resolve_all_references(item, resolver, seen) for key, item in value.items()}

    # ==================== Form helpers ====================

    def _generate_ui_schema(self, json_schema: Dict[str, Any], options: FormSchemaOptions) -> Dict[str, Any]:
        ui_schema = {}

        if json_schema.get("type") == "object" and isinstance(json_schema.get("properties"), dict):
            for name, field_schema in json_schema["properties"].items():
                field_ui = self._generate_field_ui_schema(field_schema, options.readonly)
                field_ui.update(options.field_config.get(name) or {})
                ui_schema[name] = field_ui

        if options.field_order:
            ui_schema["ui:order"] = list(options.field_order)

        return ui_schema

    @staticmethod
    def _generate_field_ui_schema(field_schema: Any, readonly: bool) -> Dict[str, Any]:
        ui = {}
        if readonly:
            ui["ui:readonly"] = True
        if not isinstance(field_schema, dict):
            return ui

        field_type = field_schema.get("type")
        if field_type == "string":
            field_format = field_schema.get("format")
            max_length = field_schema.get("maxLength")
            if field_format in STRING_FORMAT_WIDGETS:
                ui["ui:widget"] = STRING_FORMAT_WIDGETS[field_format]
            elif field_schema.get("enum"):
                ui["ui:widget"] = "select"
            elif isinstance(max_length, int) and max_length > TEXTAREA_MIN_LENGTH:
                ui["ui:widget"] = "textarea"
        elif field_type in NUMERIC_TYPES:
            ui["ui:widget"] = "updown"
        elif field_type == "boolean":
            ui["ui:widget"] = "checkbox"
        elif field_type == "array":
            items = field_schema.get("items")
            if isinstance(items, dict) and items.get("enum"):
                ui["ui:widget"] = "checkboxes"

        if field_schema.get("description"):
            ui["ui:description"] = field_schema["description"]
        if field_schema.get("example") not in (None, ""):
            ui["ui:placeholder"] = str(field_schema["example"])

        return ui

    @staticmethod
    def _generate_form_data(json_schema: Dict[str, Any]) -> Dict[str, Any]:
        properties = json_schema.get("properties")
        if json_schema.get("type") != "object" or not isinstance(properties, dict):
            return {}

        form_data = {}
        for name, field_schema in properties.items():
            if not isinstance(field_schema, dict):
                continue
            if "default" in field_schema:
                form_data[name] = field_schema["default"]
            elif "example" in field_schema:
                form_data[name] = field_schema["example"]
        return form_data

    @staticmethod
    def _default_excludes(defaults, options: FormSchemaOptions) -> List[str]:
        """Default exclusions minus fields the caller asked for explicitly"""
        include = options.include_fields or []
        return [name for name in defaults if name not in include and name not in options.field_config]

    # ==================== Table helpers ====================

    @staticmethod
    def _extract_fields(json_schema: Dict[str, Any]) -> List[tuple]:
        properties = json_schema.get("properties")
        if json_schema.get("type") != "object" or not isinstance(properties, dict):
            return []
        return [
            (name, field_schema) for name, field_schema in properties.items()
            if isinstance(field_schema, dict) and "$ref" not in field_schema
        ]

    def _build_column(self, name: str, field_schema: Dict[str, Any], options: TableSchemaOptions) -> TableColumn:
        data_type = self._column_type(field_schema.get("type"))
        field_format = field_schema.get("format")

        column = TableColumn(
            key=name,
            title=field_schema.get("title") or humanize_field_name(name),
            data_type=data_type,
            sortable=name in options.sortable_columns or data_type in DEFAULT_SORTABLE_TYPES,
            filterable=name in options.filterable_columns or data_type in DEFAULT_FILTERABLE_TYPES,
            render=options.custom_renderers.get(name),
            format=self._default_format(data_type, field_format),
        )

        if data_type in NUMERIC_TYPES:
            column.align = "right"
        elif data_type == "boolean":
            column.width = 100
            column.align = "center"
        elif data_type in ("array", "object"):
            column.width = 120
            column.align = "center"
        elif field_format in ("date", "date-time"):
            column.width = 180

        if name in options.column_widths:
            column.width = options.column_widths[name]

        return column

    @staticmethod
    def _column_type(declared: Any) -> str:
        """OpenAPI 3.1 type lists ("integer", "null") use their first non-null entry"""
        if isinstance(declared, list):
            declared = next((item for item in declared if item != "null"), None)
        return declared if isinstance(declared, str) and declared else "string"

    @staticmethod
    def _default_format(data_type: str, field_format: Optional[str]) -> Optional[str]:
        if field_format in COLUMN_FORMATS:
            return COLUMN_FORMATS[field_format]
        if data_type in NUMERIC_TYPES:
            return "number"
        if data_type == "boolean":
            return "boolean"
        return None

    @staticmethod
    def _default_sort(columns: List[TableColumn]) -> Optional[Dict[str, str]]:
        for column in columns:
            if column.key == "id":
                return {"field": "id", "order": "asc"}
        for column in columns:
            if column.sortable:
                return {"field": column.key, "order": "asc"}
        return None
