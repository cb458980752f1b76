"""Best-effort extraction of resource data from API response payloads."""
from dataclasses import dataclass
from typing import Any, List, Optional

DEFAULT_DATA_FIELDS = ['data', 'items', 'list', 'results', 'records']

PAGINATION_FIELDS = [
    'pagination', 'page', 'pageSize', 'total', 'totalCount',
    'count', 'totalElements', 'size', 'limit', 'perPage',
]


@dataclass
class ExtractedData:
    """Payload found inside a response body."""

    data: Any
    data_field_name: Optional[str] = None
    is_array: bool = False


def extract_data_from_object(
    obj: Any,
    expect_pagination: bool = False,
    custom_data_fields: Optional[List[str]] = None,
) -> ExtractedData:
    """
    Locate the resource data inside a response body.

    Custom field names are checked first, then the default wrapper names, then
    the first list-valued field. A body with no wrapper is returned whole.

    Raises:
        ValueError: If pagination is expected but no data field is found
    """
    if obj is None or not isinstance(obj, dict):
        return ExtractedData(data=obj, is_array=isinstance(obj, list))

    for field_name in list(custom_data_fields or []) + DEFAULT_DATA_FIELDS:
        if field_name in obj:
            value = obj[field_name]
            return ExtractedData(data=value, data_field_name=field_name, is_array=isinstance(value, list))

    for key, value in obj.items():
        if isinstance(value, list):
            return ExtractedData(data=value, data_field_name=key, is_array=True)

    if expect_pagination:
        raise ValueError("Could not find data field in paginated response")

    return ExtractedData(data=obj)


def has_pagination_info(obj: Any) -> bool:
    """Check whether a response body carries common pagination fields."""
    if not isinstance(obj, dict):
        return False
    return any(field_name in obj for field_name in PAGINATION_FIELDS)
