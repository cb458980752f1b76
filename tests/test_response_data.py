"""
Unit tests for response payload extraction
"""

import pytest

from resource_explorer.resources.response_data import extract_data_from_object, has_pagination_info


class TestExtractDataFromObject:

    def test_default_data_field(self):
        result = extract_data_from_object({"data": [{"id": 1}], "total": 1})

        assert result.data == [{"id": 1}]
        assert result.data_field_name == "data"
        assert result.is_array is True

    def test_custom_field_checked_first(self):
        result = extract_data_from_object(
            {"data": {"id": 1}, "payload": [{"id": 2}]},
            custom_data_fields=["payload"],
        )
        assert result.data_field_name == "payload"

    def test_first_list_field(self):
        result = extract_data_from_object({"count": 2, "rows": [1, 2]})
        assert result.data_field_name == "rows"
        assert result.data == [1, 2]

    def test_single_object_returned_whole(self):
        body = {"id": 1, "name": "Ada"}
        result = extract_data_from_object(body)

        assert result.data == body
        assert result.data_field_name is None
        assert result.is_array is False

    def test_plain_list(self):
        result = extract_data_from_object([1, 2])
        assert result.data == [1, 2]
        assert result.is_array is True

    def test_pagination_expected_without_data_field(self):
        with pytest.raises(ValueError):
            extract_data_from_object({"id": 1}, expect_pagination=True)


class TestHasPaginationInfo:

    def test_pagination_keys(self):
        assert has_pagination_info({"items": [], "totalCount": 3})
        assert not has_pagination_info({"items": []})
        assert not has_pagination_info([1, 2])
