"""
Unit tests for path classification and path parameter helpers
"""

import pytest

from resource_explorer.resources.path_classifier import (
    PathClassifier,
    build_path,
    extract_param_names,
    extract_path_params,
    is_path_parameter,
)


class TestExtractResourceChain:
    """Tests for PathClassifier.extract_resource_chain"""

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("/users", ["users"]),
            ("/users/{id}", ["users"]),
            ("/users/{id}/posts/{postId}/comments", ["users", "posts", "comments"]),
            ("/api/v1/orders", ["orders"]),
            ("/API/V2/orders", ["orders"]),
            ("/users/search", ["users"]),
            ("/auth/login", []),
            ("/", []),
            ("//users//{id}/", ["users"]),
        ],
    )
    def test_chain(self, path, expected):
        assert PathClassifier.extract_resource_chain(path) == expected

    def test_resource_named_like_denylisted_token_is_dropped(self):
        assert PathClassifier.extract_resource_chain("/files/{id}") == []

    def test_is_collection_path(self):
        assert PathClassifier.is_collection_path("/users") is True
        assert PathClassifier.is_collection_path("/users/{id}/posts") is True
        assert PathClassifier.is_collection_path("/users/{id}") is False


class TestPathParameterHelpers:
    """Tests for path parameter helpers"""

    def test_is_path_parameter(self):
        assert is_path_parameter("{id}")
        assert not is_path_parameter("id")

    def test_extract_param_names(self):
        assert extract_param_names("/authors/{authorId}/books/{bookId}") == ["authorId", "bookId"]
        assert extract_param_names("/authors") == []

    def test_build_path_encodes_values(self):
        path = build_path("/authors/{authorId}/books/{bookId}", {"authorId": "a b/c", "bookId": 7})
        assert path == "/authors/a%20b%2Fc/books/7"

    def test_build_path_leaves_unknown_placeholders(self):
        assert build_path("/users/{id}", {}) == "/users/{id}"

    def test_extract_path_params(self):
        params = extract_path_params("/authors/{authorId}/books/{bookId}", "/authors/12/books/abc")
        assert params == {"authorId": "12", "bookId": "abc"}

    def test_extract_path_params_stops_at_shorter_path(self):
        assert extract_path_params("/authors/{authorId}/books/{bookId}", "/authors/12") == {"authorId": "12"}
