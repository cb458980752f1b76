"""
Unit tests for the Schema Extractor

Tests:
- Success response selection (200 / 201 / default, OpenAPI 3 and Swagger 2.0)
- Each unwrap rule on its own
- Instance schema extraction end to end
"""

import pytest

from conftest import contains_ref
from resource_explorer.introspection.ref_resolver import ReferenceResolver
from resource_explorer.introspection.schema_extractor import (
    SchemaExtractor,
    make_wrapper_rule,
    unwrap_array_items,
    unwrap_single_array_property,
)
from resource_explorer.resources.models import ResourceInfo, ResourceOperation

ITEM = {"type": "object", "properties": {"id": {"type": "integer"}}}


@pytest.fixture
def document():
    return {
        "components": {
            "schemas": {
                "Item": ITEM,
                "ItemList": {"type": "array", "items": {"$ref": "#/components/schemas/Item"}},
            },
            "responses": {
                "ItemResponse": {
                    "description": "OK",
                    "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Item"}}},
                }
            },
        }
    }


@pytest.fixture
def resolver(document):
    return ReferenceResolver(document)


@pytest.fixture
def extractor(resolver):
    return SchemaExtractor(resolver)


def make_resource(responses, method="GET"):
    return ResourceInfo(
        name="items",
        path_pattern="/items",
        base_path="/items",
        operations=[ResourceOperation(method=method, path="/items", responses=responses)],
    )


def json_response(schema, media_type="application/json"):
    return {"description": "OK", "content": {media_type: {"schema": schema}}}


# ============================================================================
# TEST: Response schema selection
# ============================================================================


class TestExtractResponseSchema:

    def test_prefers_200(self, extractor):
        responses = {"201": json_response({"type": "string"}), "200": json_response(ITEM)}
        assert extractor.extract_response_schema(responses) == ITEM

    def test_falls_back_to_201_then_default(self, extractor):
        assert extractor.extract_response_schema({"201": json_response(ITEM)}) == ITEM
        assert extractor.extract_response_schema({"default": json_response(ITEM), "404": {}}) == ITEM

    def test_integer_status_keys(self, extractor):
        assert extractor.extract_response_schema({200: json_response(ITEM)}) == ITEM

    def test_response_ref(self, extractor):
        responses = {"200": {"$ref": "#/components/responses/ItemResponse"}}
        assert extractor.extract_response_schema(responses) == {"$ref": "#/components/schemas/Item"}

    def test_vendor_json_and_first_media_type(self, extractor):
        vendor = {"200": {"content": {"text/plain": {"schema": {"type": "string"}},
                                      "application/vnd.api+json": {"schema": ITEM}}}}
        assert extractor.extract_response_schema(vendor) == ITEM

        other = {"200": json_response(ITEM, media_type="application/xml")}
        assert extractor.extract_response_schema(other) == ITEM

    def test_swagger_schema(self, extractor):
        assert extractor.extract_response_schema({"200": {"description": "OK", "schema": ITEM}}) == ITEM

    def test_no_success_response(self, extractor):
        assert extractor.extract_response_schema({"404": json_response(ITEM)}) is None
        assert extractor.extract_response_schema({"200": {"description": "OK"}}) is None


# ============================================================================
# TEST: Unwrap rules
# ============================================================================


class TestUnwrapRules:

    def test_array_items(self, resolver):
        assert unwrap_array_items({"type": "array", "items": ITEM}, resolver) == ITEM
        assert unwrap_array_items(ITEM, resolver) is None

    def test_wrapper_array(self, resolver):
        rule = make_wrapper_rule("data")
        schema = {"type": "object", "properties": {"data": {"$ref": "#/components/schemas/ItemList"}}}

        assert rule.name == "wrapper:data"
        assert rule.apply(schema, resolver) == {"$ref": "#/components/schemas/Item"}

    def test_wrapper_object(self, resolver):
        rule = make_wrapper_rule("content")
        schema = {"type": "object", "properties": {"content": ITEM}}
        assert rule.apply(schema, resolver) == ITEM

    def test_wrapper_scalar_does_not_match(self, resolver):
        rule = make_wrapper_rule("data")
        schema = {"type": "object", "properties": {"data": {"type": "string"}}}
        assert rule.apply(schema, resolver) is None

    def test_single_array_property(self, resolver):
        schema = {
            "type": "object",
            "properties": {"rows": {"type": "array", "items": ITEM}, "total": {"type": "integer"}},
        }
        assert unwrap_single_array_property(schema, resolver) == ITEM

    def test_two_array_properties_do_not_match(self, resolver):
        schema = {
            "type": "object",
            "properties": {"rows": {"type": "array", "items": ITEM}, "tags": {"type": "array", "items": ITEM}},
        }
        assert unwrap_single_array_property(schema, resolver) is None

    def test_rule_order(self, extractor):
        schema = {
            "type": "object",
            "properties": {
                "rows": {"type": "array", "items": {"type": "string"}},
                "items": {"type": "array", "items": ITEM},
            },
        }
        name, candidate = extractor.apply_unwrap_rules(schema)

        assert name == "wrapper:items"
        assert candidate == ITEM

    def test_no_rule_matches(self, extractor):
        name, candidate = extractor.apply_unwrap_rules(ITEM)
        assert name is None
        assert candidate == ITEM


# ============================================================================
# TEST: Instance schema
# ============================================================================


class TestExtractInstanceSchema:

    def test_list_response(self, extractor):
        resource = make_resource({"200": json_response({"$ref": "#/components/schemas/ItemList"})})
        assert extractor.extract_instance_schema(resource) == ITEM

    def test_result_has_no_refs(self, extractor):
        envelope = {
            "type": "object",
            "properties": {"results": {"type": "array", "items": {"$ref": "#/components/schemas/Item"}}},
        }
        result = extractor.extract_instance_schema(make_resource({"200": json_response(envelope)}))

        assert result == ITEM
        assert not contains_ref(result)

    def test_unresolvable_response_schema(self, extractor):
        resource = make_resource({"200": json_response({"$ref": "#/components/schemas/Missing"})})
        assert extractor.extract_instance_schema(resource) == {"type": "object", "properties": {}}

    def test_no_get_operation(self, extractor):
        assert extractor.extract_instance_schema(make_resource({}, method="POST")) is None

    def test_no_response_schema(self, extractor):
        assert extractor.extract_instance_schema(make_resource({"200": {"description": "OK"}})) is None
