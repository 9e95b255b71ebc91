"""Tests for document traversal and node tagging."""

import pytest

from oaslint.models import NodeKind
from oaslint.validation.traversal import DocumentTraversal, classify, Role, traverse


@pytest.fixture
def document():
    return {
        "swagger": "2.0",
        "paths": {
            "/pets": {
                "parameters": [{"name": "tenant", "in": "header", "type": "string"}],
                "get": {
                    "parameters": [{"name": "limit", "in": "query", "type": "integer"}],
                    "responses": {
                        "200": {"description": "ok", "schema": {"$ref": "#/definitions/Pet"}},
                    },
                },
                "x-owner": {"properties": {"a": {"type": "string"}}},
            },
        },
        "definitions": {
            "Pet": {
                "type": "object",
                "example": {"properties": {"type": "object"}},
                "properties": {
                    "tags": {"type": "array", "items": {"type": "string"}},
                    "items": {"type": "string"},
                },
            },
        },
    }


def kinds_by_path(document, **kwargs):
    return {node.path: node.kind for node in traverse(document, **kwargs)}


class TestClassification:

    def test_structural_roles(self, document):
        kinds = kinds_by_path(document)

        assert kinds[()] == NodeKind.MAPPING
        assert kinds[("swagger",)] == NodeKind.PRIMITIVE
        assert kinds[("paths",)] == NodeKind.MAPPING
        assert kinds[("paths", "/pets")] == NodeKind.PATH_ITEM
        assert kinds[("paths", "/pets", "get")] == NodeKind.OPERATION
        assert kinds[("paths", "/pets", "parameters")] == NodeKind.SEQUENCE
        assert kinds[("paths", "/pets", "parameters", "0")] == NodeKind.PARAMETER
        assert kinds[("paths", "/pets", "get", "parameters", "0")] == NodeKind.PARAMETER
        assert kinds[("paths", "/pets", "get", "responses", "200")] == NodeKind.RESPONSE

    def test_schema_shapes(self, document):
        kinds = kinds_by_path(document)

        assert kinds[("definitions", "Pet")] == NodeKind.OBJECT_SCHEMA
        assert kinds[("definitions", "Pet", "properties", "tags")] == NodeKind.ARRAY_SCHEMA
        assert kinds[("definitions", "Pet", "properties", "tags", "items")] == NodeKind.MAPPING

    def test_named_maps_are_not_schemas(self, document):
        kinds = kinds_by_path(document)

        # A property called "items" does not make the properties map an array schema.
        assert kinds[("definitions", "Pet", "properties")] == NodeKind.MAPPING
        assert kinds[("definitions",)] == NodeKind.MAPPING

    def test_reference_sites(self, document):
        kinds = kinds_by_path(document)
        assert kinds[("paths", "/pets", "get", "responses", "200", "schema")] == NodeKind.REFERENCE

    def test_literal_data_is_opaque(self, document):
        kinds = kinds_by_path(document)

        assert kinds[("definitions", "Pet", "example")] == NodeKind.MAPPING
        assert kinds[("definitions", "Pet", "example", "properties")] == NodeKind.MAPPING
        assert kinds[("paths", "/pets", "x-owner")] == NodeKind.MAPPING

    def test_classify_reference_wins_over_role(self):
        assert classify({"$ref": "#/x"}, Role.PARAMETER) == NodeKind.REFERENCE
        assert classify({"$ref": "#/x"}, Role.OPAQUE) == NodeKind.MAPPING

    def test_classify_scalars_and_lists(self):
        assert classify("text", Role.SCHEMA) == NodeKind.PRIMITIVE
        assert classify(None, Role.FIELD) == NodeKind.PRIMITIVE
        assert classify([1, 2], Role.FIELD) == NodeKind.SEQUENCE


class TestOrdering:

    def test_pre_order(self, document):
        nodes = list(traverse(document))
        position = {node.path: i for i, node in enumerate(nodes)}

        for node in nodes:
            assert node.index == position[node.path]
            if node.path:
                assert position[node.path[:-1]] < position[node.path]

    def test_document_order_of_siblings(self, document):
        paths = [node.path for node in traverse(document) if len(node.path) == 1]
        assert paths == [("swagger",), ("paths",), ("definitions",)]

    def test_every_node_visited_once(self, document):
        paths = [node.path for node in traverse(document)]
        assert len(paths) == len(set(paths))

    def test_references_are_leaves(self, document):
        paths = {node.path for node in traverse(document)}
        assert ("paths", "/pets", "get", "responses", "200", "schema", "$ref") not in paths

    def test_shared_target_visited_once(self):
        document = {
            "definitions": {"Tag": {"type": "object", "properties": {"n": {"type": "string"}}}},
            "responses": {
                "A": {"schema": {"$ref": "#/definitions/Tag"}},
                "B": {"schema": {"$ref": "#/definitions/Tag"}},
            },
        }
        object_schemas = [n.path for n in traverse(document) if n.kind == NodeKind.OBJECT_SCHEMA]
        assert object_schemas == [("definitions", "Tag")]

    def test_deep_document_does_not_recurse(self):
        document = current = {}
        for _ in range(5000):
            current["next"] = {}
            current = current["next"]

        assert len(list(traverse(document))) == 5001


class TestExclusion:

    def test_marked_subtree_is_skipped(self, document):
        document["paths"]["/pets"]["get"]["x-sdk-exclude"] = True
        traversal = DocumentTraversal(document)

        paths = [node.path for node in traversal]

        assert ("paths", "/pets") in paths
        assert not any(path[:3] == ("paths", "/pets", "get") for path in paths)
        assert traversal.excluded == [("paths", "/pets", "get")]

    def test_marker_must_be_true(self, document):
        document["paths"]["/pets"]["get"]["x-sdk-exclude"] = "yes"
        paths = [node.path for node in traverse(document)]
        assert ("paths", "/pets", "get") in paths

    def test_custom_marker(self, document):
        document["definitions"]["Pet"]["x-internal"] = True
        paths = [node.path for node in traverse(document, exclusion_marker="x-internal")]
        assert ("definitions", "Pet") not in paths

    def test_is_excluded(self, document):
        document["paths"]["/pets"]["x-sdk-exclude"] = True
        traversal = DocumentTraversal(document)
        list(traversal)

        assert traversal.is_excluded(["paths", "/pets"])
        assert traversal.is_excluded(["paths", "/pets", "get", "summary"])
        assert not traversal.is_excluded(["paths", "/petsitters"])
        assert not traversal.is_excluded(["paths"])
