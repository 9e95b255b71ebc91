"""Tests for the built-in rule plugins."""

import pytest

from oaslint import validate
from oaslint.models import Node, NodeKind
from oaslint.validation.references import ReferenceResolver
from oaslint.validation.rules import (
    DescriptionMentionsJsonRule,
    InvalidTypeFormatPairRule,
    NoOperationIdRule,
    NoParameterDescriptionRule,
    NoPropertyDescriptionRule,
    NoSummaryRule,
    RuleContext,
)
from oaslint.validation.rules.schemas import is_well_defined

ALL_SCHEMA_RULES = {
    "schemas": {
        "invalid_type_format_pair": "error",
        "no_property_description": "warning",
        "description_mentions_json": "warning",
    }
}


def body_parameter_spec(schema, **operation):
    return {
        "paths": {
            "/pets": {
                "get": {
                    **operation,
                    "parameters": [
                        {
                            "name": "good_name",
                            "in": "body",
                            "description": "Not a bad description",
                            "schema": schema,
                        }
                    ],
                }
            }
        }
    }


def make_context(document):
    return RuleContext(document=document, resolver=ReferenceResolver(document))


class TestSchemaRules:
    """Schema rules evaluated through the engine."""

    def test_property_without_well_defined_type(self):
        config = {"schemas": {"invalid_type_format_pair": "error"}}
        spec = {
            "definitions": {
                "WordStyle": {
                    "type": "object",
                    "properties": {
                        "level": {
                            "type": "number",
                            "format": "integer",
                            "description": "Good to have a description",
                        }
                    },
                }
            }
        }

        res = validate(spec, config)

        assert len(res.errors) == 1
        assert res.errors[0].path == ["definitions", "WordStyle", "properties", "level", "type"]
        assert res.errors[0].message == "Properties must use well defined property types."
        assert res.errors[0].rule == "invalid_type_format_pair"
        assert len(res.warnings) == 0

    def test_array_items_without_well_defined_type(self):
        config = {"schemas": {"invalid_type_format_pair": "error"}}
        spec = {
            "definitions": {
                "Thing": {
                    "type": "object",
                    "properties": {
                        "level": {
                            "type": "array",
                            "description": "has some items",
                            "items": {"type": "number", "format": "integer"},
                        }
                    },
                }
            }
        }

        res = validate(spec, config)

        assert len(res.errors) == 1
        assert res.errors[0].path == ["definitions", "Thing", "properties", "level", "items", "type"]
        assert res.errors[0].message == "Properties must use well defined property types."
        assert len(res.warnings) == 0

    def test_array_items_reference_is_not_checked(self):
        config = {"schemas": {"invalid_type_format_pair": "error"}}
        spec = {
            "definitions": {
                "Thing": {
                    "type": "object",
                    "properties": {
                        "level": {
                            "type": "array",
                            "description": "has one item, its a ref",
                            "items": {"$ref": "#/definitions/levelItem"},
                        }
                    },
                },
                "levelItem": {"type": "number", "format": "integer"},
            }
        }

        res = validate(spec, config)

        assert len(res.errors) == 0
        assert len(res.warnings) == 0

    def test_response_schema_property(self):
        config = {"schemas": {"invalid_type_format_pair": "error"}}
        spec = {
            "responses": {
                "Thing": {
                    "schema": {
                        "properties": {
                            "level": {
                                "type": "number",
                                "format": "integer",
                                "description": "i need better types",
                            }
                        }
                    }
                }
            }
        }

        res = validate(spec, config)

        assert len(res.errors) == 1
        assert res.errors[0].path == ["responses", "Thing", "schema", "properties", "level", "type"]
        assert len(res.warnings) == 0

    def test_property_without_description(self):
        config = {"schemas": {"no_property_description": "warning"}}
        spec = body_parameter_spec({
            "type": "object",
            "properties": {"badProperty": {"type": "string"}},
        })

        res = validate(spec, config)

        assert len(res.errors) == 0
        assert len(res.warnings) == 1
        assert res.warnings[0].path == [
            "paths", "/pets", "get", "parameters", "0", "schema",
            "properties", "badProperty", "description",
        ]
        assert res.warnings[0].message == "Schema properties must have a description with content in it."

    @pytest.mark.parametrize("description", ["", "   ", "\n\t"])
    def test_blank_description(self, description):
        config = {"schemas": {"no_property_description": "warning"}}
        spec = body_parameter_spec({
            "type": "object",
            "properties": {"badProperty": {"type": "string", "description": description}},
        })

        res = validate(spec, config)

        assert len(res.warnings) == 1
        assert res.warnings[0].path[-1] == "description"

    def test_description_mentions_json(self):
        config = {"schemas": {"description_mentions_json": "warning"}}
        spec = body_parameter_spec({
            "type": "object",
            "properties": {
                "anyObject": {"type": "object", "description": "it is not always a JSON object"},
            },
        })

        res = validate(spec, config)

        assert len(res.errors) == 0
        assert len(res.warnings) == 1
        assert res.warnings[0].path == [
            "paths", "/pets", "get", "parameters", "0", "schema",
            "properties", "anyObject", "description",
        ]
        assert res.warnings[0].message == (
            "Not all languages use JSON, so descriptions should not state that the model is a JSON object."
        )

    def test_property_named_description(self):
        spec = {
            "definitions": {
                "Notice": {
                    "type": "object",
                    "description": "A notice produced for the collection",
                    "properties": {
                        "notice_id": {
                            "type": "string",
                            "readOnly": True,
                            "description": "Identifies the notice.",
                        },
                        "description": {
                            "type": "string",
                            "readOnly": True,
                            "description": "The description of the notice",
                        },
                    },
                }
            }
        }

        res = validate(spec, ALL_SCHEMA_RULES)

        assert len(res.errors) == 0
        assert len(res.warnings) == 0

    def test_excluded_operation(self):
        spec = body_parameter_spec(
            {"type": "integer", "properties": {"badProperty": {"type": "string"}}},
            **{"x-sdk-exclude": True},
        )

        res = validate(spec, ALL_SCHEMA_RULES)

        assert len(res.errors) == 0
        assert len(res.warnings) == 0

    def test_malformed_format_does_not_hide_sibling_findings(self):
        config = {"schemas": {"invalid_type_format_pair": "error"}}
        spec = {
            "definitions": {
                "A": {
                    "type": "object",
                    "properties": {
                        "a": {"type": "number", "format": "integer", "description": "a"},
                        "b": {"type": "string", "format": {"x": 1}, "description": "b"},
                        "c": {"type": "string", "format": ["date"], "description": "c"},
                    },
                }
            }
        }

        res = validate(spec, config)

        assert [e.path for e in res.errors] == [
            ["definitions", "A", "properties", "a", "type"],
            ["definitions", "A", "properties", "b", "type"],
            ["definitions", "A", "properties", "c", "type"],
        ]
        assert res.diagnostics == []

    def test_nested_object_properties(self):
        config = {"schemas": {"invalid_type_format_pair": "error"}}
        spec = {
            "definitions": {
                "Outer": {
                    "type": "object",
                    "properties": {
                        "inner": {
                            "type": "object",
                            "properties": {"count": {"type": "integer", "format": "int16"}},
                        }
                    },
                }
            }
        }

        res = validate(spec, config)

        assert [e.path for e in res.errors] == [
            ["definitions", "Outer", "properties", "inner", "properties", "count", "type"],
        ]

    def test_description_is_read_through_reference(self):
        config = {"schemas": {"no_property_description": "warning", "description_mentions_json": "warning"}}
        spec = {
            "definitions": {
                "Pet": {
                    "type": "object",
                    "properties": {
                        "owner": {"$ref": "#/definitions/Owner"},
                        "meta": {"$ref": "#/definitions/Meta"},
                    },
                },
                "Owner": {"type": "string"},
                "Meta": {"type": "object", "description": "Arbitrary JSON object"},
            }
        }

        res = validate(spec, config)

        assert [(w.rule, w.path) for w in res.warnings] == [
            ("no_property_description", ["definitions", "Pet", "properties", "owner", "description"]),
            ("description_mentions_json", ["definitions", "Pet", "properties", "meta", "description"]),
        ]


class TestWellDefinedTypes:

    @pytest.mark.parametrize("schema", [
        {"type": "integer"},
        {"type": "integer", "format": "int32"},
        {"type": "integer", "format": "int64"},
        {"type": "number", "format": "double"},
        {"type": "string", "format": "date-time"},
        {"type": "boolean"},
        {"type": "object"},
        {},
    ])
    def test_well_defined(self, schema):
        assert is_well_defined(schema)

    @pytest.mark.parametrize("schema", [
        {"type": "number", "format": "integer"},
        {"type": "integer", "format": "int16"},
        {"type": "boolean", "format": "int32"},
        {"type": "decimal"},
        {"format": "int32"},
        {"type": ["string", "null"]},
        {"type": "string", "format": {"x": 1}},
        {"type": "string", "format": ["date"]},
        {"type": {"name": "string"}},
    ])
    def test_not_well_defined(self, schema):
        assert not is_well_defined(schema)


class TestRulesDirectly:
    """Rules are pure functions of a node."""

    def test_type_pair_ignores_reference_properties(self):
        node = Node(
            kind=NodeKind.OBJECT_SCHEMA,
            value={"properties": {"a": {"$ref": "#/definitions/A"}}},
            path=("definitions", "B"),
        )
        assert InvalidTypeFormatPairRule().evaluate(node, make_context({})) == []

    def test_type_pair_does_not_mutate_node(self):
        value = {"type": "array", "items": {"type": "number", "format": "integer"}}
        node = Node(kind=NodeKind.ARRAY_SCHEMA, value=value, path=("definitions", "List"))

        findings = InvalidTypeFormatPairRule().evaluate(node, make_context({}))

        assert [f.path for f in findings] == [["definitions", "List", "items", "type"]]
        assert value == {"type": "array", "items": {"type": "number", "format": "integer"}}

    def test_unresolvable_reference_is_skipped(self):
        node = Node(
            kind=NodeKind.OBJECT_SCHEMA,
            value={"properties": {"a": {"$ref": "#/definitions/Missing"}}},
            path=("definitions", "B"),
        )
        assert NoPropertyDescriptionRule().evaluate(node, make_context({})) == []
        assert DescriptionMentionsJsonRule().evaluate(node, make_context({})) == []

    def test_parameter_description(self):
        rule = NoParameterDescriptionRule()
        context = make_context({})
        missing = Node(kind=NodeKind.PARAMETER, value={"name": "q", "in": "query"}, path=("parameters", "q"))
        present = Node(kind=NodeKind.PARAMETER, value={"name": "q", "description": "Query"}, path=("parameters", "q"))

        assert [f.path for f in rule.evaluate(missing, context)] == [["parameters", "q", "description"]]
        assert rule.evaluate(present, context) == []

    def test_operation_rules(self):
        context = make_context({})
        node = Node(kind=NodeKind.OPERATION, value={"summary": " "}, path=("paths", "/pets", "get"))

        assert [f.path for f in NoOperationIdRule().evaluate(node, context)] == [["paths", "/pets", "get", "operationId"]]
        assert [f.rule for f in NoSummaryRule().evaluate(node, context)] == ["no_summary"]

    def test_rule_metadata(self):
        rule = NoPropertyDescriptionRule()
        assert rule.name == "no_property_description"
        assert rule.CATEGORY == "schemas"
        assert rule.module == "oaslint.validation.rules.schemas"
