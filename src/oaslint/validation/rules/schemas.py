"""Rules for schema objects and their properties."""

from collections.abc import Mapping
from typing import Any

from oaslint.models import Finding, Node, NodeKind
from oaslint.validation.traversal import is_reference

from .base import RuleContext, RulePlugin, has_content, iter_properties

# Formats accepted for each type; None stands for "no format".
WELL_DEFINED_TYPES: dict[str, frozenset[str | None]] = {
    "integer": frozenset({None, "int32", "int64"}),
    "number": frozenset({None, "float", "double"}),
    "string": frozenset({
        None, "byte", "binary", "date", "date-time", "password",
        "email", "uuid", "uri", "url",
    }),
    "boolean": frozenset({None}),
    "object": frozenset({None}),
    "array": frozenset({None}),
    "file": frozenset({None}),
}


def is_well_defined(schema: Mapping) -> bool:
    """Whether the schema's type/format pair is in the registry."""
    type_ = schema.get("type")
    format_ = schema.get("format")
    if type_ is None and format_ is None:
        return True
    if not isinstance(type_, str):
        return False
    if format_ is not None and not isinstance(format_, str):
        return False
    return format_ in WELL_DEFINED_TYPES.get(type_, frozenset())


class InvalidTypeFormatPairRule(RulePlugin):
    """Properties and array items must use a recognized type/format pair.

    References are taken as well formed at the point of use; their targets are
    checked where they are defined.
    """

    CATEGORY = "schemas"
    KINDS = frozenset({NodeKind.OBJECT_SCHEMA, NodeKind.ARRAY_SCHEMA})
    MESSAGE = "Properties must use well defined property types."

    @property
    def name(self) -> str:
        return "invalid_type_format_pair"

    def evaluate(self, node: Node, context: RuleContext) -> list[Finding]:
        findings = []

        if node.kind == NodeKind.OBJECT_SCHEMA:
            for name, prop in iter_properties(node.value):
                if is_reference(prop):
                    continue
                if not is_well_defined(prop):
                    findings.append(self.finding(node.child_path("properties", name, "type")))

        elif node.kind == NodeKind.ARRAY_SCHEMA:
            items = node.value.get("items")
            if isinstance(items, Mapping) and not is_reference(items) and not is_well_defined(items):
                findings.append(self.finding(node.child_path("items", "type")))

        return findings


def _property_description(prop: Mapping, context: RuleContext) -> tuple[bool, Any]:
    """Description seen at a property, looking through a reference if needed.

    Returns (known, description); ``known`` is False when a referenced target
    could not be resolved.
    """
    if "description" in prop or not is_reference(prop):
        return True, prop.get("description")

    target = context.resolver.resolve_node(prop)
    if not isinstance(target, Mapping):
        return False, None
    return True, target.get("description")


class NoPropertyDescriptionRule(RulePlugin):
    """Schema properties need a description with content."""

    CATEGORY = "schemas"
    KINDS = frozenset({NodeKind.OBJECT_SCHEMA})
    MESSAGE = "Schema properties must have a description with content in it."

    @property
    def name(self) -> str:
        return "no_property_description"

    def evaluate(self, node: Node, context: RuleContext) -> list[Finding]:
        findings = []
        for name, prop in iter_properties(node.value):
            known, description = _property_description(prop, context)
            if known and not has_content(description):
                findings.append(self.finding(node.child_path("properties", name, "description")))
        return findings


class DescriptionMentionsJsonRule(RulePlugin):
    """Descriptions must not claim the value is a JSON object."""

    CATEGORY = "schemas"
    KINDS = frozenset({NodeKind.OBJECT_SCHEMA})
    MESSAGE = "Not all languages use JSON, so descriptions should not state that the model is a JSON object."

    @property
    def name(self) -> str:
        return "description_mentions_json"

    def evaluate(self, node: Node, context: RuleContext) -> list[Finding]:
        findings = []
        for name, prop in iter_properties(node.value):
            _, description = _property_description(prop, context)
            if isinstance(description, str) and "JSON" in description:
                findings.append(self.finding(node.child_path("properties", name, "description")))
        return findings
