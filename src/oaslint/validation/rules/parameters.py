"""Rules for parameter objects."""

from oaslint.models import Finding, Node, NodeKind

from .base import RuleContext, RulePlugin, has_content


class NoParameterDescriptionRule(RulePlugin):
    CATEGORY = "parameters"
    KINDS = frozenset({NodeKind.PARAMETER})
    MESSAGE = "Parameter objects must have a `description` field."

    @property
    def name(self) -> str:
        return "no_parameter_description"

    def evaluate(self, node: Node, context: RuleContext) -> list[Finding]:
        if has_content(node.value.get("description")):
            return []
        return [self.finding(node.child_path("description"))]
