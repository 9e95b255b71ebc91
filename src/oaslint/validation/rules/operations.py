"""Rules for operations (HTTP methods of a path item)."""

from oaslint.models import Finding, Node, NodeKind

from .base import RuleContext, RulePlugin, has_content


class NoOperationIdRule(RulePlugin):
    """Operations need an operationId for generated client method names."""

    CATEGORY = "operations"
    KINDS = frozenset({NodeKind.OPERATION})
    MESSAGE = "Operations must have a non-empty `operationId`."

    @property
    def name(self) -> str:
        return "no_operation_id"

    def evaluate(self, node: Node, context: RuleContext) -> list[Finding]:
        if has_content(node.value.get("operationId")):
            return []
        return [self.finding(node.child_path("operationId"))]


class NoSummaryRule(RulePlugin):
    CATEGORY = "operations"
    KINDS = frozenset({NodeKind.OPERATION})
    MESSAGE = "Operations must have a non-empty `summary` field."

    @property
    def name(self) -> str:
        return "no_summary"

    def evaluate(self, node: Node, context: RuleContext) -> list[Finding]:
        if has_content(node.value.get("summary")):
            return []
        return [self.finding(node.child_path("summary"))]
