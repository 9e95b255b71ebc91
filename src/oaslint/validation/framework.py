"""Core validation framework for oaslint.

The framework walks a document, dispatches each node to the rules registered for
its kind, isolates rule failures, and hands the collected findings to the
aggregator. Rule registration is explicit: every framework owns its registry.
"""

import logging
from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from oaslint.config import EngineOptions, RuleConfig, resolve_config
from oaslint.diagnostics import DiagnosticCollector, DiagnosticKind
from oaslint.errors import DocumentError
from oaslint.models import Finding, Node, NodeKind, ValidationResult

from .aggregator import aggregate
from .references import FailureReason, ReferenceResolver
from .rules import RuleContext, RulePlugin, default_rules
from .traversal import DocumentTraversal

logger = logging.getLogger(__name__)

_FAILURE_KINDS = {
    FailureReason.UNRESOLVED: DiagnosticKind.UNRESOLVED_REFERENCE,
    FailureReason.CYCLIC: DiagnosticKind.CYCLIC_REFERENCE,
}


class RuleRegistry:
    """Rules keyed by the node kinds they apply to."""

    def __init__(self, rules: Iterable[RulePlugin] = ()):
        self.rules: list[RulePlugin] = []
        self._by_kind: dict[NodeKind, list[RulePlugin]] = {}
        for rule in rules:
            self.register(rule)

    def register(self, rule: RulePlugin) -> None:
        if self.get(rule.name) is not None:
            raise ValueError(f"Rule already registered: {rule.name}")
        self.rules.append(rule)
        for kind in rule.KINDS:
            self._by_kind.setdefault(kind, []).append(rule)

    def get(self, name: str) -> RulePlugin | None:
        for rule in self.rules:
            if rule.name == name:
                return rule
        return None

    def rules_for(self, kind: NodeKind) -> list[RulePlugin]:
        return self._by_kind.get(kind, [])

    def __len__(self) -> int:
        return len(self.rules)

    @classmethod
    def with_defaults(cls) -> "RuleRegistry":
        return cls(default_rules())


# Per-node outcome: findings in rule order, then (rule, error) for failed rules.
_NodeOutcome = tuple[list[Finding], list[tuple[str, Exception]]]


class ValidationFramework:
    """Runs registered rules over a document."""

    def __init__(
        self,
        config: RuleConfig | None = None,
        registry: RuleRegistry | None = None,
        options: EngineOptions | None = None,
    ):
        self.config = config if config is not None else resolve_config()
        self.registry = registry if registry is not None else RuleRegistry()
        self.options = options or EngineOptions()

    def add_rule(self, rule: RulePlugin) -> None:
        """Add a validation rule."""
        self.registry.register(rule)

    def create_default_rules(self) -> None:
        """Register every built-in rule."""
        for rule in default_rules():
            self.add_rule(rule)

    def _check_reference(self, node: Node, resolver: ReferenceResolver,
                         collector: DiagnosticCollector) -> None:
        result = resolver.resolve(node.ref)
        if result.ok:
            return
        kind = _FAILURE_KINDS.get(result.reason)
        if kind is None:
            logger.debug(f"Leaving external reference opaque: {node.ref}")
            return
        collector.collect_reference_failure(kind, node.path, result.message)

    def _evaluate(self, node: Node, rules: list[RulePlugin], document: Any,
                  resolver: ReferenceResolver) -> _NodeOutcome:
        findings: list[Finding] = []
        failures: list[tuple[str, Exception]] = []

        context = RuleContext(document=document, resolver=resolver)
        for rule in rules:
            try:
                produced = rule.evaluate(node, context)
            except Exception as e:
                failures.append((rule.name, e))
                continue
            findings.extend(f for f in produced if f.rule == rule.name)

        return findings, failures

    def validate(self, document: Any) -> ValidationResult:
        """Validate a decoded document.

        Args:
            document: Root mapping of the API description

        Returns:
            ValidationResult with errors, warnings, diagnostics and statistics

        Raises:
            DocumentError: If the document is not a mapping
        """
        if not isinstance(document, Mapping):
            raise DocumentError(
                f"Document root must be a mapping, got {type(document).__name__}"
            )

        active = {rule.name for rule in self.registry.rules if self.config.is_enabled(rule.name)}
        logger.info(f"Running {len(active)} of {len(self.registry)} validation rules")

        resolver = ReferenceResolver(document)
        collector = DiagnosticCollector()
        traversal = DocumentTraversal(document, self.options.exclusion_marker)

        tasks: list[tuple[Node, list[RulePlugin]]] = []
        for node in traversal:
            if node.kind == NodeKind.REFERENCE:
                self._check_reference(node, resolver, collector)
            rules = [rule for rule in self.registry.rules_for(node.kind) if rule.name in active]
            if rules:
                tasks.append((node, rules))

        logger.debug(f"Dispatching {len(tasks)} nodes to rules")

        if self.options.max_workers > 1 and len(tasks) > 1:
            with ThreadPoolExecutor(max_workers=self.options.max_workers) as executor:
                outcomes = list(executor.map(
                    lambda task: self._evaluate(task[0], task[1], document, resolver), tasks
                ))
        else:
            outcomes = [self._evaluate(node, rules, document, resolver) for node, rules in tasks]

        findings: list[Finding] = []
        for (node, _), (node_findings, failures) in zip(tasks, outcomes):
            for rule_name, error in failures:
                collector.collect_rule_failure(rule_name, node.path, error)
            findings.extend(f for f in node_findings if not traversal.is_excluded(f.path))

        result = aggregate(findings, self.config)
        result.diagnostics = collector.diagnostics
        if collector.has_diagnostics():
            logger.info(f"Recovered from faults: {collector.get_counts()}")

        logger.info(
            f"Validation completed with {len(result.errors)} errors, "
            f"{len(result.warnings)} warnings, {len(result.diagnostics)} diagnostics"
        )
        return result


def validate(
    document: Any,
    config: RuleConfig | Mapping[str, Any] | None = None,
    options: EngineOptions | None = None,
) -> ValidationResult:
    """Validate ``document`` with the built-in rules.

    Args:
        document: Decoded API description
        config: Resolved RuleConfig, or a raw category mapping to resolve
        options: Engine options

    Returns:
        ValidationResult

    Raises:
        ConfigError: If ``config`` is a raw mapping with invalid severities
        DocumentError: If the document is not a mapping
    """
    if not isinstance(config, RuleConfig):
        config = resolve_config(config)

    framework = ValidationFramework(config, options=options)
    framework.create_default_rules()
    return framework.validate(document)
