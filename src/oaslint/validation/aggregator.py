"""Severity classification and statistics over rule findings."""

import logging
from collections.abc import Iterable

from oaslint.config import RuleConfig, Severity
from oaslint.models import Finding, RuleStatistic, ValidationResult

logger = logging.getLogger(__name__)


def percentage(count: int, total: int) -> int:
    """Integer share of ``count`` in ``total``, rounding halves up."""
    if total == 0:
        return 0
    return (200 * count + total) // (2 * total)


def compute_statistics(findings: Iterable[Finding]) -> list[RuleStatistic]:
    """Per-rule counts and percentage shares, ordered by first appearance.

    Percentages are rounded independently and need not sum to 100.
    """
    counts: dict[str, int] = {}
    for finding in findings:
        counts[finding.rule] = counts.get(finding.rule, 0) + 1

    total = sum(counts.values())
    return [
        RuleStatistic(rule=rule, count=count, percentage=percentage(count, total))
        for rule, count in counts.items()
    ]


def aggregate(findings: Iterable[Finding], config: RuleConfig) -> ValidationResult:
    """Partition findings by their rule's severity.

    Findings must arrive in traversal order; that order is kept within each
    bucket. A finding repeating an earlier (path, rule) pair is dropped, as are
    findings of rules configured ``off``.
    """
    result = ValidationResult()
    seen: set[tuple] = set()
    suppressed = 0

    for finding in findings:
        if finding.identity in seen:
            logger.debug(f"Dropping duplicate finding: {finding}")
            continue
        seen.add(finding.identity)

        severity = config.severity_for(finding.rule)
        if severity == Severity.ERROR:
            result.errors.append(finding)
        elif severity == Severity.WARNING:
            result.warnings.append(finding)
        else:
            suppressed += 1

    if suppressed:
        logger.debug(f"Suppressed {suppressed} findings from rules that are off")

    result.statistics = compute_statistics([*result.errors, *result.warnings])
    return result
