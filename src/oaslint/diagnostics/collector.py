"""Diagnostic collection for a single validation run."""

import logging
import traceback
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


class DiagnosticKind(str, Enum):
    """Kinds of recovered in-engine faults."""
    UNRESOLVED_REFERENCE = "unresolved_reference"
    CYCLIC_REFERENCE = "cyclic_reference"
    RULE_FAILURE = "rule_failure"


@dataclass
class Diagnostic:
    """A recovered fault, located at the node that triggered it."""
    kind: DiagnosticKind
    path: list[str]
    message: str
    rule: str | None = None
    error_type: str | None = None
    traceback_lines: list[str] = field(default_factory=list, repr=False)

    def __str__(self) -> str:
        location = ".".join(self.path)
        source = f" [{self.rule}]" if self.rule else ""
        return f"{self.kind.value}{source}: {self.message} at {location}"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "kind": self.kind.value,
            "path": list(self.path),
            "message": self.message,
            "rule": self.rule,
            "error_type": self.error_type,
        }


class DiagnosticCollector:
    """Collects diagnostics in the order the engine encounters them."""

    def __init__(self):
        self.diagnostics: list[Diagnostic] = []

    def collect_reference_failure(self, kind: DiagnosticKind, path, message: str) -> Diagnostic:
        """Record a reference that could not be followed."""
        diagnostic = Diagnostic(kind=kind, path=list(path), message=message)
        self.diagnostics.append(diagnostic)
        logger.debug(f"Reference diagnostic at {'.'.join(path)}: {message}")
        return diagnostic

    def collect_rule_failure(self, rule: str, path, error: Exception) -> Diagnostic:
        """Record a rule that raised while evaluating one node.

        Args:
            rule: Identifier of the failing rule
            path: Path of the node being evaluated
            error: Exception raised by the rule

        Returns:
            The recorded diagnostic
        """
        diagnostic = Diagnostic(
            kind=DiagnosticKind.RULE_FAILURE,
            path=list(path),
            message=f"Rule execution failed: {error}",
            rule=rule,
            error_type=type(error).__name__,
            traceback_lines=traceback.format_exception(type(error), error, error.__traceback__),
        )
        self.diagnostics.append(diagnostic)
        logger.warning(f"Rule {rule} failed at {'.'.join(path)}: {error}")
        logger.debug("".join(diagnostic.traceback_lines))
        return diagnostic

    def has_diagnostics(self) -> bool:
        return len(self.diagnostics) > 0

    def get_counts(self) -> dict[str, int]:
        """Get diagnostic counts by kind."""
        counts = {kind.value: 0 for kind in DiagnosticKind}

        for diagnostic in self.diagnostics:
            counts[diagnostic.kind.value] += 1

        return counts
