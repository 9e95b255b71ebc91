"""Findings and aggregated validation results."""

from dataclasses import dataclass, field

from oaslint.diagnostics import Diagnostic

from .nodes import PathTokens, format_path


@dataclass
class Finding:
    """A single problem reported by a rule, before severity classification."""
    path: list[str]
    message: str
    rule: str

    @property
    def identity(self) -> tuple[PathTokens, str]:
        """Findings sharing path and rule are the same finding."""
        return tuple(self.path), self.rule

    @property
    def location(self) -> str:
        return format_path(self.path)

    def __str__(self) -> str:
        return f"{self.rule}: {self.message} at {self.location}"

    def to_dict(self) -> dict:
        return {"path": list(self.path), "message": self.message, "rule": self.rule}


@dataclass(frozen=True)
class RuleStatistic:
    """Share of all reported findings attributable to one rule."""
    rule: str
    count: int
    percentage: int


@dataclass
class ValidationResult:
    """Outcome of one validation run."""
    errors: list[Finding] = field(default_factory=list)
    warnings: list[Finding] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    statistics: list[RuleStatistic] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.errors) + len(self.warnings)

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    @property
    def exit_code(self) -> int:
        """Exit code for CI: 0 = clean/warnings only, 1 = errors."""
        return 1 if self.has_errors else 0

    @property
    def counts(self) -> dict[str, int]:
        return {stat.rule: stat.count for stat in self.statistics}

    @property
    def percentages(self) -> dict[str, int]:
        return {stat.rule: stat.percentage for stat in self.statistics}

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "errors": [finding.to_dict() for finding in self.errors],
            "warnings": [finding.to_dict() for finding in self.warnings],
            "diagnostics": [diagnostic.to_dict() for diagnostic in self.diagnostics],
            "statistics": {
                stat.rule: {"count": stat.count, "percentage": stat.percentage}
                for stat in self.statistics
            },
        }
