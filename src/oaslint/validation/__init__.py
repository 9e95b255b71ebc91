"""Validation engine for API description documents.

Walks a document, runs rule plugins on the nodes they are registered for, and
aggregates their findings into errors and warnings according to the run's
severity configuration.
"""

from .aggregator import aggregate, compute_statistics
from .framework import RuleRegistry, ValidationFramework, validate
from .references import (
    FailureReason,
    ReferenceFailure,
    ReferenceResolver,
    ResolvedReference,
    resolve_reference,
)
from .rules import RuleContext, RulePlugin, default_rules
from .traversal import DocumentTraversal, traverse

__all__ = [
    "DocumentTraversal",
    "FailureReason",
    "ReferenceFailure",
    "ReferenceResolver",
    "ResolvedReference",
    "RuleContext",
    "RulePlugin",
    "RuleRegistry",
    "ValidationFramework",
    "aggregate",
    "compute_statistics",
    "default_rules",
    "resolve_reference",
    "traverse",
    "validate",
]
