"""Run-level diagnostics for oaslint.

Diagnostics describe problems the engine recovered from during a run (broken
references, failing rules). They are kept apart from findings so a crashed rule
is never mistaken for a clean document.
"""

from .collector import (
    Diagnostic,
    DiagnosticCollector,
    DiagnosticKind,
)

__all__ = [
    "Diagnostic",
    "DiagnosticCollector",
    "DiagnosticKind",
]
