"""Data types shared by the oaslint engine, rules and reporters."""

from .findings import Finding, RuleStatistic, ValidationResult
from .nodes import Node, NodeKind, PathTokens, format_path

__all__ = [
    "Finding",
    "Node",
    "NodeKind",
    "PathTokens",
    "RuleStatistic",
    "ValidationResult",
    "format_path",
]
