"""Built-in rule plugins."""

from .base import RuleContext, RulePlugin
from .operations import NoOperationIdRule, NoSummaryRule
from .parameters import NoParameterDescriptionRule
from .schemas import (
    DescriptionMentionsJsonRule,
    InvalidTypeFormatPairRule,
    NoPropertyDescriptionRule,
)


def default_rules() -> list[RulePlugin]:
    """Fresh instances of every built-in rule, in reporting order."""
    return [
        InvalidTypeFormatPairRule(),
        NoPropertyDescriptionRule(),
        DescriptionMentionsJsonRule(),
        NoParameterDescriptionRule(),
        NoOperationIdRule(),
        NoSummaryRule(),
    ]


__all__ = [
    "RuleContext",
    "RulePlugin",
    "DescriptionMentionsJsonRule",
    "InvalidTypeFormatPairRule",
    "NoOperationIdRule",
    "NoParameterDescriptionRule",
    "NoPropertyDescriptionRule",
    "NoSummaryRule",
    "default_rules",
]
