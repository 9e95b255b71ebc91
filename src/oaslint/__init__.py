"""oaslint - Rule-driven validator for OpenAPI/Swagger documents.

oaslint walks an API description document, runs pluggable rules on each node and
reports precisely located errors and warnings with per-rule severities.
"""

__version__ = "0.1.0"
__author__ = "oaslint contributors"
__description__ = "Rule-driven validator for OpenAPI/Swagger documents"

from oaslint.config import RuleConfig, Severity, resolve_config
from oaslint.validation import ValidationFramework, validate

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "RuleConfig",
    "Severity",
    "ValidationFramework",
    "resolve_config",
    "validate",
]
