"""Configuration management for oaslint using Pydantic models.

Raw rule configuration is a mapping of category -> {rule: severity}. It is
resolved once per run into a flat, immutable ``RuleConfig``; severity strings do
not travel past this module.
"""

import json
import logging
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from oaslint.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".validaterc"


class Severity(str, Enum):
    """Severity a rule's findings are reported with."""
    ERROR = "error"
    WARNING = "warning"
    OFF = "off"


# Severities used when no configuration is supplied at all.
RECOMMENDED_SEVERITIES: dict[str, dict[str, Severity]] = {
    "schemas": {
        "invalid_type_format_pair": Severity.ERROR,
        "no_property_description": Severity.WARNING,
        "description_mentions_json": Severity.WARNING,
    },
    "parameters": {
        "no_parameter_description": Severity.ERROR,
    },
    "operations": {
        "no_operation_id": Severity.WARNING,
        "no_summary": Severity.WARNING,
    },
}

# A supplied configuration is complete: recognized rules it leaves out are off.
OMITTED_RULE_SEVERITIES: dict[str, dict[str, Severity]] = {
    category: {rule: Severity.OFF for rule in rules}
    for category, rules in RECOMMENDED_SEVERITIES.items()
}

_severity_adapter = TypeAdapter(Severity)


class RuleConfig(BaseModel):
    """Resolved per-rule severity table for one validation run."""
    severities: dict[str, Severity] = Field(default_factory=dict)
    unrecognized: dict[str, dict[str, Severity]] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    def severity_for(self, rule: str) -> Severity:
        """Severity of ``rule``; rules the table does not know are off."""
        return self.severities.get(rule, Severity.OFF)

    def is_enabled(self, rule: str) -> bool:
        return self.severity_for(rule) != Severity.OFF


class EngineOptions(BaseModel):
    """Tunables for the traversal engine."""
    exclusion_marker: str = Field(alias="exclusionMarker", default="x-sdk-exclude")
    max_workers: int = Field(alias="maxWorkers", default=1)

    @field_validator("max_workers")
    @classmethod
    def validate_max_workers(cls, v):
        if v < 1:
            raise ValueError("max_workers must be >= 1")
        return v

    model_config = ConfigDict(populate_by_name=True, frozen=True)


def _parse_severity(category: str, rule: str, value: Any) -> Severity:
    try:
        return _severity_adapter.validate_python(value)
    except ValidationError:
        allowed = ", ".join(s.value for s in Severity)
        raise ConfigError(
            f"Invalid severity {value!r} for rule '{category}.{rule}'. Must be one of: {allowed}"
        ) from None


def resolve_config(
    raw: Mapping[str, Any] | None = None,
    defaults: Mapping[str, Mapping[str, Severity]] | None = None,
) -> RuleConfig:
    """Resolve a raw category mapping into a flat ``RuleConfig``.

    Args:
        raw: Mapping of category -> {rule identifier: "error" | "warning" | "off"}.
            ``None`` selects the recommended severity for every rule.
        defaults: Severity table for rules ``raw`` does not mention. Its keys are
            the recognized categories and rules. When omitted,
            ``RECOMMENDED_SEVERITIES`` applies without ``raw`` and
            ``OMITTED_RULE_SEVERITIES`` applies with it.

    Returns:
        RuleConfig: Severity for every recognized rule

    Raises:
        ConfigError: If a category is not a mapping or a severity is not recognized
    """
    if defaults is None:
        defaults = RECOMMENDED_SEVERITIES if raw is None else OMITTED_RULE_SEVERITIES

    severities = {
        rule: severity
        for rules in defaults.values()
        for rule, severity in rules.items()
    }
    unrecognized: dict[str, dict[str, Severity]] = {}

    if raw is None:
        return RuleConfig(severities=severities)

    if not isinstance(raw, Mapping):
        raise ConfigError(f"Configuration must be a mapping of categories, got {type(raw).__name__}")

    for category, rules in raw.items():
        if not isinstance(rules, Mapping):
            raise ConfigError(f"Category '{category}' must map rule identifiers to severities")

        known_rules = defaults.get(category, {})
        for rule, value in rules.items():
            severity = _parse_severity(category, rule, value)
            if rule in known_rules:
                severities[rule] = severity
            else:
                logger.debug(f"Ignoring unrecognized rule '{category}.{rule}'")
                unrecognized.setdefault(category, {})[rule] = severity

    return RuleConfig(severities=severities, unrecognized=unrecognized)


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .validaterc by searching up the directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_config(config_path: str | Path | None = None) -> RuleConfig:
    """Load rule configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to a configuration file. If None, searches
                    current directory and parents for .validaterc

    Returns:
        RuleConfig: Resolved configuration

    Raises:
        ConfigError: If the file is given but missing, or is not valid
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")

    if config_path is None:
        logger.debug("No config file found, using recommended severities")
        return resolve_config()

    try:
        with open(config_path, encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config file {config_path}: {e}") from e

    logger.info(f"Loaded rule configuration from {config_path}")
    return resolve_config(raw)
