"""Rule plugin contract.

A rule is a pure function of one node: it reads the node (and, through the
context, the document and its references) and returns findings. Rules never
decide severity; the engine classifies their findings from the run's
``RuleConfig``.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from oaslint.models import Finding, Node, NodeKind, PathTokens
from oaslint.validation.references import ReferenceResolver


@dataclass(frozen=True)
class RuleContext:
    """Read-only view of the run handed to each rule invocation."""
    document: Any
    resolver: ReferenceResolver


class RulePlugin(ABC):
    """Base class for rule plugins."""

    CATEGORY: str = ""
    KINDS: frozenset[NodeKind] = frozenset()
    MESSAGE: str = ""

    @property
    @abstractmethod
    def name(self) -> str:
        """Rule identifier used for severity lookup and statistics."""
        pass

    @property
    def module(self) -> str:
        """Where the rule is implemented, for reporters."""
        return type(self).__module__

    @abstractmethod
    def evaluate(self, node: Node, context: RuleContext) -> list[Finding]:
        """Inspect ``node`` and return findings; must not modify anything."""
        pass

    def finding(self, path: PathTokens, message: str | None = None) -> Finding:
        return Finding(path=list(path), message=message or self.MESSAGE, rule=self.name)


def iter_properties(schema: Mapping) -> Iterator[tuple[str, Mapping]]:
    """Named property schemas of an object schema."""
    properties = schema.get("properties")
    if not isinstance(properties, Mapping):
        return
    for name, prop in properties.items():
        if isinstance(prop, Mapping):
            yield str(name), prop


def has_content(value: Any) -> bool:
    """True when ``value`` holds non-whitespace text."""
    return value is not None and len(str(value).strip()) > 0
