"""In-document reference resolution.

Pointers such as ``#/definitions/Pet`` are resolved against the document root
without modifying it. Resolution returns a value describing the outcome; chained
references are followed with a per-branch set of pointers already in progress, so
cycles end in a ``ReferenceFailure`` instead of unbounded recursion.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any
from urllib.parse import unquote

from oaslint.errors import CyclicReferenceError, UnresolvedReferenceError

logger = logging.getLogger(__name__)


class FailureReason(str, Enum):
    """Why a pointer could not be resolved."""
    UNRESOLVED = "unresolved"
    CYCLIC = "cyclic"
    EXTERNAL = "external"


@dataclass(frozen=True, eq=False)
class ResolvedReference:
    """Pointer resolved to a node of the document.

    Attributes:
        pointer: Pointer as written at the reference site
        node: Target node (after following chained references)
        chain: Every pointer followed to reach the target, in order
    """
    pointer: str
    node: Any
    chain: tuple[str, ...]

    ok = True

    def unwrap(self) -> Any:
        return self.node


@dataclass(frozen=True)
class ReferenceFailure:
    """Pointer that could not be resolved."""
    pointer: str
    reason: FailureReason
    message: str

    ok = False

    def unwrap(self) -> Any:
        """Raise the exception matching this failure."""
        if self.reason == FailureReason.CYCLIC:
            raise CyclicReferenceError(self.pointer, self.message)
        raise UnresolvedReferenceError(self.pointer, self.message)


ResolutionResult = ResolvedReference | ReferenceFailure


def is_local_pointer(pointer: str) -> bool:
    return pointer.startswith("#")


def split_pointer(pointer: str) -> tuple[str, ...] | None:
    """Split a local pointer into unescaped tokens.

    Returns None when the fragment is not a JSON pointer.
    """
    fragment = unquote(pointer[1:])
    if fragment == "":
        return ()
    if not fragment.startswith("/"):
        return None
    return tuple(
        token.replace("~1", "/").replace("~0", "~")
        for token in fragment[1:].split("/")
    )


def _walk(document: Any, tokens: tuple[str, ...]) -> tuple[bool, Any]:
    node = document
    for token in tokens:
        if isinstance(node, Mapping):
            if token in node:
                node = node[token]
                continue
            # YAML decodes unquoted keys such as response codes to non-strings.
            matches = [value for key, value in node.items() if str(key) == token]
            if not matches:
                return False, None
            node = matches[0]
        elif isinstance(node, Sequence) and not isinstance(node, str):
            if not token.isdigit() or int(token) >= len(node):
                return False, None
            node = node[int(token)]
        else:
            return False, None
    return True, node


def resolve_reference(
    pointer: str,
    document: Any,
    visited: frozenset[str] = frozenset(),
) -> ResolutionResult:
    """Resolve ``pointer`` against ``document``.

    Args:
        pointer: In-document locator, e.g. ``#/definitions/Foo``
        document: Document root
        visited: Pointers already being resolved on the current branch

    Returns:
        ResolvedReference with the target node, or ReferenceFailure
    """
    if pointer in visited:
        return ReferenceFailure(
            pointer,
            FailureReason.CYCLIC,
            f"Circular reference detected: {pointer}",
        )

    if not is_local_pointer(pointer):
        return ReferenceFailure(
            pointer,
            FailureReason.EXTERNAL,
            f"External reference not followed: {pointer}",
        )

    tokens = split_pointer(pointer)
    if tokens is None:
        return ReferenceFailure(
            pointer,
            FailureReason.UNRESOLVED,
            f"Malformed reference: {pointer}",
        )

    found, node = _walk(document, tokens)
    if not found:
        return ReferenceFailure(
            pointer,
            FailureReason.UNRESOLVED,
            f"Reference could not be resolved: {pointer}",
        )

    if isinstance(node, Mapping) and isinstance(node.get("$ref"), str):
        inner = resolve_reference(node["$ref"], document, visited | {pointer})
        if not inner.ok:
            return inner
        return ResolvedReference(pointer, inner.node, (pointer, *inner.chain))

    return ResolvedReference(pointer, node, (pointer,))


class ReferenceResolver:
    """Resolves pointers against one document."""

    def __init__(self, document: Any):
        self.document = document

    def resolve(self, pointer: str, visited: frozenset[str] = frozenset()) -> ResolutionResult:
        result = resolve_reference(pointer, self.document, visited)
        if not result.ok:
            logger.debug(f"Failed to resolve {pointer}: {result.message}")
        return result

    def resolve_node(self, value: Any, visited: frozenset[str] = frozenset()) -> Any | None:
        """Return ``value`` with a reference replaced by its target.

        Non-reference values are returned as-is; None when a reference fails.
        """
        if isinstance(value, Mapping) and isinstance(value.get("$ref"), str):
            result = self.resolve(value["$ref"], visited)
            return result.node if result.ok else None
        return value
