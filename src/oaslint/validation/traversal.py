"""Depth-first, pre-order traversal of an API description document.

Every node is tagged with its structural role as it is reached. Roles depend on
where a node sits: a ``properties`` map holds named schemas, children of
``paths`` are path items, and so on. References are leaves; their targets are
visited at their own location, so shared targets are never walked twice.
"""

import logging
from collections.abc import Iterator, Mapping, Sequence
from enum import Enum
from typing import Any

from oaslint.models import Node, NodeKind, PathTokens

logger = logging.getLogger(__name__)

DEFAULT_EXCLUSION_MARKER = "x-sdk-exclude"

HTTP_METHODS = frozenset({"get", "put", "post", "delete", "options", "head", "patch", "trace"})


class Role(str, Enum):
    """What the position of a node says about it."""
    FIELD = "field"
    SCHEMA = "schema"
    PATH_ITEM = "path-item"
    OPERATION = "operation"
    PARAMETER = "parameter"
    RESPONSE = "response"
    NAMED = "named"
    OPAQUE = "opaque"


# Fields whose value maps user-chosen names to nodes of one role.
NAMED_MAPS: dict[str, Role] = {
    "definitions": Role.SCHEMA,
    "properties": Role.SCHEMA,
    "patternProperties": Role.SCHEMA,
    "schemas": Role.SCHEMA,
    "paths": Role.PATH_ITEM,
    "responses": Role.RESPONSE,
    "parameters": Role.PARAMETER,
    "headers": Role.NAMED,
    "content": Role.NAMED,
    "securityDefinitions": Role.NAMED,
    "securitySchemes": Role.NAMED,
    "requestBodies": Role.NAMED,
    "links": Role.NAMED,
    "callbacks": Role.NAMED,
}

# Fields whose value is a list of nodes of one role.
ROLE_LISTS: dict[str, Role] = {
    "parameters": Role.PARAMETER,
    "allOf": Role.SCHEMA,
    "anyOf": Role.SCHEMA,
    "oneOf": Role.SCHEMA,
}

# Literal data; never interpreted as schemas.
OPAQUE_FIELDS = frozenset({"example", "examples", "default", "enum", "const"})

_ROLE_KINDS = {
    Role.PATH_ITEM: NodeKind.PATH_ITEM,
    Role.OPERATION: NodeKind.OPERATION,
    Role.PARAMETER: NodeKind.PARAMETER,
    Role.RESPONSE: NodeKind.RESPONSE,
}


def is_reference(value: Any) -> bool:
    return isinstance(value, Mapping) and isinstance(value.get("$ref"), str)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def classify(value: Any, role: Role) -> NodeKind:
    """Tag a value reached in the given role."""
    if _is_sequence(value):
        return NodeKind.SEQUENCE
    if not isinstance(value, Mapping):
        return NodeKind.PRIMITIVE
    if role == Role.OPAQUE:
        return NodeKind.MAPPING
    if is_reference(value):
        return NodeKind.REFERENCE
    if role in _ROLE_KINDS:
        return _ROLE_KINDS[role]
    if role in (Role.FIELD, Role.SCHEMA):
        if isinstance(value.get("properties"), Mapping) or value.get("type") == "object":
            return NodeKind.OBJECT_SCHEMA
        if value.get("type") == "array" or "items" in value:
            return NodeKind.ARRAY_SCHEMA
    return NodeKind.MAPPING


def _child_role(key: str, child: Any, kind: NodeKind, role: Role) -> tuple[Role, Role | None]:
    """Role of a mapping field, and the role of its members if it is a collection."""
    if role == Role.OPAQUE or key in OPAQUE_FIELDS or key.startswith("x-"):
        return Role.OPAQUE, None
    if kind == NodeKind.PATH_ITEM and key in HTTP_METHODS:
        return Role.OPERATION, None
    if isinstance(child, Mapping) and key in NAMED_MAPS:
        return Role.NAMED, NAMED_MAPS[key]
    if _is_sequence(child) and key in ROLE_LISTS:
        return Role.FIELD, ROLE_LISTS[key]
    return Role.FIELD, None


class DocumentTraversal:
    """Lazily walks a document, yielding tagged nodes in pre-order.

    Nodes carrying the exclusion marker set to ``true`` are neither yielded nor
    descended into; their paths are recorded in ``excluded``.
    """

    def __init__(self, document: Any, exclusion_marker: str = DEFAULT_EXCLUSION_MARKER):
        self.document = document
        self.exclusion_marker = exclusion_marker
        self.excluded: list[PathTokens] = []

    def is_excluded(self, path) -> bool:
        """True when ``path`` is an excluded node or lies below one."""
        tokens = tuple(path)
        return any(tokens[:len(prefix)] == prefix for prefix in self.excluded)

    def _marked(self, value: Any) -> bool:
        return isinstance(value, Mapping) and value.get(self.exclusion_marker) is True

    def __iter__(self) -> Iterator[Node]:
        # Frames: (value, path, role, member role)
        stack: list[tuple[Any, PathTokens, Role, Role | None]] = [
            (self.document, (), Role.FIELD, None)
        ]
        index = 0

        while stack:
            value, path, role, member_role = stack.pop()

            if self._marked(value):
                logger.debug(f"Skipping excluded subtree at {'.'.join(path) or '<root>'}")
                self.excluded.append(path)
                continue

            if member_role is not None and isinstance(value, Mapping):
                kind = NodeKind.MAPPING
            else:
                kind = classify(value, role)
            yield Node(kind=kind, value=value, path=path, index=index)
            index += 1

            if kind == NodeKind.REFERENCE:
                continue

            children: list[tuple[Any, PathTokens, Role, Role | None]] = []
            if isinstance(value, Mapping):
                for key, child in value.items():
                    key = str(key)
                    if member_role is not None:
                        named_role = Role.OPAQUE if key.startswith("x-") and member_role != Role.SCHEMA else member_role
                        children.append((child, path + (key,), named_role, None))
                    else:
                        children.append((child, path + (key,), *_child_role(key, child, kind, role)))
            elif _is_sequence(value):
                item_role = member_role if member_role is not None else role
                for position, child in enumerate(value):
                    children.append((child, path + (str(position),), item_role, None))

            stack.extend(reversed(children))


def traverse(document: Any, exclusion_marker: str = DEFAULT_EXCLUSION_MARKER) -> Iterator[Node]:
    """Yield every reachable, non-excluded node of ``document`` in pre-order."""
    return iter(DocumentTraversal(document, exclusion_marker))
