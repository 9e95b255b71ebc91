"""Tagged document nodes and their locations."""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

PathTokens = tuple[str, ...]


class NodeKind(str, Enum):
    """Structural role of a node; decides which rules run on it."""
    OBJECT_SCHEMA = "object-schema"
    ARRAY_SCHEMA = "array-schema"
    REFERENCE = "reference"
    PARAMETER = "parameter"
    RESPONSE = "response"
    PATH_ITEM = "path-item"
    OPERATION = "operation"
    PRIMITIVE = "primitive"
    MAPPING = "mapping"
    SEQUENCE = "sequence"


@dataclass(frozen=True, eq=False)
class Node:
    """A subtree of the document reached during traversal.

    Attributes:
        kind: Structural role of the node
        value: The subtree itself, shared with the document (never copied)
        path: Tokens locating the node from the document root
        index: Pre-order position of the node within its traversal
    """
    kind: NodeKind
    value: Any
    path: PathTokens
    index: int = 0

    @property
    def ref(self) -> str | None:
        """Pointer string when the node is a reference."""
        if isinstance(self.value, Mapping):
            ref = self.value.get("$ref")
            if isinstance(ref, str):
                return ref
        return None

    def child_path(self, *tokens: str | int) -> PathTokens:
        return self.path + tuple(str(token) for token in tokens)


def format_path(path) -> str:
    """Render path tokens the way reporters print them."""
    return ".".join(str(token) for token in path)
