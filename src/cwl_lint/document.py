"""YAML loading into an order-preserving document tree."""

import logging
from collections.abc import Hashable
from enum import Enum
from typing import Any

import yaml
from yaml.constructor import ConstructorError

logger = logging.getLogger(__name__)


class NodeKind(str, Enum):
    """Shape of a value in the document tree."""
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"
    NULL = "null"


def node_kind(value: Any) -> NodeKind:
    """Classify a plain Python value produced by the loader."""
    if value is None:
        return NodeKind.NULL
    if isinstance(value, dict):
        return NodeKind.MAPPING
    if isinstance(value, list):
        return NodeKind.SEQUENCE
    return NodeKind.SCALAR


def is_truthy(value: Any) -> bool:
    """Loose truthiness: containers count as present even when empty."""
    if isinstance(value, (dict, list)):
        return True
    return bool(value)


class UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that refuses duplicate mapping keys.

    A repeated key raises a ``ConstructorError`` marked at the second
    occurrence. Merge keys (``<<``) are exempt.
    """

    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            seen: set = set()
            seen_names: set[str] = set()
            for key_node, _ in node.value:
                if key_node.tag == "tag:yaml.org,2002:merge":
                    continue
                key = self.construct_object(key_node, deep=deep)
                if not isinstance(key, Hashable):
                    # Let the base constructor raise its own error
                    break
                # Keys are stringified later, so 1 and "1" collide too
                if key in seen or str(key) in seen_names:
                    raise ConstructorError(
                        "while constructing a mapping", node.start_mark,
                        f"found duplicate key '{key}'", key_node.start_mark
                    )
                seen.add(key)
                seen_names.add(str(key))
        return super().construct_mapping(node, deep=deep)


class Document:
    """Parsed CWL document with shape-checked accessors.

    Rules never index the raw tree directly; an absent or wrongly shaped
    field reads as missing instead of raising.
    """

    def __init__(self, root: Any):
        self._root = root

    @property
    def root(self) -> Any:
        return self._root

    @property
    def kind(self) -> NodeKind:
        return node_kind(self._root)

    @property
    def is_mapping(self) -> bool:
        return self.kind == NodeKind.MAPPING

    def keys(self) -> list[str]:
        """Top-level keys in source order; empty for non-mapping roots."""
        if not self.is_mapping:
            return []
        return list(self._root.keys())

    def get(self, key: str, default: Any = None) -> Any:
        if not self.is_mapping:
            return default
        return self._root.get(key, default)

    def field_kind(self, key: str) -> NodeKind | None:
        """Kind of a top-level field, or None when the field is absent."""
        if key not in self:
            return None
        return node_kind(self._root[key])

    def __contains__(self, key: object) -> bool:
        return self.is_mapping and key in self._root

    def __repr__(self) -> str:
        return f"Document(kind={self.kind.value}, keys={self.keys()!r})"


class DocumentLoader:
    """Loads raw YAML text into a Document.

    Parse failures propagate as ``yaml.YAMLError``; translating them into
    diagnostics is the lint engine's job.
    """

    def load_string(self, content: str) -> Document:
        """Parse YAML text into a Document."""
        data = yaml.load(content, Loader=UniqueKeyLoader)
        if data is None:
            logger.debug("Empty YAML document, treating as empty mapping")
            return Document({})
        return Document(self._to_plain_value(data))

    def _to_plain_value(self, data: Any) -> Any:
        if isinstance(data, dict):
            return {str(k): self._to_plain_value(v) for k, v in data.items()}
        if isinstance(data, list):
            return [self._to_plain_value(item) for item in data]
        return data
