"""Lexical rich-text node vocabulary."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from payload_translate.addressing import Address

TEXT_NODE_TYPE = "text"
ROOT_ADDRESS: Address = ("root",)

# Autolink labels are derived from the URL they point at.
PROTECTED_NODE_TYPES = frozenset({"autolink"})


@dataclass(frozen=True)
class RichTextReplacement:
    """Outcome of replaying translations into one rich-text document."""

    expected: int
    replaced: int

    @property
    def is_complete(self) -> bool:
        """Return True when every eligible text leaf received a translation."""
        return self.replaced == self.expected


def is_rich_text_document(value: Any) -> bool:
    """Return True for editor states shaped as ``{"root": {"children": [...]}}``."""
    if not isinstance(value, Mapping):
        return False
    root = value.get("root")
    return isinstance(root, Mapping) and isinstance(root.get("children"), list)


def is_text_node(node: Mapping[str, Any]) -> bool:
    return node.get("type") == TEXT_NODE_TYPE and isinstance(node.get("text"), str)


def child_nodes(node: Mapping[str, Any]) -> list[Any]:
    children = node.get("children")
    return children if isinstance(children, list) else []
