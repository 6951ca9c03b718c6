"""Text-leaf extraction and replacement over Lexical editor states.

Both passes share ``_iter_text_leaves`` so the N-th extracted leaf and the
N-th replaced leaf are always the same node for an unchanged tree shape.
"""

from __future__ import annotations

from collections.abc import Collection, Iterator, Mapping, MutableMapping, Sequence
from typing import Any

from payload_translate.addressing import Address

from .lexical_nodes import (
    PROTECTED_NODE_TYPES,
    ROOT_ADDRESS,
    RichTextReplacement,
    child_nodes,
    is_rich_text_document,
    is_text_node,
)


def extract_text_leaves(
    editor_state: Any,
    *,
    protected_node_types: Collection[str] = PROTECTED_NODE_TYPES,
) -> list[tuple[Address, str]]:
    """Return ``(local_address, text)`` for every translatable text leaf, in document order."""
    if not is_rich_text_document(editor_state):
        return []
    return [
        (address, node["text"])
        for address, node in _iter_text_leaves(
            editor_state["root"], ROOT_ADDRESS, None, protected_node_types
        )
    ]


def replace_text_leaves(
    editor_state: Any,
    translations: Sequence[str],
    *,
    protected_node_types: Collection[str] = PROTECTED_NODE_TYPES,
) -> RichTextReplacement:
    """Overwrite eligible text leaves in place with ``translations``, positionally.

    Leaves beyond ``len(translations)`` keep their original text. Only the
    ``text`` attribute of a leaf is ever modified.
    """
    if not is_rich_text_document(editor_state):
        return RichTextReplacement(expected=0, replaced=0)

    expected = 0
    replaced = 0
    for _, node in _iter_text_leaves(
        editor_state["root"], ROOT_ADDRESS, None, protected_node_types
    ):
        if expected < len(translations):
            node["text"] = translations[expected]
            replaced += 1
        expected += 1
    return RichTextReplacement(expected=expected, replaced=replaced)


def _iter_text_leaves(
    node: Any,
    address: Address,
    parent_type: str | None,
    protected_node_types: Collection[str],
) -> Iterator[tuple[Address, MutableMapping[str, Any]]]:
    if not isinstance(node, Mapping):
        return
    if is_text_node(node):
        if node["text"].strip() and parent_type not in protected_node_types:
            yield address, node  # type: ignore[misc]
        return
    node_type = node.get("type")
    for index, child in enumerate(child_nodes(node)):
        yield from _iter_text_leaves(
            child,
            address + ("children", index),
            node_type if isinstance(node_type, str) else None,
            protected_node_types,
        )
