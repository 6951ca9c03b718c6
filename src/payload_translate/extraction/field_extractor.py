"""Schema-driven extraction of translatable fields."""

from __future__ import annotations

import logging
from collections.abc import Collection, Mapping, Sequence
from typing import Any

from payload_translate.addressing import Address, format_address
from payload_translate.field_schema import (
    ArrayOf,
    FieldKind,
    FieldSchemaNode,
    Group,
    LayoutWrapper,
    Leaf,
    Opaque,
    TaggedBlockUnion,
)
from payload_translate.rich_text import PROTECTED_NODE_TYPES, extract_text_leaves

from .fragment_models import FragmentKind, TranslatableField

LOGGER = logging.getLogger(__name__)

_SCALAR_FRAGMENT_KINDS = {
    FieldKind.TEXT: FragmentKind.TEXT,
    FieldKind.TEXTAREA: FragmentKind.TEXTAREA,
}


def extract_translatable_fields(
    schema: Sequence[FieldSchemaNode],
    document: Mapping[str, Any],
    base_address: Address = (),
    *,
    protected_node_types: Collection[str] = PROTECTED_NODE_TYPES,
) -> list[TranslatableField]:
    """Return translatable fragments in schema declaration order.

    Array and block elements are visited in ascending index order. The
    resulting order is what translations are correlated against.
    """
    fields: list[TranslatableField] = []
    _extract_into(
        schema,
        document,
        base_address,
        fields=fields,
        protected_node_types=protected_node_types,
    )
    return fields


def _extract_into(
    schema: Sequence[FieldSchemaNode],
    data: Mapping[str, Any],
    base_address: Address,
    *,
    fields: list[TranslatableField],
    protected_node_types: Collection[str],
) -> None:
    for node in schema:
        if isinstance(node, LayoutWrapper):
            _extract_into(
                node.children,
                data,
                base_address,
                fields=fields,
                protected_node_types=protected_node_types,
            )
            continue
        if isinstance(node, Opaque):
            continue

        value = data.get(node.name)
        if value is None:
            continue
        address = base_address + (node.name,)

        if isinstance(node, Group):
            if isinstance(value, Mapping):
                _extract_into(
                    node.children,
                    value,
                    address,
                    fields=fields,
                    protected_node_types=protected_node_types,
                )
        elif isinstance(node, ArrayOf):
            for index, item in _mapping_items(value):
                _extract_into(
                    node.item_schema,
                    item,
                    address + (index,),
                    fields=fields,
                    protected_node_types=protected_node_types,
                )
        elif isinstance(node, TaggedBlockUnion):
            for index, block in _mapping_items(value):
                slug = block.get(node.discriminator)
                variant = node.variants_by_slug.get(slug) if isinstance(slug, str) else None
                if variant is None:
                    LOGGER.debug(
                        "Skipping block %s with unknown %s %r.",
                        format_address(address + (index,)),
                        node.discriminator,
                        slug,
                    )
                    continue
                _extract_into(
                    variant,
                    block,
                    address + (index,),
                    fields=fields,
                    protected_node_types=protected_node_types,
                )
        elif isinstance(node, Leaf) and node.translatable:
            fields.extend(_leaf_fragments(node, value, address, protected_node_types))


def _leaf_fragments(
    node: Leaf, value: Any, address: Address, protected_node_types: Collection[str]
) -> list[TranslatableField]:
    if node.kind is FieldKind.RICH_TEXT:
        return [
            TranslatableField(
                address=address,
                kind=FragmentKind.RICH_TEXT_FRAGMENT,
                text=text,
                rich_text_address=local_address,
            )
            for local_address, text in extract_text_leaves(
                value, protected_node_types=protected_node_types
            )
        ]
    if isinstance(value, str) and value.strip():
        return [
            TranslatableField(address=address, kind=_SCALAR_FRAGMENT_KINDS[node.kind], text=value)
        ]
    return []


def _mapping_items(value: Any) -> list[tuple[int, Mapping[str, Any]]]:
    if not isinstance(value, list):
        return []
    return [(index, item) for index, item in enumerate(value) if isinstance(item, Mapping)]
