"""Field schema entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum


class FieldKind(str, Enum):
    """Leaf field kinds that can carry translatable text."""

    TEXT = "text"
    TEXTAREA = "textarea"
    RICH_TEXT = "richText"


@dataclass(frozen=True)
class Leaf:
    """Named scalar or rich-text field."""

    name: str
    kind: FieldKind
    translatable: bool = False


@dataclass(frozen=True)
class Group:
    """Named object field whose children live under ``name``."""

    name: str
    children: tuple[FieldSchemaNode, ...]
    translatable: bool = False


@dataclass(frozen=True)
class ArrayOf:
    """Named list field; every item follows ``item_schema``."""

    name: str
    item_schema: tuple[FieldSchemaNode, ...]
    translatable: bool = False


@dataclass(frozen=True)
class TaggedBlockUnion:
    """Named list of blocks; each element selects a variant via ``discriminator``."""

    name: str
    variants_by_slug: Mapping[str, tuple[FieldSchemaNode, ...]]
    translatable: bool = False
    discriminator: str = field(default="blockType")


@dataclass(frozen=True)
class LayoutWrapper:
    """Presentational container (row, collapsible, unnamed tab) with no data key."""

    children: tuple[FieldSchemaNode, ...]


@dataclass(frozen=True)
class Opaque:
    """Any field the translator ignores."""

    name: str | None = None


FieldSchemaNode = Leaf | Group | ArrayOf | TaggedBlockUnion | LayoutWrapper | Opaque
