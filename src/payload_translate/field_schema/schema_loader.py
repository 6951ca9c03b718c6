"""Field schema loading service for Payload-style field configurations."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .schema_models import (
    ArrayOf,
    FieldKind,
    FieldSchemaNode,
    Group,
    LayoutWrapper,
    Leaf,
    Opaque,
    TaggedBlockUnion,
)

_LEAF_KINDS = {kind.value: kind for kind in FieldKind}


class SchemaError(Exception):
    """Raised for field schema parsing failures."""


def load_field_schema_text(text: str, *, source: str = "inline") -> tuple[FieldSchemaNode, ...]:
    """Parse YAML or JSON field configuration text."""
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SchemaError(f"Invalid field schema ({source}): {exc}") from exc
    return load_field_schema(_fields_of(parsed, source))


def load_field_schema_file(path: Path | str) -> tuple[FieldSchemaNode, ...]:
    """Read a ``.json``, ``.yaml`` or ``.yml`` field configuration file."""
    schema_path = Path(path)
    if not schema_path.exists():
        raise SchemaError(f"Field schema file not found: {schema_path}")
    text = schema_path.read_text(encoding="utf-8")
    if schema_path.suffix == ".json":
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SchemaError(f"Invalid field schema ({schema_path}): {exc}") from exc
        return load_field_schema(_fields_of(parsed, str(schema_path)))
    return load_field_schema_text(text, source=str(schema_path))


def load_field_schema(raw_fields: Any) -> tuple[FieldSchemaNode, ...]:
    """Convert a list of field configuration mappings into schema nodes."""
    return _parse_fields(raw_fields, location="fields")


def _fields_of(parsed: Any, source: str) -> Any:
    # Accept either a bare field list or a collection config with ``fields``.
    if isinstance(parsed, Mapping):
        if "fields" not in parsed:
            raise SchemaError(f"Field schema ({source}) must define 'fields'.")
        return parsed["fields"]
    return parsed


def _parse_fields(raw_fields: Any, *, location: str) -> tuple[FieldSchemaNode, ...]:
    if not isinstance(raw_fields, Sequence) or isinstance(raw_fields, (str, bytes)):
        raise SchemaError(f"{location} must be a list of field definitions.")
    return tuple(
        _parse_field(raw_field, location=f"{location}[{index}]")
        for index, raw_field in enumerate(raw_fields)
    )


def _parse_field(raw_field: Any, *, location: str) -> FieldSchemaNode:
    if not isinstance(raw_field, Mapping):
        raise SchemaError(f"{location} must be a mapping.")

    field_type = raw_field.get("type")
    name = raw_field.get("name")
    if name is not None and (not isinstance(name, str) or not name.strip()):
        raise SchemaError(f"{location}.name must be a non-empty string.")
    translatable = bool(raw_field.get("localized", False))

    if field_type == "tabs":
        return _parse_tabs(raw_field, location=location)

    if name is None:
        if "fields" in raw_field:
            return LayoutWrapper(
                children=_parse_fields(raw_field["fields"], location=f"{location}.fields")
            )
        return Opaque()

    if field_type in _LEAF_KINDS:
        return Leaf(name=name, kind=_LEAF_KINDS[field_type], translatable=translatable)
    if field_type == "group":
        return Group(
            name=name,
            children=_parse_fields(raw_field.get("fields"), location=f"{location}.fields"),
            translatable=translatable,
        )
    if field_type == "array":
        return ArrayOf(
            name=name,
            item_schema=_parse_fields(raw_field.get("fields"), location=f"{location}.fields"),
            translatable=translatable,
        )
    if field_type == "blocks":
        return TaggedBlockUnion(
            name=name,
            variants_by_slug=_parse_blocks(raw_field.get("blocks"), location=f"{location}.blocks"),
            translatable=translatable,
        )
    return Opaque(name=name)


def _parse_tabs(raw_field: Mapping[str, Any], *, location: str) -> LayoutWrapper:
    tabs = raw_field.get("tabs")
    if not isinstance(tabs, Sequence) or isinstance(tabs, (str, bytes)):
        raise SchemaError(f"{location}.tabs must be a list.")

    children: list[FieldSchemaNode] = []
    for index, tab in enumerate(tabs):
        tab_location = f"{location}.tabs[{index}]"
        if not isinstance(tab, Mapping):
            raise SchemaError(f"{tab_location} must be a mapping.")
        tab_fields = _parse_fields(tab.get("fields", ()), location=f"{tab_location}.fields")
        tab_name = tab.get("name")
        if isinstance(tab_name, str) and tab_name.strip():
            children.append(
                Group(
                    name=tab_name,
                    children=tab_fields,
                    translatable=bool(tab.get("localized", False)),
                )
            )
        else:
            children.append(LayoutWrapper(children=tab_fields))
    return LayoutWrapper(children=tuple(children))


def _parse_blocks(raw_blocks: Any, *, location: str) -> dict[str, tuple[FieldSchemaNode, ...]]:
    if not isinstance(raw_blocks, Sequence) or isinstance(raw_blocks, (str, bytes)):
        raise SchemaError(f"{location} must be a list of block definitions.")

    variants: dict[str, tuple[FieldSchemaNode, ...]] = {}
    for index, block in enumerate(raw_blocks):
        block_location = f"{location}[{index}]"
        if not isinstance(block, Mapping):
            raise SchemaError(f"{block_location} must be a mapping.")
        slug = block.get("slug")
        if not isinstance(slug, str) or not slug.strip():
            raise SchemaError(f"{block_location}.slug must be a non-empty string.")
        if slug in variants:
            raise SchemaError(f"Duplicate block slug detected: {slug}")
        variants[slug] = _parse_fields(block.get("fields", ()), location=f"{block_location}.fields")
    return variants
