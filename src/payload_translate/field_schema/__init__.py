"""Field schema exports."""

from .schema_loader import (
    SchemaError,
    load_field_schema,
    load_field_schema_file,
    load_field_schema_text,
)
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

__all__ = [
    "ArrayOf",
    "FieldKind",
    "FieldSchemaNode",
    "Group",
    "LayoutWrapper",
    "Leaf",
    "Opaque",
    "SchemaError",
    "TaggedBlockUnion",
    "load_field_schema",
    "load_field_schema_file",
    "load_field_schema_text",
]
