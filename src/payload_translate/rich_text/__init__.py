"""Rich-text walker exports."""

from .lexical_nodes import (
    PROTECTED_NODE_TYPES,
    ROOT_ADDRESS,
    RichTextReplacement,
    is_rich_text_document,
)
from .lexical_walker import extract_text_leaves, replace_text_leaves

__all__ = [
    "PROTECTED_NODE_TYPES",
    "ROOT_ADDRESS",
    "RichTextReplacement",
    "extract_text_leaves",
    "is_rich_text_document",
    "replace_text_leaves",
]
