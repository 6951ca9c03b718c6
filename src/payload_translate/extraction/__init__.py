"""Extraction exports."""

from .field_extractor import extract_translatable_fields
from .fragment_models import FragmentKind, TranslatableField

__all__ = [
    "FragmentKind",
    "TranslatableField",
    "extract_translatable_fields",
]
