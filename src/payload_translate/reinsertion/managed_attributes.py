"""Removal of framework-managed attributes before persistence."""

from __future__ import annotations

import copy
from collections.abc import Collection, Mapping
from typing import Any

from payload_translate.rich_text import is_rich_text_document

MANAGED_ATTRIBUTES = frozenset({"id", "createdAt", "updatedAt"})


def strip_managed_attributes(
    value: Any, attributes: Collection[str] = MANAGED_ATTRIBUTES
) -> Any:
    """Return a copy of ``value`` without identity and audit keys at any depth.

    Rich-text editor states are copied verbatim; their node ids are part of
    the document content.
    """
    if isinstance(value, Mapping):
        if is_rich_text_document(value):
            return copy.deepcopy(value)
        return {
            key: strip_managed_attributes(item, attributes)
            for key, item in value.items()
            if key not in attributes
        }
    if isinstance(value, list):
        return [strip_managed_attributes(item, attributes) for item in value]
    return value
