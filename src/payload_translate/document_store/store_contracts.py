"""Document store contract."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol


class DocumentStoreError(Exception):
    """Raised when a document cannot be read from or written to the store."""


class DocumentNotFoundError(DocumentStoreError):
    """Raised when the requested document does not exist in the requested locale."""


class DocumentStore(Protocol):
    """Host persistence boundary for localized documents."""

    def find_by_id(self, collection: str, document_id: str, locale: str) -> dict[str, Any]: ...

    def update(
        self, collection: str, document_id: str, data: Mapping[str, Any], locale: str
    ) -> None: ...
