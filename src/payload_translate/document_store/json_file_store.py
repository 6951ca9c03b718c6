"""Localized documents stored as JSON files on disk."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .store_contracts import DocumentNotFoundError, DocumentStoreError


class JsonFileDocumentStore:
    """Store documents at ``<root>/<collection>/<document_id>/<locale>.json``."""

    def __init__(self, root: Path | str) -> None:
        self._root = Path(root)

    def document_path(self, collection: str, document_id: str, locale: str) -> Path:
        for segment in (collection, document_id, locale):
            if not segment or "/" in segment or "\\" in segment or segment in (".", ".."):
                raise DocumentStoreError(f"Invalid document path segment: {segment!r}")
        return self._root / collection / document_id / f"{locale}.json"

    def find_by_id(self, collection: str, document_id: str, locale: str) -> dict[str, Any]:
        path = self.document_path(collection, document_id, locale)
        if not path.exists():
            raise DocumentNotFoundError(
                f"Document not found: {collection}/{document_id} ({locale})"
            )
        try:
            parsed = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise DocumentStoreError(f"Failed to read document {path}: {exc}") from exc
        if not isinstance(parsed, dict):
            raise DocumentStoreError(f"Document root must be an object: {path}")
        return parsed

    def update(
        self, collection: str, document_id: str, data: Mapping[str, Any], locale: str
    ) -> None:
        path = self.document_path(collection, document_id, locale)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(
                json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise DocumentStoreError(f"Failed to write document {path}: {exc}") from exc
