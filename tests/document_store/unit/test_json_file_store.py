"""JSON file document store tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from payload_translate.document_store import (
    DocumentNotFoundError,
    DocumentStoreError,
    JsonFileDocumentStore,
)


def test_update_then_find_round_trips_per_locale(tmp_path: Path) -> None:
    store = JsonFileDocumentStore(tmp_path)

    store.update("posts", "1", {"title": "Grüße"}, "de")

    path = tmp_path / "posts" / "1" / "de.json"
    assert json.loads(path.read_text(encoding="utf-8")) == {"title": "Grüße"}
    assert "Grüße" in path.read_text(encoding="utf-8")
    assert store.find_by_id("posts", "1", "de") == {"title": "Grüße"}


def test_missing_document_raises_not_found(tmp_path: Path) -> None:
    store = JsonFileDocumentStore(tmp_path)

    with pytest.raises(DocumentNotFoundError, match="posts/1"):
        store.find_by_id("posts", "1", "en")


def test_non_object_document_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "posts" / "1" / "en.json"
    path.parent.mkdir(parents=True)
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(DocumentStoreError, match="must be an object"):
        JsonFileDocumentStore(tmp_path).find_by_id("posts", "1", "en")


@pytest.mark.parametrize("document_id", ["../escape", "..", "a/b", ""])
def test_path_traversal_segments_are_rejected(tmp_path: Path, document_id: str) -> None:
    with pytest.raises(DocumentStoreError, match="Invalid document path segment"):
        JsonFileDocumentStore(tmp_path).find_by_id("posts", document_id, "en")
