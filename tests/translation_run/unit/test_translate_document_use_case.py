"""Translation run use-case tests."""

from __future__ import annotations

import copy

from payload_translate.document_store import DocumentNotFoundError, DocumentStoreError
from payload_translate.field_schema import load_field_schema
from payload_translate.translation_provider import ProviderError
from payload_translate.translation_run import TranslateRequest, translate_document

_SCHEMA = load_field_schema(
    [
        {"name": "title", "type": "text", "localized": True},
        {"name": "slug", "type": "text"},
        {
            "name": "items",
            "type": "array",
            "fields": [{"name": "label", "type": "text", "localized": True}],
        },
    ]
)


def _source_document() -> dict:
    return {
        "id": 9,
        "title": "Hello",
        "slug": "hello",
        "items": [{"id": "i1", "label": "One"}],
        "createdAt": "2024-01-01",
        "updatedAt": "2024-01-02",
    }


class InMemoryStore:
    def __init__(self, documents: dict | None = None, *, fail_on_update: bool = False) -> None:
        self.documents = documents if documents is not None else {
            ("posts", "9", "en"): _source_document()
        }
        self.fail_on_update = fail_on_update
        self.updates: list[tuple[str, str, dict, str]] = []

    def find_by_id(self, collection: str, document_id: str, locale: str) -> dict:
        key = (collection, document_id, locale)
        if key not in self.documents:
            raise DocumentNotFoundError(f"Document not found: {collection}/{document_id}")
        return self.documents[key]

    def update(self, collection: str, document_id: str, data, locale: str) -> None:
        if self.fail_on_update:
            raise DocumentStoreError("disk full")
        self.updates.append((collection, document_id, copy.deepcopy(data), locale))


class PrefixingProvider:
    def __init__(self, *, fail_on: str | None = None, drop_last: bool = False) -> None:
        self.fail_on = fail_on
        self.drop_last = drop_last
        self.calls: list[tuple[list[str], str, str]] = []

    def translate(self, texts, source_locale: str, target_locale: str) -> list[str]:
        self.calls.append((list(texts), source_locale, target_locale))
        if target_locale == self.fail_on:
            raise ProviderError("Gemini API error (429): quota exceeded")
        translations = [f"{target_locale}:{text}" for text in texts]
        return translations[:-1] if self.drop_last else translations


def _request(*targets: str, collection: str = "posts", document_id: str = "9") -> TranslateRequest:
    return TranslateRequest(
        collection=collection,
        document_id=document_id,
        source_locale="en",
        target_locales=targets,
    )


def test_each_target_locale_is_translated_and_saved_in_order() -> None:
    store = InMemoryStore()
    provider = PrefixingProvider()

    response = translate_document(
        _request("de", "fr"), schemas={"posts": _SCHEMA}, store=store, provider=provider
    )

    assert response.success
    assert response.translated_fields == 4
    assert response.translated_locales == 2
    assert [call[2] for call in provider.calls] == ["de", "fr"]
    assert provider.calls[0][0] == ["Hello", "One"]
    assert store.updates[0] == (
        "posts",
        "9",
        {"title": "de:Hello", "slug": "hello", "items": [{"label": "de:One"}]},
        "de",
    )
    assert store.updates[1][2]["title"] == "fr:Hello"
    assert store.documents[("posts", "9", "en")] == _source_document()
    assert response.to_payload() == {
        "success": True,
        "translatedFields": 4,
        "translatedLocales": 2,
        "message": "Successfully translated 4 field(s) into 2 locale(s)",
    }


def test_provider_failure_aborts_remaining_locales() -> None:
    store = InMemoryStore()
    provider = PrefixingProvider(fail_on="fr")

    response = translate_document(
        _request("de", "fr", "es"), schemas={"posts": _SCHEMA}, store=store, provider=provider
    )

    assert not response.success
    assert response.error == "Gemini API error (429): quota exceeded"
    assert [update[3] for update in store.updates] == ["de"]
    assert [call[2] for call in provider.calls] == ["de", "fr"]
    assert response.translated_locales == 1
    assert response.to_payload() == {
        "success": False,
        "error": "Gemini API error (429): quota exceeded",
    }


def test_count_mismatch_still_succeeds_with_true_field_count() -> None:
    store = InMemoryStore()

    response = translate_document(
        _request("de"),
        schemas={"posts": _SCHEMA},
        store=store,
        provider=PrefixingProvider(drop_last=True),
    )

    assert response.success
    assert response.translated_fields == 1
    assert response.locale_outcomes[0].count_mismatch
    assert response.locale_outcomes[0].skipped_fields == 1
    assert store.updates[0][2]["items"] == [{"label": "One"}]


def test_document_without_translatable_text_reports_zero_fields() -> None:
    store = InMemoryStore({("posts", "9", "en"): {"title": "  ", "slug": "x"}})
    provider = PrefixingProvider()

    response = translate_document(
        _request("de"), schemas={"posts": _SCHEMA}, store=store, provider=provider
    )

    assert response.success
    assert response.translated_fields == 0
    assert response.message == "No translatable fields found"
    assert provider.calls == []
    assert store.updates == []


def test_request_validation_failures_are_reported() -> None:
    store = InMemoryStore()
    provider = PrefixingProvider()
    schemas = {"posts": _SCHEMA}

    assert translate_document(
        _request(), schemas=schemas, store=store, provider=provider
    ).error == "At least one target locale is required"
    assert translate_document(
        _request("de", document_id=""), schemas=schemas, store=store, provider=provider
    ).error == "Missing required fields"
    assert translate_document(
        _request("en"), schemas=schemas, store=store, provider=provider
    ).error == "Target locales must differ from the source locale"
    assert translate_document(
        _request("de", collection="pages"), schemas=schemas, store=store, provider=provider
    ).error == "Collection not found"
    assert provider.calls == []


def test_missing_document_and_store_failures_are_reported() -> None:
    provider = PrefixingProvider()

    missing = translate_document(
        _request("de", document_id="404"),
        schemas={"posts": _SCHEMA},
        store=InMemoryStore(),
        provider=provider,
    )
    failed_save = translate_document(
        _request("de"),
        schemas={"posts": _SCHEMA},
        store=InMemoryStore(fail_on_update=True),
        provider=provider,
    )

    assert missing.error == "Document not found"
    assert failed_save.error == "disk full"
    assert not failed_save.success


def test_custom_managed_attributes_are_kept_when_not_listed() -> None:
    store = InMemoryStore()

    translate_document(
        _request("de"),
        schemas={"posts": _SCHEMA},
        store=store,
        provider=PrefixingProvider(),
        managed_attributes={"createdAt", "updatedAt"},
    )

    saved = store.updates[0][2]
    assert saved["id"] == 9
    assert saved["items"][0]["id"] == "i1"
    assert "createdAt" not in saved
