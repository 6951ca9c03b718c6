"""Document store construction from configuration."""

from __future__ import annotations

from payload_translate.configuration.runtime_settings import StoreSettings

from .json_file_store import JsonFileDocumentStore
from .payload_rest_store import PayloadRestDocumentStore
from .store_contracts import DocumentStore


def build_document_store(settings: StoreSettings) -> DocumentStore:
    if settings.store_type == "files" and settings.root is not None:
        return JsonFileDocumentStore(settings.root)
    if settings.store_type == "payload_rest" and settings.base_url is not None:
        return PayloadRestDocumentStore(
            settings.base_url,
            api_key=settings.api_key,
            auth_collection=settings.auth_collection,
            timeout_seconds=settings.timeout_seconds,
        )
    raise ValueError(f"Unsupported document store type: {settings.store_type}")
