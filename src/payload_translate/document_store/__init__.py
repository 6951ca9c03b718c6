"""Document store exports."""

from .json_file_store import JsonFileDocumentStore
from .payload_rest_store import PayloadRestDocumentStore
from .store_contracts import DocumentNotFoundError, DocumentStore, DocumentStoreError

__all__ = [
    "DocumentNotFoundError",
    "DocumentStore",
    "DocumentStoreError",
    "JsonFileDocumentStore",
    "PayloadRestDocumentStore",
]
