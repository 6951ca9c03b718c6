"""Documents read and written through the Payload CMS REST API."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import requests

from .store_contracts import DocumentNotFoundError, DocumentStoreError


class PayloadRestDocumentStore:
    """Payload REST client covering ``findByID`` and localized ``update``."""

    def __init__(
        self,
        base_url: str,
        *,
        api_key: str | None = None,
        auth_collection: str = "users",
        timeout_seconds: int = 30,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._session = session or requests.Session()
        self._headers = {"Content-Type": "application/json"}
        if api_key:
            self._headers["Authorization"] = f"{auth_collection} API-Key {api_key}"

    def find_by_id(self, collection: str, document_id: str, locale: str) -> dict[str, Any]:
        response = self._request(
            "GET",
            collection,
            document_id,
            params={"locale": locale, "depth": 0},
        )
        if response.status_code == 404:
            raise DocumentNotFoundError(
                f"Document not found: {collection}/{document_id} ({locale})"
            )
        parsed = self._json_body(response, collection, document_id)
        if not isinstance(parsed, dict):
            raise DocumentStoreError(
                f"Document root must be an object: {collection}/{document_id}"
            )
        return parsed

    def update(
        self, collection: str, document_id: str, data: Mapping[str, Any], locale: str
    ) -> None:
        response = self._request(
            "PATCH",
            collection,
            document_id,
            params={"locale": locale, "depth": 0},
            json=dict(data),
        )
        if response.status_code == 404:
            raise DocumentNotFoundError(f"Document not found: {collection}/{document_id}")
        self._json_body(response, collection, document_id)

    def _request(
        self, method: str, collection: str, document_id: str, **kwargs: Any
    ) -> requests.Response:
        url = f"{self._base_url}/api/{quote(collection, safe='')}/{quote(document_id, safe='')}"
        try:
            return self._session.request(
                method, url, headers=self._headers, timeout=self._timeout_seconds, **kwargs
            )
        except requests.RequestException as exc:
            raise DocumentStoreError(f"Payload request failed: {exc}") from exc

    @staticmethod
    def _json_body(response: requests.Response, collection: str, document_id: str) -> Any:
        if not response.ok:
            raise DocumentStoreError(
                f"Payload API error ({response.status_code}) for "
                f"{collection}/{document_id}: {response.text}"
            )
        try:
            body = response.json()
        except ValueError as exc:
            raise DocumentStoreError("Payload returned a non-JSON response.") from exc
        # PATCH responses wrap the document as {"doc": {...}, "message": ...}.
        if isinstance(body, dict) and isinstance(body.get("doc"), dict):
            return body["doc"]
        return body
