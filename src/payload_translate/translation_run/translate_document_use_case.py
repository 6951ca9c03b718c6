"""Translate one stored document into a batch of target locales."""

from __future__ import annotations

import logging
from collections.abc import Collection, Mapping, Sequence

from payload_translate.document_store import (
    DocumentNotFoundError,
    DocumentStore,
    DocumentStoreError,
)
from payload_translate.extraction import extract_translatable_fields
from payload_translate.field_schema import FieldSchemaNode
from payload_translate.reinsertion import (
    MANAGED_ATTRIBUTES,
    apply_translations,
    strip_managed_attributes,
)
from payload_translate.rich_text import PROTECTED_NODE_TYPES
from payload_translate.translation_provider import ProviderError, TranslationProvider

from .run_contracts import LocaleOutcome, TranslateRequest, TranslateResponse

LOGGER = logging.getLogger(__name__)


class TranslationRequestError(Exception):
    """Raised when a translation request is incomplete or targets an unknown collection."""


def translate_document(  # pylint: disable=too-many-arguments
    request: TranslateRequest,
    *,
    schemas: Mapping[str, Sequence[FieldSchemaNode]],
    store: DocumentStore,
    provider: TranslationProvider,
    protected_node_types: Collection[str] = PROTECTED_NODE_TYPES,
    managed_attributes: Collection[str] = MANAGED_ATTRIBUTES,
) -> TranslateResponse:
    """Translate ``request.document_id`` into every target locale, one locale at a time.

    A provider or store failure stops the batch. Locales persisted before the
    failure stay persisted and are listed on the failed response.
    """
    try:
        schema = _validate_request(request, schemas)
    except TranslationRequestError as exc:
        return TranslateResponse.failed(str(exc))

    try:
        document = store.find_by_id(request.collection, request.document_id, request.source_locale)
    except DocumentNotFoundError:
        return TranslateResponse.failed("Document not found")
    except DocumentStoreError as exc:
        return TranslateResponse.failed(str(exc))

    outcomes: list[LocaleOutcome] = []
    for target_locale in request.target_locales:
        fields = extract_translatable_fields(
            schema, document, protected_node_types=protected_node_types
        )
        if not fields:
            LOGGER.info(
                "No translatable fields in %s/%s.", request.collection, request.document_id
            )
            return TranslateResponse(
                success=True, message="No translatable fields found", translated_fields=0
            )

        try:
            translations = provider.translate(
                [field.text for field in fields], request.source_locale, target_locale
            )
        except ProviderError as exc:
            LOGGER.error("Translation into %s failed: %s", target_locale, exc)
            return TranslateResponse.failed(str(exc), tuple(outcomes))

        result = apply_translations(
            document, fields, translations, protected_node_types=protected_node_types
        )
        data = strip_managed_attributes(result.document, managed_attributes)
        try:
            store.update(request.collection, request.document_id, data, target_locale)
        except DocumentStoreError as exc:
            LOGGER.error("Saving %s translation failed: %s", target_locale, exc)
            return TranslateResponse.failed(str(exc), tuple(outcomes))

        LOGGER.info(
            "Translated %d/%d field(s) of %s/%s into %s.",
            result.applied,
            result.expected,
            request.collection,
            request.document_id,
            target_locale,
        )
        outcomes.append(
            LocaleOutcome(
                locale=target_locale,
                translated_fields=result.applied,
                skipped_fields=result.skipped,
                count_mismatch=result.count_mismatch,
            )
        )

    translated_fields = sum(outcome.translated_fields for outcome in outcomes)
    return TranslateResponse(
        success=True,
        translated_fields=translated_fields,
        translated_locales=len(outcomes),
        message=(
            f"Successfully translated {translated_fields} field(s) "
            f"into {len(outcomes)} locale(s)"
        ),
        locale_outcomes=tuple(outcomes),
    )


def _validate_request(
    request: TranslateRequest, schemas: Mapping[str, Sequence[FieldSchemaNode]]
) -> Sequence[FieldSchemaNode]:
    if not (request.collection and request.document_id and request.source_locale):
        raise TranslationRequestError("Missing required fields")
    if not request.target_locales or not all(request.target_locales):
        raise TranslationRequestError("At least one target locale is required")
    if request.source_locale in request.target_locales:
        raise TranslationRequestError("Target locales must differ from the source locale")
    schema = schemas.get(request.collection)
    if schema is None:
        raise TranslationRequestError("Collection not found")
    return schema
