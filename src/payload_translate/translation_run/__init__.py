"""Translation run exports."""

from .run_contracts import LocaleOutcome, TranslateRequest, TranslateResponse
from .translate_document_use_case import TranslationRequestError, translate_document

__all__ = [
    "LocaleOutcome",
    "TranslateRequest",
    "TranslateResponse",
    "TranslationRequestError",
    "translate_document",
]
