"""Translation run entities."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TranslateRequest:
    """Input contract for translating one document into one or more locales."""

    collection: str
    document_id: str
    source_locale: str
    target_locales: tuple[str, ...]


@dataclass(frozen=True)
class LocaleOutcome:
    """Result of translating the document into one target locale."""

    locale: str
    translated_fields: int
    skipped_fields: int
    count_mismatch: bool


@dataclass(frozen=True)
class TranslateResponse:
    """Output contract for one translation request."""

    success: bool
    translated_fields: int = 0
    translated_locales: int = 0
    message: str | None = None
    error: str | None = None
    locale_outcomes: tuple[LocaleOutcome, ...] = field(default=())

    @staticmethod
    def failed(error: str, locale_outcomes: tuple[LocaleOutcome, ...] = ()) -> TranslateResponse:
        return TranslateResponse(
            success=False,
            translated_fields=sum(outcome.translated_fields for outcome in locale_outcomes),
            translated_locales=len(locale_outcomes),
            error=error,
            locale_outcomes=locale_outcomes,
        )

    def to_payload(self) -> dict[str, object]:
        """Serialize to the endpoint response shape."""
        if not self.success:
            return {"success": False, "error": self.error}
        payload: dict[str, object] = {
            "success": True,
            "translatedFields": self.translated_fields,
            "translatedLocales": self.translated_locales,
        }
        if self.message:
            payload["message"] = self.message
        return payload
