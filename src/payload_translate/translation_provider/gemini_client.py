"""Translation provider contract and Gemini implementation."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any, Protocol

import requests

LOGGER = logging.getLogger(__name__)

GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"

_PROMPT_TEMPLATE = """You are a professional translator. Translate the following texts from \
{source_locale} to {target_locale}.

IMPORTANT RULES:
1. Maintain the exact same formatting, including HTML tags, markdown, and special characters
2. Do not translate proper nouns, brand names, or code/technical terms unless they have \
standard translations
3. Preserve any placeholder variables like {{{{name}}}} or {{0}}
4. Return ONLY a valid JSON array with the translations in the same order
5. Each translation should correspond to the input at the same index

Input texts (JSON array):
{texts_json}

Return ONLY the JSON array of translations, nothing else. Example format:
["translated text 1", "translated text 2"]"""


class ProviderError(Exception):
    """Raised when the translation provider fails or returns an unusable payload."""


class TranslationProvider(Protocol):  # pylint: disable=too-few-public-methods
    """Protocol for services translating an ordered batch of texts."""

    def translate(
        self, texts: Sequence[str], source_locale: str, target_locale: str
    ) -> list[str]: ...


class GeminiTranslationProvider:  # pylint: disable=too-few-public-methods
    """Translate text batches with the Gemini ``generateContent`` endpoint."""

    def __init__(  # pylint: disable=too-many-arguments
        self,
        api_key: str,
        *,
        model: str = DEFAULT_GEMINI_MODEL,
        temperature: float = 0.1,
        top_p: float = 0.95,
        max_output_tokens: int = 8192,
        timeout_seconds: int = 120,
        session: requests.Session | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._temperature = temperature
        self._top_p = top_p
        self._max_output_tokens = max_output_tokens
        self._timeout_seconds = timeout_seconds
        self._session = session or requests.Session()

    def translate(
        self, texts: Sequence[str], source_locale: str, target_locale: str
    ) -> list[str]:
        if not texts:
            return []

        prompt = build_translation_prompt(texts, source_locale, target_locale)
        LOGGER.info(
            "Requesting %d translation(s) %s -> %s from %s.",
            len(texts),
            source_locale,
            target_locale,
            self._model,
        )
        try:
            response = self._session.post(
                GEMINI_API_URL.format(model=self._model),
                json={
                    "contents": [{"parts": [{"text": prompt}]}],
                    "generationConfig": {
                        "maxOutputTokens": self._max_output_tokens,
                        "temperature": self._temperature,
                        "topP": self._top_p,
                    },
                },
                headers={"Content-Type": "application/json", "x-goog-api-key": self._api_key},
                timeout=self._timeout_seconds,
            )
        except requests.RequestException as exc:
            raise ProviderError(f"Gemini request failed: {exc}") from exc

        if not response.ok:
            raise ProviderError(f"Gemini API error ({response.status_code}): {response.text}")
        try:
            result = response.json()
        except ValueError as exc:
            raise ProviderError("Gemini returned a non-JSON response.") from exc

        generated_text = _first_text_part(result)
        if not generated_text:
            raise ProviderError(f"No translation returned from Gemini. Response: {result}")
        return parse_translation_response(generated_text, expected_count=len(texts))


def build_translation_prompt(
    texts: Sequence[str], source_locale: str, target_locale: str
) -> str:
    """Render the instruction prompt for one batch."""
    return _PROMPT_TEMPLATE.format(
        source_locale=source_locale,
        target_locale=target_locale,
        texts_json=json.dumps(list(texts), ensure_ascii=False),
    )


def parse_translation_response(response_text: str, *, expected_count: int) -> list[str]:
    """Parse the model output into an ordered list of translations.

    Raises:
      ProviderError: If the output is not a JSON array of strings.
    """
    json_text = response_text.strip()
    if json_text.startswith("```"):
        json_text = json_text.removeprefix("```json").removeprefix("```")
        json_text = json_text.replace("```", "").strip()

    try:
        translations = json.loads(json_text)
    except json.JSONDecodeError as exc:
        LOGGER.error("Failed to parse translation response: %s", response_text)
        raise ProviderError("Failed to parse translation response from Gemini.") from exc

    if not isinstance(translations, list):
        raise ProviderError("Gemini translation response is not a JSON array.")
    if not all(isinstance(item, str) for item in translations):
        raise ProviderError("Gemini translation response must contain only strings.")
    if len(translations) != expected_count:
        LOGGER.warning("Expected %d translations, got %d.", expected_count, len(translations))
    return translations


def _first_text_part(result: Any) -> str | None:
    # Thinking models may return several parts; the first one with text wins.
    if not isinstance(result, dict):
        return None
    candidates = result.get("candidates") or []
    if not candidates or not isinstance(candidates[0], dict):
        return None
    parts = (candidates[0].get("content") or {}).get("parts") or []
    for part in parts:
        if isinstance(part, dict) and isinstance(part.get("text"), str):
            return part["text"]
    return None
