"""Translation provider exports."""

from .gemini_client import (
    DEFAULT_GEMINI_MODEL,
    GeminiTranslationProvider,
    ProviderError,
    TranslationProvider,
    build_translation_prompt,
    parse_translation_response,
)

__all__ = [
    "DEFAULT_GEMINI_MODEL",
    "GeminiTranslationProvider",
    "ProviderError",
    "TranslationProvider",
    "build_translation_prompt",
    "parse_translation_response",
]
