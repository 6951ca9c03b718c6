"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from payload_translate.field_schema import FieldSchemaNode


@dataclass(frozen=True)
class GeminiSettings:
    """Gemini provider configuration."""

    api_key: str | None
    model: str
    temperature: float
    top_p: float
    max_output_tokens: int
    timeout_seconds: int


@dataclass(frozen=True)
class StoreSettings:
    """Document store configuration; ``store_type`` selects which fields apply."""

    store_type: str
    root: Path | None = None
    base_url: str | None = None
    api_key: str | None = None
    auth_collection: str = "users"
    timeout_seconds: int = 30


@dataclass(frozen=True)
class CollectionSettings:
    """One translatable collection and its field schema."""

    slug: str
    fields: tuple[FieldSchemaNode, ...]
    source_path: Path | None


@dataclass(frozen=True)
class TranslationSettings:
    """Extraction and write-back tuning."""

    protected_node_types: frozenset[str]
    managed_attributes: frozenset[str]


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    disabled: bool
    provider: GeminiSettings
    store: StoreSettings
    collections: Mapping[str, CollectionSettings]
    translation: TranslationSettings
    log_level: str

    @property
    def schemas(self) -> dict[str, tuple[FieldSchemaNode, ...]]:
        """Return field schemas keyed by collection slug."""
        return {slug: settings.fields for slug, settings in self.collections.items()}
