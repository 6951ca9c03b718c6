"""Configuration loader service."""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from payload_translate.field_schema import (
    SchemaError,
    load_field_schema_file,
    load_field_schema_text,
)
from payload_translate.reinsertion import MANAGED_ATTRIBUTES
from payload_translate.rich_text import PROTECTED_NODE_TYPES
from payload_translate.translation_provider import DEFAULT_GEMINI_MODEL

from .runtime_settings import (
    CollectionSettings,
    Configuration,
    GeminiSettings,
    StoreSettings,
    TranslationSettings,
)

DEFAULT_API_KEY_ENV = "GEMINI_API_KEY"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    disabled = parsed.get("disabled", False)
    if not isinstance(disabled, bool):
        raise ConfigurationError("disabled must be a boolean.")

    return Configuration(
        path=path,
        disabled=disabled,
        provider=_parse_provider_section(parsed.get("provider")),
        store=_parse_store_section(parsed.get("store"), path.parent),
        collections=_parse_collections_section(parsed.get("collections"), path.parent),
        translation=_parse_translation_section(parsed.get("translation")),
        log_level=_parse_logging_section(parsed.get("logging")),
    )


def _parse_provider_section(value: Any) -> GeminiSettings:
    section = _require_mapping(value, "provider")
    if set(section) != {"gemini"}:
        raise ConfigurationError("Exactly one translation provider (gemini) must be provided.")
    gemini = _require_mapping(section["gemini"], "provider.gemini")

    api_key = _optional_string(gemini.get("api_key"), "provider.gemini.api_key")
    if api_key is None:
        env_name = _require_non_empty_string(
            gemini.get("api_key_env", DEFAULT_API_KEY_ENV), "provider.gemini.api_key_env"
        )
        api_key = (os.environ.get(env_name) or "").strip() or None

    return GeminiSettings(
        api_key=api_key,
        model=_require_non_empty_string(
            gemini.get("model", DEFAULT_GEMINI_MODEL), "provider.gemini.model"
        ),
        temperature=_require_number(
            gemini.get("temperature", 0.1), "provider.gemini.temperature"
        ),
        top_p=_require_number(gemini.get("top_p", 0.95), "provider.gemini.top_p"),
        max_output_tokens=_require_positive_int(
            gemini.get("max_output_tokens", 8192), "provider.gemini.max_output_tokens"
        ),
        timeout_seconds=_require_positive_int(
            gemini.get("timeout_seconds", 120), "provider.gemini.timeout_seconds"
        ),
    )


def _parse_store_section(value: Any, base_path: Path) -> StoreSettings:
    section = _require_mapping(value, "store")
    type_candidates = [key for key in ("files", "payload_rest") if section.get(key)]
    if len(type_candidates) != 1:
        raise ConfigurationError(
            "Exactly one document store type (files or payload_rest) must be provided."
        )

    store_type = type_candidates[0]
    definition = _require_mapping(section[store_type], f"store.{store_type}")
    if store_type == "files":
        root = _require_non_empty_string(definition.get("root"), "store.files.root")
        return StoreSettings(store_type=store_type, root=_resolve_path(base_path, root))

    return StoreSettings(
        store_type=store_type,
        base_url=_require_non_empty_string(
            definition.get("base_url"), "store.payload_rest.base_url"
        ),
        api_key=_optional_string(definition.get("api_key"), "store.payload_rest.api_key"),
        auth_collection=_require_non_empty_string(
            definition.get("auth_collection", "users"), "store.payload_rest.auth_collection"
        ),
        timeout_seconds=_require_positive_int(
            definition.get("timeout_seconds", 30), "store.payload_rest.timeout_seconds"
        ),
    )


def _parse_collections_section(value: Any, base_path: Path) -> dict[str, CollectionSettings]:
    section = _require_mapping(value, "collections")
    if not section:
        raise ConfigurationError("collections must list at least one collection.")

    collections: dict[str, CollectionSettings] = {}
    for slug, definition in section.items():
        slug_name = _require_non_empty_string(slug, "collections key")
        mapping = _require_mapping(definition, f"collections.{slug_name}")
        collections[slug_name] = _load_collection_schema(
            slug_name, mapping.get("schema"), base_path
        )
    return collections


def _load_collection_schema(slug: str, definition: Any, base_path: Path) -> CollectionSettings:
    label = f"collections.{slug}.schema"
    try:
        if isinstance(definition, str):
            return CollectionSettings(
                slug=slug, fields=load_field_schema_text(definition, source=label), source_path=None
            )
        mapping = _require_mapping(definition, label)
        inline = mapping.get("inline")
        path_value = mapping.get("path")
        if inline and path_value:
            raise ConfigurationError(f"{label} must not set both inline and path.")
        if inline:
            if not isinstance(inline, str):
                raise ConfigurationError(f"{label}.inline must be a string.")
            return CollectionSettings(
                slug=slug, fields=load_field_schema_text(inline, source=label), source_path=None
            )
        if path_value:
            if not isinstance(path_value, str):
                raise ConfigurationError(f"{label}.path must be a string.")
            schema_path = _resolve_path(base_path, path_value)
            return CollectionSettings(
                slug=slug, fields=load_field_schema_file(schema_path), source_path=schema_path
            )
    except SchemaError as exc:
        raise ConfigurationError(str(exc)) from exc
    raise ConfigurationError(f"{label} requires either inline or path.")


def _parse_translation_section(value: Any) -> TranslationSettings:
    if value is None:
        value = {}
    section = _require_mapping(value, "translation")
    protected = section.get("protected_node_types")
    managed = section.get("managed_attributes")
    return TranslationSettings(
        protected_node_types=(
            PROTECTED_NODE_TYPES
            if protected is None
            else frozenset(
                _normalize_string_sequence(protected, "translation.protected_node_types")
            )
        ),
        managed_attributes=(
            MANAGED_ATTRIBUTES
            if managed is None
            else frozenset(_normalize_string_sequence(managed, "translation.managed_attributes"))
        ),
    )


def _parse_logging_section(value: Any) -> str:
    if value is None:
        return "WARNING"
    section = _require_mapping(value, "logging")
    level = _require_non_empty_string(section.get("level", "WARNING"), "logging.level").upper()
    if level not in _LOG_LEVELS:
        raise ConfigurationError(f"logging.level must be one of {', '.join(_LOG_LEVELS)}.")
    return level


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_number(value: Any, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{field_name} must be a number.")
    return float(value)


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
