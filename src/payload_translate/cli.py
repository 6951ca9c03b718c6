"""Command line interface entry point."""

from __future__ import annotations

import json
import logging
import sys

import click

from payload_translate.addressing import parse_address
from payload_translate.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Configuration,
    ConfigurationError,
    load_configuration,
    write_placeholder_configuration,
)
from payload_translate.document_store import DocumentStoreError
from payload_translate.document_store.store_factory import build_document_store
from payload_translate.extraction import extract_translatable_fields
from payload_translate.translation_provider import GeminiTranslationProvider
from payload_translate.translation_run import TranslateRequest, translate_document

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="payload-translate")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Override the logging level from the configuration file.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Schema-driven translation of localized CMS documents."""
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="extract")
@click.option("--config", "config_path", required=True, type=click.Path(path_type=str))
@click.option("--collection", required=True, help="Collection slug")
@click.option("--id", "document_id", required=True, help="Document identifier")
@click.option("--locale", required=True, help="Locale to read the document in")
@click.option(
    "--path",
    "path_prefix",
    default=None,
    help="Only print fragments at or below this dotted address, e.g. layout.0",
)
@click.pass_context
def extract(  # pylint: disable=too-many-arguments
    ctx: click.Context,
    config_path: str,
    collection: str,
    document_id: str,
    locale: str,
    path_prefix: str | None,
) -> None:
    """Print the translatable fragments of a document as JSON."""
    configuration = _load(ctx, config_path)
    schema = configuration.schemas.get(collection)
    if schema is None:
        raise CliError(f"Collection not found: {collection}")
    try:
        document = build_document_store(configuration.store).find_by_id(
            collection, document_id, locale
        )
    except DocumentStoreError as exc:
        raise CliError(str(exc)) from exc

    fields = extract_translatable_fields(
        schema,
        document,
        protected_node_types=configuration.translation.protected_node_types,
    )
    if path_prefix:
        prefix = parse_address(path_prefix)
        fields = [field for field in fields if field.address[: len(prefix)] == prefix]
    click.echo(json.dumps([field.to_payload() for field in fields], indent=2, ensure_ascii=False))


@cli.command(name="translate")
@click.option("--config", "config_path", required=True, type=click.Path(path_type=str))
@click.option("--collection", required=True, help="Collection slug")
@click.option("--id", "document_id", required=True, help="Document identifier")
@click.option("--source", "source_locale", required=True, help="Locale to translate from")
@click.option(
    "--target",
    "target_locales",
    required=True,
    multiple=True,
    help="Locale to translate into; repeat for several locales",
)
@click.pass_context
def translate(  # pylint: disable=too-many-arguments
    ctx: click.Context,
    config_path: str,
    collection: str,
    document_id: str,
    source_locale: str,
    target_locales: tuple[str, ...],
) -> None:
    """Translate a document and save it under each target locale."""
    configuration = _load(ctx, config_path)
    if configuration.disabled:
        raise CliError("Translation is disabled in the configuration.")
    provider_settings = configuration.provider
    if not provider_settings.api_key:
        raise CliError("Translation API key not configured")

    provider = GeminiTranslationProvider(
        provider_settings.api_key,
        model=provider_settings.model,
        temperature=provider_settings.temperature,
        top_p=provider_settings.top_p,
        max_output_tokens=provider_settings.max_output_tokens,
        timeout_seconds=provider_settings.timeout_seconds,
    )
    response = translate_document(
        TranslateRequest(
            collection=collection,
            document_id=document_id,
            source_locale=source_locale,
            target_locales=target_locales,
        ),
        schemas=configuration.schemas,
        store=build_document_store(configuration.store),
        provider=provider,
        protected_node_types=configuration.translation.protected_node_types,
        managed_attributes=configuration.translation.managed_attributes,
    )
    click.echo(json.dumps(response.to_payload(), indent=2, ensure_ascii=False))
    if not response.success:
        raise CliError(response.error or "Translation failed")


def _load(ctx: click.Context, config_path: str) -> Configuration:
    try:
        configuration = load_configuration(config_path)
    except (ConfigurationError, OSError) as exc:
        raise CliError(str(exc)) from exc
    level = (ctx.obj or {}).get("log_level") or configuration.log_level
    logging.basicConfig(level=level.upper(), format=_LOG_FORMAT)
    return configuration


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
