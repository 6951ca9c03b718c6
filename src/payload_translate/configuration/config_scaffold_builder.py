"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "config.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Translation configuration template for payload-translate.
# Replace every <REQUIRED> placeholder before running extract or translate.
# Replace <OPTIONAL> placeholders only when your setup needs them.

# Set to true to make translate refuse to run.
disabled: false

provider:
  gemini:
    # Provide api_key directly or name the environment variable holding it.
    api_key: "<OPTIONAL>"
    # api_key_env: GEMINI_API_KEY
    model: gemini-2.0-flash
    temperature: 0.1
    top_p: 0.95
    max_output_tokens: 8192
    timeout_seconds: 120

store:
  # Choose exactly one document store type (files or payload_rest).
  files:
    # Documents live at <root>/<collection>/<document id>/<locale>.json
    root: "<REQUIRED>"
  # payload_rest:
  #   base_url: "<OPTIONAL>"
  #   api_key: "<OPTIONAL>"
  #   auth_collection: users
  #   timeout_seconds: 30

collections:
  # One entry per translatable collection, keyed by collection slug.
  posts:
    schema:
      # Provide either inline field configuration (YAML/JSON) or a schema file path.
      path: "<REQUIRED>"
      # inline: "<OPTIONAL>"

translation:
  # Text inside these rich-text node types is never sent for translation.
  protected_node_types:
    - autolink
  # Removed from every nesting level before the translated document is saved.
  managed_attributes:
    - id
    - createdAt
    - updatedAt

logging:
  level: WARNING
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
