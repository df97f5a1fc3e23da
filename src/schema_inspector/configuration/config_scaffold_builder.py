"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "config.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Inspector configuration template for schema-inspector.
# Replace the example schema before running columns, details or options.

schemas:
  # Display name -> JSON Schema; provide either a JSON string, inline JSON text or a path
  # (relative to this file).
  Example:
    inline: |
      {
        "$id": "https://example.com/example.json",
        "type": "object",
        "properties": {
          "name": {"type": "string", "title": "Name"}
        },
        "required": ["name"]
      }
  # Other:
  #   path: "<OPTIONAL>"

# Schemas that are not listed themselves, but may be referenced via their absolute $id.
reference_schemas: []
#  - path: "<OPTIONAL>"

parser:
  # type: likeAllOf (merge all parts) or asAdditionalColumn (offer parts as options).
  anyOf:
    type: asAdditionalColumn
    # group_title: "<OPTIONAL>"
    # option_label: "Variant {index}"
  oneOf:
    type: asAdditionalColumn
    # group_title: "<OPTIONAL>"
    # option_label: "<OPTIONAL>"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML inspector configuration template with an example schema and guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the inspector configuration template to the requested output path.

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
        raise FileExistsError(
            f"Inspector configuration file already exists: {destination.resolve()}"
        )
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
