"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "renderer.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Configuration template for submission-renderer.
# Every key is optional; the values below are the built-in defaults.

rendering:
  # Date pattern used when a datetime component enables the date but sets no format.
  date_format: "yyyy-MM-dd"
  # Appended to the date pattern when a datetime component enables the time.
  time_format: " hh:mm:ss A"
  password_mask: "--- PASSWORD ---"
  protected_mask: "--- PROTECTED ---"

redaction:
  # Default context for the redact command (display or index).
  context: "display"
  # Root segment under which submissions store their field values.
  submission_root: "data"
  # Segment inserted between nested keys when storage wraps nested scopes,
  # e.g. "data" turns user.name into data.user.data.name.
  # nested_segment: "data"
  # Signatures shorter than this are indexed as empty, longer ones as the marker.
  signature_min_length: 25
  signature_marker: "YES"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with defaults and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the configuration template to the requested output path.

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
