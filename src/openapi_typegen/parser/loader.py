"""Reads an OpenAPI document from disk.

YAML is a superset of JSON, so both formats go through yaml.safe_load.
"""

from pathlib import Path

import yaml

from ..errors import DocumentLoadError


def load_document(file_path: Path) -> dict:
    """Load an OpenAPI document as a plain mapping."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise DocumentLoadError(f"error reading spec '{file_path}': {e}") from e

    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DocumentLoadError(f"error loading OpenAPI spec in {file_path}: {e}") from e

    if not isinstance(doc, dict):
        raise DocumentLoadError(f"error loading OpenAPI spec in {file_path}: top level is not a mapping")
    return doc
