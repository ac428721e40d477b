"""Load metadata trees from YAML or JSON files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from formtree.meta.models import MetaTree

_YAML_SUFFIXES = {".yaml", ".yml"}
_JSON_SUFFIXES = {".json"}


class MetaLoadError(ValueError):
    """Raised when a metadata file cannot be parsed into a tree."""


def load_raw(path: str | Path) -> dict[str, Any]:
    """Parse a metadata file into plain data without validating node fields.

    Raises:
        FileNotFoundError: If the file does not exist.
        MetaLoadError: On an unknown extension, a syntax error, or a document
            whose top level is not a mapping.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Metadata file not found: {file_path}")

    suffix = file_path.suffix.lower()
    text = file_path.read_text(encoding="utf-8")
    try:
        if suffix in _YAML_SUFFIXES:
            data = yaml.safe_load(text)
        elif suffix in _JSON_SUFFIXES:
            data = json.loads(text)
        else:
            raise MetaLoadError(f"Expected a .yaml, .yml or .json file, got: {file_path.suffix}")
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise MetaLoadError(f"Could not parse {file_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise MetaLoadError(
            f"Top level of {file_path} must be a mapping of ref names to nodes"
        )
    return data


def load_meta(path: str | Path) -> MetaTree:
    """Load and validate a metadata tree.

    Node fields are validated by the pydantic models, so an ill-typed field
    raises ``pydantic.ValidationError``.
    """
    return MetaTree.from_dict(load_raw(path))
