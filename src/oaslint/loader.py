"""Reading API description documents from disk."""

import json
from pathlib import Path
from typing import Any

import yaml

from oaslint.errors import DocumentError

SUPPORTED_SUFFIXES = frozenset({".json", ".yaml", ".yml"})


def is_supported(path: Path | str) -> bool:
    return Path(path).suffix.lower() in SUPPORTED_SUFFIXES


def load_document(path: Path | str) -> Any:
    """Decode a JSON or YAML document.

    Raises:
        FileNotFoundError: If the file does not exist
        DocumentError: If the file cannot be read, cannot be decoded or is empty
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"File not found: {p}")

    try:
        text = p.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise DocumentError(f"Unable to decode UTF-8 in {p}: {e}") from e
    except OSError as e:
        raise DocumentError(f"Failed to read {p}: {e}") from e

    if p.suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise DocumentError(f"Invalid JSON in {p}: {e}") from e
    else:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise DocumentError(f"Invalid YAML in {p}: {e}") from e

    if data is None:
        raise DocumentError(f"Empty document: {p}")

    return data
