"""Loading declaration and value documents from disk.

JSON documents are read with ``json``; ``.yml`` / ``.yaml`` documents with
PyYAML's safe loader.
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yml", ".yaml"}


def _load_document(path: str | Path) -> Any:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    content = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            return yaml.safe_load(content)
        return json.loads(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Can't parse {path}: {e}") from e


def load_declarations(path: str | Path) -> dict[str, Any]:
    """Read a declaration document mapping attribute labels to declarations.

    Args:
        path: JSON or YAML file

    Returns:
        Raw declaration mapping, ready for ``normalize``

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If the document can't be parsed or is not a mapping
    """
    document = _load_document(path)
    if not isinstance(document, Mapping):
        raise ConfigurationError(f"Declaration document {path} must be a mapping of attribute labels")

    logger.debug(f"Loaded {len(document)} declarations from {path}")
    return dict(document)


def load_values(path: str | Path) -> dict[str, Any]:
    """Read a mapping of programmatic name to candidate value.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If the document can't be parsed or is not a mapping
    """
    document = _load_document(path)
    if document is None:
        return {}
    if not isinstance(document, Mapping):
        raise ConfigurationError(f"Values document {path} must be a mapping of attribute names")
    return {str(key): value for key, value in document.items()}
