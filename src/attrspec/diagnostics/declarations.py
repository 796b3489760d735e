"""Diagnostics for likely mistakes in raw declarations.

Flags declared keys that are not recognized but closely resemble a recognized
one ("required" for "require", "validates" for "validate"). The check is a
heuristic for authors; normalization does not depend on it.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from difflib import get_close_matches
from typing import Any

from ..coercion import RECOGNIZED_KEYS

logger = logging.getLogger(__name__)

SIMILARITY_CUTOFF = 0.8


@dataclass
class DeclarationWarning:
    """A suspicious key found in one attribute declaration."""
    attribute: str
    key: str
    suggestion: str

    @property
    def message(self) -> str:
        return f"Unrecognized key '{self.key}', did you mean '{self.suggestion}'?"

    def __str__(self) -> str:
        return f"[WARN] {self.attribute}: {self.message}"

    def to_dict(self) -> dict:
        return {
            "attribute": self.attribute,
            "key": self.key,
            "suggestion": self.suggestion,
            "message": self.message,
        }


def suggest_key(key: str) -> str | None:
    """Return the recognized key ``key`` most likely misspells, if any."""
    if key in RECOGNIZED_KEYS:
        return None
    matches = get_close_matches(key, sorted(RECOGNIZED_KEYS), n=1, cutoff=SIMILARITY_CUTOFF)
    return matches[0] if matches else None


def check_declaration(attribute: str, declaration: Mapping[str, Any]) -> list[DeclarationWarning]:
    """Check one expanded declaration mapping for misspelled keys."""
    warnings = []
    for key in declaration:
        suggestion = suggest_key(str(key))
        if suggestion:
            warnings.append(DeclarationWarning(attribute=attribute, key=str(key), suggestion=suggestion))
    return warnings


def check_declarations(raw_decls: Mapping[str, Any]) -> list[DeclarationWarning]:
    """Check every declaration in a raw declaration document.

    Compact ``key=value`` declarations are expanded first; entries that are
    neither strings nor mappings are skipped here and reported by
    normalization.
    """
    from ..normalizer import expand_declaration

    warnings = []
    for label, raw in raw_decls.items():
        if raw is not None and not isinstance(raw, (str, Mapping)):
            continue
        warnings.extend(check_declaration(str(label), expand_declaration(raw, str(label))))

    logger.debug(f"Declaration check found {len(warnings)} warnings in {len(raw_decls)} declarations")
    return warnings
