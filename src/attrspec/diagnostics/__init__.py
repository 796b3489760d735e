"""Author-facing diagnostics for attribute declarations."""

from .declarations import (
    DeclarationWarning,
    check_declaration,
    check_declarations,
    suggest_key,
)

__all__ = [
    "DeclarationWarning",
    "check_declaration",
    "check_declarations",
    "suggest_key",
]
