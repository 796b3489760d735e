"""Validation engine for canonical attribute rules.

Evaluates candidate values against a rule set and reports structured errors
per attribute.
"""

from .checks import (
    MaxLengthCheck,
    MinLengthCheck,
    PatternCheck,
    ValidValuesCheck,
    ValueCheck,
    create_default_checks,
)
from .engine import ValidationEngine, as_accessor, is_collection, validate
from .report import ErrorMessage, ValidationReport

__all__ = [
    "ValidationEngine",
    "ValidationReport",
    "ErrorMessage",
    "ValueCheck",
    "MinLengthCheck",
    "MaxLengthCheck",
    "ValidValuesCheck",
    "PatternCheck",
    "create_default_checks",
    "as_accessor",
    "is_collection",
    "validate",
]
