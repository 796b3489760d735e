"""Canonical data models for attribute rules."""

from attrspec.cardinality import Cardinality
from attrspec.models.rule import AttributeRule, ValidValues
from attrspec.models.ruleset import RuleSet

__all__ = [
    "AttributeRule",
    "Cardinality",
    "RuleSet",
    "ValidValues",
]
