"""attrspec - Declarative attribute rules and value validation.

attrspec turns human-authored attribute declarations (required-ness,
patterns, length bounds, permitted values, cardinality) into immutable rule
sets and validates candidate values against them with structured reports.
"""

__version__ = "0.1.0"
__description__ = "Declarative attribute rules and value validation"

from attrspec.config import AttrspecConfig, load_config
from attrspec.errors import ConfigurationError
from attrspec.models import AttributeRule, Cardinality, RuleSet, ValidValues
from attrspec.normalizer import Normalizer, filter_rules, normalize
from attrspec.validation import ValidationEngine, ValidationReport, validate

__all__ = [
    "__version__",
    "__description__",
    "AttrspecConfig",
    "AttributeRule",
    "Cardinality",
    "ConfigurationError",
    "Normalizer",
    "RuleSet",
    "ValidValues",
    "ValidationEngine",
    "ValidationReport",
    "filter_rules",
    "load_config",
    "normalize",
    "validate",
]
