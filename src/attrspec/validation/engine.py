"""Validation engine: evaluates candidate values against a rule set.

For each rule the engine applies, in order:

1. the required check (absent, empty or placeholder values)
2. the cardinality check for collections, when the rule declares one
3. the per-value checks on the value, or on each element of a collection

Invalid values are reported, never raised. Only malformed rules (an
unparseable ``valid_num_values`` found here) raise ``ConfigurationError``.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from ..config import AttrspecConfig, create_default_config
from ..models.rule import AttributeRule
from ..models.ruleset import RuleSet
from .checks import ValueCheck, create_default_checks
from .report import ErrorMessage, ValidationReport

logger = logging.getLogger(__name__)

ValueAccessor = Callable[[str], Any]

COLLECTION_TYPES = (list, tuple, set, frozenset)


def is_collection(value: Any) -> bool:
    """True for flat collections of scalars (lists, tuples and sets)."""
    return isinstance(value, COLLECTION_TYPES)


def as_accessor(values: Mapping[str, Any] | ValueAccessor) -> ValueAccessor:
    """Turn a mapping of candidate values into a value accessor.

    Callables are returned unchanged; a name missing from a mapping reads as
    absent.
    """
    if isinstance(values, Mapping):
        return values.get
    if callable(values):
        return values
    raise TypeError(f"Expected a mapping or a callable value accessor, got {type(values).__name__}")


def value_text(value: Any) -> str:
    """String form of a scalar value as used by the per-value checks."""
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


class ValidationEngine:
    """Validates candidate values against rule sets."""

    def __init__(self, config: AttrspecConfig | None = None):
        self.config = config or create_default_config()
        self.checks: list[ValueCheck] = create_default_checks()

    def validate(self, rule_set: RuleSet, values: Mapping[str, Any] | ValueAccessor) -> ValidationReport:
        """Validate values against every rule in the rule set.

        Args:
            rule_set: Rules to evaluate, in order
            values: Mapping of programmatic name to value, or a callable
                returning the value for a programmatic name

        Returns:
            ValidationReport, empty when everything is valid

        Raises:
            ConfigurationError: If a rule's cardinality range can't be parsed
        """
        accessor = as_accessor(values)
        report = ValidationReport()

        logger.info(f"Validating {len(rule_set)} attributes")

        for name, rule in rule_set.items():
            self.validate_attribute(rule, accessor(name), report)

        logger.info(f"Validation completed: {len(report)} invalid attributes, {report.error_count} errors")
        return report

    def validate_attribute(self, rule: AttributeRule, value: Any, report: ValidationReport) -> None:
        """Validate one attribute's value, adding any errors to ``report``."""
        name = rule.programmatic_name

        if self.is_absent(rule, value):
            if rule.required:
                self._add(report, name, ErrorMessage.REQUIRED)
            return

        if not is_collection(value):
            self._check_value(rule, value, report)
            return

        if rule.declares_cardinality:
            cardinality = rule.cardinality()
            size = len(value)
            if size < cardinality.min_count:
                self._add(report, name, ErrorMessage.TOO_FEW)
            elif cardinality.max_count is not None and size > cardinality.max_count:
                self._add(report, name, ErrorMessage.TOO_MANY)

        for element in value:
            self._check_value(rule, element, report)

    def is_absent(self, rule: AttributeRule, value: Any) -> bool:
        """Check whether a value counts as not given.

        Empty collections are handed to the cardinality check instead when
        the rule declares one. Whitespace-only strings are absent unless
        ``validation.blank_is_absent`` is off.
        """
        if value is None:
            return True
        if is_collection(value):
            return len(value) == 0 and not rule.declares_cardinality
        if isinstance(value, Mapping):
            return len(value) == 0
        if isinstance(value, (str, bytes)):
            if len(value) == 0:
                return True
            if self.config.validation.blank_is_absent and not value.strip():
                return True
        return rule.placeholder is not None and value_text(value) == rule.placeholder

    def _check_value(self, rule: AttributeRule, value: Any, report: ValidationReport) -> None:
        text = value_text(value)
        for check in self.checks:
            message = check.check(rule, text, self.config.validation)
            if message is not None:
                logger.debug(f"{rule.programmatic_name}: {check.name} check failed")
                self._add(report, rule.programmatic_name, message)
                return

    def _add(self, report: ValidationReport, name: str, message: ErrorMessage) -> None:
        logger.debug(f"{name}: {message.value}")
        report.add_error(name, message)


def validate(
    rule_set: RuleSet,
    values: Mapping[str, Any] | ValueAccessor,
    config: AttrspecConfig | None = None,
) -> ValidationReport:
    """Validate candidate values against ``rule_set``.

    See ``ValidationEngine.validate``.
    """
    return ValidationEngine(config).validate(rule_set, values)
