"""Per-value checks applied by the validation engine.

Checks run in order on the string form of a value and the first one that
reports a message wins. The order is fixed by ``create_default_checks``.
"""

import logging
from abc import ABC, abstractmethod

from ..config import ValidationConfig
from ..models.rule import AttributeRule
from .report import ErrorMessage

logger = logging.getLogger(__name__)


class ValueCheck(ABC):
    """Base class for per-value checks."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Check name for identification."""
        pass

    @abstractmethod
    def check(self, rule: AttributeRule, text: str, config: ValidationConfig) -> ErrorMessage | None:
        """Check one value.

        Args:
            rule: Rule the value is validated against
            text: String form of the value
            config: Validation configuration

        Returns:
            The error message, or None when this check passes
        """
        pass


class MinLengthCheck(ValueCheck):
    """Reject values shorter than ``min_length``."""

    @property
    def name(self) -> str:
        return "min_length"

    def check(self, rule: AttributeRule, text: str, config: ValidationConfig) -> ErrorMessage | None:
        if rule.min_length > 0 and len(text) < rule.min_length:
            return ErrorMessage.TOO_SMALL
        return None


class MaxLengthCheck(ValueCheck):
    """Reject values longer than a finite ``max_length``."""

    @property
    def name(self) -> str:
        return "max_length"

    def check(self, rule: AttributeRule, text: str, config: ValidationConfig) -> ErrorMessage | None:
        if rule.max_length is not None and len(text) > rule.max_length:
            return ErrorMessage.TOO_BIG
        return None


class ValidValuesCheck(ValueCheck):
    """Require a permitted literal or a match of a permitted pattern."""

    @property
    def name(self) -> str:
        return "valid_values"

    def check(self, rule: AttributeRule, text: str, config: ValidationConfig) -> ErrorMessage | None:
        if rule.valid_values is None:
            return None
        try:
            accepted = rule.valid_values.accepts(text, timeout=config.match_timeout)
        except TimeoutError:
            logger.warning(f"Valid values match timed out for '{rule.programmatic_name}'")
            accepted = False
        return None if accepted else ErrorMessage.INVALID


class PatternCheck(ValueCheck):
    """Require a full match of ``pattern``; skipped when valid values are declared."""

    @property
    def name(self) -> str:
        return "pattern"

    def check(self, rule: AttributeRule, text: str, config: ValidationConfig) -> ErrorMessage | None:
        if rule.valid_values is not None or rule.pattern is None:
            return None
        try:
            matched = rule.pattern.matches(text, timeout=config.match_timeout)
        except TimeoutError:
            logger.warning(f"Pattern match timed out for '{rule.programmatic_name}'")
            matched = False
        return None if matched else ErrorMessage.INVALID


def create_default_checks() -> list[ValueCheck]:
    """Per-value checks in precedence order."""
    return [
        MinLengthCheck(),
        MaxLengthCheck(),
        ValidValuesCheck(),
        PatternCheck(),
    ]
