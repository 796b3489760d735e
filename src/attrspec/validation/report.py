"""Validation report returned by the validation engine."""

from collections.abc import Iterator, Mapping
from enum import Enum


class ErrorMessage(str, Enum):
    """Messages reported for invalid values."""
    REQUIRED = "is required"
    INVALID = "is invalid"
    TOO_SMALL = "is too small"
    TOO_BIG = "is too big"
    TOO_FEW = "too few values given"
    TOO_MANY = "too many values given"


class ValidationReport(Mapping[str, list[str]]):
    """Errors found during one validation run, keyed by programmatic name.

    Attributes appear in the order their rules were evaluated, and each
    attribute's messages in the order they were found. An empty report means
    every value is valid.
    """

    def __init__(self) -> None:
        self._errors: dict[str, list[str]] = {}

    def __getitem__(self, name: str) -> list[str]:
        return self._errors[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __repr__(self) -> str:
        return f"ValidationReport({self._errors!r})"

    @property
    def is_valid(self) -> bool:
        return not self._errors

    @property
    def error_count(self) -> int:
        """Total number of messages across all attributes."""
        return sum(len(messages) for messages in self._errors.values())

    def add_error(self, name: str, message: ErrorMessage | str) -> None:
        """Record a message for an attribute."""
        if isinstance(message, ErrorMessage):
            message = message.value
        self._errors.setdefault(name, []).append(message)

    def errors_for(self, name: str) -> list[str]:
        """Messages for one attribute; empty when it is valid."""
        return list(self._errors.get(name, []))

    def full_messages(self, rule_set: Mapping | None = None) -> list[str]:
        """Human-readable messages prefixed with the attribute description.

        Args:
            rule_set: Rules used for the run; without it the programmatic
                name is used as prefix
        """
        messages = []
        for name, errors in self._errors.items():
            rule = rule_set.get(name) if rule_set is not None else None
            subject = rule.description if rule is not None else name
            messages.extend(f"{subject} {message}" for message in errors)
        return messages

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "valid": self.is_valid,
            "error_count": self.error_count,
            "errors": {name: list(messages) for name, messages in self._errors.items()},
        }
