"""Canonical attribute rule models."""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..cardinality import Cardinality, parse_cardinality
from ..patterns import CompiledPattern


class ValidValues(BaseModel):
    """Permitted value set: literal strings plus full-match patterns.

    Both buckets keep declaration order.
    """
    literals: tuple[str, ...] = ()
    patterns: tuple[CompiledPattern, ...] = ()

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def accepts(self, text: str, timeout: float | None = None) -> bool:
        """Check a value's string form against the literals, then the patterns.

        Raises:
            TimeoutError: If a pattern match exceeds ``timeout``
        """
        if text in self.literals:
            return True
        return any(pattern.matches(text, timeout=timeout) for pattern in self.patterns)

    def to_dict(self) -> dict:
        return {
            "literals": list(self.literals),
            "patterns": [pattern.source for pattern in self.patterns],
        }


class AttributeRule(BaseModel):
    """Normalized, immutable validation contract for one attribute."""
    key: str
    programmatic_name: str = Field(min_length=1)
    description: str
    required: bool = True
    pattern: CompiledPattern | None = None
    min_length: int = Field(default=0, ge=0)
    max_length: int | None = Field(default=None, ge=0)
    valid_values: ValidValues | None = None
    # Raw range expression, parsed on demand by cardinality()
    valid_num_values: str | None = None
    min_num_values: int = Field(default=0, ge=0)
    max_num_values: int | None = Field(default=None, ge=0)
    placeholder: str | None = None
    extra: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @field_validator("extra", mode="after")
    @classmethod
    def freeze_extra(cls, v):
        return MappingProxyType(dict(v))

    @property
    def declares_cardinality(self) -> bool:
        """True when the rule constrains the number of values in a collection."""
        return (
            self.valid_num_values is not None
            or self.min_num_values > 0
            or self.max_num_values is not None
        )

    def cardinality(self) -> Cardinality | None:
        """Resolve the permitted element count.

        ``valid_num_values`` wins over explicit ``min_num_values`` /
        ``max_num_values`` declarations.

        Raises:
            ConfigurationError: If ``valid_num_values`` can't be parsed
        """
        if self.valid_num_values is not None:
            return parse_cardinality(self.valid_num_values, attribute=self.programmatic_name)
        if self.min_num_values > 0 or self.max_num_values is not None:
            return Cardinality(min_count=self.min_num_values, max_count=self.max_num_values)
        return None

    def get_extra(self, key: str, default: Any = None) -> Any:
        """Read an unrecognized declared key; returns ``default`` when it was not declared."""
        return self.extra.get(key, default)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "key": self.key,
            "programmatic_name": self.programmatic_name,
            "description": self.description,
            "required": self.required,
            "pattern": self.pattern.source if self.pattern else None,
            "min_length": self.min_length,
            "max_length": self.max_length,
            "valid_values": self.valid_values.to_dict() if self.valid_values else None,
            "valid_num_values": self.valid_num_values,
            "min_num_values": self.min_num_values,
            "max_num_values": self.max_num_values,
            "placeholder": self.placeholder,
            "extra": dict(self.extra),
        }
