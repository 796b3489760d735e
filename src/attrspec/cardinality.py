"""Cardinality range parsing for collection-valued attributes.

Grammar:

    N      exactly N values
    N+     at least N values
    N-M    between N and M values, inclusive
"""

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigurationError

_EXACT = re.compile(r"\A(\d+)\Z")
_AT_LEAST = re.compile(r"\A(\d+)\+\Z")
_RANGE = re.compile(r"\A(\d+)-(\d+)\Z")


class Cardinality(BaseModel):
    """Permitted number of values for a collection; ``max_count`` None is unbounded."""
    min_count: int = Field(default=0, ge=0)
    max_count: int | None = Field(default=None, ge=0)

    model_config = ConfigDict(frozen=True)

    @property
    def is_unbounded(self) -> bool:
        return self.max_count is None

    def __str__(self) -> str:
        if self.max_count is None:
            return f"{self.min_count}+"
        if self.min_count == self.max_count:
            return str(self.min_count)
        return f"{self.min_count}-{self.max_count}"

    def to_dict(self) -> dict:
        return {"min": self.min_count, "max": self.max_count}


def parse_cardinality(raw: Any, attribute: str | None = None) -> Cardinality:
    """Parse a raw range expression into a ``Cardinality``.

    Args:
        raw: Range expression such as ``"5"``, ``"5+"`` or ``"2-5"``; integers
            are accepted as exact counts
        attribute: Attribute the range belongs to, for error reporting

    Returns:
        Cardinality with ``max_count`` set to None when unbounded

    Raises:
        ConfigurationError: If the expression is not recognized or min > max
    """
    if isinstance(raw, bool) or raw is None:
        raise ConfigurationError("Can't recognize given range", attribute=attribute, raw_value=raw)

    expression = str(raw).strip()

    match = _EXACT.match(expression)
    if match:
        count = int(match.group(1))
        return Cardinality(min_count=count, max_count=count)

    match = _AT_LEAST.match(expression)
    if match:
        return Cardinality(min_count=int(match.group(1)), max_count=None)

    match = _RANGE.match(expression)
    if match:
        low, high = int(match.group(1)), int(match.group(2))
        if low > high:
            raise ConfigurationError(
                f"Range minimum {low} exceeds maximum {high}", attribute=attribute, raw_value=raw
            )
        return Cardinality(min_count=low, max_count=high)

    raise ConfigurationError("Can't recognize given range", attribute=attribute, raw_value=raw)
