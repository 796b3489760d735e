"""Error types raised by attrspec.

Value-level validation failures are never raised; they are collected into a
``ValidationReport``. Only malformed declarations raise.
"""

from typing import Any


class ConfigurationError(ValueError):
    """Raised when an attribute declaration is malformed.

    Covers unparseable patterns and cardinality ranges, inverted bounds,
    programmatic-name collisions and filter requests naming unknown attributes.
    """

    def __init__(self, message: str, attribute: str | None = None, raw_value: Any = None):
        self.message = message
        self.attribute = attribute
        self.raw_value = raw_value
        super().__init__(self._format())

    def _format(self) -> str:
        location = ""
        if self.attribute is not None:
            location += f" [attribute: {self.attribute!r}]"
        if self.raw_value is not None:
            location += f" [value: {self.raw_value!r}]"
        return f"{self.message}{location}"
