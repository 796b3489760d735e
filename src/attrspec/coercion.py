"""Coercion of raw declared values into typed rule fields.

Declarations arrive either as nested mappings (values already typed by the
document parser) or in compact ``key=value`` syntax where every value is a
string. Both go through the same table: each recognized key names the
``AttributeRule`` field it fills and the function that coerces its raw value.
Adding a recognized key is a table entry.
"""

from collections.abc import Callable, Mapping
from typing import Any

from .errors import ConfigurationError
from .models.rule import ValidValues
from .patterns import canonicalize, is_slash_delimited

TRUE_STRINGS = frozenset({"true", "yes", "on", "1"})
FALSE_STRINGS = frozenset({"false", "no", "off", "0"})
UNBOUNDED_STRINGS = frozenset({"inf", "infinity", "unbounded", "*", ""})


def coerce_bool(value: Any, attribute: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_STRINGS:
            return True
        if lowered in FALSE_STRINGS:
            return False
    raise ConfigurationError("Expected a boolean", attribute=attribute, raw_value=value)


def coerce_count(value: Any, attribute: str) -> int:
    """Coerce a non-negative integer."""
    if isinstance(value, bool):
        raise ConfigurationError("Expected a non-negative integer", attribute=attribute, raw_value=value)
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if isinstance(value, int) and value >= 0:
        return value
    raise ConfigurationError("Expected a non-negative integer", attribute=attribute, raw_value=value)


def coerce_limit(value: Any, attribute: str) -> int | None:
    """Coerce an upper bound; None means unbounded."""
    if value is None:
        return None
    if isinstance(value, float) and value == float("inf"):
        return None
    if isinstance(value, str) and value.strip().lower() in UNBOUNDED_STRINGS:
        return None
    return coerce_count(value, attribute)


def coerce_pattern(value: Any, attribute: str):
    if value is None:
        return None
    return canonicalize(value, attribute=attribute)


def split_value_list(value: str) -> list[str]:
    """Split a comma-separated value list, keeping commas inside ``/.../`` entries."""
    entries: list[str] = []
    pending = None
    for part in value.split(","):
        if pending is not None:
            pending = f"{pending},{part}"
            if pending.rstrip().endswith("/"):
                entries.append(pending)
                pending = None
        elif part.strip().startswith("/") and not is_slash_delimited(part.strip()):
            pending = part
        else:
            entries.append(part)
    if pending is not None:
        entries.append(pending)
    return [entry.strip() for entry in entries if entry.strip()]


def coerce_valid_values(value: Any, attribute: str) -> ValidValues | None:
    """Split permitted values into literal and pattern buckets.

    Slash-delimited entries (``/expr/``) and compiled pattern objects become
    patterns; everything else is kept as a literal in its string form.
    """
    if value is None:
        return None
    if isinstance(value, Mapping):
        raise ConfigurationError("Expected a list of values", attribute=attribute, raw_value=value)

    if isinstance(value, str):
        entries = split_value_list(value)
    elif isinstance(value, (list, tuple, set, frozenset)):
        entries = list(value)
    else:
        entries = [value]

    literals: list[str] = []
    patterns = []
    for entry in entries:
        if is_slash_delimited(entry) or (not isinstance(entry, str) and hasattr(entry, "pattern")):
            pattern = canonicalize(entry, attribute=attribute)
            if pattern not in patterns:
                patterns.append(pattern)
        else:
            literal = str(entry)
            if literal not in literals:
                literals.append(literal)

    return ValidValues(literals=tuple(literals), patterns=tuple(patterns))


def coerce_range_expression(value: Any, attribute: str) -> str | None:
    """Keep a cardinality range as a string; it is parsed when needed."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ConfigurationError("Can't recognize given range", attribute=attribute, raw_value=value)
    return str(value).strip()


def coerce_optional_str(value: Any, attribute: str) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


# declared key -> (AttributeRule field, coercion)
COERCIONS: dict[str, tuple[str, Callable[[Any, str], Any]]] = {
    "require": ("required", coerce_bool),
    "programmatic_name": ("programmatic_name", coerce_optional_str),
    "description": ("description", coerce_optional_str),
    "placeholder": ("placeholder", coerce_optional_str),
    "validate": ("pattern", coerce_pattern),
    "valid_pattern": ("pattern", coerce_pattern),
    "min_length": ("min_length", coerce_count),
    "max_length": ("max_length", coerce_limit),
    "valid_values": ("valid_values", coerce_valid_values),
    "valid_num_values": ("valid_num_values", coerce_range_expression),
    "min_num_values": ("min_num_values", coerce_count),
    "max_num_values": ("max_num_values", coerce_limit),
}

RECOGNIZED_KEYS = frozenset(COERCIONS)
