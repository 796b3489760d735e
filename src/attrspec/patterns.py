"""Pattern canonicalization for declared validation expressions.

Every declared pattern is anchored to the whole candidate string. Anchors
written by the author (``^``, ``$``, ``\\A``, ``\\Z``) are stripped and replaced by
the canonical ``\\A(?:...)\\Z`` wrapper, so a pattern can never be satisfied by a
permitted substring embedded in a larger (for example multi-line) payload.

Patterns are compiled with the ``regex`` package, which accepts a per-match
timeout; the validation engine uses it to bound matching time on
attacker-controlled input.
"""

import logging
from typing import Any

import regex

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

START_ANCHOR = r"\A"
END_ANCHOR = r"\Z"
# Ruby-style end-of-string anchor accepted in author input
_END_ANCHOR_ALIASES = (END_ANCHOR, r"\z")
_GROUP_OPEN = "(?:"


class CompiledPattern:
    """A compiled, fully anchored pattern.

    Two patterns are equal when their canonical sources are equal.
    """

    __slots__ = ("source", "compiled")

    def __init__(self, source: str, compiled: Any):
        self.source = source
        self.compiled = compiled

    def matches(self, text: str, timeout: float | None = None) -> bool:
        """Return True when ``text`` matches the pattern as a whole.

        Raises:
            TimeoutError: If matching takes longer than ``timeout`` seconds
        """
        return self.compiled.match(text, timeout=timeout) is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CompiledPattern):
            return NotImplemented
        return self.source == other.source

    def __hash__(self) -> int:
        return hash(self.source)

    def __repr__(self) -> str:
        return f"CompiledPattern({self.source!r})"

    def __str__(self) -> str:
        return self.source


def is_slash_delimited(value: Any) -> bool:
    """Check whether a raw value uses the ``/expression/`` syntax."""
    return isinstance(value, str) and len(value) >= 2 and value.startswith("/") and value.endswith("/")


def canonical_source(raw: str) -> str:
    """Turn a raw pattern expression into its canonical anchored source.

    Steps, in order:
    1. Strip one leading and one trailing ``/`` from slash-delimited input
    2. Strip a leading ``^`` and an unescaped trailing ``$``
    3. Strip author-written ``\\A`` / ``\\Z`` anchors
    4. Wrap the body in a non-capturing group unless it already is one
    5. Add the canonical start and end anchors

    Canonical input is returned unchanged.

    Examples:
        >>> canonical_source(r"\\d{6}")
        '\\\\A(?:\\\\d{6})\\\\Z'
        >>> canonical_source(r"/^\\w$/") == canonical_source(r"\\w")
        True
    """
    expression = pattern_body(raw)
    if not _is_single_group(expression):
        expression = f"{_GROUP_OPEN}{expression})"

    return f"{START_ANCHOR}{expression}{END_ANCHOR}"


def pattern_body(raw: str) -> str:
    """Strip slash delimiters and author-written anchors from a raw expression."""
    expression = str(raw)

    if is_slash_delimited(expression):
        expression = expression[1:-1]

    if expression.startswith("^"):
        expression = expression[1:]
    if expression.endswith("$") and not _is_escaped(expression, len(expression) - 1):
        expression = expression[:-1]

    if expression.startswith(START_ANCHOR):
        expression = expression[len(START_ANCHOR):]
    for anchor in _END_ANCHOR_ALIASES:
        position = len(expression) - len(anchor)
        if position >= 0 and expression.endswith(anchor) and not _is_escaped(expression, position):
            expression = expression[:position]
            break

    return expression


def canonicalize(raw: Any, attribute: str | None = None) -> CompiledPattern:
    """Compile a raw pattern expression into an anchored ``CompiledPattern``.

    Args:
        raw: Bare or slash-delimited expression, an already compiled pattern
            object, or a ``CompiledPattern``
        attribute: Attribute the pattern belongs to, for error reporting

    Returns:
        CompiledPattern requiring a full-string match

    Raises:
        ConfigurationError: If the expression does not compile
    """
    if isinstance(raw, CompiledPattern):
        return raw

    expression = raw.pattern if hasattr(raw, "pattern") else raw
    if not isinstance(expression, str):
        raise ConfigurationError("Pattern must be a string", attribute=attribute, raw_value=raw)

    source = canonical_source(expression)
    try:
        # an unbalanced body could close the wrapping group
        regex.compile(pattern_body(expression))
        compiled = regex.compile(source)
    except regex.error as e:
        raise ConfigurationError(f"Invalid pattern: {e}", attribute=attribute, raw_value=expression) from e

    logger.debug(f"Compiled pattern {expression!r} as {source!r}")
    return CompiledPattern(source=source, compiled=compiled)


def _is_escaped(expression: str, index: int) -> bool:
    """Check whether the character at ``index`` is preceded by an odd run of backslashes."""
    backslashes = 0
    index -= 1
    while index >= 0 and expression[index] == "\\":
        backslashes += 1
        index -= 1
    return backslashes % 2 == 1


def _is_single_group(expression: str) -> bool:
    """Check whether the expression is one non-capturing group spanning all of it."""
    if not expression.startswith(_GROUP_OPEN):
        return False

    depth = 0
    in_class = False
    i = 0
    while i < len(expression):
        char = expression[i]
        if char == "\\":
            i += 2
            continue
        if in_class:
            if char == "]":
                in_class = False
        elif char == "[":
            in_class = True
            # "]" right after "[" or "[^" is a literal member
            j = i + 1
            if j < len(expression) and expression[j] == "^":
                j += 1
            if j < len(expression) and expression[j] == "]":
                i = j
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return i == len(expression) - 1
        i += 1
    return False
