"""Programmatic name generation for attribute labels."""

import string

# Every ASCII punctuation character plus space; other whitespace is handled
# through str.isspace().
SEPARATOR_CHARS = frozenset(" " + string.punctuation)

FALLBACK_NAME = "unnamed"


def programmatic_name(label: str) -> str:
    """Derive a safe identifier from a human-readable attribute label.

    Sanitization strategy:
    1. Replace punctuation and whitespace with underscores
    2. Split on underscores and drop empty segments
    3. Rejoin with single underscores

    The result never has leading, trailing or doubled underscores. Long or
    unusual labels can produce long names, and distinct labels can collide
    ("a.b" and "a b" both give "a_b"); detecting collisions is up to the
    caller.

    Args:
        label: Raw attribute label

    Returns:
        Sanitized identifier, or ``"unnamed"`` when nothing survives

    Examples:
        >>> programmatic_name("NHS.net email address")
        'NHS_net_email_address'
        >>> programmatic_name("  --Favorite animals!  ")
        'Favorite_animals'
    """
    underscored = "".join(
        "_" if char in SEPARATOR_CHARS or char.isspace() else char
        for char in str(label)
    )
    singly_underscored = "_".join(segment for segment in underscored.split("_") if segment)
    return singly_underscored or FALLBACK_NAME
