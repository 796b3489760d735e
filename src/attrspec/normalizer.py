"""Metadata normalization: raw attribute declarations to canonical rules.

A declaration document maps attribute labels to raw declarations:

    Forename:
    Surname: require=no max_length=40
    NHS.net email address:
      programmatic_name: nhsmail
      validate: /.*@nhs\\.net/

    ..normalizes to a RuleSet keyed by programmatic name:

    {"Forename": <AttributeRule Forename>,
     "Surname": <AttributeRule Surname>,
     "nhsmail": <AttributeRule nhsmail>}
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .cardinality import parse_cardinality
from .coercion import COERCIONS
from .config import AttrspecConfig, create_default_config
from .diagnostics import check_declaration
from .errors import ConfigurationError
from .models.rule import AttributeRule
from .models.ruleset import RuleSet
from .naming import programmatic_name

logger = logging.getLogger(__name__)

# Applied to every declaration for keys it doesn't set. A None validate means
# any value matches; None upper bounds are unbounded.
DEFAULT_DECLARATION: dict[str, Any] = {
    "require": True,
    "validate": None,
    "min_length": 0,
    "max_length": None,
    "min_num_values": 0,
    "max_num_values": None,
}

_FILTER_KEYS = ("only", "except")


def expand_declaration(raw: Any, attribute: str) -> dict[str, Any]:
    """Expand one raw declaration into a flat key/value mapping.

    Compact syntax is split on whitespace and each token on its first ``=``;
    every resulting value is a string. A token without ``=`` is a flag set to
    ``"true"``. An empty declaration (``Forename:`` in YAML) expands to an
    empty mapping.

    Raises:
        ConfigurationError: If the declaration is neither a string nor a mapping
    """
    if raw is None:
        return {}

    if isinstance(raw, str):
        declaration = {}
        for assignment in raw.split():
            key, sep, value = assignment.partition("=")
            declaration[key] = value if sep else "true"
        return declaration

    if isinstance(raw, Mapping):
        return {str(key): value for key, value in raw.items()}

    raise ConfigurationError(
        "Declaration must be a mapping or a compact 'key=value' string",
        attribute=attribute,
        raw_value=raw,
    )


class Normalizer:
    """Builds canonical rule sets from raw declaration mappings."""

    def __init__(self, config: AttrspecConfig | None = None):
        self.config = config or create_default_config()

    def normalize(self, raw_decls: Mapping[str, Any], defaults: Mapping[str, Any] | None = None) -> RuleSet:
        """Normalize a raw declaration document.

        Args:
            raw_decls: Mapping of attribute label to raw declaration
            defaults: Optional defaults merged over the built-in ones

        Returns:
            RuleSet keyed by programmatic name, in declaration order

        Raises:
            ConfigurationError: If any declaration is malformed; no partial
                rule set is returned
        """
        if not isinstance(raw_decls, Mapping):
            raise ConfigurationError(
                "Declarations must be a mapping of attribute label to declaration",
                raw_value=type(raw_decls).__name__,
            )

        merged_defaults = {**DEFAULT_DECLARATION, **(defaults or {})}
        rules = [self.build_rule(str(label), raw, merged_defaults) for label, raw in raw_decls.items()]
        rule_set = RuleSet(rules)

        logger.info(f"Normalized {len(rule_set)} attribute declarations")
        return rule_set

    def build_rule(self, label: str, raw: Any, defaults: Mapping[str, Any] | None = None) -> AttributeRule:
        """Normalize a single declaration into an ``AttributeRule``."""
        declaration = expand_declaration(raw, label)

        if self.config.normalization.warn_on_unknown_keys:
            for warning in check_declaration(label, declaration):
                logger.warning(str(warning))

        if defaults is None:
            defaults = DEFAULT_DECLARATION
        values = {key: value for key, value in defaults.items() if key not in declaration}
        values.update(declaration)

        fields: dict[str, Any] = {}
        extra: dict[str, Any] = {}
        for key, value in values.items():
            entry = COERCIONS.get(key)
            if entry is None:
                extra[key] = value
                continue
            field_name, coerce = entry
            fields[field_name] = coerce(value, label)

        if not fields.get("programmatic_name"):
            fields["programmatic_name"] = programmatic_name(label)
        if fields.get("description") is None:
            fields["description"] = label

        self._check_bounds(label, fields)

        if self.config.normalization.eager_cardinality and fields.get("valid_num_values") is not None:
            parse_cardinality(fields["valid_num_values"], attribute=label)

        rule = AttributeRule(key=label, extra=extra, **fields)
        logger.debug(f"Normalized attribute '{label}' as '{rule.programmatic_name}'")
        return rule

    def _check_bounds(self, label: str, fields: Mapping[str, Any]) -> None:
        for low_field, high_field in (("min_length", "max_length"), ("min_num_values", "max_num_values")):
            low = fields.get(low_field, 0)
            high = fields.get(high_field)
            if high is not None and low > high:
                raise ConfigurationError(
                    f"{low_field} {low} exceeds {high_field} {high}",
                    attribute=label,
                    raw_value=f"{low}-{high}",
                )


def normalize(
    raw_decls: Mapping[str, Any],
    defaults: Mapping[str, Any] | None = None,
    config: AttrspecConfig | None = None,
) -> RuleSet:
    """Normalize a raw declaration document into a ``RuleSet``.

    See ``Normalizer.normalize``.
    """
    return Normalizer(config).normalize(raw_decls, defaults)


def filter_rules(
    rule_set: RuleSet,
    request: Mapping[str, Iterable[str]] | None = None,
    *,
    only: Iterable[str] | None = None,
    exclude: Iterable[str] | None = None,
) -> RuleSet:
    """Produce a new rule set holding a subset of ``rule_set``.

    The subset is given either as a request mapping (``{"only": [...]}`` or
    ``{"except": [...]}``) or through the ``only`` / ``exclude`` keywords.

    Raises:
        ConfigurationError: If the request is malformed, combines ``only``
            and ``except``, or names an attribute missing from the rule set
    """
    if request:
        unknown = [key for key in request if key not in _FILTER_KEYS]
        if unknown:
            raise ConfigurationError(f"Unknown filter keys: {', '.join(map(str, unknown))}")
        if "only" in request:
            if only is not None:
                raise ConfigurationError("'only' given twice")
            only = request["only"]
        if "except" in request:
            if exclude is not None:
                raise ConfigurationError("'except' given twice")
            exclude = request["except"]

    if isinstance(only, str):
        only = [only]
    if isinstance(exclude, str):
        exclude = [exclude]

    return rule_set.filter(only=only, exclude=exclude)
