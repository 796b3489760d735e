"""Immutable rule sets keyed by programmatic name."""

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from ..errors import ConfigurationError
from .rule import AttributeRule


class RuleSet(Mapping[str, AttributeRule]):
    """Read-only mapping of programmatic name to ``AttributeRule``.

    Iteration follows declaration order. Filtering always returns a new
    ``RuleSet``; the original is never modified.
    """

    __slots__ = ("_rules",)

    def __init__(self, rules: Iterable[AttributeRule] | Mapping[str, AttributeRule] = ()):
        if isinstance(rules, Mapping):
            rules = rules.values()

        built: dict[str, AttributeRule] = {}
        for rule in rules:
            name = rule.programmatic_name
            if name in built:
                raise ConfigurationError(
                    f"Programmatic name '{name}' is produced by both "
                    f"'{built[name].key}' and '{rule.key}'",
                    attribute=rule.key,
                )
            built[name] = rule
        self._rules = MappingProxyType(built)

    def __getitem__(self, name: str) -> AttributeRule:
        return self._rules[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleSet({list(self._rules)!r})"

    def names(self) -> list[str]:
        """Programmatic names in declaration order."""
        return list(self._rules)

    def required_names(self) -> list[str]:
        """Programmatic names of the required attributes."""
        return [name for name, rule in self._rules.items() if rule.required]

    def filter(self, only: Iterable[str] | None = None, exclude: Iterable[str] | None = None) -> "RuleSet":
        """Select a subset of the rules.

        Args:
            only: Names to keep, in the order given; repeats are ignored
            exclude: Names to drop; the remaining rules keep their order

        Returns:
            A new RuleSet

        Raises:
            ConfigurationError: If both ``only`` and ``exclude`` are given, or
                a name is not in the rule set
        """
        if only is not None and exclude is not None:
            raise ConfigurationError("Filter accepts either 'only' or 'except', not both")

        if only is not None:
            return RuleSet(self._require(name) for name in dict.fromkeys(only))

        if exclude is not None:
            excluded = {self._require(name).programmatic_name for name in exclude}
            return RuleSet(rule for name, rule in self._rules.items() if name not in excluded)

        return RuleSet(self._rules.values())

    def _require(self, name: str) -> AttributeRule:
        try:
            return self._rules[name]
        except KeyError:
            raise ConfigurationError(f"'{name}' is not a valid attribute.", attribute=name) from None
