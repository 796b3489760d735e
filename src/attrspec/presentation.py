"""Read-only rule views for form-rendering collaborators.

A form renderer needs only an attribute's name, label, placeholder and the
literal options of a choice field. Rendering itself happens elsewhere.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from .models.rule import AttributeRule


@dataclass(frozen=True)
class InputFieldView:
    """What a form renderer may read from one ``AttributeRule``."""
    programmatic_name: str
    description: str
    placeholder: str | None = None
    options: tuple[str, ...] = ()

    @property
    def is_choice(self) -> bool:
        """True when the field should be rendered as a selection of options."""
        return bool(self.options)

    @classmethod
    def from_rule(cls, rule: AttributeRule) -> "InputFieldView":
        options = rule.valid_values.literals if rule.valid_values else ()
        return cls(
            programmatic_name=rule.programmatic_name,
            description=rule.description,
            placeholder=rule.placeholder,
            options=tuple(options),
        )


def field_views(rule_set: Mapping[str, AttributeRule]) -> dict[str, InputFieldView]:
    """Views for every rule in a rule set, keyed by programmatic name."""
    return {name: InputFieldView.from_rule(rule) for name, rule in rule_set.items()}
