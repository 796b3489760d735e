"""End-to-end tests: declaration documents through normalization and validation."""

import pytest

from attrspec import ValidationEngine, filter_rules, normalize, validate
from attrspec.presentation import field_views

SAMPLE_LABELS = ["namelike", "digits_only", "three_alpha_two_digits", "gmail email"]


class TestSampleDeclarations:
    """Every sample attribute accepts its example and rejects its invalid value."""

    @pytest.mark.parametrize("label", SAMPLE_LABELS)
    def test_example_is_valid(self, label, sample_declarations, sample_rules):
        rule = next(rule for rule in sample_rules.values() if rule.key == label)
        example = sample_declarations[label]["example"]
        assert validate(sample_rules, {rule.programmatic_name: example}).is_valid

    @pytest.mark.parametrize("label", SAMPLE_LABELS)
    def test_invalid_is_rejected(self, label, sample_declarations, sample_rules):
        rule = next(rule for rule in sample_rules.values() if rule.key == label)
        invalid = sample_declarations[label]["invalid"]
        report = validate(sample_rules, {rule.programmatic_name: invalid})
        assert report[rule.programmatic_name] == ["is invalid"]

    def test_examples_kept_as_extra(self, sample_rules):
        assert sample_rules["gmail_email"].get_extra("example") == "manossef@gmail.com"
        assert sample_rules["digits_only"].get_extra("invalid") == "12g334"

    def test_nothing_given_is_valid(self, sample_rules):
        assert validate(sample_rules, {}).is_valid


class TestChoiceAttribute:
    """Multi-valued attribute limited to a set of choices."""

    def test_single_choice(self, animal_rules):
        assert validate(animal_rules, {"fav_animals": "hippo"}).is_valid
        assert validate(animal_rules, {"fav_animals": "cat"})["fav_animals"] == ["is invalid"]

    def test_choice_list(self, animal_rules):
        assert validate(animal_rules, {"fav_animals": ["snake"]}).is_valid
        report = validate(animal_rules, {"fav_animals": ["snake", "hippo"]})
        assert report["fav_animals"] == ["too many values given"]

    def test_required_by_default(self, animal_rules):
        report = validate(animal_rules, {})
        assert report.full_messages(animal_rules) == ["Favorite animals is required"]

    def test_field_view(self, animal_rules):
        view = field_views(animal_rules)["fav_animals"]
        assert view.description == "Favorite animals"
        assert view.options == ("snake", "hippo", "squirel", "other")
        assert view.is_choice


class TestFormFlow:
    """A sign-up form validated in two steps with filtered rule sets."""

    DECLARATIONS = {
        "Forename": None,
        "Surname": "require=no max_length=40",
        "NHS.net email address": {"validate": r"/.*@nhs\.net/"},
        "Phone": {"require": False, "validate": r"\+?\d{6,15}", "placeholder": "e.g. 07700900123"},
    }

    @pytest.fixture
    def rule_set(self):
        return normalize(self.DECLARATIONS)

    def test_first_step_only_names(self, rule_set):
        step = filter_rules(rule_set, {"only": ["Forename", "Surname"]})
        assert validate(step, {"Forename": "Jo"}).is_valid

    def test_second_step_skips_names(self, rule_set):
        step = filter_rules(rule_set, {"except": ["Forename", "Surname"]})
        report = ValidationEngine().validate(step, {
            "NHS_net_email_address": "jo@example.com",
            "Phone": "e.g. 07700900123",
        })
        assert report.to_dict() == {
            "valid": False,
            "error_count": 1,
            "errors": {"NHS_net_email_address": ["is invalid"]},
        }

    def test_all_fields(self, rule_set):
        values = {
            "Forename": "Jo",
            "Surname": "x" * 41,
            "NHS_net_email_address": "jo@nhs.net\n<script>",
            "Phone": "+4477009",
        }
        report = validate(rule_set, values)
        assert report.full_messages(rule_set) == [
            "Surname is too big",
            "NHS.net email address is invalid",
        ]
