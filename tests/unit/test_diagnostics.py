"""Tests for declaration diagnostics."""

from attrspec.diagnostics import DeclarationWarning, check_declaration, check_declarations, suggest_key


class TestSuggestKey:
    """Test misspelling suggestions."""

    def test_misspellings(self):
        assert suggest_key("required") == "require"
        assert suggest_key("validates") == "validate"
        assert suggest_key("valid_value") == "valid_values"

    def test_recognized_key(self):
        assert suggest_key("require") is None

    def test_unrelated_key(self):
        assert suggest_key("example") is None


class TestCheckDeclarations:
    """Test checking whole declaration documents."""

    def test_mapping_declaration(self):
        warnings = check_declaration("Forename", {"required": True, "example": "Jo"})
        assert warnings == [DeclarationWarning(attribute="Forename", key="required", suggestion="require")]

    def test_compact_declarations_expanded(self):
        warnings = check_declarations({"Surname": "requir=no max_lenght=40", "Forename": None})
        assert [(w.attribute, w.key, w.suggestion) for w in warnings] == [
            ("Surname", "requir", "require"),
            ("Surname", "max_lenght", "max_length"),
        ]

    def test_malformed_declarations_skipped(self):
        assert check_declarations({"a": ["require"]}) == []

    def test_warning_output(self):
        warning = DeclarationWarning(attribute="Forename", key="required", suggestion="require")
        assert str(warning) == "[WARN] Forename: Unrecognized key 'required', did you mean 'require'?"
        assert warning.to_dict()["suggestion"] == "require"
