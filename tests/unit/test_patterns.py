"""Tests for pattern canonicalization."""

import re

import pytest

from attrspec.errors import ConfigurationError
from attrspec.patterns import CompiledPattern, canonical_source, canonicalize, is_slash_delimited


class TestCanonicalSource:
    """Test anchoring of raw pattern expressions."""

    def test_bare_expression(self):
        assert canonical_source(r"\d{6}") == r"\A(?:\d{6})\Z"

    def test_slash_delimited(self):
        assert canonical_source(r"/\w/") == r"\A(?:\w)\Z"

    def test_caret_and_dollar_are_replaced(self):
        assert canonical_source(r"^\w$") == r"\A(?:\w)\Z"
        assert canonical_source(r"/^\w$/") == r"\A(?:\w)\Z"

    def test_author_anchors_are_replaced(self):
        assert canonical_source(r"\A\w\Z") == r"\A(?:\w)\Z"
        assert canonical_source(r"\A\w\z") == r"\A(?:\w)\Z"

    def test_escaped_dollar_is_kept(self):
        assert canonical_source(r"cost\$") == r"\A(?:cost\$)\Z"

    def test_escaped_backslash_before_dollar(self):
        assert canonical_source(r"path\\$") == r"\A(?:path\\)\Z"

    def test_alternation_is_grouped(self):
        assert canonical_source("a|b") == r"\A(?:a|b)\Z"

    def test_adjacent_groups_are_wrapped(self):
        assert canonical_source("(?:a)|(?:b)") == r"\A(?:(?:a)|(?:b))\Z"

    def test_single_group_is_not_rewrapped(self):
        assert canonical_source("(?:a|b)") == r"\A(?:a|b)\Z"

    def test_parenthesis_inside_class(self):
        assert canonical_source("(?:[)])") == r"\A(?:[)])\Z"

    @pytest.mark.parametrize("regex_in, regex_out", [
        (".*", r"\A(?:.*)\Z"),
        (r"\w", r"\A(?:\w)\Z"),
        (r"\w{10}", r"\A(?:\w{10})\Z"),
        (r"\w{10}[^\d]", r"\A(?:\w{10}[^\d])\Z"),
    ])
    def test_more_advanced_expressions(self, regex_in, regex_out):
        assert canonical_source(regex_in) == regex_out

    @pytest.mark.parametrize("raw", [
        r"\d{6}",
        r"/[a-zA-Z]{3}\d{2}/",
        r"^.*@gmail\.com$",
        "a|b",
        "(a)(b)",
        "",
    ])
    def test_idempotent(self, raw):
        source = canonical_source(raw)
        assert canonical_source(source) == source
        assert canonicalize(source) == canonicalize(raw)


class TestCanonicalize:
    """Test compiled pattern behaviour."""

    def test_returns_compiled_pattern(self):
        pattern = canonicalize(r"\d{6}")
        assert isinstance(pattern, CompiledPattern)
        assert pattern.source == r"\A(?:\d{6})\Z"
        assert str(pattern) == pattern.source

    def test_full_match_only(self):
        pattern = canonicalize(r"\d{6}")
        assert pattern.matches("123456")
        assert not pattern.matches("abc123456")
        assert not pattern.matches("123456abc")
        assert not pattern.matches("1234567")

    def test_multiline_payload_rejected(self):
        for raw in (r"\d+", r"^\d+$", r"/^\d+$/"):
            pattern = canonicalize(raw)
            assert pattern.matches("123")
            assert not pattern.matches("123\n<script>")
            assert not pattern.matches("<script>\n123")
            assert not pattern.matches("123\n")

    def test_alternation_cannot_escape_anchors(self):
        pattern = canonicalize("a|b")
        assert pattern.matches("a")
        assert pattern.matches("b")
        assert not pattern.matches("ab")
        assert not pattern.matches("xa")

    def test_equivalent_inputs_compare_equal(self):
        assert canonicalize(r"/\w/") == canonicalize(r"\w")
        assert canonicalize(r"^\w$") == canonicalize(r"\w")
        assert hash(canonicalize(r"/\w/")) == hash(canonicalize(r"\w"))
        assert canonicalize(r"\w") != canonicalize(r"\d")

    def test_accepts_compiled_pattern_objects(self):
        pattern = canonicalize(re.compile(r"\d*"))
        assert pattern.source == r"\A(?:\d*)\Z"
        assert canonicalize(pattern) is pattern

    def test_timeout_argument(self):
        assert canonicalize("a+").matches("aaa", timeout=1.0)

    @pytest.mark.parametrize("raw", ["(unclosed", "[a-", "*a"])
    def test_invalid_pattern_raises(self, raw):
        with pytest.raises(ConfigurationError) as excinfo:
            canonicalize(raw, attribute="digits")
        assert excinfo.value.attribute == "digits"
        assert excinfo.value.raw_value == raw

    def test_unbalanced_body_cannot_escape_anchors(self):
        with pytest.raises(ConfigurationError, match="Invalid pattern"):
            canonicalize("a)|(b")

    def test_non_string_raises(self):
        with pytest.raises(ConfigurationError):
            canonicalize(42)


class TestIsSlashDelimited:
    """Test detection of /expression/ syntax."""

    def test_detection(self):
        assert is_slash_delimited("/a/")
        assert is_slash_delimited("//")
        assert not is_slash_delimited("/")
        assert not is_slash_delimited("a/")
        assert not is_slash_delimited("snake")
        assert not is_slash_delimited(5)
