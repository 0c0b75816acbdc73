"""Tests for helpman.replacer - single-pass compound regex replacement."""

import re

import pytest

from helpman.errors import HelpmanError, ReplacerError
from helpman.replacer import PatternReplacer


class TestReplace:
    """Behaviour of replace() on well-formed rule lists."""

    @pytest.mark.parametrize("repls, text, expected", [
        (["hello", "world", "test", "bar"],
         "hello basic test", "world basic bar"),
        (["multiple", "single", r"\s+", " ", r"s\b", ""],
         "multiple       spaces", "single space"),
        ([r"^\.", "*"],
         ". Leading dot.", "* Leading dot."),
        ([r"\B(-\w+)\b", "*${1}*", "help", "fun"],
         "use option -help for help", "use option *-help* for fun"),
        (["help", "fun", r"\B(-\w+)\b", "*${1}*"],
         "use option -help for help", "use option *-help* for fun"),
        (["hello", "world", "hell", "bar"],
         "hello hell test", "world bar test"),
    ], ids=["basic", "simple regex", "anchor", "submatch", "submatch second",
            "overlapping first wins"])
    def test_examples(self, repls, text, expected):
        assert PatternReplacer(*repls).replace(text) == expected

    def test_empty_input(self):
        assert PatternReplacer("a", "b").replace("") == ""

    def test_no_match_is_identity(self):
        r = PatternReplacer(r"\d+", "N", "xyz", "")
        assert r.replace("nothing to see here") == "nothing to see here"

    def test_no_rules_is_identity(self):
        r = PatternReplacer()
        assert r.compound is None
        assert r.replace("left alone") == "left alone"

    def test_single_literal_rule_matches_re_sub(self):
        """One rule with a literal template behaves like re.sub."""
        text = "a1b22c333d"
        assert PatternReplacer(r"\d+", "#").replace(text) == re.sub(r"\d+", "#", text)

    def test_whole_string_capture_is_noop(self):
        assert PatternReplacer(r"^(.+)$", "${1}").replace("keep me") == "keep me"

    def test_anchor_binds_to_input_start(self):
        """^ matches only at the very start, not after each replacement."""
        r = PatternReplacer(r"^a", "X")
        assert r.replace("aaa") == "Xaa"

    def test_replacement_is_not_rescanned(self):
        r = PatternReplacer("a", "b", "b", "c")
        assert r.replace("ab") == "bc"

    def test_whole_match_of_later_rule(self):
        r = PatternReplacer("z", "Z", r"(x)y", "[${0}]")
        assert r.replace("xy z") == "[xy] Z"

    def test_later_rule_groups_use_own_numbering(self):
        """${1} of the second rule is its own first group."""
        r = PatternReplacer(r"(x)(y)", "[${2}${1}]", r"(\d)", "<${1}>")
        assert r.replace("xy 7") == "[yx] <7>"


class TestTemplate:
    """The $-template syntax."""

    def test_bare_number(self):
        assert PatternReplacer(r"(\w+)@", "$1 at ").replace("me@") == "me at "

    def test_named_group(self):
        r = PatternReplacer(r"(?P<key>\w+)=(?P<val>\w+)", "${val}:${key}")
        assert r.replace("a=b") == "b:a"

    def test_dollar_escape(self):
        assert PatternReplacer("USD", "$$").replace("5 USD") == "5 $"

    def test_missing_group_expands_to_nothing(self):
        assert PatternReplacer("x", "<${3}>").replace("x") == "<>"

    def test_unknown_name_expands_to_nothing(self):
        assert PatternReplacer("x", "<${nope}>").replace("x") == "<>"

    def test_non_participating_group_expands_to_nothing(self):
        r = PatternReplacer(r"a(b)?c", "[${1}]")
        assert r.replace("ac abc") == "[] [b]"

    def test_backslashes_are_literal(self):
        assert PatternReplacer("-", r"\-").replace("a-b") == r"a\-b"


class TestConstruction:
    """Construction errors."""

    def test_odd_argument_count(self):
        with pytest.raises(ReplacerError, match="odd argument count"):
            PatternReplacer("a", "b", "c")

    @pytest.mark.parametrize("pattern", ["a*", "^", "$", "x?", "(x)?"])
    def test_empty_match_rejected(self, pattern):
        with pytest.raises(ReplacerError, match="empty string"):
            PatternReplacer(pattern, "z")

    def test_invalid_pattern(self):
        with pytest.raises(ReplacerError, match="invalid pattern"):
            PatternReplacer("(", "x")

    def test_numbered_backreference_rejected(self):
        with pytest.raises(ReplacerError, match="backreferences"):
            PatternReplacer(r"(a)\1", "x")

    def test_numbered_conditional_rejected(self):
        with pytest.raises(ReplacerError, match="conditionals"):
            PatternReplacer("z", "Z", r"(<)?a(?(1)>)", "[${0}]")

    def test_named_conditional_allowed(self):
        """(?(name)...) keeps pointing at the right group once combined."""
        r = PatternReplacer("z", "Z", r"(?P<open><)?a(?(open)>)", "[${0}]")
        assert r.replace("<a> a z") == "[<a>] [a] Z"

    def test_escaped_backslash_digit_allowed(self):
        r = PatternReplacer(r"\\1", "one")
        assert r.replace(r"x\1") == "xone"

    def test_global_inline_flag_rejected(self):
        with pytest.raises(ReplacerError, match="global inline flags"):
            PatternReplacer("a", "1", r"(?i)b", "2")

    def test_scoped_inline_flag_allowed(self):
        assert PatternReplacer(r"(?i:usage)", "U").replace("USAGE usage") == "U U"

    def test_duplicate_group_names_rejected(self):
        with pytest.raises(ReplacerError, match="cannot be combined"):
            PatternReplacer(r"(?P<n>a)", "x", r"(?P<n>b)", "y")

    def test_error_hierarchy(self):
        """ReplacerError is both a HelpmanError and a ValueError."""
        assert issubclass(ReplacerError, HelpmanError)
        assert issubclass(ReplacerError, ValueError)


class TestIntrospection:
    """rules, compound and owner()."""

    def test_rules_kept_in_order(self):
        r = PatternReplacer("a", "1", "b", "2")
        assert [rule.pattern for rule in r.rules] == ["a", "b"]
        assert [rule.replacement for rule in r.rules] == ["1", "2"]

    def test_compound_pattern(self):
        r = PatternReplacer("a", "1", "(b)c", "2")
        assert r.compound.pattern == "(a)|((b)c)"

    def test_owner(self):
        r = PatternReplacer(r"(x)(y)", "", "z", "")
        match = r.compound.search("--z")
        assert r.owner(match) == 1

    def test_repr(self):
        assert repr(PatternReplacer("a", "b")) == "PatternReplacer('a'->'b')"

    def test_shared_instance_is_reusable(self):
        r = PatternReplacer("a", "b")
        assert r.replace("aa") == "bb"
        assert r.replace("ca") == "cb"
