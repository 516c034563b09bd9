"""Tests for the tokenizer and the tagged-option grammar."""

import pytest

from bookstore.commands import Rejected, parse_option, parse_options, tokenize


class TestTokenizer:
    """Tests for line tokenizing."""

    def test_splits_on_spaces(self):
        """Runs of spaces separate tokens."""
        assert tokenize("buy  978-0   3") == ["buy", "978-0", "3"]

    def test_quoted_segment_is_one_token(self):
        """Quotes keep inner spaces and stay in the token."""
        assert tokenize('modify -name="Two Words" -price=3') == [
            "modify",
            '-name="Two Words"',
            "-price=3",
        ]

    def test_trims_line_endings(self):
        """Surrounding whitespace and CR/LF are ignored."""
        assert tokenize("  logout \r\n") == ["logout"]

    def test_blank_line(self):
        """A blank line has no tokens."""
        assert tokenize("   ") == []


class TestOptions:
    """Tests for -key=value options."""

    def test_bare_value(self):
        """Bare values come back exactly as typed."""
        option = parse_option("-ISBN=978-0")
        assert option.key == "ISBN"
        assert option.bare() == "978-0"
        assert not option.quoted

    def test_quoted_value(self):
        """Quoted values expose their inner text."""
        option = parse_option('-name="Two Words"')
        assert option.quoted
        assert option.quoted_text() == "Two Words"

    def test_bare_value_refused_where_quotes_required(self):
        """A field that needs quotes rejects a bare value."""
        with pytest.raises(Rejected):
            parse_option("-name=Plain").quoted_text()
        with pytest.raises(Rejected):
            parse_option('-name="').quoted_text()

    def test_empty_quoted_value(self):
        """'\"\"' is quoted with empty inner text; validators reject it later."""
        assert parse_option('-name=""').quoted_text() == ""

    @pytest.mark.parametrize("token", ["ISBN=1", "-ISBN", "-=1", "name"])
    def test_malformed_tokens(self, token):
        """Tokens without a dash, key or '=' are refused."""
        with pytest.raises(Rejected):
            parse_option(token)

    def test_unknown_key(self):
        """Keys outside the allowed set are refused."""
        with pytest.raises(Rejected):
            parse_options(["-color=red"], frozenset({"name"}))

    def test_repeated_key(self):
        """Repeating an option is a syntax error."""
        with pytest.raises(Rejected):
            parse_options(["-price=1", "-price=2"], frozenset({"price"}))

    def test_keeps_order(self):
        """Options come back keyed by name, in input order."""
        options = parse_options(['-name="A"', "-ISBN=2"], frozenset({"name", "ISBN"}))
        assert list(options) == ["name", "ISBN"]
