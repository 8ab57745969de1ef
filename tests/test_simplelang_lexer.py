"""
Simplelang Lexer Tests
======================

Tests for the simplelang tokenizer: token kinds, positions, the
one-character lookahead for '=' / '==', comments, truncation of long
tokens and end-of-input behaviour.
"""

import logging

import pytest

from eightbit_sdk.simplelang.lexer import (
    Lexer,
    Token,
    TokenKind,
    DEFAULT_MAX_TOKEN_LENGTH,
    tokenize,
)
from eightbit_sdk.simplelang.errors import SimpleSyntaxError


def kinds(source: str) -> list[TokenKind]:
    return [t.kind for t in Lexer(source, "test.sl").tokenize()]


def texts(source: str) -> list[str]:
    return [t.text for t in Lexer(source, "test.sl").tokenize()]


# =============================================================================
# Basic Tokens
# =============================================================================

class TestBasicTokens:
    """Token classification for each category."""

    def test_empty_source(self):
        """Empty source should produce only EOF token."""
        tokens = list(Lexer("", "test.sl").tokenize())
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.EOF
        assert tokens[0].text == ""

    def test_whitespace_only(self):
        """Whitespace-only source should produce only EOF token."""
        assert kinds("   \n\t  \r\n  ") == [TokenKind.EOF]

    def test_declaration_statement(self):
        assert kinds("int a;") == [
            TokenKind.INT,
            TokenKind.IDENTIFIER,
            TokenKind.SEMICOLON,
            TokenKind.EOF,
        ]

    def test_assignment_statement(self):
        assert kinds("b = a + 3;") == [
            TokenKind.IDENTIFIER,
            TokenKind.ASSIGN,
            TokenKind.IDENTIFIER,
            TokenKind.PLUS,
            TokenKind.NUMBER,
            TokenKind.SEMICOLON,
            TokenKind.EOF,
        ]

    def test_delimiters(self):
        assert kinds("{}();") == [
            TokenKind.LBRACE,
            TokenKind.RBRACE,
            TokenKind.LPAREN,
            TokenKind.RPAREN,
            TokenKind.SEMICOLON,
            TokenKind.EOF,
        ]

    def test_minus(self):
        assert kinds("a-1")[:3] == [TokenKind.IDENTIFIER, TokenKind.MINUS, TokenKind.NUMBER]

    def test_numbers(self):
        """Numbers keep their digit text."""
        for text in ["0", "7", "42", "65535"]:
            token = Lexer(text).next_token()
            assert token.kind == TokenKind.NUMBER
            assert token.text == text

    def test_number_then_identifier(self):
        """A digit run ends at the first letter."""
        assert texts("12ab") == ["12", "ab", ""]
        assert kinds("12ab")[:2] == [TokenKind.NUMBER, TokenKind.IDENTIFIER]

    def test_identifiers(self):
        for ident in ["a", "count", "x1", "Total", "abc123def"]:
            token = Lexer(ident).next_token()
            assert token.kind == TokenKind.IDENTIFIER
            assert token.text == ident

    def test_unknown_characters(self):
        """Characters outside the language become single UNKNOWN tokens."""
        for char in ["*", "/", "_", "!", "<", "@"]:
            token = Lexer(char).next_token()
            assert token.kind == TokenKind.UNKNOWN
            assert token.text == char

    def test_underscore_is_not_an_identifier_character(self):
        assert texts("a_b") == ["a", "_", "b", ""]


# =============================================================================
# Keywords
# =============================================================================

class TestKeywords:
    """Keywords are recognised only as whole words."""

    def test_keywords(self):
        assert Lexer("int").next_token().kind == TokenKind.INT
        assert Lexer("if").next_token().kind == TokenKind.IF

    def test_keyword_followed_by_delimiter(self):
        assert kinds("int;")[:2] == [TokenKind.INT, TokenKind.SEMICOLON]
        assert kinds("if{")[:2] == [TokenKind.IF, TokenKind.LBRACE]
        assert kinds("if(")[:2] == [TokenKind.IF, TokenKind.LPAREN]

    def test_integer_is_one_identifier(self):
        """'integer' must not split into 'int' + 'eger'."""
        tokens = list(Lexer("integer").tokenize())
        assert len(tokens) == 2
        assert tokens[0].kind == TokenKind.IDENTIFIER
        assert tokens[0].text == "integer"

    def test_keyword_prefixes_and_suffixes(self):
        for word in ["iff", "ifx", "in", "int2", "myint"]:
            token = Lexer(word).next_token()
            assert token.kind == TokenKind.IDENTIFIER, word
            assert token.text == word

    def test_keywords_are_case_sensitive(self):
        assert Lexer("INT").next_token().kind == TokenKind.IDENTIFIER
        assert Lexer("If").next_token().kind == TokenKind.IDENTIFIER


# =============================================================================
# Assign vs Equal
# =============================================================================

class TestEqualsLookahead:
    """'=' needs one character of lookahead."""

    def test_double_equals_is_one_token(self):
        tokens = list(Lexer("a == b").tokenize())
        assert [t.kind for t in tokens] == [
            TokenKind.IDENTIFIER,
            TokenKind.EQUAL,
            TokenKind.IDENTIFIER,
            TokenKind.EOF,
        ]
        assert tokens[1].text == "=="

    def test_single_equals_does_not_consume_next_char(self):
        tokens = list(Lexer("a=5").tokenize())
        assert [t.kind for t in tokens] == [
            TokenKind.IDENTIFIER,
            TokenKind.ASSIGN,
            TokenKind.NUMBER,
            TokenKind.EOF,
        ]
        assert tokens[1].text == "="
        assert tokens[2].text == "5"
        assert tokens[2].column == 3

    def test_separated_equals_are_two_assigns(self):
        assert kinds("= =")[:2] == [TokenKind.ASSIGN, TokenKind.ASSIGN]

    def test_triple_equals(self):
        assert kinds("===")[:2] == [TokenKind.EQUAL, TokenKind.ASSIGN]

    def test_equals_at_end_of_input(self):
        assert kinds("=") == [TokenKind.ASSIGN, TokenKind.EOF]


# =============================================================================
# Positions
# =============================================================================

class TestPositions:
    """Line and column tracking."""

    def test_columns_on_one_line(self):
        tokens = list(Lexer("int a; a = 5;", "prog.sl").tokenize())
        assert [t.column for t in tokens] == [1, 5, 6, 8, 10, 12, 13, 14]
        assert all(t.line == 1 for t in tokens)

    def test_lines(self):
        tokens = list(Lexer("int a;\n  a = 1;\n", "prog.sl").tokenize())
        a_ref = tokens[3]
        assert a_ref.text == "a"
        assert (a_ref.line, a_ref.column) == (2, 3)
        assert tokens[-1].kind == TokenKind.EOF
        assert (tokens[-1].line, tokens[-1].column) == (3, 1)

    def test_token_location(self):
        token = Token(TokenKind.IDENTIFIER, "a", 4, 7, "prog.sl")
        assert str(token.location) == "prog.sl:4:7"

    def test_token_repr(self):
        token = Token(TokenKind.NUMBER, "5", 1, 12)
        assert repr(token) == "Token(NUMBER, '5', 1:12)"

    def test_describe(self):
        assert Token(TokenKind.SEMICOLON, ";").describe() == ";"
        assert Token(TokenKind.EOF, "").describe() == "end of input"


# =============================================================================
# Comments
# =============================================================================

class TestComments:
    """Comments are skipped like whitespace."""

    def test_single_line_comment(self):
        assert texts("// comment\n42") == ["42", ""]

    def test_comment_at_end_of_input(self):
        assert kinds("int a; // trailing") == [
            TokenKind.INT,
            TokenKind.IDENTIFIER,
            TokenKind.SEMICOLON,
            TokenKind.EOF,
        ]

    def test_multi_line_comment(self):
        assert texts("/* comment\n\nstuff */42") == ["42", ""]

    def test_multi_line_comment_keeps_line_count(self):
        tokens = list(Lexer("/* one\ntwo */ a").tokenize())
        assert (tokens[0].line, tokens[0].column) == (2, 8)

    def test_unterminated_comment(self):
        with pytest.raises(SimpleSyntaxError) as exc_info:
            list(Lexer("int a; /* never closed", "prog.sl").tokenize())
        err = exc_info.value
        assert err.location.line == 1
        assert err.location.column == 8
        assert "unterminated" in err.message

    def test_single_slash_is_unknown(self):
        assert kinds("a / b")[1] == TokenKind.UNKNOWN


# =============================================================================
# End of Input and Laziness
# =============================================================================

class TestStream:
    """EOF handling and on-demand scanning."""

    def test_tokenize_ends_with_one_eof(self):
        tokens = list(Lexer("int a;").tokenize())
        assert tokens[-1].kind == TokenKind.EOF
        assert sum(1 for t in tokens if t.kind == TokenKind.EOF) == 1

    def test_next_token_repeats_eof(self):
        lexer = Lexer("a")
        assert lexer.next_token().kind == TokenKind.IDENTIFIER
        for _ in range(3):
            token = lexer.next_token()
            assert token.kind == TokenKind.EOF
            assert token.text == ""

    def test_tokenize_is_lazy(self):
        """Tokens before a lexical error are available first."""
        stream = Lexer("int a; /* oops").tokenize()
        assert next(stream).kind == TokenKind.INT
        assert next(stream).kind == TokenKind.IDENTIFIER
        assert next(stream).kind == TokenKind.SEMICOLON
        with pytest.raises(SimpleSyntaxError):
            next(stream)

    def test_module_tokenize(self):
        tokens = tokenize("a = 1;", "prog.sl")
        assert isinstance(tokens, list)
        assert tokens[0].filename == "prog.sl"
        assert tokens[-1].kind == TokenKind.EOF


# =============================================================================
# Token Length
# =============================================================================

class TestTruncation:
    """Overlong tokens are truncated, not split."""

    def test_default_limit(self):
        assert DEFAULT_MAX_TOKEN_LENGTH == 99

    def test_long_identifier_truncated(self):
        tokens = list(Lexer("a" * 150).tokenize())
        assert len(tokens) == 2
        assert tokens[0].text == "a" * 99
        assert tokens[1].kind == TokenKind.EOF

    def test_long_number_truncated(self):
        token = Lexer("1234567", max_token_length=4).next_token()
        assert token.kind == TokenKind.NUMBER
        assert token.text == "1234"

    def test_rest_of_run_consumed(self):
        tokens = list(Lexer("abcdef;", max_token_length=3).tokenize())
        assert [t.text for t in tokens] == ["abc", ";", ""]
        assert tokens[1].column == 7

    def test_truncation_is_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="eightbit_sdk.simplelang.lexer"):
            Lexer("abcdef", max_token_length=3).next_token()
        assert "truncated" in caplog.text

    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            Lexer("a", max_token_length=0)
