"""
Simplelang Lexer (Tokenizer)
============================

This module implements the lexer for simplelang, the toy imperative
language of the 8-bit computer. It converts source text into a lazy
stream of tokens for the parser.

Token Categories
----------------
- Keywords: int, if
- Identifiers: a letter followed by letters and digits
- Numbers: runs of decimal digits (no sign, no decimal point)
- Operators: =, ==, +, -
- Delimiters: { } ( ) ;
- Anything else: a single-character UNKNOWN token (the parser rejects it)

Comments
--------
- Single-line: // comment
- Multi-line: /* comment */

Token Length
------------
Token text is limited to ``max_token_length`` characters (99 by default,
the size of the 8-bit toolchain's text buffers). Longer identifiers and
numbers are truncated, but the whole run of characters is consumed.

Example Usage
-------------
>>> from eightbit_sdk.simplelang.lexer import Lexer
>>> lexer = Lexer('int a; a = 5;', "prog.sl")
>>> for token in lexer.tokenize():
...     print(token)
Token(INT, 'int', 1:1)
Token(IDENTIFIER, 'a', 1:5)
Token(SEMICOLON, ';', 1:6)
Token(IDENTIFIER, 'a', 1:8)
Token(ASSIGN, '=', 1:10)
Token(NUMBER, '5', 1:12)
Token(SEMICOLON, ';', 1:13)
Token(EOF, '', 1:14)
"""

import logging
import string
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator

from eightbit_sdk.errors import SourceLocation
from eightbit_sdk.simplelang.errors import SimpleSyntaxError

logger = logging.getLogger(__name__)

# 100-byte token buffers on the target toolchain, less the terminating NUL
DEFAULT_MAX_TOKEN_LENGTH = 99


# =============================================================================
# Token Kind Enumeration
# =============================================================================

class TokenKind(Enum):
    """
    Token kinds for simplelang.

    Keywords are distinguished from identifiers to simplify parsing.
    """

    # === Keywords ===
    INT = auto()            # int
    IF = auto()             # if

    # === Identifiers and Literals ===
    IDENTIFIER = auto()     # Variable names
    NUMBER = auto()         # Decimal integer literals

    # === Operators ===
    ASSIGN = auto()         # =
    PLUS = auto()           # +
    MINUS = auto()          # -
    EQUAL = auto()          # ==

    # === Delimiters ===
    LBRACE = auto()         # {
    RBRACE = auto()         # }
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    SEMICOLON = auto()      # ;

    # === Structural ===
    UNKNOWN = auto()        # Any other single character
    EOF = auto()            # End of input


KEYWORDS: dict[str, TokenKind] = {
    "int": TokenKind.INT,
    "if": TokenKind.IF,
}

SINGLE_CHAR_TOKENS: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ";": TokenKind.SEMICOLON,
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token from simplelang source.

    Attributes:
        kind: The TokenKind classification
        text: The literal token text (empty for EOF)
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    kind: TokenKind
    text: str
    line: int = 1
    column: int = 1
    filename: str = "<input>"

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def describe(self) -> str:
        """Human-readable form for diagnostics ('end of input' for EOF)."""
        if self.kind == TokenKind.EOF:
            return "end of input"
        return self.text


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes simplelang source code.

    The lexer is forward-only: each call to next_token() consumes the
    characters of exactly one token plus any whitespace and comments
    before it. Once the input is exhausted every further call returns
    an EOF token.

    Usage:
        lexer = Lexer(source_text, filename)
        tokens = list(lexer.tokenize())

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
        max_token_length: Longest token text kept before truncation
    """

    IDENT_START = string.ascii_letters
    IDENT_CHARS = string.ascii_letters + string.digits

    def __init__(
        self,
        source: str,
        filename: str = "<input>",
        max_token_length: int = DEFAULT_MAX_TOKEN_LENGTH,
    ):
        if max_token_length < 1:
            raise ValueError("max_token_length must be at least 1")

        self.source = source
        self.filename = filename
        self.max_token_length = max_token_length

        self._pos = 0
        self._line = 1
        self._column = 1
        self._line_start_pos = 0

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens lazily, ending with exactly one EOF token.

        Raises:
            SimpleSyntaxError: If a block comment is not terminated
        """
        while True:
            token = self.next_token()
            yield token
            if token.kind == TokenKind.EOF:
                return

    def next_token(self) -> Token:
        """
        Scan and return the next token.

        Returns an EOF token (empty text) at end of input, and keeps
        returning one on every subsequent call.
        """
        self._skip_whitespace_and_comments()

        if self._at_end():
            return self._make_token(TokenKind.EOF, "", self._line, self._column)

        return self._scan_token()

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Look ahead without consuming; empty string past the end."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume one character, keeping line and column up to date."""
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return char

    def _match(self, expected: str) -> bool:
        """Consume the next character only if it is `expected`."""
        if self._peek() == expected:
            self._advance()
            return True
        return False

    # =========================================================================
    # Token Creation
    # =========================================================================

    def _make_token(
        self,
        kind: TokenKind,
        text: str,
        start_line: int,
        start_column: int,
    ) -> Token:
        return Token(
            kind=kind,
            text=text,
            line=start_line,
            column=start_column,
            filename=self.filename,
        )

    def _current_source_line(self) -> str:
        line_end = self.source.find("\n", self._line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[self._line_start_pos:line_end]

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace_and_comments(self) -> None:
        while not self._at_end():
            char = self._peek()

            if char in " \t\n\r":
                self._advance()
                continue

            if char == "/" and self._peek(1) == "/":
                self._skip_single_line_comment()
                continue

            if char == "/" and self._peek(1) == "*":
                self._skip_multi_line_comment()
                continue

            break

    def _skip_single_line_comment(self) -> None:
        while not self._at_end() and self._peek() != "\n":
            self._advance()

    def _skip_multi_line_comment(self) -> None:
        """
        Skip a /* ... */ comment.

        Raises:
            SimpleSyntaxError: If the comment runs to the end of input
        """
        start = SourceLocation(self.filename, self._line, self._column)
        source_line = self._current_source_line()

        self._advance()  # /
        self._advance()  # *

        while not self._at_end():
            if self._peek() == "*" and self._peek(1) == "/":
                self._advance()
                self._advance()
                return
            self._advance()

        raise SimpleSyntaxError(
            "unterminated multi-line comment",
            start,
            hint="add closing */ to terminate the comment",
            source_line=source_line,
        )

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> Token:
        start_line = self._line
        start_column = self._column

        char = self._peek()

        if char in self.IDENT_START:
            return self._scan_word(start_line, start_column)

        if char in string.digits:
            return self._scan_number(start_line, start_column)

        return self._scan_operator(start_line, start_column)

    def _scan_run(self, allowed: str) -> str:
        """Consume a maximal run of `allowed` characters, truncating the text."""
        chars = []
        consumed = 0
        while self._peek() and self._peek() in allowed:
            char = self._advance()
            consumed += 1
            if len(chars) < self.max_token_length:
                chars.append(char)

        if consumed > self.max_token_length:
            logger.debug(
                "%s:%d: token truncated from %d to %d characters",
                self.filename, self._line, consumed, self.max_token_length,
            )
        return "".join(chars)

    def _scan_word(self, start_line: int, start_column: int) -> Token:
        """Scan an identifier or keyword; 'integer' is one identifier."""
        text = self._scan_run(self.IDENT_CHARS)
        kind = KEYWORDS.get(text, TokenKind.IDENTIFIER)
        return self._make_token(kind, text, start_line, start_column)

    def _scan_number(self, start_line: int, start_column: int) -> Token:
        text = self._scan_run(string.digits)
        return self._make_token(TokenKind.NUMBER, text, start_line, start_column)

    def _scan_operator(self, start_line: int, start_column: int) -> Token:
        char = self._advance()

        # '=' needs one character of lookahead to tell it from '=='
        if char == "=":
            if self._match("="):
                return self._make_token(TokenKind.EQUAL, "==", start_line, start_column)
            return self._make_token(TokenKind.ASSIGN, "=", start_line, start_column)

        kind = SINGLE_CHAR_TOKENS.get(char, TokenKind.UNKNOWN)
        return self._make_token(kind, char, start_line, start_column)


# =============================================================================
# Convenience Functions
# =============================================================================

def tokenize(source: str, filename: str = "<input>") -> list[Token]:
    """Tokenize a whole source string, EOF token included."""
    return list(Lexer(source, filename).tokenize())


def split_source_lines(source: str) -> list[str]:
    """
    Split source into lines the way the lexer counts them.

    Only '\\n' starts a new line; a lone '\\r' is whitespace inside a line.
    A '\\r' ending a CRLF line is dropped from the quoted text.
    """
    return [line[:-1] if line.endswith("\r") else line for line in source.split("\n")]
