"""
Simplelang Recursive Descent Parser
===================================

This module implements a recursive descent parser for simplelang. It
pulls tokens from the lexer on demand, holding exactly one token of
lookahead, and builds an Abstract Syntax Tree (AST).

Grammar (EBNF)
--------------
program     ::= statement* EOF
statement   ::= var_decl | assignment | if_stmt
var_decl    ::= 'int' IDENTIFIER ';'
assignment  ::= IDENTIFIER '=' expression ';'
expression  ::= operand (('+' | '-') operand)?
operand     ::= IDENTIFIER | NUMBER
if_stmt     ::= 'if' ('(' condition ')')? '{' statement* '}'
condition   ::= expression ('==' operand)?

Every rule is chosen by the kind of the current token alone, so the
parser never backtracks. There is exactly one level of arithmetic:
'a = b + c + d;' is a syntax error, not a longer expression.

The parenthesised condition is optional. Without it the if statement
tests whatever value the accumulator already holds.

Error Handling
--------------
The first grammar violation raises a SimpleSyntaxError and parsing
stops; there is no error recovery.

Example Usage
-------------
>>> from eightbit_sdk.simplelang.parser import parse_source
>>> ast = parse_source('int a; a = 5;')
>>> [type(s).__name__ for s in ast.statements]
['VarDecl', 'Assign']
"""

from typing import Iterable, Optional

from eightbit_sdk.errors import SourceLocation
from eightbit_sdk.simplelang.lexer import Lexer, Token, TokenKind, split_source_lines
from eightbit_sdk.simplelang.ast import (
    Program,
    VarDecl,
    Assign,
    Expression,
    Operand,
    Condition,
    If,
    Block,
)
from eightbit_sdk.simplelang.errors import (
    UnexpectedTokenError,
    MissingTokenError,
)


class Parser:
    """
    Recursive descent parser for simplelang.

    The parser accepts any iterable of tokens, normally the lazy
    generator returned by Lexer.tokenize(). Tokens are pulled one at a
    time; only the current token is kept.

    Attributes:
        filename: Source filename for error reporting
        source_lines: Original source lines for error context
    """

    def __init__(
        self,
        tokens: Iterable[Token],
        filename: str = "<input>",
        source_lines: Optional[list[str]] = None,
    ):
        self.filename = filename
        self.source_lines = source_lines or []

        self._tokens = iter(tokens)
        self._current: Optional[Token] = None
        self.token_count = 0

    def parse_program(self) -> Program:
        """
        Parse the whole token stream into a Program node.

        Returns:
            Program containing all top-level statements

        Raises:
            SimpleSyntaxError: On the first grammar violation
        """
        self._current = self._next_token()

        statements = []
        while not self._check(TokenKind.EOF):
            statements.append(self._parse_statement())

        return Program(
            location=SourceLocation(self.filename, 1, 1),
            statements=statements,
        )

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _next_token(self) -> Token:
        """Pull the next token, synthesising EOF if the source runs dry."""
        try:
            token = next(self._tokens)
        except StopIteration:
            last = self._current
            return Token(
                TokenKind.EOF,
                "",
                last.line if last else 1,
                last.column if last else 1,
                self.filename,
            )
        self.token_count += 1
        return token

    def _peek(self) -> Token:
        return self._current

    def _advance(self) -> Token:
        """Consume and return the current token; EOF is never consumed."""
        token = self._current
        if token.kind != TokenKind.EOF:
            self._current = self._next_token()
        return token

    def _check(self, *kinds: TokenKind) -> bool:
        return self._current.kind in kinds

    def _match(self, *kinds: TokenKind) -> Optional[Token]:
        """Consume the current token if it is one of `kinds`."""
        if self._check(*kinds):
            return self._advance()
        return None

    def _expect(self, kind: TokenKind, message: str) -> Token:
        """
        Consume a token of the given kind.

        Raises:
            MissingTokenError: If the current token is of another kind
        """
        if self._check(kind):
            return self._advance()

        current = self._peek()
        raise MissingTokenError(
            message,
            current.location,
            self._get_source_line(current.line),
            found=current.describe(),
        )

    def _unexpected(self, expected: str) -> UnexpectedTokenError:
        current = self._peek()
        return UnexpectedTokenError(
            current.describe(),
            expected=expected,
            location=current.location,
            source_line=self._get_source_line(current.line),
        )

    def _get_source_line(self, line: int) -> Optional[str]:
        if 0 < line <= len(self.source_lines):
            return self.source_lines[line - 1]
        return None

    # =========================================================================
    # Statements
    # =========================================================================

    def _parse_statement(self):
        """Parse one statement, chosen by the current token."""
        token = self._peek()

        if token.kind == TokenKind.INT:
            return self._parse_var_decl()
        if token.kind == TokenKind.IDENTIFIER:
            return self._parse_assignment()
        if token.kind == TokenKind.IF:
            return self._parse_if()

        raise self._unexpected("'int', 'if' or a variable name at start of statement")

    def _parse_var_decl(self) -> VarDecl:
        location = self._expect(TokenKind.INT, "'int'").location
        name = self._expect(TokenKind.IDENTIFIER, "variable name after 'int'")
        self._expect(TokenKind.SEMICOLON, "';' after variable declaration")
        return VarDecl(location=location, name=name.text)

    def _parse_assignment(self) -> Assign:
        target = self._expect(TokenKind.IDENTIFIER, "variable name")
        self._expect(TokenKind.ASSIGN, "'=' in assignment")
        value = self._parse_expression()
        self._expect(TokenKind.SEMICOLON, "';' after assignment")
        return Assign(location=target.location, target=target.text, value=value)

    def _parse_if(self) -> If:
        location = self._expect(TokenKind.IF, "'if'").location

        condition = None
        if self._match(TokenKind.LPAREN):
            condition = self._parse_condition()
            self._expect(TokenKind.RPAREN, "')' after if condition")

        body = self._parse_block()
        return If(location=location, condition=condition, body=body)

    def _parse_block(self) -> Block:
        location = self._expect(TokenKind.LBRACE, "'{' after 'if'").location

        statements = []
        while not self._check(TokenKind.RBRACE, TokenKind.EOF):
            statements.append(self._parse_statement())

        self._expect(TokenKind.RBRACE, "'}' at the end of if block")
        return Block(location=location, statements=statements)

    # =========================================================================
    # Expressions
    # =========================================================================

    def _parse_condition(self) -> Condition:
        left = self._parse_expression()
        right = None
        if self._match(TokenKind.EQUAL):
            right = self._parse_operand("identifier or number after '=='")
        return Condition(location=left.location, left=left, right=right)

    def _parse_expression(self) -> Expression:
        left = self._parse_operand("identifier or number")

        operator = self._match(TokenKind.PLUS, TokenKind.MINUS)
        if operator is None:
            return Expression(location=left.location, left=left)

        right = self._parse_operand("identifier or number after operator")
        return Expression(
            location=left.location,
            left=left,
            operator=operator.text,
            right=right,
        )

    def _parse_operand(self, expected: str) -> Operand:
        token = self._match(TokenKind.IDENTIFIER, TokenKind.NUMBER)
        if token is None:
            raise self._unexpected(expected)
        return Operand(location=token.location, text=token.text)


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_source(
    source: str,
    filename: str = "<input>",
    max_token_length: Optional[int] = None,
) -> Program:
    """
    Lex and parse simplelang source into an AST.

    Raises:
        SimpleSyntaxError: If lexing or parsing fails
    """
    if max_token_length is None:
        lexer = Lexer(source, filename)
    else:
        lexer = Lexer(source, filename, max_token_length=max_token_length)
    parser = Parser(lexer.tokenize(), filename, split_source_lines(source))
    return parser.parse_program()
