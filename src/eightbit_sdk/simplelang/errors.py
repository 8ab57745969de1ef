"""
Simplelang Compiler Error Hierarchy
===================================

This module defines the exception hierarchy for the simplelang compiler.
All exceptions inherit from SimpleLangError, which itself inherits from
the base EightBitError for consistent error handling across the SDK.

Every error is fatal for the compilation run that raised it: the pipeline
stops at the first problem and the exception carries everything a caller
needs to report it.

Exception Hierarchy
-------------------
SimpleLangError (base for all simplelang errors)
├── SimpleSyntaxError - lexer and parser syntax errors
│   ├── UnexpectedTokenError - token does not fit the grammar here
│   └── MissingTokenError - a required token is absent
├── SimpleSemanticError - symbol table errors
│   ├── UndefinedVariableError - variable used before 'int' declaration
│   └── DuplicateSymbolError - variable declared twice
└── SimpleCodeGenError - code generation errors
    ├── UnsupportedOperatorError - operator other than '+' or '-'
    └── UnknownNodeError - AST node the generator cannot handle

Error Message Format
--------------------
    filename:line:column: error: description
        source_line_text
        ^
    hint: suggestion for fixing

Example:
    prog.sl:4:1: error: undefined variable 'cnt'
        cnt = 1;
        ^
    hint: did you mean 'count'?
"""

from typing import Optional, List

from eightbit_sdk.errors import EightBitError, SourceLocation


# =============================================================================
# Base Simplelang Exception
# =============================================================================

class SimpleLangError(EightBitError):
    """
    Base exception for all simplelang compiler errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

            prog.sl:3:5: error: expected ';'
                a = 5
                     ^
            hint: statements end with ';'
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)

    @property
    def kind(self) -> str:
        """Short name of the error kind, e.g. 'UndefinedVariableError'."""
        return type(self).__name__


# =============================================================================
# Syntax Errors (Lexer and Parser)
# =============================================================================

class SimpleSyntaxError(SimpleLangError):
    """
    Syntax error in simplelang source code.

    Raised when the lexer or parser encounters input that does not
    match the grammar. Parsing stops at the first syntax error.

    Examples:
        - Missing semicolon
        - Statement starting with a number or operator
        - Chained arithmetic (a = b + c + d;)
        - Unterminated block comment
    """
    pass


class UnexpectedTokenError(SimpleSyntaxError):
    """
    Unexpected token during parsing.

    Raised when the parser encounters a token that cannot start or
    continue the current grammar rule.
    """

    def __init__(
        self,
        found: str,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        self.expected = expected

        hint = None
        if expected:
            hint = f"expected {expected}"

        super().__init__(
            f"unexpected token '{found}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class MissingTokenError(SimpleSyntaxError):
    """
    Required token is missing.

    Raised when a required token (like ';' or '}') is not found
    where expected.
    """

    def __init__(
        self,
        expected: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        found: Optional[str] = None,
    ):
        self.expected = expected
        self.found = found

        hint = f"found '{found}' instead" if found else None

        super().__init__(
            f"expected {expected}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


# =============================================================================
# Semantic Errors (Symbol Table)
# =============================================================================

class SimpleSemanticError(SimpleLangError):
    """
    Semantic error in simplelang source code.

    Raised during code generation when the program is syntactically
    correct but refers to variables inconsistently.
    """
    pass


class UndefinedVariableError(SimpleSemanticError):
    """
    Reference to a variable that was never declared.

    Every variable must be introduced with 'int name;' before it is
    assigned or read. Similarly-named declared variables are offered
    as a hint to catch typos.
    """

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar_names: Optional[List[str]] = None,
    ):
        self.name = name
        self.similar_names = similar_names or []

        hint = None
        if self.similar_names:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_names[:3])
            hint = f"did you mean {suggestions}?"
        else:
            hint = f"declare it first with 'int {name};'"

        super().__init__(
            f"undefined variable '{name}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class DuplicateSymbolError(SimpleSemanticError):
    """
    Variable declared more than once.

    There is a single flat scope per compilation unit, so a second
    'int x;' would give 'x' two addresses.
    """

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{name}' was first declared at {original_location}"

        super().__init__(
            f"redeclaration of '{name}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


# =============================================================================
# Code Generation Errors
# =============================================================================

class SimpleCodeGenError(SimpleLangError):
    """
    Error during code generation.

    Raised when the code generator meets a tree it cannot translate
    into instructions for the target machine.
    """
    pass


class UnsupportedOperatorError(SimpleCodeGenError):
    """
    Binary operator the target cannot evaluate.

    The machine only has ADD and SUB, so only '+' and '-' are accepted.
    """

    def __init__(
        self,
        operator: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.operator = operator
        super().__init__(
            f"unsupported operator '{operator}'",
            location=location,
            hint="only '+' and '-' are supported",
            source_line=source_line,
        )


class UnknownNodeError(SimpleCodeGenError):
    """AST node type not recognised by the code generator."""

    def __init__(
        self,
        node_type: str,
        location: Optional[SourceLocation] = None,
    ):
        self.node_type = node_type
        super().__init__(
            f"unknown node type '{node_type}'",
            location=location,
        )
