"""
8-bit SDK Error Hierarchy
=========================

This module defines the root of the exception hierarchy for the 8-bit
computer SDK. All exceptions inherit from EightBitError, allowing callers
to catch all SDK-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
EightBitError (base)
└── SimpleLangError (simplelang compiler, see eightbit_sdk.simplelang.errors)
    ├── SimpleSyntaxError - lexer and parser errors
    ├── SimpleSemanticError - undefined or duplicate variables
    └── SimpleCodeGenError - unsupported operators, unknown nodes

Design Philosophy
-----------------
Each exception captures source location information (filename, line, column)
when applicable. This allows for detailed error messages that help users
quickly locate and fix issues in their source code.

Error messages follow this format:
    filename:line:column: error: description
    source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class EightBitError(Exception):
    """
    Base exception for all 8-bit SDK errors.

    All exceptions in the SDK inherit from this class, allowing callers
    to catch all SDK-related errors with a single except clause:

        try:
            compile_simplelang(source)
        except EightBitError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    This class is used throughout the compiler to track where tokens,
    statements, and errors occur in the source file. The immutable
    (frozen) design ensures locations cannot be accidentally modified.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"
