"""
8-bit SDK - Toolchain for the 8-bit Breadboard Computer
=======================================================

This package provides the software side of the 8-bit computer project:
a compiler that turns programs written in simplelang, the project's toy
imperative language, into symbolic assembly for the machine's two-register
accumulator CPU.

Main Components
---------------
- **simplelang**: Simplelang compiler (slc)
    Lexer, recursive descent parser and code generator

- **cli**: Command-line tools
    The slc driver that compiles a source file to an assembly listing

Quick Start
-----------
    >>> from eightbit_sdk import compile_simplelang
    >>> compile_simplelang('int a; a = 5;')
    ['LOADI R0, 5', 'STORE R0, 0']

Or use the command-line tool:
    $ slc prog.sl -o prog.asm
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from eightbit_sdk.errors import EightBitError, SourceLocation
from eightbit_sdk.simplelang import (
    SimpleLangCompiler,
    CompilerOptions,
    compile_simplelang,
    SimpleLangError,
)

__all__ = [
    "__version__",
    "EightBitError",
    "SourceLocation",
    "SimpleLangCompiler",
    "CompilerOptions",
    "compile_simplelang",
    "SimpleLangError",
]
