"""
Simplelang Compiler Main Module
===============================

This module provides the main compiler interface for simplelang. It
orchestrates the complete compilation process:

    Source → Lex → Parse → Generate → Assembly

Usage
-----
Command line:
    $ slc prog.sl -o prog.asm

Programmatic:
    >>> from eightbit_sdk.simplelang import compile_simplelang
    >>> compile_simplelang('int a; a = 5;')
    ['LOADI R0, 5', 'STORE R0, 0']

Compilation Pipeline
--------------------
1. **Lexical Analysis**: Convert source to a lazy token stream
2. **Parsing**: Build the Abstract Syntax Tree (AST), pulling tokens
   one at a time
3. **Code Generation**: Walk the AST and emit instructions

Error Handling
--------------
Compilation stops at the first error. The error is raised to the caller
as a typed SimpleLangError; the compiler itself never exits the process,
so a caller can go on to compile the next unit.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from eightbit_sdk.simplelang.lexer import Lexer, DEFAULT_MAX_TOKEN_LENGTH, split_source_lines
from eightbit_sdk.simplelang.parser import Parser
from eightbit_sdk.simplelang.codegen import CodeGenerator
from eightbit_sdk.simplelang.symbols import SymbolTable
from eightbit_sdk.simplelang.ast import Program
from eightbit_sdk.simplelang.errors import SimpleLangError

logger = logging.getLogger(__name__)


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        allow_redeclaration: Accept a repeated 'int x;' (ignored with a
                             warning) instead of raising DuplicateSymbolError
        max_token_length: Longest token text kept; longer identifiers and
                          numbers are truncated
    """
    allow_redeclaration: bool = False
    max_token_length: int = DEFAULT_MAX_TOKEN_LENGTH


@dataclass
class CompilerResult:
    """
    Result of a successful compilation.

    Attributes:
        filename: Source filename
        success: True if compilation succeeded
        instructions: Generated instructions and labels, one per element
        ast: Abstract syntax tree
        token_count: Number of tokens the parser consumed (EOF included)
        symbols: Symbol table of the run (iterates in address order)
    """
    filename: str = ""
    success: bool = False
    instructions: list[str] = field(default_factory=list)
    ast: Optional[Program] = None
    token_count: int = 0
    symbols: SymbolTable = field(default_factory=SymbolTable)

    @property
    def assembly(self) -> str:
        """Instructions as assembly source text, one per line."""
        if not self.instructions:
            return ""
        return "\n".join(self.instructions) + "\n"


class SimpleLangCompiler:
    """
    Simplelang compiler for the 8-bit computer.

    Each compile_source() call builds its own lexer, parser and code
    generator, so runs never share symbol tables or label counters.

    Example:
        compiler = SimpleLangCompiler()
        result = compiler.compile_file("prog.sl")
        print(result.assembly)

    Attributes:
        options: Compiler configuration options
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()

    def compile_source(self, source: str, filename: str = "<input>") -> CompilerResult:
        """
        Compile simplelang source code to assembly.

        Args:
            source: Simplelang source code string
            filename: Source filename for error messages

        Returns:
            CompilerResult containing the instructions and intermediate data

        Raises:
            SimpleLangError: If compilation fails
        """
        logger.debug("compiling %s (%d characters)", filename, len(source))
        source_lines = split_source_lines(source)
        result = CompilerResult(filename=filename)

        try:
            # Stages 1 and 2: the parser pulls tokens from the lexer lazily
            parser = self._make_parser(source, filename, source_lines)
            result.ast = parser.parse_program()
            result.token_count = parser.token_count

            # Stage 3: code generation
            generator = CodeGenerator(
                allow_redeclaration=self.options.allow_redeclaration,
                source_lines=source_lines,
            )
            result.instructions = generator.generate(result.ast)
            result.symbols = generator.symbols
            result.success = True

        except SimpleLangError as e:
            logger.debug("compilation of %s failed: %s", filename, e.kind)
            raise

        logger.debug(
            "compiled %s: %d tokens, %d instructions",
            filename, result.token_count, len(result.instructions),
        )
        return result

    def compile_file(self, filepath: str) -> CompilerResult:
        """
        Compile a simplelang source file.

        Raises:
            SimpleLangError: If compilation fails
            FileNotFoundError: If source file not found
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.compile_source(source, str(filepath))

    def tokenize(self, source: str, filename: str = "<input>") -> list:
        """Return the full token stream (EOF included) without parsing."""
        lexer = Lexer(source, filename, max_token_length=self.options.max_token_length)
        return list(lexer.tokenize())

    def _make_parser(self, source: str, filename: str, source_lines: list[str]) -> Parser:
        lexer = Lexer(source, filename, max_token_length=self.options.max_token_length)
        return Parser(lexer.tokenize(), filename, source_lines)


# =============================================================================
# Convenience Functions
# =============================================================================

def compile_simplelang(
    source: str,
    filename: str = "<input>",
    allow_redeclaration: bool = False,
) -> list[str]:
    """
    Compile simplelang source code to a list of instructions.

    This is the primary high-level interface.

    Raises:
        SimpleLangError: If compilation fails

    Example:
        >>> compile_simplelang('int a; int b; a = 5; b = a + 3;')
        ['LOADI R0, 5', 'STORE R0, 0', 'LOAD R0, 0', 'PUSH R0', 'LOADI R0, 3', 'POP R1', 'ADD R0, R1', 'STORE R0, 1']
    """
    options = CompilerOptions(allow_redeclaration=allow_redeclaration)
    compiler = SimpleLangCompiler(options)
    return compiler.compile_source(source, filename).instructions


def compile_file(
    filepath: str,
    output_path: Optional[str] = None,
    allow_redeclaration: bool = False,
) -> str:
    """
    Compile a simplelang source file to assembly text.

    Args:
        filepath: Path to the source file
        output_path: Optional path to write the assembly to

    Returns:
        Generated assembly text

    Raises:
        SimpleLangError: If compilation fails
        FileNotFoundError: If source file not found
    """
    options = CompilerOptions(allow_redeclaration=allow_redeclaration)
    compiler = SimpleLangCompiler(options)
    result = compiler.compile_file(filepath)

    if output_path:
        Path(output_path).write_text(result.assembly, encoding="utf-8")

    return result.assembly
