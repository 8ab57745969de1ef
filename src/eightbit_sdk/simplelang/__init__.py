"""
Simplelang Compiler
===================

This module implements the compiler for simplelang, the toy imperative
language of the 8-bit computer project, targeting its two-register
accumulator machine.

Simplelang has integer variable declarations, assignment of a single
two-operand addition or subtraction, and a conditional block. This
implementation provides:

- A lexer producing a lazy token stream
- A recursive descent parser producing an AST
- A code generator emitting symbolic assembly

Pipeline
--------
    Source → Lexer → Parser → AST → Code Generator → Assembly

Usage
-----
>>> from eightbit_sdk.simplelang import compile_simplelang
>>> source = '''
... int a;
... int b;
... a = 10;
... b = a + 4;
... if (b == 14) {
...     a = a + 1;
... }
... '''
>>> for line in compile_simplelang(source):
...     print(line)
LOADI R0, 10
STORE R0, 0
LOAD R0, 0
PUSH R0
LOADI R0, 4
POP R1
ADD R0, R1
STORE R0, 1
LOAD R0, 1
CMP R0, 14
JNE LABEL_0
LOAD R0, 0
PUSH R0
LOADI R0, 1
POP R1
ADD R0, R1
STORE R0, 0
LABEL_0:

Language Subset
---------------
Supported:
- int declarations (one flat scope, addresses in declaration order)
- Assignment of an operand, or operand '+'/'-' operand
- if blocks with an optional '(expr)' or '(expr == operand)' condition
- // and /* */ comments

Not supported:
- Operator precedence, parentheses in arithmetic, chained operators
- else, loops, functions, arrays, types other than int
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Imports
# =============================================================================

from eightbit_sdk.simplelang.compiler import (
    SimpleLangCompiler,
    CompilerOptions,
    CompilerResult,
    compile_simplelang,
    compile_file,
)
from eightbit_sdk.simplelang.errors import (
    SimpleLangError,
    SimpleSyntaxError,
    UnexpectedTokenError,
    MissingTokenError,
    SimpleSemanticError,
    UndefinedVariableError,
    DuplicateSymbolError,
    SimpleCodeGenError,
    UnsupportedOperatorError,
    UnknownNodeError,
)
from eightbit_sdk.simplelang.lexer import Lexer, Token, TokenKind, tokenize
from eightbit_sdk.simplelang.parser import Parser, parse_source
from eightbit_sdk.simplelang.codegen import CodeGenerator, generate
from eightbit_sdk.simplelang.symbols import Symbol, SymbolTable
from eightbit_sdk.simplelang.ast import (
    ASTNode,
    Program,
    VarDecl,
    Assign,
    Expression,
    Operand,
    Condition,
    If,
    Block,
    ASTVisitor,
    ASTPrinter,
)

__all__ = [
    # Version
    "__version__",
    # Main API
    "SimpleLangCompiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_simplelang",
    "compile_file",
    # Errors
    "SimpleLangError",
    "SimpleSyntaxError",
    "UnexpectedTokenError",
    "MissingTokenError",
    "SimpleSemanticError",
    "UndefinedVariableError",
    "DuplicateSymbolError",
    "SimpleCodeGenError",
    "UnsupportedOperatorError",
    "UnknownNodeError",
    # Lexer
    "Lexer",
    "Token",
    "TokenKind",
    "tokenize",
    # Parser
    "Parser",
    "parse_source",
    # Code Generator
    "CodeGenerator",
    "generate",
    "Symbol",
    "SymbolTable",
    # AST Nodes
    "ASTNode",
    "Program",
    "VarDecl",
    "Assign",
    "Expression",
    "Operand",
    "Condition",
    "If",
    "Block",
    "ASTVisitor",
    "ASTPrinter",
]
