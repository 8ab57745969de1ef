"""
Code Generator for Simplelang
=============================

This module walks the simplelang AST once and emits symbolic assembly for
the 8-bit accumulator machine, one instruction or label per output line.

Code Generation Strategy
------------------------
1. Expressions leave their result in the accumulator R0
2. For binary operations the left operand is pushed, the right operand is
   loaded into R0, and the left operand is popped back into R1
3. Variables live in flat memory at the address assigned by the symbol
   table (declaration order, starting at 0)
4. Conditionals compare R0 and skip the block with JNE to a fresh label

Register Usage
--------------
| Register | Usage                                 |
|----------|---------------------------------------|
| R0       | Accumulator, every expression result  |
| R1       | Left operand of a binary operation    |

Instruction Set
---------------
    LOADI Rd, imm     load immediate
    LOAD  Rd, addr    load from memory
    STORE Rd, addr    store to memory
    PUSH  Rd          push onto the single-level operand stack
    POP   Rd          pop from the operand stack
    ADD   Rd, Rs      Rd <- Rd + Rs
    SUB   Rd, Rs      Rd <- Rd - Rs
    CMP   Rd, imm     compare register with immediate
    JNE   label       jump if the last CMP was not equal
    label:            jump target

Example output for 'int a; int b; a = 5; b = a + 3;':
    LOADI R0, 5
    STORE R0, 0
    LOAD R0, 0
    PUSH R0
    LOADI R0, 3
    POP R1
    ADD R0, R1
    STORE R0, 1

Usage
-----
>>> from eightbit_sdk.simplelang.parser import parse_source
>>> from eightbit_sdk.simplelang.codegen import CodeGenerator
>>> gen = CodeGenerator()
>>> gen.generate(parse_source('int x; x = 42;'))
['LOADI R0, 42', 'STORE R0, 0']
"""

import logging
from typing import Optional

from eightbit_sdk.errors import SourceLocation
from eightbit_sdk.simplelang.ast import (
    ASTNode,
    ASTVisitor,
    Program,
    VarDecl,
    Assign,
    Expression,
    Operand,
    Condition,
    If,
    Block,
)
from eightbit_sdk.simplelang.symbols import SymbolTable
from eightbit_sdk.simplelang.errors import (
    UnsupportedOperatorError,
    UnknownNodeError,
)

logger = logging.getLogger(__name__)


ACCUMULATOR = "R0"
SCRATCH = "R1"

# Operator text -> target mnemonic
OPERATORS: dict[str, str] = {
    "+": "ADD",
    "-": "SUB",
}

# Value an unconditioned test expects in the accumulator
TRUE_VALUE = 1

# Node types allowed directly inside a Program or Block
STATEMENT_TYPES = (VarDecl, Assign, If)


class CodeGenerator(ASTVisitor):
    """
    Generates 8-bit assembly from a simplelang AST.

    All mutable state (output, symbol table, label counter) is reset at
    the start of every generate() call, so one generator can be reused
    and separate generators never interfere.

    Attributes:
        symbols: Symbol table of the most recent run
        output: Instructions emitted by the most recent run (partial if
                that run failed)
    """

    def __init__(
        self,
        allow_redeclaration: bool = False,
        source_lines: Optional[list[str]] = None,
    ):
        """
        Initialize the code generator.

        Args:
            allow_redeclaration: Ignore repeated 'int x;' instead of raising
                                 DuplicateSymbolError
            source_lines: Original source lines, quoted in error messages
        """
        self.allow_redeclaration = allow_redeclaration
        self.source_lines = source_lines or []

        self.output: list[str] = []
        self.symbols = SymbolTable(allow_redeclaration)
        self._label_counter = 0

    def generate(self, program: Program) -> list[str]:
        """
        Generate assembly from the AST.

        Args:
            program: The root AST node

        Returns:
            Instructions and labels in emission order

        Raises:
            UndefinedVariableError: Variable used before declaration
            DuplicateSymbolError: Variable declared twice
            UnsupportedOperatorError: Operator other than '+' or '-'
            UnknownNodeError: Node type without a code generation rule
        """
        self.output = []
        self.symbols = SymbolTable(self.allow_redeclaration)
        self._label_counter = 0

        self.visit(program)

        logger.debug(
            "generated %d lines, %d variables, %d labels",
            len(self.output), len(self.symbols), self._label_counter,
        )
        return list(self.output)

    # =========================================================================
    # Assembly Output Methods
    # =========================================================================

    def _emit(self, line: str) -> None:
        self.output.append(line)

    def _emit_instruction(self, mnemonic: str, *operands) -> None:
        """Emit 'MNEMONIC op1, op2'."""
        if operands:
            self._emit(f"{mnemonic} {', '.join(str(op) for op in operands)}")
        else:
            self._emit(mnemonic)

    def _emit_label(self, label: str) -> None:
        self._emit(f"{label}:")

    def _new_label(self) -> str:
        """Allocate the next label; labels are never reused within a run."""
        label = f"LABEL_{self._label_counter}"
        self._label_counter += 1
        logger.debug("allocated label %s", label)
        return label

    def _source_line(self, location: Optional[SourceLocation]) -> Optional[str]:
        if location is not None and 0 < location.line <= len(self.source_lines):
            return self.source_lines[location.line - 1]
        return None

    # =========================================================================
    # Statements
    # =========================================================================

    def generic_visit(self, node: ASTNode) -> None:
        """Reject node types without a code generation rule."""
        raise UnknownNodeError(
            type(node).__name__,
            location=getattr(node, "location", None),
        )

    def visit_Program(self, node: Program) -> None:
        self._visit_statements(node.statements)

    def visit_Block(self, node: Block) -> None:
        self._visit_statements(node.statements)

    def _visit_statements(self, statements: list) -> None:
        for stmt in statements:
            if not isinstance(stmt, STATEMENT_TYPES):
                raise UnknownNodeError(
                    type(stmt).__name__,
                    location=getattr(stmt, "location", None),
                )
            self.visit(stmt)

    def visit_VarDecl(self, node: VarDecl) -> None:
        # Declarations reserve an address but emit no code
        self.symbols.declare(
            node.name,
            location=node.location,
            source_line=self._source_line(node.location),
        )

    def visit_Assign(self, node: Assign) -> None:
        # Resolve the target first so an undefined target emits nothing
        target = self.symbols.lookup(
            node.target,
            location=node.location,
            source_line=self._source_line(node.location),
        )
        self.visit(node.value)
        self._emit_instruction("STORE", ACCUMULATOR, target.address)

    def visit_If(self, node: If) -> None:
        if node.condition is None:
            # Bare 'if { ... }' tests whatever R0 already holds
            self._emit_instruction("CMP", ACCUMULATOR, TRUE_VALUE)
        else:
            self.visit(node.condition)

        end_label = self._new_label()
        self._emit_instruction("JNE", end_label)
        self.visit(node.body)
        self._emit_label(end_label)

    # =========================================================================
    # Expressions
    # =========================================================================

    def visit_Condition(self, node: Condition) -> None:
        """Leave the flags set so that JNE skips when the condition is false."""
        operands = self._operands(node.left)
        if node.right is not None:
            operands.append(node.right)
        self._check_defined(operands)

        self.visit(node.left)

        if node.right is None:
            self._emit_instruction("CMP", ACCUMULATOR, TRUE_VALUE)
        elif node.right.is_number:
            self._emit_instruction("CMP", ACCUMULATOR, node.right.text)
        else:
            # Equal operands leave zero in R0
            self._emit_instruction("PUSH", ACCUMULATOR)
            self.visit(node.right)
            self._emit_instruction("POP", SCRATCH)
            self._emit_instruction("SUB", ACCUMULATOR, SCRATCH)
            self._emit_instruction("CMP", ACCUMULATOR, 0)

    def visit_Expression(self, node: Expression) -> None:
        if node.arity == 1:
            self.visit(node.left)
            return

        # Check the operator before emitting anything for this expression
        mnemonic = OPERATORS.get(node.operator)
        if mnemonic is None:
            raise UnsupportedOperatorError(
                node.operator,
                location=node.location,
                source_line=self._source_line(node.location),
            )

        self._check_defined(self._operands(node))

        self.visit(node.left)
        self._emit_instruction("PUSH", ACCUMULATOR)
        self.visit(node.right)
        self._emit_instruction("POP", SCRATCH)
        self._emit_instruction(mnemonic, ACCUMULATOR, SCRATCH)

    def visit_Operand(self, node: Operand) -> None:
        """Load a number or a variable into R0."""
        if node.is_number:
            self._emit_instruction("LOADI", ACCUMULATOR, node.text)
            return

        symbol = self.symbols.lookup(
            node.text,
            location=node.location,
            source_line=self._source_line(node.location),
        )
        self._emit_instruction("LOAD", ACCUMULATOR, symbol.address)

    def _operands(self, node: Expression) -> list[Operand]:
        return [child for child in node.children if isinstance(child, Operand)]

    def _check_defined(self, operands: list[Operand]) -> None:
        """Resolve every variable operand, so an undefined one emits nothing."""
        for operand in operands:
            if not operand.is_number:
                self.symbols.lookup(
                    operand.text,
                    location=operand.location,
                    source_line=self._source_line(operand.location),
                )


# =============================================================================
# Convenience Functions
# =============================================================================

def generate(program: Program, allow_redeclaration: bool = False) -> list[str]:
    """Generate instructions for an AST with a fresh CodeGenerator."""
    return CodeGenerator(allow_redeclaration=allow_redeclaration).generate(program)
