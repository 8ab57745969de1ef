"""
Simplelang Abstract Syntax Tree (AST) Definitions
=================================================

This module defines the AST node types produced by the simplelang parser
and consumed by the code generator.

Node Hierarchy
--------------
ASTNode (base)
├── Program - root node, ordered list of statements
├── Statements
│   ├── VarDecl - 'int name;'
│   ├── Assign - 'name = expression;'
│   ├── If - 'if (condition) { ... }' (condition optional)
│   └── Block - '{ ... }' body of an If
└── Expressions
    ├── Expression - one operand, or operand operator operand
    ├── Operand - identifier or number literal
    └── Condition - expression, optionally '==' operand

Design Notes
------------
- Each node kind is its own dataclass holding exactly the fields it needs,
  so there is no fixed child limit to overflow.
- Every node stores its source location for error reporting. Locations are
  excluded from comparison, so two trees parsed from differently formatted
  sources compare equal when their structure matches.
- Each node is owned by exactly one parent; the tree has no sharing.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from eightbit_sdk.errors import SourceLocation


NO_LOCATION = SourceLocation("<input>", 0, 0)


# =============================================================================
# AST Node Base Class
# =============================================================================

@dataclass
class ASTNode:
    """
    Base class for all AST nodes.

    Attributes:
        location: Source location where this node starts
    """
    location: SourceLocation = field(default=NO_LOCATION, compare=False, repr=False)


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass
class Operand(ASTNode):
    """
    Identifier or number literal used as an expression operand.

    Attributes:
        text: Variable name or decimal digits
    """
    text: str = ""

    @property
    def is_number(self) -> bool:
        """True if this operand is a number literal rather than a variable."""
        return self.text.isdigit()


@dataclass
class Expression(ASTNode):
    """
    Arithmetic expression with at most one binary operator.

    Either a single operand (arity 1), or left operand, operator and
    right operand (arity 3). The operator is kept as text so the code
    generator decides which operators the target supports.

    Attributes:
        left: First (or only) operand
        operator: Operator text such as '+', or None for a single operand
        right: Second operand, or None for a single operand
    """
    left: Operand = None
    operator: Optional[str] = None
    right: Optional[Operand] = None

    def __post_init__(self):
        if self.left is None:
            raise ValueError("expression needs at least one operand")
        if (self.operator is None) != (self.right is None):
            raise ValueError("binary expression needs both an operator and a right operand")

    @property
    def arity(self) -> int:
        """Number of children: 1 for a single operand, 3 for a binary operation."""
        return 1 if self.operator is None else 3

    @property
    def children(self) -> tuple[Union[Operand, str], ...]:
        """Children in source order: (left,) or (left, operator, right)."""
        if self.operator is None:
            return (self.left,)
        return (self.left, self.operator, self.right)


@dataclass
class Condition(ASTNode):
    """
    Condition of an If statement.

    Attributes:
        left: Expression tested (or compared)
        right: Operand compared against with '==', or None to test
               that `left` evaluates to 1
    """
    left: Expression = None
    right: Optional[Operand] = None


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass
class VarDecl(ASTNode):
    """
    Variable declaration: int name;

    Attributes:
        name: Declared variable name
    """
    name: str = ""


@dataclass
class Assign(ASTNode):
    """
    Assignment: target = value;

    Attributes:
        target: Name of the variable written
        value: Expression whose result is stored
    """
    target: str = ""
    value: Expression = None


@dataclass
class Block(ASTNode):
    """Brace-delimited statement list."""
    statements: list["Statement"] = field(default_factory=list)


@dataclass
class If(ASTNode):
    """
    Conditional block without else.

    Attributes:
        condition: Parenthesised condition, or None for the bare
                   'if { ... }' form
        body: Statements executed when the condition holds
    """
    condition: Optional[Condition] = None
    body: Block = field(default_factory=Block)


Statement = Union[VarDecl, Assign, If]


@dataclass
class Program(ASTNode):
    """
    Root node of the AST: the whole translation unit.

    Attributes:
        statements: Top-level statements in source order
    """
    statements: list[Statement] = field(default_factory=list)


# =============================================================================
# AST Visitor Pattern
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Subclasses override visit_* methods for the node types they care about.

    Usage:
        class NameCollector(ASTVisitor):
            def visit_VarDecl(self, node):
                self.names.append(node.name)

        NameCollector().visit(program)
    """

    def visit(self, node: ASTNode) -> Any:
        """Dispatch to visit_<ClassName>, falling back to generic_visit."""
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ASTNode) -> None:
        """Visit all child nodes found in the node's fields."""
        for field_value in node.__dict__.values():
            if isinstance(field_value, ASTNode):
                self.visit(field_value)
            elif isinstance(field_value, list):
                for item in field_value:
                    if isinstance(item, ASTNode):
                        self.visit(item)


# =============================================================================
# AST Pretty Printer
# =============================================================================

class ASTPrinter(ASTVisitor):
    """
    Pretty printer for AST debugging.

    Usage:
        printer = ASTPrinter()
        print(printer.print(ast))

    Output for 'int a; a = a + 1;':
        Program
          VarDecl: a
          Assign: a = (a + 1)
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: ASTNode) -> str:
        """Print the AST and return it as a string."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def visit_Program(self, node: Program):
        self._emit("Program")
        self.indent_level += 1
        for stmt in node.statements:
            self.visit(stmt)
        self.indent_level -= 1

    def visit_VarDecl(self, node: VarDecl):
        self._emit(f"VarDecl: {node.name}")

    def visit_Assign(self, node: Assign):
        self._emit(f"Assign: {node.target} = {self._expr_str(node.value)}")

    def visit_If(self, node: If):
        if node.condition is None:
            self._emit("If")
        else:
            self._emit(f"If ({self._condition_str(node.condition)})")
        self.indent_level += 1
        self.visit(node.body)
        self.indent_level -= 1

    def visit_Block(self, node: Block):
        self._emit("Block")
        self.indent_level += 1
        for stmt in node.statements:
            self.visit(stmt)
        self.indent_level -= 1

    def _condition_str(self, cond: Condition) -> str:
        if cond.right is None:
            return self._expr_str(cond.left)
        return f"{self._expr_str(cond.left)} == {cond.right.text}"

    def _expr_str(self, expr: Expression) -> str:
        if expr.arity == 1:
            return expr.left.text
        return f"({expr.left.text} {expr.operator} {expr.right.text})"
