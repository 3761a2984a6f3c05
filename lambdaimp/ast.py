"""Abstract Syntax Tree (AST) definitions for lambdaimp.

Programs are not parsed from text: they are assembled directly out of
these nodes (see `lambdaimp.builder`) or loaded from their JSON form (see
`lambdaimp.ast_json`). Both the interpreter and the analyzer walk the same
trees. The node set is closed; every walker handles each kind explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .types import Value

ARITHMETIC_OPS = ('+', '-', '*', '/')
BOOLEAN_OPS = ('and', 'or')
COMPARISON_OPS = ('==', '>', '<')


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


###############################################################################
# Expressions
###############################################################################

@dataclass
class Literal(Node):
    value: Value


@dataclass
class BinaryOp(Node):
    op: str  # one of ARITHMETIC_OPS, BOOLEAN_OPS or COMPARISON_OPS
    left: Node
    right: Node


@dataclass
class UnaryOp(Node):
    op: str  # only 'not'
    operand: Node


@dataclass
class Var(Node):
    name: str


@dataclass
class Lambda(Node):
    params: Tuple[str, ...]
    body: Node


###############################################################################
# Statements
###############################################################################

@dataclass
class Assign(Node):
    name: str
    expr: Node


@dataclass
class FuncDecl(Node):
    name: str
    params: Tuple[str, ...]
    body: Node  # an expression


@dataclass
class Call(Node):
    func: str
    args: List[Value]  # already evaluated by whoever built the node
    target: str


@dataclass
class Seq(Node):
    first: Node
    second: Node


@dataclass
class Print(Node):
    name: str


@dataclass
class IfStmt(Node):
    condition: Node
    then_branch: Node
    else_branch: Node


@dataclass
class WhileStmt(Node):
    condition: Node
    body: Node


@dataclass
class Break(Node):
    pass


@dataclass
class Pass(Node):
    pass
