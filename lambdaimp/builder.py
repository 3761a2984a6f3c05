"""Helpers for assembling lambdaimp programs in Python.

There is no textual syntax: programs are built from AST nodes. These
functions keep that readable. Plain Python ints, bools and floats are
accepted wherever a value or expression is expected, and `program` joins
statements into one tree the way a semicolon would:

    program(
        assign('n', 3),
        while_(gt(var('n'), int_(0)), [
            assign('n', sub(var('n'), int_(1))),
            print_('n'),
        ]),
    )
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence, Union

from .ast import (
    Node, Literal, BinaryOp, UnaryOp, Var, Lambda,
    Assign, FuncDecl, Call, Seq, Print, IfStmt, WhileStmt, Break, Pass,
)
from .types import BoolVal, DoubleVal, IntVal, from_python, wrap_int64

Body = Union[Node, Sequence[Node]]


def int_(n: int) -> Literal:
    return Literal(IntVal(wrap_int64(n)))


def bool_(b: bool) -> Literal:
    return Literal(BoolVal(b))


def double(x: float) -> Literal:
    return Literal(DoubleVal(x))


def var(name: str) -> Var:
    return Var(name)


def expr(x: Any) -> Node:
    """Turn a plain Python value into a literal; nodes pass through."""
    if isinstance(x, Node):
        return x
    return Literal(from_python(x))


def add(a: Any, b: Any) -> BinaryOp:
    return BinaryOp('+', expr(a), expr(b))


def sub(a: Any, b: Any) -> BinaryOp:
    return BinaryOp('-', expr(a), expr(b))


def mul(a: Any, b: Any) -> BinaryOp:
    return BinaryOp('*', expr(a), expr(b))


def div(a: Any, b: Any) -> BinaryOp:
    return BinaryOp('/', expr(a), expr(b))


def and_(a: Any, b: Any) -> BinaryOp:
    return BinaryOp('and', expr(a), expr(b))


def or_(a: Any, b: Any) -> BinaryOp:
    return BinaryOp('or', expr(a), expr(b))


def not_(a: Any) -> UnaryOp:
    return UnaryOp('not', expr(a))


def eq(a: Any, b: Any) -> BinaryOp:
    return BinaryOp('==', expr(a), expr(b))


def gt(a: Any, b: Any) -> BinaryOp:
    return BinaryOp('>', expr(a), expr(b))


def lt(a: Any, b: Any) -> BinaryOp:
    return BinaryOp('<', expr(a), expr(b))


def lam(params: Iterable[str], body: Any) -> Lambda:
    return Lambda(tuple(params), expr(body))


def assign(name: str, value: Any) -> Assign:
    return Assign(name, expr(value))


def function(name: str, params: Iterable[str], body: Any) -> FuncDecl:
    return FuncDecl(name, tuple(params), expr(body))


def call(func: str, args: Iterable[Any], target: str) -> Call:
    # arguments are values, not expressions: nothing is evaluated at the call site
    return Call(func, [from_python(a) for a in args], target)


def print_(name: str) -> Print:
    return Print(name)


def iif(condition: Any, then_branch: Body, else_branch: Body = ()) -> IfStmt:
    return IfStmt(expr(condition), block(then_branch), block(else_branch))


def while_(condition: Any, body: Body) -> WhileStmt:
    return WhileStmt(expr(condition), block(body))


def brk() -> Break:
    return Break()


def pass_() -> Pass:
    return Pass()


def block(body: Body) -> Node:
    if isinstance(body, Node):
        return body
    return program(*body)


def program(*statements: Node) -> Node:
    """Join statements into a right-nested `Seq` chain.

    `Pass` is the identity: an empty program is `Pass()` and a single
    statement is returned unchanged.
    """
    if not statements:
        return Pass()
    result = statements[-1]
    for stmt in reversed(statements[:-1]):
        result = Seq(stmt, result)
    return result
