"""Expression evaluator for lambdaimp.

`evaluate` reduces an expression to a value against a read-only
environment. It has no side effects: it never binds, never prints and never
reads input. Binary operators evaluate the left operand, then the right
one, and only then check operand kinds, so `and`/`or` never short-circuit.
"""

from __future__ import annotations

import operator
from typing import Callable

from .ast import (
    Node, Literal, BinaryOp, UnaryOp, Var, Lambda,
    ARITHMETIC_OPS, BOOLEAN_OPS, COMPARISON_OPS,
)
from .environment import Environment
from .errors import LambdaError, ErrorVal
from .types import IntVal, BoolVal, Closure, Value, wrap_int64

ARITHMETIC_ERROR = 'type error in arithmetic expression'
BOOLEAN_ERROR = 'type error in boolean expression'


def int_div(a: int, b: int) -> int:
    # floor division, rounding toward negative infinity
    if b == 0:
        raise LambdaError(ErrorVal('DivisionByZero', 'division by zero'))
    return a // b


INT_OPS = {
    '+': operator.add,
    '-': operator.sub,
    '*': operator.mul,
    '/': int_div,
}

BOOL_OPS = {
    'and': lambda a, b: a and b,
    'or': lambda a, b: a or b,
}

COMPARE_OPS = {
    '==': operator.eq,
    '>': operator.gt,
    '<': operator.lt,
}


def evaluate(node: Node, env: Environment) -> Value:
    """Evaluate an expression node and return its value.

    Raises LambdaError on operand kind mismatches, unbound variables and
    division by zero.
    """
    if isinstance(node, Literal):
        return node.value
    if isinstance(node, Var):
        return env.get(node.name)
    if isinstance(node, Lambda):
        return Closure(tuple(node.params), node.body)
    if isinstance(node, BinaryOp):
        if node.op in ARITHMETIC_OPS:
            return eval_int(INT_OPS[node.op], node.left, node.right, env)
        if node.op in BOOLEAN_OPS:
            return eval_bool(BOOL_OPS[node.op], node.left, node.right, env)
        if node.op in COMPARISON_OPS:
            return eval_compare(COMPARE_OPS[node.op], node.left, node.right, env)
        raise NotImplementedError(f"evaluate: unknown operator {node.op!r}")
    if isinstance(node, UnaryOp):
        if node.op == 'not':
            # negation is the boolean operator that ignores a literal true right operand
            return eval_bool(lambda a, _: not a, node.operand, Literal(BoolVal(True)), env)
        raise NotImplementedError(f"evaluate: unknown unary operator {node.op!r}")
    raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")


def eval_int(op: Callable[[int, int], int], left: Node, right: Node, env: Environment) -> Value:
    a = evaluate(left, env)
    b = evaluate(right, env)
    if isinstance(a, IntVal) and isinstance(b, IntVal):
        return IntVal(wrap_int64(op(a.value, b.value)))
    raise LambdaError(ErrorVal('TypeError', ARITHMETIC_ERROR))


def eval_bool(op: Callable[[bool, bool], bool], left: Node, right: Node, env: Environment) -> Value:
    a = evaluate(left, env)
    b = evaluate(right, env)
    if isinstance(a, BoolVal) and isinstance(b, BoolVal):
        return BoolVal(bool(op(a.value, b.value)))
    raise LambdaError(ErrorVal('TypeError', BOOLEAN_ERROR))


def eval_compare(op: Callable[[int, int], bool], left: Node, right: Node, env: Environment) -> Value:
    a = evaluate(left, env)
    b = evaluate(right, env)
    if isinstance(a, IntVal) and isinstance(b, IntVal):
        return BoolVal(op(a.value, b.value))
    # comparisons share the arithmetic message
    raise LambdaError(ErrorVal('TypeError', ARITHMETIC_ERROR))
