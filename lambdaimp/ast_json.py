"""JSON serialization/deserialization for lambdaimp programs.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding. Every node becomes an object with a
"type" key naming its class; runtime values (literal contents and `Call`
arguments) are tagged the same way with "Int", "Bool", "Double" or
"Closure".
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Union

from .ast import (
    Node,
    Literal,
    BinaryOp,
    UnaryOp,
    Var,
    Lambda,
    Assign,
    FuncDecl,
    Call,
    Seq,
    Print,
    IfStmt,
    WhileStmt,
    Break,
    Pass,
    ARITHMETIC_OPS,
    BOOLEAN_OPS,
    COMPARISON_OPS,
)
from .builder import program
from .types import IntVal, BoolVal, DoubleVal, Closure, Value, wrap_int64

BINARY_OPS = ARITHMETIC_OPS + BOOLEAN_OPS + COMPARISON_OPS


def value_to_obj(v: Value) -> Dict[str, Any]:
    if isinstance(v, IntVal):
        return {"type": "Int", "value": v.value}
    if isinstance(v, BoolVal):
        return {"type": "Bool", "value": v.value}
    if isinstance(v, DoubleVal):
        return {"type": "Double", "value": v.value}
    if isinstance(v, Closure):
        return {"type": "Closure", "params": list(v.params), "body": ast_to_obj(v.body)}
    raise TypeError(f"Unsupported value for serialization: {type(v).__name__}")


def value_from_obj(o: Dict[str, Any]) -> Value:
    if not isinstance(o, dict):
        raise TypeError("Invalid value object")
    t = o.get("type")
    if t == "Int":
        return IntVal(wrap_int64(int(o["value"])))
    if t == "Bool":
        return BoolVal(bool(o["value"]))
    if t == "Double":
        return DoubleVal(float(o["value"]))
    if t == "Closure":
        return Closure(tuple(o["params"]), ast_from_obj(o["body"]))
    raise ValueError(f"Unknown value type: {t}")


def ast_to_obj(node: Any) -> Any:
    if isinstance(node, Literal):
        return {"type": "Literal", "value": value_to_obj(node.value)}
    if isinstance(node, BinaryOp):
        return {"type": "BinaryOp", "op": node.op, "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}
    if isinstance(node, UnaryOp):
        return {"type": "UnaryOp", "op": node.op, "operand": ast_to_obj(node.operand)}
    if isinstance(node, Var):
        return {"type": "Var", "name": node.name}
    if isinstance(node, Lambda):
        return {"type": "Lambda", "params": list(node.params), "body": ast_to_obj(node.body)}
    if isinstance(node, Assign):
        return {"type": "Assign", "name": node.name, "expr": ast_to_obj(node.expr)}
    if isinstance(node, FuncDecl):
        return {
            "type": "FuncDecl",
            "name": node.name,
            "params": list(node.params),
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, Call):
        return {
            "type": "Call",
            "func": node.func,
            "args": [value_to_obj(a) for a in node.args],
            "target": node.target,
        }
    if isinstance(node, Seq):
        return {"type": "Seq", "first": ast_to_obj(node.first), "second": ast_to_obj(node.second)}
    if isinstance(node, Print):
        return {"type": "Print", "name": node.name}
    if isinstance(node, IfStmt):
        return {
            "type": "IfStmt",
            "condition": ast_to_obj(node.condition),
            "then_branch": ast_to_obj(node.then_branch),
            "else_branch": ast_to_obj(node.else_branch),
        }
    if isinstance(node, WhileStmt):
        return {"type": "WhileStmt", "condition": ast_to_obj(node.condition), "body": ast_to_obj(node.body)}
    if isinstance(node, Break):
        return {"type": "Break"}
    if isinstance(node, Pass):
        return {"type": "Pass"}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Node:
    # a bare list is a sequence of statements
    if isinstance(obj, list):
        return program(*[ast_from_obj(s) for s in obj])
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Literal":
        return Literal(value=value_from_obj(obj["value"]))
    if t == "BinaryOp":
        if obj["op"] not in BINARY_OPS:
            raise ValueError(f"Unknown operator: {obj['op']}")
        return BinaryOp(op=obj["op"], left=ast_from_obj(obj["left"]), right=ast_from_obj(obj["right"]))
    if t == "UnaryOp":
        if obj["op"] != 'not':
            raise ValueError(f"Unknown operator: {obj['op']}")
        return UnaryOp(op=obj["op"], operand=ast_from_obj(obj["operand"]))
    if t == "Var":
        return Var(name=obj["name"])
    if t == "Lambda":
        return Lambda(params=tuple(obj["params"]), body=ast_from_obj(obj["body"]))
    if t == "Assign":
        return Assign(name=obj["name"], expr=ast_from_obj(obj["expr"]))
    if t == "FuncDecl":
        return FuncDecl(name=obj["name"], params=tuple(obj["params"]), body=ast_from_obj(obj["body"]))
    if t == "Call":
        return Call(func=obj["func"], args=[value_from_obj(a) for a in obj["args"]], target=obj["target"])
    if t == "Seq":
        return Seq(first=ast_from_obj(obj["first"]), second=ast_from_obj(obj["second"]))
    if t == "Print":
        return Print(name=obj["name"])
    if t == "IfStmt":
        return IfStmt(
            condition=ast_from_obj(obj["condition"]),
            then_branch=ast_from_obj(obj["then_branch"]),
            else_branch=ast_from_obj(obj.get("else_branch", {"type": "Pass"})),
        )
    if t == "WhileStmt":
        return WhileStmt(condition=ast_from_obj(obj["condition"]), body=ast_from_obj(obj["body"]))
    if t == "Break":
        return Break()
    if t == "Pass":
        return Pass()

    raise ValueError(f"Unknown AST node type: {t}")


def load_program(path: Union[str, Path]) -> Node:
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    return ast_from_obj(data)


def dump_program(program: Node) -> str:
    return json.dumps(ast_to_obj(program), ensure_ascii=False, indent=2)
