"""Static analysis for lambdaimp programs.

The analyzer walks a statement tree without running it and reports two
things: variables that are bound but never read afterwards, and variables
that are read before any assignment to them was seen.

Reads are counted per name. An assignment resets the count of its target to
zero, so a name whose last assignment is never followed by a read ends with
a count of zero and is reported as unused. Function names are never entered
in the table, and `Call` statements are skipped entirely.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .ast import (
    Node, Literal, BinaryOp, UnaryOp, Var, Lambda,
    Assign, FuncDecl, Call, Seq, Print, IfStmt, WhileStmt, Break, Pass,
)
from .types import LAMBDA_SYMBOL


@dataclass
class AnalysisReport:
    unused: List[str] = field(default_factory=list)
    referenced_before_init: List[str] = field(default_factory=list)
    ref_counts: Dict[str, int] = field(default_factory=dict)

    def lines(self) -> List[str]:
        return [
            f"{LAMBDA_SYMBOL}{self.unused!r} are unused variables",
            f"{LAMBDA_SYMBOL}{self.referenced_before_init!r} got referenced before initialization",
        ]


class Analyzer:
    def __init__(self):
        self.ref_counts: Dict[str, int] = {}
        self.before_init: List[str] = []

    def analyze(self, program: Node) -> AnalysisReport:
        self.scan_stmt(program)
        unused = sorted(name for name, count in self.ref_counts.items() if count == 0)
        return AnalysisReport(unused, list(self.before_init), dict(self.ref_counts))

    def scan_expr(self, node: Node):
        if isinstance(node, Var):
            if node.name in self.ref_counts:
                self.ref_counts[node.name] += 1
            else:
                self.before_init.append(node.name)
            return
        if isinstance(node, BinaryOp):
            self.scan_expr(node.left)
            self.scan_expr(node.right)
            return
        if isinstance(node, UnaryOp):
            self.scan_expr(node.operand)
            return
        # lambda bodies are not scanned until the lambda is declared as a function
        if isinstance(node, (Literal, Lambda)):
            return
        raise NotImplementedError(f"scan_expr: unexpected node type {type(node)}")

    def scan_stmt(self, node: Node):
        if isinstance(node, Seq):
            while isinstance(node, Seq):
                self.scan_stmt(node.first)
                node = node.second
            self.scan_stmt(node)
            return
        if isinstance(node, Assign):
            self.scan_expr(node.expr)
            self.ref_counts[node.name] = 0
            return
        if isinstance(node, FuncDecl):
            self.scan_expr(node.body)
            return
        if isinstance(node, Print):
            self.scan_expr(Var(node.name))
            return
        if isinstance(node, IfStmt):
            self.scan_expr(node.condition)
            self.scan_stmt(node.then_branch)
            self.scan_stmt(node.else_branch)
            return
        if isinstance(node, WhileStmt):
            self.scan_expr(node.condition)
            self.scan_stmt(node.body)
            return
        # Call targets and arguments are not tracked
        if isinstance(node, (Call, Break, Pass)):
            return
        raise NotImplementedError(f"scan_stmt: unexpected node type {type(node)}")


def analyze_program(program: Node) -> AnalysisReport:
    """Analyze a program and print the two report lines."""
    report = Analyzer().analyze(program)
    for line in report.lines():
        print(line, flush=True)
    return report
