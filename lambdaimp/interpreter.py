"""Statement interpreter for lambdaimp.

The interpreter walks a statement tree against a single flat environment.
Statements run strictly in order; the environment each one sees is the one
its predecessor left behind. Expressions are handed to
`lambdaimp.evaluator.evaluate` together with the current environment.

Every line the interpreter writes goes to stdout behind `LAMBDA_SYMBOL` and
is recorded in `Interpreter.effects`. The only point where execution waits
on the outside world is the breakpoint loop entered by a `Break` statement,
which reads operator commands with `input()`.
"""

from __future__ import annotations

import builtins
from typing import Any, List, Optional

from .ast import (
    Node, Literal, Assign, FuncDecl, Call, Seq, Print,
    IfStmt, WhileStmt, Break, Pass, Var,
)
from .environment import Environment
from .errors import LambdaError, ErrorVal
from .evaluator import evaluate
from .types import (
    LAMBDA_SYMBOL, Closure, BoolVal, IntVal, DoubleVal, Value, to_string, type_name,
)

# Operator input that leaves a breakpoint.
CONTINUE = 'Continue'


class Interpreter:
    """Executes lambdaimp statement trees.

    With `debug_level > 0` the debug file is opened here and closed by
    `run()`. Callers driving `execute()` directly should call `close()`
    or use the interpreter as a context manager.
    """
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt', prompt: str = ''):
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None
        self.prompt = prompt
        self.effects: List[str] = []

    def debug(self, msg: str):
        if self.debug_level > 0 and self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def __enter__(self) -> 'Interpreter':
        return self

    def __exit__(self, *exc_info):
        self.close()

    def emit(self, msg: str):
        line = LAMBDA_SYMBOL + msg
        self.effects.append(line)
        # flush so output is visible before the next breakpoint prompt
        print(line, flush=True)

    # Public API
    def run(self, program: Node, env: Optional[Environment] = None) -> Environment:
        if env is None:
            env = Environment()
        try:
            return self.execute(program, env)
        finally:
            self.close()

    def evaluate(self, node: Node, env: Environment) -> Value:
        return evaluate(node, env)

    def execute(self, node: Node, env: Environment) -> Environment:
        if isinstance(node, Assign):
            value = self.evaluate(node.expr, env)
            env.set(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"assign {node.name} = {to_string(value)}")
            return env
        if isinstance(node, FuncDecl):
            env.set(node.name, Closure(tuple(node.params), node.body))
            if self.debug_level >= 2:
                self.debug(f"define function {node.name}({', '.join(node.params)})")
            return env
        if isinstance(node, Call):
            return self.call_function(node, env)
        if isinstance(node, Seq):
            # walk right-nested chains without growing the Python stack
            while isinstance(node, Seq):
                env = self.execute(node.first, env)
                node = node.second
            return self.execute(node, env)
        if isinstance(node, Print):
            value = self.evaluate(Var(node.name), env)
            self.emit(f"The value inside {node.name} is : {to_string(value)}")
            return env
        if isinstance(node, IfStmt):
            cond = self.evaluate(node.condition, env)
            taken = self.check_condition('if', cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {to_string(cond)}")
            if taken:
                return self.execute(node.then_branch, env)
            return self.execute(node.else_branch, env)
        if isinstance(node, WhileStmt):
            iterations = 0
            while self.check_condition('while', self.evaluate(node.condition, env)):
                env = self.execute(node.body, env)
                iterations += 1
            if self.debug_level >= 3:
                self.debug(f"while loop finished after {iterations} iterations")
            return env
        if isinstance(node, Break):
            self.breakpoint(env)
            return env
        if isinstance(node, Pass):
            return env
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def call_function(self, node: Call, env: Environment) -> Environment:
        func = env.lookup(node.func)
        if func is None:
            raise LambdaError(ErrorVal('UndefinedFunction', f'{node.func} function is not defined yet'))
        if not isinstance(func, Closure):
            raise LambdaError(ErrorVal('NotAFunction', f'{node.func} is not a function'))
        if self.debug_level >= 1:
            self.debug(f"call {node.func}({', '.join(to_string(a) for a in node.args)})")
        # arguments shadow globals of the same name for the duration of the body
        call_env = env.merged(zip(func.params, node.args))
        result = self.evaluate(func.body, call_env)
        self.emit(f"The return value of function {node.func} is : {to_string(result)}")
        return self.execute(Assign(node.target, Literal(result)), env)

    def check_condition(self, statement: str, value: Any) -> bool:
        if isinstance(value, BoolVal):
            return value.value
        if isinstance(value, (IntVal, DoubleVal)):
            message = (f"The {statement} statement's condition shouldn't be an "
                       f"{type_name(value)} value {to_string(value)}")
        else:
            message = f"The {statement} statement's condition shouldn't be an function value"
        raise LambdaError(ErrorVal('ConditionTypeError', message))

    def read_line(self) -> str:
        try:
            return builtins.input(self.prompt)
        except EOFError:
            return ''

    def breakpoint(self, env: Environment):
        """Let the operator inspect variables until they type `Continue`.

        Each input line is either the exit keyword, the name of a bound
        variable (its value is printed and another line is read), or
        anything else, which raises UnknownVariable and ends the program.
        The environment is only read, never changed.
        """
        if self.debug_level >= 1:
            self.debug(f"breakpoint with {len(env)} bindings")
        self.emit('Enter a breakpoint')
        self.emit(f'Enter "{CONTINUE}" to exit the breakpoint')
        self.emit(f"Current variables : {env.names()!r}")
        while True:
            instruction = self.read_line()
            if instruction == CONTINUE:
                return
            value = env.lookup(instruction)
            if value is None:
                raise LambdaError(ErrorVal('UnknownVariable', f'Unknown Variable : {instruction}'))
            self.emit(f"{instruction} = {to_string(value)}")


def run_program(program: Node, debug_level: int = 0, debug_file: str = 'debug.txt') -> Optional[Environment]:
    """Run a program from an empty environment and report the outcome.

    On success the final environment is printed and returned. On failure
    the uncaught exception is printed and None is returned.
    """
    interpreter = Interpreter(debug_level=debug_level, debug_file=debug_file)
    try:
        env = interpreter.run(program)
    except LambdaError as e:
        interpreter.emit(f"Uncaught exception: {e.message}")
        return None
    interpreter.emit(str(env))
    return env
