"""Sample programs shipped with lambdaimp.

These are used by `python -m lambdaimp --emit-ast NAME` and by the tests.
"""

from .ast import Node
from .builder import (
    program, assign, var, int_, bool_, mul, sub, add, gt,
    while_, print_, function, call, brk,
)


def factorial(n: int = 5) -> Node:
    return program(
        assign('unusedVar1', bool_(True)),
        assign('arg', int_(n)),
        assign('scratch', var('arg')),
        assign('total', int_(1)),
        while_(gt(var('scratch'), int_(1)), [
            assign('total', mul(var('total'), var('scratch'))),
            assign('scratch', sub(var('scratch'), int_(1))),
            print_('scratch'),
        ]),
        print_('total'),
    )


def closures() -> Node:
    # `offset` is looked up when `shift` is called, not when it is defined
    return program(
        assign('offset', int_(1)),
        function('shift', ['x'], add(var('x'), var('offset'))),
        assign('offset', int_(10)),
        call('shift', [5], 'shifted'),
        print_('shifted'),
    )


def inspect() -> Node:
    return program(
        assign('x', int_(42)),
        assign('flag', bool_(False)),
        brk(),
        print_('x'),
    )


SAMPLES = {
    'factorial': factorial,
    'closures': closures,
    'inspect': inspect,
}
