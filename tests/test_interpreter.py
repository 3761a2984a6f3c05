import pytest

from lambdaimp.builder import (
    program, assign, var, int_, bool_, double, add, sub, gt, lam,
    while_, iif, print_, function, call, pass_,
)
from lambdaimp.environment import Environment
from lambdaimp.errors import LambdaError
from lambdaimp.interpreter import Interpreter, run_program
from lambdaimp.types import IntVal, BoolVal, Closure, LAMBDA_SYMBOL


def test_assign_then_print(capsys):
    interp = Interpreter()
    env = interp.run(program(assign('x', int_(1)), print_('x')))
    assert env == {'x': IntVal(1)}
    out = capsys.readouterr().out.strip()
    assert out == LAMBDA_SYMBOL + 'The value inside x is : 1'
    assert interp.effects == [out]


def test_assignment_overwrites():
    env = Interpreter().run(program(assign('x', 1), assign('x', bool_(True))))
    assert env == {'x': BoolVal(True)}


def test_if_runs_only_the_taken_branch(capsys):
    prog = program(
        assign('x', 5),
        iif(gt(var('x'), int_(0)),
            [assign('branch', int_(1)), print_('branch')],
            [assign('branch', int_(2)), print_('missing')]),
    )
    env = Interpreter().run(prog)
    assert env.get('branch') == IntVal(1)
    assert capsys.readouterr().out.strip() == LAMBDA_SYMBOL + 'The value inside branch is : 1'


def test_if_false_runs_else_branch():
    prog = program(assign('x', 0), iif(gt(var('x'), int_(0)), assign('y', 1), assign('y', 2)))
    assert Interpreter().run(prog).get('y') == IntVal(2)


def test_while_counts_down():
    prog = while_(gt(var('n'), int_(0)), [
        assign('n', sub(var('n'), int_(1))),
        assign('steps', add(var('steps'), int_(1))),
    ])
    env = Interpreter().run(prog, Environment({'n': IntVal(3), 'steps': IntVal(0)}))
    assert env == {'n': IntVal(0), 'steps': IntVal(3)}


def test_while_false_leaves_environment_unchanged():
    env = Environment({'n': IntVal(0)})
    Interpreter().run(while_(gt(var('n'), int_(0)), assign('touched', 1)), env)
    assert env == {'n': IntVal(0)}


def test_long_loop_does_not_recurse():
    prog = program(
        assign('n', 5000),
        while_(gt(var('n'), int_(0)), assign('n', sub(var('n'), int_(1)))),
    )
    assert Interpreter().run(prog).get('n') == IntVal(0)


def test_long_sequence_does_not_recurse():
    prog = program(*[assign('x', i) for i in range(3000)])
    assert Interpreter().run(prog) == {'x': IntVal(2999)}


@pytest.mark.parametrize('cond,message', [
    (int_(5), "The if statement's condition shouldn't be an Int value 5"),
    (double(2.5), "The if statement's condition shouldn't be an Double value 2.5"),
    (lam(['x'], var('x')), "The if statement's condition shouldn't be an function value"),
])
def test_if_condition_must_be_boolean(cond, message):
    with pytest.raises(LambdaError) as exc:
        Interpreter().run(iif(cond, pass_(), pass_()))
    assert exc.value.name == 'ConditionTypeError'
    assert exc.value.message == message


@pytest.mark.parametrize('cond,message', [
    (int_(1), "The while statement's condition shouldn't be an Int value 1"),
    (double(-0.5), "The while statement's condition shouldn't be an Double value -0.5"),
])
def test_while_condition_must_be_boolean(cond, message):
    with pytest.raises(LambdaError) as exc:
        Interpreter().run(while_(cond, pass_()))
    assert exc.value.name == 'ConditionTypeError'
    assert exc.value.message == message


def test_function_declaration_binds_closure():
    env = Interpreter().run(function('inc', ['x'], add(var('x'), int_(1))))
    assert env.get('inc') == Closure(('x',), add(var('x'), int_(1)))


def test_call_prints_and_binds_result(capsys):
    interp = Interpreter()
    env = interp.run(program(
        function('plus', ['a', 'b'], add(var('a'), var('b'))),
        call('plus', [2, 3], 'sum'),
    ))
    assert env.get('sum') == IntVal(5)
    # parameters are not left behind in the caller's environment
    assert 'a' not in env and 'b' not in env
    assert capsys.readouterr().out.strip() == LAMBDA_SYMBOL + 'The return value of function plus is : 5'


def test_call_arguments_shadow_globals():
    env = Interpreter().run(program(
        assign('x', 100),
        function('double', ['x'], add(var('x'), var('x'))),
        call('double', [4], 'result'),
    ))
    assert env.get('result') == IntVal(8)
    assert env.get('x') == IntVal(100)


def test_closure_sees_bindings_at_call_time():
    env = Interpreter().run(program(
        assign('offset', 1),
        function('shift', ['x'], add(var('x'), var('offset'))),
        assign('offset', 10),
        call('shift', [5], 'shifted'),
    ))
    assert env.get('shifted') == IntVal(15)


def test_lambda_assigned_to_variable_is_callable():
    env = Interpreter().run(program(
        assign('neg', lam(['x'], sub(int_(0), var('x')))),
        call('neg', [7], 'r'),
    ))
    assert env.get('r') == IntVal(-7)


def test_call_undefined_function():
    with pytest.raises(LambdaError) as exc:
        Interpreter().run(call('nope', [1], 'r'))
    assert exc.value.name == 'UndefinedFunction'
    assert exc.value.message == 'nope function is not defined yet'


def test_call_non_function():
    with pytest.raises(LambdaError) as exc:
        Interpreter().run(program(assign('f', 1), call('f', [], 'r')))
    assert exc.value.name == 'NotAFunction'


def test_call_body_error_propagates():
    with pytest.raises(LambdaError) as exc:
        Interpreter().run(program(
            function('f', ['x'], add(var('x'), var('y'))),
            call('f', [1], 'r'),
        ))
    assert exc.value.name == 'UnknownVariable'
    assert exc.value.message == 'Unknown variable y'


def test_print_unbound_variable_fails():
    with pytest.raises(LambdaError) as exc:
        Interpreter().run(print_('ghost'))
    assert exc.value.name == 'UnknownVariable'


def test_error_aborts_rest_of_program_without_rollback(capsys):
    env = Environment()
    with pytest.raises(LambdaError):
        Interpreter().execute(program(
            assign('a', 1),
            assign('b', add(var('a'), bool_(True))),
            assign('c', 3),
            print_('a'),
        ), env)
    assert env == {'a': IntVal(1)}
    assert capsys.readouterr().out == ''


def test_pass_is_a_no_op():
    env = Environment({'x': IntVal(1)})
    assert Interpreter().execute(pass_(), env) == {'x': IntVal(1)}


def test_unknown_node_type():
    with pytest.raises(NotImplementedError):
        Interpreter().execute(object(), Environment())


def test_run_program_prints_final_environment(capsys):
    env = run_program(program(assign('y', bool_(False)), assign('x', 1), print_('x')))
    assert env == {'x': IntVal(1), 'y': BoolVal(False)}
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == [
        LAMBDA_SYMBOL + 'The value inside x is : 1',
        LAMBDA_SYMBOL + "{'x': 1, 'y': False}",
    ]


def test_run_program_reports_uncaught_exception(capsys):
    assert run_program(program(assign('x', 1), print_('y'))) is None
    assert capsys.readouterr().out.strip() == LAMBDA_SYMBOL + 'Uncaught exception: Unknown variable y'


def test_debug_file(tmp_path):
    debug_file = tmp_path / 'debug.txt'
    interp = Interpreter(debug_level=3, debug_file=str(debug_file))
    interp.run(program(
        assign('n', 2),
        function('id', ['v'], var('v')),
        call('id', [1], 'r'),
        while_(gt(var('n'), int_(0)), assign('n', sub(var('n'), int_(1)))),
        iif(gt(var('n'), int_(0)), pass_(), pass_()),
    ))
    lines = debug_file.read_text(encoding='utf-8').splitlines()
    assert 'assign n = 2' in lines
    assert 'define function id(v)' in lines
    assert 'call id(1)' in lines
    assert 'while loop finished after 2 iterations' in lines
    assert 'if condition False' in lines


def test_context_manager_closes_debug_file(tmp_path):
    debug_file = tmp_path / 'debug.txt'
    with Interpreter(debug_level=2, debug_file=str(debug_file)) as interp:
        env = interp.execute(assign('x', 1), Environment())
        assert interp.debug_fp is not None
    assert interp.debug_fp is None
    assert env == {'x': IntVal(1)}
    assert debug_file.read_text(encoding='utf-8').splitlines() == ['assign x = 1']


def test_close_is_idempotent(tmp_path):
    interp = Interpreter(debug_level=1, debug_file=str(tmp_path / 'debug.txt'))
    interp.close()
    interp.close()
    assert interp.debug_fp is None
