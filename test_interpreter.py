"""Test running the IR: loops, switch, input ordering"""
import pytest

from model.compilador import compile_program
from model.procesador.executor import Executor, InputNeeded


def run(source, **kwargs):
    return Executor(compile_program(source), **kwargs).run()


def test_while_counts():
    source = "a,b; { a = 1; while ( a < 3 ) { output a; a = a + 1; } } "
    program = compile_program(source)
    executor = Executor(program)
    assert executor.run() == [1, 2]
    assert executor.input_index == 0


def test_input_then_output():
    program = compile_program("x; { input x; output x; } 7")
    assert program.inputs == [7]
    assert Executor(program).run() == [7]


def test_inputs_consumed_in_order():
    source = """
        a, b, c;
        {
            input a;
            input b;
            c = a - b;
            output c;
            input c;
            output c;
        }
        10 4 99
    """
    assert run(source) == [6, 99]


def test_while_body_may_not_run():
    assert run("a; { a = 5; while a < 3 { output a; } output a; }") == [5]


def test_for_loop():
    source = "i, s; { s = 0; for (i = 1; i < 5; i = i + 1;) { s = s + i; } output s; output i; }"
    assert run(source) == [10, 5]


SWITCH = """
    x, r;
    {
        input x;
        switch x {
            case 1: { r = 100; output r; }
            case 2: { r = 200; output r; }
            default: { r = 900; output r; }
        }
        output x;
    }
"""


@pytest.mark.parametrize("value, expected", [
    (1, [100, 1]),
    (2, [200, 2]),
    (5, [900, 5]),
])
def test_switch_runs_exactly_one_body(value, expected):
    assert run(SWITCH + str(value)) == expected


def test_switch_without_match_or_default():
    source = "x; { x = 3; switch x { case 1: { output x; } case 2: { output x; } } output x; }"
    assert run(source) == [3]


def test_if_and_notequal():
    source = """
        a, b;
        {
            a = 4;
            b = 4;
            if a != b { output a; }
            if a <> 5 { output b; }
            if a > 3 { output a; }
        }
    """
    assert run(source) == [4, 4]


def test_division_truncates_toward_zero():
    source = """
        a, b, c;
        { a = 0 - 7; b = 2; c = a / b; output c; c = 7 / b; output c; }
    """
    assert run(source) == [-3, 3]


def test_division_by_zero():
    with pytest.raises(ZeroDivisionError):
        run("a; { a = 1 / 0; }")


def test_missing_input():
    with pytest.raises(InputNeeded):
        run("x; { input x; input x; } 1")


def test_step_limit():
    with pytest.raises(RuntimeError):
        run("a; { while a < 1 { output a; } }", max_steps=50)


def test_step_returns_handles_until_halted():
    program = compile_program("a; { a = 2; output a; }")
    executor = Executor(program)
    assert executor.step() == program.root
    executor.step()
    assert executor.output == [2]
    executor.step()  # final sentinel
    assert executor.halted
    assert executor.step() is None


def test_nested_loops():
    source = """
        i, j, n;
        {
            n = 0;
            i = 0;
            while i < 3 {
                for (j = 0; j < 2; j = j + 1;) { n = n + 1; }
                i = i + 1;
            }
            output n;
        }
    """
    assert run(source) == [6]


def test_arithmetic_wraps_to_64_bits():
    source = """
        a, b;
        {
            a = 9223372036854775807;
            b = a + 1;
            output b;
            a = 3037000500;
            a = a * a;
            output a;
        }
    """
    assert run(source) == [-9223372036854775808, -9223372036709301616]
