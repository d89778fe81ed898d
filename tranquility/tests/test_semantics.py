"""Tests for name resolution, arity and loop checks in Tranquility."""
import pytest

from tranquility.exceptions import TokenError
from tranquility.nodes import UntilStatement
from tranquility.tests.utils import parse_source, wrap_in_init


def fatal(source: str) -> TokenError:
    with pytest.raises(TokenError) as exc_info:
        parse_source(source)
    return exc_info.value


# Scoping

def test_outer_variable_visible_in_nested_if():
    parse_source(wrap_in_init("if 1 {", "x: 2", "}", declarations="var x\n"))


def test_global_variable_visible_in_function():
    parse_source("var g\nfun init() {\ng: 1\n}\n")


def test_parameters_visible_in_body():
    parse_source("fun twice(n) {\nreturn n * 2\n}\nfun init() {\n}\n")


def test_undeclared_variable():
    error = fatal(wrap_in_init("y: 1"))
    assert error.message == 'Variable "y" is not defined.'
    assert error.token.text == "y"


def test_variable_from_function_parameter_does_not_leak():
    error = fatal("fun f(a) {\nreturn a\n}\nfun init() {\nreturn a\n}\n")
    assert error.message == 'Variable "a" is not defined.'
    assert error.token.line == 4


# Duplicates

def test_duplicate_variable_in_function():
    error = fatal(wrap_in_init("return", declarations="var x\nvar x\n"))
    assert error.message == 'Duplicate identifier "x"'
    assert error.token.line == 2


def test_duplicate_in_one_var_line():
    error = fatal(wrap_in_init("return", declarations="var a, b, a\n"))
    assert error.token.column == 10


def test_local_may_not_shadow_global():
    error = fatal("var x\nfun init() {\nvar x\n}\n")
    assert error.message == 'Duplicate identifier "x"'


def test_parameter_may_not_shadow_global():
    error = fatal("var n\nfun f(n) {\n}\nfun init() {\n}\n")
    assert error.message == 'Duplicate identifier "n"'


def test_redeclaring_builtin_is_fatal():
    error = fatal("fun random(n) {\n}\nfun init() {\n}\n")
    assert error.token.text == "random"
    assert "already exists a function" in error.message


def test_redeclaring_user_function_is_fatal():
    error = fatal("fun f() {\n}\nfun f() {\n}\nfun init() {\n}\n")
    assert error.token.line == 2


def test_init_may_always_be_declared():
    parse_source("fun init() {\n}\n")


def test_functions_and_variables_use_separate_names():
    parse_source("var timer\nfun init() {\ntimer: timer(10, 5)\n}\n")


# Calls

def test_builtin_call_with_correct_arity():
    parse_source(wrap_in_init("random(5)"))


@pytest.mark.parametrize("call, received", [("random()", 0), ("random(1, 2)", 2)])
def test_builtin_call_with_wrong_arity(call, received):
    error = fatal(wrap_in_init(call))
    assert error.message == (
        f"Incorrect number of arguments: Expected 1 argument but received {received}"
    )
    assert error.token.text == "random"


def test_plural_arity_message():
    error = fatal(wrap_in_init("setcell(1)"))
    assert error.message == "Incorrect number of arguments: Expected 4 arguments but received 1"


def test_memory_builtins_follow_documented_signatures():
    parse_source(wrap_in_init("p: alloc(10)", "i2s(p, 42)", "free(p)", declarations="var p\n"))
    error = fatal(wrap_in_init("alloc(10, 0)"))
    assert error.message == "Incorrect number of arguments: Expected 1 argument but received 2"
    error = fatal(wrap_in_init("i2s(5)"))
    assert error.message == "Incorrect number of arguments: Expected 2 arguments but received 1"


def test_undefined_function():
    error = fatal(wrap_in_init("launch(1)"))
    assert error.message == 'Function "launch" is undefined'


def test_user_function_arity():
    source = "fun add(a, b) {\nreturn a + b\n}\nfun init() {\nadd(1)\n}\n"
    error = fatal(source)
    assert error.message == "Incorrect number of arguments: Expected 2 arguments but received 1"


def test_recursive_call():
    parse_source("fun down(n) {\nif n > 0 {\ndown(n - 1)\n}\n}\nfun init() {\ndown(3)\n}\n")


def test_function_must_be_declared_before_use():
    error = fatal("fun init() {\nlater()\n}\nfun later() {\n}\n")
    assert error.message == 'Function "later" is undefined'


# Loops

def test_loop_without_until_is_infinite():
    error = fatal(wrap_in_init("loop {", "x: x + 1", "}", declarations="var x\n"))
    assert error.message.startswith("Infinite loop")
    assert error.token.text == "loop"


def test_empty_loop_is_infinite():
    error = fatal(wrap_in_init("loop {", "}"))
    assert error.message.startswith("Infinite loop")


def test_until_anywhere_in_loop_body():
    parse_source(wrap_in_init("loop {", "x: x + 1", "until x > 5", "}", declarations="var x\n"))


def test_nested_loops_track_until_separately():
    source = wrap_in_init(
        "loop {",
        "loop {",
        "until x > 1",
        "}",
        "}",
        declarations="var x\n",
    )
    error = fatal(source)
    assert error.message.startswith("Infinite loop")
    assert error.token.line == 2


def test_until_inside_if_does_not_end_loop():
    source = wrap_in_init(
        "loop {",
        "if x > 1 {",
        "until 1",
        "}",
        "}",
        declarations="var x\n",
    )
    error = fatal(source)
    assert error.message.startswith("Infinite loop")
    assert error.token.text == "loop"


def test_until_inside_if_with_direct_until():
    parse_source(wrap_in_init(
        "loop {",
        "if x > 1 {",
        "until 1",
        "}",
        "until x > 5",
        "}",
        declarations="var x\n",
    ))


def test_until_outside_loop_is_accepted():
    ast = parse_source(wrap_in_init("until 1", "return"))
    assert isinstance(ast.functions[0].body.statements[0], UntilStatement)


def test_until_outside_loop_does_not_satisfy_later_loop():
    error = fatal(wrap_in_init("until 1", "loop {", "return", "}"))
    assert error.message.startswith("Infinite loop")
