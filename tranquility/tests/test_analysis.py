"""Tests for whole-document checking."""
import pytest

from tranquility.analysis import check, is_tranquility_file, unrecognized_message
from tranquility.builtin_table import BUILTIN_FUNCTIONS, ENTRY_POINT, describe, find_builtin


PROGRAM = (
    "var total\n"
    "\n"
    "fun add(a, b) {\n"
    "    return a + b\n"
    "}\n"
    "\n"
    "fun init() {\n"
    "    var i\n"
    "    i: 0\n"
    "    loop {\n"
    "        until .i >= 10\n"
    "        i: .i + 1\n"
    "    }\n"
    "    total: add(.i, 2)\n"
    "    sprint(\"done\\n\")\n"
    "}\n"
)


def test_clean_program():
    result = check(PROGRAM)
    assert result.ok
    assert [f.name for f in result.ast.functions] == ["add", "init"]
    # a + b on parameters
    assert len(result.diagnostics) == 1
    assert not result.diagnostics[0].is_error


def test_fatal_error_becomes_single_diagnostic():
    result = check("fun init() {\n    y: 1\n}\n")
    assert result.ast is None
    assert not result.ok
    assert len(result.errors) == 1
    error = result.errors[0]
    assert error.message == 'Variable "y" is not defined.'
    assert (error.start_line, error.start_column, error.end_column) == (1, 4, 5)


@pytest.mark.parametrize("text, fragment", [
    (";", "Semicolons are not allowed"),
    (";;", "Semicolons are not allowed"),
    ("\r", "Carriage returns are not allowed"),
    ("=", "Equal signs are not used"),
    ("@", 'Unrecognized token "@"'),
    ("==", 'Unrecognized token "=="'),
])
def test_unrecognized_messages(text, fragment):
    assert fragment in unrecognized_message(text)


def test_unrecognized_tokens_are_reported_once():
    result = check("fun init() {\n    var x\n    x: 1;\n}\n")
    messages = [d.message for d in result.diagnostics]
    assert len(messages) == 1
    assert messages[0].startswith("Semicolons")
    assert result.diagnostics[0].start_column == 8


def test_every_unrecognized_token_is_reported():
    result = check("fun init() {\n    var x\n    x = 1\n}\n@\n")
    messages = [d.message for d in result.errors]
    assert messages[0].startswith("Equal signs")
    assert 'Unrecognized token "@"' in messages


def test_crlf_line_endings():
    result = check("fun init() {\r\n}\r\n")
    assert not result.ok
    assert result.errors[0].message.startswith("Carriage returns")


def test_warnings_are_kept_after_failure():
    result = check("fun init() {\n    var p\n    p: p + 1\n    q: 1\n}\n")
    assert [d.is_error for d in result.diagnostics] == [False, True]


@pytest.mark.parametrize("path, expected", [
    ("main.t", True),
    ("file:///home/me/game.tranq", True),
    ("SHOUT.TRANQ", True),
    ("notes.txt", False),
    ("tranq.py", False),
])
def test_is_tranquility_file(path, expected):
    assert is_tranquility_file(path) is expected


def test_builtin_lookup():
    assert find_builtin("setcell").parameter_count == 4
    assert find_builtin(ENTRY_POINT).parameter_count == 0
    assert find_builtin("print") is None
    assert len({f.name for f in BUILTIN_FUNCTIONS}) == len(BUILTIN_FUNCTIONS)


def test_describe_builtins_and_keywords():
    assert "fun random(max: Integer) -> Integer" in describe("random")
    assert "Defines a variable" in describe("var")
    assert describe("loop") is None
    assert describe("nothing") is None
