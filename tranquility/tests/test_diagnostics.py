"""Tests for diagnostics and the reporter."""
from lsprotocol.types import DiagnosticSeverity

from tranquility.diagnostics import Diagnostic, DiagnosticReporter, SOURCE, report
from tranquility.lexer import IDENTIFIER, Token


def test_diagnostic_spans_the_token():
    token = Token(IDENTIFIER, "total", 3, 8, 0)
    diagnostic = Diagnostic.at_token(token, "oops")
    assert (diagnostic.start_line, diagnostic.start_column) == (3, 8)
    assert (diagnostic.end_line, diagnostic.end_column) == (3, 13)
    assert diagnostic.severity == DiagnosticSeverity.Error
    assert diagnostic.is_error


def test_lsp_conversion_adds_severity_prefix():
    token = Token(IDENTIFIER, "p", 1, 2, 0)
    converted = Diagnostic.at_token(token, "careful", DiagnosticSeverity.Warning).to_lsp()
    assert converted.message == "⚠️ Warning: careful"
    assert converted.severity == DiagnosticSeverity.Warning
    assert converted.source == SOURCE
    assert (converted.range.start.line, converted.range.start.character) == (1, 2)
    assert (converted.range.end.line, converted.range.end.character) == (1, 3)


def test_prefixes_by_severity():
    token = Token(IDENTIFIER, "x", 0, 0, 0)
    prefixes = [
        Diagnostic.at_token(token, "m", severity).prefix
        for severity in (
            DiagnosticSeverity.Error,
            DiagnosticSeverity.Warning,
            DiagnosticSeverity.Information,
            DiagnosticSeverity.Hint,
        )
    ]
    assert prefixes == ["❌ Error: ", "⚠️ Warning: ", "🔵 Info: ", "❔ Hint: "]


def test_str_is_one_based():
    diagnostic = Diagnostic.at_token(Token(IDENTIFIER, "y", 0, 4, 0), 'Variable "y" is not defined.')
    assert str(diagnostic) == '1:5: ❌ Error: Variable "y" is not defined.'


def test_reporter_keeps_first_diagnostic_per_token():
    reporter = DiagnosticReporter()
    token = Token(IDENTIFIER, "x", 0, 0, 4)
    assert reporter.report(token, "first")
    assert not reporter.report(token, "second", DiagnosticSeverity.Warning)
    assert [d.message for d in reporter] == ["first"]
    assert reporter.has_diagnostic(token)


def test_reporter_identifies_tokens_by_index():
    reporter = DiagnosticReporter()
    reporter.report(Token(IDENTIFIER, "x", 0, 0, 1), "a")
    reporter.report(Token(IDENTIFIER, "x", 0, 0, 2), "b")
    assert len(reporter) == 2


def test_reporter_filters_by_severity():
    reporter = DiagnosticReporter()
    report(reporter, Token(IDENTIFIER, "a", 0, 0, 0), "bad")
    report(reporter, Token(IDENTIFIER, "b", 0, 2, 1), "iffy", DiagnosticSeverity.Warning)
    report(reporter, Token(IDENTIFIER, "c", 0, 4, 2), "fyi", DiagnosticSeverity.Information)
    assert [d.message for d in reporter.errors] == ["bad"]
    assert [d.message for d in reporter.warnings] == ["iffy"]
    assert len(reporter) == 3
