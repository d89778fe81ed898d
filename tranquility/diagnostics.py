"""Diagnostics.

A diagnostic is a positioned message attached to a single token. The range
always sits on one line: it starts at the token and spans its text.
Columns count code points, like token columns; `to_lsp` keeps them as they
are and the language server converts them to the client's UTF-16 units.

One malformed token tends to be rejected by several grammar rules in a row,
so :class:`DiagnosticReporter` remembers which tokens already carry a
diagnostic and silently drops later reports for them.


File: diagnostics.py
Version: 0.1.0
License: MIT
"""

from dataclasses import dataclass

from lsprotocol import types as lsp

from tranquility.lexer import Token

SEVERITY_PREFIXES = {
    lsp.DiagnosticSeverity.Error: "❌ Error: ",
    lsp.DiagnosticSeverity.Warning: "⚠️ Warning: ",
    lsp.DiagnosticSeverity.Information: "🔵 Info: ",
    lsp.DiagnosticSeverity.Hint: "❔ Hint: ",
}

SOURCE = "tranquility"


@dataclass(frozen=True)
class Diagnostic:
    """A message over a zero based ``(line, column)`` range."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int
    message: str
    severity: lsp.DiagnosticSeverity = lsp.DiagnosticSeverity.Error

    @classmethod
    def at_token(cls, token: Token, message: str,
                 severity: lsp.DiagnosticSeverity = lsp.DiagnosticSeverity.Error) -> 'Diagnostic':
        return cls(token.line, token.column, token.line,
                   token.column + len(token.text), message, severity)

    @property
    def prefix(self) -> str:
        return SEVERITY_PREFIXES[self.severity]

    @property
    def is_error(self) -> bool:
        return self.severity == lsp.DiagnosticSeverity.Error

    def to_lsp(self) -> lsp.Diagnostic:
        """Convert to the protocol type published to the editor."""
        return lsp.Diagnostic(
            range=lsp.Range(
                start=lsp.Position(line=self.start_line, character=self.start_column),
                end=lsp.Position(line=self.end_line, character=self.end_column),
            ),
            message=self.prefix + self.message,
            severity=self.severity,
            source=SOURCE,
        )

    def __str__(self) -> str:
        return f"{self.start_line + 1}:{self.start_column + 1}: {self.prefix}{self.message}"


class DiagnosticReporter:
    """
    Collects diagnostics for one parse, at most one per token.
    """
    def __init__(self):
        self.diagnostics: list[Diagnostic] = []
        self._reported: set[int] = set()

    def report(self, token: Token, message: str,
               severity: lsp.DiagnosticSeverity = lsp.DiagnosticSeverity.Error) -> bool:
        """
        Attach a diagnostic to ``token`` unless it already has one.

        Returns:
            bool: ``True`` if the diagnostic was recorded.
        """
        if token.index in self._reported:
            return False
        self._reported.add(token.index)
        self.diagnostics.append(Diagnostic.at_token(token, message, severity))
        return True

    def has_diagnostic(self, token: Token) -> bool:
        return token.index in self._reported

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == lsp.DiagnosticSeverity.Error]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == lsp.DiagnosticSeverity.Warning]

    def __len__(self) -> int:
        return len(self.diagnostics)

    def __iter__(self):
        return iter(self.diagnostics)


def report(reporter: DiagnosticReporter, token: Token, message: str,
           severity: lsp.DiagnosticSeverity = lsp.DiagnosticSeverity.Error) -> None:
    """Append a diagnostic for ``token`` to ``reporter``."""
    reporter.report(token, message, severity)
