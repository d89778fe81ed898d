"""Errors.

Every fatal grammar or semantic violation is raised as a :class:`TokenError`
carrying the offending token, so the caller can turn it into a positioned
diagnostic. The remaining exceptions signal internal misuse and are never
expected for user input.


File: exceptions.py
Version: 0.1.0
License: MIT
"""

from lsprotocol.types import DiagnosticSeverity


class TokenError(Exception):
    """
    Error raised at a specific token.
    """
    def __init__(self, token, message, severity=DiagnosticSeverity.Error):
        """
        Initialize a new token error.

        Parameters:
            token (Token): The token the error is reported at.
            message (str): Human readable description.
            severity (DiagnosticSeverity): Severity of the resulting diagnostic.
        """
        self.token = token
        self.message = message
        self.severity = severity
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.message} (line {self.token.line + 1}, column {self.token.column + 1})"


class LexerError(Exception):
    """
    Error for source text no token rule matches.
    """
    def __init__(self, source, position):
        self.position = position
        snippet = source[position:position + 20]
        super().__init__(f"No token rule matches {snippet!r} at offset {position}")


class ScopeError(Exception):
    """
    Error for invalid scope transitions.
    """
    pass
