"""
Main parser entry point for Tranquility.

This module defines the `Parser` class, which coordinates the recursive
descent parsing process. The actual parsing routines are split across
`tranquility.parser.expressions` and `tranquility.parser.statements`.

The parser owns the scope chain for the parse. Scopes are opened and closed
only by `advance`, at the moment a brace token is consumed, so every
production that opens a block passes the scope kind for its `{`.


File: parser.py
Version: 0.1.0
License: MIT
"""

from typing import Optional

from lsprotocol.types import DiagnosticSeverity

from tranquility.diagnostics import DiagnosticReporter
from tranquility.exceptions import TokenError
from tranquility.lexer import EOF, KIND_NAMES, LBRACE, NEWLINE, RBRACE, Token, describe_token
from tranquility.scope import ScopeTracker
from . import expressions as _expr
from . import statements as _stmt


def _end_token(tokens: list[Token]) -> Token:
    if not tokens:
        return Token(EOF, "", 0, 0, 0)
    last = tokens[-1]
    column = last.column if last.kind == NEWLINE else last.column + len(last.text)
    return Token(EOF, "", last.line, column, len(tokens))


class Parser:
    """Tranquility parser."""

    def __init__(self, tokens: list[Token], reporter: Optional[DiagnosticReporter] = None):
        """
        Initialize the parser with a list of tokens.

        Parameters:
            tokens (list): Tokens produced by `tranquility.lexer.tokenize`.
            reporter (DiagnosticReporter): Sink for non-fatal diagnostics.
        """
        self.tokens = tokens
        self.end_token = _end_token(tokens)
        self.position = 0
        self.reporter = reporter if reporter is not None else DiagnosticReporter()
        self.scopes = ScopeTracker()

    @property
    def curr_token(self) -> Token:
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return self.end_token

    @property
    def next_token(self) -> Token:
        if self.position + 1 < len(self.tokens):
            return self.tokens[self.position + 1]
        return self.end_token

    @staticmethod
    def _matches(token: Token, kind: Optional[str], value: Optional[str]) -> bool:
        if kind is not None and token.kind != kind:
            return False
        return value is None or token.text == value

    def peek(self, kind: Optional[str] = None, value: Optional[str] = None) -> bool:
        """Test the current token without consuming it."""
        return self._matches(self.curr_token, kind, value)

    def peek_next(self, kind: Optional[str] = None, value: Optional[str] = None) -> bool:
        """Test the token after the current one without consuming anything."""
        return self._matches(self.next_token, kind, value)

    def at_end(self) -> bool:
        return self.curr_token.kind == EOF

    def advance(self, kind: Optional[str] = None, value: Optional[str] = None,
                scope_kind: Optional[str] = None) -> Token:
        """
        Consume the current token if it matches the expected kind and value.

        Consuming ``{`` opens a scope of ``scope_kind``; consuming ``}``
        returns to the enclosing scope.

        Raises:
            TokenError: If the token does not match or the input has ended.
        """
        tok = self.curr_token
        if kind is not None and tok.kind != kind:
            raise TokenError(
                tok, f"Expected {KIND_NAMES.get(kind, kind)} but found {tok.kind_name}"
            )
        if value is not None and tok.text != value:
            raise TokenError(tok, f'Expected "{value}" but found "{describe_token(tok)}"')
        if tok.kind == EOF:
            raise TokenError(tok, "Unexpected end of input")

        if tok.kind == RBRACE:
            self.scopes.exit()
        elif tok.kind == LBRACE:
            self.scopes.enter(scope_kind)
        self.position += 1
        return tok

    def warn(self, token: Token, message: str) -> None:
        """Record a non-fatal warning at ``token``."""
        self.reporter.report(token, message, DiagnosticSeverity.Warning)


    # Expression wrappers
    def unary(self):
        """
        Parse a call, literal, variable reference, group or prefix operator.
        """
        return _expr.parse_unary(self)

    def literal(self):
        """
        Consume an integer, string or character literal.
        """
        return _expr.parse_literal(self)

    def multiplicative(self):
        """
        Parse a multiplication, division or remainder expression.
        """
        return _expr.parse_multiplicative(self)

    def additive(self):
        """
        Parse an addition or subtraction expression.
        """
        return _expr.parse_additive(self)

    def shift(self):
        """
        Parse a bit-shift expression using left or right shift operators.
        """
        return _expr.parse_shift(self)

    def comparison(self):
        """
        Parse a comparison expression using relational operators.
        """
        return _expr.parse_comparison(self)

    def bitwise_comparison(self):
        """
        Parse a bitwise AND / OR expression.
        """
        return _expr.parse_bitwise_comparison(self)

    def xor(self):
        """
        Parse a bitwise XOR expression.
        """
        return _expr.parse_xor(self)

    def expr(self):
        """
        Parse a full expression.
        """
        return _expr.parse_expr(self)

    def expression_list(self) -> list:
        """
        Parse comma separated call arguments.
        """
        return _expr.parse_expression_list(self)


    # Statement wrappers
    def function_list(self) -> list:
        """
        Parse one or more function declarations.
        """
        return _stmt.parse_function_list(self)

    def function_declaration(self):
        """
        Parse a function declaration and its body.
        """
        return _stmt.parse_function_declaration(self)

    def identifier_list(self):
        """
        Parse comma separated identifiers.
        """
        return _stmt.parse_identifier_list(self)

    def var_list(self):
        """
        Parse consecutive `var` lines, declaring each name in the current scope.
        """
        return _stmt.parse_var_list(self)

    def statement_list(self):
        """
        Parse statements up to the closing brace.
        """
        return _stmt.parse_statement_list(self)

    def statement(self):
        """
        Parse a single statement.
        """
        return _stmt.parse_statement(self)

    def parse_if(self):
        """
        Parse an 'if' statement with its optional 'else' branch.
        """
        return _stmt.parse_if(self)

    def parse_until(self):
        """
        Parse an 'until' statement, the exit condition of a loop.
        """
        return _stmt.parse_until(self)

    def parse_loop(self):
        """
        Parse a 'loop' statement.
        """
        return _stmt.parse_loop(self)

    def parse_return(self):
        """
        Parse a 'return' statement.
        """
        return _stmt.parse_return(self)


    def parse(self):
        """
        Parse the full input into a program.

        Raises:
            TokenError: At the first grammar or semantic violation.
        """
        return _stmt.parse_program(self)
