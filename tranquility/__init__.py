"""Tranquility language front end.

Lexer, parser and semantic checks for Tranquility source, producing an AST
or positioned diagnostics.


File: __init__.py
Version: 0.1.0
License: MIT
"""

from tranquility.analysis import AnalysisResult, check, is_tranquility_file
from tranquility.diagnostics import Diagnostic, DiagnosticReporter
from tranquility.exceptions import LexerError, ScopeError, TokenError
from tranquility.lexer import Token, tokenize
from tranquility.parser import Parser

__version__ = "0.1.0"

__all__ = [
    "AnalysisResult",
    "Diagnostic",
    "DiagnosticReporter",
    "LexerError",
    "Parser",
    "ScopeError",
    "Token",
    "TokenError",
    "check",
    "is_tranquility_file",
    "tokenize",
]
