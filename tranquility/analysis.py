"""Source analysis.

`check` is what an editor host calls on every change: it tokenizes the text,
flags tokens the lexer could not classify, parses, and returns everything it
found as a list of diagnostics.

1. Unrecognized tokens
Each ``UNRECOGNIZED`` token gets an error. Semicolons, carriage returns and
a lone ``=`` are common habits from other languages and get a message
explaining the Tranquility equivalent.

2. Parsing
The parser stops at the first fatal violation. Its `TokenError` becomes a
single diagnostic at the offending token; if that token was already flagged
in step 1 the second report is dropped. Warnings collected before the
failure are kept.


File: analysis.py
Version: 0.1.0
License: MIT
"""

import re
from dataclasses import dataclass, field
from typing import Optional

from tranquility.diagnostics import Diagnostic, DiagnosticReporter
from tranquility.exceptions import TokenError
from tranquility.lexer import UNRECOGNIZED, Token, tokenize
from tranquility.nodes import Program
from tranquility.parser import Parser

SOURCE_FILE_PATTERN = re.compile(r'\.t(ranq)?$', re.IGNORECASE)

UNRECOGNIZED_MESSAGES = (
    (re.compile(r'^;+$'),
     'Semicolons are not allowed in Tranquility. Simply end statements with a new line.'),
    (re.compile(r'^\r+$'),
     'Carriage returns are not allowed in Tranquility. Save the file with LF line endings.'),
    (re.compile(r'^=$'),
     'Equal signs are not used in Tranquility. To store a value into a memory address, '
     'use <address> ":" <value>'),
)


@dataclass
class AnalysisResult:
    """Outcome of checking one document."""

    tokens: list[Token]
    ast: Optional[Program] = None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.is_error]

    @property
    def ok(self) -> bool:
        return self.ast is not None and not self.errors


def is_tranquility_file(path: str) -> bool:
    """Return ``True`` if ``path`` has a `.t` or `.tranq` extension."""
    return SOURCE_FILE_PATTERN.search(path) is not None


def unrecognized_message(text: str) -> str:
    """Return the error message for an unrecognized token's text."""
    for pattern, message in UNRECOGNIZED_MESSAGES:
        if pattern.match(text):
            return message
    return f'Unrecognized token "{text}"'


def check(source: str) -> AnalysisResult:
    """
    Tokenize and parse ``source``, collecting diagnostics.

    Parameters:
        source (str): Tranquility source text.

    Returns:
        AnalysisResult: tokens, the AST when parsing succeeded, and diagnostics.
    """
    tokens = tokenize(source)
    result = AnalysisResult(tokens)
    reporter = DiagnosticReporter()

    for token in tokens:
        if token.kind == UNRECOGNIZED:
            reporter.report(token, unrecognized_message(token.text))

    try:
        result.ast = Parser(tokens, reporter).parse()
    except TokenError as e:
        reporter.report(e.token, e.message, e.severity)

    result.diagnostics = reporter.diagnostics
    return result
