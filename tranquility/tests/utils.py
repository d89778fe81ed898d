"""
Utility functions shared across Tranquility tests.
"""
from tranquility.diagnostics import DiagnosticReporter
from tranquility.lexer import tokenize
from tranquility.parser import Parser


def parse_source(source: str, reporter: DiagnosticReporter = None):
    """
    Parse source code and return the AST.
    """
    tokens = tokenize(source)
    parser = Parser(tokens, reporter)
    return parser.parse()


def parse_with_diagnostics(source: str):
    """
    Parse source code and return the AST together with its reporter.
    """
    reporter = DiagnosticReporter()
    ast = parse_source(source, reporter)
    return ast, reporter


def wrap_in_init(*lines: str, declarations: str = "") -> str:
    """
    Build a program whose `init` body is ``lines``.
    """
    body = "".join(f"    {line}\n" for line in lines)
    return f"fun init() {{\n{declarations}{body}}}\n"


def kinds(source: str) -> list:
    """
    Return the token kinds of ``source``.
    """
    return [token.kind for token in tokenize(source)]
