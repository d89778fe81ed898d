"""Lexer for Tranquility.

The lexer walks the source text from left to right. At every position the
token rules are tried in priority order and the first rule that matches wins,
which is why keywords are listed before identifiers and ``<<`` before ``<``.
The rules are compiled into a single alternation of named groups; Python's
regex alternation is ordered, so the winning group is the highest priority
rule that matches at the cursor.

Whitespace and ``#`` comments are matched like any other token and then
dropped. A run of newlines becomes one ``NEWLINE`` token, and consecutive
``NEWLINE`` tokens (blank lines holding only spaces or comments) are merged so
a blank line never produces more than one.

Anything no other rule accepts is swallowed by the ``UNRECOGNIZED`` fallback,
so tokenizing never fails on user input; the parser and the analysis pipeline
report those tokens instead.


File: lexer.py
Version: 0.1.0
License: MIT
"""

import re
from typing import Iterator

from tranquility.exceptions import LexerError

# Token kinds
KEYWORD = 'KEYWORD'
IDENTIFIER = 'IDENTIFIER'
INTEGER = 'INTEGER'
STRING = 'STRING'
CHARACTER = 'CHARACTER'
LBRACE = 'LBRACE'
RBRACE = 'RBRACE'
LPAREN = 'LPAREN'
RPAREN = 'RPAREN'
COLON = 'COLON'
COMMA = 'COMMA'
DOT = 'DOT'
MINUS = 'MINUS'
ADDITIVE = 'ADDITIVE'
MULTIPLICATIVE = 'MULTIPLICATIVE'
COMPARISON = 'COMPARISON'
BITWISE_COMPARISON = 'BITWISE_COMPARISON'
BITWISE_SHIFT = 'BITWISE_SHIFT'
BITWISE_NOT = 'BITWISE_NOT'
XOR = 'XOR'
NEWLINE = 'NEWLINE'
WHITESPACE = 'WHITESPACE'
COMMENT = 'COMMENT'
UNRECOGNIZED = 'UNRECOGNIZED'
EOF = 'EOF'

KEYWORDS = ('else', 'fun', 'if', 'loop', 'return', 'until', 'var')

DISCARDED = (WHITESPACE, COMMENT)

# Priority ordered. The fallback must stay last.
token_specification: list[tuple[str, str]] = [
    # Trivia
    (COMMENT,            r'\#[^\n]*'),
    (NEWLINE,            r'\n+'),
    (WHITESPACE,         r'[ \t]+'),

    # Keywords, before identifiers
    (KEYWORD,            r'(?:' + '|'.join(KEYWORDS) + r')\b'),

    # Literals
    (STRING,             r'"(?:[^"\\\n]|\\.)*"'),
    (CHARACTER,          r"'(?:[^'\\\n]|\\.)'"),
    (INTEGER,            r'[0-9]+'),

    # Delimiters
    (LBRACE,             r'\{'),
    (RBRACE,             r'\}'),
    (LPAREN,             r'\('),
    (RPAREN,             r'\)'),
    (COLON,              r':'),
    (COMMA,              r','),
    (DOT,                r'\.'),

    # Operators, longest first
    (BITWISE_SHIFT,      r'<<|>>'),
    (COMPARISON,         r'==|!=|<=|>=|<|>'),
    (MINUS,              r'-'),
    (ADDITIVE,           r'\+'),
    (MULTIPLICATIVE,     r'[*/%]'),
    (BITWISE_COMPARISON, r'[&|]'),
    (XOR,                r'\^'),
    (BITWISE_NOT,        r'~'),

    # Identifiers
    (IDENTIFIER,         r'[A-Za-z_][A-Za-z0-9_]*'),

    # Fallback
    (UNRECOGNIZED,       r'[^\n\t ]+'),
]

# Names used in diagnostics
KIND_NAMES: dict[str, str] = {
    KEYWORD: 'keyword',
    IDENTIFIER: 'identifier',
    INTEGER: 'integer',
    STRING: 'string',
    CHARACTER: 'character',
    LBRACE: 'left brace',
    RBRACE: 'right brace',
    LPAREN: 'left parentheses',
    RPAREN: 'right parentheses',
    COLON: 'colon',
    COMMA: 'comma',
    DOT: 'dot',
    MINUS: 'minus',
    ADDITIVE: 'additive',
    MULTIPLICATIVE: 'multiplicative',
    COMPARISON: 'comparison',
    BITWISE_COMPARISON: 'bitwise comparison',
    BITWISE_SHIFT: 'bitwise shift',
    BITWISE_NOT: 'bitwise not',
    XOR: 'xor',
    NEWLINE: 'newline',
    WHITESPACE: 'whitespace',
    COMMENT: 'comment',
    UNRECOGNIZED: 'unrecognized',
    EOF: 'end of input',
}

tok_regex = re.compile('|'.join(f'(?P<{name}>{pattern})' for name, pattern in token_specification))


class Token:
    """
    Represents a lexical token with a kind, its source text and position.
    """
    def __init__(self, kind, text, line, column, index=-1):
        """
        Initialize a new token.

        Parameters:
            kind (str): The token kind.
            text (str): The matched source text.
            line (int): Zero based line of the first character.
            column (int): Zero based column of the first character.
            index (int): Position in the emitted token sequence.
        """
        self.kind = kind
        self.text = text
        self.line = line
        self.column = column
        self.index = index

    @property
    def kind_name(self) -> str:
        return KIND_NAMES.get(self.kind, self.kind)

    def __repr__(self) -> str:
        """
        Return a string representation of the token.
        """
        return f"Token({self.kind}, {self.text!r}, line={self.line}, column={self.column})"


def scan(code: str) -> Iterator[Token]:
    """
    Yield every token in ``code``, including whitespace and comments.

    Joining the text of the yielded tokens reproduces ``code`` exactly.

    Raises:
        LexerError: If no rule matches at some position.
    """
    position = 0
    line = 0
    column = 0
    while position < len(code):
        match_obj = tok_regex.match(code, position)
        if match_obj is None or match_obj.end() == position:
            raise LexerError(code, position)
        kind = match_obj.lastgroup
        text = match_obj.group()
        yield Token(kind, text, line, column)

        position = match_obj.end()
        if kind == NEWLINE:
            line += len(text)
            column = 0
        else:
            column += len(text)


def tokenize(code: str) -> list[Token]:
    """
    Convert a string of source code into a list of tokens.

    Parameters:
        code (str): The source code to tokenize.

    Returns:
        list[Token]: Tokens without whitespace or comments, with
        consecutive newlines merged and ``index`` assigned.
    """
    tokens: list[Token] = []
    for token in scan(code):
        if token.kind in DISCARDED:
            continue
        if token.kind == NEWLINE and tokens and tokens[-1].kind == NEWLINE:
            continue
        token.index = len(tokens)
        tokens.append(token)
    return tokens


def describe_token(token: Token) -> str:
    """Return the token text as shown in messages."""
    if token.kind == EOF:
        return "end of input"
    return token.text.replace("\n", "\\n").replace("\r", "\\r")
