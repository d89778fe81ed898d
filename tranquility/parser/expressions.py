"""
Expression parsing utilities for Tranquility.

These functions operate on a `tranquility.parser.parser.Parser` instance and
implement the recursive descent logic for expressions, maintaining operator
precedence and left associativity.

Every binary level checks that its operand types are compatible and warns
when either operand is an address, which usually means a missing `.`
dereference.
"""

from typing import TYPE_CHECKING

from tranquility.exceptions import TokenError
from tranquility.lexer import (
    ADDITIVE,
    BITWISE_COMPARISON,
    BITWISE_NOT,
    BITWISE_SHIFT,
    CHARACTER,
    COMMA,
    COMPARISON,
    DOT,
    IDENTIFIER,
    INTEGER,
    LPAREN,
    MINUS,
    MULTIPLICATIVE,
    RPAREN,
    STRING,
    XOR,
    describe_token,
)
from tranquility.nodes import (
    BinaryExpression,
    BitwiseNegation,
    Dereference,
    FunctionCall,
    Group,
    Literal,
    Negation,
    ReturnType,
    VariableReference,
    operands_match,
)

if TYPE_CHECKING:
    from tranquility.parser import Parser


UNSAFE_POINTER_ARITHMETIC = (
    'Unsafe pointer arithmetic. Did you mean to get the value stored at a '
    'memory location with "."?'
)

VALID_ESCAPES = ('b', 'n', 'r', 't', '\\')

LITERAL_TYPES = {
    INTEGER: ReturnType.INTEGER,
    STRING: ReturnType.STRING,
    CHARACTER: ReturnType.INTEGER,
}

# Mismatch messages by operator text
OPERATION_MESSAGES = {
    '^': 'Cannot XOR {left} with {right}',
    '&': 'Cannot bitwise compare {left} to {right}',
    '|': 'Cannot bitwise compare {left} to {right}',
    '==': 'Cannot compare {left} to {right}',
    '!=': 'Cannot compare {left} to {right}',
    '<': 'Cannot compare {left} to {right}',
    '>': 'Cannot compare {left} to {right}',
    '<=': 'Cannot compare {left} to {right}',
    '>=': 'Cannot compare {left} to {right}',
    '<<': 'Cannot shift {left} by {right}',
    '>>': 'Cannot shift {left} by {right}',
    '+': 'Cannot add {left} to {right}',
    '-': 'Cannot subtract {right} from {left}',
    '*': 'Cannot multiply {left} by {right}',
    '/': 'Cannot divide {left} by {right}',
    '%': 'Cannot take the remainder of {left} by {right}',
}


def _with_article(type_name: str) -> str:
    article = 'an' if type_name[:1] in 'aeiou' else 'a'
    return f'{article} {type_name}'


def _parse_binary(parser: 'Parser', operand, kinds: tuple, result_type: str):
    """
    Parse one left associative precedence level.

    Parameters:
        parser: The parser instance.
        operand: Callable parsing the next higher precedence level.
        kinds: Token kinds of the operators at this level.
        result_type: Return type of a node built at this level.
    """
    node = operand()
    while parser.curr_token.kind in kinds:
        op_tok = parser.advance()
        right = operand()
        if not operands_match(node.return_type, right.return_type):
            template = OPERATION_MESSAGES.get(op_tok.text, 'Cannot combine {left} with {right}')
            raise TokenError(op_tok, template.format(
                left=_with_article(node.return_type),
                right=_with_article(right.return_type),
            ))
        if ReturnType.ADDRESS in (node.return_type, right.return_type):
            parser.warn(op_tok, UNSAFE_POINTER_ARITHMETIC)
        node = BinaryExpression(op_tok, node, right, result_type)
    return node


# ---- Highest precedence ----

def parse_unary(parser: 'Parser'):
    """Parse a call, literal, variable reference, group or prefix operator."""
    tok = parser.curr_token

    if parser.peek(IDENTIFIER) and parser.peek_next(LPAREN):
        return _parse_call(parser)

    if tok.kind in LITERAL_TYPES:
        return parser.literal()

    if tok.kind == IDENTIFIER:
        parser.advance(IDENTIFIER)
        if not parser.scopes.has_variable(tok.text):
            raise TokenError(tok, f'Variable "{tok.text}" is not defined.')
        return VariableReference(tok)

    if tok.kind == LPAREN:
        parser.advance(LPAREN)
        inner = None
        if not parser.peek(RPAREN):
            inner = parser.unary()
        parser.advance(RPAREN)
        return_type = inner.return_type if inner is not None else ReturnType.ANY
        return Group(tok, inner, return_type)

    if tok.kind == DOT:
        parser.advance(DOT)
        return Dereference(tok, parser.unary())

    if tok.kind == MINUS:
        parser.advance(MINUS)
        return Negation(tok, parser.unary())

    if tok.kind == BITWISE_NOT:
        parser.advance(BITWISE_NOT)
        return BitwiseNegation(tok, parser.unary())

    raise TokenError(tok, f'Unexpected token "{describe_token(tok)}" - Expected expression.')


def _parse_call(parser: 'Parser') -> FunctionCall:
    name_tok = parser.advance(IDENTIFIER)
    func = parser.scopes.find_function(name_tok.text)
    if func is None:
        raise TokenError(name_tok, f'Function "{name_tok.text}" is undefined')

    parser.advance(LPAREN)
    arguments = []
    if not parser.peek(RPAREN):
        arguments = parser.expression_list()
    if func.arity != len(arguments):
        plural = '' if func.arity == 1 else 's'
        raise TokenError(
            name_tok,
            f'Incorrect number of arguments: Expected {func.arity} argument{plural} '
            f'but received {len(arguments)}'
        )
    parser.advance(RPAREN)
    return FunctionCall(name_tok, arguments)


def parse_literal(parser: 'Parser') -> Literal:
    """Consume a literal token, validating string escape sequences."""
    tok = parser.curr_token
    if tok.kind not in LITERAL_TYPES:
        raise TokenError(tok, f'Expected a literal but found {tok.kind_name}')
    parser.advance()
    if tok.kind == STRING:
        _check_escapes(tok)
    return Literal(tok, LITERAL_TYPES[tok.kind])


def _check_escapes(tok) -> None:
    body = tok.text[1:-1]
    i = 0
    while i < len(body):
        if body[i] == '\\':
            char = body[i + 1]
            if char not in VALID_ESCAPES:
                raise TokenError(
                    tok,
                    f'Invalid escape sequence "\\{char}". Supported escape sequences '
                    f'are \\b, \\n, \\r, \\t, and \\\\'
                )
            i += 2
        else:
            i += 1


def parse_multiplicative(parser: 'Parser'):
    """Parse multiplication, division, and remainder expressions."""
    return _parse_binary(parser, parser.unary, (MULTIPLICATIVE,), ReturnType.INTEGER)


def parse_additive(parser: 'Parser'):
    """Parse addition and subtraction expressions."""
    return _parse_binary(parser, parser.multiplicative, (ADDITIVE, MINUS), ReturnType.INTEGER)


def parse_shift(parser: 'Parser'):
    """Parse bitwise shift expressions using '<<' or '>>'."""
    return _parse_binary(parser, parser.additive, (BITWISE_SHIFT,), ReturnType.INTEGER)


def parse_comparison(parser: 'Parser'):
    """Parse comparison expressions (==, !=, <, >, <=, >=)."""
    return _parse_binary(parser, parser.shift, (COMPARISON,), ReturnType.BOOLEAN)


def parse_bitwise_comparison(parser: 'Parser'):
    """Parse bitwise comparison expressions using '&' or '|'."""
    return _parse_binary(parser, parser.comparison, (BITWISE_COMPARISON,), ReturnType.BOOLEAN)


def parse_xor(parser: 'Parser'):
    """Parse bitwise XOR expressions using '^'."""
    return _parse_binary(parser, parser.bitwise_comparison, (XOR,), ReturnType.INTEGER)


def parse_expression_list(parser: 'Parser') -> list:
    """Parse one or more comma separated expressions."""
    expressions = [parser.expr()]
    while parser.peek(COMMA):
        parser.advance(COMMA)
        expressions.append(parser.expr())
    return expressions


# ---- Entry point ----

def parse_expr(parser: 'Parser'):
    """Parse an expression starting from the lowest-precedence operator."""
    return parser.xor()
