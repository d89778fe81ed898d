"""
Statement parsing utilities for Tranquility.

These functions operate on a `tranquility.parser.parser.Parser` instance and
handle the program structure (variable lists and function declarations) and
the statement forms: conditionals, loops, `until`, `return`, assignments and
expression statements.

Every statement consumes its own terminating newline. Declarations are
entered into the scope chain as they are parsed, so a name is only visible
after the point it is declared.
"""

from typing import TYPE_CHECKING

from tranquility.builtin_table import ENTRY_POINT
from tranquility.exceptions import TokenError
from tranquility.lexer import (
    COLON,
    COMMA,
    IDENTIFIER,
    KEYWORD,
    LBRACE,
    LPAREN,
    NEWLINE,
    RBRACE,
    RPAREN,
    describe_token,
)
from tranquility.nodes import (
    AssignmentStatement,
    ExpressionStatement,
    FunctionDeclaration,
    IdentifierList,
    IfStatement,
    LoopStatement,
    Program,
    ReturnStatement,
    StatementList,
    UntilStatement,
    VarList,
)
from tranquility.scope import ELSE, FUNCTION, IF, LOOP

if TYPE_CHECKING:
    from tranquility.parser import Parser


STATEMENT_KEYWORDS = ('if', 'until', 'loop', 'return')


def parse_program(parser: 'Parser') -> Program:
    """
    Parse a whole program.

    Syntax:
        <var-list>? <fun-list>

    Args:
        parser: The parser instance.

    Returns:
        Program: the root node.
    """
    # Blank or comment-only lines before the first declaration
    while parser.peek(NEWLINE):
        parser.advance(NEWLINE)

    program = Program()
    if parser.peek(KEYWORD, 'var'):
        program.var_list = parser.var_list()

    if not parser.peek(KEYWORD, 'fun'):
        tok = parser.curr_token
        if parser.at_end():
            raise TokenError(tok, 'Expected at least one function declaration')
        raise TokenError(
            tok,
            f'Unexpected token "{describe_token(tok)}" - Expected a function list or variable list'
        )
    program.functions = parser.function_list()

    if not parser.at_end():
        tok = parser.curr_token
        raise TokenError(
            tok, f'Unexpected token "{describe_token(tok)}" - Expected a function declaration'
        )
    return program


def parse_function_list(parser: 'Parser') -> list:
    """
    Parse one or more function declarations.

    Syntax:
        <fun-decl>+
    """
    functions = [parser.function_declaration()]
    while parser.peek(KEYWORD, 'fun'):
        functions.append(parser.function_declaration())
    return functions


def parse_function_declaration(parser: 'Parser') -> FunctionDeclaration:
    """
    Parse a function declaration.

    Syntax:
        fun <identifier> ( <id-list>? ) { \\n <var-list>? <stmt-list>? } \\n

    The function is declared in the enclosing scope before its body is
    parsed, so it may call itself. Parameters are declared in the
    function's own scope. ``init`` may always be declared; any other name
    already visible as a function is rejected.

    Args:
        parser: The parser instance.

    Returns:
        FunctionDeclaration: the declaration node.
    """
    parser.advance(KEYWORD, 'fun')
    name_tok = parser.advance(IDENTIFIER)
    name = name_tok.text
    if name != ENTRY_POINT and parser.scopes.has_function(name):
        raise TokenError(
            name_tok,
            f'There already exists a function with the name "{name}" in the current scope. '
            f'Choose a different name.'
        )

    parser.advance(LPAREN)
    parameters = None
    if not parser.peek(RPAREN):
        parameters = parser.identifier_list()
    parser.advance(RPAREN)

    enclosing = parser.scopes.current
    parser.advance(LBRACE, scope_kind=FUNCTION)
    node = FunctionDeclaration(name_tok, parameters)
    parser.scopes.declare_function(name, node.arity, name_tok, scope=enclosing)
    if parameters is not None:
        for param in parameters.tokens:
            parser.scopes.declare_variable(param)
    parser.advance(NEWLINE)

    if parser.peek(KEYWORD, 'var'):
        node.var_list = parser.var_list()
    if not parser.peek(RBRACE):
        node.body = parser.statement_list()
    parser.advance(RBRACE)

    # The last declaration in a file may end without a newline
    if not parser.at_end():
        parser.advance(NEWLINE)
    return node


def parse_identifier_list(parser: 'Parser') -> IdentifierList:
    """
    Parse comma separated identifiers.

    Syntax:
        <identifier> (, <identifier>)*
    """
    node = IdentifierList([parser.advance(IDENTIFIER)])
    while parser.peek(COMMA):
        parser.advance(COMMA)
        node.tokens.append(parser.advance(IDENTIFIER))
    return node


def parse_var_list(parser: 'Parser') -> VarList:
    """
    Parse consecutive variable declarations.

    Syntax:
        (var <id-list> \\n)+

    Raises:
        TokenError: If a name is already visible from the current scope.
    """
    node = VarList()
    while parser.peek(KEYWORD, 'var'):
        parser.advance(KEYWORD, 'var')
        identifiers = parser.identifier_list()
        for tok in identifiers.tokens:
            parser.scopes.declare_variable(tok)
        parser.advance(NEWLINE)
        node.declarations.append(identifiers)
    return node


def parse_statement_list(parser: 'Parser') -> StatementList:
    """
    Parse statements up to, not including, the closing brace.
    """
    node = StatementList()
    node.statements.append(parser.statement())
    while not parser.peek(RBRACE):
        node.statements.append(parser.statement())
    return node


def parse_statement(parser: 'Parser'):
    """
    Parse a single statement.

    Args:
        parser: The parser instance.

    Returns:
        The statement node.
    """
    tok = parser.curr_token
    if tok.kind == KEYWORD:
        if tok.text == 'if':
            return parser.parse_if()
        elif tok.text == 'until':
            return parser.parse_until()
        elif tok.text == 'loop':
            return parser.parse_loop()
        elif tok.text == 'return':
            return parser.parse_return()
        raise TokenError(tok, f'Unexpected token "{tok.text}" - Expected a statement.')

    expression = parser.expr()
    if parser.peek(COLON):
        colon_tok = parser.advance(COLON)
        value = parser.expr()
        parser.advance(NEWLINE)
        return AssignmentStatement(colon_tok, expression, value)

    if parser.peek(NEWLINE):
        parser.advance(NEWLINE)
        return ExpressionStatement(expression)

    tok = parser.curr_token
    raise TokenError(tok, f'Unexpected token "{describe_token(tok)}" - Expected a statement.')


def parse_if(parser: 'Parser') -> IfStatement:
    """
    Parse a conditional 'if' statement with an optional else branch.

    Syntax:
        if <expr> { \\n <stmt-list> } \\n (else (<if-stmt> | { \\n <stmt-list> } \\n))?

    Args:
        parser: The parser instance.

    Returns:
        IfStatement: the conditional node.
    """
    if_tok = parser.advance(KEYWORD, 'if')
    condition = parser.expr()
    parser.advance(LBRACE, scope_kind=IF)
    parser.advance(NEWLINE)
    body = parser.statement_list()
    parser.advance(RBRACE)
    parser.advance(NEWLINE)

    node = IfStatement(if_tok, condition, body)
    if parser.peek(KEYWORD, 'else'):
        parser.advance(KEYWORD, 'else')
        if parser.peek(KEYWORD, 'if'):
            node.else_body = parser.parse_if()
        else:
            parser.advance(LBRACE, scope_kind=ELSE)
            parser.advance(NEWLINE)
            node.else_body = parser.statement_list()
            parser.advance(RBRACE)
            parser.advance(NEWLINE)
    return node


def parse_until(parser: 'Parser') -> UntilStatement:
    """
    Parse an 'until' statement.

    Syntax:
        until <expr> \\n

    Only an `until` directly in a loop body marks that loop as terminating;
    elsewhere the statement is accepted and marks nothing.
    """
    tok = parser.advance(KEYWORD, 'until')
    scope = parser.scopes.current
    if scope.kind == LOOP:
        scope.has_until = True
    condition = parser.expr()
    parser.advance(NEWLINE)
    return UntilStatement(tok, condition)


def parse_loop(parser: 'Parser') -> LoopStatement:
    """
    Parse a 'loop' statement.

    Syntax:
        loop { \\n <stmt-list>? } \\n

    Raises:
        TokenError: If the body has no `until` statement.
    """
    loop_tok = parser.advance(KEYWORD, 'loop')
    parser.advance(LBRACE, scope_kind=LOOP)
    loop_scope = parser.scopes.current
    parser.advance(NEWLINE)

    node = LoopStatement(loop_tok)
    if not parser.peek(RBRACE):
        node.body = parser.statement_list()
    if not loop_scope.has_until:
        raise TokenError(loop_tok, 'Infinite loop: Loop statement is missing `until` statement.')
    parser.advance(RBRACE)
    parser.advance(NEWLINE)
    return node


def parse_return(parser: 'Parser') -> ReturnStatement:
    """
    Parse a 'return' statement with an optional value.

    Syntax:
        return <expr>? \\n
    """
    tok = parser.advance(KEYWORD, 'return')
    node = ReturnStatement(tok)
    if not parser.peek(NEWLINE):
        node.expression = parser.expr()
    parser.advance(NEWLINE)
    return node
