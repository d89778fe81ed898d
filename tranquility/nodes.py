"""AST nodes for Tranquility.

One dataclass per grammar production. Children are owned by their parent
node; nothing is shared between subtrees. Expression nodes carry the
``return_type`` computed while parsing, one of the :class:`ReturnType`
values.


File: nodes.py
Version: 0.1.0
License: MIT
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from tranquility.lexer import Token


class ReturnType:
    """Static types computed for expressions."""
    ANY = 'any'
    INTEGER = 'integer'
    STRING = 'string'
    BOOLEAN = 'boolean'
    ADDRESS = 'address'


def operands_match(left: str, right: str) -> bool:
    """
    Return ``True`` if a binary operator accepts operands of these types.

    ``any`` matches everything and addresses are usable as integers.
    """
    if left == right:
        return True
    if ReturnType.ANY in (left, right):
        return True
    return {left, right} == {ReturnType.ADDRESS, ReturnType.INTEGER}


# Expressions

@dataclass
class Literal:
    token: Token
    return_type: str

    @property
    def value(self) -> str:
        return self.token.text


@dataclass
class VariableReference:
    token: Token
    return_type: str = ReturnType.ADDRESS

    @property
    def name(self) -> str:
        return self.token.text


@dataclass
class FunctionCall:
    token: Token
    arguments: list['Expression'] = field(default_factory=list)
    return_type: str = ReturnType.ANY

    @property
    def name(self) -> str:
        return self.token.text


@dataclass
class Group:
    """Parenthesised expression; ``expression`` is ``None`` for ``()``."""
    token: Token
    expression: Optional['Expression'] = None
    return_type: str = ReturnType.ANY


@dataclass
class Dereference:
    token: Token
    operand: 'Expression'
    return_type: str = ReturnType.ANY


@dataclass
class Negation:
    token: Token
    operand: 'Expression'
    return_type: str = ReturnType.INTEGER


@dataclass
class BitwiseNegation:
    token: Token
    operand: 'Expression'
    return_type: str = ReturnType.INTEGER


@dataclass
class BinaryExpression:
    operator: Token
    left: 'Expression'
    right: 'Expression'
    return_type: str

    @property
    def token(self) -> Token:
        return self.operator


Expression = Union[
    Literal, VariableReference, FunctionCall, Group,
    Dereference, Negation, BitwiseNegation, BinaryExpression,
]


# Statements

@dataclass
class StatementList:
    statements: list['Statement'] = field(default_factory=list)

    def __iter__(self):
        return iter(self.statements)

    def __len__(self) -> int:
        return len(self.statements)


@dataclass
class IfStatement:
    token: Token
    condition: Expression
    body: StatementList
    else_body: Union['IfStatement', StatementList, None] = None


@dataclass
class UntilStatement:
    token: Token
    condition: Expression


@dataclass
class LoopStatement:
    token: Token
    body: Optional[StatementList] = None


@dataclass
class ReturnStatement:
    token: Token
    expression: Optional[Expression] = None


@dataclass
class AssignmentStatement:
    token: Token
    target: Expression
    value: Expression


@dataclass
class ExpressionStatement:
    expression: Expression


Statement = Union[
    IfStatement, UntilStatement, LoopStatement, ReturnStatement,
    AssignmentStatement, ExpressionStatement,
]


# Declarations

@dataclass
class IdentifierList:
    tokens: list[Token] = field(default_factory=list)

    @property
    def names(self) -> list[str]:
        return [token.text for token in self.tokens]


@dataclass
class VarList:
    """Consecutive ``var`` lines; one identifier list per line."""
    declarations: list[IdentifierList] = field(default_factory=list)

    @property
    def names(self) -> list[str]:
        return [name for ids in self.declarations for name in ids.names]

    @property
    def tokens(self) -> list[Token]:
        return [token for ids in self.declarations for token in ids.tokens]


@dataclass
class FunctionDeclaration:
    token: Token
    parameters: Optional[IdentifierList] = None
    var_list: Optional[VarList] = None
    body: Optional[StatementList] = None

    @property
    def name(self) -> str:
        return self.token.text

    @property
    def arity(self) -> int:
        return len(self.parameters.tokens) if self.parameters else 0


@dataclass
class Program:
    functions: list[FunctionDeclaration] = field(default_factory=list)
    var_list: Optional[VarList] = None

    def find_function(self, name: str) -> Optional[FunctionDeclaration]:
        for func in self.functions:
            if func.name == name:
                return func
        return None
