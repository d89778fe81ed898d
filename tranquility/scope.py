"""Lexical scopes.

Scopes are stored in an arena and refer to their parent by index, so the
chain can only be walked upwards. The parser owns a single
:class:`ScopeTracker` per parse and moves its current scope whenever it
consumes a brace: ``{`` enters a new scope, ``}`` exits to the parent.

Tranquility forbids shadowing. A variable may not be declared if a variable
of the same name is visible anywhere in the chain, parameters included.

Only a ``loop`` scope ever has ``has_until`` set; nested loops track the flag
independently.


File: scope.py
Version: 0.1.0
License: MIT
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional

from tranquility.builtin_table import BUILTIN_FUNCTIONS
from tranquility.exceptions import ScopeError, TokenError

# Scope kinds
GLOBAL = 'global'
FUNCTION = 'function'
LOOP = 'loop'
IF = 'if'
ELSE = 'else'

SCOPE_KINDS = (GLOBAL, FUNCTION, LOOP, IF, ELSE)


@dataclass
class FunctionSymbol:
    """A declared or built-in function visible in a scope."""

    name: str
    arity: int
    token: object = None


@dataclass
class VariableSymbol:
    """A declared variable or parameter."""

    name: str
    token: object
    type: str = 'any'


@dataclass
class Scope:
    """One lexical scope; ``parent`` is an index into the tracker's arena."""

    id: int
    kind: str
    parent: Optional[int] = None
    functions: list[FunctionSymbol] = field(default_factory=list)
    variables: list[VariableSymbol] = field(default_factory=list)
    has_until: bool = False


class ScopeTracker:
    """
    Chain of nested scopes rooted at the global scope.
    """
    def __init__(self):
        root = Scope(0, GLOBAL)
        for func in BUILTIN_FUNCTIONS:
            root.functions.append(FunctionSymbol(func.name, func.parameter_count))
        self.scopes: list[Scope] = [root]
        self.current_id = 0

    @property
    def root(self) -> Scope:
        return self.scopes[0]

    @property
    def current(self) -> Scope:
        return self.scopes[self.current_id]

    @property
    def depth(self) -> int:
        return sum(1 for _ in self.chain()) - 1

    def enter(self, kind: str) -> Scope:
        """
        Create a child of the current scope and make it current.

        Raises:
            ScopeError: If ``kind`` is not a nested scope kind.
        """
        if kind not in SCOPE_KINDS or kind == GLOBAL:
            raise ScopeError(f"Cannot open a scope of kind {kind!r}")
        scope = Scope(len(self.scopes), kind, parent=self.current_id)
        self.scopes.append(scope)
        self.current_id = scope.id
        return scope

    def exit(self) -> Scope:
        """
        Make the parent of the current scope current and return it.

        Raises:
            ScopeError: If the current scope is the global scope.
        """
        parent = self.current.parent
        if parent is None:
            raise ScopeError("Cannot exit the global scope")
        self.current_id = parent
        return self.current

    def chain(self, scope: Optional[Scope] = None) -> Iterator[Scope]:
        """Yield ``scope`` (default: current) and its ancestors, nearest first."""
        scope_id = self.current_id if scope is None else scope.id
        while scope_id is not None:
            scope = self.scopes[scope_id]
            yield scope
            scope_id = scope.parent

    def all_functions(self, scope: Optional[Scope] = None) -> list[FunctionSymbol]:
        return [func for s in self.chain(scope) for func in s.functions]

    def all_variables(self, scope: Optional[Scope] = None) -> list[VariableSymbol]:
        return [var for s in self.chain(scope) for var in s.variables]

    def has_variable(self, name: str, scope: Optional[Scope] = None) -> bool:
        return any(var.name == name for var in self.all_variables(scope))

    def has_function(self, name: str, scope: Optional[Scope] = None) -> bool:
        return any(func.name == name for func in self.all_functions(scope))

    def find_function(self, name: str, scope: Optional[Scope] = None) -> Optional[FunctionSymbol]:
        """Return the nearest function called ``name``; later declarations win within a scope."""
        for s in self.chain(scope):
            for func in reversed(s.functions):
                if func.name == name:
                    return func
        return None

    def declare_variable(self, token, type_: str = 'any') -> VariableSymbol:
        """
        Declare the identifier ``token`` in the current scope.

        Raises:
            TokenError: If the name is already visible from the current scope.
        """
        if self.has_variable(token.text):
            raise TokenError(token, f'Duplicate identifier "{token.text}"')
        variable = VariableSymbol(token.text, token, type_)
        self.current.variables.append(variable)
        return variable

    def declare_function(self, name: str, arity: int, token=None,
                         scope: Optional[Scope] = None) -> FunctionSymbol:
        """Record a function in ``scope`` (default: current)."""
        func = FunctionSymbol(name, arity, token)
        (scope or self.current).functions.append(func)
        return func
