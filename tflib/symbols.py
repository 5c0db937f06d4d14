from __future__ import annotations

import sys

from functools         import total_ordering
from typing_extensions import Self

from tflib.exceptions import ConstructionError


#
# Symbols
#

@total_ordering
class Symbol:
    """An immutable, interned name such as a component (R1, C2) or a parameter (tau).

    Two reserved names, "0" and "1", stand in for the additive and
    multiplicative identities where a symbol-shaped zero or one is needed.
    Constructing a Symbol twice with the same name yields the same object.

    """
    __slots__ = ('name',)

    _interned: dict[str, Symbol] = {}

    def __new__(cls, name: str) -> Symbol:
        if isinstance(name, Symbol):
            return name
        if not isinstance(name, str) or not name:
            raise ConstructionError(f'A symbol name must be a non-empty string, got {name!r}.')
        existing = cls._interned.get(name)
        if existing is not None:
            return existing
        sym = super().__new__(cls)
        object.__setattr__(sym, 'name', sys.intern(name))
        cls._interned[name] = sym
        return sym

    def __setattr__(self, attr, value):
        raise AttributeError('Symbols are immutable.')

    def __reduce__(self):
        return (Symbol, (self.name,))

    @classmethod
    def zero(cls) -> Self:
        return cls('0')

    @classmethod
    def one(cls) -> Self:
        return cls('1')

    def is_zero(self) -> bool:
        return self.name == '0'

    def is_one(self) -> bool:
        return self.name == '1'

    def is_canonical(self) -> bool:
        return True

    def canonicalize(self) -> None:
        pass

    def copy(self) -> Symbol:
        return self

    def __eq__(self, other) -> bool:
        if isinstance(other, Symbol):
            return self.name == other.name
        return NotImplemented

    def __lt__(self, other) -> bool:
        if isinstance(other, Symbol):
            return self.name < other.name
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f'Symbol({self.name!r})'

ZERO_SYMBOL = Symbol.zero()
ONE_SYMBOL = Symbol.one()


#
# Symbol constructors
#

def symbol(name: str | Symbol) -> Symbol:
    "Returns the symbol with the given name, typically a component like R1 or C."
    return Symbol(name)

def symbols(*names: str) -> tuple[Symbol, ...]:
    "Returns a tuple of symbols, one per name."
    return tuple(Symbol(name) for name in names)
