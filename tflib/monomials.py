from __future__ import annotations

from operator          import add
from typing            import Union
from typing_extensions import Self

from tflib.env        import environment
from tflib.symbols    import Symbol, ZERO_SYMBOL
from tflib.utils      import merge_with


#
# Helpers
#

def show_factors(items, lead: str = '') -> str:
    """Renders (symbol, exponent) pairs as a product like R*C^2/L.

    A leading negative exponent is written as 1/x. Exponent zero entries
    are skipped. Factors are appended to lead, which may already hold a
    weight. Returns lead unchanged if there is nothing to show.

    """
    out = lead
    first = not lead
    for sym, exp in items:
        if exp == 0:
            continue
        if first:
            if exp < 0:
                out += ('1.0' if environment.float_literals else '1') + '/'
            first = False
        else:
            out += '/' if exp < 0 else '*'
        out += str(sym)
        if abs(exp) != 1:
            out += f'^{abs(exp)}'
    return out


#
# Monomials
#

class Monomial:
    """A product of symbols raised to integer powers, e.g. R C^-1 tau^2.

    Internally a mapping from Symbol to exponent. A monomial containing the
    zero symbol raised to a nonzero power represents algebraic zero; the
    empty monomial is one.

    Monomials are used as the keys of weighted sums, so the hash covers the
    current entries. Mutate a monomial in place only while it is not held as
    a key; the arithmetic operators all return fresh values.

    """
    __slots__ = ('exponents',)

    def __init__(self, exponents: dict[Symbol, int] | None = None) -> None:
        self.exponents: dict[Symbol, int] = {}
        if exponents:
            for sym, exp in exponents.items():
                self.exponents[Symbol(sym)] = exp

    @classmethod
    def of(cls, *factors: Union[str, Symbol]) -> Monomial:
        "Multiplies the given symbols (or names) together, e.g., Monomial.of('R', 'C')."
        mono = cls()
        for factor in factors:
            mono *= factor
        return mono

    @classmethod
    def zero(cls) -> Self:
        return cls({ZERO_SYMBOL: 1})

    @classmethod
    def one(cls) -> Self:
        return cls()

    def copy(self) -> Monomial:
        return self.__class__(self.exponents)

    #
    # Mapping interface
    #

    def __getitem__(self, sym: Union[str, Symbol]) -> int:
        return self.exponents.get(Symbol(sym), 0)

    def __contains__(self, sym) -> bool:
        return Symbol(sym) in self.exponents

    def __iter__(self):
        return iter(self.exponents)

    def __len__(self) -> int:
        return len(self.exponents)

    def items(self):
        return self.exponents.items()

    def sorted_items(self) -> list[tuple[Symbol, int]]:
        return sorted(self.exponents.items())

    @property
    def sort_key(self) -> tuple:
        return tuple((sym.name, exp) for sym, exp in self.sorted_items())

    def degree(self) -> int:
        "Total degree, the sum of all exponents."
        return sum(self.exponents.values())

    #
    # Identities and canonical form
    #

    def is_zero(self) -> bool:
        for sym, exp in self.exponents.items():
            if sym.is_zero() and exp != 0:
                return True
        return False

    def is_one(self) -> bool:
        for sym, exp in self.exponents.items():
            if not sym.is_one() and exp != 0:
                return False
        return True

    def is_canonical(self) -> bool:
        if self.is_zero():
            return self.exponents == {ZERO_SYMBOL: 1}
        for sym, exp in self.exponents.items():
            if not sym.is_canonical() or exp == 0 or sym.is_one():
                return False
        return True

    def canonicalize(self) -> None:
        if self.is_zero():
            self.exponents = {ZERO_SYMBOL: 1}
            return

        canonical: dict[Symbol, int] = {}
        for sym, exp in self.exponents.items():
            if exp == 0 or sym.is_one():
                continue
            sym.canonicalize()
            canonical[sym] = exp
        self.exponents = canonical

    #
    # Arithmetic
    #

    def __imul__(self, other) -> Self:
        if isinstance(other, (str, Symbol)):
            sym = Symbol(other)
            self.exponents[sym] = self.exponents.get(sym, 0) + 1
            return self
        if isinstance(other, Monomial):
            for sym, exp in other.exponents.items():
                self.exponents[sym] = self.exponents.get(sym, 0) + exp
            return self
        return NotImplemented

    def __itruediv__(self, other) -> Self:
        if isinstance(other, (str, Symbol)):
            sym = Symbol(other)
            self.exponents[sym] = self.exponents.get(sym, 0) - 1
            return self
        if isinstance(other, Monomial):
            for sym, exp in other.exponents.items():
                self.exponents[sym] = self.exponents.get(sym, 0) - exp
            return self
        return NotImplemented

    def __mul__(self, other) -> Monomial:
        if isinstance(other, Monomial):
            return self.__class__(merge_with(self.exponents, other.exponents, add))
        if isinstance(other, (str, Symbol)):
            result = self.copy()
            result *= other
            return result
        return NotImplemented

    def __rmul__(self, other) -> Monomial:
        if isinstance(other, (str, Symbol)):
            return Monomial.of(other) * self
        return NotImplemented

    def __truediv__(self, other) -> Monomial:
        if isinstance(other, (str, Symbol, Monomial)):
            result = self.copy()
            result /= other
            return result
        return NotImplemented

    def __rtruediv__(self, other) -> Monomial:
        if isinstance(other, (str, Symbol)):
            return Monomial.of(other) / self
        return NotImplemented

    def invert(self) -> Monomial:
        "Returns the reciprocal, negating every exponent."
        return self.__class__({sym: -exp for sym, exp in self.exponents.items()})

    def __pow__(self, n) -> Monomial:
        if not isinstance(n, int):
            return NotImplemented
        if n == 0:
            return self.one()
        return self.__class__({sym: exp * n for sym, exp in self.exponents.items()})

    #
    # Comparison and display
    #

    def __eq__(self, other) -> bool:
        if isinstance(other, Monomial):
            return self.exponents == other.exponents
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self.exponents.items()))

    def __lt__(self, other) -> bool:
        if isinstance(other, Monomial):
            return self.sort_key < other.sort_key
        return NotImplemented

    def __str__(self) -> str:
        if self.is_zero():
            return '0'
        shown = show_factors(self.sorted_items())
        return shown or '1'

    def __repr__(self) -> str:
        return f"Monomial({str(self)!r})"


def monomial(*factors: Union[str, Symbol]) -> Monomial:
    "Returns the product of the given symbols as a monomial."
    return Monomial.of(*factors)
