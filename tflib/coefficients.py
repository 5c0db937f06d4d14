from __future__ import annotations

from collections.abc   import Iterable, Mapping
from numbers           import Number
from typing            import Union
from typing_extensions import TypeAlias

from tflib.env          import environment
from tflib.exceptions   import ConstructionError, EvaluationError
from tflib.monomials    import Monomial, show_factors
from tflib.symbols      import Symbol
from tflib.weighted_sums import WeightedSum


#
# Helpers
#

def show_weight(w) -> str:
    "Renders a weight as an integer, or as a float literal if the environment asks."
    if environment.float_literals:
        return f'{w}.0' if isinstance(w, int) else f'{float(w):.1f}'
    return str(w)

def show_term(key: Monomial, weight) -> str:
    "Renders a single weighted monomial, e.g., -2*R/C."
    sign = '-' if weight < 0 else ''
    magnitude = abs(weight)
    lead = '' if magnitude == 1 else show_weight(magnitude)
    shown = show_factors(key.sorted_items(), lead)
    return sign + (shown or show_weight(1))

def show_terms(terms: list[tuple[Monomial, int]]) -> str:
    "Renders a signed sum of weighted monomials, e.g., R - 2*C + 1."
    out = ''
    for key, weight in terms:
        if weight == 0:
            continue
        if not out:
            out = show_term(key, weight)
        elif weight < 0:
            out += ' - ' + show_term(key, -weight)
        else:
            out += ' + ' + show_term(key, weight)
    return out or show_weight(0)

def join_sum(left: str, right: str) -> str:
    if right.startswith('-'):
        return f'{left} - {right[1:]}'
    return f'{left} + {right}'


#
# Coefficients
#

class Coefficient(WeightedSum):
    """An exact symbolic linear combination of monomials with integer weights.

    This is the value occupying one slot of a transfer-function polynomial,
    e.g., 2*R*C - tau^2. Integers, symbol names, Symbols, and Monomials are
    accepted as operands wherever a Coefficient is.

    """
    key_type = Monomial

    def _as_key(self, other):
        if isinstance(other, Monomial):
            return other
        if isinstance(other, (str, Symbol)):
            return Monomial.of(other)
        return None

    @classmethod
    def from_symbol(cls, name: Union[str, Symbol]) -> Coefficient:
        return cls.from_key(Monomial.of(name))

    @classmethod
    def from_int(cls, n: int) -> Coefficient:
        return cls.constant(n)

    #
    # Common factors
    #

    @staticmethod
    def common_coeffs(monomials: Iterable[Monomial]) -> Monomial:
        """Computes the greatest monomial factor shared by all the given monomials.

        A symbol is kept only if it appears in every monomial with exponents
        all of the same sign, and then with the exponent closest to zero.
        Symbols that are missing anywhere, or whose exponents change sign,
        are left out. No monomials at all gives one.

        """
        common: dict[Symbol, int] | None = None
        for mono in monomials:
            if common is None:
                common = dict(mono.items())
                continue
            for sym, q in list(common.items()):
                p = mono.exponents.get(sym)
                if p is None:
                    del common[sym]
                elif q >= 0 and p >= 0:
                    if p < q:
                        common[sym] = p
                elif q < 0 and p < 0:
                    if p > q:
                        common[sym] = p
                else:
                    del common[sym]
        return Monomial(common)

    def common_factor(self) -> Monomial:
        "The common monomial factor of this coefficient's terms."
        return self.common_coeffs(self.terms.keys())

    def monomials(self) -> list[Monomial]:
        return list(self.terms.keys())

    #
    # Numeric substitution
    #

    def evaluate(self, values: Mapping):
        """Substitutes numbers for every symbol and returns the numeric value.

        `values` maps symbol names (or Symbols) to numbers. Every symbol in
        the coefficient must be given a value.

        """
        total = 0
        for key, weight in self.terms.items():
            term = weight
            for sym, exp in key.items():
                if sym.name in values:
                    value = values[sym.name]
                elif sym in values:
                    value = values[sym]
                else:
                    raise EvaluationError(f'No value given for symbol {sym} in {self}.')
                try:
                    term = term * value ** exp
                except ZeroDivisionError:
                    raise EvaluationError(f'Symbol {sym} is zero but appears with power {exp} in {self}.')
            total = total + term
        return total

    #
    # Display
    #

    def __str__(self) -> str:
        """Renders the coefficient with an attempt at a readable factoring.

        The common monomial factor is pulled out front. If the remaining
        terms split into two groups of several terms each by the first
        symbol appearing with a positive power, the two groups are shown
        as a sum of separately factored parts.

        """
        terms = self.sorted_items()
        if len(terms) == 0:
            return show_weight(0)
        if len(terms) == 1:
            key, weight = terms[0]
            return show_term(key, weight)

        common = self.common_factor()
        common.canonicalize()
        prefix = show_factors(common.sorted_items())

        reduced = []
        for key, weight in terms:
            reduced_key = key / common
            reduced_key.canonicalize()
            reduced.append((reduced_key, weight))

        split_on = [sym for key, _ in reduced for sym, exp in key.sorted_items()
                    if exp > 0 and not sym.is_one() and not sym.is_zero()]
        if len(split_on) > 1:
            split = split_on[0]
            with_split = Coefficient()
            without_split = Coefficient()
            for key, weight in reduced:
                group = with_split if key[split] > 0 else without_split
                group._accumulate(key, weight)

            if (len(with_split) > 1 and len(without_split) > 1 and
               not with_split.is_one() and not without_split.is_one()):
                grouped = join_sum(str(with_split), str(without_split))
                return f'{prefix}*({grouped})' if prefix else grouped

        body = show_terms(reduced)
        return f'{prefix}*({body})' if prefix else body


CoefficientLike: TypeAlias = Union[Coefficient, Monomial, Symbol, str, int]


#
# Coefficient constructors (use these not the class constructors)
#

def coefficient(x: CoefficientLike) -> Coefficient:
    """Converts an integer, a symbol name, a Symbol, or a Monomial to a Coefficient.

    Coefficients are copied.

    """
    if isinstance(x, Coefficient):
        return x.copy()
    if isinstance(x, Monomial):
        return Coefficient.from_key(x)
    if isinstance(x, (str, Symbol)):
        return Coefficient.from_symbol(x)
    if isinstance(x, Number) and not isinstance(x, bool):
        if not isinstance(x, int):
            raise ConstructionError(f'Symbolic coefficients have integer weights, got {x!r}.')
        return Coefficient.from_int(x)
    raise ConstructionError(f'Cannot convert {x!r} to a symbolic coefficient.')
