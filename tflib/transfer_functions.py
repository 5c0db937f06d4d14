from __future__ import annotations

import logging
import re

from collections.abc   import Iterable, Mapping
from numbers           import Number
from typing            import Union
from typing_extensions import TypeAlias

from tflib.coefficients import Coefficient, coefficient
from tflib.domains      import Domain, as_domain
from tflib.env          import environment
from tflib.exceptions   import ConstructionError, EvaluationError, MismatchedDomain
from tflib.monomials    import Monomial
from tflib.numeric      import NumericTf, rational_tree
from tflib.output       import in_panel
from tflib.polynomials  import Polynomial
from tflib.protocols    import canonicalize, copy_of, is_zero
from tflib.symbols      import Symbol

logger = logging.getLogger(__name__)

TfLike: TypeAlias = Union['Tf', Coefficient, Monomial, Symbol, str, int]


#
# Helpers
#

def as_polynomial(value) -> Polynomial[Coefficient]:
    """Converts a Polynomial, a sequence of coefficient-like values, or a single value to a Polynomial of Coefficients.

    Sequences are taken in ascending powers. Coefficients are copied.

    """
    if isinstance(value, (Polynomial, list, tuple)):
        return Polynomial([coefficient(c) for c in value], element=Coefficient)
    return Polynomial([coefficient(value)], element=Coefficient)

def monomials_of(*polynomials: Polynomial[Coefficient]) -> list[Monomial]:
    "All the monomials appearing in any coefficient of the given polynomials."
    return [mono for p in polynomials for c in p for mono in c.monomials()]

def trim_leading_zeros(p: Polynomial) -> None:
    "Drops zero highest-power coefficients in place, keeping at least one coefficient."
    while len(p.coefficients) > 1 and is_zero(p.coefficients[-1]):
        p.coefficients.pop()

_PLAIN_TERM = re.compile(r'^[\w.]+$')


#
# Transfer Functions
#

class Tf:
    """A rational function numerator(var)/denominator(var) with symbolic coefficients.

    The transform variable is s (Laplace) or z (Z-transform) according to
    the domain, which is fixed for the life of the value. Combining values
    from different domains raises a MismatchedDomain error; the only way to
    change domain is `bilinear_transform`, which maps S to Z.

    Integers, symbol names, Symbols, Monomials, and Coefficients are
    promoted to constant transfer functions in the arithmetic operators,
    so expressions like `s()*'R'*'C' + 1` work directly. Every combining
    operation returns a fresh, simplified value.

    """
    def __init__(self, numerator=0, denominator=1, domain: Domain | str = Domain.S) -> None:
        self.numerator: Polynomial[Coefficient] = as_polynomial(numerator)
        self.denominator: Polynomial[Coefficient] = as_polynomial(denominator)
        self._domain = as_domain(domain)

    @property
    def domain(self) -> Domain:
        return self._domain

    @property
    def variable(self) -> str:
        return self._domain.variable

    @classmethod
    def var(cls, k: int = 1, domain: Domain | str = Domain.S) -> Tf:
        "The transform variable raised to the integer power k, which may be negative."
        if not isinstance(k, int):
            raise ConstructionError(f'The power of a transform variable must be an integer, got {k!r}.')
        power = [0] * abs(k) + [1]
        if k >= 0:
            return cls(power, 1, domain)
        return cls(1, power, domain)

    @classmethod
    def constant(cls, n: int, domain: Domain | str = Domain.S) -> Tf:
        return cls(n, 1, domain)

    @classmethod
    def symbol(cls, name: Union[str, Symbol], domain: Domain | str = Domain.S) -> Tf:
        "The constant transfer function given by a single named parameter."
        return cls(Coefficient.from_symbol(name), 1, domain)

    @classmethod
    def zero(cls, domain: Domain | str = Domain.S) -> Tf:
        return cls(0, 1, domain)

    @classmethod
    def one(cls, domain: Domain | str = Domain.S) -> Tf:
        return cls(1, 1, domain)

    def copy(self) -> Tf:
        return Tf(self.numerator, self.denominator, self._domain)

    def _lift(self, other) -> Tf | None:
        "Converts other to a transfer function in this domain, or None if it is not coercible."
        if isinstance(other, Tf):
            if other.domain is not self._domain:
                raise MismatchedDomain(f'Cannot combine an {self._domain}-domain and '
                                       f'a {other.domain}-domain transfer function.')
            return other
        if isinstance(other, (Coefficient, Monomial, Symbol, str)):
            return Tf(other, 1, self._domain)
        if isinstance(other, Number) and not isinstance(other, bool):
            return Tf(other, 1, self._domain)
        return None

    def order(self) -> int:
        "The order of the transfer function, the larger of the numerator and denominator orders."
        return max(self.numerator.order(), self.denominator.order())

    #
    # Identities and canonical form
    #

    def is_zero(self) -> bool:
        return self.numerator.is_zero() and not self.denominator.is_zero()

    def is_one(self) -> bool:
        return self.numerator == self.denominator and not self.denominator.is_zero()

    def common_factor(self) -> Monomial:
        "The common monomial factor of every coefficient in the numerator and denominator."
        return Coefficient.common_coeffs(monomials_of(self.numerator, self.denominator))

    def is_canonical(self) -> bool:
        """Checks that no monomial factor is shared by every coefficient and each coefficient is canonical.

        Shared zero roots at the origin are not detected here; `canonicalize`
        removes them regardless.

        """
        common = self.common_factor()
        common.canonicalize()
        return common.is_one() and self.numerator.is_canonical() and self.denominator.is_canonical()

    def canonicalize(self) -> None:
        """Simplifies the transfer function in place.

        First, shared zero roots at the origin are cancelled by dropping the
        lowest-order terms of both polynomials while both are zero. Second,
        the common monomial factor of every coefficient is divided out.
        Finally, each coefficient is put in canonical form and zero
        highest-order terms are dropped.

        """
        num = self.numerator.coefficients
        den = self.denominator.coefficients
        cancelled = 0
        while ((num or den) and
               (not num or is_zero(num[0])) and
               (not den or is_zero(den[0]))):
            if num:
                num.pop(0)
            if den:
                den.pop(0)
            cancelled += 1

        common = self.common_factor()
        common.canonicalize()
        if not common.is_one():
            divisor = Coefficient.from_key(common)
            self.numerator = self.numerator / divisor
            self.denominator = self.denominator / divisor

        for p in (self.numerator, self.denominator):
            p.canonicalize()
            trim_leading_zeros(p)
        logger.debug('canonicalize: cancelled %d origin roots, common factor %s', cancelled, common)

    def simplify(self) -> Tf:
        "Returns a simplified copy."
        result = self.copy()
        result.canonicalize()
        return result

    #
    # Field arithmetic
    #

    def _simplified(self, numerator, denominator) -> Tf:
        result = Tf(numerator, denominator, self._domain)
        result.canonicalize()
        return result

    def __add__(self, other) -> Tf:
        other = self._lift(other)
        if other is None:
            return NotImplemented
        if self.denominator == other.denominator:
            return self._simplified(self.numerator + other.numerator, self.denominator)
        return self._simplified(self.numerator * other.denominator + other.numerator * self.denominator,
                                self.denominator * other.denominator)

    def __radd__(self, other) -> Tf:
        lifted = self._lift(other)
        if lifted is None:
            return NotImplemented
        return lifted + self

    def __sub__(self, other) -> Tf:
        other = self._lift(other)
        if other is None:
            return NotImplemented
        if self.denominator == other.denominator:
            return self._simplified(self.numerator - other.numerator, self.denominator)
        return self._simplified(self.numerator * other.denominator - other.numerator * self.denominator,
                                self.denominator * other.denominator)

    def __rsub__(self, other) -> Tf:
        lifted = self._lift(other)
        if lifted is None:
            return NotImplemented
        return lifted - self

    def __mul__(self, other) -> Tf:
        other = self._lift(other)
        if other is None:
            return NotImplemented
        return self._simplified(self.numerator * other.numerator, self.denominator * other.denominator)

    def __rmul__(self, other) -> Tf:
        lifted = self._lift(other)
        if lifted is None:
            return NotImplemented
        return lifted * self

    def __truediv__(self, other) -> Tf:
        other = self._lift(other)
        if other is None:
            return NotImplemented
        return self._simplified(self.numerator * other.denominator, self.denominator * other.numerator)

    def __rtruediv__(self, other) -> Tf:
        lifted = self._lift(other)
        if lifted is None:
            return NotImplemented
        return lifted / self

    def __neg__(self) -> Tf:
        return Tf(-self.numerator, self.denominator, self._domain)

    def __pos__(self) -> Tf:
        return self.copy()

    def invert(self) -> Tf:
        "Returns the reciprocal, swapping numerator and denominator."
        return Tf(self.denominator, self.numerator, self._domain)

    def __pow__(self, n) -> Tf:
        if not isinstance(n, int):
            return NotImplemented
        base = self if n >= 0 else self.invert()
        result = Tf.one(self._domain)
        for _ in range(abs(n)):
            result = result * base
        return result

    #
    # Bilinear transform
    #

    def bilinear_transform(self, rate: Union[str, Symbol, None] = None) -> Tf:
        """Maps an S-domain transfer function to the Z domain with s = 2*rate*(z - 1)/(z + 1).

        The substitution is exact and symbolic: both polynomials are
        multiplied through by (z + 1)^N, where N is the order, so power i of s
        becomes (2*rate*z - 2*rate)^i * (z + 1)^(N - i). The numerator and
        denominator of the result each have exactly N + 1 coefficients.
        The sample rate is a symbol, named by `environment.rate_symbol` unless
        given. The result is not simplified.

        """
        if self._domain is not Domain.S:
            raise MismatchedDomain('The bilinear transform applies only to S-domain transfer functions.')
        rate = Symbol(rate if rate is not None else environment.rate_symbol)

        order = self.order()
        two_rate = Coefficient.from_key(Monomial.of(rate), 2)
        one = Coefficient.one()
        z_minus = Polynomial([-two_rate, two_rate], element=Coefficient)  # 2*rate*z - 2*rate
        z_plus = Polynomial([one, one.copy()], element=Coefficient)       # z + 1

        numerator = Polynomial([Coefficient.zero() for _ in range(order + 1)], element=Coefficient)
        denominator = Polynomial([Coefficient.zero() for _ in range(order + 1)], element=Coefficient)
        for i in range(order + 1):
            weight = z_minus ** i * z_plus ** (order - i)
            if i < len(self.numerator):
                numerator += weight * self.numerator[i]
            if i < len(self.denominator):
                denominator += weight * self.denominator[i]

        logger.debug('bilinear_transform: order %d at rate %s', order, rate)
        return Tf(numerator, denominator, Domain.Z)

    #
    # Numeric evaluation
    #

    def numeric_coefficients(self, values: Mapping) -> tuple[list, list]:
        "Numerator and denominator coefficients with numbers substituted for every symbol."
        return ([c.evaluate(values) for c in self.numerator],
                [c.evaluate(values) for c in self.denominator])

    def evaluate(self, x, values: Mapping | None = None):
        """Evaluates the transfer function at x after substituting numbers for the symbols.

        `values` maps symbol names to numbers; it can be omitted if there
        are no symbols. The point x can be any number, including complex.

        """
        b, a = self.numeric_coefficients(values or {})
        numerator = Polynomial(b)(x)
        denominator = Polynomial(a)(x)
        try:
            return numerator / denominator
        except ZeroDivisionError:
            raise EvaluationError(f'The denominator of {self} vanishes at {x}.')

    def to_numeric(self, values: Mapping | None = None) -> NumericTf:
        "Converts to a complex-valued numeric transfer function with the given symbol values."
        b, a = self.numeric_coefficients(values or {})
        return rational_tree(b, a, self._domain)

    def frequency_response(self, omega: float, values: Mapping | None = None) -> complex:
        """Evaluates the frequency response at omega.

        This is H(j omega) in the S domain and H(e^(j omega)) in the Z
        domain, where pi is the Nyquist frequency.

        """
        return self.to_numeric(values).fourier(omega)

    #
    # Comparison and display
    #

    def __eq__(self, other) -> bool:
        if isinstance(other, Tf):
            return (self._domain is other.domain and
                    self.numerator == other.numerator and
                    self.denominator == other.denominator)
        return NotImplemented

    __hash__ = None  # type: ignore

    def __str__(self) -> str:
        numerator = self.numerator.show(self.variable)
        if self.denominator.is_one():
            return numerator
        denominator = self.denominator.show(self.variable)
        if ' ' in numerator:
            numerator = f'({numerator})'
        if not _PLAIN_TERM.match(denominator):
            denominator = f'({denominator})'
        return f'{numerator}/{denominator}'

    def __repr__(self) -> str:
        return f'Tf({self}, domain={self._domain})'

    def __tflib_repr__(self):
        return in_panel(str(self), title=f'H({self.variable})')


#
# Transfer function constructors (use these not the class constructor)
#

def s(k: int = 1) -> Tf:
    "The Laplace variable s raised to the power k."
    return Tf.var(k, Domain.S)

def z(k: int = 1) -> Tf:
    "The Z-transform variable z raised to the power k."
    return Tf.var(k, Domain.Z)

def tf(x: TfLike, domain: Domain | str = Domain.S) -> Tf:
    """Converts an integer, symbol name, Symbol, Monomial, or Coefficient to a constant transfer function.

    Transfer functions are copied, and must already be in the given domain.

    """
    domain = as_domain(domain)
    if isinstance(x, Tf):
        if x.domain is not domain:
            raise MismatchedDomain(f'Expected an {domain}-domain transfer function, got {x.domain}.')
        return x.copy()
    if isinstance(x, (Coefficient, Monomial, Symbol, str, int)) and not isinstance(x, bool):
        return Tf(x, 1, domain)
    raise ConstructionError(f'Cannot convert {x!r} to a transfer function.')

def rational(numerator: Iterable, denominator: Iterable, domain: Domain | str = Domain.S) -> Tf:
    """Builds a transfer function from coefficient sequences in ascending powers.

    Example: rational(['b0', 'b1'], ['a0', 'a1']) is (b0 + b1*s)/(a0 + a1*s).

    """
    return Tf(list(numerator), list(denominator), domain)

def simplify(x):
    """Returns a simplified copy of a value from any layer.

    Transfer functions, polynomials, coefficients, and monomials are copied
    then put in canonical form. Numbers are returned as is.

    """
    if isinstance(x, Number):
        return x
    result = copy_of(x)
    canonicalize(result)
    return result
