from __future__ import annotations

import logging

from collections.abc   import Iterable
from typing            import Generic, Optional, TypeVar
from typing_extensions import Self

from tflib.exceptions import InexactDivisionError
from tflib.protocols  import (canonicalize, copy_of, is_canonical, is_one, is_zero,
                              one_of, ratio, zero_of)

logger = logging.getLogger(__name__)

T = TypeVar('T')


#
# Univariate Polynomials
#

class Polynomial(Generic[T]):
    """A polynomial in one transform variable with ring-element coefficients.

    Coefficients are stored by ascending power, so index 0 is the constant
    term. The elements are typically Coefficients but can be any ring
    element, including plain integers. `element` is the element type, used
    to make zeros and ones; it is inferred from the first coefficient when
    not given and defaults to int.

    """
    def __init__(self, coefficients: Iterable[T] = (), element: Optional[type] = None) -> None:
        self.coefficients: list[T] = list(coefficients)
        if element is None:
            element = type(self.coefficients[0]) if self.coefficients else int
        self.element = element

    @classmethod
    def constant(cls, value: T) -> Polynomial[T]:
        "The order-zero polynomial with the given value."
        return cls([value], element=type(value))

    @classmethod
    def zero(cls, element: type = int) -> Polynomial:
        return cls([], element=element)

    @classmethod
    def one(cls, element: type = int) -> Polynomial:
        return cls([one_of(element)], element=element)

    def copy(self) -> Polynomial[T]:
        return self.__class__([copy_of(c) for c in self.coefficients], element=self.element)

    def _like(self, coefficients: Iterable) -> Polynomial:
        return self.__class__(coefficients, element=self.element)

    def _zero_element(self):
        return zero_of(self.element)

    #
    # Access
    #

    def order(self) -> int:
        "The highest power present, len - 1, and 0 for an empty polynomial."
        return max(len(self.coefficients) - 1, 0)

    def __len__(self) -> int:
        return len(self.coefficients)

    def __getitem__(self, index):
        return self.coefficients[index]

    def __iter__(self):
        return iter(self.coefficients)

    #
    # Identities and canonical form
    #

    def is_zero(self) -> bool:
        return all(is_zero(c) for c in self.coefficients)

    def is_one(self) -> bool:
        return (len(self.coefficients) > 0 and
                is_one(self.coefficients[0]) and
                all(is_zero(c) for c in self.coefficients[1:]))

    def is_canonical(self) -> bool:
        return all(is_canonical(c) for c in self.coefficients)

    def canonicalize(self) -> None:
        for c in self.coefficients:
            canonicalize(c)

    #
    # Additive structure
    #

    def __iadd__(self, other) -> Self:
        if isinstance(other, Polynomial):
            for i, c in enumerate(other.coefficients):
                if i < len(self.coefficients):
                    self.coefficients[i] = self.coefficients[i] + c
                else:
                    self.coefficients.append(copy_of(c))
            return self
        if self.coefficients:
            self.coefficients[0] = self.coefficients[0] + other
        else:
            self.coefficients.append(copy_of(other))
        return self

    def __isub__(self, other) -> Self:
        if isinstance(other, Polynomial):
            for i, c in enumerate(other.coefficients):
                if i < len(self.coefficients):
                    self.coefficients[i] = self.coefficients[i] - c
                else:
                    self.coefficients.append(-c)
            return self
        if self.coefficients:
            self.coefficients[0] = self.coefficients[0] - other
        else:
            self.coefficients.append(-other)
        return self

    def __add__(self, other) -> Polynomial[T]:
        result = self.copy()
        result += other
        return result

    def __radd__(self, other) -> Polynomial[T]:
        return self + other

    def __sub__(self, other) -> Polynomial[T]:
        result = self.copy()
        result -= other
        return result

    def __rsub__(self, other) -> Polynomial[T]:
        return -self + other

    def __neg__(self) -> Polynomial[T]:
        return self._like(-c for c in self.coefficients)

    def __ilshift__(self, n: int) -> Self:
        "Multiplies by var^n, prepending n zero coefficients."
        self.coefficients[0:0] = [self._zero_element() for _ in range(n)]
        return self

    def __lshift__(self, n: int) -> Polynomial[T]:
        result = self.copy()
        result <<= n
        return result

    #
    # Multiplicative structure
    #

    def __mul__(self, other) -> Polynomial:
        if isinstance(other, Polynomial):
            return self.convolve(other)
        return self._like(c * other for c in self.coefficients)

    def __rmul__(self, other) -> Polynomial:
        return self._like(other * c for c in self.coefficients)

    def __imul__(self, other) -> Self:
        product = self * other
        self.coefficients = product.coefficients
        return self

    def convolve(self, other: Polynomial) -> Polynomial:
        """Polynomial product by discrete convolution.

        Coefficient n of the result is sum_i a[i]*b[n-i], so the result has
        len(a) + len(b) - 1 coefficients, or none if either is empty.

        """
        a = self.coefficients
        b = other.coefficients
        if not a or not b:
            return self._like([])

        product = []
        for n in range(len(a) + len(b) - 1):
            acc = None
            for i in range(max(0, n - len(b) + 1), min(n + 1, len(a))):
                term = a[i] * b[n - i]
                acc = term if acc is None else acc + term
            product.append(acc)
        return self._like(product)

    def __pow__(self, n) -> Polynomial:
        if not isinstance(n, int) or n < 0:
            return NotImplemented
        result = self.one(self.element)
        for _ in range(n):
            result = result.convolve(self)
        return result

    def div_rem(self, divisor: Polynomial) -> tuple[Polynomial, Optional[Polynomial]]:
        """Polynomial long division.

        Returns (quotient, remainder) where the remainder is None when the
        division is exact. Division stops early, leaving a nonzero
        remainder, when a leading coefficient ratio is zero (e.g., an integer
        ratio that truncates to zero) or does not cancel the leading term.
        In every case self == quotient*divisor + remainder.

        """
        remainder = self.copy()
        quotient = self._like([])
        steps = 0
        while divisor.coefficients and remainder.coefficients and len(divisor) <= len(remainder):
            top = remainder.coefficients[-1]
            if is_zero(top):
                remainder.coefficients.pop()
                continue
            leading = ratio(top, divisor.coefficients[-1])
            if is_zero(leading):
                break
            scale = self._like([leading]) << (len(remainder) - len(divisor))
            remainder -= scale.convolve(divisor)
            quotient += scale
            steps += 1
            if not is_zero(remainder.coefficients[-1]):
                break
            remainder.coefficients.pop()
        logger.debug('div_rem: order %d by order %d in %d steps', self.order(), divisor.order(), steps)
        if remainder.is_zero():
            return (quotient, None)
        return (quotient, remainder)

    def __divmod__(self, divisor: Polynomial) -> tuple[Polynomial, Polynomial]:
        quotient, remainder = self.div_rem(divisor)
        if remainder is None:
            remainder = self._like([])
        return (quotient, remainder)

    def __truediv__(self, other) -> Polynomial:
        """Divides by a scalar element-wise, or exactly by another polynomial.

        Dividing by a polynomial that does not divide evenly raises an
        InexactDivisionError carrying the quotient and remainder.

        """
        if isinstance(other, Polynomial):
            quotient, remainder = self.div_rem(other)
            if remainder is not None:
                raise InexactDivisionError(f'{self} is not divisible by {other}, remainder {remainder}',
                                           quotient, remainder)
            return quotient
        return self._like(ratio(c, other) for c in self.coefficients)

    #
    # Evaluation
    #

    def evaluate(self, x):
        "Evaluates sum_i x^i * coefficient[i] at x."
        result = None
        power = None
        for c in self.coefficients:
            term = c if power is None else power * c
            result = term if result is None else result + term
            power = x if power is None else power * x
        if result is None:
            return self._zero_element()
        return result

    def __call__(self, x):
        return self.evaluate(x)

    #
    # Comparison and display
    #

    def __eq__(self, other) -> bool:
        if isinstance(other, Polynomial):
            return self.coefficients == other.coefficients
        return NotImplemented

    __hash__ = None  # type: ignore

    def show(self, var: str = 'x') -> str:
        "Renders the polynomial in ascending powers of the named variable."
        out = ''
        for i, c in enumerate(self.coefficients):
            if is_zero(c):
                continue
            shown = str(c)
            if ' ' in shown:
                shown = f'({shown})'
            if out:
                if shown.startswith('-'):
                    out += ' - '
                    shown = shown[1:]
                else:
                    out += ' + '
            if i == 0:
                out += shown
            else:
                if not is_one(c):
                    out += shown + '*'
                out += var if i == 1 else f'{var}^{i}'
        return out or str(self._zero_element())

    def __str__(self) -> str:
        return self.show()

    def __repr__(self) -> str:
        return f'Polynomial({self.coefficients!r})'
