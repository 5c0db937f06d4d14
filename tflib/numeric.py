# Numeric transfer functions over complex floating-point values
#
# This is an expression tree, independent of the symbolic tower, used to
# sample a transfer function's response at numeric points. Its domain
# change s = rate*ln(z) is exact in theory but only evaluated pointwise, and
# is a different technique from the symbolic bilinear transform of
# transfer_functions.Tf.bilinear_transform.

from __future__ import annotations

import cmath

from abc               import abstractmethod
from collections.abc   import Sequence
from dataclasses       import dataclass
from numbers           import Number
from typing            import Callable

from tflib.domains    import Domain
from tflib.exceptions import EvaluationError, MismatchedDomain


#
# Helpers
#

def as_complex(x) -> complex:
    try:
        return complex(x)
    except (TypeError, ValueError) as e:
        raise EvaluationError(f'Cannot convert {x!r} to a complex number: {e}')

def principal_cbrt(x: complex) -> complex:
    "Principal complex cube root; note cbrt(-8) is 1 + i sqrt(3), not -2."
    if x == 0:
        return 0j
    return cmath.exp(cmath.log(x) / 3)

def exp2(x: complex) -> complex:
    return 2 ** x

def log2(x: complex) -> complex:
    return cmath.log(x, 2)

def conj(x: complex) -> complex:
    return x.conjugate()

def inv(x: complex) -> complex:
    return 1 / x

def add(x, y):
    return x + y

def sub(x, y):
    return x - y

def mul(x, y):
    return x * y

def div(x, y):
    return x / y

def powc(x, y):
    return x ** y


#
# Expression Nodes
#

@dataclass(frozen=True)
class NumericTf:
    "Base of the numeric expression tree; every node carries its domain."
    domain: Domain

    @abstractmethod
    def at(self, x: complex) -> complex:
        ...

    @abstractmethod
    def rebuild(self, domain: Domain, variable: NumericTf) -> NumericTf:
        "Copies the tree into domain, with variable substituted for the transform variable."
        ...

    def __call__(self, x) -> complex:
        """Evaluates the transfer function at the complex point x.

        Division by zero and values outside a function's domain raise an
        EvaluationError.

        """
        try:
            return self.at(as_complex(x))
        except (ZeroDivisionError, ValueError, OverflowError) as e:
            raise EvaluationError(f'Cannot evaluate {self} at {x}: {e}')

    def fourier(self, omega: float) -> complex:
        """Evaluates the frequency response.

        For the S domain this is H(j omega), omega in rad/s. For the Z domain
        it is H(e^(j omega)), omega normalized so that pi is the Nyquist
        frequency.

        """
        if self.domain is Domain.S:
            return self(complex(0, omega))
        return self(cmath.exp(complex(0, omega)))

    def to_z(self, rate: float) -> NumericTf:
        "Converts to the Z domain by substituting s = rate*ln(z)."
        if self.domain is not Domain.S:
            raise MismatchedDomain('Only an S-domain transfer function can be converted to the Z domain.')
        return self.rebuild(Domain.Z, variable(Domain.Z).ln() * as_complex(rate))

    def to_s(self, rate: float) -> NumericTf:
        "Converts to the S domain by substituting z = e^(s/rate)."
        if self.domain is not Domain.Z:
            raise MismatchedDomain('Only a Z-domain transfer function can be converted to the S domain.')
        return self.rebuild(Domain.S, (variable(Domain.S) / as_complex(rate)).exp())

    #
    # Construction
    #

    def _lift(self, other) -> NumericTf:
        if isinstance(other, NumericTf):
            if other.domain is not self.domain:
                raise MismatchedDomain(f'Cannot combine {self.domain}-domain and {other.domain}-domain values.')
            return other
        if isinstance(other, Number):
            return Constant(self.domain, as_complex(other))
        return NotImplemented

    def _unary(self, fn: Callable[[complex], complex], name: str) -> NumericTf:
        return Unary(self.domain, self, fn, name)

    def _binary(self, other, fn, op: str, reflected=False) -> NumericTf:
        other = self._lift(other)
        if other is NotImplemented:
            return NotImplemented
        if reflected:
            return Binary(self.domain, other, self, fn, op)
        return Binary(self.domain, self, other, fn, op)

    def __add__(self, other):
        return self._binary(other, add, '+')

    def __radd__(self, other):
        return self._binary(other, add, '+', reflected=True)

    def __sub__(self, other):
        return self._binary(other, sub, '-')

    def __rsub__(self, other):
        return self._binary(other, sub, '-', reflected=True)

    def __mul__(self, other):
        return self._binary(other, mul, '*')

    def __rmul__(self, other):
        return self._binary(other, mul, '*', reflected=True)

    def __truediv__(self, other):
        return self._binary(other, div, '/')

    def __rtruediv__(self, other):
        return self._binary(other, div, '/', reflected=True)

    def __pow__(self, other):
        if isinstance(other, int):
            return self.powi(other)
        return self._binary(other, powc, '^')

    def __neg__(self):
        return Unary(self.domain, self, lambda x: -x, '-')

    def powi(self, k: int) -> NumericTf:
        "Raises to an integer power."
        return Power(self.domain, self, k)

    def pow(self, exponent) -> NumericTf:
        "Raises to a complex power given by another numeric transfer function or a number."
        return self._binary(exponent, powc, '^')

    def conj(self) -> NumericTf:
        return self._unary(conj, 'conj')

    def inv(self) -> NumericTf:
        return self._unary(inv, 'inv')

    def exp(self) -> NumericTf:
        return self._unary(cmath.exp, 'exp')

    def ln(self) -> NumericTf:
        "Principal natural logarithm, with its branch cut along (-inf, 0]."
        return self._unary(cmath.log, 'ln')

    def sqrt(self) -> NumericTf:
        return self._unary(cmath.sqrt, 'sqrt')

    def cbrt(self) -> NumericTf:
        return self._unary(principal_cbrt, 'cbrt')

    def exp2(self) -> NumericTf:
        return self._unary(exp2, 'exp2')

    def log2(self) -> NumericTf:
        return self._unary(log2, 'log2')

    def log10(self) -> NumericTf:
        return self._unary(cmath.log10, 'log10')

    def sin(self) -> NumericTf:
        return self._unary(cmath.sin, 'sin')

    def cos(self) -> NumericTf:
        return self._unary(cmath.cos, 'cos')

    def tan(self) -> NumericTf:
        return self._unary(cmath.tan, 'tan')

    def asin(self) -> NumericTf:
        return self._unary(cmath.asin, 'asin')

    def acos(self) -> NumericTf:
        return self._unary(cmath.acos, 'acos')

    def atan(self) -> NumericTf:
        return self._unary(cmath.atan, 'atan')

    def sinh(self) -> NumericTf:
        return self._unary(cmath.sinh, 'sinh')

    def cosh(self) -> NumericTf:
        return self._unary(cmath.cosh, 'cosh')

    def tanh(self) -> NumericTf:
        return self._unary(cmath.tanh, 'tanh')

    def asinh(self) -> NumericTf:
        return self._unary(cmath.asinh, 'asinh')

    def acosh(self) -> NumericTf:
        return self._unary(cmath.acosh, 'acosh')

    def atanh(self) -> NumericTf:
        return self._unary(cmath.atanh, 'atanh')


@dataclass(frozen=True)
class Variable(NumericTf):
    def at(self, x: complex) -> complex:
        return x

    def rebuild(self, domain: Domain, variable: NumericTf) -> NumericTf:
        return variable

    def __str__(self) -> str:
        return self.domain.variable

@dataclass(frozen=True)
class Constant(NumericTf):
    value: complex = 0j

    def at(self, x: complex) -> complex:
        return self.value

    def rebuild(self, domain: Domain, variable: NumericTf) -> NumericTf:
        return Constant(domain, self.value)

    def __str__(self) -> str:
        if self.value.imag == 0:
            return f'{self.value.real:g}'
        return str(self.value)

@dataclass(frozen=True)
class Power(NumericTf):
    base: NumericTf = None      # type: ignore
    exponent: int = 1

    def at(self, x: complex) -> complex:
        return self.base.at(x) ** self.exponent

    def rebuild(self, domain: Domain, variable: NumericTf) -> NumericTf:
        return Power(domain, self.base.rebuild(domain, variable), self.exponent)

    def __str__(self) -> str:
        return f'({self.base})^{self.exponent}'

@dataclass(frozen=True)
class Unary(NumericTf):
    arg: NumericTf = None       # type: ignore
    fn: Callable[[complex], complex] = conj
    name: str = ''

    def at(self, x: complex) -> complex:
        return self.fn(self.arg.at(x))

    def rebuild(self, domain: Domain, variable: NumericTf) -> NumericTf:
        return Unary(domain, self.arg.rebuild(domain, variable), self.fn, self.name)

    def __str__(self) -> str:
        if self.name == '-':
            return f'-({self.arg})'
        return f'{self.name}({self.arg})'

@dataclass(frozen=True)
class Binary(NumericTf):
    left: NumericTf = None      # type: ignore
    right: NumericTf = None     # type: ignore
    fn: Callable[[complex, complex], complex] = add
    op: str = '+'

    def at(self, x: complex) -> complex:
        return self.fn(self.left.at(x), self.right.at(x))

    def rebuild(self, domain: Domain, variable: NumericTf) -> NumericTf:
        return Binary(domain, self.left.rebuild(domain, variable), self.right.rebuild(domain, variable),
                      self.fn, self.op)

    def __str__(self) -> str:
        return f'({self.left} {self.op} {self.right})'


#
# Constructors
#

def variable(domain: Domain = Domain.S) -> NumericTf:
    "The transform variable, s or z, as a numeric transfer function."
    return Variable(domain)

def constant(value, domain: Domain = Domain.S) -> NumericTf:
    return Constant(domain, as_complex(value))

def polynomial_tree(coefficients: Sequence, domain: Domain) -> NumericTf:
    "Builds sum_i c_i x^i in Horner form from numeric coefficients in ascending order."
    x = variable(domain)
    if not coefficients:
        return constant(0, domain)
    tree: NumericTf = constant(coefficients[-1], domain)
    for c in reversed(coefficients[:-1]):
        tree = tree * x + as_complex(c)
    return tree

def rational_tree(numerator: Sequence, denominator: Sequence, domain: Domain) -> NumericTf:
    "Builds numerator(x)/denominator(x) from numeric coefficient sequences."
    return polynomial_tree(numerator, domain) / polynomial_tree(denominator, domain)
