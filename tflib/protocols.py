from __future__ import annotations

from numbers           import Number
from typing            import (
    Protocol,
    runtime_checkable
)
from typing_extensions import Any


#
# Capability Contracts
#
# Every layer of the algebraic tower (symbols, monomials, weighted sums,
# coefficients, polynomials, transfer functions) satisfies these. Plain
# Python numbers satisfy them through the helper functions below.
#

@runtime_checkable
class HasZero(Protocol):
    "Has an additive identity with a cheap is-zero test."
    def is_zero(self) -> bool:
        ...

@runtime_checkable
class HasOne(Protocol):
    "Has a multiplicative identity with a cheap is-one test."
    def is_one(self) -> bool:
        ...

@runtime_checkable
class Canonical(Protocol):
    "Can check whether it is in canonical form and mutate itself into that form."
    def is_canonical(self) -> bool:
        ...

    def canonicalize(self) -> None:
        ...

@runtime_checkable
class Renderable(Protocol):
    def __tflib_repr__(self):
        ...


#
# Helpers that treat numbers and contract objects uniformly
#

def is_zero(x: Any) -> bool:
    if isinstance(x, HasZero):
        return x.is_zero()
    return x == 0

def is_one(x: Any) -> bool:
    if isinstance(x, HasOne):
        return x.is_one()
    return x == 1

def is_canonical(x: Any) -> bool:
    if isinstance(x, Canonical):
        return x.is_canonical()
    return True  # Numbers are always canonical

def canonicalize(x: Any) -> None:
    if isinstance(x, Canonical):
        x.canonicalize()

def zero_of(kind: type):
    "Returns the additive identity of the given type."
    if hasattr(kind, 'zero'):
        return kind.zero()
    return kind(0)

def one_of(kind: type):
    "Returns the multiplicative identity of the given type."
    if hasattr(kind, 'one'):
        return kind.one()
    return kind(1)

def copy_of(x: Any):
    "Returns an independent copy of a mutable ring element; numbers are returned as is."
    if isinstance(x, Number):
        return x
    return x.copy()

def ratio(a, b):
    """Divides two ring elements.

    Integers divide with truncation toward zero, which is exact when b
    divides a. Everything else uses true division.

    """
    if isinstance(a, int) and isinstance(b, int):
        q = abs(a) // abs(b)
        return q if (a >= 0) == (b > 0) else -q
    return a / b
