from __future__ import annotations

from numbers           import Number
from typing            import ClassVar, Optional
from typing_extensions import Any, Self

from tflib.exceptions import ConstructionError, OperationError
from tflib.protocols  import canonicalize, copy_of, is_canonical, is_one, is_zero, ratio


#
# Weighted Sums of Basis Keys
#

class WeightedSum:
    """A finite sum of weighted keys, sum_i w_i k_i.

    The keys come from a basis that supplies the identity and canonical
    form contracts (here, monomials), and the weights are ring elements
    (here, integers). Subclasses fix the basis with `key_type`, which is
    needed for the identities and for mixing in bare scalars.

    Every mutating operation leaves the sum in canonical form: no entry
    has a zero weight or a zero key, and every key is itself canonical.
    The binary operators return fresh values; the augmented operators
    mutate the left operand.

    """
    key_type: ClassVar[Optional[type]] = None

    def __init__(self, terms: dict | None = None, canonical: bool = True) -> None:
        self.terms: dict[Any, Any] = {}
        if terms:
            for key, weight in terms.items():
                self._accumulate(copy_of(key), weight)
        if canonical:
            self.canonicalize()

    @classmethod
    def from_key(cls, key, weight=1) -> Self:
        "A sum with the single term weight * key."
        return cls({key: weight})

    @classmethod
    def constant(cls, weight) -> Self:
        "The sum weight * one."
        return cls.from_key(cls._one_key(), weight)

    @classmethod
    def zero(cls) -> Self:
        return cls()

    @classmethod
    def one(cls) -> Self:
        return cls.from_key(cls._one_key(), 1)

    @classmethod
    def _one_key(cls):
        if cls.key_type is None:
            raise ConstructionError(f'{cls.__name__} has no basis type, so it has no one.')
        return cls.key_type.one()

    def copy(self) -> Self:
        return self.__class__(self.terms, canonical=False)

    def _accumulate(self, key, weight) -> None:
        if key in self.terms:
            self.terms[key] = self.terms[key] + weight
        else:
            self.terms[key] = weight

    def _as_key(self, other):
        "Returns other as a basis key, or None if it is not one."
        if self.key_type is not None and isinstance(other, self.key_type):
            return other
        return None

    def _as_sum(self, other) -> Optional[WeightedSum]:
        "Returns other as a weighted sum of this type, or None if it cannot be."
        if isinstance(other, WeightedSum):
            return other
        if isinstance(other, Number):
            return self.constant(other)
        key = self._as_key(other)
        if key is not None:
            return self.from_key(key)
        return None

    #
    # Access
    #

    def __len__(self) -> int:
        return len(self.terms)

    def items(self):
        return self.terms.items()

    def keys(self):
        return self.terms.keys()

    def sorted_items(self) -> list[tuple[Any, Any]]:
        "Terms in a deterministic order, by the key's sort_key when it has one."
        return sorted(self.terms.items(), key=lambda kw: getattr(kw[0], 'sort_key', kw[0]))

    #
    # Identities and canonical form
    #

    def is_zero(self) -> bool:
        for key, weight in self.terms.items():
            if not is_zero(key) and not is_zero(weight):
                return False
        return True

    def is_one(self) -> bool:
        one = False
        for key, weight in self.terms.items():
            if is_zero(key) or is_zero(weight):
                continue
            if is_one(key) and is_one(weight) and not one:
                one = True
            else:
                return False
        return one

    def is_canonical(self) -> bool:
        for key, weight in self.terms.items():
            if not is_canonical(key) or not is_canonical(weight):
                return False
            if is_zero(key) or is_zero(weight):
                return False
        return True

    def canonicalize(self) -> None:
        terms: dict[Any, Any] = {}
        for key, weight in self.terms.items():
            canonicalize(weight)
            if is_zero(key) or is_zero(weight):
                continue
            if not is_canonical(key):
                key = copy_of(key)
                canonicalize(key)
            if key in terms:
                terms[key] = terms[key] + weight
            else:
                terms[key] = weight
        self.terms = {key: weight for key, weight in terms.items() if not is_zero(weight)}

    def __bool__(self) -> bool:
        return not self.is_zero()

    #
    # Additive structure
    #

    def __iadd__(self, other) -> Self:
        if isinstance(other, Number):
            if not is_zero(other):
                self._accumulate(self._one_key(), other)
        elif isinstance(other, WeightedSum):
            for key, weight in other.terms.items():
                self._accumulate(copy_of(key), weight)
        else:
            key = self._as_key(other)
            if key is None:
                return NotImplemented
            self._accumulate(copy_of(key), 1)
        self.canonicalize()
        return self

    def __isub__(self, other) -> Self:
        if isinstance(other, Number):
            if not is_zero(other):
                self._accumulate(self._one_key(), -other)
        elif isinstance(other, WeightedSum):
            for key, weight in other.terms.items():
                self._accumulate(copy_of(key), -weight)
        else:
            key = self._as_key(other)
            if key is None:
                return NotImplemented
            self._accumulate(copy_of(key), -1)
        self.canonicalize()
        return self

    def __add__(self, other) -> Self:
        result = self.copy()
        if result.__iadd__(other) is NotImplemented:
            return NotImplemented
        return result

    def __radd__(self, other) -> Self:
        return self.__add__(other)

    def __sub__(self, other) -> Self:
        result = self.copy()
        if result.__isub__(other) is NotImplemented:
            return NotImplemented
        return result

    def __rsub__(self, other) -> Self:
        return (-self).__add__(other)

    def __neg__(self) -> Self:
        return self.__class__({key: -weight for key, weight in self.terms.items()}, canonical=False)

    def __pos__(self) -> Self:
        return self.copy()

    #
    # Multiplicative structure
    #

    def multiply(self, other: WeightedSum) -> Self:
        """Distributive product: every pair of keys multiplied, weights multiplied.

        Products landing on the same key accumulate.

        """
        product = self.__class__()
        for key1, weight1 in self.terms.items():
            for key2, weight2 in other.terms.items():
                product._accumulate(key1 * key2, weight1 * weight2)
        product.canonicalize()
        return product

    def divide(self, other: WeightedSum) -> Self:
        """Pairwise quotient: every pair of keys divided, weights divided.

        This is the exact quotient when other has a single term, which is how
        common factors are removed. Integer weights divide with truncation.

        """
        quotient = self.__class__()
        for key1, weight1 in self.terms.items():
            for key2, weight2 in other.terms.items():
                quotient._accumulate(key1 / key2, ratio(weight1, weight2))
        quotient.canonicalize()
        return quotient

    def __imul__(self, other) -> Self:
        if isinstance(other, Number):
            for key in self.terms:
                self.terms[key] = self.terms[key] * other
            self.canonicalize()
            return self
        other_sum = self._as_sum(other)
        if other_sum is None:
            return NotImplemented
        self.terms = self.multiply(other_sum).terms
        return self

    def __itruediv__(self, other) -> Self:
        if isinstance(other, Number):
            for key in self.terms:
                self.terms[key] = ratio(self.terms[key], other)
            self.canonicalize()
            return self
        other_sum = self._as_sum(other)
        if other_sum is None:
            return NotImplemented
        self.terms = self.divide(other_sum).terms
        return self

    def __mul__(self, other) -> Self:
        result = self.copy()
        if result.__imul__(other) is NotImplemented:
            return NotImplemented
        return result

    def __rmul__(self, other) -> Self:
        if isinstance(other, Number):
            return self.__mul__(other)
        other_sum = self._as_sum(other)
        if other_sum is None:
            return NotImplemented
        return self.__class__(other_sum.terms, canonical=False).multiply(self)

    def __truediv__(self, other) -> Self:
        result = self.copy()
        if result.__itruediv__(other) is NotImplemented:
            return NotImplemented
        return result

    def __rtruediv__(self, other) -> Self:
        other_sum = self._as_sum(other)
        if other_sum is None:
            return NotImplemented
        return self.__class__(other_sum.terms, canonical=False).divide(self)

    def __pow__(self, n) -> Self:
        if not isinstance(n, int):
            return NotImplemented
        if n < 0:
            raise OperationError(f'Cannot raise a symbolic sum to a negative power {n}.')
        if n == 0:
            return self.one()
        if n == 1:
            return self.copy()
        if n % 2 == 0:
            return (self * self) ** (n // 2)
        return self * (self * self) ** (n // 2)

    #
    # Comparison and display
    #

    def __eq__(self, other) -> bool:
        if isinstance(other, WeightedSum):
            return self.terms == other.terms
        if isinstance(other, Number):
            return self.terms == self.constant(other).terms
        return NotImplemented

    __hash__ = None  # type: ignore

    def __str__(self) -> str:
        if not self.terms:
            return '0'
        return ' + '.join(f'{weight}*{key}' for key, weight in self.sorted_items())

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({str(self)!r})'
