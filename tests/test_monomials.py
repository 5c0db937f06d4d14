"""
Tests for monomials (exponent maps).
"""

import pytest

from tflib.env       import environment
from tflib.monomials import Monomial, monomial
from tflib.symbols   import Symbol, ZERO_SYMBOL, ONE_SYMBOL


@pytest.fixture
def float_literals():
    environment.on_float_literals()
    yield
    environment.off_float_literals()


class TestMonomialArithmetic:
    """Exponents add under multiplication and subtract under division"""

    def test_multiply_symbols(self) -> None:
        """Repeated symbols raise the exponent"""
        m = monomial('R', 'C', 'C')
        assert m['R'] == 1
        assert m['C'] == 2
        assert m['L'] == 0
        assert 'C' in m and 'L' not in m

    def test_divide(self) -> None:
        """Division creates negative exponents on first occurrence"""
        m = monomial('R') / 'C'
        assert m == Monomial({'R': 1, 'C': -1})
        m /= monomial('R')
        assert m['R'] == 0 and m['C'] == -1

    def test_string_operands(self) -> None:
        """Names and symbols are accepted on either side"""
        assert 'R' * monomial('C') == monomial('C', 'R')
        assert Symbol('R') * monomial('C') == monomial('R', 'C')
        assert 'R' / monomial('C') == Monomial({'R': 1, 'C': -1})

    def test_inverse_is_one(self) -> None:
        """m times its inverse is the multiplicative one"""
        for m in [monomial('R', 'C', 'C'), Monomial({'tau': -3, 'k': 2}), Monomial()]:
            assert (m * m.invert()).is_one()

    def test_associative(self) -> None:
        """Multiplication is associative"""
        m1 = Monomial({'R': 1, 'C': -2})
        m2 = Monomial({'R': -1, 'L': 1})
        m3 = Monomial({'C': 3, 'tau': 1})
        assert (m1 * m2) * m3 == m1 * (m2 * m3)

    def test_power(self) -> None:
        """Integer powers scale every exponent"""
        m = Monomial({'R': 1, 'C': -1})
        assert m ** 3 == Monomial({'R': 3, 'C': -3})
        assert (m ** 0).is_one()
        assert m ** -1 == m.invert()

    def test_operands_not_mutated(self) -> None:
        """Binary operators return fresh values"""
        m = monomial('R')
        _ = m * 'C'
        _ = m / 'L'
        assert m == monomial('R')


class TestMonomialIdentities:
    """Zero, one, and canonical form"""

    def test_zero(self) -> None:
        """The zero symbol to a nonzero power makes the monomial zero"""
        assert Monomial({ZERO_SYMBOL: 2, 'R': 1}).is_zero()
        assert not Monomial({ZERO_SYMBOL: 0, 'R': 1}).is_zero()
        assert Monomial.zero().is_zero()

    def test_one(self) -> None:
        """Only one sentinels and zero exponents remain"""
        assert Monomial().is_one()
        assert Monomial({ONE_SYMBOL: 3, 'R': 0}).is_one()
        assert not monomial('R').is_one()

    def test_canonicalize_zero_collapses(self) -> None:
        """A zero monomial collapses to the canonical zero"""
        m = Monomial({ZERO_SYMBOL: 3, 'R': 2})
        assert not m.is_canonical()
        m.canonicalize()
        assert m == Monomial.zero()
        assert m.is_canonical()

    def test_canonicalize_drops_degenerate_entries(self) -> None:
        """Zero exponents and one sentinels are removed"""
        m = Monomial({'R': 0, ONE_SYMBOL: 2, 'C': -1})
        assert not m.is_canonical()
        m.canonicalize()
        assert m == Monomial({'C': -1})
        assert m.is_canonical()

    def test_canonicalize_idempotent(self) -> None:
        """Canonicalizing twice changes nothing"""
        m = Monomial({'R': 0, 'C': 2, 'L': -1})
        m.canonicalize()
        once = m.copy()
        m.canonicalize()
        assert m == once

    def test_hash_follows_equality(self) -> None:
        """Equal monomials hash alike so they can key a sum"""
        assert hash(monomial('R', 'C')) == hash(monomial('C', 'R'))


class TestMonomialDisplay:
    """Rendering as products and quotients"""

    def test_render(self) -> None:
        """Factors are sorted by name"""
        assert str(monomial('R', 'C', 'C')) == 'C^2*R'
        assert str(Monomial({'R': 1, 'L': -1})) == '1/L*R'
        assert str(Monomial({'R': 1, 'L': -2})) == '1/L^2*R'
        assert str(Monomial()) == '1'
        assert str(Monomial.zero()) == '0'

    def test_render_float_literals(self, float_literals) -> None:
        """A leading reciprocal uses a float literal on request"""
        assert str(Monomial({'C': -1})) == '1.0/C'
