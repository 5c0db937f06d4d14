"""
Tests for univariate polynomials over integers and coefficients.
"""

import pytest

from tflib.coefficients import Coefficient, coefficient
from tflib.exceptions   import InexactDivisionError
from tflib.polynomials  import Polynomial


def P(*coefficients) -> Polynomial:
    return Polynomial(list(coefficients))


class TestPolynomialStructure:
    """Construction, order and identities"""

    def test_order(self) -> None:
        """Order is the highest power present"""
        assert P(1, 2, 3).order() == 2
        assert P(5).order() == 0
        assert Polynomial().order() == 0

    def test_identities(self) -> None:
        """Zero and one ignore trailing zero coefficients"""
        assert Polynomial().is_zero()
        assert P(0, 0).is_zero()
        assert P(1, 0).is_one()
        assert not P(1, 1).is_one()
        assert Polynomial.one(Coefficient).is_one()
        assert Polynomial.zero(Coefficient).element is Coefficient

    def test_element_inferred(self) -> None:
        """The element type comes from the first coefficient"""
        assert P(1, 2).element is int
        assert Polynomial([coefficient('R')]).element is Coefficient


class TestPolynomialArithmetic:
    """Addition, shifting, and convolution"""

    def test_add_and_subtract(self) -> None:
        """Coefficients combine by power, extending the shorter one"""
        assert P(1, 2) + P(3) == P(4, 2)
        assert P(1) + P(0, 0, 5) == P(1, 0, 5)
        assert P(1, 2) - P(1, 2, 3) == P(0, 0, -3)
        assert -P(1, -2) == P(-1, 2)

    def test_scalar_on_constant_term(self) -> None:
        """Adding a scalar changes the constant term"""
        assert P(1, 2) + 3 == P(4, 2)
        assert 3 - P(1, 2) == P(2, -2)

    def test_shift(self) -> None:
        """Shifting prepends zeros"""
        assert P(1, 2) << 2 == P(0, 0, 1, 2)

    @pytest.mark.parametrize("p,n", [(P(1), 0), (P(1, 2), 3), (P(0, 0, 4), 1)])
    def test_shift_raises_order(self, p, n) -> None:
        """(p << n).order() == p.order() + n"""
        assert (p << n).order() == p.order() + n

    def test_convolution(self) -> None:
        """Products have len(a) + len(b) - 1 coefficients"""
        assert P(1, 1) * P(1, 1) == P(1, 2, 1)
        assert P(1, 2, 3) * P(4, 5) == P(4, 13, 22, 15)
        assert len(Polynomial() * P(1, 2)) == 0

    def test_scalar_multiply(self) -> None:
        """Scalars scale every coefficient"""
        assert P(1, 2) * 3 == P(3, 6)
        assert 3 * P(1, 2) == P(3, 6)

    def test_power(self) -> None:
        """Integer powers expand by convolution"""
        assert P(1, 1) ** 3 == P(1, 3, 3, 1)
        assert P(1, 1) ** 0 == P(1)

    def test_symbolic_coefficients(self) -> None:
        """Coefficients multiply symbolically"""
        p = Polynomial([coefficient('R'), coefficient(1)])
        q = Polynomial([coefficient('C'), coefficient(1)])
        product = p * q
        assert product[0] == coefficient('R') * 'C'
        assert product[1] == coefficient('R') + 'C'
        assert product[2] == 1


class TestPolynomialDivision:
    """Long division with remainder"""

    def test_div_rem_with_remainder(self) -> None:
        """(4x^3 + 5x^2 + 5x + 8)/(4x + 1) leaves 7"""
        q, r = P(8, 5, 5, 4).div_rem(P(1, 4))
        assert q == P(1, 1, 1)
        assert r == P(7)

    def test_div_rem_exact(self) -> None:
        """An exact division has no remainder"""
        q, r = P(1, 2, 1).div_rem(P(1, 1))
        assert q == P(1, 1)
        assert r is None

    @pytest.mark.parametrize("a,b", [
        (P(8, 5, 5, 4), P(1, 4)),
        (P(3, -2, 0, 5), P(1, 1)),
        (P(1, 0, 0, 0, 1), P(1, 0, 1)),
        (P(2, 3), P(1, 1, 1)),
    ])
    def test_round_trip(self, a, b) -> None:
        """a == q*b + r"""
        q, r = divmod(a, b)
        assert q * b + r == a

    def test_exact_division_operator(self) -> None:
        """/ by a polynomial must divide evenly"""
        assert P(1, 2, 1) / P(1, 1) == P(1, 1)
        with pytest.raises(InexactDivisionError) as excinfo:
            P(8, 5, 5, 4) / P(1, 4)
        assert excinfo.value.quotient == P(1, 1, 1)
        assert excinfo.value.remainder == P(7)

    def test_zero_ratio_stops_division(self) -> None:
        """A leading ratio that truncates to zero leaves the rest as remainder"""
        q, r = P(1, 1).div_rem(P(1, 2))
        assert q.is_zero()
        assert r == P(1, 1)

    def test_truncated_ratio_keeps_leading_term(self) -> None:
        """3x^2 by 2x: the uncancelled leading term stays in the remainder"""
        a, b = P(0, 0, 3), P(0, 2)
        q, r = a.div_rem(b)
        assert r is not None
        assert q == P(0, 1)
        assert r == P(0, 0, 1)
        assert q * b + r == a
        with pytest.raises(InexactDivisionError):
            a / b

    def test_multi_term_leading_coefficient(self) -> None:
        """A divisor led by a sum does not divide exactly term by term"""
        R, C = coefficient('R'), coefficient('C')
        a = Polynomial([coefficient(0), R + C])
        b = Polynomial([R * 2 + C])
        q, r = a.div_rem(b)
        assert r is not None and not r.is_zero()
        assert q * b + r == a
        with pytest.raises(InexactDivisionError):
            a / b

    def test_scalar_division(self) -> None:
        """Scalar division applies to each coefficient"""
        assert P(2, 4, 7) / 2 == P(1, 2, 3)

    def test_symbolic_division(self) -> None:
        """Division by a monomial-led polynomial with symbolic coefficients"""
        R = coefficient('R')
        a = Polynomial([R, R * 2, R])
        b = Polynomial([coefficient(1), coefficient(1)])
        q, r = a.div_rem(b)
        assert r is None
        assert q == Polynomial([R, R])


class TestPolynomialEvaluation:
    """Numeric evaluation and display"""

    def test_evaluate(self) -> None:
        """Sum of coefficient[i]*x^i"""
        assert P(1, 2, 1)(2) == 9
        assert P(1, 0, -1).evaluate(3) == -8
        assert Polynomial()(4) == 0
        assert P(1, 1)(1j) == 1 + 1j

    def test_show(self) -> None:
        """Ascending powers in a named variable"""
        assert P(1, 2, 1).show('s') == '1 + 2*s + s^2'
        assert P(1, -2, 1).show('z') == '1 - 2*z + z^2'
        assert P(0, 0, 3).show('s') == '3*s^2'
        assert str(Polynomial()) == '0'

    def test_show_symbolic(self) -> None:
        """Multi-term coefficients are parenthesized"""
        p = Polynomial([coefficient('R'), coefficient('R') + 'C'])
        assert p.show('s') == 'R + (C + R)*s'
