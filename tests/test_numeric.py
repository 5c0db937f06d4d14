"""
Tests for the numeric complex-valued transfer function evaluator.
"""

import cmath

import pytest

from tflib.domains    import Domain
from tflib.exceptions import EvaluationError, MismatchedDomain
from tflib.numeric    import (Binary, Constant, NumericTf, Power, Unary, Variable, constant,
                              polynomial_tree, principal_cbrt, rational_tree, variable)


S = variable(Domain.S)
Z = variable(Domain.Z)


class TestNumericEvaluation:
    """Expression trees evaluated at complex points"""

    def test_arithmetic(self) -> None:
        """Operators build trees that evaluate pointwise"""
        h = 1 / (S + 1)
        assert h(1j) == pytest.approx(1 / (1 + 1j))
        assert (2 * S - 3)(2) == pytest.approx(1)
        assert (S ** 2)(3) == pytest.approx(9)
        assert (-S)(2) == pytest.approx(-2)
        assert (S ** 0.5)(4) == pytest.approx(2)

    def test_functions(self) -> None:
        """Unary functions use the principal branch"""
        assert S.exp()(1j * cmath.pi) == pytest.approx(-1)
        assert S.ln()(-1) == pytest.approx(1j * cmath.pi)
        assert S.sqrt()(-4) == pytest.approx(2j)
        assert S.exp2()(3) == pytest.approx(8)
        assert S.log2()(8) == pytest.approx(3)
        assert S.log10()(1000) == pytest.approx(3)
        assert S.conj()(1 + 2j) == pytest.approx(1 - 2j)
        assert S.inv()(4) == pytest.approx(0.25)
        assert S.powi(3)(-2) == pytest.approx(-8)
        assert S.pow(constant(2))(3) == pytest.approx(9)

    def test_trigonometric(self) -> None:
        """Trigonometric and hyperbolic functions agree with cmath"""
        x = 0.3 + 0.2j
        for name in ['sin', 'cos', 'tan', 'asin', 'acos', 'atan',
                     'sinh', 'cosh', 'tanh', 'asinh', 'acosh', 'atanh']:
            tree = getattr(S, name)()
            assert tree(x) == pytest.approx(getattr(cmath, name)(x))

    def test_principal_cube_root(self) -> None:
        """The cube root of a negative number is not negative"""
        assert principal_cbrt(-8) == pytest.approx(1 + 1j * 3 ** 0.5)
        assert S.cbrt()(27) == pytest.approx(3)
        assert principal_cbrt(0) == 0

    def test_errors(self) -> None:
        """Poles and out-of-domain values raise EvaluationError"""
        with pytest.raises(EvaluationError):
            (1 / S)(0)
        with pytest.raises(EvaluationError):
            S.ln()(0)

    def test_domains_do_not_mix(self) -> None:
        """S and Z trees cannot be combined"""
        with pytest.raises(MismatchedDomain):
            S + Z


class TestFourier:
    """Frequency response"""

    def test_s_domain(self) -> None:
        """H(j omega)"""
        h = 1 / (S + 1)
        assert h.fourier(1.0) == pytest.approx(1 / (1 + 1j))

    def test_z_domain(self) -> None:
        """H(e^(j omega))"""
        h = 1 / Z
        assert h.fourier(cmath.pi / 2) == pytest.approx(-1j)


class TestDomainChange:
    """s = rate*ln(z) and its inverse"""

    def test_to_z(self) -> None:
        """The Z tree evaluates the S tree at rate*ln(z)"""
        h = 1 / (S + 2)
        rate = 8.0
        hz = h.to_z(rate)
        assert hz.domain is Domain.Z
        point = 0.5 + 0.5j
        assert hz(point) == pytest.approx(h(rate * cmath.log(point)))

    def test_round_trip(self) -> None:
        """to_s undoes to_z near the real axis"""
        h = (S + 1) / (S ** 2 + S * 0.5 + 3)
        back = h.to_z(10.0).to_s(10.0)
        assert back.domain is Domain.S
        assert back(0.3 + 0.4j) == pytest.approx(h(0.3 + 0.4j))

    def test_wrong_direction(self) -> None:
        """Each conversion starts from its own domain"""
        with pytest.raises(MismatchedDomain):
            Z.to_z(1.0)
        with pytest.raises(MismatchedDomain):
            S.to_s(1.0)


class TestConstructors:
    """Trees from coefficient sequences"""

    def test_polynomial_tree(self) -> None:
        """Ascending coefficients in Horner form"""
        p = polynomial_tree([1, 2, 3], Domain.S)
        assert p(2) == pytest.approx(17)
        assert polynomial_tree([], Domain.S)(5) == 0

    def test_rational_tree(self) -> None:
        """Ratio of two coefficient sequences"""
        h = rational_tree([1], [1, 1], Domain.Z)
        assert h.domain is Domain.Z
        assert h(1) == pytest.approx(0.5)

    @pytest.mark.parametrize("name", ['at', 'rebuild'])
    def test_node_interface(self, name) -> None:
        """Every node kind supplies evaluation and rebuilding"""
        assert getattr(NumericTf, name).__isabstractmethod__
        for node in (Variable, Constant, Power, Unary, Binary):
            assert not getattr(getattr(node, name), '__isabstractmethod__', False)
