"""
Tests for the filter topology builders.
"""

import pytest

from tflib.domains                   import Domain
from tflib.exceptions                import ConstructionError
from tflib.parsing.coefficient_strings import parse_coefficient
from tflib.presets                   import (first_order_all_pass, phaser, sallen_key,
                                             second_order_highpass, second_order_rc_filter,
                                             second_order_rlc_filter, third_order_filter)
from tflib.transfer_functions        import Tf


class TestPresets:
    """Closed forms of the standard sections"""

    def test_first_order_all_pass(self) -> None:
        """(s*tau - 1)/(s*tau + 1)"""
        h = first_order_all_pass()
        assert h == Tf([-1, 'tau'], [1, 'tau'])
        assert h.domain is Domain.S
        assert first_order_all_pass('T') == Tf([-1, 'T'], [1, 'T'])

    def test_second_order_highpass(self) -> None:
        """No shared factor and unit gain at high frequency"""
        h = second_order_highpass()
        assert h.common_factor().is_one()
        assert h.numerator[2] == 1
        assert h.denominator[2] == 1
        assert abs(h.frequency_response(1e6, {'omega': 1.0, 'zeta': 0.7})) == pytest.approx(1.0, rel=1e-6)

    def test_third_order_filter(self) -> None:
        """Four third order responses over one denominator"""
        hs = third_order_filter()
        assert len(hs) == 4
        assert all(h.order() == 3 for h in hs)
        assert all(h.denominator == hs[0].denominator for h in hs)
        assert hs[0].denominator[0] == parse_coefficient('alpha*omega^2')
        assert hs[3].numerator == Tf([0, 0, 0, 1]).numerator
        assert all(len(h.bilinear_transform().numerator) == 4 for h in hs)

    def test_phaser(self) -> None:
        """An n stage phaser has order n - 1"""
        assert phaser(2).order() == 1
        assert phaser(4).order() == 3
        with pytest.raises(ConstructionError):
            phaser(1)

    def test_phaser_without_feedback_is_all_pass(self) -> None:
        """With f = 0 the response has unit magnitude"""
        h = phaser(3)
        assert abs(h.frequency_response(2.5, {'tau': 0.3, 'f': 0})) == pytest.approx(1.0)

    def test_rc_lowpass(self) -> None:
        """Two low-pass RC stages"""
        h = second_order_rc_filter()
        expected = Tf(1, [1, parse_coefficient('c1*r1 + c2*r1 + c2*r2'), parse_coefficient('c1*c2*r1*r2')])
        assert h == expected
        values = {'r1': 1.0, 'c1': 2.0, 'r2': 3.0, 'c2': 0.5}
        assert h.evaluate(0, values) == pytest.approx(1.0)

    @pytest.mark.parametrize("swap_first,swap_second", [(False, False), (True, False), (False, True), (True, True)])
    def test_rc_variants(self, swap_first, swap_second) -> None:
        """Every combination is second order and transforms cleanly"""
        h = second_order_rc_filter(swap_first, swap_second)
        assert h.order() == 2
        hz = h.bilinear_transform()
        assert len(hz.numerator) == 3 and len(hz.denominator) == 3

    def test_rc_highpass(self) -> None:
        """Swapping both stages blocks DC"""
        h = second_order_rc_filter(True, True)
        values = {'r1': 1.0, 'c1': 2.0, 'r2': 3.0, 'c2': 0.5}
        assert h.evaluate(0, values) == pytest.approx(0.0)

    def test_rlc(self) -> None:
        """The series RLC divider is second order"""
        h = second_order_rlc_filter()
        assert h.order() == 2
        values = {'l': 1.0, 'r': 2.0, 'c': 0.5}
        assert h.evaluate(0, values) == pytest.approx(1.0)

    def test_sallen_key_lowpass(self) -> None:
        """Unity gain passes DC"""
        h = sallen_key()
        assert h.order() == 2
        values = {'g': 1.0, 'r1': 1.0, 'c1': 1.0, 'r2': 1.0, 'c2': 1.0}
        assert h.evaluate(0, values) == pytest.approx(1.0)
