#
# Filter topologies as symbolic S-domain transfer functions
#
# Each builder returns a simplified S-domain Tf whose coefficients are in
# the component names given. Apply `bilinear_transform` to obtain the
# digital filter.
#
from __future__ import annotations

from tflib.exceptions         import ConstructionError
from tflib.transfer_functions import Tf, s, tf


def first_order_all_pass(tau: str = 'tau') -> Tf:
    '''
    Returns the first order all-pass section (s*tau - 1)/(s*tau + 1).
    '''
    return (s() * tau - 1) / (s() * tau + 1)

def second_order_highpass(omega: str = 'omega', zeta: str = 'zeta') -> Tf:
    '''
    Returns the second order high-pass section s^2/(s^2 + 2*zeta*omega*s + omega^2).
    '''
    return s(2) / (s(2) + s() * 2 * zeta * omega + tf(omega) * omega)

def third_order_filter(k: str = 'k', omega: str = 'omega', zeta: str = 'zeta', alpha: str = 'alpha') -> list[Tf]:
    '''
    Returns the four third order responses over a shared denominator.

    The denominator is a second order section times a first order one,
    (s^2 + 2*zeta*omega*s + omega^2)*(s + alpha). The numerators are
    k^3, k^2*s, k*s^2, and s^3, from low-pass through high-pass.
    '''
    denominator = (s(2) + s() * 2 * zeta * omega + tf(omega) * omega) * (s() + alpha)
    numerators = [tf(k) * k * k, s() * k * k, s(2) * k, s(3)]
    return [b / denominator for b in numerators]

def phaser(n: int, tau: str = 'tau', f: str = 'f') -> Tf:
    '''
    Returns an n stage phaser built from first order all-pass sections with feedback f.
    '''
    if not isinstance(n, int) or n < 2:
        raise ConstructionError(f'A phaser needs at least two stages, got {n!r}.')

    lead = s() * tau + 1
    lag = s() * tau - 1
    numerator = (s() * tau * (tf(f) + 1) - 1) * lead ** (n - 2)
    denominator = lead ** (n - 1) + lag ** (n - 1) * f
    return numerator / denominator

def _impedances(first: str, second: str, swap: bool) -> tuple[Tf, Tf]:
    "The (series, shunt) pair of a resistor and capacitor stage; swap makes the capacitor the series element."
    resistor = tf(first)
    capacitor = s(-1) / second
    return (capacitor, resistor) if swap else (resistor, capacitor)

def second_order_rc_filter(swap_first: bool = False, swap_second: bool = False,
                           r1: str = 'r1', c1: str = 'c1', r2: str = 'r2', c2: str = 'c2') -> Tf:
    '''
    Returns the response of a two stage passive RC network.

    With no swaps both stages are low-pass; swapping a stage exchanges its
    resistor and capacitor, making that stage high-pass.
    '''
    z11, z12 = _impedances(r1, c1, swap_first)
    z21, z22 = _impedances(r2, c2, swap_second)
    return z22 / z11 / ((z22 + z21) * (1 / z11 + 1 / z12) + 1)

def second_order_rlc_filter(swap_first: bool = False, swap_second: bool = False,
                            l: str = 'l', r: str = 'r', c: str = 'c') -> Tf:
    '''
    Returns the response of a series RLC divider.

    swap_first moves the inductor between the two arms of the divider, and
    swap_second exchanges the resistor and capacitor.
    '''
    inductor = s() * l
    z11, z12 = (tf(0), inductor) if swap_first else (inductor, tf(0))
    z21, z22 = _impedances(r, c, swap_second)
    return (z12 + z22) / (z11 + z12 + z21 + z22)

def sallen_key(swap_first: bool = False, swap_second: bool = False, gain: str = 'g',
               r1: str = 'r1', c1: str = 'c1', r2: str = 'r2', c2: str = 'c2') -> Tf:
    '''
    Returns the response of a second order Sallen-Key stage with amplifier gain g.

    With no swaps this is the low-pass configuration; swapping both stages
    gives the high-pass one.
    '''
    z11, z12 = _impedances(r1, c1, swap_first)
    z21, z22 = _impedances(r2, c2, swap_second)
    g = tf(gain)
    return (g * z22 * z12) / (z12 * (z22 + z21 + z11) + z11 * (z22 * (1 - g) + z21))
