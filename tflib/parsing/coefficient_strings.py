from __future__        import annotations

from parsy import (
    ParseError,
    regex,
    seq,
    string,
)

from tflib.coefficients          import Coefficient
from tflib.exceptions            import CoefficientParseError
from tflib.monomials             import Monomial
from tflib.parsing.parsy_adjust  import generate, parse_error_message, with_label

#
# Grammar
#
# A coefficient is a signed sum of terms. A term is an optional integer
# weight followed by symbol factors joined by * or /, each with an optional
# integer power: 2*R/C^2 - tau^-1 + 1. Whitespace is allowed between tokens.
#

ws = regex(r'\s*')

weight_p = with_label('an integer weight', regex(r'[0-9]+').map(int))
name_p = with_label('a symbol name', regex(r'[A-Za-z_][A-Za-z0-9_]*'))
exponent_p = with_label('an integer exponent', regex(r'-?[0-9]+').map(int))
operator_p = with_label('* or /', regex(r'[*/]'))
sign_p = with_label('+ or -', regex(r'[+-]'))

power_p = seq(name_p, (ws >> string('^') >> ws >> exponent_p).optional()).combine(
    lambda name, exp: Monomial({name: 1 if exp is None else exp})
)
factor_p = seq(ws >> operator_p << ws, power_p)


@generate('a term')
def term():
    weight = yield weight_p.optional()
    if weight is None:
        mono = yield power_p
        weight = 1
    else:
        mono = Monomial()
    factors = yield factor_p.many()
    for op, factor in factors:
        if op == '*':
            mono *= factor
        else:
            mono /= factor
    return (weight, mono)

@generate('a coefficient')
def coefficient_sum():
    yield ws
    lead = yield string('-').optional()
    yield ws
    weight, mono = yield term
    terms = [(-weight if lead else weight, mono)]
    rest = yield seq(ws >> sign_p << ws, term).many()
    yield ws
    for sign, (weight, mono) in rest:
        terms.append((-weight if sign == '-' else weight, mono))
    return terms


#
# Main Entry Point
#

def parse_coefficient(text: str, rich=False, short=False) -> Coefficient:
    """Parses a string like '2*R/C - tau^2 + 1' into a Coefficient.

    Repeated terms accumulate, so 'R + R' is 2*R. Raises a
    CoefficientParseError describing where the text went wrong.

    """
    try:
        terms = coefficient_sum.parse(text)
    except ParseError as e:
        raise CoefficientParseError(parse_error_message(e, rich, short))

    result = Coefficient()
    for weight, mono in terms:
        result += Coefficient.from_key(mono, weight)
    return result
