from __future__ import annotations

from parsy     import (
    Parser,
    ParseError,
    Result,
)
from functools         import wraps


#
# Labels that survive aggregation
#

def with_label(description: str, p: Parser) -> Parser:
    "Reports failures of p as `description` instead of p's own expectations."
    def labelled(stream, index) -> Result:
        result = p(stream, index)
        if result.status:
            return result
        return Result.failure(index, description)
    return Parser(labelled)

def generate(description: str):
    """Creates a labelled parser from a generator function.

    Unlike parsy's `generate(...).desc()`, the expectations of each step
    are kept alongside the label, so errors name what the next token could be.

    """
    def decorate(fn) -> Parser:
        @Parser
        @wraps(fn)
        def generated(stream, index):
            start = index
            iterator = fn()
            result = None
            value = None
            try:
                while True:
                    next_parser = iterator.send(value)
                    result = next_parser(stream, index).aggregate(result)
                    if not result.status:
                        return result.aggregate(Result.failure(start, description))
                    value = result.value
                    index = result.index
            except StopIteration as stop:
                return Result.success(index, stop.value).aggregate(result)
        return generated
    return decorate


#
# Error messages
#

def describe_expected(expected: frozenset[str]) -> str:
    "Joins the expected descriptions: 'a name', 'either a or b', 'one of a, b, or c'."
    terms = sorted(expected)
    if not terms:
        return 'nothing'
    if len(terms) == 1:
        return terms[0]
    if len(terms) == 2:
        return f'either {terms[0]} or {terms[1]}'
    return 'one of ' + ', '.join(terms[:-1]) + ', or ' + terms[-1]

def parse_error_message(e: ParseError, rich=False, short=False) -> str:
    """Explains where a coefficient string went wrong.

    The long form quotes the text around the failure with a caret under the
    offending character; `rich` adds console markup to it. The short form
    fits on one line, with a * marking the position.

    """
    expected = describe_expected(e.expected)
    at_end = e.index >= len(e.stream)
    where = 'the end of the input' if at_end else f'character {e.index + 1}'

    start = max(e.index - 5, 0)
    before = ('...' if start > 0 else '') + e.stream[start:e.index]
    bad = '' if at_end else e.stream[e.index]
    after = e.stream[e.index + 1:e.index + 6]

    if short:
        return f'Expected {expected} at {where}: "{before}*{bad}{after}"'

    caret = ' ' * (5 + len(before)) + '^'
    if rich:
        return (f'I expected to see {expected} at {where}:\n'
                f'    "[#71716f]{before}[/][#ff0f0f bold]{bad}[/]{after}"\n'
                f'{caret[:-1]}[#ff0f0f bold]^[/]')
    return f'I expected to see {expected} at {where}:\n    "{before}{bad}{after}"\n{caret}'
