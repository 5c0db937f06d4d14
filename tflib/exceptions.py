from __future__ import annotations

class TflibException(Exception):
    "Base exception for transfer function library errors."
    pass

class TflibInternalException(TflibException):
    "Base exception for internal condtions in the library."
    pass

class MismatchedDomain(TflibInternalException):
    "Values from different transform domains were combined."
    pass

class ConstructionError(TflibInternalException):
    "A problem was encountered creating an object."
    pass

class EvaluationError(TflibInternalException):
    "A problem was encountered while evaluating a value numerically."
    pass

class OperationError(TflibException):
    "An error encountered during a mathematical operation"
    pass

class InexactDivisionError(OperationError):
    "A polynomial division that was required to be exact left a remainder."
    def __init__(self, message: str, quotient=None, remainder=None):
        super().__init__(message)
        self.quotient = quotient
        self.remainder = remainder

class CoefficientParseError(ConstructionError):
    "A coefficient string could not be parsed."
    pass
