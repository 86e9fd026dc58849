"""Errors raised while validating operands or computing an operation."""
from typing import Optional


class CalculatorError(Exception):
    """
    Base class for every failure reported back to a client.

    :param str message: Human-readable message sent in the ``error`` field
    :param int status_code: HTTP status code used by the request boundary
    """

    status_code: int = 400

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class InvalidInput(CalculatorError):
    """A required operand is missing or is not a finite number."""

    def __init__(self) -> None:
        super().__init__("Invalid input parameters. Please provide valid numbers.")


class DivisionByZero(CalculatorError):
    """Raised when dividing by zero."""

    def __init__(self) -> None:
        super().__init__("Cannot divide by zero.")


class ModuloByZero(CalculatorError):
    """Raised when computing a remainder with a zero divisor."""

    def __init__(self) -> None:
        super().__init__("Cannot compute modulo by zero.")


class NegativeSquareRoot(CalculatorError):
    """Raised when taking the square root of a negative number."""

    def __init__(self) -> None:
        super().__init__("Cannot compute square root of a negative number.")


class UnknownOperation(CalculatorError):
    """The dispatcher was asked for an operation it does not know."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown operation: {name}", status_code=404)
        self.name = name
