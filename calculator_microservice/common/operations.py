"""Arithmetic operations and the dispatcher that runs them."""
from collections.abc import Callable as ABCCallable
import logging
import math
import operator
from typing import Callable, Dict

from pydantic import BaseModel, ConfigDict, Field

from calculator_microservice.common.exceptions import (
    DivisionByZero,
    InvalidInput,
    ModuloByZero,
    NegativeSquareRoot,
    UnknownOperation,
)
from calculator_microservice.common.logger import logger as default_logger
from calculator_microservice.common.models import Operands, OperationResult

# Type alias for operation functions (taking one or two floats, returning a float)
OperationFn: ABCCallable[..., float] = Callable[..., float]


def _is_odd_integer(value: float) -> bool:
    return math.isfinite(value) and value.is_integer() and int(value) % 2 == 1


def ieee_pow(base: float, exponent: float) -> float:
    """
    Raise ``base`` to ``exponent`` with IEEE 754 results instead of exceptions.

    ``math.pow`` raises where IEEE 754 ``pow`` returns a special value:

        - negative base with a non-integer exponent gives NaN
        - zero base with a negative exponent gives +/-Infinity
        - an overflowing result gives +/-Infinity

    :param float base: Base
    :param float exponent: Exponent

    :return: ``base ** exponent``
    :rtype: float
    """
    try:
        return math.pow(base, exponent)
    except ValueError:
        if base == 0:
            # The sign of zero survives only through an odd integer exponent
            return math.copysign(math.inf, base) if _is_odd_integer(exponent) else math.inf
        return math.nan
    except OverflowError:
        return -math.inf if base < 0 and _is_odd_integer(exponent) else math.inf


def divide(num1: float, num2: float) -> float:
    """Divide ``num1`` by a non-zero ``num2``."""
    if num2 == 0:
        raise DivisionByZero()
    return num1 / num2


def modulo(num1: float, num2: float) -> float:
    """Truncating remainder; the sign of the result follows ``num1``."""
    if num2 == 0:
        raise ModuloByZero()
    return math.fmod(num1, num2)


def square_root(num1: float) -> float:
    """Square root of a non-negative ``num1``."""
    if num1 < 0:
        raise NegativeSquareRoot()
    return math.sqrt(num1)


class Operation(BaseModel):
    """Description of one arithmetic operation exposed by the service."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Name reported in the 'operation' field of a result")
    symbol: str = Field(..., description="Operator symbol used in log messages")
    arity: int = Field(..., ge=1, le=2, description="Number of operands")
    function: OperationFn = Field(..., description="Function computing the result")

    @property
    def is_binary(self) -> bool:
        return self.arity == 2

    def describe(self, operands: Operands, result: float) -> str:
        """Render the informational log line of a successful computation."""
        if self.is_binary:
            return f"{self.label.capitalize()} operation: {operands.num1} {self.symbol} {operands.num2} = {result}"
        return f"{self.label.capitalize()} operation: {self.symbol}({operands.num1}) = {result}"


# Mapping of route names to operations
OPERATIONS: Dict[str, Operation] = {
    "add": Operation(label="addition", symbol="+", arity=2, function=operator.add),
    "subtract": Operation(label="subtraction", symbol="-", arity=2, function=operator.sub),
    "multiply": Operation(label="multiplication", symbol="*", arity=2, function=operator.mul),
    "divide": Operation(label="division", symbol="/", arity=2, function=divide),
    "power": Operation(label="exponentiation", symbol="^", arity=2, function=ieee_pow),
    "sqrt": Operation(label="square root", symbol="sqrt", arity=1, function=square_root),
    "modulo": Operation(label="modulo", symbol="%", arity=2, function=modulo),
}

# Error events logged when an operation rejects its operands
DOMAIN_FAILURE_EVENTS: Dict[type, str] = {
    DivisionByZero: "➗❌ Division by zero attempt",
    ModuloByZero: "➗❌ Modulo by zero attempt",
    NegativeSquareRoot: "√❌ Square root of negative number attempt",
}


class OperationDispatcher(BaseModel):
    """
    Compute a named operation on validated operands.

    The dispatcher holds no state besides the injected logger, so a single
    instance serves every request concurrently.
    """

    # Allow arbitrary types like logging.Logger
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    logger: logging.Logger = Field(default=default_logger, description="Sink for computation events")
    operations: Dict[str, Operation] = Field(default=OPERATIONS, description="Operations by route name")

    def get(self, name: str) -> Operation:
        """Return the operation registered under ``name``."""
        try:
            return self.operations[name]
        except KeyError:
            raise UnknownOperation(name) from None

    def dispatch(self, name: str, operands: Operands) -> OperationResult:
        """
        Compute ``name`` on ``operands``.

        :param str name: Route name of the operation
        :param Operands operands: Validated operands

        :return: Tagged result of the computation
        :rtype: OperationResult
        :raises UnknownOperation: If the operation is not registered
        :raises InvalidInput: If a binary operation gets no second operand
        :raises CalculatorError: If the operands violate the operation's domain
        """
        op: Operation = self.get(name)
        if op.is_binary and operands.num2 is None:
            self.logger.error(f"🔢❌ Missing second operand for {name}")
            raise InvalidInput()
        args = (operands.num1, operands.num2) if op.is_binary else (operands.num1,)

        try:
            result: float = op.function(*args)
        except tuple(DOMAIN_FAILURE_EVENTS) as exc:
            self.logger.error(DOMAIN_FAILURE_EVENTS[type(exc)])
            raise

        self.logger.info(f"✅ {op.describe(operands, result)}")
        return OperationResult(operation=op.label, result=result)
