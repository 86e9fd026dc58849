"""Validate raw query-string operands before any computation."""
import logging
import math
import re
from typing import Optional

from calculator_microservice.common.exceptions import InvalidInput
from calculator_microservice.common.logger import logger as default_logger
from calculator_microservice.common.models import Operands

# Plain ASCII decimal notation with an optional exponent: "3", "-2.5", ".5", "1e3"
NUMBER_RE = re.compile(r"^[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$")


def parse_number(raw: Optional[str]) -> Optional[float]:
    """
    Convert a raw operand to a finite float.

    Words, ``nan``, ``inf``, hexadecimal and digit separators are not
    accepted, nor is a value that overflows to infinity (``1e999``).

    :param raw: Raw query-string value, possibly ``None``

    :return: The parsed value, or ``None`` when ``raw`` is not a finite number
    :rtype: Optional[float]
    """
    if raw is None:
        return None
    token = raw.strip()
    if not NUMBER_RE.match(token):
        return None
    value = float(token)
    return value if math.isfinite(value) else None


def validate_operands(
    num1: Optional[str],
    num2: Optional[str] = None,
    require_num2: bool = True,
    logger: logging.Logger = default_logger,
) -> Operands:
    """
    Validate the operands of a request.

    ``num2`` is checked whenever it is supplied, even for unary operations,
    but only kept when the operation needs it.

    :param num1: Raw first operand
    :param num2: Raw second operand
    :param bool require_num2: Whether the operation is binary
    :param logging.Logger logger: Sink for the rejection event

    :return: Operands converted to floats, unchanged otherwise
    :rtype: Operands
    :raises InvalidInput: If a required operand is missing or an operand is not a finite number
    """
    value1 = parse_number(num1)
    num2_supplied = num2 is not None and num2 != ""
    value2 = parse_number(num2) if num2_supplied else None

    if value1 is None or (num2_supplied and value2 is None) or (require_num2 and not num2_supplied):
        logger.error("🔢❌ Invalid input parameters")
        raise InvalidInput()

    return Operands(num1=value1, num2=value2 if require_num2 else None)
