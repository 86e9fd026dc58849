"""Test classes Operands, OperationResult and ErrorResponse."""
import math

from pydantic import ValidationError
import pytest

from calculator_microservice.common.models import ErrorResponse, Operands, OperationResult


def test_operands_valid() -> None:
    """Test that valid operands can be created."""
    operands = Operands(num1=2.5, num2=-4)
    assert operands.num1 == 2.5
    assert operands.num2 == -4.0
    assert isinstance(operands.num2, float)


def test_operands_num2_optional() -> None:
    """Test that num2 may be omitted for unary operations."""
    assert Operands(num1=9).num2 is None


@pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
def test_operands_reject_non_finite(value: float) -> None:
    """Test that non-finite operands raise a validation error."""
    with pytest.raises(ValidationError):
        Operands(num1=value)
    with pytest.raises(ValidationError):
        Operands(num1=1, num2=value)


def test_operands_are_frozen() -> None:
    """Test that validated operands cannot be modified."""
    operands = Operands(num1=1, num2=2)
    with pytest.raises(ValidationError):
        operands.num1 = 3


def test_operation_result_valid() -> None:
    """Test that a valid OperationResult can be created."""
    res = OperationResult(operation="addition", result=8)
    assert res.operation == "addition"
    assert res.result == 8.0
    assert isinstance(res.result, float)


def test_operation_result_invalid_result_type() -> None:
    """Test that invalid result type raises a validation error."""
    with pytest.raises(ValidationError):
        OperationResult(operation="addition", result="not a float")


def test_operation_result_non_finite_serialized_as_null() -> None:
    """Test that NaN and Infinity results are written as JSON null."""
    assert OperationResult(operation="exponentiation", result=math.nan).model_dump_json() == (
        '{"operation":"exponentiation","result":null}'
    )
    assert OperationResult(operation="multiplication", result=math.inf).model_dump_json() == (
        '{"operation":"multiplication","result":null}'
    )


def test_error_response_requires_message() -> None:
    """Test that an error response needs a message."""
    assert ErrorResponse(error="Cannot divide by zero.").error == "Cannot divide by zero."
    with pytest.raises(ValidationError):
        ErrorResponse()
