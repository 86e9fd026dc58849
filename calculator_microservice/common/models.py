"""Pydantic models for operands, operation results and error payloads."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, FiniteFloat


class Operands(BaseModel):
    """Validated operands of a single request."""

    # Operands are request-scoped and never modified after validation
    model_config = ConfigDict(frozen=True)

    num1: FiniteFloat = Field(..., description="First operand")
    num2: Optional[FiniteFloat] = Field(
        default=None, description="Second operand, absent for unary operations"
    )


class OperationResult(BaseModel):
    """Represents the result of an evaluated arithmetic operation."""

    operation: str = Field(..., description="Name of the performed operation, e.g. 'addition'")
    # NaN and +/-Infinity are allowed and serialized as JSON null
    result: float = Field(..., description="Computed numeric result")


class ErrorResponse(BaseModel):
    """Body returned for every rejected request."""

    error: str = Field(..., description="Human-readable error message")
