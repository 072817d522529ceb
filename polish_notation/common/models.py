"""Pydantic models for evaluation requests and their outcomes."""
from typing import Optional, Union

from pydantic import BaseModel, Field, StrictInt


class EvaluationRequest(BaseModel):
    """Represents a single prefix expression to evaluate."""

    expression: str = Field(..., description="Arithmetic expression in prefix notation")
    strict: bool = Field(default=False, description="Raise on malformed input instead of returning a best-effort value")


class EvaluationResult(BaseModel):
    """Represents the result of an evaluated expression."""

    line: int = Field(..., ge=1, description="Line number of the expression in the input")
    expression: str = Field(..., description="Original prefix expression")
    # Integer results stay int, of any size
    result: Optional[Union[StrictInt, float]] = Field(
        ..., description="Evaluated numeric result, None when nothing was produced"
    )


class EvaluationFailure(BaseModel):
    """Represents an expression that could not be evaluated."""

    line: int = Field(..., ge=1, description="Line number of the expression in the input")
    expression: str = Field(..., description="Original prefix expression")
    error: str = Field(..., description="Error message raised during evaluation")
