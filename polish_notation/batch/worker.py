"""Worker process evaluating a single prefix expression."""
from multiprocessing.connection import Connection
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

from polish_notation.common.evaluator import PrefixEvaluator
from polish_notation.common.logger import logger
from polish_notation.common.models import EvaluationFailure, EvaluationResult


class WorkerProcess(BaseModel):
    """
    Worker responsible for evaluating one prefix expression.

    Lifecycle:
        - Spawned by the batch runner
        - Receives one expression only
        - Sends the computed result or error through a Pipe
        - Terminates immediately after computation
    """

    # Allow arbitrary types like multiprocessing.Connection
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    conn: Connection = Field(..., description="Connection object for sending results back to the runner")
    expression: str = Field(..., description="Single prefix expression to evaluate")
    line_number: int = Field(..., ge=1, description="Line number in the input file")
    strict: bool = Field(default=False, description="Evaluate in strict mode")

    @field_validator("expression")
    def expression_must_not_be_empty(cls, v: str) -> str:
        """Ensure that the expression is not empty."""
        if not v.strip():
            raise ValueError("Expression cannot be empty")
        return v

    def run(self) -> None:
        """Evaluate the expression and send the result or error payload through the pipe."""
        logger.info(f"👷🏁 Worker started on line {self.line_number}: {self.expression}")

        payload: Dict[str, Any]
        try:
            result = PrefixEvaluator.evaluate(self.expression, strict=self.strict)
            payload = EvaluationResult(
                line=self.line_number, expression=self.expression, result=result
            ).model_dump()
            logger.info(f"👷✅ Worker finished on line {self.line_number}: {result}")

        except (ValueError, ArithmeticError) as exc:
            logger.error(
                f"👷❌ Worker failed on line {self.line_number}: {exc}\n"
                f"Could not evaluate prefix expression: {self.expression!r}"
            )
            payload = EvaluationFailure(
                line=self.line_number, expression=self.expression, error=str(exc)
            ).model_dump()

        try:
            self.conn.send(payload)
        finally:
            self.conn.close()
