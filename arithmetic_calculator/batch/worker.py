"""Worker process evaluating a single arithmetic expression."""
from multiprocessing.connection import Connection
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from arithmetic_calculator.common.calculator import calculate
from arithmetic_calculator.common.logger import logger
from arithmetic_calculator.common.operations import OperationResult


class WorkerProcess(BaseModel):
    """
    Worker responsible for evaluating one arithmetic expression.

    Lifecycle:
        - Spawned by the batch runner in its own process
        - Receives one expression only
        - Sends an OperationResult payload (value or error) through a Pipe
        - Terminates immediately after computation
    """

    # Allow arbitrary types like multiprocessing.Connection
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    conn: Connection = Field(..., description="Connection object for sending results back to the runner")
    expression: str = Field(..., description="Single arithmetic expression to evaluate")
    line_number: int = Field(..., ge=1, description="Line number in the input file")

    @field_validator("expression")
    def expression_must_not_be_empty(cls, v: str) -> str:
        """Ensure that the expression is not empty."""
        if not v.strip():
            raise ValueError("Expression cannot be empty")
        return v

    def _log(self, message: str) -> None:
        logger.debug(f"👷 line {self.line_number}: {message}")

    def run(self) -> None:
        """
        Evaluate the expression and send the result or error through the pipe.

        :return: None
        """
        logger.info(f"👷🏁 Worker started on line {self.line_number}: {self.expression}")

        outcome: Optional[OperationResult] = None

        try:
            outcome = OperationResult(
                expression=self.expression, result=calculate(self.expression, log=self._log)
            )
        except Exception as exc:
            # RecursionError on very deep nesting lands here too
            logger.error(
                f"👷❌ Worker failed on line {self.line_number}: {exc}\n"
                f"Invalid arithmetic expression, could not evaluate: {self.expression!r}"
            )
            outcome = OperationResult(expression=self.expression, error=str(exc) or type(exc).__name__)

        try:
            self.conn.send({"line": self.line_number, **outcome.model_dump()})
        finally:
            self.conn.close()

        if outcome.ok:
            logger.info(f"👷✅ Worker finished on line {self.line_number}: {outcome.result}")
