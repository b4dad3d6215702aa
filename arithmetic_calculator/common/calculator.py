"""Entry points that evaluate an expression and report it to a log sink."""
from typing import Callable, Optional

from arithmetic_calculator.common.errors import ExpressionError
from arithmetic_calculator.common.logger import logger
from arithmetic_calculator.common.operations import OperationRequest, OperationResult
from arithmetic_calculator.common.parser import evaluate_expression


# Receives one informational line of text
LogSink = Callable[[str], None]


def _emit(sink: LogSink, message: str) -> None:
    """Send a message to the sink; a failing sink never affects evaluation."""
    try:
        sink(message)
    except Exception as exc:
        logger.warning(f"Log sink failed, message dropped: {exc!r}")


def calculate(expression: str, log: Optional[LogSink] = None) -> float:
    """
    Evaluate an arithmetic expression, logging the input and the outcome.

    Two lines go to the sink per call: ``Calculating: <input>`` first, then
    ``Result: <value>`` or ``Error: <message>``.

    :param str expression: Arithmetic expression, whitespace allowed
    :param LogSink log: Callable receiving the log lines, defaults to the package logger

    :return: Computed result as float
    :rtype: float
    :raises ExpressionError: If the expression cannot be evaluated
    :raises RecursionError: If nesting exceeds the interpreter recursion limit
    """
    sink: LogSink = logger.info if log is None else log

    _emit(sink, f"Calculating: {expression}")
    try:
        result: float = evaluate_expression(expression)
    except (ExpressionError, RecursionError) as exc:
        _emit(sink, f"Error: {exc}")
        raise

    _emit(sink, f"Result: {result}")
    return result


def evaluate_request(request: OperationRequest, log: Optional[LogSink] = None) -> OperationResult:
    """
    Evaluate a request and wrap the value or the error message in a result model.

    :param OperationRequest request: Expression to evaluate
    :param LogSink log: Callable receiving the log lines, defaults to the package logger

    :return: Result holding either the value or the error message
    :rtype: OperationResult
    """
    try:
        return OperationResult(expression=request.expression, result=calculate(request.expression, log))
    except ExpressionError as exc:
        return OperationResult(expression=request.expression, error=str(exc))
