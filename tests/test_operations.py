"""Test classes OperationRequest and OperationResult."""
from pydantic import ValidationError
import pytest

from arithmetic_calculator.common.operations import OperationRequest, OperationResult


def test_operation_request_valid() -> None:
    """Test that a valid OperationRequest can be created."""
    req = OperationRequest(expression="2 + 2 * 3")
    assert req.expression == "2 + 2 * 3"
    assert isinstance(req.expression, str)

def test_operation_request_invalid_type() -> None:
    """Test that non-string expressions raise a validation error."""
    with pytest.raises(ValidationError):
        # int instead of str
        OperationRequest(expression=123)

def test_operation_result_valid() -> None:
    """Test that a valid OperationResult can be created."""
    res = OperationResult(expression="2 + 2 * 3", result=8.0)
    assert res.expression == "2 + 2 * 3"
    assert res.result == 8.0
    assert isinstance(res.result, float)
    assert res.ok

def test_operation_result_error() -> None:
    """Test that an OperationResult can carry an error message instead of a value."""
    res = OperationResult(expression="1/0", error="Division by zero")
    assert not res.ok
    assert res.result is None

def test_operation_result_requires_exactly_one_outcome() -> None:
    """Test that result and error are mutually exclusive and one is required."""
    with pytest.raises(ValidationError):
        OperationResult(expression="1+1")
    with pytest.raises(ValidationError):
        OperationResult(expression="1+1", result=2.0, error="boom")

def test_operation_result_invalid_expression_type() -> None:
    """Test that invalid expression type raises a validation error."""
    with pytest.raises(ValidationError):
        OperationResult(expression=42, result=8.0)

def test_operation_result_invalid_result_type() -> None:
    """Test that invalid result type raises a validation error."""
    with pytest.raises(ValidationError):
        OperationResult(expression="2 + 2", result="not a float")

@pytest.mark.parametrize("kwargs,line", [
    ({"expression": "2 + 3", "result": 5.0}, "2 + 3 = 5.0"),
    ({"expression": "2 +", "error": "Unexpected end of expression"}, "2 + -> ERROR: Unexpected end of expression"),
])
def test_operation_result_format_line(kwargs, line) -> None:
    """Test the one-line rendering used in results files and on stdout."""
    assert OperationResult(**kwargs).format_line() == line
