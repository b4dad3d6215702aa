"""Test class ExpressionParser and evaluate_expression."""
from decimal import Decimal
import sys

import pytest

from arithmetic_calculator.common.errors import (
    DivisionByZeroError,
    EmptyExpressionError,
    ExpressionError,
    InvalidNumberError,
    MissingClosingParenError,
    TrailingTokensError,
    UnexpectedCharacterError,
    UnexpectedEndOfExpressionError,
    UnexpectedTokenError,
)
from arithmetic_calculator.common.lexer import Lexer
from arithmetic_calculator.common.parser import ExpressionParser, evaluate_expression, strip_whitespace


@pytest.mark.parametrize("expr,expected", [
    ("3 + 4", 7.0),
    ("10 - 2", 8.0),
    ("3 * 5", 15.0),
    ("8 / 2", 4.0),
    ("3 + 4 * 2", 11.0),  # tests precedence
    ("7 + 3 * 2 - 4 / 2", 11.0),
    ("2+3*4", 14.0),
    ("(2+3)*4", 20.0),
    ("((1))", 1.0),
    ("0.1+0.2", 0.1 + 0.2),
    ("1/3", 1 / 3),
    ("2*(3+(4-1))/3", 4.0),
])
def test_evaluate_valid(expr, expected):
    """Evaluate returns correct result for valid expressions."""
    assert evaluate_expression(expr) == expected


@pytest.mark.parametrize("expr,expected", [
    ("10-2-3", 5.0),
    ("100/5/2", 10.0),
    ("2*3/4*5", 7.5),
    ("1-2+3", 2.0),
])
def test_evaluate_left_associative(expr, expected):
    """Operators of equal precedence group from left to right."""
    assert evaluate_expression(expr) == expected


@pytest.mark.parametrize("expr,expected", [
    ("--5", 5.0),
    ("-(2+3)", -5.0),
    ("+-3", -3.0),
    ("++3", 3.0),
    ("---2", -2.0),
    ("2*-3", -6.0),
    ("2--3", 5.0),
    ("-2*-2", 4.0),
])
def test_evaluate_unary_sign(expr, expected):
    """Unary plus and minus stack and bind tighter than binary operators."""
    assert evaluate_expression(expr) == expected


def test_evaluate_whitespace_invariance():
    """Whitespace anywhere, tabs and newlines included, does not change the result."""
    assert evaluate_expression("1 + 2") == evaluate_expression("1+2")
    assert evaluate_expression(" \t( 1 +\n2 ) * 3 ") == 9.0
    assert strip_whitespace(" 1 +\t2\n") == "1+2"


def test_evaluate_zero_division():
    """Division by zero is detected before dividing."""
    with pytest.raises(DivisionByZeroError):
        evaluate_expression("5/0")
    with pytest.raises(DivisionByZeroError):
        evaluate_expression("5/(2-2)")
    with pytest.raises(DivisionByZeroError):
        evaluate_expression("1/-0")
    assert evaluate_expression("0/5") == 0.0


@pytest.mark.parametrize("expr,error_cls,message", [
    ("", EmptyExpressionError, "Empty expression"),
    ("   ", EmptyExpressionError, "Empty expression"),
    ("(1+2", MissingClosingParenError, "Missing closing parenthesis"),
    ("(", UnexpectedEndOfExpressionError, "Unexpected end of expression"),
    ("1+2)", TrailingTokensError, "Unexpected tokens at end of expression"),
    ("(1)(2)", TrailingTokensError, "Unexpected tokens at end of expression"),
    ("1..2", InvalidNumberError, "Invalid number: 1..2"),
    ("1+@2", UnexpectedCharacterError, "Unexpected character: @"),
    ("*5", UnexpectedTokenError, "Unexpected token: *"),
    ("5+*3", UnexpectedTokenError, "Unexpected token: *"),
    (")", UnexpectedTokenError, "Unexpected token: )"),
    ("()", UnexpectedTokenError, "Unexpected token: )"),
    ("1+", UnexpectedEndOfExpressionError, "Unexpected end of expression"),
    ("-", UnexpectedEndOfExpressionError, "Unexpected end of expression"),
])
def test_evaluate_invalid_expression(expr, error_cls, message):
    """Malformed expressions fail deterministically with the matching error."""
    with pytest.raises(error_cls) as exc_info:
        evaluate_expression(expr)
    assert str(exc_info.value) == message
    assert isinstance(exc_info.value, ExpressionError)
    assert isinstance(exc_info.value, ValueError)


def test_lexer_errors_win_over_parser_errors():
    """Tokenizing happens first, so a bad character is reported before a syntax error."""
    with pytest.raises(UnexpectedCharacterError):
        evaluate_expression("*5+a")


def test_evaluate_is_repeatable():
    """Evaluating the same string twice gives the same result."""
    expr = "(1.5 + 2) * -3 / 7 - 0.25"
    assert evaluate_expression(expr) == evaluate_expression(expr)


@pytest.mark.parametrize("value", [0.0, 1.0, 0.1, 123.456, 1e-7, 2.5e17, sys.float_info.max, 5e-324])
def test_numeric_literal_round_trip(value):
    """A finite double written in positional notation evaluates back to itself."""
    text = format(Decimal(repr(value)), "f")
    assert evaluate_expression(text) == value
    assert evaluate_expression(f"-{text}") == -value


def test_parser_consumes_tokens_with_cursor():
    """The parser moves a cursor forward and reports unconsumed tokens."""
    parser = ExpressionParser(Lexer.tokenize("1+2)"))
    assert parser.remaining == 4
    assert parser.parse_expression() == 3.0
    assert parser.remaining == 1


def test_parser_levels_can_be_used_directly():
    """parse_term stops at the first lower-precedence operator."""
    parser = ExpressionParser(Lexer.tokenize("2*3+4"))
    assert parser.parse_term() == 6.0
    assert parser.remaining == 2


def test_trailing_tokens_counts_remaining():
    """TrailingTokensError records how many tokens were left."""
    with pytest.raises(TrailingTokensError) as exc_info:
        ExpressionParser(Lexer.tokenize("1)))")).parse()
    assert exc_info.value.remaining == 3


def test_error_kinds():
    """Each error class names its category."""
    with pytest.raises(ExpressionError) as exc_info:
        evaluate_expression("1/0")
    assert exc_info.value.kind == "DivisionByZero"


def test_deep_nesting_hits_recursion_limit():
    """Extremely deep nesting is not guarded and exhausts the call stack."""
    depth = sys.getrecursionlimit()
    with pytest.raises(RecursionError):
        evaluate_expression("(" * depth + "1" + ")" * depth)


def test_moderate_nesting_evaluates():
    """Nesting well below the recursion limit evaluates normally."""
    depth = 50
    assert evaluate_expression("(" * depth + "2" + ")" * depth + "*" + "-" * depth + "1") == 2.0


def test_whitespace_is_removed_before_tokenizing():
    """Whitespace is stripped before lexing, so digits separated by spaces join into one number."""
    assert evaluate_expression("2 2") == 22.0
    assert evaluate_expression("1 0 - 2") == 8.0
