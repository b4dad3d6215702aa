"""Errors raised while evaluating an arithmetic expression."""


class ExpressionError(ValueError):
    """
    Base class of every evaluation error.

    The message (``str(exc)``) is the human-readable description returned to callers,
    ``kind`` names the error category.
    """

    kind: str = "ExpressionError"
    message: str = "Invalid expression"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.message)


class EmptyExpressionError(ExpressionError):
    """The input is empty once whitespace is removed."""

    kind = "EmptyExpression"
    message = "Empty expression"


class InvalidNumberError(ExpressionError):
    """A numeric literal is not a valid float, e.g. ``1..2``."""

    kind = "InvalidNumber"

    def __init__(self, literal: str) -> None:
        self.literal = literal
        super().__init__(f"Invalid number: {literal}")


class UnexpectedCharacterError(ExpressionError):
    """A character outside digits, ``.``, operators and parentheses."""

    kind = "UnexpectedCharacter"

    def __init__(self, char: str, position: int) -> None:
        self.char = char
        self.position = position
        super().__init__(f"Unexpected character: {char}")


class UnexpectedEndOfExpressionError(ExpressionError):
    """A factor was expected but no tokens are left."""

    kind = "UnexpectedEndOfExpression"
    message = "Unexpected end of expression"


class UnexpectedTokenError(ExpressionError):
    """A token that cannot start a factor, e.g. ``*`` or ``)``."""

    kind = "UnexpectedToken"

    def __init__(self, token: object) -> None:
        self.token = token
        super().__init__(f"Unexpected token: {token}")


class MissingClosingParenError(ExpressionError):
    """An opened parenthesis is never closed."""

    kind = "MissingClosingParen"
    message = "Missing closing parenthesis"


class DivisionByZeroError(ExpressionError):
    """The right operand of ``/`` evaluated to zero."""

    kind = "DivisionByZero"
    message = "Division by zero"


class TrailingTokensError(ExpressionError):
    """Tokens remain after a complete top-level expression."""

    kind = "TrailingTokens"
    message = "Unexpected tokens at end of expression"

    def __init__(self, remaining: int = 0) -> None:
        self.remaining = remaining
        super().__init__()
