"""Parse and evaluate arithmetic expressions safely."""
from typing import Optional, Sequence, Tuple

from arithmetic_calculator.common.errors import (
    DivisionByZeroError,
    EmptyExpressionError,
    MissingClosingParenError,
    TrailingTokensError,
    UnexpectedEndOfExpressionError,
    UnexpectedTokenError,
)
from arithmetic_calculator.common.lexer import Lexer
from arithmetic_calculator.common.tokens import Token, TokenKind


class ExpressionParser:
    """
    Recursive-descent parser that evaluates while it parses.

    Design constraints:
        - No eval(), no dynamic code execution
        - No syntax tree: every sub-expression is reduced to a float as soon as it is read
        - Tokens are read through a cursor that only moves forward

    Grammar, lowest precedence first:

        expression := term (('+' | '-') term)*
        term       := factor (('*' | '/') factor)*
        factor     := NUMBER | ('+' | '-') factor | '(' expression ')'

    Binary operators are left-associative: ``10 - 2 - 3`` is ``(10 - 2) - 3``.

    Recursion depth grows with parenthesis nesting and chained unary signs
    (three frames per level), so inputs nested several hundred levels deep
    raise RecursionError. That limit is not guarded.
    """

    def __init__(self, tokens: Sequence[Token]) -> None:
        self._tokens: Tuple[Token, ...] = tuple(tokens)
        self._position: int = 0

    @property
    def remaining(self) -> int:
        """Number of tokens not consumed yet."""
        return len(self._tokens) - self._position

    def _peek(self) -> Optional[Token]:
        """Return the next token without consuming it, or None when exhausted."""
        if self._position < len(self._tokens):
            return self._tokens[self._position]
        return None

    def _advance(self) -> Token:
        """Consume and return the next token."""
        token = self._tokens[self._position]
        self._position += 1
        return token

    def _next_kind_in(self, *kinds: TokenKind) -> bool:
        token = self._peek()
        return token is not None and token.kind in kinds

    def parse(self) -> float:
        """
        Evaluate the whole token sequence as one expression.

        :return: Value of the expression
        :rtype: float
        :raises ExpressionError: On the first syntax or arithmetic error
        """
        value: float = self.parse_expression()
        if self.remaining:
            raise TrailingTokensError(self.remaining)
        return value

    def parse_expression(self) -> float:
        """Fold terms joined by ``+`` and ``-`` from left to right."""
        value: float = self.parse_term()
        while self._next_kind_in(TokenKind.PLUS, TokenKind.MINUS):
            operator_token = self._advance()
            if operator_token.kind is TokenKind.PLUS:
                value += self.parse_term()
            else:
                value -= self.parse_term()
        return value

    def parse_term(self) -> float:
        """Fold factors joined by ``*`` and ``/`` from left to right."""
        value: float = self.parse_factor()
        while self._next_kind_in(TokenKind.MULTIPLY, TokenKind.DIVIDE):
            operator_token = self._advance()
            if operator_token.kind is TokenKind.MULTIPLY:
                value *= self.parse_factor()
            else:
                divisor: float = self.parse_factor()
                if divisor == 0.0:
                    raise DivisionByZeroError()
                value /= divisor
        return value

    def parse_factor(self) -> float:
        """Read a literal, a signed factor or a parenthesized expression."""
        if self._peek() is None:
            raise UnexpectedEndOfExpressionError()

        token = self._advance()

        if token.kind is TokenKind.NUMBER:
            return token.value
        if token.kind is TokenKind.MINUS:
            return -self.parse_factor()
        if token.kind is TokenKind.PLUS:
            return self.parse_factor()
        if token.kind is TokenKind.LEFT_PAREN:
            value: float = self.parse_expression()
            if not self._next_kind_in(TokenKind.RIGHT_PAREN):
                raise MissingClosingParenError()
            self._advance()
            return value

        raise UnexpectedTokenError(token)


def strip_whitespace(expr: str) -> str:
    """Remove every whitespace character from an expression."""
    return "".join(expr.split())


def evaluate_expression(expr: str) -> float:
    """
    Evaluate an arithmetic expression.

    :param str expr: Arithmetic expression, whitespace allowed anywhere

    :return: Computed result as float
    :rtype: float
    :raises ExpressionError: If the expression is empty, malformed, or divides by zero
    """
    stripped: str = strip_whitespace(expr)
    if not stripped:
        raise EmptyExpressionError()

    return ExpressionParser(Lexer.tokenize(stripped)).parse()
