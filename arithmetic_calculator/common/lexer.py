"""Split a whitespace-free arithmetic expression into tokens."""
from typing import List, Tuple

from arithmetic_calculator.common.errors import InvalidNumberError, UnexpectedCharacterError
from arithmetic_calculator.common.tokens import SYMBOLS, Token


# Characters that may appear inside a numeric literal (ASCII only)
NUMBER_CHARS: str = "0123456789."


class Lexer:
    """
    Convert an arithmetic expression into an ordered list of tokens.

    The input must already be stripped of whitespace. Scanning goes left to right
    with one character of lookahead and never backtracks:
        - a digit or ``.`` starts a numeric literal, read greedily
        - each of ``+ - * / ( )`` becomes exactly one token
        - anything else is rejected
    """

    @staticmethod
    def tokenize(text: str) -> List[Token]:
        """
        Tokenize an arithmetic expression.

        :param str text: Expression without whitespace

        :return: Tokens in input order
        :rtype: List[Token]
        :raises InvalidNumberError: If a numeric literal is not a valid float
        :raises UnexpectedCharacterError: If a character is not part of the grammar
        """
        tokens: List[Token] = []
        position: int = 0

        while position < len(text):
            char: str = text[position]
            if char in NUMBER_CHARS:
                token, position = Lexer._read_number(text, position)
                tokens.append(token)
            elif char in SYMBOLS:
                tokens.append(Token.symbol(char))
                position += 1
            else:
                raise UnexpectedCharacterError(char, position)

        return tokens

    @staticmethod
    def _read_number(text: str, start: int) -> Tuple[Token, int]:
        """
        Read the numeric literal starting at ``start``.

        :param str text: Expression without whitespace
        :param int start: Index of the first character of the literal

        :return: Tuple of (NUMBER token, index just past the literal)
        :rtype: Tuple[Token, int]
        :raises InvalidNumberError: If the literal does not parse as a float
        """
        end: int = start
        while end < len(text) and text[end] in NUMBER_CHARS:
            end += 1

        literal: str = text[start:end]
        try:
            value = float(literal)
        except ValueError:
            raise InvalidNumberError(literal) from None

        return Token.number(value), end
