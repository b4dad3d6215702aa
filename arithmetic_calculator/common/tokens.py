"""Token types produced by the lexer and consumed by the parser."""
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TokenKind(str, Enum):
    """Kinds of tokens; symbol kinds carry their source character as value."""

    NUMBER = "number"
    PLUS = "+"
    MINUS = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"


# Single-character symbols recognized by the lexer
SYMBOLS: Dict[str, TokenKind] = {
    kind.value: kind for kind in TokenKind if kind is not TokenKind.NUMBER
}


class Token(BaseModel):
    """
    Smallest lexical unit of an arithmetic expression.

    A NUMBER token carries its floating-point value, every other kind carries none.
    """

    model_config = ConfigDict(frozen=True)

    kind: TokenKind = Field(..., description="Kind of token")
    value: Optional[float] = Field(default=None, description="Numeric value of a NUMBER token")

    @model_validator(mode="after")
    def value_matches_kind(self) -> "Token":
        """Ensure that only NUMBER tokens hold a value."""
        if self.kind is TokenKind.NUMBER and self.value is None:
            raise ValueError("Number token requires a value")
        if self.kind is not TokenKind.NUMBER and self.value is not None:
            raise ValueError(f"Symbol token {self.kind.value!r} cannot hold a value")
        return self

    @classmethod
    def number(cls, value: float) -> "Token":
        """Build a NUMBER token."""
        return cls(kind=TokenKind.NUMBER, value=value)

    @classmethod
    def symbol(cls, char: str) -> "Token":
        """Build the token for a single operator or parenthesis character."""
        return cls(kind=SYMBOLS[char])

    def __str__(self) -> str:
        if self.kind is TokenKind.NUMBER:
            return repr(self.value)
        return self.kind.value
