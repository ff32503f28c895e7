"""Token types and token representation for calculator expressions."""

from dataclasses import dataclass
from enum import Enum


class CalcExprTokenType(Enum):
    """Token types for calculator expressions."""
    NUMBER = "NUMBER"
    IDENTIFIER = "IDENTIFIER"
    OPERATOR = "OPERATOR"
    LPAREN = "("
    RPAREN = ")"
    END_OF_INPUT = "END_OF_INPUT"
    ERROR = "ERROR"


@dataclass(frozen=True)
class CalcExprToken:
    """Represents a single token in a calculator expression."""
    type: CalcExprTokenType
    text: str
    position: int
    leading_whitespace: str = ""

    @property
    def leading_whitespace_length(self) -> int:
        """Number of whitespace characters immediately before this token."""
        return len(self.leading_whitespace)

    def is_legal(self) -> bool:
        """Return True if this token is a real lexical unit of the grammar."""
        return self.type not in (CalcExprTokenType.END_OF_INPUT, CalcExprTokenType.ERROR)

    def is_operator(self, *texts: str) -> bool:
        """Return True if this is an operator token with one of the given texts."""
        return self.type == CalcExprTokenType.OPERATOR and self.text in texts

    def __repr__(self) -> str:
        return f"CalcExprToken({self.type.name}, {self.text!r}, pos={self.position})"
