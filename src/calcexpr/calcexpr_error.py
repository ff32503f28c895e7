"""Parse failure taxonomy and exception classes for calculator expressions."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping

from calcexpr.calcexpr_cursor import CalcExprCursor
from calcexpr.calcexpr_token import CalcExprToken


class CalcExprFailureReason(Enum):
    """Why a parse failed."""

    # The start of the input was a legal expression, but unparsable input was left over
    INCOMPLETE = "incomplete"

    # A non-value token (like "/") appeared where a value (like "42" or "x^2") was needed
    BAD_FACTOR = "bad_factor"

    # The input ended before a full expression had been parsed
    PREMATURE_EOF = "premature_eof"

    # A particular token (like ")") was required but something else was found
    EXPECTED = "expected"

    # The expression uses a variable that is not on the allowed list
    UNKNOWN_VARIABLE = "unknown_variable"


@dataclass(frozen=True)
class CalcExprParseFailure:
    """
    A classified parse failure.

    The cursor is a private copy positioned at the offending token; it is what
    the diagnostics use to work out where the parse stopped.  Failures hash on
    everything except the variables, which are usually a plain dict.
    """
    reason: CalcExprFailureReason
    message: str
    cursor: CalcExprCursor
    variables: Mapping[str, float] = field(hash=False)
    expected: str | None = None

    def __post_init__(self) -> None:
        if self.reason == CalcExprFailureReason.EXPECTED:
            if not self.expected:
                raise ValueError("An EXPECTED failure must name the expected token")

        elif self.expected is not None:
            raise ValueError(f"A {self.reason.name} failure cannot name an expected token")

    @property
    def token(self) -> CalcExprToken:
        """The offending token."""
        return self.cursor.current_token

    @property
    def position(self) -> int:
        """Character position of the offending token."""
        return self.cursor.current_token.position

    @property
    def expression(self) -> str:
        """The text that failed to parse."""
        return self.cursor.expression


class CalcExprError(Exception):
    """Base exception for calculator expression errors."""


class CalcExprParseError(CalcExprError):
    """Raised to abort a parse; carries the classified failure."""

    def __init__(self, failure: CalcExprParseFailure):
        """
        Initialize the exception.

        Args:
            failure: The failure that aborted the parse
        """
        super().__init__(f"{failure.message} at position {failure.position}")
        self.failure = failure


class CalcExprDepthError(CalcExprError):
    """Raised when an expression nests more deeply than the configured limit."""

    def __init__(self, max_depth: int, position: int):
        """
        Initialize the exception.

        Args:
            max_depth: The nesting limit that was exceeded
            position: Character position where the limit was exceeded
        """
        super().__init__(f"Expression nesting exceeds maximum depth of {max_depth} at position {position}")
        self.max_depth = max_depth
        self.position = position
