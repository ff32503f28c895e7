"""Structured diagnosis of calculator expression parse failures."""

from enum import Enum
from typing import Any, assert_never

from calcexpr.calcexpr_corrector import CalcExprCorrector
from calcexpr.calcexpr_cursor import CalcExprCursor
from calcexpr.calcexpr_error import CalcExprFailureReason, CalcExprParseFailure


class CalcExprLocation(Enum):
    """Where in the input a parse failed."""
    EMPTY = "empty"
    START_ILLEGAL_SYMBOL = "start_illegal_symbol"
    START_MEANINGLESS_SYMBOL = "start_meaningless_symbol"
    ENDS_UNEXPECTEDLY = "ends_unexpectedly"
    ENDS_WITH = "ends_with"
    ENDS_WITH_UNRECOGNISED = "ends_with_unrecognised"


class CalcExprExplanation(Enum):
    """Why a parse failed, in the terms a user-facing message needs."""
    INCOMPLETE = "incomplete"
    EXPECTED_VALUE = "expected_value"
    EXPECTED_VALUE_TO_FOLLOW = "expected_value_to_follow"
    EXPECTED_TOKEN = "expected_token"
    UNKNOWN_VARIABLE = "unknown_variable"


class CalcExprDiagnosis:
    """
    Read-only explanation of a parse failure.

    Everything except the suggested fix is worked out when the diagnosis is
    built.  The suggested fix needs a correction search, so it is only computed
    the first time it is asked for and then remembered.
    """

    def __init__(self, failure: CalcExprParseFailure, corrector: CalcExprCorrector) -> None:
        """
        Initialize diagnosis.

        Args:
            failure: The failure to explain
            corrector: Correction engine used to compute the suggested fix
        """
        cursor = failure.cursor
        token = cursor.current_token

        self._failure = failure
        self._corrector = corrector
        self._input_text = cursor.expression
        self._reason = failure.reason
        self._expected_token_text = failure.expected
        self._where_text = cursor.consumed_text()
        self._offending_token_text = None if cursor.at_end() else token.text
        self._is_offending_token_legal = token.is_legal()
        self._location = self._locate(cursor)
        self._explanation = self._explain(cursor)

        self._suggested_fix: str | None = None
        self._suggested_fix_computed = False

    @property
    def failure(self) -> CalcExprParseFailure:
        """The failure being explained."""
        return self._failure

    @property
    def input_text(self) -> str:
        """The text that failed to parse."""
        return self._input_text

    @property
    def reason(self) -> CalcExprFailureReason:
        """The parser's failure reason."""
        return self._reason

    @property
    def location(self) -> CalcExprLocation:
        """Where the failure happened."""
        return self._location

    @property
    def explanation(self) -> CalcExprExplanation | None:
        """Why the failure happened, or None if the location already says it all."""
        return self._explanation

    @property
    def where_text(self) -> str:
        """The input up to (not including) the offending token and its leading whitespace."""
        return self._where_text

    @property
    def offending_token_text(self) -> str | None:
        """Text of the token the parser stopped at, or None at the end of the input."""
        return self._offending_token_text

    @property
    def is_offending_token_legal(self) -> bool:
        """True if the offending token is a real symbol in the wrong place rather than gibberish."""
        return self._is_offending_token_legal

    @property
    def expected_token_text(self) -> str | None:
        """The token the parser required, for EXPECTED failures."""
        return self._expected_token_text

    @property
    def suggested_fix(self) -> str | None:
        """A corrected version of the input that parses, or None if none was found."""
        if not self._suggested_fix_computed:
            self._suggested_fix = self._corrector.try_correct(self._failure)
            self._suggested_fix_computed = True

        return self._suggested_fix

    def to_dict(self) -> dict[str, Any]:
        """
        Get the diagnosis as plain data for a presentation layer.

        Enum members are given by value.  This computes the suggested fix.
        """
        return {
            "input_text": self._input_text,
            "reason": self._reason.value,
            "location": self._location.value,
            "explanation": self._explanation.value if self._explanation is not None else None,
            "where_text": self._where_text,
            "offending_token_text": self._offending_token_text,
            "is_offending_token_legal": self._is_offending_token_legal,
            "expected_token_text": self._expected_token_text,
            "suggested_fix": self.suggested_fix,
        }

    def _locate(self, cursor: CalcExprCursor) -> CalcExprLocation:
        if cursor.is_empty():
            return CalcExprLocation.EMPTY

        if cursor.at_start():
            if self._is_offending_token_legal:
                return CalcExprLocation.START_ILLEGAL_SYMBOL

            return CalcExprLocation.START_MEANINGLESS_SYMBOL

        if cursor.at_end():
            return CalcExprLocation.ENDS_UNEXPECTEDLY

        if self._is_offending_token_legal:
            return CalcExprLocation.ENDS_WITH

        return CalcExprLocation.ENDS_WITH_UNRECOGNISED

    def _explain(self, cursor: CalcExprCursor) -> CalcExprExplanation | None:
        reason = self._reason

        if reason is CalcExprFailureReason.INCOMPLETE:
            # Leftover gibberish is already described by the location
            if self._is_offending_token_legal:
                return CalcExprExplanation.INCOMPLETE

            return None

        if reason is CalcExprFailureReason.BAD_FACTOR or reason is CalcExprFailureReason.PREMATURE_EOF:
            if cursor.at_start():
                return CalcExprExplanation.EXPECTED_VALUE

            return CalcExprExplanation.EXPECTED_VALUE_TO_FOLLOW

        if reason is CalcExprFailureReason.EXPECTED:
            return CalcExprExplanation.EXPECTED_TOKEN

        if reason is CalcExprFailureReason.UNKNOWN_VARIABLE:
            return CalcExprExplanation.UNKNOWN_VARIABLE

        assert_never(reason)

    def __repr__(self) -> str:
        return (
            f"CalcExprDiagnosis({self._reason.name}, {self._location.name}, "
            f"where={self._where_text!r}, token={self._offending_token_text!r})"
        )
