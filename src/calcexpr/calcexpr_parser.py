"""Recursive descent parser and evaluator for calculator expressions."""

import sys
from typing import Mapping

from calcexpr.calcexpr_cursor import CalcExprCursor
from calcexpr.calcexpr_error import (
    CalcExprDepthError, CalcExprFailureReason, CalcExprParseError, CalcExprParseFailure
)
from calcexpr.calcexpr_math import CalcExprMath
from calcexpr.calcexpr_token import CalcExprTokenType
from calcexpr.calcexpr_types import CalcExprResult


class CalcExprParser:
    """
    Parses and evaluates an arithmetic expression from a token cursor.

    Grammar, lowest precedence first:

        expression   := term (('+' | '-') term)*
        term         := signed_power (('*' | '/') signed_power)*
        signed_power := ('-' | '+')? power
        power        := factor ('^' signed_power)?
        factor       := NUMBER | IDENTIFIER | '(' expression ')'

    Values are computed while parsing.  The first problem found aborts the
    whole parse; there is no recovery here.
    """

    # Deepest chain of parse method frames one nesting level can add
    FRAMES_PER_LEVEL = 5

    # Interpreter frames kept free for callers and the correction search
    RECURSION_HEADROOM = 200

    def __init__(self, cursor: CalcExprCursor, variables: Mapping[str, float], max_depth: int = 100):
        """
        Initialize parser.

        Args:
            cursor: Cursor over the tokens to parse; it is advanced as tokens are consumed
            variables: Allowed variable names and their values
            max_depth: Maximum nesting of parentheses and exponents

        Raises:
            ValueError: If max_depth is negative or deeper than the interpreter's recursion limit allows
        """
        self.check_max_depth(max_depth)
        self._cursor = cursor
        self._variables = variables
        self._max_depth = max_depth
        self._depth = 0

    @classmethod
    def depth_ceiling(cls) -> int:
        """
        Get the deepest nesting the parser can reach under the current recursion limit.

        Returns:
            Largest usable max_depth
        """
        return max(0, (sys.getrecursionlimit() - cls.RECURSION_HEADROOM) // cls.FRAMES_PER_LEVEL)

    @classmethod
    def check_max_depth(cls, max_depth: int) -> None:
        """
        Check that a nesting limit can be honoured.

        Args:
            max_depth: Proposed nesting limit

        Raises:
            ValueError: If max_depth is negative or above depth_ceiling()
        """
        if max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {max_depth}")

        ceiling = cls.depth_ceiling()
        if max_depth > ceiling:
            raise ValueError(
                f"max_depth {max_depth} exceeds {ceiling}, the deepest nesting "
                f"the recursion limit of {sys.getrecursionlimit()} allows"
            )

    def parse(self) -> CalcExprResult:
        """
        Parse and evaluate a complete expression.

        Returns:
            Result holding either the value or the failure that stopped the parse

        Raises:
            CalcExprDepthError: If the expression nests more deeply than max_depth,
                or the interpreter stack runs out while parsing
        """
        try:
            value = self._parse_expression()
            if not self._cursor.at_end():
                raise self._error(CalcExprFailureReason.INCOMPLETE, "Incomplete expression")

        except CalcExprParseError as e:
            return CalcExprResult(success=False, failure=e.failure)

        except RecursionError as e:
            # Only reachable if the caller was already deep in the stack
            raise CalcExprDepthError(self._max_depth, self._cursor.current_token.position) from e

        return CalcExprResult(success=True, value=value)

    def _parse_expression(self) -> float:
        value = self._parse_term()

        while self._cursor.current_token.is_operator('+', '-'):
            operator = self._cursor.advance()
            right = self._parse_term()
            value = value + right if operator.text == '+' else value - right

        return value

    def _parse_term(self) -> float:
        value = self._parse_signed_power()

        while self._cursor.current_token.is_operator('*', '/'):
            operator = self._cursor.advance()
            right = self._parse_signed_power()
            value = value * right if operator.text == '*' else CalcExprMath.divide(value, right)

        return value

    def _parse_signed_power(self) -> float:
        if not self._cursor.current_token.is_operator('+', '-'):
            return self._parse_power()

        sign = self._cursor.advance()
        value = self._parse_power()
        return -value if sign.text == '-' else value

    def _parse_power(self) -> float:
        base = self._parse_factor()

        if not self._cursor.current_token.is_operator('^'):
            return base

        self._cursor.advance()

        # The exponent is itself a signed power, which makes ^ right-associative
        self._enter_nesting()
        try:
            exponent = self._parse_signed_power()

        finally:
            self._depth -= 1

        return CalcExprMath.power(base, exponent)

    def _parse_factor(self) -> float:
        token = self._cursor.current_token

        if token.type == CalcExprTokenType.NUMBER:
            self._cursor.advance()
            return float(token.text)

        if token.type == CalcExprTokenType.IDENTIFIER:
            if token.text not in self._variables:
                raise self._error(CalcExprFailureReason.UNKNOWN_VARIABLE, f"Unknown variable: {token.text}")

            self._cursor.advance()
            return float(self._variables[token.text])

        if token.type == CalcExprTokenType.LPAREN:
            self._cursor.advance()
            self._enter_nesting()
            try:
                value = self._parse_expression()

            finally:
                self._depth -= 1

            self._expect(CalcExprTokenType.RPAREN, ')')
            return value

        if token.type == CalcExprTokenType.END_OF_INPUT:
            raise self._error(CalcExprFailureReason.PREMATURE_EOF, "Unexpected end of input")

        raise self._error(CalcExprFailureReason.BAD_FACTOR, "Expected a value")

    def _expect(self, token_type: CalcExprTokenType, text: str) -> None:
        """Consume a required token."""
        if self._cursor.current_token.type != token_type:
            raise self._error(CalcExprFailureReason.EXPECTED, f"Expected '{text}'", expected=text)

        self._cursor.advance()

    def _enter_nesting(self) -> None:
        self._depth += 1
        if self._depth > self._max_depth:
            raise CalcExprDepthError(self._max_depth, self._cursor.current_token.position)

    def _error(
        self,
        reason: CalcExprFailureReason,
        message: str,
        expected: str | None = None
    ) -> CalcExprParseError:
        """Build the exception that aborts the parse at the current token."""
        failure = CalcExprParseFailure(
            reason=reason,
            message=message,
            cursor=self._cursor.copy(),
            variables=self._variables,
            expected=expected
        )
        return CalcExprParseError(failure)
