"""Main calculator expression class."""

import logging
from typing import Iterable, List, Mapping

from calcexpr.calcexpr_corrector import CalcExprCorrector
from calcexpr.calcexpr_cursor import CalcExprCursor
from calcexpr.calcexpr_diagnosis import CalcExprDiagnosis
from calcexpr.calcexpr_error import CalcExprParseFailure
from calcexpr.calcexpr_parser import CalcExprParser
from calcexpr.calcexpr_token import CalcExprToken
from calcexpr.calcexpr_tokenizer import CalcExprTokenizer
from calcexpr.calcexpr_types import CalcExprResult


class CalcExpr:
    """
    Arithmetic expression calculator with structured error diagnosis.

    Expressions use +, -, *, / and ^ (right-associative power), unary signs,
    parentheses, decimal numbers and variables from a caller-supplied
    whitelist.  Evaluation never raises for bad input: it returns a result
    holding either the value or a classified failure, and a failure can be
    explained in detail with explain():
    - where the input stopped making sense
    - why the parser gave up
    - an example of a corrected expression, when a single edit fixes it

    Each call is independent; no state is kept between evaluations.
    """

    def __init__(self, max_depth: int = 100, max_correction_attempts: int = 256):
        """
        Initialize calculator.

        Args:
            max_depth: Maximum nesting of parentheses and exponents
            max_correction_attempts: Maximum number of candidate corrections checked per explanation

        Raises:
            ValueError: If max_depth is negative or deeper than the interpreter's recursion limit allows
        """
        CalcExprParser.check_max_depth(max_depth)
        self.max_depth = max_depth
        self.max_correction_attempts = max_correction_attempts
        self._tokenizer = CalcExprTokenizer()
        self._logger = logging.getLogger("CalcExpr")

    def tokenize(self, expression: str) -> List[CalcExprToken]:
        """
        Tokenize an expression.

        Args:
            expression: Expression text

        Returns:
            Tokens, ending with END_OF_INPUT
        """
        return self._tokenizer.tokenize(expression)

    def evaluate(
        self,
        expression: str,
        variables: Mapping[str, float] | Iterable[str] | None = None
    ) -> CalcExprResult:
        """
        Evaluate an expression.

        Args:
            expression: Expression text; may be empty
            variables: Allowed variable names, either as a mapping to their values or
                as a collection of names that all evaluate to 0

        Returns:
            Result holding either the value or the parse failure

        Raises:
            TypeError: If variables is a string rather than a collection of names
            CalcExprDepthError: If the expression nests more deeply than max_depth
        """
        allowed = self._normalize_variables(variables)
        tokens = self._tokenizer.tokenize(expression)
        parser = CalcExprParser(CalcExprCursor(tokens, expression), allowed, self.max_depth)
        result = parser.parse()

        if result.failure is not None:
            self._logger.debug(
                "Failed to parse '%s': %s at position %d",
                expression, result.failure.reason.name, result.failure.position
            )

        return result

    def explain(self, failure: CalcExprParseFailure, expression: str | None = None) -> CalcExprDiagnosis:
        """
        Build a structured explanation of a parse failure.

        Args:
            failure: Failure returned by evaluate()
            expression: The expression that was evaluated, if the caller wants it checked

        Returns:
            Diagnosis of the failure; its suggested fix is computed on first access

        Raises:
            ValueError: If expression is not the text the failure came from
        """
        if expression is not None and expression != failure.expression:
            raise ValueError(f"Failure was produced from '{failure.expression}', not '{expression}'")

        return CalcExprDiagnosis(failure, self._create_corrector())

    def try_correct(self, failure: CalcExprParseFailure) -> str | None:
        """
        Look for a single-token edit that makes the failed expression parse.

        Args:
            failure: Failure returned by evaluate()

        Returns:
            Corrected expression text that evaluates successfully, or None
        """
        return self._create_corrector().try_correct(failure)

    def _create_corrector(self) -> CalcExprCorrector:
        return CalcExprCorrector(max_attempts=self.max_correction_attempts, max_depth=self.max_depth)

    def _normalize_variables(self, variables: Mapping[str, float] | Iterable[str] | None) -> dict[str, float]:
        """Turn the caller's whitelist into a name to value mapping."""
        if variables is None:
            return {}

        if isinstance(variables, str):
            raise TypeError("Variables must be a collection of names, not a single string")

        if isinstance(variables, Mapping):
            return {name: float(value) for name, value in variables.items()}

        return {name: 0.0 for name in variables}
