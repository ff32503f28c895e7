"""Shared dataclasses for calculator expression evaluation."""

from dataclasses import dataclass

from calcexpr.calcexpr_error import CalcExprParseError, CalcExprParseFailure


@dataclass(frozen=True)
class CalcExprResult:
    """Result of evaluating an expression: either a value or a failure."""

    success: bool
    value: float | None = None
    failure: CalcExprParseFailure | None = None

    def __post_init__(self) -> None:
        if self.success and (self.value is None or self.failure is not None):
            raise ValueError("A successful result must carry a value and no failure")

        if not self.success and (self.failure is None or self.value is not None):
            raise ValueError("A failed result must carry a failure and no value")

    def unwrap(self) -> float:
        """
        Get the value of a successful evaluation.

        Returns:
            The computed value

        Raises:
            CalcExprParseError: If the evaluation failed
        """
        if self.failure is not None:
            raise CalcExprParseError(self.failure)

        assert self.value is not None, "Successful result without a value"
        return self.value
