"""Shared fixtures and utilities for calculator expression tests."""

import pytest

from calcexpr import CalcExpr, CalcExprFailureReason, CalcExprParseFailure


@pytest.fixture
def calc():
    """Create a fresh calculator for each test."""
    return CalcExpr()


@pytest.fixture
def calc_custom():
    """Factory for calculators with custom configuration."""
    def _create_calc(max_depth: int = 100, max_correction_attempts: int = 256) -> CalcExpr:
        return CalcExpr(max_depth=max_depth, max_correction_attempts=max_correction_attempts)
    return _create_calc


class CalcExprTestHelpers:
    """Helper utilities for calculator expression testing."""

    @staticmethod
    def assert_evaluates_to(calc: CalcExpr, expression: str, expected: float, variables=None) -> None:
        """Assert that expression evaluates successfully to expected."""
        result = calc.evaluate(expression, variables)
        assert result.success, f"Expected '{expression}' to evaluate, got {result.failure}"
        assert result.value == pytest.approx(expected), f"Expected {expected!r}, got {result.value!r}"

    @staticmethod
    def assert_fails_with(
        calc: CalcExpr,
        expression: str,
        reason: CalcExprFailureReason,
        variables=None
    ) -> CalcExprParseFailure:
        """Assert that expression fails with the given reason and return the failure."""
        result = calc.evaluate(expression, variables)
        assert not result.success, f"Expected '{expression}' to fail, got {result.value!r}"
        assert result.failure is not None
        assert result.failure.reason == reason, f"Expected {reason.name}, got {result.failure.reason.name}"
        return result.failure

    @staticmethod
    def build_nested_expression(depth: int, base_value: str = "1") -> str:
        """Build an expression wrapped in depth pairs of parentheses."""
        return "(" * depth + base_value + ")" * depth


@pytest.fixture
def helpers():
    """Provide test helper utilities."""
    return CalcExprTestHelpers
