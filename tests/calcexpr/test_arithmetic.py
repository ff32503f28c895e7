"""Tests for evaluating well-formed arithmetic expressions."""

import math
import sys

import pytest

from calcexpr import CalcExpr, CalcExprDepthError, CalcExprParseError, CalcExprParser, CalcExprResult


class TestArithmetic:
    """Test values computed for valid expressions."""

    @pytest.mark.parametrize("expression,expected", [
        # Literals
        ("42", 42),
        ("3.5", 3.5),
        (".25", 0.25),
        ("5.", 5),

        # Precedence
        ("2 + 3 * 4", 14),
        ("2 * 3 + 4", 10),
        ("10 - 4 - 3", 3),
        ("100 / 10 / 5", 2),
        ("2 + 12 / 4 * 3", 11),
        ("(2 + 3) * 4", 20),
        ("((((7))))", 7),

        # Powers are right-associative and bind tighter than unary minus
        ("2 ^ 3 ^ 2", 512),
        ("(2 ^ 3) ^ 2", 64),
        ("-2 ^ 2", -4),
        ("(-2) ^ 2", 4),
        ("2 ^ -1", 0.5),
        ("2 ^ -1 ^ 2", 0.5),
        ("4 ^ 0.5", 2),

        # Unary signs
        ("-3", -3),
        ("+3", 3),
        ("2 * -3", -6),
        ("2 - -3", 5),
        ("-(1 + 2)", -3),
        ("6 / -2", -3),

        # Whitespace is insignificant
        ("  1+2  ", 3),
        ("\t2\n*\n3", 6),
    ])
    def test_expression_values(self, calc, helpers, expression, expected):
        """Test that expressions have their standard arithmetic meaning."""
        helpers.assert_evaluates_to(calc, expression, expected)

    def test_result_is_float(self, calc):
        """Test that there is no integer-only mode."""
        result = calc.evaluate("7 / 2")
        assert result.value == 3.5
        assert isinstance(result.value, float)

    def test_variables_from_mapping(self, calc, helpers):
        """Test variables supplied with values."""
        variables = {"x": 3, "rate": 0.5}
        helpers.assert_evaluates_to(calc, "x ^ 2 + rate", 9.5, variables)
        helpers.assert_evaluates_to(calc, "3 + x^2 / (1 - rate)", 21, variables)

    def test_variables_from_names_default_to_zero(self, calc, helpers):
        """Test that a plain set of names gives variables the value 0."""
        helpers.assert_evaluates_to(calc, "x + 1", 1, {"x"})
        helpers.assert_evaluates_to(calc, "a * b - 2", -2, ["a", "b"])

    def test_variable_names_are_case_sensitive(self, calc):
        """Test that X is not x."""
        assert calc.evaluate("x", {"x": 1}).success
        assert not calc.evaluate("X", {"x": 1}).success

    def test_string_whitelist_is_rejected(self, calc):
        """Test that a bare string is not mistaken for a set of names."""
        with pytest.raises(TypeError):
            calc.evaluate("x", "x")

    def test_idempotent(self, calc):
        """Test that evaluating twice gives identical results."""
        for expression in ["2 + 3 * 4", "3 +", "(3 + 4", "3 4", "y", ""]:
            first = calc.evaluate(expression, {"x": 2})
            second = calc.evaluate(expression, {"x": 2})
            assert first == second

    def test_unwrap(self, calc):
        """Test getting a value out of a result."""
        assert calc.evaluate("1 + 1").unwrap() == 2

        with pytest.raises(CalcExprParseError) as exc_info:
            calc.evaluate("1 +").unwrap()

        assert exc_info.value.failure.position == 3

    def test_result_invariants(self, calc):
        """Test that results carry exactly one of value and failure."""
        with pytest.raises(ValueError):
            CalcExprResult(success=True)

        failure = calc.evaluate("(").failure
        with pytest.raises(ValueError):
            CalcExprResult(success=False, value=1.0, failure=failure)


class TestIEEEArithmetic:
    """Test that division and powers follow floating-point semantics."""

    def test_division_by_zero(self, calc):
        """Test that dividing by zero gives infinities rather than an error."""
        assert calc.evaluate("1 / 0").value == math.inf
        assert calc.evaluate("-1 / 0").value == -math.inf
        assert calc.evaluate("1 / -0").value == -math.inf

    def test_zero_over_zero_is_nan(self, calc):
        """Test 0/0."""
        result = calc.evaluate("0 / 0")
        assert result.success
        assert math.isnan(result.value)

    def test_power_overflow(self, calc):
        """Test that overflowing powers give infinities."""
        assert calc.evaluate("10 ^ 400").value == math.inf
        assert calc.evaluate("(-10) ^ 401").value == -math.inf
        assert calc.evaluate("(-10) ^ 400").value == math.inf

    def test_negative_base_fractional_exponent_is_nan(self, calc):
        """Test that complex results become nan."""
        result = calc.evaluate("(-8) ^ (1 / 3)")
        assert result.success
        assert math.isnan(result.value)

    def test_zero_to_negative_power(self, calc):
        """Test powers of zero with negative exponents."""
        assert calc.evaluate("0 ^ -1").value == math.inf
        assert calc.evaluate("0 ^ -2").value == math.inf
        assert calc.evaluate("(-0) ^ -1").value == -math.inf

    def test_infinity_arithmetic(self, calc):
        """Test that infinities propagate."""
        result = calc.evaluate("1 / 0 - 1 / 0")
        assert math.isnan(result.value)


class TestNestingLimit:
    """Test the nesting depth limit."""

    def test_nesting_within_limit(self, calc_custom, helpers):
        """Test nesting up to the limit."""
        calc = calc_custom(max_depth=10)
        helpers.assert_evaluates_to(calc, helpers.build_nested_expression(10, "5"), 5)

    def test_nesting_beyond_limit(self, calc_custom, helpers):
        """Test that nesting past the limit raises."""
        calc = calc_custom(max_depth=10)
        with pytest.raises(CalcExprDepthError) as exc_info:
            calc.evaluate(helpers.build_nested_expression(11))

        assert exc_info.value.max_depth == 10
        assert exc_info.value.position == 11

    def test_exponent_chain_counts_towards_depth(self, calc_custom):
        """Test that right-associative power chains are limited too."""
        calc = calc_custom(max_depth=3)
        assert calc.evaluate("1^1^1^1").success
        with pytest.raises(CalcExprDepthError):
            calc.evaluate("1^1^1^1^1")

    def test_default_limit_handles_deep_nesting(self):
        """Test that the default limit accepts 100 levels and rejects valid input nested deeper."""
        calc = CalcExpr()
        assert calc.evaluate("(" * 100 + "1" + ")" * 100).value == 1
        with pytest.raises(CalcExprDepthError):
            calc.evaluate("(" * 101 + "1" + ")" * 101)

    def test_max_depth_beyond_recursion_limit_rejected(self):
        """Test that a limit the interpreter stack cannot reach is refused up front."""
        with pytest.raises(ValueError, match="max_depth 5000"):
            CalcExpr(max_depth=5000)

    def test_negative_max_depth_rejected(self):
        """Test that a negative limit is refused."""
        with pytest.raises(ValueError):
            CalcExpr(max_depth=-1)

    def test_ceiling_follows_recursion_limit(self, monkeypatch):
        """Test that raising the interpreter's recursion limit allows deeper nesting."""
        monkeypatch.setattr(sys, "getrecursionlimit", lambda: 5200)
        assert CalcExprParser.depth_ceiling() == 1000
        assert CalcExpr(max_depth=1000).max_depth == 1000

    def test_deepest_allowed_limit_never_overflows_stack(self, helpers):
        """Test that nesting at and past the largest allowed limit raises only CalcExprDepthError."""
        ceiling = CalcExprParser.depth_ceiling()
        calc = CalcExpr(max_depth=ceiling)
        assert calc.evaluate(helpers.build_nested_expression(ceiling)).value == 1

        with pytest.raises(CalcExprDepthError):
            calc.evaluate(helpers.build_nested_expression(3000))

        with pytest.raises(CalcExprDepthError):
            calc.evaluate("2" + "^1" * 3000)

    def test_stack_exhaustion_reported_as_depth_error(self, calc, monkeypatch):
        """Test that running out of interpreter stack surfaces as CalcExprDepthError."""
        def exhausted(self):
            raise RecursionError("maximum recursion depth exceeded")

        monkeypatch.setattr(CalcExprParser, "_parse_expression", exhausted)
        with pytest.raises(CalcExprDepthError) as exc_info:
            calc.evaluate("1 + 2")

        assert isinstance(exc_info.value.__cause__, RecursionError)
