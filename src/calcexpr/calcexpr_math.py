"""IEEE 754 arithmetic for calculator expressions."""

import math


class CalcExprMath:
    """
    Arithmetic with IEEE 754 double semantics.

    Python raises ZeroDivisionError, OverflowError and ValueError where IEEE
    arithmetic produces infinities or NaN.  The calculator wants the IEEE
    values, so these helpers map the exceptions back.
    """

    @staticmethod
    def divide(dividend: float, divisor: float) -> float:
        """Divide, giving +/-inf for a non-zero value over zero and nan for 0/0."""
        try:
            return dividend / divisor

        except ZeroDivisionError:
            if math.isnan(dividend) or dividend == 0.0:
                return math.nan

            return math.copysign(math.inf, dividend) * math.copysign(1.0, divisor)

    @staticmethod
    def power(base: float, exponent: float) -> float:
        """Raise base to exponent, giving infinities on overflow and nan for complex results."""
        try:
            return math.pow(base, exponent)

        except OverflowError:
            if base < 0.0 and CalcExprMath._is_odd_integer(exponent):
                return -math.inf

            return math.inf

        except ValueError:
            # math.pow refuses 0 ** negative and negative ** non-integer
            if base == 0.0:
                if CalcExprMath._is_odd_integer(exponent):
                    return math.copysign(math.inf, base)

                return math.inf

            return math.nan

    @staticmethod
    def _is_odd_integer(value: float) -> bool:
        return value.is_integer() and int(value) % 2 == 1
