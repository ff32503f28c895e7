"""Calculator expression parsing with structured error diagnosis and correction."""

# Main API
from calcexpr.calcexpr import CalcExpr
from calcexpr.calcexpr_types import CalcExprResult

# Failures and exceptions
from calcexpr.calcexpr_error import (
    CalcExprFailureReason, CalcExprParseFailure, CalcExprError, CalcExprParseError, CalcExprDepthError
)

# Diagnosis
from calcexpr.calcexpr_diagnosis import CalcExprDiagnosis, CalcExprLocation, CalcExprExplanation
from calcexpr.calcexpr_explainer import CalcExprExplainer

# Lower-level components (for advanced usage)
from calcexpr.calcexpr_token import CalcExprToken, CalcExprTokenType
from calcexpr.calcexpr_tokenizer import CalcExprTokenizer
from calcexpr.calcexpr_cursor import CalcExprCursor
from calcexpr.calcexpr_parser import CalcExprParser
from calcexpr.calcexpr_corrector import CalcExprCorrector
from calcexpr.calcexpr_math import CalcExprMath


__all__ = [
    # Main API
    "CalcExpr", "CalcExprResult",

    # Failures and exceptions
    "CalcExprFailureReason", "CalcExprParseFailure", "CalcExprError", "CalcExprParseError", "CalcExprDepthError",

    # Diagnosis
    "CalcExprDiagnosis", "CalcExprLocation", "CalcExprExplanation", "CalcExprExplainer",

    # Lower-level components
    "CalcExprToken", "CalcExprTokenType", "CalcExprTokenizer", "CalcExprCursor", "CalcExprParser",
    "CalcExprCorrector", "CalcExprMath"
]
