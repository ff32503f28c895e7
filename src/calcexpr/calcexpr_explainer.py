"""Renders calculator expression diagnoses as readable text."""

from typing import Mapping

from calcexpr.calcexpr_diagnosis import CalcExprDiagnosis, CalcExprExplanation, CalcExprLocation


class CalcExprExplainer:
    """
    Turns a diagnosis into a multi-line message.

    This is pure templating: all of the positional and classification work has
    already been done by the diagnosis.  Templates use str.format() fields named
    after diagnosis attributes ({input_text}, {where_text}, {token},
    {expected}, {fix}).  Pass a different template table to localize.
    """

    DEFAULT_TEMPLATES: Mapping[object, str] = {
        "intro": "I don't understand \"{input_text}\".",
        "example": "An example of something I understand is \"{fix}\".",

        CalcExprLocation.EMPTY: "It's empty!",
        CalcExprLocation.START_ILLEGAL_SYMBOL: "It starts with \"{token}\", which can't go there.",
        CalcExprLocation.START_MEANINGLESS_SYMBOL: "It starts with \"{token}\", which means nothing to me.",
        CalcExprLocation.ENDS_UNEXPECTEDLY: "It ends unexpectedly after \"{where_text}\".",
        CalcExprLocation.ENDS_WITH: "It makes sense up to \"{where_text}\", but then comes \"{token}\".",
        CalcExprLocation.ENDS_WITH_UNRECOGNISED:
            "It makes sense up to \"{where_text}\", but then comes \"{token}\", which means nothing to me.",

        CalcExprExplanation.INCOMPLETE:
            "The beginning is a complete expression, but it doesn't know what to do with the rest.",
        CalcExprExplanation.EXPECTED_VALUE: "It should start with a number, a variable or an opening parenthesis.",
        CalcExprExplanation.EXPECTED_VALUE_TO_FOLLOW:
            "A number, a variable or an opening parenthesis should come next.",
        CalcExprExplanation.EXPECTED_TOKEN: "I expected to see \"{expected}\" there.",
        CalcExprExplanation.UNKNOWN_VARIABLE: "That variable isn't one I know about.",
    }

    def __init__(self, templates: Mapping[object, str] | None = None) -> None:
        """
        Initialize explainer.

        Args:
            templates: Replacement templates, merged over the defaults
        """
        self._templates = dict(self.DEFAULT_TEMPLATES)
        if templates:
            self._templates.update(templates)

    def explain(self, diagnosis: CalcExprDiagnosis) -> str:
        """
        Render a diagnosis.

        Args:
            diagnosis: The diagnosis to render

        Returns:
            Intro paragraph, then where and why lines, then a corrected example if one was found
        """
        fields = {
            "input_text": diagnosis.input_text,
            "where_text": diagnosis.where_text,
            "token": diagnosis.offending_token_text or "",
            "expected": diagnosis.expected_token_text or "",
            "fix": diagnosis.suggested_fix or "",
        }

        parts = [self._templates["intro"].format(**fields), ""]
        parts.append(self._templates[diagnosis.location].format(**fields))

        if diagnosis.explanation is not None:
            parts.append(self._templates[diagnosis.explanation].format(**fields))

        if diagnosis.suggested_fix is not None:
            parts.append(self._templates["example"].format(**fields))

        return "\n".join(parts)
