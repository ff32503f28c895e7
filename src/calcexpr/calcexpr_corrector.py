"""Suggests corrections for calculator expressions that fail to parse."""

import dataclasses
import difflib
import logging
from typing import Iterator, List, Mapping

from calcexpr.calcexpr_cursor import CalcExprCursor
from calcexpr.calcexpr_error import CalcExprDepthError, CalcExprFailureReason, CalcExprParseFailure
from calcexpr.calcexpr_parser import CalcExprParser
from calcexpr.calcexpr_token import CalcExprToken, CalcExprTokenType
from calcexpr.calcexpr_tokenizer import CalcExprTokenizer


class CalcExprCorrector:
    """
    Searches for a single-token edit that makes a failed expression parse.

    Edits are tried on a private copy of the failure's tokens, starting at the
    token where the parse stopped and working back towards the start of the
    input.  At each position the candidates are, in order:

    1. inserting the token the parser said it expected (failure position only)
    2. replacing an unrecognised character with the symbol it looks like
    3. deleting an unrecognised token, or an operator or ')' that was found
       where a value belonged
    4. inserting a value, a parenthesis or an operator
    5. substituting a token of the same kind: a similarly named variable for
       an identifier, another operator for an operator, the other parenthesis
       for a parenthesis
    6. deleting any other token
    7. replacing an unknown identifier with a value, or an unrecognised
       character with any token

    Every candidate is rendered back to text and checked by tokenizing and
    parsing that text from scratch, so a returned suggestion always evaluates.
    Candidates whose text tokenizes differently from the edit (for example a
    deletion that glues two numbers together) are rejected.  The number of
    candidates checked is capped to keep the search bounded.
    """

    VALUE_TEXT = "1"
    OPERATOR_TEXTS = ("+", "-", "*", "/", "^")

    # Generic tokens to try inserting, values first
    CANDIDATE_TEXTS = (VALUE_TEXT, "(", ")") + OPERATOR_TEXTS

    # Characters people type for an operator or bracket we do support
    LOOKALIKES = {
        '×': "*",
        '·': "*",
        '∙': "*",
        '÷': "/",
        ':': "/",
        '−': "-",
        '–': "-",
        '—': "-",
        '[': "(",
        ']': ")",
        '{': "(",
        '}': ")",
    }

    def __init__(self, max_attempts: int = 256, max_depth: int = 100) -> None:
        """
        Initialize corrector.

        Args:
            max_attempts: Maximum number of candidate expressions to check
            max_depth: Nesting limit passed to the parser when checking candidates
        """
        CalcExprParser.check_max_depth(max_depth)
        self._max_attempts = max_attempts
        self._max_depth = max_depth
        self._tokenizer = CalcExprTokenizer()
        self._logger = logging.getLogger("CalcExprCorrector")

    def try_correct(self, failure: CalcExprParseFailure) -> str | None:
        """
        Try to find a minimally edited version of the failed expression that parses.

        Args:
            failure: The failure from parsing the original expression

        Returns:
            The corrected expression text, or None if no single edit fixes it
        """
        tokens = list(failure.cursor.tokens)
        seen = {failure.expression}
        attempts = 0

        for candidate in self._candidate_edits(tokens, failure):
            text = CalcExprTokenizer.detokenize(candidate)
            if text in seen:
                continue

            seen.add(text)
            if attempts >= self._max_attempts:
                self._logger.debug(
                    "Giving up correcting '%s' after %d attempts", failure.expression, attempts
                )
                return None

            attempts += 1
            if self._parses(text, candidate, failure.variables):
                self._logger.debug(
                    "Corrected '%s' to '%s' after %d attempts", failure.expression, text, attempts
                )
                return text

        self._logger.debug("No correction found for '%s' after %d attempts", failure.expression, attempts)
        return None

    def _parses(self, text: str, candidate: List[CalcExprToken], variables: Mapping[str, float]) -> bool:
        """Check that text tokenizes into the candidate's tokens and parses successfully."""
        tokens = self._tokenizer.tokenize(text)
        if [token.text for token in tokens] != [token.text for token in candidate]:
            return False

        parser = CalcExprParser(CalcExprCursor(tokens, text), variables, self._max_depth)
        try:
            return parser.parse().success

        except CalcExprDepthError:
            return False

    def _candidate_edits(
        self,
        tokens: List[CalcExprToken],
        failure: CalcExprParseFailure
    ) -> Iterator[List[CalcExprToken]]:
        """Generate edited token lists, most plausible first."""
        failure_index = failure.cursor.index

        for index in range(failure_index, -1, -1):
            token = tokens[index]
            at_failure = index == failure_index
            deletable = token.type != CalcExprTokenType.END_OF_INPUT

            if at_failure and failure.expected is not None:
                yield self._insert(tokens, index, failure.expected)

            lookalike = self.LOOKALIKES.get(token.text) if token.type == CalcExprTokenType.ERROR else None
            if lookalike is not None:
                yield self._substitute(tokens, index, lookalike)

            deleted_first = deletable and (
                token.type == CalcExprTokenType.ERROR or
                (at_failure and failure.reason == CalcExprFailureReason.BAD_FACTOR)
            )
            if deleted_first:
                yield self._delete(tokens, index)

            for text in self.CANDIDATE_TEXTS:
                yield self._insert(tokens, index, text)

            for text in self._similar_texts(token, failure.variables):
                yield self._substitute(tokens, index, text)

            if deletable and not deleted_first:
                yield self._delete(tokens, index)

            for text in self._replacement_texts(token):
                yield self._substitute(tokens, index, text)

    def _similar_texts(self, token: CalcExprToken, variables: Mapping[str, float]) -> List[str]:
        """Get replacements of the same kind as a token, nearest first."""
        if token.type == CalcExprTokenType.IDENTIFIER:
            return difflib.get_close_matches(token.text, sorted(variables), n=3, cutoff=0.6)

        if token.type == CalcExprTokenType.OPERATOR:
            return [text for text in self.OPERATOR_TEXTS if text != token.text]

        if token.type == CalcExprTokenType.LPAREN:
            return [")"]

        if token.type == CalcExprTokenType.RPAREN:
            return ["("]

        return []

    def _replacement_texts(self, token: CalcExprToken) -> List[str]:
        """Get replacements of a different kind, tried only after deleting the token failed."""
        if token.type == CalcExprTokenType.IDENTIFIER:
            return [self.VALUE_TEXT]

        # An unrecognised character has no kind of its own to preserve
        if token.type == CalcExprTokenType.ERROR:
            return list(self.CANDIDATE_TEXTS)

        return []

    def _make_token(self, text: str, position: int, leading_whitespace: str) -> CalcExprToken:
        """Make a synthetic token, classified the way the tokenizer would classify its text."""
        token_type = self._tokenizer.tokenize(text)[0].type
        return CalcExprToken(token_type, text, position, leading_whitespace)

    def _insert(self, tokens: List[CalcExprToken], index: int, text: str) -> List[CalcExprToken]:
        """Insert a token before tokens[index], spacing it like its neighbours."""
        following = tokens[index]
        previous = tokens[index - 1] if index > 0 else None

        if text == ")" or previous is None or previous.type == CalcExprTokenType.LPAREN:
            whitespace = ""

        elif following.leading_whitespace:
            whitespace = following.leading_whitespace

            # Trailing whitespace moves in front of the new last token
            if following.type == CalcExprTokenType.END_OF_INPUT:
                following = dataclasses.replace(following, leading_whitespace="")

        else:
            whitespace = previous.leading_whitespace

        edited = list(tokens)
        edited[index] = following
        edited.insert(index, self._make_token(text, following.position, whitespace))
        return edited

    def _delete(self, tokens: List[CalcExprToken], index: int) -> List[CalcExprToken]:
        """Delete tokens[index], keeping its spacing if the next token has none."""
        removed = tokens[index]
        edited = list(tokens)
        del edited[index]

        # The first token keeps the input's own leading whitespace
        following = edited[index]
        if index == 0 or not following.leading_whitespace:
            edited[index] = dataclasses.replace(following, leading_whitespace=removed.leading_whitespace)

        return edited

    def _substitute(self, tokens: List[CalcExprToken], index: int, text: str) -> List[CalcExprToken]:
        """Replace tokens[index] with a token for text, in the same place."""
        replaced = tokens[index]
        edited = list(tokens)
        edited[index] = self._make_token(text, replaced.position, replaced.leading_whitespace)
        return edited
