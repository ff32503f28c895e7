"""Tokenizer for calculator expressions."""

from typing import List, Sequence

from calcexpr.calcexpr_token import CalcExprToken, CalcExprTokenType


class CalcExprTokenizer:
    """
    Tokenizes calculator expressions.

    Tokenizing never fails: characters that cannot start any token become
    single-character ERROR tokens, so the parser and the diagnostics can
    report exactly where the input stops making sense.
    """

    OPERATOR_CHARS = "+-*/^"

    def tokenize(self, expression: str) -> List[CalcExprToken]:
        """
        Tokenize a calculator expression.

        Whitespace is not emitted as a token; it is attached to the token that
        follows it.  The result always ends with a single END_OF_INPUT token
        positioned at the end of the expression, carrying any trailing
        whitespace.

        Args:
            expression: The expression string to tokenize

        Returns:
            List of tokens
        """
        tokens = []
        i = 0

        while True:
            whitespace_start = i
            while i < len(expression) and expression[i].isspace():
                i += 1

            whitespace = expression[whitespace_start:i]

            if i >= len(expression):
                tokens.append(CalcExprToken(CalcExprTokenType.END_OF_INPUT, "", i, whitespace))
                return tokens

            char = expression[i]

            # Parentheses
            if char == '(':
                tokens.append(CalcExprToken(CalcExprTokenType.LPAREN, char, i, whitespace))
                i += 1
                continue

            if char == ')':
                tokens.append(CalcExprToken(CalcExprTokenType.RPAREN, char, i, whitespace))
                i += 1
                continue

            if char in self.OPERATOR_CHARS:
                tokens.append(CalcExprToken(CalcExprTokenType.OPERATOR, char, i, whitespace))
                i += 1
                continue

            # Check numbers before anything else to handle .5 correctly
            if self._is_number_start(expression, i):
                length = self._read_number(expression, i)
                tokens.append(CalcExprToken(CalcExprTokenType.NUMBER, expression[i:i + length], i, whitespace))
                i += length
                continue

            if char.isalpha():
                length = self._read_identifier(expression, i)
                tokens.append(CalcExprToken(CalcExprTokenType.IDENTIFIER, expression[i:i + length], i, whitespace))
                i += length
                continue

            tokens.append(CalcExprToken(CalcExprTokenType.ERROR, char, i, whitespace))
            i += 1

    @staticmethod
    def detokenize(tokens: Sequence[CalcExprToken]) -> str:
        """
        Rebuild expression text from a token sequence.

        Args:
            tokens: Tokens, normally produced by tokenize() and possibly edited

        Returns:
            The concatenation of each token's leading whitespace and text
        """
        return "".join(token.leading_whitespace + token.text for token in tokens)

    def _is_digit(self, char: str) -> bool:
        """Check for an ASCII decimal digit (str.isdigit() also accepts superscripts)."""
        return '0' <= char <= '9'

    def _is_number_start(self, expression: str, start: int) -> bool:
        """Check if a number starts at the given position."""
        char = expression[start]
        if self._is_digit(char):
            return True

        # .5 style decimals
        return char == '.' and start + 1 < len(expression) and self._is_digit(expression[start + 1])

    def _read_number(self, expression: str, start: int) -> int:
        """
        Read a decimal number with an optional fractional part.

        Args:
            expression: Expression being tokenized
            start: Position of the first character of the number

        Returns:
            Length of the number text
        """
        i = start
        while i < len(expression) and self._is_digit(expression[i]):
            i += 1

        if i < len(expression) and expression[i] == '.':
            i += 1
            while i < len(expression) and self._is_digit(expression[i]):
                i += 1

        return i - start

    def _read_identifier(self, expression: str, start: int) -> int:
        """Read a letter followed by letters or digits and return its length."""
        i = start + 1
        while i < len(expression) and (expression[i].isalpha() or self._is_digit(expression[i])):
            i += 1

        return i - start
