"""Cursor over a calculator expression's token sequence."""

from typing import Sequence, Tuple

from calcexpr.calcexpr_token import CalcExprToken, CalcExprTokenType


class CalcExprCursor:
    """
    A movable position over an immutable token sequence.

    The token sequence and the text it was produced from never change; only the
    position index moves.  Positions can be saved with mark() and restored with
    reset(), and copy() gives an independent cursor so alternative parses can be
    explored without disturbing this one.
    """

    def __init__(self, tokens: Sequence[CalcExprToken], expression: str, index: int = 0) -> None:
        """
        Initialize cursor.

        Args:
            tokens: Token sequence, which must end with an END_OF_INPUT token
            expression: Text the tokens were produced from
            index: Initial position

        Raises:
            ValueError: If the tokens are not terminated or the index is out of range
        """
        if not tokens or tokens[-1].type != CalcExprTokenType.END_OF_INPUT:
            raise ValueError("Token sequence must end with an END_OF_INPUT token")

        if not 0 <= index < len(tokens):
            raise ValueError(f"Cursor index {index} out of range for {len(tokens)} tokens")

        self._tokens: Tuple[CalcExprToken, ...] = tuple(tokens)
        self._expression = expression
        self._index = index

    @property
    def tokens(self) -> Tuple[CalcExprToken, ...]:
        """The full token sequence."""
        return self._tokens

    @property
    def expression(self) -> str:
        """The text the tokens were produced from."""
        return self._expression

    @property
    def index(self) -> int:
        """Index of the current token."""
        return self._index

    @property
    def current_token(self) -> CalcExprToken:
        """The token at the cursor position."""
        return self._tokens[self._index]

    def peek(self, offset: int = 0) -> CalcExprToken:
        """
        Look at a token relative to the cursor without moving.

        Looking past the end returns the END_OF_INPUT token.
        """
        index = min(max(self._index + offset, 0), len(self._tokens) - 1)
        return self._tokens[index]

    def advance(self) -> CalcExprToken:
        """
        Consume the current token and move to the next one.

        The cursor never moves past END_OF_INPUT.

        Returns:
            The token that was consumed
        """
        token = self._tokens[self._index]
        if self._index < len(self._tokens) - 1:
            self._index += 1

        return token

    def mark(self) -> int:
        """Save the current position."""
        return self._index

    def reset(self, mark: int) -> None:
        """Restore a position previously returned by mark()."""
        if not 0 <= mark < len(self._tokens):
            raise ValueError(f"Cursor mark {mark} out of range for {len(self._tokens)} tokens")

        self._index = mark

    def copy(self) -> "CalcExprCursor":
        """Create an independent cursor at the same position."""
        return CalcExprCursor(self._tokens, self._expression, self._index)

    def at_start(self) -> bool:
        """Check if the cursor is at the first token."""
        return self._index == 0

    def at_end(self) -> bool:
        """Check if the cursor is at END_OF_INPUT."""
        return self.current_token.type == CalcExprTokenType.END_OF_INPUT

    def is_empty(self) -> bool:
        """Check if the expression held nothing but (possibly) whitespace."""
        return len(self._tokens) == 1

    def consumed_text(self) -> str:
        """
        Get the text before the current token and its leading whitespace.

        Returns:
            The part of the expression the parser got through before stopping
        """
        token = self.current_token
        return self._expression[:token.position - token.leading_whitespace_length]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CalcExprCursor):
            return NotImplemented

        return (
            self._index == other._index and
            self._expression == other._expression and
            self._tokens == other._tokens
        )

    def __hash__(self) -> int:
        return hash((self._tokens, self._expression, self._index))

    def __repr__(self) -> str:
        return f"CalcExprCursor(index={self._index}, token={self.current_token!r})"
