"""
Call-site helpers shared by both passes.

Both the function-table builder and the formatter decide "is this a call?"
with :func:`is_call_site` and read argument lists with
:func:`read_arguments`, so the two passes always agree on what a call is and
how many arguments it has.
"""
from __future__ import annotations

from typing import List, Sequence, Tuple

from ..models import ARGUMENT_KINDS, END_OF_FILE, IDENTIFIER, SYMBOL, Token

OPEN_PAREN = "("
CLOSE_PAREN = ")"
COMMA = ","

_PAST_END = Token(END_OF_FILE, "", -1)


def is_call_site(current: Token, following: Token) -> bool:
    """Return True if *current* is an identifier directly followed by ``(``."""
    return (
        current.kind == IDENTIFIER
        and following.kind == SYMBOL
        and following.text == OPEN_PAREN
    )


def _is_symbol(token: Token, text: str) -> bool:
    return token.kind == SYMBOL and token.text == text


class TokenCursor:
    """
    Independent read position over a shared token list.

    Reads past the end return an END_OF_FILE token with line ``-1``.
    """

    def __init__(self, tokens: Sequence[Token]) -> None:
        self._tokens = tokens
        self.position = 0

    def peek(self, offset: int = 0) -> Token:
        index = self.position + offset
        return self._tokens[index] if index < len(self._tokens) else _PAST_END

    def advance(self) -> Token:
        token = self.peek()
        if self.position < len(self._tokens):
            self.position += 1
        return token

    def at_end(self) -> bool:
        return self.peek().kind == END_OF_FILE

    def at_call_site(self) -> bool:
        return is_call_site(self.peek(), self.peek(1))


def read_arguments(cursor: TokenCursor) -> Tuple[List[str], bool]:
    """
    Consume ``( arg, arg, ... )`` starting at the opening parenthesis.

    Literal, identifier and string tokens are captured as arguments; every
    other token inside the list is consumed without being captured.  The
    loop stops at ``)`` (consumed) or at END_OF_FILE.

    Returns
    -------
    Tuple[List[str], bool]
        The captured argument texts and whether the closing parenthesis was
        found.
    """
    cursor.advance()  # '('
    arguments: List[str] = []
    while not _is_symbol(cursor.peek(), CLOSE_PAREN) and not cursor.at_end():
        token = cursor.advance()
        if token.kind in ARGUMENT_KINDS:
            arguments.append(token.text)
        if _is_symbol(cursor.peek(), COMMA):
            cursor.advance()

    if _is_symbol(cursor.peek(), CLOSE_PAREN):
        cursor.advance()
        return arguments, True
    return arguments, False
