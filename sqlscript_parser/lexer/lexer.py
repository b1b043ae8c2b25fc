"""
Lexer
=====

Converts preprocessed script text into a sequence of :class:`Token` objects.

Token classification (first match wins, ASCII character classes):

+-----------------------+--------------------------------------------------+
| Starts with           | Produces                                         |
+=======================+==================================================+
| letter or ``_``       | KEYWORD if the run is in the keyword set         |
|                       | (case-insensitive, casing preserved) else        |
|                       | IDENTIFIER                                       |
+-----------------------+--------------------------------------------------+
| digit                 | LITERAL (digits only; no sign, no fraction)      |
+-----------------------+--------------------------------------------------+
| ``"``                 | STRING_LITERAL, delimiters stripped; an          |
|                       | unterminated string runs to end of input         |
+-----------------------+--------------------------------------------------+
| other punctuation     | single-character SYMBOL                          |
+-----------------------+--------------------------------------------------+
| whitespace            | skipped                                          |
+-----------------------+--------------------------------------------------+
| anything else         | dropped without a token or diagnostic            |
+-----------------------+--------------------------------------------------+

Every sequence ends with exactly one END_OF_FILE token.
"""
from __future__ import annotations

import logging
import string
from typing import AbstractSet, Iterator, List, Optional

from ..models import (
    END_OF_FILE,
    IDENTIFIER,
    KEYWORD,
    LITERAL,
    STRING_LITERAL,
    SYMBOL,
    Token,
)
from .keywords import KEYWORDS

logger = logging.getLogger(__name__)

_NAME_START = frozenset(string.ascii_letters + "_")
_NAME_CHARS = frozenset(string.ascii_letters + string.digits + "_")
_DIGITS = frozenset(string.digits)
_PUNCTUATION = frozenset(string.punctuation)
_WHITESPACE = frozenset(string.whitespace)
_QUOTE = '"'


class Lexer:
    """
    Single-use tokenizer over one preprocessed text.

    Parameters
    ----------
    text:
        Preprocessed script text.
    keywords:
        Lower-case keyword set; defaults to :data:`KEYWORDS`.
    """

    def __init__(self, text: str, keywords: Optional[AbstractSet[str]] = None) -> None:
        self.text = text
        self.keywords = frozenset(k.lower() for k in (keywords if keywords is not None else KEYWORDS))
        self.position = 0
        self.line = 1

    def tokenize(self) -> Iterator[Token]:
        """
        Yield tokens until the input is exhausted, then one END_OF_FILE.

        The generator consumes the lexer; a second call yields only the
        END_OF_FILE token.
        """
        while not self._at_end():
            self._skip_whitespace()
            if self._at_end():
                break
            token = self._scan_token()
            if token is not None:
                yield token
        yield Token(END_OF_FILE, "", self.line)

    # ------------------------------------------------------------------
    # Character access
    # ------------------------------------------------------------------

    def _at_end(self) -> bool:
        return self.position >= len(self.text)

    def _peek(self) -> str:
        return "" if self._at_end() else self.text[self.position]

    def _advance(self) -> str:
        ch = self._peek()
        self.position += 1
        if ch == "\n":
            self.line += 1
        return ch

    def _skip_whitespace(self) -> None:
        while self._peek() in _WHITESPACE:
            self._advance()

    # ------------------------------------------------------------------
    # Scanners
    # ------------------------------------------------------------------

    def _scan_token(self) -> Optional[Token]:
        ch = self._peek()
        if ch in _NAME_START:
            return self._scan_name()
        if ch in _DIGITS:
            return self._scan_number()
        if ch == _QUOTE:
            return self._scan_string()
        if ch in _PUNCTUATION:
            return Token(SYMBOL, self._advance(), self.line)

        self._advance()
        logger.debug("Line %d: dropped character %r", self.line, ch)
        return None

    def _scan_name(self) -> Token:
        start = self.position
        while self._peek() in _NAME_CHARS:
            self._advance()
        text = self.text[start:self.position]
        kind = KEYWORD if text.lower() in self.keywords else IDENTIFIER
        return Token(kind, text, self.line)

    def _scan_number(self) -> Token:
        start = self.position
        while self._peek() in _DIGITS:
            self._advance()
        return Token(LITERAL, self.text[start:self.position], self.line)

    def _scan_string(self) -> Token:
        self._advance()  # opening quote
        start = self.position
        while not self._at_end() and self._peek() != _QUOTE:
            self._advance()
        value = self.text[start:self.position]
        if self._at_end():
            logger.debug("Line %d: unterminated string literal", self.line)
        else:
            self._advance()  # closing quote
        return Token(STRING_LITERAL, value, self.line)


def tokenize_text(text: str, keywords: Optional[AbstractSet[str]] = None) -> List[Token]:
    """Tokenize *text* in one go and return the full token list."""
    return list(Lexer(text, keywords).tokenize())
