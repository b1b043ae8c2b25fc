"""
MacroPreprocessor
=================

Line-oriented ``#define`` substitution over raw script text.

Algorithm:

1.  Lines starting with the directive marker (``#define`` by default) are
    definitions: ``#define KEY value text``.  The value is the remainder of
    the line, trimmed.  The key is stored (overwriting any earlier value) and
    the line is dropped from the output.
2.  Every other line has each currently known key replaced by its value
    wherever it occurs as a substring.  After a replacement the search resumes
    *past* the inserted text, so a value that contains its own key cannot
    loop.
3.  Definitions only affect lines that come after them.

No escaping exists: a key that is a substring of a longer identifier is
replaced there too (``#define ID 7`` turns ``WIDTH`` into ``W7TH``).
"""
from __future__ import annotations

import logging
from typing import Dict, List

logger = logging.getLogger(__name__)


def substitute(line: str, key: str, value: str) -> str:
    """
    Replace every occurrence of *key* in *line* with *value*.

    Scans left to right and restarts after each inserted *value*, never
    inside it.

    Examples
    --------
    >>> substitute("MAX + MAX", "MAX", "10")
    '10 + 10'
    >>> substitute("X", "X", "X + 1")
    'X + 1'
    """
    if not key:
        return line
    pos = line.find(key)
    while pos != -1:
        line = line[:pos] + value + line[pos + len(key):]
        pos = line.find(key, pos + len(value))
    return line


def split_lines(text: str) -> List[str]:
    """Split *text* at ``\\n`` only, keeping the terminator on each line."""
    pieces = text.split("\n")
    lines = [piece + "\n" for piece in pieces[:-1]]
    if pieces[-1]:
        lines.append(pieces[-1])
    return lines


class MacroPreprocessor:
    """
    Applies ``#define`` macros to script text.

    Parameters
    ----------
    directive:
        Marker that starts a definition line.
    """

    DEFAULT_DIRECTIVE = "#define"

    def __init__(self, directive: str = DEFAULT_DIRECTIVE) -> None:
        if not directive:
            raise ValueError("directive marker must not be empty")
        self.directive = directive
        #: Macro table of the most recent :meth:`run`, in definition order.
        self.macros: Dict[str, str] = {}

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def run(self, text: str) -> str:
        """
        Preprocess *text* and return the substituted text.

        Lines end at ``\\n`` only; other control characters (``\\r``, form
        feed ...) stay inside the line.  Line terminators are kept as they
        are, so text without definition lines comes back unchanged.
        """
        self.macros = {}
        result: List[str] = []
        for line_no, line in enumerate(split_lines(text), start=1):
            if line.startswith(self.directive):
                self._define(line, line_no)
                continue
            result.append(self._expand(line))
        logger.debug("Preprocessed %d macro(s)", len(self.macros))
        return "".join(result)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _define(self, line: str, line_no: int) -> None:
        # directive word, key, remainder
        parts = line.split(None, 2)
        if len(parts) < 2:
            logger.warning("Line %d: %s without a key; ignored", line_no, self.directive)
            return
        key = parts[1]
        value = parts[2].strip() if len(parts) > 2 else ""
        if key in self.macros:
            logger.debug("Line %d: redefining %r", line_no, key)
        self.macros[key] = value

    def _expand(self, line: str) -> str:
        for key, value in self.macros.items():
            line = substitute(line, key, value)
        return line
