"""
ScriptFormatter
===============

Second pass: re-walks the token sequence against the frozen function table
and renders one statement per line.

+-------------------------------+------------------------------------------+
| Statement                     | Output                                   |
+===============================+==========================================+
| keyword                       | ``<keyword>``                            |
+-------------------------------+------------------------------------------+
| call site ``name(args...)``   | ``name (``                               |
|                               | ``-- Error: ...`` (zero or more)         |
|                               | ``);``                                   |
+-------------------------------+------------------------------------------+
| any other token               | ``<text>;``                              |
+-------------------------------+------------------------------------------+

Call-site diagnostics, in order:

1. Missing closing parenthesis (END_OF_FILE reached inside the list).
2. Arity mismatch against the table's first-seen signature, citing that
   signature's line, *or* unknown function, citing the call's own line.

``);`` is emitted after a call site whatever the diagnostics were.

Every line is prefixed with ``indent_level * indent_width`` spaces.  Statements
are flat, so nothing raises ``indent_level`` above zero at present.
"""
from __future__ import annotations

import logging
from typing import List, Sequence

from ..models import (
    ARITY_MISMATCH,
    KEYWORD,
    MISSING_PAREN,
    UNKNOWN_FUNCTION,
    Diagnostic,
    FunctionTable,
    Token,
)
from .call_site import TokenCursor, read_arguments

logger = logging.getLogger(__name__)


class ScriptFormatter:
    """
    Renders a token sequence as indented, diagnostic-annotated text.

    Parameters
    ----------
    table:
        Frozen function table produced by
        :class:`~sqlscript_parser.parser.function_table.FunctionTableBuilder`.
    indent_width:
        Spaces per indentation level.
    """

    def __init__(self, table: FunctionTable, indent_width: int = 4) -> None:
        if indent_width < 0:
            raise ValueError(f"indent_width must be >= 0, got {indent_width}")
        self.table = table
        self.indent_width = indent_width
        self.indent_level = 0
        #: Diagnostics raised during the most recent :meth:`format`.
        self.diagnostics: List[Diagnostic] = []
        self._lines: List[str] = []

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def format(self, tokens: Sequence[Token]) -> str:
        """Return the formatted rendering of *tokens*."""
        self.diagnostics = []
        self._lines = []
        cursor = TokenCursor(tokens)

        while not cursor.at_end():
            if cursor.peek().kind == KEYWORD:
                self._write(cursor.advance().text)
            elif cursor.at_call_site():
                self._format_call(cursor)
            else:
                self._write(cursor.advance().text + ";")

        if self.diagnostics:
            logger.info("%d diagnostic(s) emitted", len(self.diagnostics))
        return "".join(self._lines)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _write(self, text: str) -> None:
        indent = " " * (self.indent_width * self.indent_level)
        self._lines.append(f"{indent}{text}\n")

    def _report(self, kind: str, line: int, message: str) -> None:
        diagnostic = Diagnostic(kind=kind, line=line, message=message)
        self.diagnostics.append(diagnostic)
        logger.debug("Diagnostic: %s", diagnostic)
        self._write(diagnostic.render())

    def _format_call(self, cursor: TokenCursor) -> None:
        name = cursor.advance()
        self._write(f"{name.text} (")

        arguments, closed = read_arguments(cursor)
        if not closed:
            self._report(
                MISSING_PAREN,
                name.line,
                "Missing closing parenthesis for function call.",
            )

        signature = self.table.get(name.text)
        if signature is None:
            self._report(
                UNKNOWN_FUNCTION,
                name.line,
                f"Unknown function '{name.text}' at line {name.line}.",
            )
        elif signature.arity != len(arguments):
            self._report(
                ARITY_MISMATCH,
                name.line,
                f"Function '{name.text}' at line {signature.line} expects "
                f"{signature.arity} arguments, but {len(arguments)} were provided.",
            )

        self._write(");")
