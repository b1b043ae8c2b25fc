"""
FunctionTableBuilder
====================

First pass over the token sequence.

Every call site (identifier immediately followed by ``(``) contributes a
:class:`~sqlscript_parser.models.FunctionSignature` holding the arguments
captured at that call and its line.  Only the *first* call of each name is
recorded; later calls never overwrite it.  Because the whole file is scanned
before anything is validated, a call is visible to every other call of the
same name regardless of their order.

Non-call tokens are consumed one at a time with no effect.  This pass emits
neither output nor diagnostics.

Known consequence of "declaration by first use": a function whose calls
legitimately differ in arity is reported by the second pass at every call
whose count differs from the first one.
"""
from __future__ import annotations

import logging
from typing import Sequence

from ..models import FunctionSignature, FunctionTable, Token
from .call_site import TokenCursor, read_arguments

logger = logging.getLogger(__name__)


class FunctionTableBuilder:
    """Builds a frozen :class:`FunctionTable` from a token sequence."""

    def build(self, tokens: Sequence[Token]) -> FunctionTable:
        """
        Scan *tokens* once and return the frozen function table.

        Parameters
        ----------
        tokens:
            Complete token sequence, END_OF_FILE terminated.

        Returns
        -------
        FunctionTable
            Frozen table keyed by function name.
        """
        table = FunctionTable()
        cursor = TokenCursor(tokens)

        while not cursor.at_end():
            if cursor.at_call_site():
                self._record_call(cursor, table)
            else:
                cursor.advance()

        logger.info("Function table built: %d function(s)", len(table))
        return table.freeze()

    @staticmethod
    def _record_call(cursor: TokenCursor, table: FunctionTable) -> None:
        name = cursor.advance()
        arguments, _closed = read_arguments(cursor)
        signature = FunctionSignature(name.text, tuple(arguments), name.line)
        if table.record(signature):
            logger.debug("Recorded %s/%d at line %d", name.text, signature.arity, name.line)
