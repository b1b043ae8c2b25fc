"""
ScriptAnalysis
==============

Full script formatting pipeline.

Pipeline stages:

1. :class:`~sqlscript_parser.passes.macro_preprocessor.MacroPreprocessor`
   – Apply ``#define`` substitutions line by line.
2. :class:`~sqlscript_parser.lexer.lexer.Lexer`
   – Tokenize the preprocessed text.
3. :class:`~sqlscript_parser.parser.function_table.FunctionTableBuilder`
   – Pass 1: record the first call site of every function.
4. :class:`~sqlscript_parser.parser.formatter.ScriptFormatter`
   – Pass 2: render statements and inline diagnostics.

Data only flows forward.  Each call of :meth:`ScriptAnalysis.format_text`
uses fresh macro and function tables, so repeated runs over the same source
give identical output.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import AbstractSet, List, Optional

from ..lexer.lexer import Lexer
from ..models import FormatResult, FunctionTable, Token
from ..parser.formatter import ScriptFormatter
from ..parser.function_table import FunctionTableBuilder
from ..passes.macro_preprocessor import MacroPreprocessor

logger = logging.getLogger(__name__)

OUTPUT_SUFFIX = ".formatted"


class ScriptAnalysis:
    """
    High-level facade for script formatting and validation.

    Parameters
    ----------
    directive:
        Marker that starts a macro definition line.
    indent_width:
        Spaces per indentation level in the formatted output.
    keywords:
        Keyword set override; defaults to the dialect's fixed set.
    """

    def __init__(
        self,
        directive: str = MacroPreprocessor.DEFAULT_DIRECTIVE,
        indent_width: int = 4,
        keywords: Optional[AbstractSet[str]] = None,
    ) -> None:
        self.directive = directive
        self.indent_width = indent_width
        self.keywords = keywords

    # ------------------------------------------------------------------
    # Primary API
    # ------------------------------------------------------------------

    def format_file(self, file_path: str) -> FormatResult:
        """
        Format a single script *file*.

        Raises
        ------
        OSError
            If the file cannot be read.
        """
        logger.info("Formatting file: %s", file_path)
        source = Path(file_path).read_text(encoding="utf-8", errors="replace")
        return self.format_text(source, source_name=file_path)

    def format_text(
        self,
        source: str,
        source_name: str = "<inline>",
    ) -> FormatResult:
        """
        Format script source supplied as a **string**.

        Parameters
        ----------
        source:
            Raw script text, macro definitions included.
        source_name:
            Name recorded in the returned result.

        Returns
        -------
        FormatResult
        """
        text = MacroPreprocessor(self.directive).run(source)
        tokens = self.tokenize(text)
        table = self.build_table(tokens)

        formatter = ScriptFormatter(table, indent_width=self.indent_width)
        output = formatter.format(tokens)

        logger.info(
            "%s: %d token(s), %d function(s), %d diagnostic(s)",
            source_name,
            len(tokens),
            len(table),
            len(formatter.diagnostics),
        )
        return FormatResult(
            source_name=source_name,
            text=output,
            tokens=tokens,
            table=table,
            diagnostics=formatter.diagnostics,
        )

    def tokenize(self, text: str) -> List[Token]:
        """Tokenize already-preprocessed *text*."""
        return list(Lexer(text, self.keywords).tokenize())

    def build_table(self, tokens: List[Token]) -> FunctionTable:
        """Run pass 1 alone over *tokens*."""
        return FunctionTableBuilder().build(tokens)

    @staticmethod
    def output_path_for(file_path: str) -> Path:
        """Return the sibling ``<file>.formatted`` path for *file_path*."""
        return Path(f"{file_path}{OUTPUT_SUFFIX}")
