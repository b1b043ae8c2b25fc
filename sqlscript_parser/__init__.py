"""
SQL Script Parser
=================

A formatter and validator for a small SQL-like scripting dialect.  It
applies ``#define`` macros, tokenizes the result, builds a function table
from the first call of every function and renders an indented statement
stream annotated with inline ``-- Error:`` comments for missing parentheses,
unknown functions and argument-count mismatches.

Quick start
-----------
>>> from sqlscript_parser import ScriptAnalysis
>>> result = ScriptAnalysis().format_text("select\\nfoo(1, 2)\\n")
>>> print(result.text, end="")
select
foo (
);
"""

from .models import Diagnostic, FormatResult, FunctionSignature, FunctionTable, Token
from .lexer.lexer import Lexer
from .passes.macro_preprocessor import MacroPreprocessor
from .parser.function_table import FunctionTableBuilder
from .parser.formatter import ScriptFormatter
from .pipeline.script_analysis import ScriptAnalysis

__version__ = "0.1.0"
__all__ = [
    "Diagnostic",
    "FormatResult",
    "FunctionSignature",
    "FunctionTable",
    "Token",
    "Lexer",
    "MacroPreprocessor",
    "FunctionTableBuilder",
    "ScriptFormatter",
    "ScriptAnalysis",
]
