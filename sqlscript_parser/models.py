"""
Core data models for the SQL script parser.

Tokens, function signatures and diagnostics are plain dataclasses so they can
be compared in tests and exported as JSON via ``to_dict``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple


# ---------------------------------------------------------------------------
# Token kinds
# ---------------------------------------------------------------------------

KEYWORD = "KEYWORD"
IDENTIFIER = "IDENTIFIER"
LITERAL = "LITERAL"
OPERATOR = "OPERATOR"
SYMBOL = "SYMBOL"
STRING_LITERAL = "STRING_LITERAL"
END_OF_FILE = "END_OF_FILE"

TOKEN_KINDS = {
    KEYWORD,          # Member of the fixed keyword set (casing preserved)
    IDENTIFIER,       # Any other name
    LITERAL,          # Unsigned integer literal
    OPERATOR,         # Reserved; punctuation is emitted as SYMBOL
    SYMBOL,           # Single punctuation character
    STRING_LITERAL,   # "quoted" text, delimiters stripped
    END_OF_FILE,      # Terminates every token sequence
}

# Token kinds captured as call arguments
ARGUMENT_KINDS = {LITERAL, IDENTIFIER, STRING_LITERAL}


@dataclass(frozen=True)
class Token:
    """A single lexical token stamped with its source line."""

    kind: str
    text: str
    line: int

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.text!r}, line={self.line})"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "text": self.text, "line": self.line}


# ---------------------------------------------------------------------------
# Function table
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FunctionSignature:
    """
    The argument snapshot captured at the first call site of a function.

    ``line`` is the source line of that first call; later calls of the same
    name are checked against ``arity``.
    """

    name: str
    arguments: Tuple[str, ...]
    line: int

    @property
    def arity(self) -> int:
        return len(self.arguments)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "arguments": list(self.arguments),
            "arity": self.arity,
            "line": self.line,
        }


class FunctionTable:
    """
    Name -> :class:`FunctionSignature` mapping with first-write-wins inserts.

    Built during the first pass and frozen before the second; a frozen table
    refuses further inserts.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, FunctionSignature] = {}
        self._frozen = False

    def record(self, signature: FunctionSignature) -> bool:
        """Insert *signature* unless its name is known; return True if inserted."""
        if self._frozen:
            raise RuntimeError("function table is frozen")
        if signature.name in self._entries:
            return False
        self._entries[signature.name] = signature
        return True

    def freeze(self) -> FunctionTable:
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str) -> Optional[FunctionSignature]:
        return self._entries.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __getitem__(self, name: str) -> FunctionSignature:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"FunctionTable({list(self._entries)}, {state})"

    def to_dict(self) -> Dict[str, Any]:
        return {name: sig.to_dict() for name, sig in self._entries.items()}


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------

MISSING_PAREN = "MISSING_PAREN"
ARITY_MISMATCH = "ARITY_MISMATCH"
UNKNOWN_FUNCTION = "UNKNOWN_FUNCTION"

DIAGNOSTIC_KINDS = {
    MISSING_PAREN,     # Call site reached end of input before ')'
    ARITY_MISMATCH,    # Argument count differs from the first-seen signature
    UNKNOWN_FUNCTION,  # Name absent from the function table
}

COMMENT_PREFIX = "-- Error: "


@dataclass
class Diagnostic:
    """A validation finding rendered inline as a comment line."""

    kind: str
    line: int      # Line of the call site that raised it
    message: str

    def render(self) -> str:
        return f"{COMMENT_PREFIX}{self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "line": self.line, "message": self.message}

    def __str__(self) -> str:
        return f"line {self.line:<5} {self.kind:<16} {self.message}"


# ---------------------------------------------------------------------------
# Pipeline result
# ---------------------------------------------------------------------------


@dataclass
class FormatResult:
    """
    Everything one run of the pipeline produced for a single source.

    ``text`` is the formatted, diagnostic-annotated output; ``tokens`` and
    ``table`` are kept for inspection and JSON export.
    """

    source_name: str
    text: str
    tokens: List[Token]
    table: FunctionTable
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def __repr__(self) -> str:
        return (
            f"FormatResult(source={self.source_name!r}, "
            f"tokens={len(self.tokens)}, functions={len(self.table)}, "
            f"diagnostics={len(self.diagnostics)})"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_name": self.source_name,
            "functions": self.table.to_dict(),
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }
