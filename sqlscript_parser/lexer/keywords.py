"""
Fixed keyword set of the script dialect.

Matching is case-insensitive; entries are stored in lower case.  Anything not
listed here (``from``, ``where``, ``into`` ...) lexes as an identifier.
"""
from __future__ import annotations

from typing import FrozenSet

KEYWORDS: FrozenSet[str] = frozenset({
    "select", "insert", "update", "delete",
    "create", "table",
    "begin", "end",
    "declare", "do",
    "values",
})
