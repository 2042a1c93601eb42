"""
Header row cleanup: identifier-safe, unique column names.
"""

from __future__ import annotations

import re

from .tokenizer import RawTable, Row

_WHITESPACE_RE = re.compile(r"\s+")
_NON_WORD_RE = re.compile(r"[^A-Za-z0-9_]")


def clean_name(name: str) -> str:
    """Whitespace runs -> '_', then drop anything that is not an ASCII word char."""
    return _NON_WORD_RE.sub("", _WHITESPACE_RE.sub("_", name))


def dedupe_key(name: str) -> str:
    """Normalization used only for duplicate detection (whitespace runs -> '-')."""
    return _NON_WORD_RE.sub("", _WHITESPACE_RE.sub("-", name))


def sanitize(header: Row) -> Row:
    """
    Rewrite a header row into non-empty, unique identifiers.

    Duplicates are resolved anchor by anchor: every later name whose
    dedupe_key matches the anchor (case-insensitively) is renamed to
    anchor + running suffix starting at 1. A name may be renamed again by a
    later anchor; the last rename wins. Leading digits are left alone.
    """
    names = [clean_name(name) for name in header]
    for pos, name in enumerate(names):
        if not name:
            names[pos] = f"column{pos + 1}"

    for i in range(len(names)):
        anchor = names[i]
        suffix = 1
        for j in range(i + 1, len(names)):
            if dedupe_key(names[j]).lower() == anchor.lower():
                names[j] = f"{anchor}{suffix}"
                suffix += 1

    header[:] = names
    return header


def sanitize_header(table: RawTable) -> RawTable:
    """Sanitize row 0 of `table` in place. Empty tables are returned untouched."""
    if table:
        sanitize(table[0])
    return table
