"""
Quote-aware CSV tokenizer.

A single forward cursor walks the text through two states:
- DEFAULT: delimiters close fields, CR/LF close rows, a quote opens a quoted run
- IN_QUOTES: everything is literal except the quote; a doubled quote is one
  literal quote, a single quote closes the run

Malformed input (unbalanced quotes, ragged rows, blank lines) is absorbed,
never reported.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List

from .rules import DEFAULT_DELIMITER, DEFAULT_ROW_LIMIT, LINE_BREAKS, QUOTE_CHAR

logger = logging.getLogger(__name__)

Row = List[str]
RawTable = List[Row]

# CRLF and LFCR are one row break each
_COMPLEMENT = {"\r": "\n", "\n": "\r"}


class ParserState(Enum):
    DEFAULT = "default"
    IN_QUOTES = "in_quotes"


def _check_char(name: str, value: str) -> None:
    if not isinstance(value, str) or len(value) != 1:
        raise ValueError(f"{name} must be a single character, got {value!r}")
    if value in LINE_BREAKS:
        raise ValueError(f"{name} cannot be a line break character")


def check_dialect(delimiter: str, quote: str = QUOTE_CHAR) -> None:
    """Raise ValueError unless delimiter and quote are usable together."""
    _check_char("delimiter", delimiter)
    _check_char("quote", quote)
    if delimiter == quote:
        raise ValueError("delimiter and quote must be different characters")


def tokenize(
    text: str,
    delimiter: str = DEFAULT_DELIMITER,
    max_rows: int = DEFAULT_ROW_LIMIT,
    quote: str = QUOTE_CHAR,
) -> RawTable:
    """
    Split CSV text into rows of unescaped field strings.

    Row 0 is the header and is never counted against `max_rows`; scanning
    stops once `max_rows` data rows have been collected (`max_rows <= 0`
    means no limit). Fields are not trimmed. Lines that consumed no
    characters produce no row.

    Raises ValueError only for an unusable delimiter/quote pair.
    """
    check_dialect(delimiter, quote)

    table: RawTable = []
    row: Row = []
    field: List[str] = []
    state = ParserState.DEFAULT
    line_touched = False
    truncated = False

    n = len(text)
    i = 0
    while i <= n:
        at_end = i == n
        ch = "" if at_end else text[i]

        if state is ParserState.IN_QUOTES and not at_end:
            if ch == quote:
                if i + 1 < n and text[i + 1] == quote:
                    field.append(quote)
                    i += 1
                else:
                    state = ParserState.DEFAULT
            else:
                field.append(ch)
            i += 1
            continue

        if at_end or ch in LINE_BREAKS:
            # An unterminated quote is closed implicitly here at end of input.
            state = ParserState.DEFAULT
            completed = line_touched
            if completed:
                row.append("".join(field))
                table.append(row)
            row, field = [], []
            line_touched = False

            if not at_end and i + 1 < n and text[i + 1] == _COMPLEMENT[ch]:
                i += 1
            i += 1

            if completed and max_rows > 0 and len(table) - 1 == max_rows:
                truncated = i < n
                break
            continue

        line_touched = True
        if ch == quote:
            state = ParserState.IN_QUOTES
        elif ch == delimiter:
            row.append("".join(field))
            field = []
        else:
            field.append(ch)
        i += 1

    logger.debug(
        "tokenized %d rows (delimiter=%r, max_rows=%d, truncated=%s)",
        len(table),
        delimiter,
        max_rows,
        truncated,
    )
    return table
