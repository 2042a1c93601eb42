"""
Output shapes built from a tokenized (and optionally sanitized) table.

All converters take the header row and the data rows separately; use
split_table() to get them from a RawTable.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .models import ResultSet
from .tokenizer import RawTable, Row

Record = Dict[str, str]
JsonReady = Union[Record, List[Record]]


def split_table(table: RawTable) -> Tuple[Row, List[Row]]:
    if not table:
        return [], []
    return table[0], table[1:]


def to_records(header: Row, rows: Sequence[Row]) -> List[Record]:
    """
    One dict per data row, keyed by header name in header order.

    Short rows simply lack their trailing keys; values past the last header
    column are dropped.
    """
    records: List[Record] = []
    for row in rows:
        record: Record = {}
        for name, value in zip(header, row):
            record[name] = value
        records.append(record)
    return records


def to_result_set(header: Row, rows: Sequence[Row]) -> ResultSet:
    result = ResultSet(columns=list(header))
    width = len(header)
    # repeated names (cleanup off) would all resolve to their first column
    by_name = len(set(header)) == width
    for row in rows:
        idx = result.add_row()
        for pos, value in enumerate(row[:width]):
            result.set_cell(idx, header[pos] if by_name else pos, value)
    return result


def to_json_ready(header: Row, rows: Sequence[Row]) -> JsonReady:
    """A single record is returned bare, anything else as a list."""
    records = to_records(header, rows)
    if len(records) == 1:
        return records[0]
    return records


def render_json(value: Any, root_name: Optional[str] = None) -> str:
    text = json.dumps(value, ensure_ascii=False)
    if root_name:
        # wrapped as text, after serialization
        text = "{" + json.dumps(root_name, ensure_ascii=False) + ": " + text + "}"
    return text
