"""
Loader: resolve a source, then tokenize -> sanitize -> shape.

Responsibilities:
- byte decoding (charset detection + fallbacks)
- inline text vs file path resolution
- trimming and the empty-input short circuit
- dispatch on the requested output format
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from charset_normalizer import from_bytes

from .header import sanitize_header
from .models import ResultSet
from .rules import DEFAULT_CLEANUP_COLUMNS, DEFAULT_DELIMITER, DEFAULT_ROW_LIMIT
from .shapes import Record, render_json, split_table, to_json_ready, to_records, to_result_set
from .tokenizer import RawTable, tokenize

logger = logging.getLogger(__name__)

Source = Union[str, bytes, Path]
Shaped = Union[List[Record], ResultSet, str]

_UTF8_BOM = b"\xef\xbb\xbf"


class CsvShapeError(Exception):
    pass


class SourceNotFoundError(CsvShapeError):
    pass


class UnsupportedOutputError(CsvShapeError, ValueError):
    pass


class OutputFormat(str, Enum):
    RECORDS = "records"
    RESULTSET = "resultset"
    JSON = "json"

    @classmethod
    def coerce(cls, value: Union[str, OutputFormat]) -> OutputFormat:
        try:
            return cls(value.lower() if isinstance(value, str) else value)
        except ValueError:
            allowed = ", ".join(f.value for f in cls)
            raise UnsupportedOutputError(f"Unsupported output {value!r} (expected one of: {allowed})") from None


def decode_bytes(raw: bytes) -> Tuple[str, Dict[str, Any]]:
    """
    Decode CSV bytes to text.

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - A UTF-8 BOM forces utf-8-sig and is dropped rather than kept as U+FEFF
      in the first header.
    - If decoding with the guess fails, try UTF-8 (BOM-aware).
    - Last resort: decode with replacement characters (U+FFFD) and report it.
    """
    detected = None
    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or "utf-8"
    if raw.startswith(_UTF8_BOM):
        # the BOM is authoritative, whatever the guess says
        decode_used = "utf-8-sig"

    decode_fallback = False
    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        decode_used = "utf-8-sig"
        try:
            text = raw.decode(decode_used)
        except UnicodeDecodeError:
            text = raw.decode("utf-8-sig", errors="replace")
        decode_fallback = True

    if decode_fallback:
        logger.warning("Decoding with %r failed; fell back to %s", detected, decode_used)

    report = {
        "detected": detected,
        "decode_used": decode_used,
        "decode_fallback": decode_fallback,
    }
    return text, report


def read_source(source: Source, *, from_file: bool = False) -> str:
    """
    Resolve `source` to CSV text.

    A Path (or a str with from_file=True) is read from disk, bytes are
    decoded, any other str is taken as inline CSV.
    """
    if isinstance(source, bytes):
        return decode_bytes(source)[0]

    if isinstance(source, Path) or from_file:
        path = Path(source)
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise SourceNotFoundError(f"Cannot read CSV source {str(path)!r}: {e}") from e
        return decode_bytes(raw)[0]

    return source


def parse(text: str, delimiter: str = DEFAULT_DELIMITER, row_limit: int = DEFAULT_ROW_LIMIT) -> RawTable:
    """Trim and tokenize; empty text is an empty table."""
    text = text.strip()
    if not text:
        return []
    return tokenize(text, delimiter=delimiter, max_rows=row_limit)


def shape_table(
    table: RawTable,
    output: Union[str, OutputFormat] = OutputFormat.RECORDS,
    root_name: Optional[str] = None,
) -> Shaped:
    fmt = OutputFormat.coerce(output)
    header, rows = split_table(table)

    if fmt is OutputFormat.RECORDS:
        return to_records(header, rows)
    if fmt is OutputFormat.RESULTSET:
        return to_result_set(header, rows)
    return render_json(to_json_ready(header, rows), root_name)


def load(
    source: Source,
    *,
    output: Union[str, OutputFormat] = OutputFormat.RECORDS,
    delimiter: str = DEFAULT_DELIMITER,
    row_limit: int = DEFAULT_ROW_LIMIT,
    cleanup_columns: bool = DEFAULT_CLEANUP_COLUMNS,
    root_name: Optional[str] = None,
    from_file: bool = False,
) -> Shaped:
    """
    Parse `source` and return it in the requested shape.

    Returns a list of record dicts (records), a ResultSet (resultset) or
    JSON text (json).
    """
    fmt = OutputFormat.coerce(output)
    text = read_source(source, from_file=from_file)

    table = parse(text, delimiter=delimiter, row_limit=row_limit)
    if cleanup_columns:
        sanitize_header(table)

    logger.info(
        "Loaded %s source as %s: %d data rows",
        "file" if isinstance(source, Path) or from_file else type(source).__name__,
        fmt.value,
        max(len(table) - 1, 0),
    )
    return shape_table(table, fmt, root_name)
