from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, PrivateAttr

OutputName = Literal["records", "resultset", "json"]


class ResultSet(BaseModel):
    """Named columns with positionally addressed cells."""

    columns: List[str] = Field(default_factory=list)
    rows: List[List[Optional[str]]] = Field(default_factory=list)

    _positions: Dict[str, int] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        for pos, name in enumerate(self.columns):
            # repeated names address their first column
            self._positions.setdefault(name, pos)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def column_index(self, name: str) -> int:
        try:
            return self._positions[name]
        except KeyError:
            raise KeyError(f"unknown column: {name!r}") from None

    def add_row(self) -> int:
        self.rows.append([None] * len(self.columns))
        return len(self.rows) - 1

    def set_cell(self, row: int, column: Union[str, int], value: Optional[str]) -> None:
        pos = column if isinstance(column, int) else self.column_index(column)
        self.rows[row][pos] = value


class ParseOptions(BaseModel):
    """Unset options fall back to the service configuration."""

    output: OutputName = "records"
    delimiter: Optional[str] = Field(default=None, min_length=1, max_length=1)
    row_limit: Optional[int] = None
    cleanup_columns: Optional[bool] = None
    root_name: Optional[str] = Field(default=None, examples=["items"])


class TextParseRequest(ParseOptions):
    text: str


class EncodingReport(BaseModel):
    detected: Optional[str] = None
    decode_used: str
    decode_fallback: bool = False


class ParseResponse(BaseModel):
    output: OutputName
    columns: List[str] = Field(default_factory=list)
    row_count: int = 0
    records: Optional[List[Dict[str, str]]] = None
    result_set: Optional[ResultSet] = None
    json_text: Optional[str] = None
    encoding: Optional[EncodingReport] = None


class HealthResponse(BaseModel):
    ok: bool = True
