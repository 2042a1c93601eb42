import json

import pytest

from csvshape.models import ResultSet
from csvshape.shapes import render_json, split_table, to_json_ready, to_records, to_result_set

HEADER = ["id", "name", "city"]
ROWS = [["1", "Ada", "London"], ["2", "Linus", "Helsinki"]]


def test_records_rectangular():
    records = to_records(HEADER, ROWS)
    assert len(records) == 2
    assert all(len(r) == 3 for r in records)
    assert list(records[0]) == HEADER
    assert records[1]["city"] == "Helsinki"


def test_records_short_and_long_rows():
    records = to_records(HEADER, [["1"], ["2", "b", "c", "extra"]])
    assert records[0] == {"id": "1"}
    assert records[1] == {"id": "2", "name": "b", "city": "c"}


def test_result_set_dimensions():
    rs = to_result_set(HEADER, ROWS)
    assert rs.columns == HEADER
    assert rs.row_count == 2
    assert all(len(row) == 3 for row in rs.rows)
    assert rs.rows[0] == ["1", "Ada", "London"]


def test_result_set_ragged_rows():
    rs = to_result_set(HEADER, [["1"], ["2", "b", "c", "extra"]])
    assert rs.rows == [["1", None, None], ["2", "b", "c"]]


def test_result_set_cell_operations():
    rs = ResultSet(columns=["a", "b"])
    idx = rs.add_row()
    rs.set_cell(idx, "b", "x")
    rs.set_cell(idx, 0, "y")
    assert rs.rows == [["y", "x"]]
    with pytest.raises(KeyError):
        rs.set_cell(idx, "missing", "z")


def test_json_ready_collapses_single_record():
    value = to_json_ready(HEADER, ROWS[:1])
    assert value == {"id": "1", "name": "Ada", "city": "London"}
    assert isinstance(to_json_ready(HEADER, ROWS), list)


def test_render_json_root_wrapping():
    text = render_json({"a": "1"}, "item")
    assert text == '{"item": {"a": "1"}}'
    assert json.loads(text) == {"item": {"a": "1"}}
    assert render_json([], "") == "[]"


def test_render_json_keeps_unicode():
    assert render_json({"city": "Montréal"}) == '{"city": "Montréal"}'


def test_empty_table_shapes():
    header, rows = split_table([])
    assert to_records(header, rows) == []
    assert to_result_set(header, rows).row_count == 0
    assert to_json_ready(header, rows) == []
