"""Tests for table construction."""

import math

from conftest import make_response
from result_shaper.core.models import Column, QueryResult
from result_shaper.shaping.table import to_table


def test_columns_follow_schema(nested_schema):
    result = QueryResult.from_api({"schema": {"fields": nested_schema}, "rows": []})
    table = to_table(result)
    # Record columns pass through as a single column
    assert table.columns == [
        Column("id", "INT64"),
        Column("address", "RECORD"),
        Column("created", "TIMESTAMP"),
    ]
    assert table.type == "table"
    assert table.rows == []


def test_cells_coerced_by_column_type():
    payload = make_response(
        [
            {"name": "name", "type": "STRING"},
            {"name": "count", "type": "INT64"},
            {"name": "ratio", "type": "FLOAT64"},
            {"name": "seen", "type": "TIMESTAMP"},
        ],
        [["a", "3", "0.5", "1700000000"], ["b", "x", None, "1700000000"]],
    )
    table = to_table(QueryResult.from_api(payload))
    assert table.rows[0] == ["a", 3, 0.5, "Tue Nov 14 2023 22:13:20 GMT+0000"]
    assert table.rows[1][0] == "b"
    assert math.isnan(table.rows[1][1])
    assert table.rows[1][2] == 0


def test_row_order_preserved():
    payload = make_response(
        [{"name": "v", "type": "INT64"}],
        [["3"], ["1"], ["2"], ["1"]],
    )
    assert to_table(QueryResult.from_api(payload)).rows == [[3], [1], [2], [1]]


def test_record_cell_passthrough():
    nested = {"f": [{"v": "Yerevan"}]}
    payload = {
        "schema": {"fields": [{"name": "address", "type": "RECORD", "fields": []}]},
        "rows": [{"f": [{"v": nested}]}],
    }
    assert to_table(QueryResult.from_api(payload)).rows == [[nested]]


def test_to_dict_shape():
    payload = make_response([{"name": "v", "type": "INT64"}], [["1"]])
    assert to_table(QueryResult.from_api(payload)).to_dict() == {
        "columns": [{"text": "v", "type": "INT64"}],
        "rows": [[1]],
        "type": "table",
    }
