"""Tests for query result parsing and output serialization."""

import pandas as pd

from conftest import make_response
from result_shaper.core.enums import ValueKind
from result_shaper.core.models import (
    AnnotationEvent,
    Column,
    DataTarget,
    Field,
    QueryResult,
    Table,
)


def test_field_from_api_recursive(nested_schema):
    fields = [Field.from_api(f) for f in nested_schema]
    address = fields[1]
    assert address.is_record
    assert [c.name for c in address.fields] == ["city", "geo"]
    assert address.fields[1].fields[0] == Field(name="lat", type="FLOAT64")


def test_field_type_is_upper_cased():
    assert Field.from_api({"name": "n", "type": "int64"}).type == "INT64"


def test_field_kind():
    assert Field("t", "TIMESTAMP").kind is ValueKind.TEMPORAL
    assert Field("n", "NUMERIC").kind is ValueKind.NUMERIC
    assert Field("s", "STRING").kind is ValueKind.TEXT


def test_field_to_dict_round_trips_nested(nested_schema):
    assert Field.from_api(nested_schema[1]).to_dict() == nested_schema[1]


def test_query_result_from_api_reads_cells():
    payload = make_response(
        [{"name": "a", "type": "STRING"}, {"name": "b", "type": "INT64"}],
        [["x", "1"], None, ["y", "2"]],
    )
    result = QueryResult.from_api(payload)
    assert result.field_names == ["a", "b"]
    assert result.rows == (("x", "1"), None, ("y", "2"))


def test_query_result_from_api_without_rows():
    result = QueryResult.from_api({"schema": {"fields": [{"name": "a", "type": "STRING"}]}})
    assert result.rows == ()
    assert QueryResult.from_api({}).schema == ()


def test_query_result_accepts_plain_rows():
    result = QueryResult.from_api({"schema": {"fields": []}, "rows": [["a", 1]]})
    assert result.rows == (("a", 1),)


def test_data_target_to_dict_uses_wire_keys():
    target = DataTarget(target="cpu", datapoints=[[1.0, 1000]])
    assert target.to_dict() == {
        "target": "cpu",
        "datapoints": [[1.0, 1000]],
        "refId": "",
        "query": "",
    }


def test_table_to_dataframe_pads_short_rows():
    table = Table(
        columns=[Column("a", "STRING"), Column("b", "INT64")],
        rows=[["x", 1], ["y"]],
    )
    df = table.to_dataframe()
    assert isinstance(df, pd.DataFrame)
    assert list(df.columns) == ["a", "b"]
    assert df.shape == (2, 2)
    assert df.iloc[0]["b"] == 1
    assert pd.isna(df.iloc[1]["b"])


def test_annotation_event_to_dict():
    event = AnnotationEvent(annotation={"name": "a"}, tags=("x",), text="t", time=1)
    assert event.to_dict() == {
        "annotation": {"name": "a"},
        "tags": ["x"],
        "text": "t",
        "time": 1,
        "title": None,
    }
