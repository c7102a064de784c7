"""Shared pytest fixtures: BigQuery-style responses used across the test suite."""

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest

from result_shaper.core.models import QueryResult


def make_response(fields: List[Dict[str, Any]], rows: List[List[Any]]) -> Dict[str, Any]:
    """Build a ``jobs.query`` style response from plain field dicts and cell lists."""
    return {
        "schema": {"fields": fields},
        "rows": [None if r is None else {"f": [{"v": v} for v in r]} for r in rows],
    }


@pytest.fixture
def metric_response() -> Dict[str, Any]:
    """Two interleaved series ("cpu", "mem") with three rows each."""
    fields = [
        {"name": "time", "type": "TIMESTAMP"},
        {"name": "metric", "type": "STRING"},
        {"name": "value", "type": "FLOAT64"},
    ]
    rows = [
        ["1.7E9", "cpu", "0.5"],
        ["1.7E9", "mem", "512"],
        ["1700000060", "cpu", "0.75"],
        ["1700000060", "mem", "640"],
        ["1700000120", "cpu", "1"],
        ["1700000120", "mem", "700"],
    ]
    return make_response(fields, rows)


@pytest.fixture
def metric_result(metric_response) -> QueryResult:  # pylint: disable=redefined-outer-name
    return QueryResult.from_api(metric_response)


@pytest.fixture
def nested_schema() -> List[Dict[str, Any]]:
    """Schema with a record containing a scalar and a nested record."""
    return [
        {"name": "id", "type": "INT64"},
        {
            "name": "address",
            "type": "RECORD",
            "fields": [
                {"name": "city", "type": "STRING"},
                {
                    "name": "geo",
                    "type": "RECORD",
                    "fields": [
                        {"name": "lat", "type": "FLOAT64"},
                        {"name": "lng", "type": "FLOAT64"},
                    ],
                },
            ],
        },
        {"name": "created", "type": "TIMESTAMP"},
    ]


@pytest.fixture
def table_items() -> List[Dict[str, Any]]:
    """tables.list items: two shards, a plain table and a partitioned table."""
    return [
        {"kind": "bigquery#table", "tableReference": {"tableId": "sales_20230101"}},
        {"kind": "bigquery#table", "tableReference": {"tableId": "sales_20230102"}},
        {"kind": "bigquery#table", "tableReference": {"tableId": "sales_abc"}},
        {
            "kind": "bigquery#table",
            "tableReference": {"tableId": "events"},
            "timePartitioning": {"type": "DAY", "field": "created"},
        },
    ]


@pytest.fixture
def annotation_data() -> Dict[str, Any]:
    return {
        "data": {
            "results": {
                "deploys": {
                    "tables": [
                        {
                            "columns": [{"text": "time"}, {"text": "text"}, {"text": "tags"}],
                            "rows": [
                                [1700000000.9, "deploy v1", "a, b,c"],
                                [1700000100, "deploy v2", None],
                            ],
                        }
                    ]
                }
            }
        }
    }


@pytest.fixture
def write_json(tmp_path: Path):
    """Write a payload to a JSON file under tmp_path and return its path."""

    def _write(payload: Any, name: str = "input.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write
