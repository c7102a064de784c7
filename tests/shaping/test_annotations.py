"""Tests for annotation extraction."""

import pytest

from result_shaper.core.errors import MetadataPathError, MissingTimeColumnError
from result_shaper.shaping.annotations import split_tags, to_annotations

OPTIONS = {"annotation": {"name": "deploys", "iconColor": "red"}}


def test_events_in_row_order(annotation_data):
    events = to_annotations(OPTIONS, annotation_data)
    assert len(events) == 2
    first, second = events
    assert first.tags == ["a", "b", "c"]
    assert first.text == "deploy v1"
    assert first.time == 1700000000
    assert second.tags == []
    assert second.time == 1700000100


def test_annotation_passed_through(annotation_data):
    events = to_annotations(OPTIONS, annotation_data)
    assert all(e.annotation is OPTIONS["annotation"] for e in events)


def test_title_is_never_populated():
    data = {
        "data": {
            "results": {
                "deploys": {
                    "tables": [
                        {
                            "columns": [{"text": "time"}, {"text": "title"}],
                            "rows": [[1, "Release"]],
                        }
                    ]
                }
            }
        }
    }
    (event,) = to_annotations(OPTIONS, data)
    assert event.title is None
    assert event.text is None
    assert event.tags == []


def test_missing_time_column_raises():
    data = {
        "data": {
            "results": {
                "deploys": {"tables": [{"columns": [{"text": "text"}], "rows": [["x"]]}]}
            }
        }
    }
    with pytest.raises(MissingTimeColumnError, match="Missing mandatory time column"):
        to_annotations(OPTIONS, data)


def test_unknown_annotation_name_raises(annotation_data):
    with pytest.raises(MetadataPathError):
        to_annotations({"annotation": {"name": "other"}}, annotation_data)


def test_time_is_floored_from_strings():
    data = {
        "data": {
            "results": {
                "deploys": {"tables": [{"columns": [{"text": "time"}], "rows": [["12.9"]]}]}
            }
        }
    }
    assert to_annotations(OPTIONS, data)[0].time == 12


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("a, b,c", ["a", "b", "c"]),
        ("  solo  ", ["solo"]),
        ("x ,  y", ["x", "y"]),
        ("", []),
        (None, []),
    ],
)
def test_split_tags(raw, expected):
    assert split_tags(raw) == expected
