"""Tests for shaping settings and the YAML loader."""

import pytest

from result_shaper.config import (
    DEFAULT_SETTINGS,
    METRIC_FIELD_NAME,
    NUMERIC_TYPES,
    TEMPORAL_TYPES,
    load_settings,
)
from result_shaper.core.enums import ValueKind


def test_default_settings():
    assert DEFAULT_SETTINGS.metric_field == METRIC_FIELD_NAME == "metric"
    assert DEFAULT_SETTINGS.kind_for("INT64") is ValueKind.NUMERIC
    assert DEFAULT_SETTINGS.kind_for("DATE") is ValueKind.TEMPORAL
    assert DEFAULT_SETTINGS.kind_for("RECORD") is ValueKind.TEXT
    assert DEFAULT_SETTINGS.kind_for(None) is ValueKind.TEXT


def test_type_groups_are_disjoint():
    assert not NUMERIC_TYPES & TEMPORAL_TYPES


def test_load_settings_overrides(tmp_path):
    path = tmp_path / "shaper.yaml"
    path.write_text(
        "numeric_types: [int64, bignumeric]\nmetric_field: series\n", encoding="utf-8"
    )
    settings = load_settings(path)
    assert settings.numeric_types == frozenset({"INT64", "BIGNUMERIC"})
    assert settings.temporal_types == TEMPORAL_TYPES
    assert settings.metric_field == "series"


def test_load_settings_empty_file_keeps_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_settings(path) == DEFAULT_SETTINGS


def test_load_settings_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="Settings file not found"):
        load_settings(tmp_path / "nope.yaml")


def test_load_settings_rejects_non_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError, match="must contain a mapping"):
        load_settings(path)


def test_load_settings_rejects_scalar_type_group(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("temporal_types: TIMESTAMP\n", encoding="utf-8")
    with pytest.raises(ValueError, match="'temporal_types'"):
        load_settings(path)
