"""Shaping configuration constants.

This module centralizes the type-tag groups, naming conventions and markers
used by the shaping functions. Adjust the YAML settings file (see
``load_settings``) to tune type classification without code changes.

Type groups:
    - numeric: cells converted to numbers (time-series values, table cells)
    - temporal: cells read as epoch seconds (time-series time axis)
    - record: nested fields flattened into dotted leaf names
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Optional

import yaml

from result_shaper.core.enums import FieldType, ValueKind, type_tag

# ============================================================================
# TYPE GROUPS
# ============================================================================

NUMERIC_TYPES: FrozenSet[str] = frozenset(
    {
        FieldType.INT64.value,
        FieldType.NUMERIC.value,
        FieldType.FLOAT64.value,
        FieldType.FLOAT.value,
        FieldType.INT.value,
        FieldType.INTEGER.value,
    }
)

TEMPORAL_TYPES: FrozenSet[str] = frozenset(
    {
        FieldType.DATE.value,
        FieldType.DATETIME.value,
        FieldType.TIMESTAMP.value,
    }
)

RECORD_TYPES: FrozenSet[str] = frozenset({FieldType.RECORD.value, FieldType.STRUCT.value})


# ============================================================================
# NAMING CONVENTIONS
# ============================================================================

# Schema column that splits a time series into one bucket per distinct value
METRIC_FIELD_NAME = "metric"

# Discriminator of table resources in list responses
TABLE_KIND = "bigquery#table"

# Appended to the id of time-partitioned tables (then "__<field>" if named)
PARTITIONED_SUFFIX = "__partitioned"

# Replaces the trailing date of sharded tables (sales_20230101 -> sales_YYYYMMDD)
WILDCARD_TEMPLATE = "YYYYMMDD"

# Annotation query column names
ANNOTATION_TIME_COLUMN = "time"
ANNOTATION_TEXT_COLUMN = "text"
ANNOTATION_TAGS_COLUMN = "tags"

# Rendering of temporal cells in tables (UTC)
TIMESTAMP_FORMAT = "%a %b %d %Y %H:%M:%S GMT%z"
INVALID_DATE = "Invalid Date"


# ============================================================================
# SETTINGS
# ============================================================================


@dataclass(frozen=True)
class ShaperSettings:
    """Tunable classification settings.

    Attributes:
        numeric_types: Type tags whose cells are converted to numbers.
        temporal_types: Type tags whose cells are epoch seconds.
        metric_field: Column name that splits time series into buckets.

    Examples:
        >>> settings = ShaperSettings(metric_field="series")
        >>> settings.kind_for("TIMESTAMP")
        <ValueKind.TEMPORAL: 'temporal'>
    """

    numeric_types: FrozenSet[str] = field(default=NUMERIC_TYPES)
    temporal_types: FrozenSet[str] = field(default=TEMPORAL_TYPES)
    metric_field: str = METRIC_FIELD_NAME

    def kind_for(self, tag: Optional[str]) -> ValueKind:
        """Classify a schema type tag."""
        tag = type_tag(tag)
        if tag in self.numeric_types:
            return ValueKind.NUMERIC
        if tag in self.temporal_types:
            return ValueKind.TEMPORAL
        return ValueKind.TEXT


DEFAULT_SETTINGS = ShaperSettings()


def load_settings(path: Path) -> ShaperSettings:
    """Load shaping settings from a YAML file.

    Missing keys keep their defaults. Expected layout::

        numeric_types: [INT64, FLOAT64, BIGNUMERIC]
        temporal_types: [DATE, DATETIME, TIMESTAMP]
        metric_field: metric

    Args:
        path: Path to the YAML settings file.

    Returns:
        ShaperSettings with overrides applied.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a mapping or a type list is malformed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping, got {type(data).__name__}")

    def _tags(key: str, default: FrozenSet[str]) -> FrozenSet[str]:
        value = data.get(key)
        if value is None:
            return default
        if not isinstance(value, list):
            raise ValueError(f"'{key}' in {path} must be a list of type tags")
        return frozenset(str(v).upper() for v in value)

    return ShaperSettings(
        numeric_types=_tags("numeric_types", NUMERIC_TYPES),
        temporal_types=_tags("temporal_types", TEMPORAL_TYPES),
        metric_field=str(data.get("metric_field") or METRIC_FIELD_NAME),
    )
