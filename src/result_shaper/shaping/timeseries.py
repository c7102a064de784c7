"""Time-series construction.

The schema is scanned once for three columns:

- time: first DATE/DATETIME/TIMESTAMP field (required)
- metric: first field named ``metric`` (optional, one series per distinct value)
- value: first numeric field

Without a metric column every row lands in a single series named after the
value column. Datapoints keep row order; nothing is re-sorted.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from result_shaper.config import DEFAULT_SETTINGS, ShaperSettings
from result_shaper.core.enums import ValueKind
from result_shaper.core.errors import MissingTimeColumnError, ResultShapeError
from result_shaper.core.models import DataTarget, QueryResult
from result_shaper.core.values import epoch_millis, to_number

logger = logging.getLogger(__name__)

MISSING_TIME_COLUMN_MESSAGE = (
    "No datetime column found in the result. The Time Series format requires a time column."
)


@dataclass(frozen=True)
class SeriesColumns:
    time_index: int
    metric_index: Optional[int]
    value_index: int


def locate_series_columns(
    result: QueryResult, settings: ShaperSettings = DEFAULT_SETTINGS
) -> SeriesColumns:
    """Find the time, metric and value column positions in schema order.

    Raises:
        MissingTimeColumnError: If no temporal field exists.
        ResultShapeError: If no numeric field exists.
    """
    time_index: Optional[int] = None
    metric_index: Optional[int] = None
    value_index: Optional[int] = None
    for i, fl in enumerate(result.schema):
        kind = settings.kind_for(fl.type)
        if time_index is None and kind is ValueKind.TEMPORAL:
            time_index = i
        if metric_index is None and fl.name == settings.metric_field:
            metric_index = i
        if value_index is None and kind is ValueKind.NUMERIC:
            value_index = i

    if time_index is None:
        raise MissingTimeColumnError(MISSING_TIME_COLUMN_MESSAGE)
    if value_index is None:
        raise ResultShapeError(
            "No numeric column found in the result. The Time Series format requires a value column."
        )
    logger.debug(
        "Time series columns: time=%d metric=%s value=%d", time_index, metric_index, value_index
    )
    return SeriesColumns(time_index, metric_index, value_index)


BucketKey = Tuple[str, str]


def bucket_key(target: Any) -> BucketKey:
    """Hashable identity of a metric cell.

    Cells can be lists or dicts (REPEATED or RECORD columns), and ``1``,
    ``1.0`` and ``True`` name different series, so the key carries the type.
    """
    return type(target).__name__, json.dumps(target, sort_keys=True, default=str)


def find_or_create_bucket(buckets: Dict[BucketKey, DataTarget], target: Any) -> DataTarget:
    """Return the bucket for ``target``, appending a new one if unseen.

    The raw cell is kept as ``DataTarget.target``.
    """
    key = bucket_key(target)
    bucket = buckets.get(key)
    if bucket is None:
        bucket = DataTarget(target=target)
        buckets[key] = bucket
    return bucket


def _cell(row: tuple, index: int) -> Any:
    return row[index] if index < len(row) else None


def to_time_series(
    result: QueryResult, settings: ShaperSettings = DEFAULT_SETTINGS
) -> List[DataTarget]:
    """Group rows into one ``DataTarget`` per series in first-seen order.

    Each datapoint is ``[value, epoch_millis]`` where the time cell is read as
    epoch seconds. ``None`` rows are skipped.

    Raises:
        MissingTimeColumnError: If the schema has no temporal field.
    """
    columns = locate_series_columns(result, settings)
    fallback_name = result.schema[columns.value_index].name

    buckets: Dict[BucketKey, DataTarget] = {}
    for row in result.rows:
        if not row:
            continue
        epoch = epoch_millis(_cell(row, columns.time_index))
        if columns.metric_index is not None:
            name = _cell(row, columns.metric_index)
        else:
            name = fallback_name
        bucket = find_or_create_bucket(buckets, name)
        bucket.datapoints.append([to_number(_cell(row, columns.value_index)), epoch])

    logger.debug("Built %d series from %d rows", len(buckets), len(result.rows))
    return list(buckets.values())
