"""Data query dispatch by requested output format."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Union

from result_shaper.config import DEFAULT_SETTINGS, ShaperSettings
from result_shaper.core.enums import ResultFormatType
from result_shaper.core.models import DataTarget, QueryResult, Table

from .table import to_table
from .timeseries import to_time_series


def parse_data_query(
    result: Union[QueryResult, Mapping[str, Any]],
    result_format: Union[str, ResultFormatType] = ResultFormatType.TABLE.value,
    settings: ShaperSettings = DEFAULT_SETTINGS,
) -> Union[List[DataTarget], Table, Dict[str, list]]:
    """Shape a query result for the requested format.

    Returns ``{"data": []}`` when the result has no rows, a list of
    ``DataTarget`` for ``"time_series"`` and a ``Table`` for anything else.
    """
    if not isinstance(result, QueryResult):
        result = QueryResult.from_api(result)
    if not result.rows:
        return {"data": []}
    fmt = (
        result_format.value
        if isinstance(result_format, ResultFormatType)
        else str(result_format)
    )
    if fmt == ResultFormatType.TIME_SERIES.value:
        return to_time_series(result, settings)
    return to_table(result, settings)
