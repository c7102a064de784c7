"""Table construction.

Columns map 1:1 onto the schema (RECORD columns stay single columns) and
every cell is coerced with the type of its column position.
"""

from __future__ import annotations

from typing import Any, List

from result_shaper.config import DEFAULT_SETTINGS, ShaperSettings
from result_shaper.core.models import Column, QueryResult, Table
from result_shaper.core.values import coerce_value


def to_table(result: QueryResult, settings: ShaperSettings = DEFAULT_SETTINGS) -> Table:
    """Convert a query result into a ``Table``, preserving row and column order."""
    columns = [Column(text=fl.name, type=fl.type) for fl in result.schema]
    rows: List[List[Any]] = []
    for row in result.rows:
        cells = row or ()
        rows.append(
            [
                coerce_value(v, columns[i].type if i < len(columns) else None, settings)
                for i, v in enumerate(cells)
            ]
        )
    return Table(columns=columns, rows=rows)
