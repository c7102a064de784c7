"""Annotation extraction.

Annotation queries return a table (already shaped by the host) with columns
named ``time``, ``text`` and ``tags``. Each row becomes one
``AnnotationEvent``. A ``title`` column is never picked up, so ``title`` is
always ``None``.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, List, Mapping, Optional, Sequence

from result_shaper.config import (
    ANNOTATION_TAGS_COLUMN,
    ANNOTATION_TEXT_COLUMN,
    ANNOTATION_TIME_COLUMN,
)
from result_shaper.core.errors import MetadataPathError, MissingTimeColumnError
from result_shaper.core.models import AnnotationEvent
from result_shaper.core.paths import MISSING, first_missing_hop, resolve_path
from result_shaper.core.values import to_number

logger = logging.getLogger(__name__)

MISSING_TIME_COLUMN_MESSAGE = "Missing mandatory time column in annotation query."

_TAG_SEPARATOR_RE = re.compile(r"\s*,\s*")


def split_tags(raw: Any) -> List[str]:
    """Split a comma separated tags cell; empty list for an empty cell.

    Examples:
        >>> split_tags("a, b,c")
        ['a', 'b', 'c']
    """
    if not raw:
        return []
    return _TAG_SEPARATOR_RE.split(str(raw).strip())


def _floor_time(raw: Any) -> Any:
    value = to_number(raw)
    if isinstance(value, float) and not math.isfinite(value):
        return value
    return math.floor(value)


def _column_text(column: Any) -> Any:
    if isinstance(column, Mapping):
        return column.get("text")
    return getattr(column, "text", None)


def annotation_table(options: Mapping[str, Any], data: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return the first table of the result set named after the annotation."""
    name = resolve_path(options, "annotation.name")
    if name is MISSING:
        raise MetadataPathError("annotation.name", first_missing_hop(options, "annotation.name"))
    results = resolve_path(data, "data.results")
    if results is MISSING:
        raise MetadataPathError("data.results", first_missing_hop(data, "data.results"))
    try:
        return results[name]["tables"][0]
    except (KeyError, IndexError, TypeError) as e:
        raise MetadataPathError(f"data.results.{name}.tables.0", f"data.results.{name}") from e


def to_annotations(options: Mapping[str, Any], data: Mapping[str, Any]) -> List[AnnotationEvent]:
    """Extract annotation events from an annotation query response.

    Args:
        options: Host annotation options; ``options["annotation"]`` is passed
            through into every event and its ``name`` selects the result set.
        data: Query response with ``data.results[<name>].tables[0]``.

    Returns:
        One event per table row, in row order.

    Raises:
        MissingTimeColumnError: If the table has no ``time`` column.
    """
    table = annotation_table(options, data)
    columns: Sequence[Any] = table.get("columns") or ()

    time_index: Optional[int] = None
    text_index: Optional[int] = None
    tags_index: Optional[int] = None
    title_index: Optional[int] = None
    for i, column in enumerate(columns):
        text = _column_text(column)
        if text == ANNOTATION_TIME_COLUMN:
            time_index = i
        elif text == ANNOTATION_TEXT_COLUMN:
            text_index = i
        elif text == ANNOTATION_TAGS_COLUMN:
            tags_index = i

    if time_index is None:
        raise MissingTimeColumnError(MISSING_TIME_COLUMN_MESSAGE)
    logger.debug("Annotation columns: time=%d text=%s tags=%s", time_index, text_index, tags_index)

    def cell(row: Sequence[Any], index: Optional[int]) -> Any:
        if index is None or index >= len(row):
            return None
        return row[index]

    annotation = options.get("annotation")
    events: List[AnnotationEvent] = []
    for row in table.get("rows") or ():
        events.append(
            AnnotationEvent(
                annotation=annotation,
                tags=split_tags(cell(row, tags_index)),
                text=cell(row, text_index),
                time=_floor_time(cell(row, time_index)),
                title=cell(row, title_index),
            )
        )
    return events
