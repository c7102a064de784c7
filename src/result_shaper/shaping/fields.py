"""Nested schema flattening and field selection.

RECORD columns are expanded depth-first into their leaves, each named by the
dotted path from the top-level column (``address.geo.lat``). Record columns
themselves are not emitted. Depth is not capped.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Sequence

from result_shaper.core.enums import type_tag
from result_shaper.core.models import Field, ResultFormat


def _flatten_into(fields: Iterable[Field], prefix: str, out: List[Field]) -> None:
    for fl in fields:
        name = f"{prefix}{fl.name}"
        if fl.is_record:
            _flatten_into(fl.fields, f"{name}.", out)
        else:
            out.append(Field(name=name, type=fl.type, mode=fl.mode))


def flatten_fields(fields: Optional[Iterable[Any]]) -> List[Field]:
    """Flatten a (possibly nested) schema into its leaf fields.

    Args:
        fields: Schema fields as ``Field`` objects or raw API dicts.

    Returns:
        Leaf fields in depth-first order; empty list for empty input.

    Examples:
        >>> schema = [{"name": "a", "type": "RECORD", "fields": [
        ...     {"name": "b", "type": "RECORD", "fields": [{"name": "c", "type": "INT64"}]}]}]
        >>> [f.name for f in flatten_fields(schema)]
        ['a.b.c']
    """
    if not fields:
        return []
    out: List[Field] = []
    _flatten_into((Field.from_api(f) for f in fields), "", out)
    return out


def select_fields(flattened: Iterable[Field], type_filter: Optional[Sequence[str]] = None) -> List[Field]:
    """Keep fields whose type is in ``type_filter``; all fields when the filter is empty."""
    if not type_filter:
        return list(flattened)
    wanted = {type_tag(t) for t in type_filter}
    return [f for f in flattened if f.type in wanted]


def parse_table_fields(
    fields: Optional[Iterable[Any]], type_filter: Optional[Sequence[str]] = None
) -> List[ResultFormat]:
    """Field picker entries (text = dotted name, value = type) for a table schema."""
    selected = select_fields(flatten_fields(fields), type_filter)
    return [ResultFormat(text=f.name, value=f.type) for f in selected]
