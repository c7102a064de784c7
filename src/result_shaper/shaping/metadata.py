"""Metadata list extraction (projects, datasets, tables).

List responses are turned into ``ResultFormat`` picker entries by resolving a
dotted text path and value path against each item. Output length always
equals input length; only ``parse_tables`` collapses entries afterwards (see
``wildcard.consolidate_wildcard_tables``).
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Iterable, List, Mapping, Optional

from result_shaper.config import PARTITIONED_SUFFIX, TABLE_KIND
from result_shaper.core.errors import MetadataPathError
from result_shaper.core.models import ResultFormat
from result_shaper.core.paths import MISSING, first_missing_hop, resolve_path, set_path

from .wildcard import consolidate_wildcard_tables

logger = logging.getLogger(__name__)

PROJECT_PATH = "id"
DATASET_PATH = "datasetReference.datasetId"
TABLE_PATH = "tableReference.tableId"


def normalize_item(item: Any) -> Any:
    """Mark time-partitioned tables in their table id.

    For a table resource carrying ``timePartitioning`` the id becomes
    ``<id>__partitioned`` or ``<id>__partitioned__<field>`` when a partition
    field is named. The rewrite is applied to a copy; other items are returned
    as-is.
    """
    if not isinstance(item, Mapping) or item.get("kind") != TABLE_KIND:
        return item
    partitioning = item.get("timePartitioning")
    if not partitioning:
        return item

    table_id = resolve_path(item, TABLE_PATH)
    if table_id is MISSING:
        raise MetadataPathError(TABLE_PATH, first_missing_hop(item, TABLE_PATH))

    rewritten = f"{table_id}{PARTITIONED_SUFFIX}"
    partition_field = partitioning.get("field") if isinstance(partitioning, Mapping) else None
    if partition_field:
        rewritten += f"__{partition_field}"

    normalized = copy.deepcopy(dict(item))
    set_path(normalized, TABLE_PATH, rewritten)
    return normalized


def _resolve(item: Any, path: str) -> Any:
    value = resolve_path(item, path)
    if value is MISSING:
        raise MetadataPathError(path, first_missing_hop(item, path))
    return value


def extract_list(
    items: Optional[Iterable[Any]], text_path: str, value_path: str
) -> List[ResultFormat]:
    """Map metadata items to ``ResultFormat`` entries.

    Args:
        items: List response items (mappings or objects); ``None`` is treated as empty.
        text_path: Dotted path of the display label (e.g. "datasetReference.datasetId").
        value_path: Dotted path of the identifier.

    Returns:
        One entry per item, in input order.

    Raises:
        MetadataPathError: If a path does not resolve against an item.
    """
    if not items:
        return []
    data: List[ResultFormat] = []
    for item in items:
        item = normalize_item(item)
        data.append(ResultFormat(text=_resolve(item, text_path), value=_resolve(item, value_path)))
    return data


def parse_projects(items: Optional[Iterable[Any]]) -> List[ResultFormat]:
    return extract_list(items, PROJECT_PATH, PROJECT_PATH)


def parse_datasets(items: Optional[Iterable[Any]]) -> List[ResultFormat]:
    return extract_list(items, DATASET_PATH, DATASET_PATH)


def parse_tables(items: Optional[Iterable[Any]]) -> List[ResultFormat]:
    """Table picker entries with date-sharded families collapsed to one entry."""
    tables = extract_list(items, TABLE_PATH, TABLE_PATH)
    consolidated = consolidate_wildcard_tables(tables)
    logger.debug("Consolidated %d tables into %d entries", len(tables), len(consolidated))
    return consolidated
