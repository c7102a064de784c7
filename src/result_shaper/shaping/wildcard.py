"""Wildcard (date-sharded) table consolidation.

Tables sharded by day (``events_20230101``, ``events_20230102``, ...) are
queried through a wildcard, so the table picker lists the family once as
``events_YYYYMMDD``.
"""

from __future__ import annotations

import calendar
import logging
import re
from typing import Dict, Iterable, List, Optional

from result_shaper.config import PARTITIONED_SUFFIX, WILDCARD_TEMPLATE
from result_shaper.core.models import ResultFormat

logger = logging.getLogger(__name__)

_DATE_SUFFIX_RE = re.compile(r"_(20\d{2})(\d{2})(\d{2})$")


def date_suffix(identifier: str) -> Optional[str]:
    """Return the trailing ``YYYYMMDD`` of ``identifier`` if it is a calendar date.

    The date must follow an underscore, the year must be in the 2000s and the
    day must exist in that month (February 29 only in leap years).

    Examples:
        >>> date_suffix("sales_20240229")
        '20240229'
        >>> date_suffix("sales_20230229") is None
        True
    """
    match = _DATE_SUFFIX_RE.search(str(identifier))
    if not match:
        return None
    year, month, day = (int(g) for g in match.groups())
    if not 1 <= month <= 12:
        return None
    if not 1 <= day <= calendar.monthrange(year, month)[1]:
        return None
    return "".join(match.groups())


def strip_partition_marker(text: str) -> str:
    """Drop ``__partitioned`` and everything after it."""
    pos = text.find(PARTITIONED_SUFFIX)
    return text[:pos] if pos > -1 else text


def consolidate_wildcard_tables(tables: Iterable[ResultFormat]) -> List[ResultFormat]:
    """Collapse date-sharded table entries into one templated entry per family.

    Entries whose value does not end in a date are kept under their own value
    with the partition marker stripped from the text. Output follows the
    first-insertion order of keys; a repeated key keeps its position and takes
    the latest text.
    """
    keyed: Dict[str, str] = {}
    for table in tables:
        text = strip_partition_marker(str(table.text))
        if date_suffix(str(table.value)) is None:
            keyed[table.value] = text
        else:
            templated = text[: len(text) - 8] + WILDCARD_TEMPLATE
            if templated not in keyed:
                logger.debug("Collapsing sharded table %s into %s", table.value, templated)
            keyed[templated] = templated
    return [ResultFormat(text=text, value=value) for value, text in keyed.items()]
