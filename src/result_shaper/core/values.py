"""Cell value coercion.

Query results carry every cell as a loosely typed scalar (BigQuery returns
numbers and timestamps as strings). The schema type decides how a cell is
read:

- numeric tags: converted with ``to_number`` (never raises; unparsable → nan)
- temporal tags: epoch seconds rendered as a UTC date-time string
- anything else: passed through unchanged
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional, Union

from result_shaper.config import DEFAULT_SETTINGS, INVALID_DATE, TIMESTAMP_FORMAT, ShaperSettings
from result_shaper.core.enums import ValueKind

Number = Union[int, float]


@dataclass(frozen=True)
class CellValue:
    """A cell value tagged once with the kind derived from its schema type.

    Attributes:
        kind: Interpretation assigned from the column type.
        raw: The value as found in the result payload.
        value: The coerced value (number, date-time string or passthrough).
    """

    kind: ValueKind
    raw: Any
    value: Any


_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_RADIX_LITERALS = {
    "0x": (16, re.compile(r"[0-9a-fA-F]+")),
    "0b": (2, re.compile(r"[01]+")),
    "0o": (8, re.compile(r"[0-7]+")),
}


def _parse_number_text(text: str) -> Number:
    if text in ("Infinity", "+Infinity"):
        return math.inf
    if text == "-Infinity":
        return -math.inf
    radix = _RADIX_LITERALS.get(text[:2].lower())
    if radix is not None:
        # Prefixed literals take no sign
        base, digits_re = radix
        digits = text[2:]
        return int(digits, base) if digits_re.fullmatch(digits) else math.nan
    if _INTEGER_RE.fullmatch(text):
        return int(text)
    if _DECIMAL_RE.fullmatch(text):
        return float(text)
    return math.nan


def to_number(raw: Any) -> Number:
    """Convert a raw cell to a number without raising, like JavaScript ``Number()``.

    ``None``, ``False`` and blank strings give ``0``; integral strings give an
    ``int``; other decimal strings a ``float``. ``0x``/``0b``/``0o`` literals
    are read in their base and ``"Infinity"`` (exact spelling, optional sign)
    is infinite. Anything else, including ``"inf"``, ``"nan"`` and digit
    underscores, is ``nan``.

    Examples:
        >>> to_number("42")
        42
        >>> to_number("1.5e3")
        1500.0
        >>> to_number("0x10")
        16
        >>> to_number("abc")
        nan
    """
    if raw is None:
        return 0
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, (int, float)):
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return 0
        return _parse_number_text(text)
    return math.nan


def epoch_millis(raw: Any) -> Number:
    """Epoch seconds cell → epoch milliseconds (integral results as ``int``)."""
    ms = to_number(raw) * 1000
    if isinstance(ms, float) and ms.is_integer():
        return int(ms)
    return ms


def format_timestamp(raw: Any) -> str:
    """Render an epoch-seconds cell as a UTC date-time string.

    Examples:
        >>> format_timestamp(1700000000)
        'Tue Nov 14 2023 22:13:20 GMT+0000'
    """
    ms = epoch_millis(raw)
    if not math.isfinite(ms):
        return INVALID_DATE
    try:
        moment = datetime.fromtimestamp(ms / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return INVALID_DATE
    return moment.strftime(TIMESTAMP_FORMAT)


def classify_value(
    raw: Any, type_tag: Optional[str], settings: ShaperSettings = DEFAULT_SETTINGS
) -> CellValue:
    """Tag and coerce a raw cell according to its schema type."""
    kind = settings.kind_for(type_tag)
    if kind is ValueKind.NUMERIC:
        return CellValue(kind, raw, to_number(raw))
    if kind is ValueKind.TEMPORAL:
        return CellValue(kind, raw, format_timestamp(raw))
    return CellValue(kind, raw, raw)


def coerce_value(
    raw: Any, type_tag: Optional[str], settings: ShaperSettings = DEFAULT_SETTINGS
) -> Any:
    """Return the display value of a raw cell for the given schema type.

    Examples:
        >>> coerce_value("12", "INT64")
        12
        >>> coerce_value("hello", "STRING")
        'hello'
    """
    return classify_value(raw, type_tag, settings).value
