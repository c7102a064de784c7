"""Exceptions raised by the shaping functions."""

from __future__ import annotations


class ResultShapeError(Exception):
    """Base class for results that cannot be converted into the requested shape."""


class MissingTimeColumnError(ResultShapeError):
    """A time-indexed shape was requested but the result carries no time column.

    Raised by the time-series builder (no DATE/DATETIME/TIMESTAMP field) and
    by the annotation extractor (no column named ``time``).
    """


class MetadataPathError(ResultShapeError, LookupError):
    """A dotted attribute path does not resolve against a metadata item."""

    def __init__(self, path: str, hop: str) -> None:
        self.path = path
        self.hop = hop
        super().__init__(f"Cannot resolve '{path}': no value at '{hop}'")


__all__ = ["ResultShapeError", "MissingTimeColumnError", "MetadataPathError"]
