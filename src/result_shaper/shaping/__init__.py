"""Shaping functions: query results and metadata lists into consumer shapes."""

from .annotations import to_annotations
from .fields import flatten_fields, parse_table_fields, select_fields
from .metadata import extract_list, parse_datasets, parse_projects, parse_tables
from .query import parse_data_query
from .table import to_table
from .timeseries import to_time_series
from .wildcard import consolidate_wildcard_tables

__all__ = [
    "extract_list",
    "parse_projects",
    "parse_datasets",
    "parse_tables",
    "consolidate_wildcard_tables",
    "flatten_fields",
    "select_fields",
    "parse_table_fields",
    "to_time_series",
    "to_table",
    "to_annotations",
    "parse_data_query",
]
