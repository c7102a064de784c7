"""BigQuery Result Shaper: query results into time series, tables and picker lists.

Pure functions over schema-described query results:

- **Metadata lists**: parse_projects, parse_datasets, parse_tables, extract_list
- **Schema fields**: flatten_fields, select_fields, parse_table_fields
- **Query data**: to_time_series, to_table, parse_data_query
- **Annotations**: to_annotations

Usage:
    >>> from result_shaper import QueryResult, to_time_series
    >>> result = QueryResult.from_api(response)
    >>> series = [s.to_dict() for s in to_time_series(result)]
"""

from .core.errors import MetadataPathError, MissingTimeColumnError, ResultShapeError
from .core.models import (
    AnnotationEvent,
    Column,
    DataTarget,
    Field,
    QueryResult,
    ResultFormat,
    Table,
)
from .core.values import coerce_value
from .shaping import (
    consolidate_wildcard_tables,
    extract_list,
    flatten_fields,
    parse_data_query,
    parse_datasets,
    parse_projects,
    parse_table_fields,
    parse_tables,
    select_fields,
    to_annotations,
    to_table,
    to_time_series,
)

__all__ = [
    "__version__",
    # Models
    "Field",
    "QueryResult",
    "ResultFormat",
    "DataTarget",
    "Column",
    "Table",
    "AnnotationEvent",
    # Errors
    "ResultShapeError",
    "MissingTimeColumnError",
    "MetadataPathError",
    # Operations
    "coerce_value",
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

__version__ = "0.1.0"
