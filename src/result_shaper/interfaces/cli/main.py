import argparse
import json
import logging
import math
import sys
from pathlib import Path
from typing import Any, List, Optional

import colorlog

from result_shaper.config import DEFAULT_SETTINGS, ShaperSettings, load_settings
from result_shaper.core.enums import FieldType, ResultFormatType
from result_shaper.core.errors import ResultShapeError

# Field type choices for argparse
FIELD_TYPE_CHOICES = list(FieldType.__members__.keys())

try:
    from result_shaper import __version__ as _PACKAGE_VERSION
except ImportError:  # pragma: no cover
    _PACKAGE_VERSION = "unknown"  # type: ignore[assignment]


def setup_logging(
    verbose: bool = False, warnings_only: bool = False, errors_only: bool = False
) -> None:
    logger = logging.getLogger()
    for h in list(logger.handlers):
        logger.removeHandler(h)
    log_format = (
        "%(asctime)s:%(levelname)s:%(name)s in %(filename)s:%(funcName)s:%(lineno)d: %(message)s"
    )
    log_colors = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold_red",
    }
    # Logs go to stderr so shaped JSON on stdout stays parseable
    stream_handler = colorlog.StreamHandler(sys.stderr)
    formatter = colorlog.ColoredFormatter(f"%(log_color)s{log_format}", log_colors=log_colors)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    if errors_only:
        logger.setLevel(logging.ERROR)
    elif warnings_only:
        logger.setLevel(logging.WARNING)
    else:
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def _read_json(source: str) -> Any:
    """Read a JSON document from a file path or ``-`` for stdin."""
    if source == "-":
        return json.load(sys.stdin)
    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _json_safe(value: Any) -> Any:
    """Replace non-finite floats with ``None`` so the output is strict JSON."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    return value


def _emit(payload: Any) -> None:
    json.dump(_json_safe(payload), sys.stdout, indent=2, ensure_ascii=False, allow_nan=False)
    sys.stdout.write("\n")


def _items(payload: Any, key: str) -> List[Any]:
    """Accept either a bare list of items or a list response (``{"<key>": [...]}``)."""
    if isinstance(payload, dict):
        return payload.get(key) or []
    return payload or []


def _settings(args: argparse.Namespace) -> ShaperSettings:
    config = getattr(args, "config", None)
    if not config:
        return DEFAULT_SETTINGS
    return load_settings(Path(config))


def _load_input(args: argparse.Namespace) -> Optional[Any]:
    try:
        return _read_json(args.input)
    except (OSError, json.JSONDecodeError) as e:
        logging.error("Failed to read input %s: %s", args.input, e)
        return None


def _cmd_list(args: argparse.Namespace, kind: str) -> int:
    from result_shaper.shaping import metadata

    parsers = {
        "projects": metadata.parse_projects,
        "datasets": metadata.parse_datasets,
        "tables": metadata.parse_tables,
    }
    payload = _load_input(args)
    if payload is None:
        return 2
    items = _items(payload, kind)
    try:
        entries = parsers[kind](items)
    except ResultShapeError as e:
        logging.error("Cannot list %s: %s", kind, e)
        return 3
    logging.info("Extracted %d %s entries from %d items", len(entries), kind, len(items))
    _emit([e.to_dict() for e in entries])
    return 0


def cmd_projects(args: argparse.Namespace) -> int:
    """List projects as picker entries."""
    return _cmd_list(args, "projects")


def cmd_datasets(args: argparse.Namespace) -> int:
    """List datasets as picker entries."""
    return _cmd_list(args, "datasets")


def cmd_tables(args: argparse.Namespace) -> int:
    """List tables as picker entries, collapsing date-sharded families."""
    return _cmd_list(args, "tables")


def cmd_fields(args: argparse.Namespace) -> int:
    """List flattened schema fields, optionally filtered by type."""
    from result_shaper.shaping.fields import parse_table_fields

    payload = _load_input(args)
    if payload is None:
        return 2
    # Accepts a table resource, a schema object or a bare field list
    if isinstance(payload, dict):
        schema = payload.get("schema", payload)
        fields = schema.get("fields") if isinstance(schema, dict) else schema
    else:
        fields = payload
    entries = parse_table_fields(fields, args.type or [])
    logging.info("Extracted %d fields", len(entries))
    _emit([e.to_dict() for e in entries])
    return 0


def cmd_query(args: argparse.Namespace) -> int:
    """Shape a query response as a time series or a table.

    Returns:
        0 on success
        2 if the input or settings cannot be read
        3 if the result cannot be shaped into the requested format
    """
    from result_shaper.core.models import QueryResult, Table
    from result_shaper.shaping.query import parse_data_query

    payload = _load_input(args)
    if payload is None:
        return 2
    try:
        settings = _settings(args)
    except (OSError, ValueError) as e:
        logging.error("Failed to load settings: %s", e)
        return 2

    result = QueryResult.from_api(payload)
    try:
        shaped = parse_data_query(result, args.format, settings)
    except ResultShapeError as e:
        logging.error("Cannot shape query result as %s: %s", args.format, e)
        return 3

    if isinstance(shaped, Table):
        if args.csv:
            csv_path = Path(args.csv)
            csv_path.parent.mkdir(parents=True, exist_ok=True)
            shaped.to_dataframe().to_csv(csv_path, index=False)
            logging.info("Saved CSV: %s", csv_path)
        _emit(shaped.to_dict())
    elif isinstance(shaped, list):
        if args.csv:
            logging.warning("--csv is only supported for the table format; ignoring")
        _emit([s.to_dict() for s in shaped])
    else:
        logging.warning("Query result has no rows")
        _emit(shaped)
    return 0


def cmd_annotations(args: argparse.Namespace) -> int:
    """Extract annotation events from an annotation query response."""
    from result_shaper.shaping.annotations import to_annotations

    payload = _load_input(args)
    if payload is None:
        return 2
    options = {"annotation": {"name": args.name}}
    try:
        events = to_annotations(options, payload)
    except ResultShapeError as e:
        logging.error("Cannot extract annotations for %s: %s", args.name, e)
        return 3
    logging.info("Extracted %d annotations", len(events))
    _emit([e.to_dict() for e in events])
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="result-shaper",
        description=f"BigQuery Result Shaper (v{_PACKAGE_VERSION})",
    )
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    p.add_argument(
        "--warnings-only",
        action="store_true",
        help="Show only warnings and errors (overrides --verbose)",
    )
    p.add_argument(
        "--errors-only",
        action="store_true",
        help="Show only errors (overrides --warnings-only and --verbose)",
    )
    p.add_argument(
        "--config",
        default=None,
        help="Path to a YAML settings file (type groups, metric column name)",
    )

    sub = p.add_subparsers(dest="command", required=True)

    input_help = "Path to the JSON response ('-' reads stdin)"

    p_projects = sub.add_parser("projects", help="List projects from a projects.list response")
    p_projects.add_argument("--input", required=True, help=input_help)
    p_projects.set_defaults(func=cmd_projects)

    p_datasets = sub.add_parser("datasets", help="List datasets from a datasets.list response")
    p_datasets.add_argument("--input", required=True, help=input_help)
    p_datasets.set_defaults(func=cmd_datasets)

    p_tables = sub.add_parser(
        "tables", help="List tables from a tables.list response (sharded tables collapsed)"
    )
    p_tables.add_argument("--input", required=True, help=input_help)
    p_tables.set_defaults(func=cmd_tables)

    p_fields = sub.add_parser("fields", help="List flattened fields of a table schema")
    p_fields.add_argument("--input", required=True, help=input_help)
    p_fields.add_argument(
        "--type",
        action="append",
        type=str.upper,
        choices=FIELD_TYPE_CHOICES,
        help="Keep only fields of this type (repeatable, case insensitive)",
    )
    p_fields.set_defaults(func=cmd_fields)

    p_query = sub.add_parser("query", help="Shape a query response as a time series or table")
    p_query.add_argument("--input", required=True, help=input_help)
    p_query.add_argument(
        "--format",
        default=ResultFormatType.TABLE.value,
        choices=[f.value for f in ResultFormatType],
        help="Output format (default: table)",
    )
    p_query.add_argument(
        "--csv",
        default=None,
        help="Also write the table to this CSV file (table format only)",
    )
    p_query.set_defaults(func=cmd_query)

    p_annotations = sub.add_parser(
        "annotations", help="Extract annotation events from an annotation query response"
    )
    p_annotations.add_argument("--input", required=True, help=input_help)
    p_annotations.add_argument(
        "--name", required=True, help="Annotation name (key under data.results)"
    )
    p_annotations.set_defaults(func=cmd_annotations)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(
        verbose=bool(args.verbose),
        warnings_only=bool(getattr(args, "warnings_only", False)),
        errors_only=bool(getattr(args, "errors_only", False)),
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
