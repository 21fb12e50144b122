"""
=========================================================
Command line entry point for bulk INSERT generation.
=========================================================

Reads a JSON array of records, builds instances of a record class and
either prints the generated multi-row INSERT statement(s) or executes them
against the configured PostgreSQL database.

The record class is given as ``package.module:ClassName`` and must be a
dataclass or a SQLAlchemy declarative model importable from the current
environment. JSON values are converted to the field's semantic type
(UUID, date-time in ISO 8601, Decimal) before rendering.

Usage:
    # Print the INSERT for a file of records
    python main.py --record-type myapp.models:Person --table '"People"' --input people.json

    # Split into statements of 500 rows
    python main.py --record-type myapp.models:Person --table '"People"' --input people.json --chunk-size 500

    # Execute against the database from .env
    python main.py --record-type myapp.models:Person --table 'public."People"' --input people.json --execute

Example:
    >>> from main import main
    >>> exit_code = main(['--record-type', 'myapp.models:Person', '--table', 't', '--input', 'p.json'])
"""

import argparse
import importlib
import json
import sys
import uuid
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Sequence

from core.config import config
from core.logger import get_logger, setup_logging
from models.record_types import RecordTypeError, SemanticType, describe_record_type
from sql.dml import BulkInsertError, chunk_records, generate_bulk_insert
from utils.database_utils import bulk_insert_records, create_sqlalchemy_engine

logger = get_logger(__name__)


def _to_decimal(value: Any) -> Decimal:
    try:
        return Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"Invalid decimal value: {value!r}") from e


_JSON_CONVERTERS = {
    SemanticType.GUID: lambda value: uuid.UUID(str(value)),
    SemanticType.DATETIME: lambda value: datetime.fromisoformat(str(value)),
    SemanticType.DECIMAL: _to_decimal,
}


def load_record_type(path: str) -> type:
    """
    Import a record class from a ``package.module:ClassName`` path.

    Raises:
        RecordTypeError: If the path is malformed or the class cannot be found
    """
    module_name, _, class_name = path.partition(':')
    if not module_name or not class_name:
        raise RecordTypeError(f"Record type must look like 'package.module:ClassName', got '{path}'")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise RecordTypeError(f"Cannot import module '{module_name}': {e}") from e

    record_type = getattr(module, class_name, None)
    if record_type is None:
        raise RecordTypeError(f"Module '{module_name}' has no attribute '{class_name}'")

    describe_record_type(record_type)
    return record_type


def build_records(rows: Sequence[Dict[str, Any]], record_type: type) -> List[Any]:
    """
    Build record instances from JSON objects.

    Keys that are not fields of the record type are ignored; values of GUID,
    date-time and decimal fields are converted from their JSON form.
    """
    fields = {f.name: f for f in describe_record_type(record_type).fields}

    records = []
    for index, row in enumerate(rows):
        kwargs = {}
        for key, value in row.items():
            field = fields.get(key)
            if field is None:
                continue
            converter = _JSON_CONVERTERS.get(field.semantic_type)
            if converter is not None and value is not None:
                value = converter(value)
            kwargs[field.attribute] = value
        try:
            records.append(record_type(**kwargs))
        except TypeError as e:
            raise RecordTypeError(f"Record {index} does not fit {record_type.__name__}: {e}") from e
    return records


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Generate (and optionally execute) multi-row INSERT statements',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --record-type myapp.models:Person --table '"People"' --input people.json
  python main.py --record-type myapp.models:Person --table '"People"' --input people.json --execute
        """
    )
    parser.add_argument(
        '--record-type',
        required=True,
        help="Record class as 'package.module:ClassName'"
    )
    parser.add_argument(
        '--table',
        required=True,
        help='Target table, already qualified and quoted (used verbatim)'
    )
    parser.add_argument(
        '--input',
        required=True,
        help="JSON file holding an array of objects ('-' for stdin)"
    )
    parser.add_argument(
        '--chunk-size',
        type=int,
        default=None,
        help=f'Rows per statement (default: {config.bulk_insert_chunk_size})'
    )
    parser.add_argument(
        '--execute',
        action='store_true',
        help='Execute the statements against the configured database instead of printing'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging (DEBUG level)'
    )
    return parser.parse_args(argv)


def _read_rows(source: str) -> List[Dict[str, Any]]:
    if source == '-':
        rows = json.load(sys.stdin)
    else:
        with open(source, encoding='utf-8') as handle:
            rows = json.load(handle)

    if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
        raise ValueError(f"{source} must contain a JSON array of objects")
    return rows


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run the CLI.

    Returns:
        Process exit code (0 on success, 1 on error)
    """
    args = parse_args(argv)

    if args.verbose:
        setup_logging(log_level='DEBUG', log_file=config.logging.log_file)

    chunk_size = args.chunk_size if args.chunk_size is not None else config.bulk_insert_chunk_size

    try:
        record_type = load_record_type(args.record_type)
        records = build_records(_read_rows(args.input), record_type)
        logger.info(f"Loaded {len(records)} {record_type.__name__} record(s) from {args.input}")

        if args.execute:
            engine = create_sqlalchemy_engine()
            try:
                bulk_insert_records(engine, records, args.table, chunk_size=chunk_size)
            finally:
                engine.dispose()
            return 0

        if not records:
            # Still rejects a blank table name
            generate_bulk_insert(records, args.table)
            logger.warning("⚠️  No records in input, nothing generated")
            return 0

        for chunk in chunk_records(records, chunk_size):
            print(generate_bulk_insert(chunk, args.table) + ';')
        return 0

    except (BulkInsertError, RecordTypeError, ValueError, OSError) as e:
        logger.error(f"❌ {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
