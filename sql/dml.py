"""
===========================================
Data Manipulation Language (DML) Utilities.
===========================================

This module turns a batch of uniformly-typed records into one multi-row
INSERT statement with every value inlined as a SQL literal, so a whole
batch reaches the database in a single round trip.

Functions:
- select_columns: Ordered insertable column names of a record type
- generate_bulk_insert: Render records into a single INSERT statement
- chunk_records: Split a large batch into statement-sized chunks

Generated statements look like:

    insert into "T" (Name,Age)
    values
    ('Ann',30),
    ('O''Brien',null)

The table name is used exactly as given: callers pass it already
qualified and quoted. Column names are emitted bare.

Usage:
    from dataclasses import dataclass
    from typing import Optional

    from models.record_types import non_editable
    from sql.dml import generate_bulk_insert

    @dataclass
    class Person:
        Id: int = non_editable(default=0)
        Name: str = ''
        Age: Optional[int] = None

    insert_sql = generate_bulk_insert(
        [Person(Name='Ann', Age=30), Person(Name="O'Brien")],
        table_name='"T"'
    )
"""

from typing import Any, Iterator, List, Optional, Sequence

from core.logger import get_logger
from models.record_types import describe_record_type
from sql.literals import NULL_LITERAL, format_literal

logger = get_logger(__name__)

_MISSING = object()


class BulkInsertError(Exception):
    """Base exception for bulk INSERT generation and execution errors."""
    pass


class InvalidArgumentError(BulkInsertError, ValueError):
    """Exception raised when a required argument is missing or blank.

    Attributes:
        argument_name: Name of the offending parameter
    """

    def __init__(self, argument_name: str, message: Optional[str] = None):
        self.argument_name = argument_name
        super().__init__(message or f"Argument '{argument_name}' must not be empty or blank")


def select_columns(record_type: type) -> List[str]:
    """
    Get the insertable column names of a record type.

    Fields marked non-editable (store-populated keys and the like) are left
    out; the remaining names keep their declaration order.

    Args:
        record_type: Dataclass or SQLAlchemy declarative model class

    Returns:
        Column names in declaration order (empty if no field is editable)
    """
    return list(describe_record_type(record_type).column_names)


def generate_bulk_insert(records: Optional[Sequence[Any]], table_name: str) -> str:
    """
    Generate a single multi-row INSERT statement for a batch of records.

    All records must be instances of the same record type; the column list
    is derived once from the first record's type and shared by every row.
    Attributes that cannot be found on a record render as null.

    Args:
        records: Record instances to insert (None or empty yields '')
        table_name: Qualified, already-quoted target table identifier

    Returns:
        INSERT statement text, or an empty string for an empty batch

    Raises:
        InvalidArgumentError: If table_name is empty or whitespace-only

    Example:
        >>> sql = generate_bulk_insert(people, 'public."People"')
        >>> sql.splitlines()[0]
        'insert into public."People" (Name,Age)'
    """
    if table_name is None or not str(table_name).strip():
        raise InvalidArgumentError('table_name')

    records = list(records or [])
    if not records:
        logger.debug(f"Empty batch for {table_name}, no INSERT generated")
        return ''

    descriptor = describe_record_type(type(records[0]))
    fields = descriptor.editable_fields

    rows = []
    for index, record in enumerate(records):
        values = []
        for field in fields:
            value = getattr(record, field.attribute, _MISSING)
            if value is _MISSING:
                logger.debug(
                    f"Record {index} has no attribute '{field.attribute}', rendering null"
                )
                values.append(NULL_LITERAL)
            else:
                values.append(format_literal(value, field.semantic_type))
        rows.append(f"({','.join(values)})")

    logger.debug(
        f"Generated INSERT for {table_name}: {len(rows)} rows x {len(fields)} columns"
    )

    column_list = ','.join(descriptor.column_names)
    return f"insert into {table_name} ({column_list})\nvalues\n" + ",\n".join(rows)


def chunk_records(records: Sequence[Any], chunk_size: int) -> Iterator[List[Any]]:
    """
    Split a batch into consecutive chunks of at most chunk_size records.

    Args:
        records: Records to split, order is preserved
        chunk_size: Maximum records per chunk

    Yields:
        Lists of records

    Raises:
        InvalidArgumentError: If chunk_size is smaller than 1
    """
    if chunk_size is None or chunk_size < 1:
        raise InvalidArgumentError('chunk_size', f"Argument 'chunk_size' must be at least 1, got {chunk_size}")

    records = list(records or [])
    for start in range(0, len(records), chunk_size):
        yield records[start:start + chunk_size]
