"""
====================================================
SQL generation package for bulk record loading.
====================================================

This package renders batches of records into literal, inlined SQL text that
can be executed via SQLAlchemy or any other database driver.

The package follows a clear organization:
    - literals.py: Per-semantic-type SQL literal rendering and quoting
    - dml.py: Column selection and multi-row INSERT assembly

Architecture:
    - dml.py imports from literals.py (not vice versa)
    - All SQL generation is pure functions (no side effects)
    - No placeholders are produced; values are inlined and escaped

Example:
    >>> from sql.dml import generate_bulk_insert, select_columns
    >>>
    >>> select_columns(Person)
    ['Name', 'Age']
    >>> insert_sql = generate_bulk_insert(people, table_name='"T"')
"""

__version__ = "1.0.0"
__all__ = [
    # DML functions
    'select_columns', 'generate_bulk_insert', 'chunk_records',
    'BulkInsertError', 'InvalidArgumentError',
    # Literal rendering
    'format_literal', 'quote_literal'
]

from .dml import (
    BulkInsertError,
    InvalidArgumentError,
    chunk_records,
    generate_bulk_insert,
    select_columns,
)
from .literals import format_literal, quote_literal
