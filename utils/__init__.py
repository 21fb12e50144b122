"""
==========================
Utility Functions Package.
==========================

Database helpers that execute generated SQL and read records back.

Modules:
    database_utils: PostgreSQL engine creation, raw SQL execution, bulk loading
"""

__version__ = "1.0.0"
__all__ = [
    'BulkInsertExecutionError',
    'get_connection_string',
    'create_sqlalchemy_engine',
    'execute_raw_sql',
    'bulk_insert_records',
    'fetch_records'
]

from .database_utils import (
    BulkInsertExecutionError,
    bulk_insert_records,
    create_sqlalchemy_engine,
    execute_raw_sql,
    fetch_records,
    get_connection_string,
)
