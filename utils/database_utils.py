"""
==================================================
Database execution helpers for generated INSERTs.
==================================================

Thin SQLAlchemy layer that runs the statements produced by sql.dml against
PostgreSQL and maps query results back into record instances. SQL
generation itself never touches a connection; everything that does lives
here.

Key Features:
    - Connection string and engine building from config
    - Raw SQL execution inside a transaction
    - Chunked bulk loading of record batches
    - Mapping SELECT results back into dataclasses or mapped models

Example:
    >>> from utils.database_utils import (
    ...     create_sqlalchemy_engine,
    ...     bulk_insert_records,
    ...     fetch_records
    ... )
    >>>
    >>> engine = create_sqlalchemy_engine()
    >>> inserted = bulk_insert_records(engine, people, 'public."People"')
    >>> rows = fetch_records(engine, 'select * from public."People"', Person)
"""

from typing import Any, List, Optional, Sequence
from urllib.parse import quote_plus

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError

from core.config import config
from core.logger import get_logger
from models.record_types import describe_record_type
from sql.dml import BulkInsertError, InvalidArgumentError, chunk_records, generate_bulk_insert

logger = get_logger(__name__)


class BulkInsertExecutionError(BulkInsertError):
    """Exception raised when executing generated SQL fails."""
    pass


def get_connection_string(
    host: str = None,
    port: int = None,
    user: str = None,
    password: str = None,
    database: str = None
) -> str:
    """
    Build PostgreSQL connection string.

    Args:
        host: Database hostname (defaults to config.db_host)
        port: Database port (defaults to config.db_port)
        user: Database user (defaults to config.db_user)
        password: Database password (defaults to config.db_password)
        database: Database name (defaults to config.db_name)

    Returns:
        PostgreSQL connection string
    """
    host = host if host is not None else config.db_host
    port = port if port is not None else config.db_port
    user = user if user is not None else config.db_user
    password = password if password is not None else config.db_password
    database = database if database is not None else config.db_name

    return f"postgresql://{user}:{quote_plus(password)}@{host}:{port}/{database}"


def create_sqlalchemy_engine(
    host: str = None,
    port: int = None,
    user: str = None,
    password: str = None,
    database: str = None,
    echo: bool = False,
    pool_size: int = 5,
    max_overflow: int = 10
) -> Engine:
    """
    Create SQLAlchemy engine with connection pooling.

    Args:
        host: Database hostname
        port: Database port
        user: Database user
        password: Database password
        database: Database name
        echo: Enable SQL statement logging
        pool_size: Connection pool size
        max_overflow: Maximum overflow connections

    Returns:
        Configured SQLAlchemy Engine
    """
    connection_url = URL.create(
        drivername='postgresql',
        username=user or config.db_user,
        password=password or config.db_password,
        host=host or config.db_host,
        port=port or config.db_port,
        database=database or config.db_name
    )

    return create_engine(
        connection_url,
        echo=echo,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_pre_ping=True
    )


def _execute(conn, sql_text: str) -> int:
    # exec_driver_sql: inlined literals must not be parsed for bind parameters
    result = conn.exec_driver_sql(sql_text)
    return max(result.rowcount, 0)


def execute_raw_sql(engine: Engine, sql_text: str) -> int:
    """
    Execute a raw SQL statement in its own transaction.

    Args:
        engine: SQLAlchemy engine
        sql_text: Complete SQL text (e.g. output of generate_bulk_insert)

    Returns:
        Number of rows affected (0 when the driver does not report it)

    Raises:
        InvalidArgumentError: If sql_text is empty or blank
        BulkInsertExecutionError: If the database rejects the statement
    """
    if not sql_text or not sql_text.strip():
        raise InvalidArgumentError('sql_text')

    try:
        with engine.begin() as conn:
            return _execute(conn, sql_text)
    except SQLAlchemyError as e:
        logger.error(f"❌ Failed to execute SQL: {e}")
        raise BulkInsertExecutionError(f"Failed to execute SQL: {e}") from e


def bulk_insert_records(
    engine: Engine,
    records: Sequence[Any],
    table_name: str,
    chunk_size: Optional[int] = None
) -> int:
    """
    Insert a batch of records with one generated INSERT per chunk.

    All chunks run in a single transaction, so a failing chunk rolls back
    the whole batch.

    Args:
        engine: SQLAlchemy engine
        records: Record instances of one record type
        table_name: Qualified, already-quoted target table identifier
        chunk_size: Rows per statement (defaults to config BULK_INSERT_CHUNK_SIZE)

    Returns:
        Number of rows inserted (0 for an empty batch)

    Raises:
        InvalidArgumentError: If table_name is blank or chunk_size < 1
        BulkInsertExecutionError: If the database rejects a statement

    Example:
        >>> bulk_insert_records(engine, people, 'public."People"', chunk_size=500)
        1200
    """
    if table_name is None or not str(table_name).strip():
        raise InvalidArgumentError('table_name')

    chunk_size = chunk_size if chunk_size is not None else config.bulk_insert_chunk_size
    chunks = list(chunk_records(records, chunk_size))
    if not chunks:
        logger.info(f"No records to insert into {table_name}")
        return 0

    inserted = 0
    try:
        with engine.begin() as conn:
            for number, chunk in enumerate(chunks, start=1):
                inserted += _execute(conn, generate_bulk_insert(chunk, table_name))
                logger.debug(f"Chunk {number}/{len(chunks)} inserted into {table_name}")
    except SQLAlchemyError as e:
        logger.error(f"❌ Bulk insert into {table_name} failed: {e}")
        raise BulkInsertExecutionError(f"Bulk insert into {table_name} failed: {e}") from e

    logger.info(f"✅ Inserted {inserted} rows into {table_name} in {len(chunks)} statement(s)")
    return inserted


def fetch_records(engine: Engine, query: str, record_type: type) -> List[Any]:
    """
    Run a SELECT and build record instances from the returned rows.

    Result columns that do not match a field of record_type are ignored.

    Args:
        engine: SQLAlchemy engine
        query: SELECT statement text
        record_type: Dataclass or declarative model class to instantiate

    Returns:
        List of record_type instances

    Raises:
        BulkInsertExecutionError: If the query fails
    """
    attributes = {f.name: f.attribute for f in describe_record_type(record_type).fields}

    try:
        with engine.connect() as conn:
            rows = conn.exec_driver_sql(query).mappings().all()
    except SQLAlchemyError as e:
        logger.error(f"❌ Query failed: {e}")
        raise BulkInsertExecutionError(f"Query failed: {e}") from e

    return [
        record_type(**{attributes[key]: value for key, value in row.items() if key in attributes})
        for row in rows
    ]
