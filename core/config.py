"""
================================================
Configuration management for bulk INSERT loading.
================================================

Loads all configuration from environment variables (.env file) and provides
a centralized Config singleton for application-wide access.

The configuration covers:
- Database connection settings used by the SQL executor helpers
- Bulk INSERT batching (rows per generated statement)
- Logging level and optional log file

Example:
    >>> from core.config import config
    >>>
    >>> # Database connection
    >>> engine_url = config.get_connection_string()
    >>>
    >>> # Rows per generated INSERT statement
    >>> print(f"Chunk size: {config.bulk_insert_chunk_size}")
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path)


@dataclass
class DatabaseConfig:
    """Database configuration settings.

    Attributes:
        host: PostgreSQL server hostname or IP address
        port: PostgreSQL server port number
        user: Database username
        password: Database password
        database: Target database name
    """

    host: str
    port: int
    user: str
    password: str
    database: str

    def get_connection_string(self) -> str:
        """Get PostgreSQL connection string.

        Returns:
            SQLAlchemy-compatible PostgreSQL connection string
        """
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"


@dataclass
class BulkInsertConfig:
    """Bulk INSERT batching settings.

    Attributes:
        chunk_size: Maximum number of rows rendered into one INSERT statement
    """

    chunk_size: int = 1000


@dataclass
class LoggingConfig:
    """Logging settings.

    Attributes:
        level: Logging level name (DEBUG/INFO/WARNING/ERROR/CRITICAL)
        log_file: Optional log file name written under logs/
    """

    level: str = 'INFO'
    log_file: Optional[str] = None


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"Environment variable {name} must be an integer, got '{raw}'") from e


class Config:
    """Centralized configuration manager.

    Provides access to all configuration settings loaded from environment
    variables (.env file).

    Attributes:
        db: DatabaseConfig instance with database connection settings
        bulk_insert: BulkInsertConfig instance with batching settings
        logging: LoggingConfig instance with logging settings

    Example:
        >>> config = Config()
        >>> conn_str = config.get_connection_string()
        >>> print(f"Connecting to {config.db_host}:{config.db_port}")
    """

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.db = DatabaseConfig(
            host=os.getenv('POSTGRES_HOST', 'localhost'),
            port=_int_from_env('POSTGRES_PORT', 5432),
            user=os.getenv('POSTGRES_USER', 'postgres'),
            password=os.getenv('POSTGRES_PASSWORD', ''),
            database=os.getenv('POSTGRES_DB', 'postgres')
        )

        self.bulk_insert = BulkInsertConfig(
            chunk_size=_int_from_env('BULK_INSERT_CHUNK_SIZE', 1000)
        )

        self.logging = LoggingConfig(
            level=os.getenv('LOG_LEVEL', 'INFO'),
            log_file=os.getenv('LOG_FILE') or None
        )

    @property
    def db_host(self) -> str:
        """Get database server hostname."""
        return self.db.host

    @property
    def db_port(self) -> int:
        """Get database server port number."""
        return self.db.port

    @property
    def db_user(self) -> str:
        """Get database username."""
        return self.db.user

    @property
    def db_password(self) -> str:
        """Get database password."""
        return self.db.password

    @property
    def db_name(self) -> str:
        """Get target database name."""
        return self.db.database

    @property
    def bulk_insert_chunk_size(self) -> int:
        """Get maximum rows per generated INSERT statement."""
        return self.bulk_insert.chunk_size

    @property
    def log_level(self) -> str:
        """Get logging level name."""
        return self.logging.level

    def get_connection_string(self) -> str:
        """Get database connection string.

        Returns:
            SQLAlchemy-compatible PostgreSQL connection string
        """
        return self.db.get_connection_string()


# Global configuration instance
config = Config()
