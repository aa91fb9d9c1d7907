"""Base repository class."""

import duckdb
from ...errors import StoreError
from ...utils.logger import get_app_logger


class BaseRepository:
    """Base class for all repositories."""

    def __init__(self, conn: duckdb.DuckDBPyConnection):
        """
        Initialize repository with database connection.

        Args:
            conn: DuckDB connection instance
        """
        self.conn = conn
        self.logger = get_app_logger()

    def _fail(self, action: str, error: Exception) -> StoreError:
        """Log a database failure and wrap it as StoreError."""
        self.logger.error(f"Failed to {action}: {error}")
        return StoreError(f"Failed to {action}: {error}")
