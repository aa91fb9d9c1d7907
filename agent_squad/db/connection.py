"""Database connection and schema management."""

import duckdb
from typing import Optional
from pathlib import Path
from ..utils.logger import get_app_logger


class DatabaseConnection:
    """DuckDB connection manager."""

    def __init__(self, db_path: str = "./data/agent_squad.db"):
        """
        Initialize database connection.

        Args:
            db_path: Path to DuckDB database file, or ":memory:"
        """
        self.db_path = db_path
        self.logger = get_app_logger()
        self.conn: Optional[duckdb.DuckDBPyConnection] = None

        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        self._connect()
        self._init_schema()

    def _connect(self):
        """Connect to DuckDB database."""
        try:
            self.conn = duckdb.connect(self.db_path)
            self.logger.info(f"Connected to DuckDB at {self.db_path}")
        except Exception as e:
            self.logger.error(f"Failed to connect to DuckDB: {e}")
            raise

    def _init_schema(self):
        """Initialize database schema."""
        try:
            self.conn.execute("""
                CREATE TABLE IF NOT EXISTS conversations (
                    id VARCHAR PRIMARY KEY,
                    owner_id VARCHAR NOT NULL,
                    title VARCHAR NOT NULL,
                    created_at TIMESTAMP NOT NULL
                )
            """)

            # Append-only transcript; seq breaks ties between equal timestamps
            self.conn.execute("CREATE SEQUENCE IF NOT EXISTS messages_seq START 1")
            self.conn.execute("""
                CREATE TABLE IF NOT EXISTS messages (
                    id VARCHAR PRIMARY KEY,
                    seq BIGINT NOT NULL,
                    conversation_id VARCHAR NOT NULL,
                    content VARCHAR NOT NULL,
                    sender VARCHAR NOT NULL,
                    persona_name VARCHAR,
                    persona_avatar VARCHAR,
                    persona_color VARCHAR,
                    kind VARCHAR NOT NULL DEFAULT 'message',
                    created_at TIMESTAMP NOT NULL
                )
            """)

            # One workflow per conversation
            self.conn.execute("""
                CREATE TABLE IF NOT EXISTS agent_workflows (
                    id VARCHAR PRIMARY KEY,
                    conversation_id VARCHAR NOT NULL,
                    steps JSON NOT NULL,
                    current_step INTEGER NOT NULL,
                    progress INTEGER NOT NULL,
                    status VARCHAR NOT NULL,
                    updated_at TIMESTAMP NOT NULL
                )
            """)

            self.conn.execute("CREATE INDEX IF NOT EXISTS idx_conversations_owner ON conversations(owner_id)")
            self.conn.execute("CREATE INDEX IF NOT EXISTS idx_messages_conversation ON messages(conversation_id)")
            self.conn.execute("CREATE INDEX IF NOT EXISTS idx_messages_created ON messages(created_at)")
            self.conn.execute(
                "CREATE UNIQUE INDEX IF NOT EXISTS idx_workflows_conversation ON agent_workflows(conversation_id)"
            )

            self.logger.info("Database schema initialized successfully")

        except Exception as e:
            self.logger.error(f"Failed to initialize database schema: {e}")
            raise

    def close(self):
        """Close database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None
            self.logger.info("Database connection closed")

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
