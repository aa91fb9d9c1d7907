"""Tests for database connection and schema management."""

from pathlib import Path

from agent_squad.db.connection import DatabaseConnection


class TestDatabaseConnection:
    """Tests for DatabaseConnection."""

    def test_connect_creates_file(self, tmp_path):
        """After connecting, the db file should exist."""
        db_path = str(tmp_path / "nested" / "test.db")
        conn = DatabaseConnection(db_path)
        assert Path(db_path).exists()
        conn.close()

    def test_tables_exist(self, tmp_path):
        """All tables should be queryable after init."""
        conn = DatabaseConnection(str(tmp_path / "test.db"))
        for table in ("conversations", "messages", "agent_workflows"):
            assert conn.conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0] == 0
        conn.close()

    def test_schema_indexes_exist(self, tmp_path):
        """Expected indexes should exist."""
        conn = DatabaseConnection(str(tmp_path / "test.db"))
        index_names = [r[0] for r in conn.conn.execute("SELECT index_name FROM duckdb_indexes()").fetchall()]
        assert "idx_messages_conversation" in index_names
        assert "idx_workflows_conversation" in index_names
        conn.close()

    def test_init_schema_idempotent(self, tmp_path):
        """Re-running schema init should not raise."""
        conn = DatabaseConnection(str(tmp_path / "test.db"))
        conn._init_schema()
        conn.close()

    def test_in_memory(self):
        """':memory:' databases need no directory."""
        with DatabaseConnection(":memory:") as conn:
            assert conn.conn is not None
        assert conn.conn is None
