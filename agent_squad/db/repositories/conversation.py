"""Conversation repository for database operations."""

import duckdb
from typing import Optional, List
from .base import BaseRepository
from ..database_models.conversation import ConversationDO


class ConversationRepository(BaseRepository):
    """Repository for Conversation CRUD operations."""

    def create(self, conversation: ConversationDO) -> ConversationDO:
        """
        Create a new conversation record.

        Args:
            conversation: ConversationDO instance

        Returns:
            The stored conversation

        Raises:
            StoreError: If the insert fails
        """
        try:
            self.conn.execute("""
                INSERT INTO conversations (id, owner_id, title, created_at)
                VALUES (?, ?, ?, ?)
            """, [
                conversation.id,
                conversation.owner_id,
                conversation.title,
                conversation.created_at
            ])
            self.conn.commit()
        except duckdb.Error as e:
            raise self._fail("create conversation", e) from e

        self.logger.info(f"Created conversation record: {conversation.id}")
        return conversation

    def get(self, conversation_id: str) -> Optional[ConversationDO]:
        """
        Get conversation by ID.

        Args:
            conversation_id: Conversation ID

        Returns:
            ConversationDO instance or None
        """
        try:
            result = self.conn.execute("""
                SELECT id, owner_id, title, created_at
                FROM conversations
                WHERE id = ?
            """, [conversation_id]).fetchone()
        except duckdb.Error as e:
            raise self._fail(f"get conversation {conversation_id}", e) from e

        if result:
            return ConversationDO(
                id=result[0],
                owner_id=result[1],
                title=result[2],
                created_at=result[3]
            )
        return None

    def list_by_owner(self, owner_id: str) -> List[ConversationDO]:
        """
        List conversations for an owner, newest first.

        Args:
            owner_id: Owning user ID

        Returns:
            List of ConversationDO instances
        """
        try:
            results = self.conn.execute("""
                SELECT id, owner_id, title, created_at
                FROM conversations
                WHERE owner_id = ?
                ORDER BY created_at DESC
            """, [owner_id]).fetchall()
        except duckdb.Error as e:
            raise self._fail("list conversations", e) from e

        return [
            ConversationDO(
                id=row[0],
                owner_id=row[1],
                title=row[2],
                created_at=row[3]
            )
            for row in results
        ]
