"""Message repository for database operations."""

import duckdb
from typing import List
from .base import BaseRepository
from ..database_models.message import MessageDO


class MessageRepository(BaseRepository):
    """Repository for the append-only message log."""

    def add(self, message: MessageDO) -> MessageDO:
        """
        Append a message.

        Args:
            message: MessageDO instance

        Returns:
            The stored message

        Raises:
            StoreError: If the insert fails
        """
        try:
            row = self.conn.execute("""
                INSERT INTO messages (
                    id, seq, conversation_id, content, sender,
                    persona_name, persona_avatar, persona_color, kind, created_at
                )
                VALUES (?, nextval('messages_seq'), ?, ?, ?, ?, ?, ?, ?, ?)
                RETURNING seq
            """, [
                message.id,
                message.conversation_id,
                message.content,
                message.sender,
                message.persona_name,
                message.persona_avatar,
                message.persona_color,
                message.kind,
                message.created_at
            ]).fetchone()
            self.conn.commit()
        except duckdb.Error as e:
            raise self._fail("add message", e) from e

        message.seq = row[0]
        self.logger.debug(f"Added message {message.id} to conversation {message.conversation_id}")
        return message

    def get_by_conversation(self, conversation_id: str) -> List[MessageDO]:
        """
        Get the full transcript of a conversation.

        Args:
            conversation_id: Conversation ID

        Returns:
            List of MessageDO instances (chronological order)
        """
        try:
            results = self.conn.execute("""
                SELECT id, conversation_id, content, sender,
                       persona_name, persona_avatar, persona_color, kind, created_at, seq
                FROM messages
                WHERE conversation_id = ?
                ORDER BY created_at ASC, seq ASC
            """, [conversation_id]).fetchall()
        except duckdb.Error as e:
            raise self._fail("get conversation messages", e) from e

        return [
            MessageDO(
                id=row[0],
                conversation_id=row[1],
                content=row[2],
                sender=row[3],
                persona_name=row[4],
                persona_avatar=row[5],
                persona_color=row[6],
                kind=row[7] or "message",
                created_at=row[8],
                seq=row[9]
            )
            for row in results
        ]
