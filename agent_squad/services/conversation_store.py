"""Conversation store - durable transcript and workflow plus change notifications."""

import uuid
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from ..db import DatabaseConnection, ConversationRepository, MessageRepository, WorkflowRepository
from ..db.database_models import ConversationDO, MessageDO, WorkflowDO
from ..errors import StoreError
from ..workflow.steps import WorkflowStep
from ..utils.logger import get_app_logger
from .change_feed import ChangeFeed, ChangeCallback

SENDERS = ("user", "agent")
MESSAGE_KINDS = ("message", "code", "review", "test", "deployment")


class ConversationStore:
    """Facade over the repositories that also publishes changes."""

    def __init__(self, db: DatabaseConnection, change_feed: Optional[ChangeFeed] = None):
        self.db = db
        self.change_feed = change_feed or ChangeFeed()
        self.conversations = ConversationRepository(db.conn)
        self.messages = MessageRepository(db.conn)
        self.workflows = WorkflowRepository(db.conn)
        self.logger = get_app_logger()

    # === Conversations ===

    def insert_conversation(self, owner_id: str, title: str) -> ConversationDO:
        """Create a conversation with a fresh id."""
        conversation = ConversationDO(
            id=str(uuid.uuid4()),
            owner_id=owner_id,
            title=title,
            created_at=datetime.utcnow()
        )
        return self.conversations.create(conversation)

    def get_conversation(self, conversation_id: str) -> Optional[ConversationDO]:
        return self.conversations.get(conversation_id)

    def list_conversations(self, owner_id: str) -> List[ConversationDO]:
        return self.conversations.list_by_owner(owner_id)

    # === Messages ===

    async def insert_message(
        self,
        conversation_id: str,
        content: str,
        sender: str,
        persona_name: Optional[str] = None,
        persona_avatar: Optional[str] = None,
        persona_color: Optional[str] = None,
        kind: Optional[str] = None
    ) -> MessageDO:
        """
        Append a message and notify subscribers.

        The store assigns id and created_at.

        Raises:
            StoreError: On an unknown sender or kind, or a failed insert
        """
        if sender not in SENDERS:
            raise StoreError(f"Invalid sender: {sender}")
        kind = kind or "message"
        if kind not in MESSAGE_KINDS:
            raise StoreError(f"Invalid message kind: {kind}")

        message = MessageDO(
            id=str(uuid.uuid4()),
            conversation_id=conversation_id,
            content=content,
            sender=sender,
            persona_name=persona_name,
            persona_avatar=persona_avatar,
            persona_color=persona_color,
            kind=kind,
            created_at=datetime.utcnow()
        )
        self.messages.add(message)
        await self.change_feed.publish_message(conversation_id, message)
        return message

    def list_messages(self, conversation_id: str) -> List[MessageDO]:
        """Transcript in ascending creation order."""
        return self.messages.get_by_conversation(conversation_id)

    # === Workflow ===

    def get_workflow(self, conversation_id: str) -> Optional[WorkflowDO]:
        """Workflow of a conversation, or None if it has none yet."""
        return self.workflows.get_by_conversation(conversation_id)

    async def insert_workflow(
        self,
        conversation_id: str,
        steps: Sequence[WorkflowStep],
        current_step: int,
        progress: int,
        status: str
    ) -> WorkflowDO:
        """Create the workflow record and notify subscribers."""
        workflow = WorkflowDO(
            id=str(uuid.uuid4()),
            conversation_id=conversation_id,
            steps=list(steps),
            current_step=current_step,
            progress=progress,
            status=status,
            updated_at=datetime.utcnow()
        )
        self.workflows.create(workflow)
        await self.change_feed.publish_workflow(conversation_id, workflow)
        return workflow

    async def update_workflow(self, conversation_id: str, **fields) -> WorkflowDO:
        """
        Apply a partial update in one write and notify subscribers.

        Returns:
            The workflow as stored after the update

        Raises:
            StoreError: If the write fails or there is no workflow to update
        """
        if not self.workflows.update(conversation_id, fields):
            raise StoreError(f"No workflow to update for conversation: {conversation_id}")

        workflow = self.workflows.get_by_conversation(conversation_id)
        if workflow is None:
            raise StoreError(f"Workflow vanished after update for conversation: {conversation_id}")
        await self.change_feed.publish_workflow(conversation_id, workflow)
        return workflow

    # === Subscriptions ===

    def subscribe(
        self,
        conversation_id: str,
        on_message_inserted: Optional[ChangeCallback] = None,
        on_workflow_updated: Optional[ChangeCallback] = None
    ) -> Callable[[], None]:
        """Listen for changes on one conversation. Returns an unsubscribe function."""
        return self.change_feed.subscribe(conversation_id, on_message_inserted, on_workflow_updated)
