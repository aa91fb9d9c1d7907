"""Repository layer for data access."""

from .conversation import ConversationRepository
from .message import MessageRepository
from .workflow import WorkflowRepository

__all__ = ["ConversationRepository", "MessageRepository", "WorkflowRepository"]
