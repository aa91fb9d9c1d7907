"""Database package - connection, models, and repositories."""

from .connection import DatabaseConnection
from .repositories.conversation import ConversationRepository
from .repositories.message import MessageRepository
from .repositories.workflow import WorkflowRepository

__all__ = [
    "DatabaseConnection",
    "ConversationRepository",
    "MessageRepository",
    "WorkflowRepository",
]
