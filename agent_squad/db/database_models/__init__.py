"""Database models (Data Objects) - map to database tables."""

from .conversation import ConversationDO
from .message import MessageDO
from .workflow import WorkflowDO

__all__ = ["ConversationDO", "MessageDO", "WorkflowDO"]
