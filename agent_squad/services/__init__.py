"""Services package."""

from .change_feed import ChangeFeed
from .conversation_store import ConversationStore
from .background import BackgroundTaskRunner
from .coordinator import Coordinator, TurnResult

__all__ = [
    "ChangeFeed",
    "ConversationStore",
    "BackgroundTaskRunner",
    "Coordinator",
    "TurnResult",
]
