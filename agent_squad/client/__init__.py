"""Client-side conversation sync."""

from .sync import (
    ConversationSync,
    TurnSubmitter,
    CoordinatorSubmitter,
    HttpTurnSubmitter,
    SEND_FAILED_NOTICE,
)

__all__ = [
    "ConversationSync",
    "TurnSubmitter",
    "CoordinatorSubmitter",
    "HttpTurnSubmitter",
    "SEND_FAILED_NOTICE",
]
