"""Message database model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class MessageDO:
    """Message data object - maps to messages table."""

    id: str
    conversation_id: str
    content: str
    sender: str
    persona_name: Optional[str] = None
    persona_avatar: Optional[str] = None
    persona_color: Optional[str] = None
    kind: str = "message"
    created_at: datetime = field(default_factory=datetime.utcnow)
    seq: Optional[int] = None  # insertion order, assigned by the database
