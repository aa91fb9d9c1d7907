"""Message API models."""

from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Response model for a single transcript message."""

    id: str = Field(description="Message ID")
    conversation_id: str = Field(description="Conversation ID")
    content: str = Field(description="Message text")
    sender: Literal["user", "agent"] = Field(description="Who sent the message")
    agent_name: Optional[str] = Field(None, description="Persona display name")
    agent_avatar: Optional[str] = Field(None, description="Persona avatar glyph")
    agent_color: Optional[str] = Field(None, description="Persona color")
    message_type: Literal["message", "code", "review", "test", "deployment"] = Field(
        "message", description="Message kind"
    )
    created_at: datetime = Field(description="Creation timestamp")

    @classmethod
    def from_record(cls, message) -> "MessageResponse":
        return cls(
            id=message.id,
            conversation_id=message.conversation_id,
            content=message.content,
            sender=message.sender,
            agent_name=message.persona_name,
            agent_avatar=message.persona_avatar,
            agent_color=message.persona_color,
            message_type=message.kind,
            created_at=message.created_at
        )


class ConversationMessagesResponse(BaseModel):
    """Response model for conversation messages."""

    conversation_id: str = Field(description="Conversation ID")
    messages: List[MessageResponse] = Field(description="Messages in creation order")
    total: int = Field(description="Total number of messages")
