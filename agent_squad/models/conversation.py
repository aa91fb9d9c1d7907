"""Conversation API models."""

from datetime import datetime
from typing import List
from pydantic import BaseModel, Field


class ConversationResponse(BaseModel):
    """Response model for conversation information."""

    id: str = Field(description="Conversation ID")
    owner_id: str = Field(description="Owning user ID")
    title: str = Field(description="Title derived from the first utterance")
    created_at: datetime = Field(description="Creation timestamp")


class ConversationListResponse(BaseModel):
    """Response model for listing conversations."""

    conversations: List[ConversationResponse] = Field(description="List of conversations")
    total: int = Field(description="Total number of conversations")
