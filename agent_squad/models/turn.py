"""Turn submission API models."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class SubmitTurnRequest(BaseModel):
    """Request model for submitting a user utterance."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(description="User utterance", min_length=1)
    conversation_id: Optional[str] = Field(
        None, alias="conversationId", description="Existing conversation ID; omit to start one"
    )
    user_id: str = Field(alias="userId", description="Submitting user ID", min_length=1)


class SubmitTurnResponse(BaseModel):
    """Response model for a processed turn."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = Field(default=True, description="Whether the turn was processed")
    conversation_id: str = Field(alias="conversationId", description="Conversation ID")
