"""Workflow API models."""

from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


class WorkflowStepResponse(BaseModel):
    """One workflow step, serialized with the client's camelCase keys."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Step ordinal")
    agent_name: str = Field(alias="agentName", description="Owning persona")
    title: str = Field(description="Step title")
    status: Literal["pending", "in-progress", "completed", "error"] = Field(description="Step status")
    description: str = Field(description="What the step does")
    estimated_time: Optional[str] = Field(None, alias="estimatedTime", description="Estimated duration")


class WorkflowResponse(BaseModel):
    """Response model for a conversation's workflow."""

    id: str = Field(description="Workflow ID")
    conversation_id: str = Field(description="Conversation ID")
    steps: List[WorkflowStepResponse] = Field(description="Ordered steps")
    current_step: int = Field(description="Index of the active step")
    progress: int = Field(description="Progress percentage", ge=0, le=100)
    status: str = Field(description="Overall status")

    @classmethod
    def from_record(cls, workflow) -> "WorkflowResponse":
        return cls(
            id=workflow.id,
            conversation_id=workflow.conversation_id,
            steps=[WorkflowStepResponse(**step.to_dict()) for step in workflow.steps],
            current_step=workflow.current_step,
            progress=workflow.progress,
            status=workflow.status
        )


class ConversationWorkflowResponse(BaseModel):
    """Workflow lookup result; workflow is null when none exists yet."""

    conversation_id: str = Field(description="Conversation ID")
    workflow: Optional[WorkflowResponse] = Field(None, description="Workflow, if any")
