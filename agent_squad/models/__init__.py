"""Pydantic models for API request/response."""

from .turn import SubmitTurnRequest, SubmitTurnResponse
from .conversation import ConversationResponse, ConversationListResponse
from .message import MessageResponse, ConversationMessagesResponse
from .workflow import WorkflowStepResponse, WorkflowResponse, ConversationWorkflowResponse
from .persona import PersonaResponse, PersonaListResponse

__all__ = [
    "SubmitTurnRequest",
    "SubmitTurnResponse",
    "ConversationResponse",
    "ConversationListResponse",
    "MessageResponse",
    "ConversationMessagesResponse",
    "WorkflowStepResponse",
    "WorkflowResponse",
    "ConversationWorkflowResponse",
    "PersonaResponse",
    "PersonaListResponse",
]
