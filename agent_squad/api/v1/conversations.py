"""Conversation REST API routes - V1."""

from fastapi import APIRouter, HTTPException, Depends, Query

from ...models.conversation import ConversationResponse, ConversationListResponse
from ...models.message import MessageResponse, ConversationMessagesResponse
from ...models.workflow import WorkflowResponse, ConversationWorkflowResponse
from ...db.database_models import ConversationDO
from ...errors import StoreError
from ...services import ConversationStore

router = APIRouter(prefix="/api/v1/conversations", tags=["Conversations"])

# Conversation store (set by main.py)
store: ConversationStore = None


def get_store() -> ConversationStore:
    """Dependency to get the conversation store."""
    if store is None:
        raise HTTPException(status_code=500, detail="Conversation store not initialized")
    return store


def _to_response(conv: ConversationDO) -> ConversationResponse:
    """Convert ConversationDO to ConversationResponse."""
    return ConversationResponse(
        id=conv.id,
        owner_id=conv.owner_id,
        title=conv.title,
        created_at=conv.created_at
    )


def _require_conversation(repo: ConversationStore, conversation_id: str) -> ConversationDO:
    try:
        conversation = repo.get_conversation(conversation_id)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not conversation:
        raise HTTPException(status_code=404, detail=f"Conversation not found: {conversation_id}")
    return conversation


@router.get("", response_model=ConversationListResponse)
async def list_conversations(
    owner_id: str = Query(..., description="Owning user ID"),
    repo: ConversationStore = Depends(get_store)
):
    """List a user's conversations, newest first."""
    try:
        conversations = repo.list_conversations(owner_id)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return ConversationListResponse(
        conversations=[_to_response(c) for c in conversations],
        total=len(conversations)
    )


@router.get("/{conversation_id}", response_model=ConversationResponse)
async def get_conversation(
    conversation_id: str,
    repo: ConversationStore = Depends(get_store)
):
    """Get conversation details."""
    return _to_response(_require_conversation(repo, conversation_id))


@router.get("/{conversation_id}/messages", response_model=ConversationMessagesResponse)
async def get_conversation_messages(
    conversation_id: str,
    repo: ConversationStore = Depends(get_store)
):
    """Get the transcript in creation order."""
    _require_conversation(repo, conversation_id)
    try:
        messages = repo.list_messages(conversation_id)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return ConversationMessagesResponse(
        conversation_id=conversation_id,
        messages=[MessageResponse.from_record(m) for m in messages],
        total=len(messages)
    )


@router.get("/{conversation_id}/workflow", response_model=ConversationWorkflowResponse)
async def get_conversation_workflow(
    conversation_id: str,
    repo: ConversationStore = Depends(get_store)
):
    """Get the workflow; null when the conversation has none yet."""
    _require_conversation(repo, conversation_id)
    try:
        workflow = repo.get_workflow(conversation_id)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return ConversationWorkflowResponse(
        conversation_id=conversation_id,
        workflow=WorkflowResponse.from_record(workflow) if workflow else None
    )
