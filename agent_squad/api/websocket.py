"""WebSocket API for real-time conversation changes."""

import json
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from ..models.message import MessageResponse
from ..models.workflow import WorkflowResponse
from ..services import ConversationStore
from ..utils.logger import get_app_logger

router = APIRouter(tags=["websocket"])

# Conversation store (set by main.py)
store: ConversationStore = None
logger = get_app_logger()


def _message_event(message) -> dict:
    return {
        "type": "message",
        "message": MessageResponse.from_record(message).model_dump(mode="json", by_alias=True)
    }


def _workflow_event(workflow) -> dict:
    return {
        "type": "workflow",
        "workflow": WorkflowResponse.from_record(workflow).model_dump(mode="json", by_alias=True)
    }


@router.websocket("/ws/conversations/{conversation_id}")
async def conversation_feed(websocket: WebSocket, conversation_id: str):
    """
    Stream message inserts and workflow updates for one conversation.

    On connect the client receives a snapshot, then one event per change.
    Events may repeat; clients dedupe messages by id.

    Args:
        websocket: WebSocket connection
        conversation_id: Conversation to follow
    """
    await websocket.accept()
    logger.info(f"WebSocket connection accepted for conversation: {conversation_id}")

    if store is None or store.get_conversation(conversation_id) is None:
        await websocket.send_json({
            "type": "error",
            "content": f"Conversation not found: {conversation_id}"
        })
        await websocket.close()
        return

    async def on_message(message):
        await websocket.send_json(_message_event(message))

    async def on_workflow(workflow):
        await websocket.send_json(_workflow_event(workflow))

    unsubscribe = store.subscribe(conversation_id, on_message, on_workflow)

    try:
        workflow = store.get_workflow(conversation_id)
        await websocket.send_json({
            "type": "snapshot",
            "conversation_id": conversation_id,
            "messages": [
                MessageResponse.from_record(m).model_dump(mode="json", by_alias=True)
                for m in store.list_messages(conversation_id)
            ],
            "workflow": (
                WorkflowResponse.from_record(workflow).model_dump(mode="json", by_alias=True)
                if workflow else None
            )
        })

        while True:
            data = await websocket.receive_text()
            try:
                frame = json.loads(data)
            except json.JSONDecodeError:
                await websocket.send_json({
                    "type": "error",
                    "content": "Invalid JSON message"
                })
                continue

            if isinstance(frame, dict) and frame.get("type") == "ping":
                await websocket.send_json({"type": "pong"})
            else:
                await websocket.send_json({
                    "type": "error",
                    "content": "Unknown message type"
                })

    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected for conversation: {conversation_id}")

    except Exception as e:
        logger.error(f"WebSocket error for conversation {conversation_id}: {e}")

    finally:
        unsubscribe()
        logger.info(f"WebSocket connection closed for conversation: {conversation_id}")
