"""Client Sync Layer - local mirror of one conversation."""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional

import httpx

from ..services.conversation_store import ConversationStore
from ..services.coordinator import Coordinator
from ..utils.logger import get_app_logger

SEND_FAILED_NOTICE = "Could not send message"


def _transcript_order(message):
    """Sort key matching the store: creation time, then insertion sequence, then id."""
    seq = message.seq if message.seq is not None else -1
    return message.created_at, seq, message.id


class TurnSubmitter(ABC):
    """Sends an utterance to the coordinator and returns the conversation id."""

    @abstractmethod
    async def submit_turn(self, utterance: str, conversation_id: Optional[str], user_id: str) -> str:
        pass


class CoordinatorSubmitter(TurnSubmitter):
    """Submits turns to an in-process coordinator."""

    def __init__(self, coordinator: Coordinator):
        self.coordinator = coordinator

    async def submit_turn(self, utterance: str, conversation_id: Optional[str], user_id: str) -> str:
        result = await self.coordinator.handle_user_turn(
            utterance, conversation_id=conversation_id, user_id=user_id
        )
        return result.conversation_id


class HttpTurnSubmitter(TurnSubmitter):
    """Submits turns to the HTTP API."""

    def __init__(self, client: httpx.AsyncClient, path: str = "/api/v1/agent-coordinator"):
        self.client = client
        self.path = path

    async def submit_turn(self, utterance: str, conversation_id: Optional[str], user_id: str) -> str:
        response = await self.client.post(self.path, json={
            "message": utterance,
            "conversationId": conversation_id,
            "userId": user_id
        })
        response.raise_for_status()
        return response.json().get("conversationId") or conversation_id


class ConversationSync:
    """
    Mirrors the messages and workflow of the active conversation.

    State is refreshed by a full reload when the active conversation
    changes, and by change notifications afterwards. Notifications may
    repeat or arrive out of order; messages are deduplicated by id and kept
    in creation order.
    """

    def __init__(self, store: ConversationStore, submitter: TurnSubmitter, user_id: Optional[str] = None):
        self.store = store
        self.submitter = submitter
        self.user_id = user_id
        self.logger = get_app_logger()

        self.messages: List = []
        self.workflow = None
        self.conversation_id: Optional[str] = None
        self.is_loading = False
        self.last_error: Optional[str] = None

        self._message_ids = set()
        self._unsubscribe: Optional[Callable[[], None]] = None

    def set_conversation_id(self, conversation_id: Optional[str]) -> None:
        """Switch the active conversation and reload its state."""
        self._drop_subscription()
        self.conversation_id = conversation_id
        self.messages = []
        self._message_ids = set()
        self.workflow = None

        if not conversation_id:
            return

        self._unsubscribe = self.store.subscribe(
            conversation_id,
            on_message_inserted=self.on_message_inserted,
            on_workflow_updated=self.on_workflow_updated
        )
        self.reload()

    def reload(self) -> None:
        """Full reload of messages and workflow for the active conversation."""
        if not self.conversation_id:
            return
        for message in self.store.list_messages(self.conversation_id):
            self.on_message_inserted(message)
        workflow = self.store.get_workflow(self.conversation_id)
        if workflow is not None:
            self.workflow = workflow

    def on_message_inserted(self, message) -> None:
        """Add a message unless it is already mirrored."""
        if message.conversation_id != self.conversation_id or message.id in self._message_ids:
            return
        self._message_ids.add(message.id)
        self.messages.append(message)
        self.messages.sort(key=_transcript_order)

    def on_workflow_updated(self, workflow) -> None:
        """Replace the mirrored workflow wholesale."""
        if workflow.conversation_id != self.conversation_id:
            return
        self.workflow = workflow

    async def send_message(self, content: str) -> bool:
        """
        Submit an utterance.

        Adopts the returned conversation id on the first success. On failure
        the transcript is left as it is and last_error is set.

        Returns:
            True if the turn was accepted
        """
        if not self.user_id:
            return False

        self.is_loading = True
        self.last_error = None
        try:
            conversation_id = await self.submitter.submit_turn(content, self.conversation_id, self.user_id)
            if not self.conversation_id and conversation_id:
                self.set_conversation_id(conversation_id)
            return True
        except Exception as e:
            self.logger.error(f"Error sending message: {e}")
            self.last_error = SEND_FAILED_NOTICE
            return False
        finally:
            self.is_loading = False

    def close(self) -> None:
        """Stop listening for changes."""
        self._drop_subscription()

    def _drop_subscription(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
