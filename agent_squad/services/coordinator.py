"""Coordinator - entry point for a user turn."""

from dataclasses import dataclass
from typing import Optional

from ..agents import Persona, PersonaRegistry, persona_registry, REQUIREMENTS, BUILD
from ..errors import (
    AgentSquadError,
    ConversationNotFound,
    InvalidTurn,
    ProviderError,
    ProviderUnavailable,
    StoreError,
    TurnFailed,
)
from ..llm import LLMGateway
from ..workflow import WorkflowStateMachine, progress_for
from ..utils.logger import get_app_logger, get_conversation_logger
from .background import BackgroundTaskRunner
from .conversation_store import ConversationStore


BUILD_PROMPT_TEMPLATE = (
    'Based on this requirement: "{utterance}", generate React TypeScript code '
    'that implements the requested functionality.'
)


@dataclass
class TurnResult:
    """Acknowledgement of a processed turn."""

    conversation_id: str
    created: bool = False


def make_title(utterance: str, max_length: int = 50) -> str:
    """Conversation title from the first utterance."""
    return utterance[:max_length] + "..."


def build_context(messages) -> str:
    """Flatten a transcript into the prompt context."""
    return "\n".join(f"{m.sender}: {m.content}" for m in messages)


class Coordinator:
    """Runs the persona pipeline for each user utterance."""

    def __init__(
        self,
        store: ConversationStore,
        gateway: LLMGateway,
        runner: Optional[BackgroundTaskRunner] = None,
        registry: PersonaRegistry = persona_registry,
        build_turn_delay: float = 3.0,
        title_max_length: int = 50
    ):
        """
        Initialize the coordinator.

        Args:
            store: Conversation store
            gateway: LLM gateway
            runner: Runner for the detached build turn
            registry: Persona registry
            build_turn_delay: Seconds between the response and the build turn
            title_max_length: Characters of the first utterance kept in the title
        """
        self.store = store
        self.gateway = gateway
        self.runner = runner or BackgroundTaskRunner()
        self.registry = registry
        self.workflow = WorkflowStateMachine(store)
        self.build_turn_delay = build_turn_delay
        self.title_max_length = title_max_length
        self.logger = get_app_logger()

    async def handle_user_turn(
        self,
        utterance: str,
        conversation_id: Optional[str] = None,
        user_id: Optional[str] = None
    ) -> TurnResult:
        """
        Process one user utterance.

        Writes already committed are not rolled back when a later step fails.

        Args:
            utterance: User's message
            conversation_id: Existing conversation, or None to start one
            user_id: Owner of a new conversation

        Returns:
            TurnResult with the conversation id

        Raises:
            InvalidTurn: On an empty utterance or missing user id
            TurnFailed: On any store or provider failure, with the cause chained
        """
        if not utterance or not utterance.strip():
            raise InvalidTurn("Message must not be empty")
        if not user_id:
            raise InvalidTurn("userId is required")

        try:
            if conversation_id:
                return await self._continue_conversation(conversation_id, utterance)
            return await self._start_conversation(utterance, user_id)
        except (ProviderUnavailable, ProviderError, StoreError, ConversationNotFound) as e:
            self.logger.error(f"[Coordinator] turn failed ({type(e).__name__}): {e}")
            raise TurnFailed(str(e)) from e

    async def _start_conversation(self, utterance: str, user_id: str) -> TurnResult:
        conversation = self.store.insert_conversation(
            owner_id=user_id,
            title=make_title(utterance, self.title_max_length)
        )
        conversation_id = conversation.id
        get_conversation_logger(conversation_id).info(f"[Coordinator] new conversation for user {user_id}")

        await self.store.insert_message(conversation_id, utterance, "user")
        await self.workflow.initialize(conversation_id)

        requirements = self.registry.get_at(REQUIREMENTS)
        try:
            reply = await self.gateway.generate(requirements.instructions, utterance)
        except (ProviderUnavailable, ProviderError):
            await self._mark_failed(conversation_id)
            raise
        await self._append_reply(conversation_id, requirements, reply)

        self.runner.schedule(
            name=f"build-turn-{conversation_id}",
            work=lambda: self._run_build_turn(conversation_id, utterance),
            on_error=lambda exc: self._on_build_turn_failed(conversation_id, exc),
            delay=self.build_turn_delay
        )

        return TurnResult(conversation_id=conversation_id, created=True)

    async def _continue_conversation(self, conversation_id: str, utterance: str) -> TurnResult:
        if self.store.get_conversation(conversation_id) is None:
            raise ConversationNotFound(conversation_id)

        await self.store.insert_message(conversation_id, utterance, "user")

        # The transcript already ends with this utterance; it is repeated as the latest turn
        context = build_context(self.store.list_messages(conversation_id))
        requirements = self.registry.get_at(REQUIREMENTS)
        reply = await self.gateway.generate(requirements.instructions, f"{context}\n\nUser: {utterance}")
        await self._append_reply(conversation_id, requirements, reply)

        return TurnResult(conversation_id=conversation_id)

    async def _run_build_turn(self, conversation_id: str, utterance: str) -> None:
        builder = self.registry.get_at(BUILD)
        reply = await self.gateway.generate(
            builder.instructions,
            BUILD_PROMPT_TEMPLATE.format(utterance=utterance)
        )
        await self._append_reply(conversation_id, builder, reply)
        await self.workflow.advance(conversation_id, BUILD, progress_for(BUILD))

    async def _on_build_turn_failed(self, conversation_id: str, error: BaseException) -> None:
        get_conversation_logger(conversation_id).error(f"[Coordinator] build turn failed: {error}")
        await self._mark_failed(conversation_id)

    async def _mark_failed(self, conversation_id: str) -> None:
        """Put the in-flight step into error; a failure here is only logged."""
        try:
            await self.workflow.fail(conversation_id)
        except AgentSquadError as e:
            get_conversation_logger(conversation_id).error(f"[Coordinator] could not mark workflow error: {e}")

    async def _append_reply(self, conversation_id: str, persona: Persona, reply: str):
        return await self.store.insert_message(
            conversation_id,
            reply,
            "agent",
            persona_name=persona.name,
            persona_avatar=persona.avatar,
            persona_color=persona.color,
            kind=persona.message_kind
        )
