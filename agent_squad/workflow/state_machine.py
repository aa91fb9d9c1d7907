"""Workflow State Machine - the only writer of step, progress and status."""

from typing import TYPE_CHECKING, Optional

from ..errors import StoreError, WorkflowNotFound
from ..utils.logger import get_app_logger
from .steps import (
    IN_PROGRESS,
    COMPLETED,
    ERROR,
    advance_steps,
    initial_steps,
    mark_step_error,
    progress_for,
)

if TYPE_CHECKING:
    from ..services.conversation_store import ConversationStore
    from ..db.database_models import WorkflowDO


class WorkflowStateMachine:
    """
    Drives the fixed five-step workflow of a conversation.

    Progress follows a fixed schedule of 20% per step rather than any
    measurement of real work.
    """

    def __init__(self, store: "ConversationStore"):
        self.store = store
        self.logger = get_app_logger()

    async def initialize(self, conversation_id: str) -> "WorkflowDO":
        """
        Create the workflow for a new conversation.

        Idempotent: an existing workflow is returned untouched.

        Args:
            conversation_id: Conversation ID

        Returns:
            The conversation's workflow
        """
        existing = self.store.get_workflow(conversation_id)
        if existing is not None:
            self.logger.info(f"[Workflow] already initialized for {conversation_id}, skipping")
            return existing

        workflow = await self.store.insert_workflow(
            conversation_id,
            steps=initial_steps(),
            current_step=0,
            progress=progress_for(0),
            status=IN_PROGRESS
        )
        self.logger.info(f"[Workflow] initialized for {conversation_id}")
        return workflow

    async def advance(self, conversation_id: str, to_index: int,
                      new_progress: Optional[int] = None) -> "WorkflowDO":
        """
        Move the workflow to ``to_index`` in a single write.

        An index past the last step completes the workflow.

        Args:
            conversation_id: Conversation ID
            to_index: Step index to make active
            new_progress: Progress value; defaults to the fixed schedule

        Raises:
            WorkflowNotFound: If the conversation has no workflow
            ValueError: If to_index is negative
        """
        if to_index < 0:
            raise ValueError(f"Step index must be non-negative, got {to_index}")

        workflow = self.store.get_workflow(conversation_id)
        if workflow is None:
            raise WorkflowNotFound(conversation_id)

        steps = advance_steps(workflow.steps, to_index)
        last_index = len(steps) - 1

        if to_index > last_index:
            updates = {
                "steps": steps,
                "current_step": last_index,
                "progress": 100,
                "status": COMPLETED,
            }
        else:
            progress = progress_for(to_index) if new_progress is None else new_progress
            updates = {
                "steps": steps,
                "current_step": to_index,
                "progress": max(0, min(100, progress)),
                "status": IN_PROGRESS,
            }

        updated = await self.store.update_workflow(conversation_id, **updates)
        self.logger.info(
            f"[Workflow] {conversation_id} advanced to step {updated.current_step} "
            f"({updated.progress}%, {updated.status})"
        )
        return updated

    async def fail(self, conversation_id: str, index: Optional[int] = None) -> Optional["WorkflowDO"]:
        """
        Mark a step and the workflow as errored.

        Args:
            conversation_id: Conversation ID
            index: Step to mark; defaults to the current step

        Returns:
            The updated workflow, or None if the conversation has none
        """
        workflow = self.store.get_workflow(conversation_id)
        if workflow is None:
            self.logger.warning(f"[Workflow] cannot mark error, no workflow for {conversation_id}")
            return None

        target = workflow.current_step if index is None else index
        try:
            steps = mark_step_error(workflow.steps, target)
        except ValueError as e:
            raise StoreError(f"Stored workflow for {conversation_id} is inconsistent: {e}") from e

        updated = await self.store.update_workflow(conversation_id, steps=steps, status=ERROR)
        self.logger.warning(f"[Workflow] {conversation_id} step {target} marked error")
        return updated
