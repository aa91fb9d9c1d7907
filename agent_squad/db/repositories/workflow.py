"""Agent workflow repository for database operations."""

import json
import duckdb
from datetime import datetime
from typing import Optional, Dict, Any
from .base import BaseRepository
from ..database_models.workflow import WorkflowDO
from ...workflow.steps import WorkflowStep


class WorkflowRepository(BaseRepository):
    """Repository for the per-conversation workflow record."""

    def create(self, workflow: WorkflowDO) -> WorkflowDO:
        """
        Insert a workflow record.

        Args:
            workflow: WorkflowDO instance

        Returns:
            The stored workflow

        Raises:
            StoreError: If the insert fails, including when the conversation
                already has a workflow
        """
        try:
            self.conn.execute("""
                INSERT INTO agent_workflows (id, conversation_id, steps, current_step, progress, status, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            """, [
                workflow.id,
                workflow.conversation_id,
                self._dump_steps(workflow.steps),
                workflow.current_step,
                workflow.progress,
                workflow.status,
                workflow.updated_at
            ])
            self.conn.commit()
        except duckdb.Error as e:
            raise self._fail(f"create workflow for {workflow.conversation_id}", e) from e

        self.logger.info(f"Created workflow record for conversation: {workflow.conversation_id}")
        return workflow

    def get_by_conversation(self, conversation_id: str) -> Optional[WorkflowDO]:
        """
        Get the workflow of a conversation.

        Args:
            conversation_id: Conversation ID

        Returns:
            WorkflowDO instance or None
        """
        try:
            result = self.conn.execute("""
                SELECT id, conversation_id, steps, current_step, progress, status, updated_at
                FROM agent_workflows
                WHERE conversation_id = ?
            """, [conversation_id]).fetchone()
        except duckdb.Error as e:
            raise self._fail(f"get workflow for {conversation_id}", e) from e

        if not result:
            return None

        raw_steps = json.loads(result[2]) if isinstance(result[2], str) else result[2]
        return WorkflowDO(
            id=result[0],
            conversation_id=result[1],
            steps=[WorkflowStep.from_dict(s) for s in (raw_steps or [])],
            current_step=result[3] or 0,
            progress=result[4] or 0,
            status=result[5] or "pending",
            updated_at=result[6]
        )

    def update(self, conversation_id: str, updates: Dict[str, Any]) -> bool:
        """
        Update workflow fields in a single statement.

        Args:
            conversation_id: Conversation ID
            updates: Any of steps, current_step, progress, status

        Returns:
            True if a row was updated, False if the conversation has no workflow
        """
        set_clauses = []
        params = []

        if 'steps' in updates:
            set_clauses.append("steps = ?")
            params.append(self._dump_steps(updates['steps']))

        if 'current_step' in updates:
            set_clauses.append("current_step = ?")
            params.append(updates['current_step'])

        if 'progress' in updates:
            set_clauses.append("progress = ?")
            params.append(updates['progress'])

        if 'status' in updates:
            set_clauses.append("status = ?")
            params.append(updates['status'])

        set_clauses.append("updated_at = ?")
        params.append(datetime.utcnow())
        params.append(conversation_id)
        query = f"UPDATE agent_workflows SET {', '.join(set_clauses)} WHERE conversation_id = ? RETURNING id"

        try:
            rows = self.conn.execute(query, params).fetchall()
            self.conn.commit()
        except duckdb.Error as e:
            raise self._fail(f"update workflow for {conversation_id}", e) from e

        return len(rows) > 0

    @staticmethod
    def _dump_steps(steps) -> str:
        return json.dumps(
            [s.to_dict() if isinstance(s, WorkflowStep) else s for s in steps],
            ensure_ascii=False
        )
