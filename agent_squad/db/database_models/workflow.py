"""Agent workflow database model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from ...workflow.steps import WorkflowStep


@dataclass
class WorkflowDO:
    """Workflow data object - maps to agent_workflows table."""

    id: str
    conversation_id: str
    steps: List[WorkflowStep] = field(default_factory=list)
    current_step: int = 0
    progress: int = 0
    status: str = "pending"
    updated_at: datetime = field(default_factory=datetime.utcnow)
