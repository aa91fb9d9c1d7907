"""Workflow step type and the fixed five-step template."""

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..agents import persona_registry


# Step statuses
PENDING = "pending"
IN_PROGRESS = "in-progress"
COMPLETED = "completed"
ERROR = "error"

STEP_STATUSES = (PENDING, IN_PROGRESS, COMPLETED, ERROR)

# Percentage credited per completed step
PROGRESS_PER_STEP = 20


@dataclass(frozen=True)
class WorkflowStep:
    """One entry in a conversation's workflow."""

    id: str
    persona_name: str
    title: str
    status: str
    description: str
    estimated_time: Optional[str] = None

    def with_status(self, status: str) -> "WorkflowStep":
        """
        Return a copy with a different status.

        Raises:
            ValueError: If status is not one of STEP_STATUSES
        """
        if status not in STEP_STATUSES:
            raise ValueError(f"Unknown step status: {status}")
        return replace(self, status=status)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the persisted (camelCase) keys."""
        data = {
            "id": self.id,
            "agentName": self.persona_name,
            "title": self.title,
            "status": self.status,
            "description": self.description,
        }
        if self.estimated_time is not None:
            data["estimatedTime"] = self.estimated_time
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkflowStep":
        """Deserialize from the persisted (camelCase) keys."""
        return cls(
            id=str(data["id"]),
            persona_name=data.get("agentName", ""),
            title=data.get("title", ""),
            status=data.get("status", PENDING),
            description=data.get("description", ""),
            estimated_time=data.get("estimatedTime"),
        )


_DETAILS = (
    ("Analyzing and refining requirements", "2 min"),
    ("Writing clean, scalable code", "5 min"),
    ("Reviewing for quality and security", "3 min"),
    ("Running comprehensive tests", "4 min"),
    ("Deploying to production", "2 min"),
)

STEP_TEMPLATE: Tuple[WorkflowStep, ...] = tuple(
    WorkflowStep(
        id=str(index + 1),
        persona_name=persona.short_name,
        title=persona.step_title,
        status=PENDING,
        description=description,
        estimated_time=estimated_time,
    )
    for index, (persona, (description, estimated_time))
    in enumerate(zip(persona_registry.list(), _DETAILS))
)


def initial_steps() -> List[WorkflowStep]:
    """Fresh copy of the template with the first step in progress."""
    return advance_steps(STEP_TEMPLATE, 0)


def advance_steps(steps: Sequence[WorkflowStep], to_index: int) -> List[WorkflowStep]:
    """
    Compute step statuses for a move to ``to_index``.

    Steps before ``to_index`` are completed, the step at ``to_index`` is in
    progress and later steps are pending. An index past the last step
    completes every step. The input is not modified.
    """
    if to_index < 0:
        raise ValueError(f"Step index must be non-negative, got {to_index}")

    result = []
    for index, step in enumerate(steps):
        if index < to_index:
            status = COMPLETED
        elif index == to_index:
            status = IN_PROGRESS
        else:
            status = PENDING
        result.append(step.with_status(status))
    return result


def mark_step_error(steps: Sequence[WorkflowStep], index: int) -> List[WorkflowStep]:
    """Copy of ``steps`` with the step at ``index`` set to error."""
    if not 0 <= index < len(steps):
        raise ValueError(f"Step index {index} out of range for {len(steps)} steps")
    return [
        step.with_status(ERROR) if i == index else step
        for i, step in enumerate(steps)
    ]


def progress_for(index: int) -> int:
    """Scheduled progress once ``index`` is the active step."""
    return min(100, PROGRESS_PER_STEP * (index + 1))
