"""Workflow - fixed step template and state machine."""

from .steps import (
    WorkflowStep,
    STEP_TEMPLATE,
    PENDING,
    IN_PROGRESS,
    COMPLETED,
    ERROR,
    initial_steps,
    advance_steps,
    mark_step_error,
    progress_for,
)
from .state_machine import WorkflowStateMachine

__all__ = [
    "WorkflowStep",
    "STEP_TEMPLATE",
    "PENDING",
    "IN_PROGRESS",
    "COMPLETED",
    "ERROR",
    "initial_steps",
    "advance_steps",
    "mark_step_error",
    "progress_for",
    "WorkflowStateMachine",
]
