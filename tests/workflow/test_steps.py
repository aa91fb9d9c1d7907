"""Tests for the workflow step template and pure transitions."""

import pytest

from agent_squad.workflow import (
    STEP_TEMPLATE,
    WorkflowStep,
    PENDING,
    IN_PROGRESS,
    COMPLETED,
    ERROR,
    initial_steps,
    advance_steps,
    mark_step_error,
    progress_for,
)


def _statuses(steps):
    return [s.status for s in steps]


class TestStepTemplate:
    """SUT: STEP_TEMPLATE"""

    def test_five_fixed_steps(self):
        """The template holds the five steps with ordinal ids and owners."""
        assert [s.id for s in STEP_TEMPLATE] == ["1", "2", "3", "4", "5"]
        assert [s.persona_name for s in STEP_TEMPLATE] == ["Alex", "Morgan", "Jordan", "Riley", "Casey"]
        assert STEP_TEMPLATE[1].title == "Code Generation"
        assert STEP_TEMPLATE[1].estimated_time == "5 min"

    def test_template_all_pending(self):
        """The template itself is never in progress."""
        assert set(_statuses(STEP_TEMPLATE)) == {PENDING}


class TestInitialSteps:
    """SUT: initial_steps"""

    def test_first_in_progress(self):
        """Step 0 is in progress and the rest pending."""
        assert _statuses(initial_steps()) == [IN_PROGRESS, PENDING, PENDING, PENDING, PENDING]

    def test_returns_new_list(self):
        """Each call returns an independent list."""
        assert initial_steps() is not initial_steps()


class TestAdvanceSteps:
    """SUT: advance_steps"""

    def test_to_index_one(self):
        """Moving to 1 completes step 0 and starts step 1."""
        steps = advance_steps(initial_steps(), 1)
        assert _statuses(steps) == [COMPLETED, IN_PROGRESS, PENDING, PENDING, PENDING]

    def test_past_last_completes_all(self):
        """An index past the end completes every step."""
        steps = advance_steps(initial_steps(), 5)
        assert _statuses(steps) == [COMPLETED] * 5

    def test_does_not_mutate_input(self):
        """The input sequence is left unchanged."""
        original = initial_steps()
        before = list(original)
        advance_steps(original, 3)
        assert original == before

    def test_negative_index(self):
        """A negative index is rejected."""
        with pytest.raises(ValueError):
            advance_steps(initial_steps(), -1)

    def test_keeps_step_content(self):
        """Only status changes; titles and descriptions are kept."""
        steps = advance_steps(initial_steps(), 2)
        assert [s.title for s in steps] == [s.title for s in STEP_TEMPLATE]


class TestMarkStepError:
    """SUT: mark_step_error"""

    def test_marks_only_target(self):
        """Only the given step becomes error."""
        steps = mark_step_error(advance_steps(initial_steps(), 1), 1)
        assert _statuses(steps) == [COMPLETED, ERROR, PENDING, PENDING, PENDING]

    def test_out_of_range(self):
        """An index outside the steps is rejected."""
        with pytest.raises(ValueError):
            mark_step_error(initial_steps(), 7)


class TestWithStatus:
    """SUT: WorkflowStep.with_status"""

    def test_copy_with_new_status(self):
        """Returns a new step; the original is unchanged."""
        step = STEP_TEMPLATE[0]
        done = step.with_status(COMPLETED)
        assert done.status == COMPLETED
        assert step.status == PENDING

    def test_unknown_status(self):
        """Statuses outside the fixed set are rejected."""
        with pytest.raises(ValueError):
            STEP_TEMPLATE[0].with_status("done")


class TestProgressFor:
    """SUT: progress_for"""

    def test_schedule(self):
        """Twenty percent per step, capped at 100."""
        assert [progress_for(i) for i in range(6)] == [20, 40, 60, 80, 100, 100]


class TestWorkflowStepSerialization:
    """SUT: WorkflowStep.to_dict / from_dict"""

    def test_camel_case_keys(self):
        """Persisted keys match the client's field names."""
        data = STEP_TEMPLATE[0].to_dict()
        assert data["agentName"] == "Alex"
        assert data["estimatedTime"] == "2 min"
        assert "persona_name" not in data

    def test_estimated_time_optional(self):
        """A missing estimatedTime is read back as None and not written."""
        step = WorkflowStep.from_dict({
            "id": "9", "agentName": "X", "title": "T", "status": "pending", "description": "D"
        })
        assert step.estimated_time is None
        assert "estimatedTime" not in step.to_dict()
