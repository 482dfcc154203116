"""
Unit tests for goal and schedule models.
"""

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from tempo.models.goal import Constraints, Goal, Task, WorkingWindow, default_constraints
from tempo.models.schedule import BusyInterval, ScheduledBlock


def _goal_payload(**overrides) -> dict:
    payload = {
        "id": "g1",
        "title": "Launch",
        "startDateISO": "2025-09-01T00:00:00.000Z",
        "deadlineISO": "2025-09-05T23:59:59.999Z",
        "milestones": [
            {
                "id": "m1",
                "title": "Core",
                "tasks": [
                    {"id": "t1", "title": "Auth", "estimateMins": 360, "color": "#4F46E5"},
                    {"id": "t2", "title": "Onboarding", "estimateMins": 60, "loggedMins": 15},
                ],
            }
        ],
    }
    payload.update(overrides)
    return payload


def test_goal_parses_wire_format():
    goal = Goal.model_validate(_goal_payload())

    assert goal.start_date.date() == date(2025, 9, 1)
    assert goal.deadline.date() == date(2025, 9, 5)
    assert goal.milestones[0].tasks[0].estimate_mins == 360
    assert goal.milestones[0].tasks[0].logged_mins is None
    assert goal.milestones[0].tasks[1].logged_mins == 15


def test_goal_serializes_with_aliases():
    goal = Goal.model_validate(_goal_payload())

    dumped = goal.model_dump(by_alias=True)

    assert "startDateISO" in dumped
    assert dumped["milestones"][0]["tasks"][0]["estimateMins"] == 360


def test_unparseable_timestamp_is_rejected():
    with pytest.raises(ValidationError):
        Goal.model_validate(_goal_payload(startDateISO="next tuesday"))


def test_negative_estimate_is_rejected():
    with pytest.raises(ValidationError):
        Task(id="t", title="T", estimate_mins=-1)


def test_negative_logged_minutes_are_rejected():
    with pytest.raises(ValidationError):
        Task(id="t", title="T", estimate_mins=10, logged_mins=-5)


def test_constraints_parse_wire_format():
    constraints = Constraints.model_validate(
        {
            "workingHours": {
                "0": None,
                "1": {"start": "09:00", "end": "17:00"},
                "5": {"start": "09:00", "end": "15:00"},
            },
            "blockMins": 90,
            "bufferMins": 10,
            "blackoutDates": ["2025-09-03"],
        }
    )

    assert constraints.window_for(0) is None
    assert constraints.window_for(1) == WorkingWindow(start="09:00", end="17:00")
    assert constraints.window_for(3) is None
    assert constraints.blackout_dates == [date(2025, 9, 3)]


@pytest.mark.parametrize("block_mins", [0, -30])
def test_non_positive_block_is_rejected(block_mins):
    with pytest.raises(ValidationError):
        Constraints(block_mins=block_mins)


def test_negative_buffer_is_rejected():
    with pytest.raises(ValidationError):
        Constraints(block_mins=60, buffer_mins=-1)


def test_weekday_out_of_range_is_rejected():
    with pytest.raises(ValidationError):
        Constraints(working_hours={7: WorkingWindow(start="09:00", end="17:00")}, block_mins=60)


def test_bad_time_of_day_is_rejected():
    with pytest.raises(ValidationError):
        WorkingWindow(start="9am", end="17:00")


def test_window_end_may_be_midnight():
    window = WorkingWindow(start="22:00", end="24:00")

    assert window.end == "24:00"


def test_window_start_may_not_be_midnight_end():
    with pytest.raises(ValidationError):
        WorkingWindow(start="24:00", end="24:00")


def test_default_constraints():
    constraints = default_constraints()

    assert constraints.block_mins == 90
    assert constraints.buffer_mins == 10
    assert constraints.window_for(0) is None
    assert constraints.window_for(6) is None
    assert constraints.window_for(1).end == "17:00"
    assert constraints.window_for(5).end == "15:00"
    assert constraints.blackout_dates == []


def test_scheduled_block_aliases_and_busy_conversion():
    block = ScheduledBlock(
        id="b1",
        title="Auth — Launch",
        start=datetime(2025, 9, 1, 9),
        end=datetime(2025, 9, 1, 10, 30),
        goal_id="g1",
        milestone_id="m1",
        milestone_title="Core",
        task_id="t1",
        task_title="Auth",
    )

    dumped = block.model_dump(by_alias=True)

    assert dumped["startISO"] == datetime(2025, 9, 1, 9)
    assert dumped["taskTitle"] == "Auth"
    assert block.duration_minutes == 90
    assert block.as_busy() == BusyInterval(start=block.start, end=block.end)
