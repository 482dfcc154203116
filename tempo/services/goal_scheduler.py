"""
Goal scheduler.

Places a goal's tasks into fixed-size calendar blocks, day by day, between
the goal's start date and deadline.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Optional
from uuid import uuid4

from tempo.core.exceptions import ValidationError
from tempo.core.logger import setup_logger
from tempo.models.goal import Constraints, Goal
from tempo.models.schedule import BusyInterval, ScheduledBlock
from tempo.utils.datetime_utils import (
    at_time_of_day,
    from_wall_clock,
    is_before,
    overlaps,
    to_wall_clock,
    weekday_index,
)

logger = setup_logger(__name__)

# Cursor step when a slot is blocked only by a block placed in this run.
PROBE_STEP_MINUTES = 15


@dataclass
class WorkingTask:
    """Scheduler-owned copy of a task, with its milestone lineage."""

    task_id: str
    title: str
    remaining_mins: int
    color: Optional[str]
    milestone_id: str
    milestone_title: str


@dataclass
class Interval:
    start: datetime
    end: datetime


def flatten_tasks(goal: Goal) -> list[WorkingTask]:
    """
    Copy every task with remaining work into fill order.

    Fill order is milestone order, then task order within the milestone.
    The goal itself is never modified.
    """
    working: list[WorkingTask] = []
    for milestone in goal.milestones:
        for task in milestone.tasks:
            if task.estimate_mins <= 0:
                continue
            working.append(
                WorkingTask(
                    task_id=task.id,
                    title=task.title,
                    remaining_mins=task.estimate_mins,
                    color=task.color,
                    milestone_id=milestone.id,
                    milestone_title=milestone.title,
                )
            )
    return working


def bucket_busy_by_day(
    busy: Iterable[BusyInterval],
    timezone: Optional[str] = None,
) -> dict[date, list[Interval]]:
    """
    Group busy intervals by the calendar date of their start, sorted by start.

    An interval that crosses midnight is only seen on its start day.
    """
    buckets: dict[date, list[Interval]] = {}
    for item in busy:
        start = to_wall_clock(item.start, timezone)
        end = to_wall_clock(item.end, timezone)
        buckets.setdefault(start.date(), []).append(Interval(start, end))
    for intervals in buckets.values():
        intervals.sort(key=lambda interval: interval.start)
    return buckets


def advance_past_conflicts(
    cursor: datetime,
    conflicts: list[Interval],
    buffer: timedelta,
) -> datetime:
    """
    Next cursor after an infeasible slot.

    Jumps to the latest end among the conflicting busy intervals plus the
    buffer. With no busy conflict (the slot only hit a block placed in this
    run) the cursor moves forward by ``PROBE_STEP_MINUTES``.
    """
    if conflicts:
        latest_end = max(conflict.end for conflict in conflicts)
        return latest_end + buffer
    return cursor + timedelta(minutes=PROBE_STEP_MINUTES)


def _validate_constraints(constraints: Constraints) -> None:
    if constraints.block_mins <= 0:
        raise ValidationError(
            f"block_mins must be positive, got {constraints.block_mins}",
            details={"block_mins": constraints.block_mins},
        )
    if constraints.buffer_mins < 0:
        raise ValidationError(
            f"buffer_mins must not be negative, got {constraints.buffer_mins}",
            details={"buffer_mins": constraints.buffer_mins},
        )


def _first_open_task(tasks: list[WorkingTask]) -> Optional[WorkingTask]:
    return next((task for task in tasks if task.remaining_mins > 0), None)


def schedule_goal(
    goal: Goal,
    constraints: Constraints,
    existing_busy: Optional[list[BusyInterval]] = None,
    timezone: Optional[str] = None,
) -> list[ScheduledBlock]:
    """
    Place a goal's tasks into calendar blocks.

    Walks each calendar date from the goal's start to its deadline
    (inclusive). On a working day a cursor moves through the working window;
    every slot of ``block_mins`` that overlaps neither a busy interval nor a
    block already placed that day goes to the first task that still has
    remaining minutes. Each block consumes a full ``block_mins`` from the
    task (floored at zero) and is followed by ``buffer_mins`` of idle time.

    Work that does not fit before the deadline is left unscheduled without
    error; use ``summarize_plan`` to detect it.

    Args:
        goal: Goal to schedule (not modified)
        constraints: Working hours, block size, buffer and blackout dates
        existing_busy: Commitments to avoid
        timezone: IANA timezone for reading day boundaries. None reads every
            instant by its own wall-clock fields.

    Returns:
        list[ScheduledBlock]: Blocks in placement order

    Raises:
        ValidationError: If block_mins is not positive or buffer_mins is negative
    """
    _validate_constraints(constraints)

    if is_before(goal.deadline, goal.start_date, timezone):
        logger.debug(f"Goal {goal.id}: deadline before start, nothing to schedule")
        return []

    start = to_wall_clock(goal.start_date, timezone)
    deadline = to_wall_clock(goal.deadline, timezone)

    tasks = flatten_tasks(goal)
    busy_by_day = bucket_busy_by_day(existing_busy or [], timezone)
    blackout = set(constraints.blackout_dates)
    block = timedelta(minutes=constraints.block_mins)
    buffer = timedelta(minutes=constraints.buffer_mins)

    results: list[ScheduledBlock] = []
    placed_by_day: dict[date, list[Interval]] = {}

    def fits(day: date, slot_start: datetime, slot_end: datetime) -> bool:
        for busy in busy_by_day.get(day, []):
            if overlaps(slot_start, slot_end, busy.start, busy.end):
                return False
        for placed in placed_by_day.get(day, []):
            if overlaps(slot_start, slot_end, placed.start, placed.end):
                return False
        return True

    current = start.date()
    last_day = deadline.date()
    while current <= last_day and _first_open_task(tasks) is not None:
        window = constraints.window_for(weekday_index(current))
        if current in blackout or window is None:
            current += timedelta(days=1)
            continue

        day_start = at_time_of_day(current, window.start)
        day_end = at_time_of_day(current, window.end)
        cursor = day_start

        while cursor + block <= day_end:
            task = _first_open_task(tasks)
            if task is None:
                break
            slot_start = cursor
            slot_end = cursor + block

            if fits(current, slot_start, slot_end):
                results.append(
                    ScheduledBlock(
                        id=str(uuid4()),
                        title=f"{task.title} — {goal.title}",
                        start=from_wall_clock(slot_start, timezone),
                        end=from_wall_clock(slot_end, timezone),
                        color=task.color,
                        goal_id=goal.id,
                        milestone_id=task.milestone_id,
                        milestone_title=task.milestone_title,
                        task_id=task.task_id,
                        task_title=task.title,
                    )
                )
                placed_by_day.setdefault(current, []).append(Interval(slot_start, slot_end))
                task.remaining_mins = max(0, task.remaining_mins - constraints.block_mins)
                cursor = slot_end + buffer
            else:
                conflicts = [
                    busy
                    for busy in busy_by_day.get(current, [])
                    if overlaps(slot_start, slot_end, busy.start, busy.end)
                ]
                cursor = advance_past_conflicts(cursor, conflicts, buffer)

        current += timedelta(days=1)

    leftover = sum(task.remaining_mins for task in tasks)
    logger.debug(
        f"Goal {goal.id}: scheduled {len(results)} blocks "
        f"({len(results) * constraints.block_mins} min), {leftover} min unscheduled"
    )
    return results
