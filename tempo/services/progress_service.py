"""
Progress tracking and plan coverage for goals.

Logged minutes are informational: they never change a task's remaining
estimate and the scheduler does not read them.
"""

from __future__ import annotations

from tempo.core.exceptions import NotFoundError
from tempo.core.logger import setup_logger
from tempo.models.goal import Goal, Milestone, Task
from tempo.models.schedule import (
    MilestoneProgress,
    PlanSummary,
    ScheduledBlock,
    TaskPlanSummary,
    TaskProgress,
)

logger = setup_logger(__name__)


def log_task_minutes(
    goal: Goal,
    milestone_id: str,
    task_id: str,
    delta_mins: int,
) -> Goal:
    """
    Add (or subtract) worked minutes on a task.

    Args:
        goal: Goal holding the task (not modified)
        milestone_id: Milestone holding the task
        task_id: Task to log against
        delta_mins: Positive to add, negative to subtract

    Returns:
        Goal: Copy of the goal with the task's logged minutes updated,
        clamped at zero

    Raises:
        NotFoundError: If the milestone or task does not exist in the goal
    """
    updated = goal.model_copy(deep=True)
    milestone = find_milestone(updated, milestone_id)
    task = next((t for t in milestone.tasks if t.id == task_id), None)
    if task is None:
        raise NotFoundError(
            f"Task {task_id} not found in milestone {milestone_id}",
            details={"goal_id": goal.id, "milestone_id": milestone_id, "task_id": task_id},
        )

    current = task.logged_mins or 0
    task.logged_mins = max(0, current + delta_mins)
    logger.info(f"Logged {delta_mins:+d} min on task {task_id} ({current} -> {task.logged_mins})")
    return updated


def task_progress(task: Task) -> TaskProgress:
    """Logged minutes against the estimate, capped at 100%."""
    total = max(0, task.estimate_mins)
    logged = min(total, max(0, task.logged_mins or 0))
    percent = min(100, round(logged / total * 100)) if total else 0
    return TaskProgress(task_id=task.id, logged_mins=logged, total_mins=total, percent=percent)


def is_task_complete(task: Task) -> bool:
    return (task.logged_mins or 0) >= task.estimate_mins


def milestone_progress(milestone: Milestone) -> MilestoneProgress:
    """
    Logged progress across a milestone.

    A milestone is complete once it has tasks and every one of them has
    logged at least its estimate.
    """
    completed = sum(1 for task in milestone.tasks if is_task_complete(task))
    progress = [task_progress(task) for task in milestone.tasks]
    return MilestoneProgress(
        milestone_id=milestone.id,
        completed_tasks=completed,
        total_tasks=len(milestone.tasks),
        logged_mins=sum(item.logged_mins for item in progress),
        total_mins=sum(item.total_mins for item in progress),
        complete=bool(milestone.tasks) and completed == len(milestone.tasks),
    )


def find_milestone(goal: Goal, milestone_id: str) -> Milestone:
    """
    Raises:
        NotFoundError: If the goal has no such milestone
    """
    milestone = next((ms for ms in goal.milestones if ms.id == milestone_id), None)
    if milestone is None:
        raise NotFoundError(
            f"Milestone {milestone_id} not found in goal {goal.id}",
            details={"goal_id": goal.id, "milestone_id": milestone_id},
        )
    return milestone


def summarize_plan(goal: Goal, blocks: list[ScheduledBlock]) -> PlanSummary:
    """
    Compare a goal's task estimates with the blocks produced for it.

    A block counts in full toward its task even when the task needed less
    than a block's worth of time; unscheduled minutes never go negative.
    Blocks belonging to other goals are ignored.
    """
    scheduled_by_task: dict[str, int] = {}
    count_by_task: dict[str, int] = {}
    for block in blocks:
        if block.goal_id != goal.id:
            continue
        scheduled_by_task[block.task_id] = (
            scheduled_by_task.get(block.task_id, 0) + block.duration_minutes
        )
        count_by_task[block.task_id] = count_by_task.get(block.task_id, 0) + 1

    tasks: list[TaskPlanSummary] = []
    for milestone in goal.milestones:
        for task in milestone.tasks:
            estimate = max(0, task.estimate_mins)
            scheduled = scheduled_by_task.get(task.id, 0)
            tasks.append(
                TaskPlanSummary(
                    task_id=task.id,
                    title=task.title,
                    milestone_id=milestone.id,
                    estimate_mins=estimate,
                    scheduled_mins=scheduled,
                    unscheduled_mins=max(0, estimate - scheduled),
                    block_count=count_by_task.get(task.id, 0),
                )
            )

    total_unscheduled = sum(item.unscheduled_mins for item in tasks)
    return PlanSummary(
        goal_id=goal.id,
        total_estimate_mins=sum(item.estimate_mins for item in tasks),
        total_scheduled_mins=sum(item.scheduled_mins for item in tasks),
        total_unscheduled_mins=total_unscheduled,
        fully_scheduled=total_unscheduled == 0,
        tasks=tasks,
    )
