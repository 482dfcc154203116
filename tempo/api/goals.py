"""
Goal planning API endpoints.

Stateless: the caller sends the goal, constraints and busy intervals, and
stores whatever comes back.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from tempo.api.deps import AppSettings
from tempo.core.exceptions import NotFoundError, ValidationError
from tempo.core.logger import setup_logger
from tempo.models.goal import Constraints, default_constraints
from tempo.models.schedule import (
    LogTaskRequest,
    LogTaskResponse,
    ScheduleGoalRequest,
    ScheduleGoalResponse,
)
from tempo.services.goal_scheduler import schedule_goal
from tempo.services.progress_service import (
    find_milestone,
    log_task_minutes,
    milestone_progress,
    summarize_plan,
    task_progress,
)

logger = setup_logger(__name__)

router = APIRouter()


@router.get("/default-constraints", response_model=Constraints)
async def get_default_constraints():
    return default_constraints()


@router.post("/schedule", response_model=ScheduleGoalResponse)
async def schedule_goal_blocks(
    payload: ScheduleGoalRequest,
    settings: AppSettings,
):
    """Place the goal's tasks into calendar blocks and summarize coverage."""
    constraints = payload.constraints or default_constraints()
    try:
        blocks = schedule_goal(
            payload.goal,
            constraints,
            payload.existing_busy,
            timezone=settings.scheduler_timezone,
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    summary = summarize_plan(payload.goal, blocks)
    logger.info(
        f"Scheduled goal {payload.goal.id}: {len(blocks)} blocks, "
        f"{summary.total_unscheduled_mins} min left unscheduled"
    )
    return ScheduleGoalResponse(blocks=blocks, summary=summary)


@router.post("/log-task", response_model=LogTaskResponse)
async def log_task(payload: LogTaskRequest):
    """Record worked minutes against a task and report task/milestone progress."""
    try:
        updated = log_task_minutes(
            payload.goal,
            payload.milestone_id,
            payload.task_id,
            payload.delta_mins,
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )

    was_complete = milestone_progress(find_milestone(payload.goal, payload.milestone_id)).complete
    milestone = find_milestone(updated, payload.milestone_id)
    progress = milestone_progress(milestone)
    task = next(t for t in milestone.tasks if t.id == payload.task_id)
    milestone_completed = progress.complete and not was_complete
    if milestone_completed:
        logger.info(f"Milestone {milestone.id} of goal {updated.id} complete")

    return LogTaskResponse(
        goal=updated,
        task=task_progress(task),
        milestone=progress,
        milestone_completed=milestone_completed,
    )
