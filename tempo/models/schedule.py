"""
Schedule models: busy intervals in, scheduled blocks out.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from tempo.models.goal import Constraints, Goal


class BusyInterval(BaseModel):
    """A pre-existing commitment the scheduler must not overlap."""

    model_config = ConfigDict(populate_by_name=True)

    start: datetime = Field(..., alias="startISO")
    end: datetime = Field(..., alias="endISO")


class ScheduledBlock(BaseModel):
    """One fixed-duration placement of work for a single task."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    start: datetime = Field(..., alias="startISO")
    end: datetime = Field(..., alias="endISO")
    color: Optional[str] = None

    # lineage
    goal_id: str = Field(..., alias="goalId")
    milestone_id: str = Field(..., alias="milestoneId")
    milestone_title: str = Field(..., alias="milestoneTitle")
    task_id: str = Field(..., alias="taskId")
    task_title: str = Field(..., alias="taskTitle")

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)

    def as_busy(self) -> BusyInterval:
        """Convert to a busy interval to feed into the next scheduling run."""
        return BusyInterval(start=self.start, end=self.end)


class TaskPlanSummary(BaseModel):
    """Scheduled vs. estimated minutes for one task."""

    model_config = ConfigDict(populate_by_name=True)

    task_id: str = Field(..., alias="taskId")
    title: str
    milestone_id: str = Field(..., alias="milestoneId")
    estimate_mins: int = Field(..., ge=0, alias="estimateMins")
    scheduled_mins: int = Field(..., ge=0, alias="scheduledMins")
    unscheduled_mins: int = Field(..., ge=0, alias="unscheduledMins")
    block_count: int = Field(..., ge=0, alias="blockCount")


class PlanSummary(BaseModel):
    """Whether a set of blocks covers a goal's estimates."""

    model_config = ConfigDict(populate_by_name=True)

    goal_id: str = Field(..., alias="goalId")
    total_estimate_mins: int = Field(..., alias="totalEstimateMins")
    total_scheduled_mins: int = Field(..., alias="totalScheduledMins")
    total_unscheduled_mins: int = Field(..., alias="totalUnscheduledMins")
    fully_scheduled: bool = Field(..., alias="fullyScheduled")
    tasks: list[TaskPlanSummary] = Field(default_factory=list)


class TaskProgress(BaseModel):
    """Logged progress against a task's estimate."""

    model_config = ConfigDict(populate_by_name=True)

    task_id: str = Field(..., alias="taskId")
    logged_mins: int = Field(..., ge=0, alias="loggedMins")
    total_mins: int = Field(..., ge=0, alias="totalMins")
    percent: int = Field(..., ge=0, le=100)


class MilestoneProgress(BaseModel):
    """Logged progress across a milestone's tasks."""

    model_config = ConfigDict(populate_by_name=True)

    milestone_id: str = Field(..., alias="milestoneId")
    completed_tasks: int = Field(..., ge=0, alias="completedTasks")
    total_tasks: int = Field(..., ge=0, alias="totalTasks")
    logged_mins: int = Field(..., ge=0, alias="loggedMins")
    total_mins: int = Field(..., ge=0, alias="totalMins")
    complete: bool


class ScheduleGoalRequest(BaseModel):
    """Request body for scheduling a goal."""

    model_config = ConfigDict(populate_by_name=True)

    goal: Goal
    constraints: Optional[Constraints] = None
    existing_busy: list[BusyInterval] = Field(default_factory=list, alias="existingBusy")


class ScheduleGoalResponse(BaseModel):
    """Blocks produced for a goal plus a coverage summary."""

    blocks: list[ScheduledBlock]
    summary: PlanSummary


class LogTaskRequest(BaseModel):
    """Request body for logging worked minutes against a task."""

    model_config = ConfigDict(populate_by_name=True)

    goal: Goal
    milestone_id: str = Field(..., alias="milestoneId")
    task_id: str = Field(..., alias="taskId")
    delta_mins: int = Field(..., alias="deltaMins", description="Positive to add, negative to subtract")


class LogTaskResponse(BaseModel):
    """Updated goal plus the progress of the task and its milestone."""

    model_config = ConfigDict(populate_by_name=True)

    goal: Goal
    task: TaskProgress
    milestone: MilestoneProgress
    milestone_completed: bool = Field(
        ...,
        alias="milestoneCompleted",
        description="True when this log finished the last open task of the milestone",
    )
