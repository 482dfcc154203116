"""Pydantic models (schemas) for the application."""

from tempo.models.goal import (
    Constraints,
    Goal,
    Milestone,
    Task,
    WorkingWindow,
    default_constraints,
)
from tempo.models.schedule import (
    BusyInterval,
    LogTaskRequest,
    LogTaskResponse,
    MilestoneProgress,
    PlanSummary,
    ScheduledBlock,
    ScheduleGoalRequest,
    ScheduleGoalResponse,
    TaskPlanSummary,
    TaskProgress,
)

__all__ = [
    # Goal
    "Goal",
    "Milestone",
    "Task",
    "Constraints",
    "WorkingWindow",
    "default_constraints",
    # Schedule
    "BusyInterval",
    "ScheduledBlock",
    "PlanSummary",
    "TaskPlanSummary",
    "TaskProgress",
    "ScheduleGoalRequest",
    "ScheduleGoalResponse",
    "LogTaskRequest",
    "LogTaskResponse",
    "MilestoneProgress",
]
