"""
Goal model definitions.

A goal is broken into ordered milestones, each holding ordered tasks with a
remaining-minutes estimate. Constraints describe when work may be placed.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tempo.core.config import get_settings
from tempo.utils.datetime_utils import parse_time_to_minutes


class Task(BaseModel):
    """A unit of work with a remaining estimate."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    estimate_mins: int = Field(
        ..., ge=0, alias="estimateMins", description="Remaining work estimate (minutes)"
    )
    color: Optional[str] = None
    logged_mins: Optional[int] = Field(
        None, ge=0, alias="loggedMins", description="User-reported progress (minutes)"
    )


class Milestone(BaseModel):
    """Ordered group of tasks within a goal."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    tasks: list[Task] = Field(default_factory=list)


class Goal(BaseModel):
    """A goal with an inclusive start and deadline."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    start_date: datetime = Field(..., alias="startDateISO")
    deadline: datetime = Field(..., alias="deadlineISO")
    milestones: list[Milestone] = Field(default_factory=list)


class WorkingWindow(BaseModel):
    """Working hours for one weekday, as "HH:MM" strings ("24:00" allowed as end)."""

    start: str
    end: str

    @field_validator("start")
    @classmethod
    def _check_start(cls, value: str) -> str:
        if parse_time_to_minutes(value) is None:
            raise ValueError(f"expected HH:MM time of day, got {value!r}")
        return value

    @field_validator("end")
    @classmethod
    def _check_end(cls, value: str) -> str:
        if parse_time_to_minutes(value, allow_end_of_day=True) is None:
            raise ValueError(f"expected HH:MM time of day or 24:00, got {value!r}")
        return value


class Constraints(BaseModel):
    """
    Placement constraints for a goal.

    ``working_hours`` maps weekday index (0=Sunday .. 6=Saturday) to a window;
    a missing or null entry means no work that weekday.
    """

    model_config = ConfigDict(populate_by_name=True)

    working_hours: dict[int, Optional[WorkingWindow]] = Field(
        default_factory=dict, alias="workingHours"
    )
    block_mins: int = Field(..., gt=0, alias="blockMins")
    buffer_mins: int = Field(0, ge=0, alias="bufferMins")
    blackout_dates: list[date] = Field(default_factory=list, alias="blackoutDates")

    @field_validator("working_hours")
    @classmethod
    def _check_weekdays(
        cls, value: dict[int, Optional[WorkingWindow]]
    ) -> dict[int, Optional[WorkingWindow]]:
        for weekday in value:
            if weekday < 0 or weekday > 6:
                raise ValueError(f"weekday index must be 0..6, got {weekday}")
        return value

    def window_for(self, weekday: int) -> Optional[WorkingWindow]:
        return self.working_hours.get(weekday)


DEFAULT_WORKDAY_START = "09:00"
DEFAULT_WORKDAY_END = "17:00"
DEFAULT_FRIDAY_END = "15:00"


def default_constraints() -> Constraints:
    """Weekdays 09:00-17:00 (Friday until 15:00), weekends off."""
    settings = get_settings()
    working_hours: dict[int, Optional[WorkingWindow]] = {0: None, 6: None}
    for weekday in range(1, 6):
        end = DEFAULT_FRIDAY_END if weekday == 5 else DEFAULT_WORKDAY_END
        working_hours[weekday] = WorkingWindow(start=DEFAULT_WORKDAY_START, end=end)
    return Constraints(
        working_hours=dict(sorted(working_hours.items())),
        block_mins=settings.DEFAULT_BLOCK_MINUTES,
        buffer_mins=settings.DEFAULT_BUFFER_MINUTES,
        blackout_dates=[],
    )
