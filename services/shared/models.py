"""
Shared Pydantic models for REST API serialization.

Wire names follow the camelCase keys of the web client (courseId,
allowAccess, includeCanvas, ...). Timestamps are parsed on the way in and
written as UTC ISO strings with milliseconds on the way out.
"""
from __future__ import annotations

import typing as t
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from planner import models as dc
from planner.timeutils import format_instant, parse_clock, parse_instant, resolve_timezone


AssignmentWeight = t.Literal["exam", "project", "homework"]
BlockSource = t.Literal["canvas", "personal", "ai"]


class WireModel(BaseModel):
    """Base model accepting both field names and camelCase aliases."""
    model_config = ConfigDict(populate_by_name=True)


class Course(WireModel):
    """A course and whether the planner may use it."""
    id: str
    name: str = ""
    allow_access: bool = Field(default=True, alias="allowAccess")

    def to_dataclass(self) -> dc.Course:
        return dc.Course(id=self.id, name=self.name, allow_access=self.allow_access)

    @classmethod
    def from_dataclass(cls, course: dc.Course) -> "Course":
        return cls(id=course.id, name=course.name, allow_access=course.allow_access)


class Assignment(WireModel):
    """A due-dated assignment."""
    id: str
    course_id: str = Field(alias="courseId")
    title: str = ""
    due: datetime
    weight: AssignmentWeight = "homework"

    @field_serializer("due")
    def _serialize_due(self, value: datetime) -> str:
        return format_instant(value)

    def to_dataclass(self) -> dc.Assignment:
        return dc.Assignment(
            id=self.id,
            course_id=self.course_id,
            title=self.title,
            due=parse_instant(self.due),
            weight=self.weight,
        )

    @classmethod
    def from_dataclass(cls, assignment: dc.Assignment) -> "Assignment":
        return cls(
            id=assignment.id,
            course_id=assignment.course_id,
            title=assignment.title,
            due=assignment.due,
            weight=assignment.weight,
        )


class PersonalEvent(WireModel):
    """A busy interval on the personal calendar."""
    id: str
    title: str = ""
    start: datetime
    end: datetime

    @field_serializer("start", "end")
    def _serialize_instant(self, value: datetime) -> str:
        return format_instant(value)

    def to_dataclass(self) -> dc.PersonalEvent:
        return dc.PersonalEvent(
            id=self.id,
            title=self.title,
            start=parse_instant(self.start),
            end=parse_instant(self.end),
        )

    @classmethod
    def from_dataclass(cls, event: dc.PersonalEvent) -> "PersonalEvent":
        return cls(id=event.id, title=event.title, start=event.start, end=event.end)


class Preferences(WireModel):
    """User preferences; omitted fields take the planner defaults."""
    include_canvas: bool = Field(default=True, alias="includeCanvas")
    include_personal: bool = Field(default=True, alias="includePersonal")
    consider_habits: str = Field(default="I focus best in the morning with short breaks.", alias="considerHabits")
    focus_start: str = Field(default="08:00", alias="focusStart")
    focus_end: str = Field(default="18:00", alias="focusEnd")
    break_minutes: int = Field(default=15, ge=0, alias="breakMinutes")
    notifications_enabled: bool = Field(default=True, alias="notificationsEnabled")
    reminder_mode: str = Field(default="smart", alias="reminderMode")
    timezone: t.Optional[str] = None

    @field_validator("focus_start", "focus_end")
    @classmethod
    def _check_clock(cls, value: str) -> str:
        parse_clock(value)
        return value

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: t.Optional[str]) -> t.Optional[str]:
        resolve_timezone(value)
        return value

    def to_dataclass(self) -> dc.Preferences:
        return dc.Preferences(**self.model_dump(by_alias=False))


class ScheduleBlock(WireModel):
    """One block of the schedule."""
    id: str
    label: str = ""
    start: datetime
    end: datetime
    source: BlockSource = "ai"
    course_id: t.Optional[str] = Field(default=None, alias="courseId")
    note: t.Optional[str] = None

    @field_validator("source", mode="before")
    @classmethod
    def _default_source(cls, value: t.Any) -> t.Any:
        """Unknown sources read as ai, as in the dataclass boundary."""
        return value if value in dc.BLOCK_SOURCES else "ai"

    @field_serializer("start", "end")
    def _serialize_instant(self, value: datetime) -> str:
        return format_instant(value)

    def to_dataclass(self) -> dc.ScheduleBlock:
        return dc.ScheduleBlock(
            id=self.id,
            label=self.label,
            start=parse_instant(self.start),
            end=parse_instant(self.end),
            source=self.source,
            course_id=self.course_id,
            note=self.note,
        )

    @classmethod
    def from_dataclass(cls, block: dc.ScheduleBlock) -> "ScheduleBlock":
        return cls(
            id=block.id,
            label=block.label,
            start=block.start,
            end=block.end,
            source=block.source,
            course_id=block.course_id,
            note=block.note,
        )


# Request/Response Models for API endpoints
class SynthesizeRequest(WireModel):
    """Request model for deterministic schedule synthesis."""
    assignments: list[Assignment] = Field(default_factory=list)
    courses: list[Course] = Field(default_factory=list)
    events: list[PersonalEvent] = Field(default_factory=list)
    preferences: Preferences = Field(default_factory=Preferences)
    now: t.Optional[datetime] = None


class GeneratePlanRequest(WireModel):
    """Request model for a generative plan."""
    assignments: list[Assignment] = Field(default_factory=list)
    events: list[PersonalEvent] = Field(default_factory=list)
    preferences: Preferences = Field(default_factory=Preferences)


class AdjustBlockRequest(WireModel):
    """Request model for shifting one block."""
    blocks: list[ScheduleBlock]
    block_id: str = Field(alias="blockId")
    minutes: int


class FilterScheduleRequest(WireModel):
    """Request model for the display filter."""
    blocks: list[ScheduleBlock]
    courses: list[Course] = Field(default_factory=list)
    preferences: Preferences = Field(default_factory=Preferences)


class ToggleCourseRequest(WireModel):
    """Request model for flipping a course's access permission."""
    courses: list[Course]
    course_id: str = Field(alias="courseId")


class ShowScheduleRequest(WireModel):
    """Request model for formatted schedule display."""
    blocks: list[ScheduleBlock]
    timezone: t.Optional[str] = None


class ScheduleResponse(WireModel):
    """Response model carrying an ordered block list."""
    blocks: list[ScheduleBlock]


class CoursesResponse(WireModel):
    """Response model carrying courses."""
    courses: list[Course]


class ShowScheduleResponse(WireModel):
    """Response model for formatted schedule display."""
    formatted_schedule: str


class SyncResponse(WireModel):
    """Response model for a Canvas sync, possibly served from offline data."""
    courses: list[Course] = Field(default_factory=list)
    assignments: list[Assignment] = Field(default_factory=list)
    events: list[PersonalEvent] = Field(default_factory=list)
    schedule: list[ScheduleBlock] = Field(default_factory=list)
    status: str = ""
    offline: bool = False
