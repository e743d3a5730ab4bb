# -*- coding: utf-8 -*-
"""
Data models for courses, assignments, personal events, preferences and
schedule blocks.

Timestamps are aware UTC datetimes. The `from_dict`/`to_dict` pairs are the
only place where the camelCase wire format and ISO strings appear.
"""
from __future__ import annotations

import typing as t
from dataclasses import dataclass, field
from datetime import datetime

from planner.timeutils import format_instant, parse_clock, parse_instant, resolve_timezone


# Type literals for commonly used values
AssignmentWeight = t.Literal["exam", "project", "homework"]
BlockSource = t.Literal["canvas", "personal", "ai"]
ReminderMode = t.Literal["gentle", "smart", "proactive"]

WEIGHTS: tuple[str, ...] = ("exam", "project", "homework")
BLOCK_SOURCES: tuple[str, ...] = ("canvas", "personal", "ai")
REMINDER_MODES: tuple[str, ...] = ("gentle", "smart", "proactive")


@dataclass
class Course:
    """A course from the course-data provider."""
    id: str
    name: str
    allow_access: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, t.Any]) -> "Course":
        return cls(
            id=str(data["id"]),
            name=data.get("name", "") or "",
            allow_access=bool(data.get("allowAccess", True)),
        )

    def to_dict(self) -> dict[str, t.Any]:
        return {"id": self.id, "name": self.name, "allowAccess": self.allow_access}


@dataclass
class Assignment:
    """A due-dated assignment belonging to a course."""
    id: str
    course_id: str
    title: str
    due: datetime
    weight: AssignmentWeight = "homework"

    @classmethod
    def from_dict(cls, data: dict[str, t.Any]) -> "Assignment":
        return cls(
            id=str(data["id"]),
            course_id=str(data["courseId"]),
            title=data.get("title", "") or "",
            due=parse_instant(data["due"]),
            weight=data.get("weight", "homework") or "homework",
        )

    def to_dict(self) -> dict[str, t.Any]:
        return {
            "id": self.id,
            "courseId": self.course_id,
            "title": self.title,
            "due": format_instant(self.due),
            "weight": self.weight,
        }


@dataclass
class PersonalEvent:
    """A busy interval from the personal calendar. start <= end is not enforced."""
    id: str
    title: str
    start: datetime
    end: datetime

    @classmethod
    def from_dict(cls, data: dict[str, t.Any]) -> "PersonalEvent":
        return cls(
            id=str(data["id"]),
            title=data.get("title", "") or "",
            start=parse_instant(data["start"]),
            end=parse_instant(data["end"]),
        )

    def to_dict(self) -> dict[str, t.Any]:
        return {
            "id": self.id,
            "title": self.title,
            "start": format_instant(self.start),
            "end": format_instant(self.end),
        }


@dataclass
class Preferences:
    """User habits and scheduling preferences.

    `timezone` is an IANA zone name for focus-window arithmetic; None uses
    the machine's local zone.
    """
    include_canvas: bool = True
    include_personal: bool = True
    consider_habits: str = "I focus best in the morning with short breaks."
    focus_start: str = "08:00"  # "HH:MM" 24h
    focus_end: str = "18:00"    # "HH:MM" 24h
    break_minutes: int = 15
    notifications_enabled: bool = True
    reminder_mode: str = "smart"
    timezone: t.Optional[str] = None

    _WIRE_KEYS: t.ClassVar[dict[str, str]] = {
        "includeCanvas": "include_canvas",
        "includePersonal": "include_personal",
        "considerHabits": "consider_habits",
        "focusStart": "focus_start",
        "focusEnd": "focus_end",
        "breakMinutes": "break_minutes",
        "notificationsEnabled": "notifications_enabled",
        "reminderMode": "reminder_mode",
        "timezone": "timezone",
    }

    def __post_init__(self) -> None:
        parse_clock(self.focus_start)
        parse_clock(self.focus_end)
        if int(self.break_minutes) < 0:
            raise ValueError(f"break_minutes must be >= 0, got {self.break_minutes}")
        resolve_timezone(self.timezone)

    @classmethod
    def from_dict(cls, data: dict[str, t.Any]) -> "Preferences":
        """Build preferences from wire keys; missing keys keep their defaults."""
        kwargs = {
            attr: data[key] for key, attr in cls._WIRE_KEYS.items() if key in data
        }
        if "break_minutes" in kwargs:
            kwargs["break_minutes"] = int(kwargs["break_minutes"])
        return cls(**kwargs)

    def to_dict(self) -> dict[str, t.Any]:
        return {key: getattr(self, attr) for key, attr in self._WIRE_KEYS.items()}


@dataclass
class ScheduleBlock:
    """One scheduled interval with provenance and an optional note.

    `course_id` is only set for canvas blocks; `note` is None when there is
    nothing to say, which is different from an empty note.
    """
    id: str
    label: str
    start: datetime
    end: datetime
    source: BlockSource
    course_id: t.Optional[str] = None
    note: t.Optional[str] = None

    @property
    def duration_minutes(self) -> float:
        return (self.end - self.start).total_seconds() / 60

    @classmethod
    def from_dict(cls, data: dict[str, t.Any]) -> "ScheduleBlock":
        return cls(
            id=str(data["id"]),
            label=data.get("label", "") or "",
            start=parse_instant(data["start"]),
            end=parse_instant(data["end"]),
            source=data.get("source", "ai") if data.get("source") in BLOCK_SOURCES else "ai",
            course_id=data.get("courseId"),
            note=data.get("note"),
        )

    def to_dict(self) -> dict[str, t.Any]:
        data: dict[str, t.Any] = {
            "id": self.id,
            "label": self.label,
            "start": format_instant(self.start),
            "end": format_instant(self.end),
            "source": self.source,
        }
        if self.course_id is not None:
            data["courseId"] = self.course_id
        if self.note is not None:
            data["note"] = self.note
        return data


@dataclass
class PlanInputs:
    """Everything a plan producer needs for one invocation."""
    assignments: list[Assignment] = field(default_factory=list)
    courses: list[Course] = field(default_factory=list)
    events: list[PersonalEvent] = field(default_factory=list)
    preferences: Preferences = field(default_factory=Preferences)
