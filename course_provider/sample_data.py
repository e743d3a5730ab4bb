"""Offline sample data used when Canvas is unreachable or not configured."""
from __future__ import annotations

import typing as t
from datetime import datetime, time, timedelta, timezone

from planner.models import Assignment, Course, PersonalEvent, Preferences, ScheduleBlock
from planner.timeutils import utcnow


def _today_at(now: datetime, hour: int, minute: int = 0) -> datetime:
    """Return today's local wall-clock time as an aware UTC instant."""
    local_day = now.astimezone().date()
    return datetime.combine(local_day, time(hour, minute)).astimezone().astimezone(timezone.utc)


def sample_courses() -> list[Course]:
    return [
        Course(id="cs3377", name="CS 3377 - Ethics in Computing", allow_access=True),
        Course(id="math2319", name="MATH 2319 - Statistics", allow_access=True),
        Course(id="hist1301", name="HIST 1301 - Modern History", allow_access=False),
    ]


def sample_assignments(now: t.Optional[datetime] = None) -> list[Assignment]:
    now = now or utcnow()
    return [
        Assignment(
            id="a1",
            course_id="cs3377",
            title="Position Paper Draft",
            due=now + timedelta(hours=36),
            weight="project",
        ),
        Assignment(
            id="a2",
            course_id="cs3377",
            title="Case Study Review",
            due=now + timedelta(hours=72),
            weight="homework",
        ),
        Assignment(
            id="a3",
            course_id="math2319",
            title="Midterm Exam",
            due=now + timedelta(hours=120),
            weight="exam",
        ),
    ]


def sample_events(now: t.Optional[datetime] = None) -> list[PersonalEvent]:
    now = now or utcnow()
    return [
        PersonalEvent(id="p1", title="Work shift", start=_today_at(now, 15), end=_today_at(now, 17)),
        PersonalEvent(id="p2", title="Gym", start=_today_at(now, 18), end=_today_at(now, 19)),
    ]


def default_preferences() -> Preferences:
    return Preferences(
        include_canvas=True,
        include_personal=True,
        consider_habits="I focus best in the morning with short breaks.",
        focus_start="08:00",
        focus_end="18:00",
        break_minutes=15,
        notifications_enabled=True,
        reminder_mode="smart",
    )


def starter_schedule(now: t.Optional[datetime] = None) -> list[ScheduleBlock]:
    now = now or utcnow()
    return [
        ScheduleBlock(
            id="block-1",
            label="Catch up on Canvas announcements",
            start=_today_at(now, 8, 30),
            end=_today_at(now, 9),
            source="ai",
            note="AI generated onboarding task",
        )
    ]
