"""Sync course data from Canvas, falling back to offline sample data."""
from __future__ import annotations

import logging
import typing as t
from dataclasses import dataclass, field
from datetime import datetime

from course_provider.client import CanvasClient, get_canvas_client
from course_provider.sample_data import (
    sample_assignments,
    sample_courses,
    sample_events,
    starter_schedule,
)
from planner.models import Assignment, Course, PersonalEvent, ScheduleBlock
from shared.config import Configuration
from shared.errors import PlannerError

_logger = logging.getLogger("course_provider")

OFFLINE_STATUS = "Canvas sync unavailable. Showing offline data."


@dataclass
class SyncResult:
    """Outcome of one sync attempt.

    `events` and `schedule` are only filled in offline mode, where the sample
    calendar and starter schedule stand in for the user's own data.
    """
    courses: list[Course] = field(default_factory=list)
    assignments: list[Assignment] = field(default_factory=list)
    events: list[PersonalEvent] = field(default_factory=list)
    schedule: list[ScheduleBlock] = field(default_factory=list)
    status: str = ""
    offline: bool = False
    error: t.Optional[str] = None


def offline_result(now: t.Optional[datetime] = None, error: t.Optional[str] = None) -> SyncResult:
    return SyncResult(
        courses=sample_courses(),
        assignments=sample_assignments(now),
        events=sample_events(now),
        schedule=starter_schedule(now),
        status=OFFLINE_STATUS,
        offline=True,
        error=error,
    )


def sync_course_data(
        config: t.Optional[Configuration] = None,
        client: t.Optional[CanvasClient] = None,
        now: t.Optional[datetime] = None,
) -> SyncResult:
    """Fetch courses, then assignments for the permitted ones.

    Any planner error (missing credentials, HTTP failure, bad timestamps)
    yields the offline sample set instead of raising.
    """
    try:
        owns_client = client is None
        if client is None:
            client = get_canvas_client(config)
        try:
            courses = client.fetch_courses()
            allowed = [course.id for course in courses if course.allow_access]
            assignments = client.fetch_assignments(allowed)
        finally:
            if owns_client:
                client.close()
    except PlannerError as e:
        _logger.warning("Canvas sync failed, using offline data: %s", e)
        return offline_result(now, error=str(e))

    return SyncResult(
        courses=courses,
        assignments=assignments,
        status=f"Canvas synced ({len(courses)} courses, {len(assignments)} assignments).",
    )
