# -*- coding: utf-8 -*-
"""Deterministic schedule synthesis.

Merges permitted course assignments, personal events and one AI focus-sprint
block into a single list ordered by start time.
"""
from __future__ import annotations

import logging
import typing as t
from datetime import datetime, timedelta

from planner.models import Assignment, Course, PersonalEvent, Preferences, ScheduleBlock
from planner.timeutils import add_minutes, clamp_to_focus, format_local, utcnow

_logger = logging.getLogger("planner")

# Block length in minutes per assignment weight; anything else is homework
DURATION_MINUTES: dict[str, int] = {"exam": 120, "project": 90, "homework": 60}
AI_SPRINT_MINUTES = 90
AI_BLOCK_ID = "ai-personalized"
AI_BLOCK_LABEL = "AI Study Sprint"
PERSONAL_NOTE = "Synced from personal calendar."
FALLBACK_COURSE_LABEL = "Course"

REMINDER_DESCRIPTIONS: dict[str, str] = {
    "gentle": "Gentle reminders at the start of each block.",
    "proactive": "Extra reminders with check-ins on progress mid-block.",
    "smart": "Smart reminders that adapt if work spills over.",
}


def describe_reminder(mode: str) -> str:
    """Return the reminder-style description; unknown modes read as smart."""
    return REMINDER_DESCRIPTIONS.get(mode, REMINDER_DESCRIPTIONS["smart"])


def duration_for(weight: str) -> int:
    return DURATION_MINUTES.get(weight, DURATION_MINUTES["homework"])


def _assignment_blocks(
        assignments: t.Sequence[Assignment],
        courses: t.Sequence[Course],
        preferences: Preferences,
) -> list[ScheduleBlock]:
    allowed_course_ids = {c.id for c in courses if c.allow_access}
    course_names = {c.id: c.name for c in courses}

    permitted = sorted(
        (a for a in assignments if a.course_id in allowed_course_ids),
        key=lambda a: a.due,
    )

    blocks: list[ScheduleBlock] = []
    for index, assignment in enumerate(permitted):
        # Sooner-due work gets the shorter lead; each later item backs off one more hour
        tentative = assignment.due - timedelta(hours=index + 3)
        start = clamp_to_focus(tentative, preferences)
        end = add_minutes(start, duration_for(assignment.weight))
        course_name = course_names.get(assignment.course_id) or FALLBACK_COURSE_LABEL
        blocks.append(
            ScheduleBlock(
                id=f"canvas-{assignment.id}",
                label=f"{course_name}: {assignment.title}",
                start=start,
                end=end,
                source="canvas",
                course_id=assignment.course_id,
                note=f"Prioritize because due {format_local(assignment.due, preferences.timezone)}.",
            )
        )
    return blocks


def _personal_blocks(events: t.Sequence[PersonalEvent], preferences: Preferences) -> list[ScheduleBlock]:
    if not preferences.include_personal:
        return []
    return [
        ScheduleBlock(
            id=f"personal-{event.id}",
            label=event.title,
            start=event.start,
            end=event.end,
            source="personal",
            note=PERSONAL_NOTE,
        )
        for event in events
    ]


def _ai_block(preferences: Preferences, now: datetime) -> ScheduleBlock:
    start = clamp_to_focus(now, preferences)
    return ScheduleBlock(
        id=AI_BLOCK_ID,
        label=AI_BLOCK_LABEL,
        start=start,
        end=add_minutes(start, AI_SPRINT_MINUTES),
        source="ai",
        note=f"Consider habits: {preferences.consider_habits}. {describe_reminder(preferences.reminder_mode)}",
    )


def synthesize(
        assignments: t.Sequence[Assignment],
        courses: t.Sequence[Course],
        events: t.Sequence[PersonalEvent],
        preferences: Preferences,
        now: t.Optional[datetime] = None,
) -> list[ScheduleBlock]:
    """Build the ordered schedule for one set of inputs.

    Inputs are never mutated. The only time dependency is the AI sprint block,
    anchored at `now` (current time when omitted).

    :param assignments: Assignments from the course-data provider.
    :param courses: Courses with their access permission.
    :param events: Personal calendar events.
    :param preferences: Focus window, habits and toggles.
    :param now: Anchor for the AI sprint block.
    :return: Blocks in ascending start order; ties keep personal, assignment, AI order.
    """
    personal = _personal_blocks(events, preferences)
    course_work = _assignment_blocks(assignments, courses, preferences)
    sprint = _ai_block(preferences, now or utcnow())

    combined = [*personal, *course_work, sprint]
    # sorted() is stable, so equal starts keep the concatenation order
    schedule = sorted(combined, key=lambda block: block.start)
    _logger.debug(
        "Synthesized %d block(s): %d personal, %d assignment, 1 ai",
        len(schedule), len(personal), len(course_work),
    )
    return schedule
