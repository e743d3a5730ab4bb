# -*- coding: utf-8 -*-
"""Operations applied to a schedule after synthesis.

None of these re-run synthesis: shifting a block, toggling a course or
flipping a preference only changes what is shown.
"""
from __future__ import annotations

import typing as t
from dataclasses import replace
from datetime import datetime

from planner.models import Course, PersonalEvent, Preferences, ScheduleBlock
from planner.timeutils import add_minutes, parse_instant, utcnow

EDITED_SUFFIX = " (edited)"


def adjust_block(blocks: t.Sequence[ScheduleBlock], block_id: str, minutes: float) -> list[ScheduleBlock]:
    """Shift one block by a signed number of minutes.

    Start and end move together, so the duration is kept. The note gets
    " (edited)" appended on every call. No re-clamping or re-sorting happens.

    :param blocks: Current schedule.
    :param block_id: Id of the block to move; unknown ids leave the schedule as is.
    :param minutes: Signed shift in minutes.
    :return: A new list; the input blocks are not modified.
    """
    adjusted: list[ScheduleBlock] = []
    for block in blocks:
        if block.id != block_id:
            adjusted.append(block)
            continue
        adjusted.append(
            replace(
                block,
                start=add_minutes(block.start, minutes),
                end=add_minutes(block.end, minutes),
                note=(block.note or "") + EDITED_SUFFIX,
            )
        )
    return adjusted


def is_block_visible(block: ScheduleBlock, courses: t.Sequence[Course], preferences: Preferences) -> bool:
    """Decide whether a block is shown under the current toggles."""
    if block.source == "canvas":
        course = next((c for c in courses if c.id == block.course_id), None)
        return course is not None and course.allow_access and preferences.include_canvas
    if block.source == "personal":
        return preferences.include_personal
    return True


def filter_visible_blocks(
        blocks: t.Sequence[ScheduleBlock],
        courses: t.Sequence[Course],
        preferences: Preferences,
) -> list[ScheduleBlock]:
    return [block for block in blocks if is_block_visible(block, courses, preferences)]


def toggle_course_access(courses: t.Sequence[Course], course_id: str) -> list[Course]:
    """Return a new course list with one course's access permission flipped."""
    return [
        replace(course, allow_access=not course.allow_access) if course.id == course_id else course
        for course in courses
    ]


def create_personal_event(
        title: str,
        start: t.Union[str, datetime],
        end: t.Union[str, datetime],
        now: t.Optional[datetime] = None,
) -> PersonalEvent:
    """Create a personal event from user input.

    :raises ValueError: If a field is blank.
    :raises InvalidTimestampError: If start or end cannot be parsed.
    """
    if not title or not title.strip() or not start or not end:
        raise ValueError("A personal event needs a title, a start and an end.")
    created = now or utcnow()
    return PersonalEvent(
        id=f"user-{int(created.timestamp() * 1000)}",
        title=title.strip(),
        start=parse_instant(start),
        end=parse_instant(end),
    )
