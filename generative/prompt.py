# -*- coding: utf-8 -*-
"""Prompt construction for generative plans."""
from __future__ import annotations

import typing as t

from planner.models import Assignment, PersonalEvent, Preferences
from planner.timeutils import format_instant
from prompts import render_prompt

PROMPT_NAME = "generative_planner_prompt"


def build_prompt(
        assignments: t.Sequence[Assignment],
        events: t.Sequence[PersonalEvent],
        preferences: Preferences,
) -> str:
    """Encode assignments, events and preferences into the planner prompt.

    The same inputs always produce the same text.
    """
    assignment_list = "\n".join(
        f"- {a.title} (course {a.course_id}), due {format_instant(a.due)}, type {a.weight}"
        for a in assignments
    )
    event_list = "\n".join(
        f"- {e.title}: {format_instant(e.start)} to {format_instant(e.end)}"
        for e in events
    )
    return render_prompt(
        PROMPT_NAME,
        focus_start=preferences.focus_start,
        focus_end=preferences.focus_end,
        break_minutes=preferences.break_minutes,
        reminder_mode=preferences.reminder_mode,
        notifications_enabled="true" if preferences.notifications_enabled else "false",
        assignment_list=assignment_list,
        event_list=event_list,
        habits=preferences.consider_habits,
    )
