# -*- coding: utf-8 -*-
"""Tests for deterministic schedule synthesis."""
import copy
from dataclasses import replace

import pytest

from planner.models import Assignment, Course, PersonalEvent, Preferences
from planner.synthesizer import describe_reminder, synthesize
from planner.timeutils import parse_clock
from tests.conftest import utc


def _canvas(blocks):
    return [b for b in blocks if b.source == "canvas"]


def test_assignments_of_closed_courses_never_appear(assignments, courses, events, preferences, now):
    """Only courses with access allowed contribute blocks."""
    blocks = synthesize(assignments, courses, events, preferences, now=now)
    canvas_ids = {b.id for b in _canvas(blocks)}
    assert canvas_ids == {"canvas-a1", "canvas-a2"}
    assert all(b.course_id != "hist" for b in blocks)


def test_output_is_sorted_by_start(assignments, courses, events, preferences, now):
    blocks = synthesize(assignments, courses, events, preferences, now=now)
    starts = [b.start for b in blocks]
    assert starts == sorted(starts)


def test_backward_scheduling_by_queue_position(assignments, courses, events, preferences, now):
    """The i-th most urgent assignment starts (i + 3) hours before its due date."""
    blocks = {b.id: b for b in synthesize(assignments, courses, events, preferences, now=now)}
    # a2 is due first: 12:00 - 3h
    assert blocks["canvas-a2"].start == utc(2024, 1, 11, 9, 0)
    # a1 is second: 15:00 - 4h
    assert blocks["canvas-a1"].start == utc(2024, 1, 12, 11, 0)


@pytest.mark.parametrize("weight,minutes", [("exam", 120), ("project", 90), ("homework", 60)])
def test_duration_by_weight(weight, minutes, preferences, now):
    course = Course(id="c", name="Course C")
    assignment = Assignment(id="x", course_id="c", title="Thing", due=utc(2024, 1, 11, 14, 0), weight=weight)
    block = _canvas(synthesize([assignment], [course], [], preferences, now=now))[0]
    assert block.duration_minutes == minutes


def test_unknown_weight_defaults_to_an_hour(preferences, now):
    course = Course(id="c", name="Course C")
    assignment = Assignment(id="x", course_id="c", title="Quiz", due=utc(2024, 1, 11, 14, 0), weight="quiz")
    block = _canvas(synthesize([assignment], [course], [], preferences, now=now))[0]
    assert block.duration_minutes == 60


def test_tentative_start_before_window_snaps_to_window_start(preferences, now):
    course = Course(id="c", name="Course C")
    early = Assignment(id="x", course_id="c", title="Early", due=utc(2024, 1, 11, 9, 0), weight="exam")
    block = _canvas(synthesize([early], [course], [], preferences, now=now))[0]
    assert block.start == utc(2024, 1, 11, 8, 0)
    assert block.end == utc(2024, 1, 11, 10, 0)


def test_tentative_start_after_window_moves_to_next_morning(preferences, now):
    course = Course(id="c", name="Course C")
    late = Assignment(id="x", course_id="c", title="Late", due=utc(2024, 1, 11, 23, 0), weight="homework")
    at_end = Assignment(id="y", course_id="c", title="At end", due=utc(2024, 1, 13, 22, 0), weight="homework")
    blocks = {b.id: b for b in synthesize([late, at_end], [course], [], preferences, now=now)}
    # 23:00 - 3h = 20:00, outside the window
    assert blocks["canvas-x"].start == utc(2024, 1, 12, 8, 0)
    # 22:00 - 4h = 18:00, exactly the window end
    assert blocks["canvas-y"].start == utc(2024, 1, 14, 8, 0)


def test_synthesized_starts_stay_in_focus_window(assignments, courses, events, preferences, now):
    start_clock = parse_clock(preferences.focus_start)
    end_clock = parse_clock(preferences.focus_end)
    for block in synthesize(assignments, courses, [], preferences, now=now):
        clock = (block.start.hour, block.start.minute)
        assert start_clock <= clock < end_clock, f"{block.id} starts outside the window at {clock}"


def test_labels_and_notes(assignments, courses, preferences, now):
    blocks = {b.id: b for b in synthesize(assignments, courses, [], preferences, now=now)}
    exam = blocks["canvas-a2"]
    assert exam.label == "MATH 2319 - Statistics: Midterm Exam"
    assert exam.course_id == "math"
    assert exam.note == "Prioritize because due Thu 1/11/2024, 12:00 PM."


def test_unnamed_course_falls_back_to_generic_label(preferences, now):
    course = Course(id="c", name="")
    assignment = Assignment(id="x", course_id="c", title="Lab 2", due=utc(2024, 1, 11, 14, 0))
    block = _canvas(synthesize([assignment], [course], [], preferences, now=now))[0]
    assert block.label == "Course: Lab 2"


def test_personal_events_pass_through_verbatim(events, preferences, now):
    blocks = synthesize([], [], events, preferences, now=now)
    personal = [b for b in blocks if b.source == "personal"]
    assert len(personal) == 1
    block = personal[0]
    assert block.id == "personal-p1"
    assert block.label == "Work shift"
    assert (block.start, block.end) == (events[0].start, events[0].end)
    assert block.note == "Synced from personal calendar."
    assert block.course_id is None


def test_malformed_event_range_is_not_corrected(preferences, now):
    backwards = PersonalEvent(id="p", title="Odd", start=utc(2024, 1, 10, 17, 0), end=utc(2024, 1, 10, 15, 0))
    block = [b for b in synthesize([], [], [backwards], preferences, now=now) if b.source == "personal"][0]
    assert block.start > block.end


def test_personal_events_excluded_when_disabled(events, now):
    """With personal events off and no assignments, only the AI sprint remains."""
    prefs = Preferences(include_personal=False, timezone="UTC")
    blocks = synthesize([], [], events, prefs, now=now)
    assert len(blocks) == 1
    assert blocks[0].id == "ai-personalized"
    assert blocks[0].source == "ai"


def test_ai_block_is_anchored_at_now(preferences, now):
    preferences = replace(preferences, consider_habits="Short sprints", reminder_mode="gentle")
    ai = synthesize([], [], [], preferences, now=now)[0]
    assert ai.label == "AI Study Sprint"
    assert ai.start == now
    assert ai.duration_minutes == 90
    assert ai.note == "Consider habits: Short sprints. Gentle reminders at the start of each block."


def test_ai_block_is_clamped_into_window(preferences):
    ai = synthesize([], [], [], preferences, now=utc(2024, 1, 10, 21, 30))[0]
    assert ai.start == utc(2024, 1, 11, 8, 0)
    assert ai.end == utc(2024, 1, 11, 9, 30)


def test_equal_starts_keep_personal_assignment_ai_order(preferences, now):
    course = Course(id="c", name="C")
    # 13:00 - 3h = 10:00, same as now and as the personal event
    assignment = Assignment(id="x", course_id="c", title="T", due=utc(2024, 1, 10, 13, 0))
    event = PersonalEvent(id="p", title="Meet", start=now, end=utc(2024, 1, 10, 11, 0))
    blocks = synthesize([assignment], [course], [event], preferences, now=now)
    assert [b.source for b in blocks] == ["personal", "canvas", "ai"]


def test_inputs_are_not_mutated(assignments, courses, events, preferences, now):
    before = copy.deepcopy((assignments, courses, events, preferences))
    synthesize(assignments, courses, events, preferences, now=now)
    assert (assignments, courses, events, preferences) == before


@pytest.mark.parametrize(
    "mode,expected",
    [
        ("gentle", "Gentle reminders at the start of each block."),
        ("proactive", "Extra reminders with check-ins on progress mid-block."),
        ("smart", "Smart reminders that adapt if work spills over."),
        ("something-else", "Smart reminders that adapt if work spills over."),
    ],
)
def test_describe_reminder(mode, expected):
    assert describe_reminder(mode) == expected
