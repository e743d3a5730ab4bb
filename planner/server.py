# -*- coding: utf-8 -*-
"""MCP tool server exposing the schedule operations.

The raw functions stay importable for direct use; the decorated versions are
registered with the FastMCP instance.
"""
from __future__ import annotations

import typing as t
from datetime import datetime

from fastmcp import FastMCP

from planner.blocks import adjust_block, filter_visible_blocks
from planner.formatting import format_schedule
from planner.models import Assignment, Course, PersonalEvent, Preferences, ScheduleBlock
from planner.synthesizer import synthesize

mcp = FastMCP("StudySchedulePlanner")


def _synthesize_schedule(
        assignments: list[Assignment],
        courses: list[Course],
        events: list[PersonalEvent],
        preferences: Preferences,
        now: t.Optional[datetime] = None,
) -> list[ScheduleBlock]:
    return synthesize(assignments, courses, events, preferences, now=now)


def _adjust_schedule_block(blocks: list[ScheduleBlock], block_id: str, minutes: int) -> list[ScheduleBlock]:
    return adjust_block(blocks, block_id, minutes)


def _filter_schedule(
        blocks: list[ScheduleBlock],
        courses: list[Course],
        preferences: Preferences,
) -> list[ScheduleBlock]:
    return filter_visible_blocks(blocks, courses, preferences)


def _show_schedule(blocks: list[ScheduleBlock], timezone: t.Optional[str] = None) -> str:
    return format_schedule(blocks, timezone)


@mcp.tool()
def synthesize_schedule(
        assignments: list[Assignment],
        courses: list[Course],
        events: list[PersonalEvent],
        preferences: Preferences,
) -> list[ScheduleBlock]:
    """Merge permitted assignments, personal events and an AI focus sprint into one ordered schedule.

    :param assignments: Due-dated assignments.
    :param courses: Courses with their access permission.
    :param events: Personal calendar events.
    :param preferences: Focus window, habits and toggles.
    :return: Schedule blocks sorted by start time.
    """
    return _synthesize_schedule(assignments, courses, events, preferences)


@mcp.tool()
def adjust_schedule_block(blocks: list[ScheduleBlock], block_id: str, minutes: int) -> list[ScheduleBlock]:
    """Shift one block by a signed number of minutes, keeping its duration."""
    return _adjust_schedule_block(blocks, block_id, minutes)


@mcp.tool()
def filter_schedule(
        blocks: list[ScheduleBlock],
        courses: list[Course],
        preferences: Preferences,
) -> list[ScheduleBlock]:
    """Keep only the blocks visible under the current course permissions and preferences."""
    return _filter_schedule(blocks, courses, preferences)


@mcp.tool()
def show_schedule(blocks: list[ScheduleBlock], timezone: t.Optional[str] = None) -> str:
    """Display a schedule as a formatted table.

    :param blocks: Blocks to display, in order.
    :param timezone: IANA zone for the displayed times (local if omitted).
    :return: Formatted table string.
    """
    return _show_schedule(blocks, timezone)


if __name__ == "__main__":
    # Run as an MCP server over stdio
    mcp.run()
