# -*- coding: utf-8 -*-
"""Plain-text rendering of schedules."""
from __future__ import annotations

import typing as t
from datetime import datetime

from planner.models import ScheduleBlock
from planner.timeutils import resolve_timezone

SOURCE_ICONS = {"canvas": "📚", "personal": "📅", "ai": "✨"}


def format_datetime(dt: datetime, tz_name: t.Optional[str] = None) -> str:
    """Format an instant as 'Mon 1/15 2:30 PM' in the given zone (local if None)."""
    local = dt.astimezone(resolve_timezone(tz_name))
    hour = local.hour % 12 or 12
    suffix = "AM" if local.hour < 12 else "PM"
    return f"{local:%a} {local.month}/{local.day} {hour}:{local.minute:02d} {suffix}"


def truncate_title(title: str, max_length: int = 45) -> str:
    """Truncate title to max_length characters, adding ellipsis if needed."""
    if len(title) <= max_length:
        return title
    return title[:max_length - 3] + "..."


def format_schedule(blocks: t.Sequence[ScheduleBlock], tz_name: t.Optional[str] = None) -> str:
    """Format a schedule as a clean table.

    :param blocks: Blocks in display order.
    :param tz_name: Zone for the times; local if None.
    :return: Table text, or a short message for an empty schedule.
    """
    if not blocks:
        return "🗓️ No schedule blocks."

    lines = []
    lines.append("🗓️ SCHEDULE")
    lines.append("=" * 110)
    lines.append(f"{'#':<4} {'':<3}{'Label':<40} {'Start':<18} {'End':<18} {'Note':<25}")
    lines.append("-" * 110)

    for idx, block in enumerate(blocks, 1):
        icon = SOURCE_ICONS.get(block.source, "•")
        note = truncate_title(block.note, 25) if block.note else "—"
        lines.append(
            f"{idx:<4} {icon:<3}{truncate_title(block.label, 40):<40} "
            f"{format_datetime(block.start, tz_name):<18} "
            f"{format_datetime(block.end, tz_name):<18} {note:<25}"
        )

    lines.append("=" * 110)
    lines.append(f"Total: {len(blocks)} block(s)")
    return "\n".join(lines)
