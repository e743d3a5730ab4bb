# -*- coding: utf-8 -*-
"""Parse the line-oriented schedule format returned by the generative service.

Each block is one line: ``label | start ISO | end ISO | source | note``.
Lines without a ``|`` are prose and are skipped, as are lines whose start or
end is not a timestamp.
"""
from __future__ import annotations

import logging

from planner.models import BLOCK_SOURCES, ScheduleBlock
from planner.timeutils import parse_instant
from shared.errors import InvalidTimestampError

_logger = logging.getLogger("generative")

DELIMITER = "|"


def parse_schedule_lines(text: str) -> list[ScheduleBlock]:
    """Convert response text into blocks, keeping the order of the lines.

    :param text: Raw response text.
    :return: One block per parsable line, numbered gemini-0, gemini-1, ...
        over the kept lines; empty if none parse.
    """
    lines = [line.strip() for line in text.splitlines()]
    lines = [line for line in lines if line and DELIMITER in line]

    blocks: list[ScheduleBlock] = []
    for line in lines:
        parts = [part.strip() for part in line.split(DELIMITER)]
        parts += [""] * (5 - len(parts))
        label, start, end, source, note = parts[:5]
        try:
            start_at, end_at = parse_instant(start), parse_instant(end)
        except InvalidTimestampError as e:
            _logger.debug("Skipping schedule line %r: %s", line, e)
            continue
        idx = len(blocks)
        blocks.append(
            ScheduleBlock(
                id=f"gemini-{idx}",
                label=label or f"Task {idx + 1}",
                start=start_at,
                end=end_at,
                source=source if source in BLOCK_SOURCES else "ai",
                note=note,
            )
        )
    return blocks
