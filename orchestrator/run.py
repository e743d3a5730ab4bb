# -*- coding: utf-8 -*-
import asyncio
import json
import logging
import typing as t
from dataclasses import replace
from pathlib import Path

import click
from dotenv import load_dotenv
from rich.panel import Panel

from course_provider.sample_data import default_preferences
from course_provider.sync import SyncResult, offline_result, sync_course_data
from orchestrator.display import console, create_schedule_table, display_verbose_json
from planner.blocks import adjust_block, filter_visible_blocks, toggle_course_access
from planner.models import Assignment, Course, PersonalEvent, PlanInputs, Preferences
from planner.producers import get_producer
from planner.timeutils import parse_instant
from shared.config import Configuration
from shared.errors import PlannerError, RequestError
from shared.logging_setup import setup_logging

_logger = logging.getLogger("orchestrator")


def load_preferences(path: t.Optional[str]) -> Preferences:
    """Read preferences from a JSON file of camelCase keys; defaults if no path.

    The file may hold the preferences object itself or wrap it under a
    "preferences" key, as the output of `sample` does.
    """
    if not path:
        return default_preferences()
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return Preferences.from_dict(data.get("preferences", data))


def load_inputs(path: str) -> SyncResult:
    """Read courses, assignments and events from a JSON file instead of Canvas."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return SyncResult(
        courses=[Course.from_dict(c) for c in data.get("courses", [])],
        assignments=[Assignment.from_dict(a) for a in data.get("assignments", [])],
        events=[PersonalEvent.from_dict(e) for e in data.get("events", [])],
        status=f"Loaded inputs from {path}.",
    )


def _parse_shifts(ctx: click.Context, param: click.Parameter, values: tuple[str, ...]) -> list[tuple[str, int]]:
    shifts: list[tuple[str, int]] = []
    for value in values:
        block_id, sep, minutes = value.rpartition(":")
        try:
            if not sep or not block_id:
                raise ValueError(value)
            shifts.append((block_id, int(minutes)))
        except ValueError:
            raise click.BadParameter(f"expected BLOCK_ID:MINUTES, got {value!r}", ctx=ctx, param=param)
    return shifts


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
def cli() -> None:
    """Merge coursework, personal events and habits into a daily schedule."""
    load_dotenv()


@cli.command()
@click.option("--preferences", "preferences_path", type=click.Path(exists=True, dir_okay=False),
              help="JSON file with preferences (camelCase keys).")
@click.option("--input", "input_path", type=click.Path(exists=True, dir_okay=False),
              help="JSON file with courses, assignments and events; skips Canvas.")
@click.option("--offline", is_flag=True, help="Use the offline sample data instead of Canvas.")
@click.option("--generative", is_flag=True, help="Ask the generative service instead of the synthesizer.")
@click.option("--shift", "shifts", multiple=True, callback=_parse_shifts, metavar="BLOCK_ID:MINUTES",
              help="Move a block by signed minutes after planning. Repeatable.")
@click.option("--hide-course", "hidden_courses", multiple=True, metavar="COURSE_ID",
              help="Toggle a course's access off for display. Repeatable.")
@click.option("--no-canvas", is_flag=True, help="Hide course blocks from the display.")
@click.option("--no-personal", is_flag=True, help="Hide personal blocks from the display.")
@click.option("--now", "now_text", type=str, help="Pin the current time (ISO) for the AI sprint block.")
@click.option("--json", "as_json", is_flag=True, help="Print blocks as JSON.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
def plan(
        preferences_path: t.Optional[str],
        input_path: t.Optional[str],
        offline: bool,
        generative: bool,
        shifts: list[tuple[str, int]],
        hidden_courses: tuple[str, ...],
        no_canvas: bool,
        no_personal: bool,
        now_text: t.Optional[str],
        as_json: bool,
        verbose: bool,
) -> None:
    """Build today's schedule and print the visible blocks."""
    config = Configuration()
    setup_logging("DEBUG" if verbose else config.log_level)

    try:
        preferences = load_preferences(preferences_path or input_path)
        now = parse_instant(now_text) if now_text else None
        if input_path:
            data = load_inputs(input_path)
        elif offline:
            data = offline_result(now)
        else:
            data = sync_course_data(config, now=now)
    except (PlannerError, ValueError, KeyError, OSError) as e:
        raise click.ClickException(str(e))

    if not as_json:
        console.print(Panel.fit(f"[bold blue]📚 Study Planner[/bold blue]\n{data.status}", border_style="blue"))

    inputs = PlanInputs(
        assignments=data.assignments,
        courses=data.courses,
        events=data.events,
        preferences=preferences,
    )
    if verbose and not as_json:
        display_verbose_json("Preferences", preferences.to_dict())

    if generative:
        producer = get_producer("generative", config=config)
    else:
        producer = get_producer("synthesizer", now=now)

    try:
        blocks = asyncio.run(producer.produce(inputs))
    except RequestError as e:
        _logger.warning("Generative plan unavailable (%s); using the synthesizer", e)
        blocks = asyncio.run(get_producer("synthesizer", now=now).produce(inputs))

    for block_id, minutes in shifts:
        blocks = adjust_block(blocks, block_id, minutes)

    courses = inputs.courses
    for course_id in hidden_courses:
        courses = toggle_course_access(courses, course_id)
    if no_canvas or no_personal:
        preferences = replace(
            preferences,
            include_canvas=preferences.include_canvas and not no_canvas,
            include_personal=preferences.include_personal and not no_personal,
        )

    visible = filter_visible_blocks(blocks, courses, preferences)

    if as_json:
        click.echo(json.dumps([block.to_dict() for block in visible], indent=2))
        return

    console.print(create_schedule_table(visible, preferences.timezone))
    hidden = len(blocks) - len(visible)
    if hidden:
        console.print(f"[dim]{hidden} block(s) hidden by course permissions or preferences.[/dim]")


@cli.command()
def sample() -> None:
    """Print the offline sample inputs as JSON (usable with `plan --input`)."""
    data = offline_result()
    payload = {
        "courses": [c.to_dict() for c in data.courses],
        "assignments": [a.to_dict() for a in data.assignments],
        "events": [e.to_dict() for e in data.events],
        "preferences": default_preferences().to_dict(),
    }
    click.echo(json.dumps(payload, indent=2))


if __name__ == "__main__":
    cli()
