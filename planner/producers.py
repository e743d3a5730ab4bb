# -*- coding: utf-8 -*-
"""Interchangeable plan producers.

The deterministic synthesizer and the generative requester produce the same
block shape. Callers pick one; the two code paths are never merged, so the
synthesizer stays usable without network access.
"""
from __future__ import annotations

import typing as t
from datetime import datetime

from planner.models import PlanInputs, ScheduleBlock
from planner.synthesizer import synthesize

if t.TYPE_CHECKING:
    from shared.config import Configuration


class PlanProducer(t.Protocol):
    """Anything that turns plan inputs into schedule blocks."""

    name: str

    async def produce(self, inputs: PlanInputs) -> list[ScheduleBlock]:
        ...


class SynthesizerProducer:
    """Runs the deterministic synthesizer."""

    name = "synthesizer"

    def __init__(self, now: t.Optional[datetime] = None) -> None:
        self.now = now

    async def produce(self, inputs: PlanInputs) -> list[ScheduleBlock]:
        return synthesize(
            inputs.assignments,
            inputs.courses,
            inputs.events,
            inputs.preferences,
            now=self.now,
        )


class GenerativeProducer:
    """Asks the generative service for a plan. Course permissions are not sent."""

    name = "generative"

    def __init__(self, config: t.Optional["Configuration"] = None, client: t.Any = None) -> None:
        self.config = config
        self.client = client

    async def produce(self, inputs: PlanInputs) -> list[ScheduleBlock]:
        from generative.client import request_plan

        return await request_plan(
            inputs.assignments,
            inputs.events,
            inputs.preferences,
            config=self.config,
            client=self.client,
        )


PRODUCERS: dict[str, t.Callable[..., PlanProducer]] = {
    SynthesizerProducer.name: SynthesizerProducer,
    GenerativeProducer.name: GenerativeProducer,
}


def get_producer(name: str, **kwargs: t.Any) -> PlanProducer:
    """Instantiate a producer by name ("synthesizer" or "generative").

    :raises ValueError: For unknown names.
    """
    factory = PRODUCERS.get(name)
    if factory is None:
        raise ValueError(f"Unknown plan producer: {name!r}. Available: {sorted(PRODUCERS)}")
    return factory(**kwargs)
