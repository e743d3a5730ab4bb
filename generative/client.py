"""
Generative plan requester.

Sends one prompt to the Gemini OpenAI-compatible chat endpoint and parses the
answer into schedule blocks. Exactly one request per call: no retries, no
batching, no streaming. Cancelling the awaiting task aborts the request.
"""
from __future__ import annotations

import logging
import typing as t

import openai
from openai import AsyncOpenAI

from generative.parser import parse_schedule_lines
from generative.prompt import build_prompt
from planner.models import Assignment, PersonalEvent, Preferences, ScheduleBlock
from shared.config import Configuration
from shared.errors import EmptyResponseError, GenerativeServiceError
from shared.http import safe_text

_logger = logging.getLogger("generative")

TEMPERATURE = 0.2


def get_generative_client(config: Configuration) -> AsyncOpenAI:
    """Build an async client for the configured generative service.

    :raises MissingCredentialsError: If no API key is configured.
    """
    config.validate_gemini()
    return AsyncOpenAI(
        api_key=config.gemini_api_key,
        base_url=config.gemini_base_url,
        timeout=config.gemini_timeout,
        max_retries=0,
    )


def _first_text(completion: t.Any) -> str:
    choices = getattr(completion, "choices", None) or []
    if not choices:
        return ""
    message = getattr(choices[0], "message", None)
    return (getattr(message, "content", None) or "").strip()


async def request_plan(
        assignments: t.Sequence[Assignment],
        events: t.Sequence[PersonalEvent],
        preferences: Preferences,
        config: t.Optional[Configuration] = None,
        client: t.Optional[AsyncOpenAI] = None,
) -> list[ScheduleBlock]:
    """Ask the generative service for a plan.

    Blocks come back in the order the service listed them; they are not
    re-sorted, unlike the synthesizer's output.

    Args:
        assignments: Assignments to schedule
        events: Personal events to keep free
        preferences: Focus window, reminders and habits
        config: Connection settings; read from the environment if None
        client: Pre-built async client; one is created and closed if None

    Returns:
        Parsed schedule blocks with ids gemini-0, gemini-1, ...

    Raises:
        MissingCredentialsError: No API key, raised before any network call
        GenerativeServiceError: The service answered with an error status or could not be reached
        EmptyResponseError: The answer had no text or no parsable lines
    """
    config = config or Configuration()
    config.validate_gemini()
    prompt = build_prompt(assignments, events, preferences)

    owns_client = client is None
    if client is None:
        client = get_generative_client(config)

    _logger.info(
        "Requesting generative plan (%d assignment(s), %d event(s)) from %s",
        len(assignments), len(events), config.gemini_model,
    )
    try:
        completion = await client.chat.completions.create(
            model=config.gemini_model,
            temperature=TEMPERATURE,
            messages=[{"role": "user", "content": prompt}],
        )
    except openai.APIStatusError as e:
        body = safe_text(e.response)
        raise GenerativeServiceError(
            f"Gemini request failed: {e.status_code} {body}".rstrip(),
            status_code=e.status_code,
            body=body,
        ) from e
    except openai.APIError as e:
        raise GenerativeServiceError(f"Gemini request failed: {e}") from e
    finally:
        if owns_client:
            await client.close()

    text = _first_text(completion)
    if not text:
        raise EmptyResponseError("Gemini returned no content.")

    blocks = parse_schedule_lines(text)
    if not blocks:
        raise EmptyResponseError("Could not parse schedule from Gemini response.")

    _logger.debug("Parsed %d block(s) from generative response", len(blocks))
    return blocks
