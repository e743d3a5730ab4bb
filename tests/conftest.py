import sys
from datetime import datetime, timezone
from pathlib import Path
from types import SimpleNamespace

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from planner.models import Assignment, Course, PersonalEvent, Preferences  # noqa: E402


def utc(*args: int) -> datetime:
    """Shorthand for an aware UTC datetime."""
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture()
def preferences() -> Preferences:
    """Default preferences pinned to UTC so results don't depend on the machine."""
    return Preferences(focus_start="08:00", focus_end="18:00", timezone="UTC")


@pytest.fixture()
def now() -> datetime:
    return utc(2024, 1, 10, 10, 0)


@pytest.fixture()
def courses() -> list[Course]:
    return [
        Course(id="cs", name="CS 3377 - Ethics in Computing", allow_access=True),
        Course(id="math", name="MATH 2319 - Statistics", allow_access=True),
        Course(id="hist", name="HIST 1301 - Modern History", allow_access=False),
    ]


@pytest.fixture()
def assignments() -> list[Assignment]:
    return [
        Assignment(id="a1", course_id="cs", title="Position Paper Draft", due=utc(2024, 1, 12, 15, 0), weight="project"),
        Assignment(id="a2", course_id="math", title="Midterm Exam", due=utc(2024, 1, 11, 12, 0), weight="exam"),
        Assignment(id="a3", course_id="hist", title="Reading Response", due=utc(2024, 1, 13, 5, 0), weight="homework"),
    ]


@pytest.fixture()
def events() -> list[PersonalEvent]:
    return [
        PersonalEvent(id="p1", title="Work shift", start=utc(2024, 1, 10, 15, 0), end=utc(2024, 1, 10, 17, 0)),
    ]


class FakeCompletions:
    """Stand-in for client.chat.completions with a canned answer or error."""

    def __init__(self, content: str = None, error: Exception = None) -> None:
        self.content = content
        self.error = error
        self.calls: list[dict] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeGenerativeClient:
    """Minimal async client shaped like openai.AsyncOpenAI."""

    def __init__(self, content: str = None, error: Exception = None) -> None:
        self.completions = FakeCompletions(content=content, error=error)
        self.chat = SimpleNamespace(completions=self.completions)
        self.closed = False

    async def close(self) -> None:
        self.closed = True


@pytest.fixture()
def fake_generative_client():
    """Factory for fake generative clients."""
    return FakeGenerativeClient
