# -*- coding: utf-8 -*-
"""Tests for the Canvas client and the offline fallback."""
import json

import httpx
import pytest

from course_provider.client import CanvasClient, get_canvas_client, infer_weight
from course_provider.sync import OFFLINE_STATUS, sync_course_data
from shared.config import Configuration
from shared.errors import CourseProviderError, MissingCredentialsError
from tests.conftest import utc


COURSES = [
    {"id": 101, "name": "Ethics in Computing", "course_code": "CS3377"},
    {"id": 102, "name": "", "course_code": "MATH2319"},
    {"id": 103, "name": None, "course_code": None},
]

ASSIGNMENTS = {
    "101": [
        {"id": 1, "name": "Final Project Proposal", "due_at": "2024-01-12T23:59:00Z", "course_id": 101},
        {"id": 2, "name": "Reading Notes", "due_at": None, "course_id": 101},
    ],
    "102": [
        {"id": 3, "name": "Midterm EXAM", "due_at": "2024-01-15T14:00:00Z", "course_id": 102},
        {"id": 4, "name": "", "due_at": "2024-01-16T14:00:00Z", "course_id": 102},
    ],
    "103": [],
}


def canvas_handler(request: httpx.Request) -> httpx.Response:
    """Serve a tiny slice of the Canvas API."""
    assert request.headers["Authorization"] == "Bearer secret"
    path = request.url.path
    if path == "/api/v1/courses":
        assert request.url.params["enrollment_state"] == "active"
        assert request.url.params["per_page"] == "50"
        return httpx.Response(200, json=COURSES)
    if path.startswith("/api/v1/courses/") and path.endswith("/assignments"):
        course_id = path.split("/")[4]
        assert request.url.params["bucket"] == "upcoming"
        return httpx.Response(200, json=ASSIGNMENTS.get(course_id, []))
    return httpx.Response(404, text="not found")


@pytest.fixture()
def canvas() -> CanvasClient:
    client = CanvasClient("school.instructure.com", "secret", transport=httpx.MockTransport(canvas_handler))
    yield client
    client.close()


@pytest.mark.parametrize(
    "title,weight",
    [("Midterm Exam", "exam"), ("Group PROJECT", "project"), ("Exam project review", "exam"),
     ("Problem Set 3", "homework"), ("", "homework"), (None, "homework")],
)
def test_infer_weight(title, weight):
    assert infer_weight(title) == weight


def test_fetch_courses_uses_name_fallbacks(canvas):
    courses = canvas.fetch_courses()
    assert [c.id for c in courses] == ["101", "102", "103"]
    assert [c.name for c in courses] == ["Ethics in Computing", "MATH2319", "Course 103"]
    assert all(c.allow_access for c in courses)


def test_fetch_assignments_skips_undated_and_infers_weight(canvas):
    assignments = canvas.fetch_assignments(["101", "102"])
    assert [a.id for a in assignments] == ["1", "3", "4"]
    first, exam, untitled = assignments
    assert first.course_id == "101"
    assert first.weight == "project"
    assert first.due == utc(2024, 1, 12, 23, 59)
    assert exam.weight == "exam"
    assert untitled.title == "Assignment 4"
    assert untitled.weight == "homework"


def test_http_failure_carries_status_and_body():
    def failing(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text='{"errors":[{"message":"Invalid access token."}]}')

    with CanvasClient("school.instructure.com", "secret", transport=httpx.MockTransport(failing)) as client:
        with pytest.raises(CourseProviderError) as excinfo:
            client.fetch_courses()
    assert excinfo.value.status_code == 401
    assert "Invalid access token" in excinfo.value.body
    assert "401" in str(excinfo.value)


def test_assignment_failure_names_the_course():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="boom")

    with CanvasClient("school.instructure.com", "secret", transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(CourseProviderError, match="course 101"):
            client.fetch_assignments(["101"])


def test_transport_failure_is_a_provider_error():
    def unreachable(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("no route to host", request=request)

    with CanvasClient("school.instructure.com", "secret", transport=httpx.MockTransport(unreachable)) as client:
        with pytest.raises(CourseProviderError):
            client.fetch_courses()


def test_missing_credentials_fail_fast():
    with pytest.raises(MissingCredentialsError):
        get_canvas_client(Configuration(canvas_domain=None, canvas_token=None))
    with pytest.raises(MissingCredentialsError):
        CanvasClient("school.instructure.com", "")


def test_sync_fetches_assignments_for_permitted_courses(canvas):
    result = sync_course_data(client=canvas)
    assert result.offline is False
    assert len(result.courses) == 3
    assert {a.course_id for a in result.assignments} == {"101", "102"}
    assert result.status == "Canvas synced (3 courses, 3 assignments)."
    assert result.events == []


def test_sync_falls_back_to_offline_data_without_credentials(caplog):
    result = sync_course_data(Configuration(canvas_domain=None, canvas_token=None), now=utc(2024, 1, 10, 12))
    assert result.offline is True
    assert result.status == OFFLINE_STATUS
    assert [c.id for c in result.courses] == ["cs3377", "math2319", "hist1301"]
    assert [a.id for a in result.assignments] == ["a1", "a2", "a3"]
    assert result.assignments[0].due == utc(2024, 1, 12, 0, 0)
    assert len(result.events) == 2
    assert [b.id for b in result.schedule] == ["block-1"]
    assert "Canvas sync failed" in caplog.text


def test_sync_falls_back_on_http_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text=json.dumps({"message": "maintenance"}))

    with CanvasClient("school.instructure.com", "secret", transport=httpx.MockTransport(handler)) as client:
        result = sync_course_data(client=client)
    assert result.offline is True
    assert "503" in result.error


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>login</html>"),
        httpx.Response(200, json={"errors": "not a list"}),
        httpx.Response(200, json=[{"name": "no id"}]),
    ],
)
def test_unusable_success_body_is_a_provider_error(response):
    def handler(request: httpx.Request) -> httpx.Response:
        return response

    with CanvasClient("school.instructure.com", "secret", transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(CourseProviderError) as excinfo:
            client.fetch_courses()
    assert excinfo.value.status_code == 200


def test_sync_falls_back_when_canvas_serves_a_login_page():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>login</html>")

    with CanvasClient("school.instructure.com", "secret", transport=httpx.MockTransport(handler)) as client:
        result = sync_course_data(client=client)
    assert result.offline is True
    assert "invalid JSON" in result.error
