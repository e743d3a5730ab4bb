"""
Canvas REST client for courses and upcoming assignments.

Both reads fail with a descriptive error when credentials are missing or the
remote call does not succeed; callers fall back to offline sample data.
"""
from __future__ import annotations

import logging
import typing as t

import httpx

from planner.models import Assignment, Course
from planner.timeutils import parse_instant
from shared.config import Configuration
from shared.errors import CourseProviderError, MissingCredentialsError
from shared.http import safe_text

_logger = logging.getLogger("course_provider")

PAGE_SIZE = 50


def infer_weight(title: t.Optional[str]) -> str:
    """Classify an assignment from its title: exam, project, else homework."""
    lowered = (title or "").lower()
    if "exam" in lowered:
        return "exam"
    if "project" in lowered:
        return "project"
    return "homework"


class CanvasClient:
    """Read-only Canvas API client.

    Args:
        domain: Canvas host, e.g. school.instructure.com
        token: Personal access token
        timeout: HTTP timeout in seconds
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """

    def __init__(
            self,
            domain: str,
            token: str,
            timeout: float = 30.0,
            transport: t.Optional[httpx.BaseTransport] = None,
    ) -> None:
        if not domain or not token:
            raise MissingCredentialsError(
                "Canvas domain or token missing. Set CANVAS_DOMAIN and CANVAS_TOKEN."
            )
        self.domain = domain
        self._client = httpx.Client(
            base_url=f"https://{domain}/api/v1",
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> "CanvasClient":
        return self

    def __exit__(self, *exc_info: t.Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _get(self, path: str, params: dict[str, t.Any], what: str) -> list[dict[str, t.Any]]:
        try:
            response = self._client.get(path, params=params)
        except httpx.TimeoutException as e:
            raise CourseProviderError(f"{what} timed out after {self._client.timeout.read} seconds") from e
        except httpx.HTTPError as e:
            raise CourseProviderError(f"{what} failed: {e}") from e

        if not response.is_success:
            body = safe_text(response)
            raise CourseProviderError(
                f"{what} failed: {response.status_code} {body}".rstrip(),
                status_code=response.status_code,
                body=body,
            )
        try:
            data = response.json()
        except ValueError as e:
            raise CourseProviderError(
                f"{what} returned invalid JSON",
                status_code=response.status_code,
                body=safe_text(response),
            ) from e
        if not isinstance(data, list) or not all(isinstance(item, dict) and "id" in item for item in data):
            raise CourseProviderError(
                f"{what} returned an unexpected payload",
                status_code=response.status_code,
                body=safe_text(response),
            )
        return data

    def fetch_courses(self) -> list[Course]:
        """Fetch all active courses; every course starts with access allowed."""
        data = self._get(
            "/courses",
            {"per_page": PAGE_SIZE, "enrollment_state": "active"},
            "Canvas courses",
        )
        courses = [
            Course(
                id=str(item["id"]),
                name=item.get("name") or item.get("course_code") or f"Course {item['id']}",
                allow_access=True,
            )
            for item in data
        ]
        _logger.info("Fetched %d course(s) from %s", len(courses), self.domain)
        return courses

    def fetch_assignments(self, course_ids: t.Iterable[str]) -> list[Assignment]:
        """Fetch upcoming assignments that have a due date, course by course.

        :param course_ids: Identifiers of the permitted courses.
        :return: Assignments in course order, then API order.
        :raises CourseProviderError: On the first failing course.
        """
        assignments: list[Assignment] = []
        for course_id in course_ids:
            data = self._get(
                f"/courses/{course_id}/assignments",
                {"bucket": "upcoming", "per_page": PAGE_SIZE},
                f"Assignments for course {course_id}",
            )
            for item in data:
                if not item.get("due_at"):
                    continue
                title = item.get("name") or f"Assignment {item['id']}"
                assignments.append(
                    Assignment(
                        id=str(item["id"]),
                        course_id=str(course_id),
                        title=title,
                        due=parse_instant(item["due_at"]),
                        weight=infer_weight(item.get("name")),
                    )
                )
        _logger.info("Fetched %d assignment(s)", len(assignments))
        return assignments


def get_canvas_client(
        config: t.Optional[Configuration] = None,
        transport: t.Optional[httpx.BaseTransport] = None,
) -> CanvasClient:
    """Build a Canvas client from configuration.

    :raises MissingCredentialsError: If domain or token are not configured.
    """
    config = config or Configuration()
    config.validate_canvas()
    return CanvasClient(
        domain=config.canvas_domain,
        token=config.canvas_token,
        timeout=config.canvas_timeout,
        transport=transport,
    )
