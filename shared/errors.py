"""Exception types raised by the planner packages.

Failures are grouped by where they come from:
    - timestamp parsing at the ingestion boundary
    - the course-data provider (Canvas)
    - the generative plan requester

Callers decide whether to surface a message or fall back to offline data;
nothing here is fatal to the process.
"""
from __future__ import annotations

import typing as t


class PlannerError(RuntimeError):
    """Base class for all planner errors."""


class InvalidTimestampError(PlannerError, ValueError):
    """A timestamp string could not be parsed into an instant."""

    def __init__(self, value: t.Any) -> None:
        super().__init__(f"Invalid timestamp: {value!r}")
        self.value = value


class RequestError(PlannerError):
    """A generative plan request failed."""


class MissingCredentialsError(RequestError):
    """Required connection parameters are not configured.

    Raised before any network attempt, by both the course provider and the
    generative requester.
    """


class GenerativeServiceError(RequestError):
    """The generative text service answered with a non-success status.

    Attributes:
        status_code: HTTP status code of the response
        body: Response body text, or "" if it could not be read
    """

    def __init__(self, message: str, status_code: t.Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class EmptyResponseError(RequestError):
    """The generative service returned no text or no parsable schedule lines."""


class CourseProviderError(PlannerError):
    """A call to the course-data provider failed.

    Attributes:
        status_code: HTTP status code, None for transport failures
        body: Response body text, or "" if it could not be read
    """

    def __init__(self, message: str, status_code: t.Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
