"""Shared configuration, errors and logging helpers."""
from .config import Configuration
from .errors import (
    CourseProviderError,
    EmptyResponseError,
    GenerativeServiceError,
    InvalidTimestampError,
    MissingCredentialsError,
    PlannerError,
    RequestError,
)

__all__ = [
    "Configuration",
    "CourseProviderError",
    "EmptyResponseError",
    "GenerativeServiceError",
    "InvalidTimestampError",
    "MissingCredentialsError",
    "PlannerError",
    "RequestError",
]
