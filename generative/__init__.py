"""Generative plan requester: prompt building, request and response parsing."""
from .client import get_generative_client, request_plan
from .parser import parse_schedule_lines
from .prompt import build_prompt

__all__ = ["build_prompt", "get_generative_client", "parse_schedule_lines", "request_plan"]
