"""Pydantic models shared by the REST services."""
