"""FastAPI schedule service."""
