"""REST services and their shared wire models."""
