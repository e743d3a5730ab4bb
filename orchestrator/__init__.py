"""Command line entry point for the study planner."""
