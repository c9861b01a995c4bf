"""Core backend infrastructure for the roster-sync backend.

This package contains configuration, logging, and dependency helpers used by
the FastAPI application entrypoint.
"""
