"""Shared helpers: logging decorators, JSON and resource loading, VTK glue."""
