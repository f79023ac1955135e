"""Logging and Prometheus instrumentation for chartplan."""
