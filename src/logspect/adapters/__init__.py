"""Adapters connecting logspect to captures and the logging module."""
