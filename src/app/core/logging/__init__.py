"""Logging module with structured logging and request tracking."""

from app.core.logging.middleware import RequestLoggingMiddleware


__all__ = [
    "RequestLoggingMiddleware",
]

