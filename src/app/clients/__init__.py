"""Outbound integrations.

Each client wraps one third-party service, reads its credentials from
settings and raises its own ``ClientError`` subclass. Services decide
whether a failure degrades the response or becomes a 502/503.
"""

from app.clients.base import ClientError, ClientNotConfiguredError


__all__ = ["ClientError", "ClientNotConfiguredError"]
