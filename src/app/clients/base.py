"""Shared error types for outbound clients."""


class ClientError(Exception):
    """Base exception for third-party client errors.

    Attributes:
        error_code: Machine-readable error code
        error_message: Human-readable error description
        status_code: Upstream HTTP status, when there was a response
    """

    def __init__(
        self,
        error_code: str,
        error_message: str,
        status_code: int | None = None,
    ) -> None:
        self.error_code = error_code
        self.error_message = error_message
        self.status_code = status_code
        super().__init__(f"{error_code}: {error_message}")


class ClientNotConfiguredError(ClientError):
    """Credentials for the service are missing from settings."""

    def __init__(self, service: str) -> None:
        super().__init__("NOT_CONFIGURED", f"{service} is not configured")
        self.service = service
