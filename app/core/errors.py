"""Error types raised by the portal and its backend client."""

from fastapi import status

GENERIC_FAILURE_MESSAGE = "Request failed"
SESSION_EXPIRED_MESSAGE = "Session expired. Please login again."


class PortalError(Exception):
    """Base error type."""


class ApiError(PortalError):
    """Non-2xx answer from the backend API, carrying its message when present."""

    def __init__(self, status_code: int, message: str = GENERIC_FAILURE_MESSAGE) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class SessionExpiredError(ApiError):
    """Terminal auth failure: tokens are gone and the user must log in again."""

    def __init__(self, message: str = SESSION_EXPIRED_MESSAGE) -> None:
        super().__init__(status.HTTP_401_UNAUTHORIZED, message)


class RefreshError(PortalError):
    """The refresh-token exchange could not be performed."""


class TenantRequiredError(PortalError):
    """The request needs a tenant context but the host resolved to none."""

    def __init__(self, host: str = "") -> None:
        super().__init__(f"Tenant context required (host: {host or 'unknown'})")
        self.host = host
