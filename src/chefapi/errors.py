"""Exception hierarchy for chefapi."""

from typing import Any


class ChefAPIError(Exception):
    """Base class for all chefapi errors."""


class HTTPError(ChefAPIError):
    """Raised when the Chef server answers with an error status.

    Attributes:
        status_code: HTTP status returned by the server.
        path: Request path relative to the server URL.
        body: Decoded error body, if the server sent one.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        path: str = "",
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.path = path
        self.body = body


class HTTPNotFound(HTTPError):
    """Raised when no resource exists at the requested path (404)."""


class HTTPConflict(HTTPError):
    """Raised when the server rejects a write because the resource exists (409)."""


class InvalidResource(ChefAPIError):
    """Raised when a resource fails local validation before any request."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__(f"Invalid resource: {'; '.join(self.errors)}")


class UnknownConnector(ChefAPIError):
    """Raised when no administrative connector answers on a host."""

    def __init__(self, host: str) -> None:
        self.host = host
        super().__init__(f"No connector ports open on '{host}'")


class ConfigError(ChefAPIError):
    """Raised when configuration loading or validation fails."""
