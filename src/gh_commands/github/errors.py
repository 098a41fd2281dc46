"""Typed errors raised by the REST invocation layer.

Every non-success response is translated into exactly one of these classes
so callers can branch on the outcome (``except NotFoundError``) instead of
inspecting status codes.
"""

from datetime import datetime
from typing import Any


class InvalidParameterError(ValueError):
    """Raised when a command receives invalid or missing parameters."""


class GitHubApiError(Exception):
    """Base exception for failed GitHub API calls."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        url: str = "",
        documentation_url: str | None = None,
        body: Any = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.url = url
        self.documentation_url = documentation_url
        self.body = body
        super().__init__(message)

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.status_code}: {self.message}"


class AuthenticationError(GitHubApiError):
    """Missing or invalid credentials (401)."""


class AuthorizationError(GitHubApiError):
    """Authenticated caller lacks permission for the resource (403)."""


class NotFoundError(GitHubApiError):
    """Resource does not exist or is hidden from the caller (404)."""


class ValidationError(GitHubApiError):
    """Request rejected with field-level validation messages (422)."""

    def __init__(
        self, message: str, errors: list[dict[str, Any]] | None = None, **kwargs: Any
    ) -> None:
        self.errors = errors or []
        super().__init__(message, **kwargs)

    def __str__(self) -> str:
        base = super().__str__()
        if not self.errors:
            return base
        details = "; ".join(_format_field_error(error) for error in self.errors)
        return f"{base} ({details})"


class RateLimitExceededError(GitHubApiError):
    """Still rate limited after the retry budget was spent."""

    def __init__(
        self,
        message: str,
        reset_at: datetime | None = None,
        retry_after: float | None = None,
        **kwargs: Any,
    ) -> None:
        self.reset_at = reset_at
        self.retry_after = retry_after
        super().__init__(message, **kwargs)


class TransientError(GitHubApiError):
    """Server or network failure that persisted through every retry."""


class UnknownApiError(GitHubApiError):
    """Unexpected status code or a body that could not be parsed."""


def _format_field_error(error: Any) -> str:
    if not isinstance(error, dict):
        return str(error)
    if error.get("message"):
        return str(error["message"])
    parts = [str(error[key]) for key in ("resource", "field", "code") if error.get(key)]
    return " ".join(parts) or "invalid"
