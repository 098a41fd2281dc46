"""GitHub REST invocation layer."""

from gh_commands.github.auth import (
    AnonymousAuth,
    BasicAuth,
    CredentialProvider,
    GitHubAuth,
)
from gh_commands.github.errors import (
    AuthenticationError,
    AuthorizationError,
    GitHubApiError,
    InvalidParameterError,
    NotFoundError,
    RateLimitExceededError,
    TransientError,
    UnknownApiError,
    ValidationError,
)
from gh_commands.github.http import (
    CallDescriptor,
    InvocationResult,
    RestInvoker,
)
from gh_commands.github.pagination import PageCursor, next_page_cursor, parse_link_header
from gh_commands.github.ratelimit import RateLimitInfo, RateLimitKind

__all__ = [
    # Auth
    "AnonymousAuth",
    "AuthenticationError",
    "AuthorizationError",
    "BasicAuth",
    # Invoker
    "CallDescriptor",
    "CredentialProvider",
    # Errors
    "GitHubApiError",
    "GitHubAuth",
    "InvalidParameterError",
    "InvocationResult",
    "NotFoundError",
    # Pagination
    "PageCursor",
    "RateLimitExceededError",
    "RateLimitInfo",
    "RateLimitKind",
    "RestInvoker",
    "TransientError",
    "UnknownApiError",
    "ValidationError",
    "next_page_cursor",
    "parse_link_header",
]
