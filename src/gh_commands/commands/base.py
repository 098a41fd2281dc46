"""Shared plumbing for resource command groups."""

import logging
from collections.abc import Iterable
from typing import Any
from urllib.parse import quote

from gh_commands.config import Config
from gh_commands.github.errors import InvalidParameterError
from gh_commands.github.http import DEFAULT_ACCEPT, CallDescriptor, InvocationResult, RestInvoker
from gh_commands.objects import GitHubObject, decorate, split_repository_url

logger = logging.getLogger(__name__)

PER_PAGE = 100


def require(value: Any, name: str) -> Any:
    """Reject None and empty strings for a required parameter."""
    if value is None or (isinstance(value, str) and not value.strip()):
        msg = f"{name} is required"
        raise InvalidParameterError(msg)
    return value


def choice(value: str | None, name: str, choices: Iterable[str]) -> str | None:
    """Validate an optional enumerated parameter."""
    allowed = tuple(choices)
    if value is not None and value not in allowed:
        msg = f"{name} must be one of {', '.join(allowed)}; got {value!r}"
        raise InvalidParameterError(msg)
    return value


def positive(value: int | None, name: str) -> int | None:
    """Validate an optional positive integer (issue numbers, ids)."""
    if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value < 1):
        msg = f"{name} must be a positive integer; got {value!r}"
        raise InvalidParameterError(msg)
    return value


def compact(**values: Any) -> dict[str, Any]:
    """Drop None values so optional fields are left out of bodies and queries."""
    return {key: value for key, value in values.items() if value is not None}


def segment(value: Any) -> str:
    """Quote one path segment."""
    return quote(str(value), safe="")


class CommandGroup:
    """Base class for a family of resource commands.

    Subclasses map typed parameters to a ``CallDescriptor`` and hand it to
    the invoker; results come back wrapped as ``GitHubObject``.
    """

    kind = "object"

    def __init__(self, invoker: RestInvoker, config: Config | None = None) -> None:
        self._invoker = invoker
        self._config = config or invoker.config

    @property
    def web_host(self) -> str:
        base = self._config.api_base_url
        if base == "https://api.github.com":
            return "https://github.com"
        return base.removesuffix("/api/v3")

    def resolve_repository(
        self,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
    ) -> tuple[str, str]:
        """Resolve owner/repository from explicit values, a URL, or defaults.

        Explicit values win over ``uri``, which wins over the configured
        defaults.

        Raises:
            InvalidParameterError: If either part cannot be resolved.
        """
        if uri and not (owner and repository):
            parsed = split_repository_url(uri)
            if parsed is None:
                msg = f"Cannot extract owner and repository from {uri!r}"
                raise InvalidParameterError(msg)
            owner = owner or parsed[0]
            repository = repository or parsed[1]

        owner = owner or self._config.get_default_owner()
        repository = repository or self._config.get_default_repository()
        if not owner or not repository:
            msg = "owner and repository are required (pass them, a uri, or configure defaults)"
            raise InvalidParameterError(msg)
        return owner, repository

    def resolve_owner(self, owner: str | None) -> str:
        owner = owner or self._config.get_default_owner()
        if not owner:
            msg = "owner is required (pass it or configure a default owner)"
            raise InvalidParameterError(msg)
        return owner

    def _wrap(
        self,
        data: Any,
        kind: str | None = None,
        owner: str | None = None,
        repository: str | None = None,
        **extra: Any,
    ) -> GitHubObject:
        return decorate(
            kind or self.kind,
            data,
            owner=owner,
            repository=repository,
            web_host=self.web_host,
            **extra,
        )

    async def _single(
        self,
        descriptor: CallDescriptor,
        kind: str | None = None,
        owner: str | None = None,
        repository: str | None = None,
        **extra: Any,
    ) -> GitHubObject | None:
        """Run a single call; empty bodies (204) return None."""
        result: InvocationResult = await self._invoker.invoke_single(descriptor)
        if result.data is None:
            return None
        return self._wrap(result.data, kind, owner, repository, **extra)

    async def _list(
        self,
        descriptor: CallDescriptor,
        kind: str | None = None,
        owner: str | None = None,
        repository: str | None = None,
        **extra: Any,
    ) -> list[GitHubObject]:
        """Run a paginated listing and wrap every item."""
        return [
            self._wrap(item, kind, owner, repository, **extra)
            async for item in self._invoker.invoke_multi_page(descriptor)
        ]

    async def _no_content(self, descriptor: CallDescriptor) -> None:
        """Run a call whose success carries no useful body (DELETE, PUT star)."""
        await self._invoker.invoke_single(descriptor)

    @staticmethod
    def _get(path: str, event: str, accept: str = DEFAULT_ACCEPT, **params: Any) -> CallDescriptor:
        query = compact(**params)
        return CallDescriptor("GET", path, params=query, accept=accept, telemetry_event=event)

    @staticmethod
    def _listing(
        path: str,
        event: str,
        items_key: str | None = None,
        accept: str = DEFAULT_ACCEPT,
        **params: Any,
    ) -> CallDescriptor:
        query = {"per_page": PER_PAGE, **compact(**params)}
        return CallDescriptor(
            "GET", path, params=query, accept=accept, items_key=items_key, telemetry_event=event
        )

    @staticmethod
    def _send(
        method: str, path: str, event: str, body: Any = None, **kwargs: Any
    ) -> CallDescriptor:
        return CallDescriptor.with_json_body(method, path, body, telemetry_event=event, **kwargs)
