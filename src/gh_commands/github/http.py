"""GitHub REST invocation with retry, rate limit handling and pagination.

``RestInvoker`` performs one logical API call per method invocation. A call
may span several HTTP round-trips (retries, pages) but never shares mutable
state with other calls, so one invoker can serve many concurrent tasks.
"""

import asyncio
import json
import logging
import time
from collections.abc import AsyncIterator, Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

import httpx

from gh_commands import __version__
from gh_commands.config import Config
from gh_commands.github.auth import AnonymousAuth, CredentialProvider
from gh_commands.github.errors import (
    AuthenticationError,
    AuthorizationError,
    GitHubApiError,
    NotFoundError,
    RateLimitExceededError,
    TransientError,
    UnknownApiError,
    ValidationError,
)
from gh_commands.github.pagination import next_page_cursor
from gh_commands.github.ratelimit import (
    RateLimitInfo,
    classify_rate_limit,
    parse_retry_after,
    rate_limit_wait_seconds,
)
from gh_commands.telemetry import (
    LoggingTelemetrySink,
    NullTelemetrySink,
    TelemetrySink,
    safe_record,
)

logger = logging.getLogger(__name__)

ALLOWED_METHODS = frozenset({"GET", "POST", "PATCH", "PUT", "DELETE"})
DEFAULT_ACCEPT = "application/vnd.github+json"

# Media type suffixes that return non-JSON bodies even though they are
# requested through a vnd.github type.
_NON_JSON_MEDIA = (".raw", ".html", ".diff", ".patch", ".sha", ".text")

SleepFunc = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class CallDescriptor:
    """Immutable description of one logical API operation."""

    method: str
    uri_fragment: str
    body: str | bytes | None = None
    params: Mapping[str, Any] = field(default_factory=dict)
    accept: str = DEFAULT_ACCEPT
    extra_headers: Mapping[str, str] = field(default_factory=dict)
    credential: str | None = None
    max_retries: int | None = None
    retry_delay_seconds: float | None = None
    items_key: str | None = None
    telemetry_event: str | None = None

    def __post_init__(self) -> None:
        method = self.method.upper()
        if method not in ALLOWED_METHODS:
            msg = f"Unsupported HTTP method {self.method!r}"
            raise ValueError(msg)
        if not self.uri_fragment or "://" in self.uri_fragment:
            msg = f"uri_fragment must be a relative API path, got {self.uri_fragment!r}"
            raise ValueError(msg)
        if self.max_retries is not None and self.max_retries < 0:
            msg = "max_retries must not be negative"
            raise ValueError(msg)
        if self.retry_delay_seconds is not None and self.retry_delay_seconds < 0:
            msg = "retry_delay_seconds must not be negative"
            raise ValueError(msg)

        object.__setattr__(self, "method", method)
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))
        object.__setattr__(self, "extra_headers", MappingProxyType(dict(self.extra_headers)))

    @classmethod
    def with_json_body(
        cls,
        method: str,
        uri_fragment: str,
        body: Any = None,
        **kwargs: Any,
    ) -> "CallDescriptor":
        """Build a descriptor, serializing ``body`` to JSON when given."""
        serialized = json.dumps(body) if body is not None else None
        return cls(method, uri_fragment, body=serialized, **kwargs)

    @property
    def expects_json(self) -> bool:
        accept = self.accept.lower()
        return "json" in accept and not any(marker in accept for marker in _NON_JSON_MEDIA)


@dataclass
class InvocationResult:
    """Outcome of a successful HTTP round-trip."""

    status_code: int
    data: Any
    headers: httpx.Headers
    rate_limit: RateLimitInfo | None = None
    url: str = ""
    attempts: int = 1

    @property
    def is_success(self) -> bool:
        """Check if response was successful (2xx status code)."""
        return 200 <= self.status_code < 300


class RestInvoker:
    """Executes REST calls against the GitHub API.

    Features:
    - Authorization header injection from a credential provider
    - Retry with exponential backoff on 5xx, timeouts and connection errors
    - Waiting out primary and secondary rate limits
    - Link header pagination with in-order aggregation
    - Translation of failures into the typed errors of ``github.errors``
    """

    BACKOFF_MULTIPLIER = 2.0

    def __init__(
        self,
        config: Config | None = None,
        credentials: CredentialProvider | None = None,
        telemetry: TelemetrySink | None = None,
        sleep: SleepFunc | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the invoker.

        Args:
            config: Configuration provider. Defaults to ``Config()``.
            credentials: Credential provider. Defaults to anonymous access.
            telemetry: Telemetry sink. Ignored when telemetry is disabled.
            sleep: Awaitable used for backoff waits. Defaults to ``asyncio.sleep``.
            transport: Optional httpx transport, mainly for tests.
        """
        self._config = config or Config()
        self._credentials = credentials or AnonymousAuth()
        if self._config.is_telemetry_disabled():
            self._telemetry: TelemetrySink = NullTelemetrySink()
        else:
            self._telemetry = telemetry or LoggingTelemetrySink()
        self._sleep = sleep or asyncio.sleep
        self._transport = transport
        self._base_url = self._config.api_base_url

        self._client: httpx.AsyncClient | None = None

    @property
    def config(self) -> Config:
        return self._config

    @property
    def base_url(self) -> str:
        return self._base_url

    def _get_headers(self, descriptor: CallDescriptor) -> dict[str, str]:
        """Get headers for one request.

        Returns:
            Dictionary of HTTP headers.
        """
        headers = {
            "Accept": descriptor.accept,
            "X-GitHub-Api-Version": self._config.api.api_version,
            "User-Agent": f"gh-commands/{__version__}",
        }
        if descriptor.body is not None:
            headers["Content-Type"] = "application/json"

        auth_value = descriptor.credential
        if auth_value is None:
            auth_value = self._credentials.get_auth_header_value()
        if auth_value:
            headers["Authorization"] = auth_value

        headers.update(descriptor.extra_headers)
        return headers

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure async client is initialized.

        Returns:
            Active httpx.AsyncClient instance.
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._config.api.timeout_seconds,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    def _backoff_seconds(self, attempt: int, delay: float) -> float:
        backoff = delay * (self.BACKOFF_MULTIPLIER**attempt)
        return min(backoff, self._config.retry.max_backoff_seconds)

    async def _execute(
        self,
        descriptor: CallDescriptor,
        url: str,
        params: Mapping[str, Any] | None,
    ) -> InvocationResult:
        """Run one request through the retry state machine.

        Args:
            descriptor: The call being executed.
            url: Relative path, or absolute URL of a follow-up page.
            params: Query parameters, or None for follow-up pages.

        Returns:
            InvocationResult for the first 2xx response.

        Raises:
            GitHubApiError: Subclass matching the terminal failure.
        """
        client = await self._ensure_client()
        method = descriptor.method
        max_retries = descriptor.max_retries
        if max_retries is None:
            max_retries = self._config.get_max_retries()
        delay = descriptor.retry_delay_seconds
        if delay is None:
            delay = self._config.get_retry_delay_seconds()
        headers = self._get_headers(descriptor)

        attempt = 0
        while True:
            logger.debug("%s %s (attempt %d)", method, url, attempt + 1)

            try:
                response = await client.request(
                    method,
                    url,
                    params=dict(params) if params else None,
                    content=descriptor.body,
                    headers=headers,
                )
            except httpx.TransportError as e:
                if attempt >= max_retries:
                    msg = f"{method} {url} failed after {attempt + 1} attempt(s): {e!r}"
                    raise TransientError(msg, url=url) from e
                wait_seconds = self._backoff_seconds(attempt, delay)
                logger.warning(
                    "Transport error for %s %s: %r. Retry %d/%d in %.1fs",
                    method,
                    url,
                    e,
                    attempt + 1,
                    max_retries,
                    wait_seconds,
                )
                await self._sleep(wait_seconds)
                attempt += 1
                continue
            except httpx.HTTPError as e:
                msg = f"{method} {url} failed: {e!r}"
                raise UnknownApiError(msg, url=url) from e

            status = response.status_code
            if 200 <= status < 300:
                return self._build_result(descriptor, response, attempt + 1)

            body = _safe_json(response)

            if classify_rate_limit(status, response.headers, body) is not None:
                wait_seconds = rate_limit_wait_seconds(response.headers, delay)
                max_wait = self._config.retry.max_rate_limit_wait_seconds
                if attempt >= max_retries or wait_seconds > max_wait:
                    raise _rate_limit_error(response, body, attempt + 1)
                logger.warning(
                    "Rate limited on %s %s (status %d). Waiting %.1fs before retry %d/%d",
                    method,
                    url,
                    status,
                    wait_seconds,
                    attempt + 1,
                    max_retries,
                )
                await self._sleep(wait_seconds)
                attempt += 1
                continue

            if 500 <= status < 600:
                if attempt >= max_retries:
                    raise TransientError(
                        f"Server error after {attempt + 1} attempt(s): {_message(response, body)}",
                        status_code=status,
                        url=str(response.url),
                        body=body,
                    )
                wait_seconds = self._backoff_seconds(attempt, delay)
                logger.warning(
                    "Server error %d for %s %s. Retry %d/%d in %.1fs",
                    status,
                    method,
                    url,
                    attempt + 1,
                    max_retries,
                    wait_seconds,
                )
                await self._sleep(wait_seconds)
                attempt += 1
                continue

            raise _translate_error(response, body)

    def _build_result(
        self,
        descriptor: CallDescriptor,
        response: httpx.Response,
        attempts: int,
    ) -> InvocationResult:
        data: Any = None
        if response.content:
            if descriptor.expects_json:
                try:
                    data = response.json()
                except ValueError as e:
                    raise UnknownApiError(
                        "Response body is not valid JSON",
                        status_code=response.status_code,
                        url=str(response.url),
                        body=response.text,
                    ) from e
            else:
                data = response.text

        return InvocationResult(
            status_code=response.status_code,
            data=data,
            headers=response.headers,
            rate_limit=RateLimitInfo.from_headers(response.headers),
            url=str(response.url),
            attempts=attempts,
        )

    def _record(
        self,
        descriptor: CallDescriptor,
        outcome: str,
        started: float,
        pages: int,
    ) -> None:
        event = descriptor.telemetry_event or f"rest.{descriptor.method.lower()}"
        safe_record(
            self._telemetry,
            event,
            {
                "method": descriptor.method,
                "outcome": outcome,
                "pages": str(pages),
                "duration_ms": str(int((time.monotonic() - started) * 1000)),
            },
        )

    async def invoke_single(self, descriptor: CallDescriptor) -> InvocationResult:
        """Execute a single (non-paginated) API call.

        Args:
            descriptor: Call to perform.

        Returns:
            InvocationResult with the parsed body.

        Raises:
            GitHubApiError: Typed failure once retries are exhausted or the
                failure is permanent.
        """
        started = time.monotonic()
        try:
            result = await self._execute(descriptor, descriptor.uri_fragment, descriptor.params)
        except BaseException as e:
            self._record(descriptor, type(e).__name__, started, pages=0)
            raise
        self._record(descriptor, "success", started, pages=1)
        return result

    async def _collect_pages(self, descriptor: CallDescriptor) -> list[Any]:
        started = time.monotonic()
        items: list[Any] = []
        url = descriptor.uri_fragment
        params: Mapping[str, Any] | None = descriptor.params
        pages = 0
        seen: set[str] = set()

        try:
            while True:
                result = await self._execute(descriptor, url, params)
                seen.add(result.url)
                pages += 1
                page_items = _page_items(descriptor, result)
                items.extend(page_items)
                logger.debug(
                    "Page %d of %s: %d item(s)", pages, descriptor.uri_fragment, len(page_items)
                )

                cursor = next_page_cursor(result.headers)
                if cursor is None:
                    break
                if not cursor.belongs_to(self._base_url):
                    raise UnknownApiError(
                        f"Next page link points at a different host: {cursor.host}",
                        url=result.url,
                    )
                if str(httpx.URL(cursor.url)) in seen:
                    msg = f"Pagination link repeats an already fetched page: {cursor.url}"
                    raise UnknownApiError(msg, url=result.url)
                # The next link already carries the query string.
                url = cursor.url
                params = None
        except BaseException as e:
            self._record(descriptor, type(e).__name__, started, pages=pages)
            raise

        self._record(descriptor, "success", started, pages=pages)
        return items

    async def invoke_multi_page(self, descriptor: CallDescriptor) -> AsyncIterator[Any]:
        """Fetch every page of a listing and yield its items in order.

        All pages are fetched before the first item is yielded, so a failure
        on any page surfaces before the caller sees partial data.

        Args:
            descriptor: GET call for a listing endpoint.

        Yields:
            Items in API order across pages.

        Raises:
            ValueError: If the descriptor is not a GET.
            GitHubApiError: Failure of any page.
        """
        if descriptor.method != "GET":
            msg = f"Pagination requires GET, got {descriptor.method}"
            raise ValueError(msg)

        for item in await self._collect_pages(descriptor):
            yield item

    async def collect(self, descriptor: CallDescriptor) -> list[Any]:
        """Convenience wrapper returning ``invoke_multi_page`` as a list."""
        return [item async for item in self.invoke_multi_page(descriptor)]

    async def close(self) -> None:
        """Close the HTTP client and cleanup resources."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "RestInvoker":
        """Async context manager entry."""
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()


def _safe_json(response: httpx.Response) -> Any:
    """Parse an error body, returning None when it is not JSON."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def _message(response: httpx.Response, body: Any) -> str:
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason_phrase or f"HTTP {response.status_code}"


def _page_items(descriptor: CallDescriptor, result: InvocationResult) -> list[Any]:
    data = result.data
    if data is None:
        return []
    if descriptor.items_key is not None:
        if not isinstance(data, dict) or descriptor.items_key not in data:
            raise UnknownApiError(
                f"Listing body has no {descriptor.items_key!r} field",
                status_code=result.status_code,
                url=result.url,
                body=data,
            )
        data = data[descriptor.items_key]
    if isinstance(data, list):
        return data
    return [data]


def _rate_limit_error(response: httpx.Response, body: Any, attempts: int) -> RateLimitExceededError:
    rate_limit = RateLimitInfo.from_headers(response.headers)
    return RateLimitExceededError(
        f"Rate limit still exceeded after {attempts} attempt(s): {_message(response, body)}",
        reset_at=rate_limit.reset if rate_limit else None,
        retry_after=parse_retry_after(response.headers),
        status_code=response.status_code,
        url=str(response.url),
        body=body,
    )


def _translate_error(response: httpx.Response, body: Any) -> GitHubApiError:
    """Map a permanent failure response to its typed error."""
    status = response.status_code
    message = _message(response, body)
    documentation_url = body.get("documentation_url") if isinstance(body, dict) else None
    kwargs: dict[str, Any] = {
        "status_code": status,
        "url": str(response.url),
        "documentation_url": documentation_url,
        "body": body if body is not None else response.text,
    }

    if status == 404:
        logger.debug("Resource not found (404): %s", response.url)
    else:
        logger.warning("Request failed with %d for %s: %s", status, response.url, message)

    if status == 401:
        return AuthenticationError(message, **kwargs)
    if status == 403:
        return AuthorizationError(message, **kwargs)
    if status == 404:
        return NotFoundError(message, **kwargs)
    if status == 422:
        errors = body.get("errors") if isinstance(body, dict) else None
        if not isinstance(errors, list):
            errors = []
        return ValidationError(message, errors=errors, **kwargs)
    return UnknownApiError(message, **kwargs)
