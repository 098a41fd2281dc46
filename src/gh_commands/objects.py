"""Decorated API result objects.

``GitHubObject`` keeps the parsed JSON untouched and adds a few derived
fields, computed once, that make it easy to feed one command's result into
the next (owner, repository, identifier, canonical URLs).
"""

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

# Resource kind -> raw field that identifies it within its parent
IDENTIFIER_FIELDS: dict[str, str] = {
    "repository": "full_name",
    "issue": "number",
    "pull_request": "number",
    "comment": "id",
    "label": "name",
    "milestone": "number",
    "branch": "name",
    "event": "id",
    "gist": "id",
    "gist_commit": "version",
    "team": "slug",
    "project": "id",
    "project_column": "id",
    "project_card": "id",
    "codespace": "name",
    "user": "login",
    "content": "path",
    "reference": "ref",
    "tag": "name",
}

_REPO_API_URL = re.compile(r"/repos/(?P<owner>[^/]+)/(?P<repo>[^/?#]+)")
_REPO_HTML_URL = re.compile(r"^https?://[^/]+/(?P<owner>[^/]+)/(?P<repo>[^/?#]+)")


@dataclass(frozen=True)
class GitHubObject(Mapping[str, Any]):
    """Raw API fields plus derived convenience fields."""

    kind: str
    raw: Mapping[str, Any]
    identifier: Any = None
    resource_url: str | None = None
    repository_url: str | None = None
    owner_name: str | None = None
    repository_name: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.raw[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.raw)

    def __len__(self) -> int:
        return len(self.raw)

    def to_dict(self) -> dict[str, Any]:
        """Raw fields merged with the derived ones, for serialization."""
        derived = {
            "kind": self.kind,
            "identifier": self.identifier,
            "resource_url": self.resource_url,
            "repository_url": self.repository_url,
            "owner_name": self.owner_name,
            "repository_name": self.repository_name,
        }
        return {**self.raw, **dict(self.extra), "_derived": derived}


def _repository_coordinates(kind: str, raw: Mapping[str, Any]) -> tuple[str | None, str | None]:
    if kind == "repository":
        owner = raw.get("owner") or {}
        return (owner.get("login") if isinstance(owner, dict) else None, raw.get("name"))

    repository = raw.get("repository")
    if isinstance(repository, dict) and repository.get("full_name"):
        owner, _, name = str(repository["full_name"]).partition("/")
        return owner, name

    for key in ("repository_url", "url", "html_url"):
        value = raw.get(key)
        if not isinstance(value, str):
            continue
        match = _REPO_API_URL.search(value)
        if match:
            return match.group("owner"), match.group("repo")
    return None, None


def decorate(
    kind: str,
    raw: Any,
    owner: str | None = None,
    repository: str | None = None,
    web_host: str = "https://github.com",
    **extra: Any,
) -> GitHubObject:
    """Wrap a parsed JSON object.

    Args:
        kind: Resource kind, a key of ``IDENTIFIER_FIELDS``.
        raw: Parsed JSON object. Non-mapping values are stored under ``value``.
        owner: Owner login when the caller already knows it.
        repository: Repository name when the caller already knows it.
        web_host: Web host used to build ``repository_url``.
        **extra: Additional derived fields (e.g. ``issue_number`` for comments).

    Returns:
        The decorated object.
    """
    if not isinstance(raw, Mapping):
        raw = {"value": raw}

    derived_owner, derived_repo = _repository_coordinates(kind, raw)
    owner = owner or derived_owner
    repository = repository or derived_repo

    repository_url = None
    if kind == "repository" and raw.get("html_url"):
        repository_url = raw["html_url"]
    elif owner and repository:
        repository_url = f"{web_host.rstrip('/')}/{owner}/{repository}"

    identifier_field = IDENTIFIER_FIELDS.get(kind, "id")

    return GitHubObject(
        kind=kind,
        raw=raw,
        identifier=raw.get(identifier_field),
        resource_url=raw.get("html_url") or raw.get("url"),
        repository_url=repository_url,
        owner_name=owner,
        repository_name=repository,
        extra=extra,
    )


def split_repository_url(uri: str) -> tuple[str, str] | None:
    """Extract ``(owner, repo)`` from a web or API repository URL."""
    match = _REPO_API_URL.search(uri) or _REPO_HTML_URL.match(uri)
    if not match:
        return None
    repo = match.group("repo")
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    return match.group("owner"), repo
