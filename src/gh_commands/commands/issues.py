"""Issue commands."""

import logging
from datetime import datetime

from gh_commands.commands.base import CommandGroup, choice, compact, positive, require, segment
from gh_commands.objects import GitHubObject

logger = logging.getLogger(__name__)

STATES = ("open", "closed", "all")
SORTS = ("created", "updated", "comments")
DIRECTIONS = ("asc", "desc")
LOCK_REASONS = ("off-topic", "too heated", "resolved", "spam")
STATE_REASONS = ("completed", "not_planned", "reopened")


def _iso(value: datetime | str | None) -> str | None:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


class IssueCommands(CommandGroup):
    """Read and modify repository issues."""

    kind = "issue"

    def _path(self, owner: str, repository: str, *parts: object) -> str:
        suffix = "".join(f"/{segment(part)}" for part in parts)
        return f"/repos/{segment(owner)}/{segment(repository)}/issues{suffix}"

    async def list_issues(
        self,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
        state: str = "open",
        labels: list[str] | None = None,
        assignee: str | None = None,
        creator: str | None = None,
        mentioned: str | None = None,
        milestone: int | str | None = None,
        since: datetime | str | None = None,
        sort: str | None = None,
        direction: str | None = None,
        include_pull_requests: bool = False,
    ) -> list[GitHubObject]:
        """List issues of a repository.

        The issues endpoint also returns pull requests; they are dropped
        unless ``include_pull_requests`` is set.
        """
        owner, repository = self.resolve_repository(owner, repository, uri)
        choice(state, "state", STATES)
        choice(sort, "sort", SORTS)
        choice(direction, "direction", DIRECTIONS)

        descriptor = self._listing(
            self._path(owner, repository),
            "issue.list",
            state=state,
            labels=",".join(labels) if labels else None,
            assignee=assignee,
            creator=creator,
            mentioned=mentioned,
            milestone=milestone,
            since=_iso(since),
            sort=sort,
            direction=direction,
        )
        logger.info("Fetching issues for %s/%s (state=%s)", owner, repository, state)
        issues = await self._list(descriptor, owner=owner, repository=repository)
        if include_pull_requests:
            return issues
        return [issue for issue in issues if "pull_request" not in issue]

    async def get(
        self,
        issue: int,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
    ) -> GitHubObject | None:
        require(issue, "issue")
        positive(issue, "issue")
        owner, repository = self.resolve_repository(owner, repository, uri)
        return await self._single(
            self._get(self._path(owner, repository, issue), "issue.get"),
            owner=owner,
            repository=repository,
        )

    async def create(
        self,
        title: str,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
        body: str | None = None,
        assignees: list[str] | None = None,
        labels: list[str] | None = None,
        milestone: int | None = None,
    ) -> GitHubObject | None:
        require(title, "title")
        positive(milestone, "milestone")
        owner, repository = self.resolve_repository(owner, repository, uri)
        payload = compact(
            title=title,
            body=body,
            assignees=assignees,
            labels=labels,
            milestone=milestone,
        )
        return await self._single(
            self._send("POST", self._path(owner, repository), "issue.create", payload),
            owner=owner,
            repository=repository,
        )

    async def update(
        self,
        issue: int,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
        title: str | None = None,
        body: str | None = None,
        state: str | None = None,
        state_reason: str | None = None,
        assignees: list[str] | None = None,
        labels: list[str] | None = None,
        milestone: int | None = None,
        clear_milestone: bool = False,
    ) -> GitHubObject | None:
        """Update an issue. ``clear_milestone`` removes any milestone."""
        require(issue, "issue")
        positive(issue, "issue")
        choice(state, "state", ("open", "closed"))
        choice(state_reason, "state_reason", STATE_REASONS)
        positive(milestone, "milestone")
        owner, repository = self.resolve_repository(owner, repository, uri)

        payload = compact(
            title=title,
            body=body,
            state=state,
            state_reason=state_reason,
            assignees=assignees,
            labels=labels,
            milestone=milestone,
        )
        if clear_milestone:
            payload["milestone"] = None

        return await self._single(
            self._send("PATCH", self._path(owner, repository, issue), "issue.update", payload),
            owner=owner,
            repository=repository,
        )

    async def lock(
        self,
        issue: int,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
        reason: str | None = None,
    ) -> None:
        require(issue, "issue")
        positive(issue, "issue")
        choice(reason, "reason", LOCK_REASONS)
        owner, repository = self.resolve_repository(owner, repository, uri)
        await self._no_content(
            self._send(
                "PUT",
                self._path(owner, repository, issue, "lock"),
                "issue.lock",
                compact(lock_reason=reason),
            )
        )

    async def unlock(
        self,
        issue: int,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
    ) -> None:
        require(issue, "issue")
        positive(issue, "issue")
        owner, repository = self.resolve_repository(owner, repository, uri)
        await self._no_content(
            self._send("DELETE", self._path(owner, repository, issue, "lock"), "issue.unlock")
        )
