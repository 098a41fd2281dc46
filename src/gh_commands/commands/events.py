"""Repository and issue event commands."""

from gh_commands.commands.base import CommandGroup, positive, require, segment
from gh_commands.objects import GitHubObject


class EventCommands(CommandGroup):
    kind = "event"

    async def list_repository_events(
        self,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
    ) -> list[GitHubObject]:
        """Public activity events (pushes, forks, stars...) of a repository."""
        owner, repository = self.resolve_repository(owner, repository, uri)
        descriptor = self._listing(
            f"/repos/{segment(owner)}/{segment(repository)}/events", "event.repository.list"
        )
        return await self._list(descriptor, owner=owner, repository=repository)

    async def list_issue_events(
        self,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
        issue: int | None = None,
    ) -> list[GitHubObject]:
        """Timeline events of one issue, or of every issue in the repository."""
        positive(issue, "issue")
        owner, repository = self.resolve_repository(owner, repository, uri)
        base = f"/repos/{segment(owner)}/{segment(repository)}/issues"
        if issue is None:
            descriptor = self._listing(f"{base}/events", "event.issue.list")
            return await self._list(descriptor, owner=owner, repository=repository)
        descriptor = self._listing(f"{base}/{issue}/events", "event.issue.list")
        return await self._list(descriptor, owner=owner, repository=repository, issue_number=issue)

    async def get_issue_event(
        self,
        event_id: int,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
    ) -> GitHubObject | None:
        positive(require(event_id, "event_id"), "event_id")
        owner, repository = self.resolve_repository(owner, repository, uri)
        return await self._single(
            self._get(
                f"/repos/{segment(owner)}/{segment(repository)}/issues/events/{event_id}",
                "event.issue.get",
            ),
            owner=owner,
            repository=repository,
        )
