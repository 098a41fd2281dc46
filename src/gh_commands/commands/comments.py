"""Issue comment commands."""

from datetime import datetime

from gh_commands.commands.base import CommandGroup, choice, positive, require, segment
from gh_commands.objects import GitHubObject

SORTS = ("created", "updated")
DIRECTIONS = ("asc", "desc")


class CommentCommands(CommandGroup):
    """Comments on issues and pull requests."""

    kind = "comment"

    def _base(self, owner: str, repository: str) -> str:
        return f"/repos/{segment(owner)}/{segment(repository)}/issues"

    async def list_comments(
        self,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
        issue: int | None = None,
        since: datetime | str | None = None,
        sort: str | None = None,
        direction: str | None = None,
    ) -> list[GitHubObject]:
        """List comments of one issue, or of every issue in the repository."""
        positive(issue, "issue")
        owner, repository = self.resolve_repository(owner, repository, uri)
        if isinstance(since, datetime):
            since = since.isoformat()

        if issue is not None:
            descriptor = self._listing(
                f"{self._base(owner, repository)}/{issue}/comments",
                "comment.list",
                since=since,
            )
            return await self._list(
                descriptor, owner=owner, repository=repository, issue_number=issue
            )

        choice(sort, "sort", SORTS)
        choice(direction, "direction", DIRECTIONS)
        descriptor = self._listing(
            f"{self._base(owner, repository)}/comments",
            "comment.list",
            since=since,
            sort=sort,
            direction=direction,
        )
        return await self._list(descriptor, owner=owner, repository=repository)

    async def get(
        self,
        comment_id: int,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
    ) -> GitHubObject | None:
        positive(require(comment_id, "comment_id"), "comment_id")
        owner, repository = self.resolve_repository(owner, repository, uri)
        return await self._single(
            self._get(f"{self._base(owner, repository)}/comments/{comment_id}", "comment.get"),
            owner=owner,
            repository=repository,
        )

    async def create(
        self,
        issue: int,
        body: str,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
    ) -> GitHubObject | None:
        positive(require(issue, "issue"), "issue")
        require(body, "body")
        owner, repository = self.resolve_repository(owner, repository, uri)
        return await self._single(
            self._send(
                "POST",
                f"{self._base(owner, repository)}/{issue}/comments",
                "comment.create",
                {"body": body},
            ),
            owner=owner,
            repository=repository,
            issue_number=issue,
        )

    async def update(
        self,
        comment_id: int,
        body: str,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
    ) -> GitHubObject | None:
        positive(require(comment_id, "comment_id"), "comment_id")
        require(body, "body")
        owner, repository = self.resolve_repository(owner, repository, uri)
        return await self._single(
            self._send(
                "PATCH",
                f"{self._base(owner, repository)}/comments/{comment_id}",
                "comment.update",
                {"body": body},
            ),
            owner=owner,
            repository=repository,
        )

    async def delete(
        self,
        comment_id: int,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
    ) -> None:
        positive(require(comment_id, "comment_id"), "comment_id")
        owner, repository = self.resolve_repository(owner, repository, uri)
        await self._no_content(
            self._send(
                "DELETE",
                f"{self._base(owner, repository)}/comments/{comment_id}",
                "comment.delete",
            )
        )
