"""Milestone commands."""

from datetime import datetime

from gh_commands.commands.base import CommandGroup, choice, compact, positive, require, segment
from gh_commands.objects import GitHubObject

STATES = ("open", "closed", "all")
SORTS = ("due_on", "completeness")
DIRECTIONS = ("asc", "desc")


def _due_on(value: datetime | str | None) -> str | None:
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%dT%H:%M:%SZ")
    return value


class MilestoneCommands(CommandGroup):
    kind = "milestone"

    def _path(self, owner: str, repository: str, number: int | None = None) -> str:
        path = f"/repos/{segment(owner)}/{segment(repository)}/milestones"
        return path if number is None else f"{path}/{number}"

    async def list_milestones(
        self,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
        state: str = "open",
        sort: str | None = None,
        direction: str | None = None,
    ) -> list[GitHubObject]:
        choice(state, "state", STATES)
        choice(sort, "sort", SORTS)
        choice(direction, "direction", DIRECTIONS)
        owner, repository = self.resolve_repository(owner, repository, uri)
        descriptor = self._listing(
            self._path(owner, repository),
            "milestone.list",
            state=state,
            sort=sort,
            direction=direction,
        )
        return await self._list(descriptor, owner=owner, repository=repository)

    async def get(
        self,
        number: int,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
    ) -> GitHubObject | None:
        positive(require(number, "number"), "number")
        owner, repository = self.resolve_repository(owner, repository, uri)
        return await self._single(
            self._get(self._path(owner, repository, number), "milestone.get"),
            owner=owner,
            repository=repository,
        )

    async def create(
        self,
        title: str,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
        state: str | None = None,
        description: str | None = None,
        due_on: datetime | str | None = None,
    ) -> GitHubObject | None:
        require(title, "title")
        choice(state, "state", ("open", "closed"))
        owner, repository = self.resolve_repository(owner, repository, uri)
        body = compact(title=title, state=state, description=description, due_on=_due_on(due_on))
        return await self._single(
            self._send("POST", self._path(owner, repository), "milestone.create", body),
            owner=owner,
            repository=repository,
        )

    async def update(
        self,
        number: int,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
        title: str | None = None,
        state: str | None = None,
        description: str | None = None,
        due_on: datetime | str | None = None,
    ) -> GitHubObject | None:
        positive(require(number, "number"), "number")
        choice(state, "state", ("open", "closed"))
        owner, repository = self.resolve_repository(owner, repository, uri)
        body = compact(title=title, state=state, description=description, due_on=_due_on(due_on))
        return await self._single(
            self._send("PATCH", self._path(owner, repository, number), "milestone.update", body),
            owner=owner,
            repository=repository,
        )

    async def delete(
        self,
        number: int,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
    ) -> None:
        positive(require(number, "number"), "number")
        owner, repository = self.resolve_repository(owner, repository, uri)
        await self._no_content(
            self._send("DELETE", self._path(owner, repository, number), "milestone.delete")
        )
