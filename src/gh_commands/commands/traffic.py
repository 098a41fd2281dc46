"""Repository traffic commands.

Traffic endpoints need push access and cover the last 14 days only.
"""

from typing import Any

from gh_commands.commands.base import CommandGroup, choice, segment
from gh_commands.objects import GitHubObject

PERIODS = ("day", "week")


class TrafficCommands(CommandGroup):
    kind = "traffic"

    def _path(self, owner: str, repository: str, *parts: str) -> str:
        return f"/repos/{segment(owner)}/{segment(repository)}/traffic/" + "/".join(parts)

    async def _items(
        self, path: str, event: str, owner: str, repository: str
    ) -> list[GitHubObject]:
        result = await self._invoker.invoke_single(self._get(path, event))
        return [self._wrap(item, owner=owner, repository=repository) for item in result.data or []]

    async def get_referrers(
        self,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
    ) -> list[GitHubObject]:
        """Top 10 referring sites."""
        owner, repository = self.resolve_repository(owner, repository, uri)
        return await self._items(
            self._path(owner, repository, "popular", "referrers"),
            "traffic.referrers",
            owner,
            repository,
        )

    async def get_paths(
        self,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
    ) -> list[GitHubObject]:
        """Top 10 popular content paths."""
        owner, repository = self.resolve_repository(owner, repository, uri)
        return await self._items(
            self._path(owner, repository, "popular", "paths"), "traffic.paths", owner, repository
        )

    async def _counts(
        self,
        what: str,
        owner: str | None,
        repository: str | None,
        uri: str | None,
        per: str,
    ) -> dict[str, Any]:
        choice(per, "per", PERIODS)
        owner, repository = self.resolve_repository(owner, repository, uri)
        result = await self._invoker.invoke_single(
            self._get(self._path(owner, repository, what), f"traffic.{what}", per=per)
        )
        return dict(result.data or {})

    async def get_views(
        self,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
        per: str = "day",
    ) -> dict[str, Any]:
        """View counts: ``count``, ``uniques`` and a ``views`` breakdown."""
        return await self._counts("views", owner, repository, uri, per)

    async def get_clones(
        self,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
        per: str = "day",
    ) -> dict[str, Any]:
        """Clone counts: ``count``, ``uniques`` and a ``clones`` breakdown."""
        return await self._counts("clones", owner, repository, uri, per)
