"""Codespace commands."""

import logging

from gh_commands.commands.base import CommandGroup, compact, positive, require, segment
from gh_commands.objects import GitHubObject

logger = logging.getLogger(__name__)


class CodespaceCommands(CommandGroup):
    """Codespaces of the authenticated user.

    Listing endpoints wrap the items as ``{"total_count": n, "codespaces": [...]}``.
    """

    kind = "codespace"

    async def list_codespaces(
        self,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
        repository_id: int | None = None,
    ) -> list[GitHubObject]:
        """Codespaces of the authenticated user, optionally limited to one repository.

        Repository scoping uses ``owner``/``repository``/``uri`` when any of
        them is given; ``repository_id`` filters the user-level listing.
        """
        positive(repository_id, "repository_id")
        if owner or repository or uri:
            owner, repository = self.resolve_repository(owner, repository, uri)
            descriptor = self._listing(
                f"/repos/{segment(owner)}/{segment(repository)}/codespaces",
                "codespace.list",
                items_key="codespaces",
            )
            return await self._list(descriptor, owner=owner, repository=repository)

        descriptor = self._listing(
            "/user/codespaces",
            "codespace.list",
            items_key="codespaces",
            repository_id=repository_id,
        )
        return await self._list(descriptor)

    async def get(self, name: str) -> GitHubObject | None:
        require(name, "name")
        return await self._single(self._get(f"/user/codespaces/{segment(name)}", "codespace.get"))

    async def create(
        self,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
        ref: str | None = None,
        machine: str | None = None,
        location: str | None = None,
        display_name: str | None = None,
        idle_timeout_minutes: int | None = None,
        devcontainer_path: str | None = None,
    ) -> GitHubObject | None:
        """Create a codespace for a repository. GitHub answers 201 or 202."""
        positive(idle_timeout_minutes, "idle_timeout_minutes")
        owner, repository = self.resolve_repository(owner, repository, uri)
        body = compact(
            ref=ref,
            machine=machine,
            location=location,
            display_name=display_name,
            idle_timeout_minutes=idle_timeout_minutes,
            devcontainer_path=devcontainer_path,
        )
        logger.info("Creating codespace for %s/%s", owner, repository)
        return await self._single(
            self._send(
                "POST",
                f"/repos/{segment(owner)}/{segment(repository)}/codespaces",
                "codespace.create",
                body,
            ),
            owner=owner,
            repository=repository,
        )

    async def start(self, name: str) -> GitHubObject | None:
        require(name, "name")
        return await self._single(
            self._send("POST", f"/user/codespaces/{segment(name)}/start", "codespace.start")
        )

    async def stop(self, name: str) -> GitHubObject | None:
        require(name, "name")
        return await self._single(
            self._send("POST", f"/user/codespaces/{segment(name)}/stop", "codespace.stop")
        )

    async def delete(self, name: str) -> None:
        require(name, "name")
        await self._no_content(
            self._send("DELETE", f"/user/codespaces/{segment(name)}", "codespace.delete")
        )
