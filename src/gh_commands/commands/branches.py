"""Branch commands."""

import logging

from gh_commands.commands.base import CommandGroup, require, segment
from gh_commands.objects import GitHubObject

logger = logging.getLogger(__name__)


def _ref_name(name: str) -> str:
    return "/".join(segment(part) for part in name.split("/"))


class BranchCommands(CommandGroup):
    """List, inspect, create and delete branches."""

    kind = "branch"

    def _repo(self, owner: str, repository: str) -> str:
        return f"/repos/{segment(owner)}/{segment(repository)}"

    async def list_branches(
        self,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
        protected: bool | None = None,
    ) -> list[GitHubObject]:
        owner, repository = self.resolve_repository(owner, repository, uri)
        descriptor = self._listing(
            f"{self._repo(owner, repository)}/branches",
            "branch.list",
            protected=None if protected is None else str(protected).lower(),
        )
        return await self._list(descriptor, owner=owner, repository=repository)

    async def get(
        self,
        name: str,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
    ) -> GitHubObject | None:
        require(name, "name")
        owner, repository = self.resolve_repository(owner, repository, uri)
        return await self._single(
            self._get(f"{self._repo(owner, repository)}/branches/{segment(name)}", "branch.get"),
            owner=owner,
            repository=repository,
        )

    async def create(
        self,
        name: str,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
        source_branch: str | None = None,
    ) -> GitHubObject | None:
        """Create ``name`` pointing at the head of ``source_branch``.

        Without ``source_branch`` the repository's default branch is used.
        This chains three calls: repository (for the default branch), source
        branch (for its SHA) and the ref creation itself.
        """
        require(name, "name")
        owner, repository = self.resolve_repository(owner, repository, uri)

        if not source_branch:
            repo = await self._invoker.invoke_single(
                self._get(self._repo(owner, repository), "branch.create.repository")
            )
            source_branch = repo.data["default_branch"]

        source = await self.get(source_branch, owner=owner, repository=repository)
        sha = source["commit"]["sha"] if source else None
        require(sha, "source branch SHA")

        logger.info(
            "Creating branch %s from %s (%s) in %s/%s", name, source_branch, sha, owner, repository
        )
        return await self._single(
            self._send(
                "POST",
                f"{self._repo(owner, repository)}/git/refs",
                "branch.create",
                {"ref": f"refs/heads/{name}", "sha": sha},
            ),
            kind="reference",
            owner=owner,
            repository=repository,
        )

    async def delete(
        self,
        name: str,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
    ) -> None:
        require(name, "name")
        owner, repository = self.resolve_repository(owner, repository, uri)
        await self._no_content(
            self._send(
                "DELETE",
                f"{self._repo(owner, repository)}/git/refs/heads/{_ref_name(name)}",
                "branch.delete",
            )
        )
