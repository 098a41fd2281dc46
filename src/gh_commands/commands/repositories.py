"""Repository commands."""

import logging

from gh_commands.commands.base import CommandGroup, choice, compact, require, segment
from gh_commands.github.errors import InvalidParameterError
from gh_commands.objects import GitHubObject

logger = logging.getLogger(__name__)

VISIBILITIES = ("all", "public", "private")
USER_REPO_TYPES = ("all", "owner", "public", "private", "member")
ORG_REPO_TYPES = ("all", "public", "private", "forks", "sources", "member")
SORTS = ("created", "updated", "pushed", "full_name")


class RepositoryCommands(CommandGroup):
    """Create, read, update and delete repositories."""

    kind = "repository"

    async def get(
        self,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
    ) -> GitHubObject | None:
        owner, repository = self.resolve_repository(owner, repository, uri)
        return await self._single(
            self._get(f"/repos/{segment(owner)}/{segment(repository)}", "repository.get")
        )

    async def list_repositories(
        self,
        owner: str | None = None,
        organization: str | None = None,
        visibility: str | None = None,
        repo_type: str | None = None,
        sort: str | None = None,
    ) -> list[GitHubObject]:
        """List repositories.

        With ``organization`` lists that org's repositories, with ``owner``
        the user's public repositories, and otherwise the repositories of the
        authenticated user.
        """
        if owner and organization:
            msg = "pass either owner or organization, not both"
            raise InvalidParameterError(msg)
        choice(sort, "sort", SORTS)

        if organization:
            choice(repo_type, "repo_type", ORG_REPO_TYPES)
            descriptor = self._listing(
                f"/orgs/{segment(organization)}/repos",
                "repository.list",
                type=repo_type,
                sort=sort,
            )
        elif owner:
            choice(repo_type, "repo_type", USER_REPO_TYPES)
            descriptor = self._listing(
                f"/users/{segment(owner)}/repos", "repository.list", type=repo_type, sort=sort
            )
        else:
            choice(visibility, "visibility", VISIBILITIES)
            descriptor = self._listing(
                "/user/repos",
                "repository.list",
                visibility=visibility,
                type=repo_type,
                sort=sort,
            )
        return await self._list(descriptor)

    async def create(
        self,
        name: str,
        organization: str | None = None,
        description: str | None = None,
        private: bool | None = None,
        homepage: str | None = None,
        auto_init: bool | None = None,
        gitignore_template: str | None = None,
        license_template: str | None = None,
        has_issues: bool | None = None,
        has_wiki: bool | None = None,
    ) -> GitHubObject | None:
        require(name, "name")
        body = compact(
            name=name,
            description=description,
            private=private,
            homepage=homepage,
            auto_init=auto_init,
            gitignore_template=gitignore_template,
            license_template=license_template,
            has_issues=has_issues,
            has_wiki=has_wiki,
        )
        path = f"/orgs/{segment(organization)}/repos" if organization else "/user/repos"
        logger.info("Creating repository %s", f"{organization}/{name}" if organization else name)
        return await self._single(self._send("POST", path, "repository.create", body))

    async def update(
        self,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
        new_name: str | None = None,
        description: str | None = None,
        homepage: str | None = None,
        private: bool | None = None,
        default_branch: str | None = None,
        archived: bool | None = None,
        has_issues: bool | None = None,
        has_wiki: bool | None = None,
    ) -> GitHubObject | None:
        owner, repository = self.resolve_repository(owner, repository, uri)
        body = compact(
            name=new_name,
            description=description,
            homepage=homepage,
            private=private,
            default_branch=default_branch,
            archived=archived,
            has_issues=has_issues,
            has_wiki=has_wiki,
        )
        return await self._single(
            self._send(
                "PATCH",
                f"/repos/{segment(owner)}/{segment(repository)}",
                "repository.update",
                body,
            )
        )

    async def delete(
        self,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
    ) -> None:
        owner, repository = self.resolve_repository(owner, repository, uri)
        logger.warning("Deleting repository %s/%s", owner, repository)
        await self._no_content(
            self._send(
                "DELETE", f"/repos/{segment(owner)}/{segment(repository)}", "repository.delete"
            )
        )

    async def get_topics(
        self,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
    ) -> list[str]:
        owner, repository = self.resolve_repository(owner, repository, uri)
        result = await self._invoker.invoke_single(
            self._get(f"/repos/{segment(owner)}/{segment(repository)}/topics", "repository.topics")
        )
        return list((result.data or {}).get("names", []))

    async def set_topics(
        self,
        topics: list[str],
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
    ) -> list[str]:
        """Replace the repository topics. An empty list clears them."""
        owner, repository = self.resolve_repository(owner, repository, uri)
        names = [topic.strip().lower() for topic in topics]
        result = await self._invoker.invoke_single(
            self._send(
                "PUT",
                f"/repos/{segment(owner)}/{segment(repository)}/topics",
                "repository.topics.set",
                {"names": names},
            )
        )
        return list((result.data or {}).get("names", []))

    async def list_contributors(
        self,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
        include_anonymous: bool = False,
    ) -> list[GitHubObject]:
        owner, repository = self.resolve_repository(owner, repository, uri)
        descriptor = self._listing(
            f"/repos/{segment(owner)}/{segment(repository)}/contributors",
            "repository.contributors",
            anon="true" if include_anonymous else None,
        )
        return await self._list(descriptor, kind="user", owner=owner, repository=repository)

    async def list_languages(
        self,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
    ) -> dict[str, int]:
        """Bytes of code per language."""
        owner, repository = self.resolve_repository(owner, repository, uri)
        result = await self._invoker.invoke_single(
            self._get(
                f"/repos/{segment(owner)}/{segment(repository)}/languages",
                "repository.languages",
            )
        )
        return dict(result.data or {})

    async def list_tags(
        self,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
    ) -> list[GitHubObject]:
        owner, repository = self.resolve_repository(owner, repository, uri)
        descriptor = self._listing(
            f"/repos/{segment(owner)}/{segment(repository)}/tags", "repository.tags"
        )
        return await self._list(descriptor, kind="tag", owner=owner, repository=repository)

    async def list_forks(
        self,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
        sort: str | None = None,
    ) -> list[GitHubObject]:
        owner, repository = self.resolve_repository(owner, repository, uri)
        choice(sort, "sort", ("newest", "oldest", "stargazers", "watchers"))
        descriptor = self._listing(
            f"/repos/{segment(owner)}/{segment(repository)}/forks", "repository.forks", sort=sort
        )
        return await self._list(descriptor)

    async def create_fork(
        self,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
        organization: str | None = None,
    ) -> GitHubObject | None:
        """Fork a repository. GitHub creates forks asynchronously (202)."""
        owner, repository = self.resolve_repository(owner, repository, uri)
        return await self._single(
            self._send(
                "POST",
                f"/repos/{segment(owner)}/{segment(repository)}/forks",
                "repository.fork",
                compact(organization=organization),
            )
        )
