"""Organization team commands."""

from gh_commands.commands.base import CommandGroup, choice, compact, require, segment
from gh_commands.objects import GitHubObject

PRIVACY = ("secret", "closed")
ROLES = ("member", "maintainer", "all")
NOTIFICATION_SETTINGS = ("notifications_enabled", "notifications_disabled")


class TeamCommands(CommandGroup):
    kind = "team"

    def _path(self, organization: str, slug: str | None = None) -> str:
        path = f"/orgs/{segment(organization)}/teams"
        return path if slug is None else f"{path}/{segment(slug)}"

    async def list_teams(self, organization: str | None = None) -> list[GitHubObject]:
        """Teams of ``organization`` (default owner when omitted)."""
        organization = self.resolve_owner(organization)
        return await self._list(
            self._listing(self._path(organization), "team.list"), organization=organization
        )

    async def get(self, slug: str, organization: str | None = None) -> GitHubObject | None:
        require(slug, "slug")
        organization = self.resolve_owner(organization)
        return await self._single(
            self._get(self._path(organization, slug), "team.get"), organization=organization
        )

    async def create(
        self,
        name: str,
        organization: str | None = None,
        description: str | None = None,
        privacy: str | None = None,
        maintainers: list[str] | None = None,
        repo_names: list[str] | None = None,
        parent_team_id: int | None = None,
        notification_setting: str | None = None,
    ) -> GitHubObject | None:
        require(name, "name")
        choice(privacy, "privacy", PRIVACY)
        choice(notification_setting, "notification_setting", NOTIFICATION_SETTINGS)
        organization = self.resolve_owner(organization)
        body = compact(
            name=name,
            description=description,
            privacy=privacy,
            maintainers=maintainers,
            repo_names=repo_names,
            parent_team_id=parent_team_id,
            notification_setting=notification_setting,
        )
        return await self._single(
            self._send("POST", self._path(organization), "team.create", body),
            organization=organization,
        )

    async def update(
        self,
        slug: str,
        organization: str | None = None,
        name: str | None = None,
        description: str | None = None,
        privacy: str | None = None,
        parent_team_id: int | None = None,
    ) -> GitHubObject | None:
        require(slug, "slug")
        choice(privacy, "privacy", PRIVACY)
        organization = self.resolve_owner(organization)
        body = compact(
            name=name,
            description=description,
            privacy=privacy,
            parent_team_id=parent_team_id,
        )
        return await self._single(
            self._send("PATCH", self._path(organization, slug), "team.update", body),
            organization=organization,
        )

    async def delete(self, slug: str, organization: str | None = None) -> None:
        require(slug, "slug")
        organization = self.resolve_owner(organization)
        await self._no_content(self._send("DELETE", self._path(organization, slug), "team.delete"))

    async def list_members(
        self,
        slug: str,
        organization: str | None = None,
        role: str = "all",
    ) -> list[GitHubObject]:
        require(slug, "slug")
        choice(role, "role", ROLES)
        organization = self.resolve_owner(organization)
        return await self._list(
            self._listing(f"{self._path(organization, slug)}/members", "team.members", role=role),
            kind="user",
            team_slug=slug,
        )

    async def list_repositories(
        self, slug: str, organization: str | None = None
    ) -> list[GitHubObject]:
        require(slug, "slug")
        organization = self.resolve_owner(organization)
        return await self._list(
            self._listing(f"{self._path(organization, slug)}/repos", "team.repositories"),
            kind="repository",
            team_slug=slug,
        )
