"""Classic project board commands (projects, columns, cards)."""

from gh_commands.commands.base import CommandGroup, choice, compact, positive, require, segment
from gh_commands.github.errors import InvalidParameterError
from gh_commands.github.http import CallDescriptor
from gh_commands.objects import GitHubObject

# Classic projects still sit behind the inertia preview media type.
PROJECTS_ACCEPT = "application/vnd.github.inertia-preview+json"
STATES = ("open", "closed", "all")
CONTENT_TYPES = ("Issue", "PullRequest")


class ProjectCommands(CommandGroup):
    kind = "project"

    def _get_project(self, path: str, event: str) -> CallDescriptor:
        return self._get(path, event, accept=PROJECTS_ACCEPT)

    def _list_project(self, path: str, event: str, **params: object) -> CallDescriptor:
        return self._listing(path, event, accept=PROJECTS_ACCEPT, **params)

    def _send_project(
        self, method: str, path: str, event: str, body: object = None
    ) -> CallDescriptor:
        return self._send(method, path, event, body, accept=PROJECTS_ACCEPT)

    async def list_projects(
        self,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
        organization: str | None = None,
        user: str | None = None,
        state: str = "open",
    ) -> list[GitHubObject]:
        """Projects of an organization, a user, or a repository."""
        choice(state, "state", STATES)
        if organization and user:
            msg = "pass either organization or user, not both"
            raise InvalidParameterError(msg)

        if organization:
            path = f"/orgs/{segment(organization)}/projects"
            return await self._list(self._list_project(path, "project.list", state=state))
        if user:
            path = f"/users/{segment(user)}/projects"
            return await self._list(self._list_project(path, "project.list", state=state))

        owner, repository = self.resolve_repository(owner, repository, uri)
        path = f"/repos/{segment(owner)}/{segment(repository)}/projects"
        return await self._list(
            self._list_project(path, "project.list", state=state),
            owner=owner,
            repository=repository,
        )

    async def get(self, project_id: int) -> GitHubObject | None:
        positive(require(project_id, "project_id"), "project_id")
        return await self._single(self._get_project(f"/projects/{project_id}", "project.get"))

    async def create(
        self,
        name: str,
        body: str | None = None,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
        organization: str | None = None,
        user_project: bool = False,
    ) -> GitHubObject | None:
        """Create a project for an organization, the authenticated user, or a repository."""
        require(name, "name")
        if organization:
            path = f"/orgs/{segment(organization)}/projects"
        elif user_project:
            path = "/user/projects"
        else:
            owner, repository = self.resolve_repository(owner, repository, uri)
            path = f"/repos/{segment(owner)}/{segment(repository)}/projects"
        return await self._single(
            self._send_project("POST", path, "project.create", compact(name=name, body=body))
        )

    async def update(
        self,
        project_id: int,
        name: str | None = None,
        body: str | None = None,
        state: str | None = None,
        private: bool | None = None,
    ) -> GitHubObject | None:
        positive(require(project_id, "project_id"), "project_id")
        choice(state, "state", ("open", "closed"))
        payload = compact(name=name, body=body, state=state, private=private)
        return await self._single(
            self._send_project("PATCH", f"/projects/{project_id}", "project.update", payload)
        )

    async def delete(self, project_id: int) -> None:
        positive(require(project_id, "project_id"), "project_id")
        await self._no_content(
            self._send_project("DELETE", f"/projects/{project_id}", "project.delete")
        )

    async def list_columns(self, project_id: int) -> list[GitHubObject]:
        positive(require(project_id, "project_id"), "project_id")
        return await self._list(
            self._list_project(f"/projects/{project_id}/columns", "project.column.list"),
            kind="project_column",
            project_id=project_id,
        )

    async def create_column(self, project_id: int, name: str) -> GitHubObject | None:
        positive(require(project_id, "project_id"), "project_id")
        require(name, "name")
        return await self._single(
            self._send_project(
                "POST", f"/projects/{project_id}/columns", "project.column.create", {"name": name}
            ),
            kind="project_column",
            project_id=project_id,
        )

    async def list_cards(
        self, column_id: int, archived_state: str = "not_archived"
    ) -> list[GitHubObject]:
        positive(require(column_id, "column_id"), "column_id")
        choice(archived_state, "archived_state", ("all", "archived", "not_archived"))
        return await self._list(
            self._list_project(
                f"/projects/columns/{column_id}/cards",
                "project.card.list",
                archived_state=archived_state,
            ),
            kind="project_card",
            column_id=column_id,
        )

    async def create_card(
        self,
        column_id: int,
        note: str | None = None,
        content_id: int | None = None,
        content_type: str | None = None,
    ) -> GitHubObject | None:
        """Create a note card, or a card linked to an issue/pull request."""
        positive(require(column_id, "column_id"), "column_id")
        if bool(note) == bool(content_id):
            msg = "pass either note, or content_id with content_type"
            raise InvalidParameterError(msg)
        if content_id is not None:
            require(content_type, "content_type")
            choice(content_type, "content_type", CONTENT_TYPES)
        body = compact(note=note, content_id=content_id, content_type=content_type)
        return await self._single(
            self._send_project(
                "POST", f"/projects/columns/{column_id}/cards", "project.card.create", body
            ),
            kind="project_card",
            column_id=column_id,
        )
