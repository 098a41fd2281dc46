"""Label commands, for repositories and for individual issues."""

import logging
import re

from gh_commands.commands.base import CommandGroup, compact, positive, require, segment
from gh_commands.github.errors import InvalidParameterError
from gh_commands.objects import GitHubObject

logger = logging.getLogger(__name__)

_COLOR_PATTERN = re.compile(r"^[0-9a-fA-F]{6}$")


def normalize_color(color: str | None) -> str | None:
    """Accept ``#RRGGBB`` or ``RRGGBB`` and return the form GitHub expects."""
    if color is None:
        return None
    color = color.lstrip("#")
    if not _COLOR_PATTERN.match(color):
        msg = f"color must be a 6 digit hex value; got {color!r}"
        raise InvalidParameterError(msg)
    return color.lower()


class LabelCommands(CommandGroup):
    """Repository labels and the labels attached to issues."""

    kind = "label"

    def _labels(self, owner: str, repository: str) -> str:
        return f"/repos/{segment(owner)}/{segment(repository)}/labels"

    def _issue_labels(self, owner: str, repository: str, issue: int) -> str:
        return f"/repos/{segment(owner)}/{segment(repository)}/issues/{issue}/labels"

    async def list_labels(
        self,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
    ) -> list[GitHubObject]:
        owner, repository = self.resolve_repository(owner, repository, uri)
        return await self._list(
            self._listing(self._labels(owner, repository), "label.list"),
            owner=owner,
            repository=repository,
        )

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
            self._get(f"{self._labels(owner, repository)}/{segment(name)}", "label.get"),
            owner=owner,
            repository=repository,
        )

    async def create(
        self,
        name: str,
        color: str,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
        description: str | None = None,
    ) -> GitHubObject | None:
        require(name, "name")
        color = normalize_color(require(color, "color"))
        owner, repository = self.resolve_repository(owner, repository, uri)
        return await self._single(
            self._send(
                "POST",
                self._labels(owner, repository),
                "label.create",
                compact(name=name, color=color, description=description),
            ),
            owner=owner,
            repository=repository,
        )

    async def update(
        self,
        name: str,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
        new_name: str | None = None,
        color: str | None = None,
        description: str | None = None,
    ) -> GitHubObject | None:
        require(name, "name")
        owner, repository = self.resolve_repository(owner, repository, uri)
        body = compact(new_name=new_name, color=normalize_color(color), description=description)
        return await self._single(
            self._send(
                "PATCH",
                f"{self._labels(owner, repository)}/{segment(name)}",
                "label.update",
                body,
            ),
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
                "DELETE", f"{self._labels(owner, repository)}/{segment(name)}", "label.delete"
            )
        )

    async def list_issue_labels(
        self,
        issue: int,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
    ) -> list[GitHubObject]:
        positive(require(issue, "issue"), "issue")
        owner, repository = self.resolve_repository(owner, repository, uri)
        return await self._list(
            self._listing(self._issue_labels(owner, repository, issue), "label.issue.list"),
            owner=owner,
            repository=repository,
            issue_number=issue,
        )

    async def add_to_issue(
        self,
        issue: int,
        labels: list[str],
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
    ) -> list[GitHubObject]:
        """Add labels to an issue; returns the issue's full label set."""
        positive(require(issue, "issue"), "issue")
        if not labels:
            msg = "labels must not be empty"
            raise InvalidParameterError(msg)
        owner, repository = self.resolve_repository(owner, repository, uri)
        result = await self._invoker.invoke_single(
            self._send(
                "POST",
                self._issue_labels(owner, repository, issue),
                "label.issue.add",
                {"labels": labels},
            )
        )
        return [
            self._wrap(item, owner=owner, repository=repository, issue_number=issue)
            for item in result.data or []
        ]

    async def set_for_issue(
        self,
        issue: int,
        labels: list[str],
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
    ) -> list[GitHubObject]:
        """Replace every label on an issue. An empty list removes them all."""
        positive(require(issue, "issue"), "issue")
        owner, repository = self.resolve_repository(owner, repository, uri)
        result = await self._invoker.invoke_single(
            self._send(
                "PUT",
                self._issue_labels(owner, repository, issue),
                "label.issue.set",
                {"labels": labels},
            )
        )
        return [
            self._wrap(item, owner=owner, repository=repository, issue_number=issue)
            for item in result.data or []
        ]

    async def remove_from_issue(
        self,
        issue: int,
        name: str | None = None,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
    ) -> None:
        """Remove one label from an issue, or all of them when ``name`` is None."""
        positive(require(issue, "issue"), "issue")
        owner, repository = self.resolve_repository(owner, repository, uri)
        path = self._issue_labels(owner, repository, issue)
        if name is not None:
            path = f"{path}/{segment(name)}"
        logger.debug("Removing %s from %s/%s#%d", name or "all labels", owner, repository, issue)
        await self._no_content(self._send("DELETE", path, "label.issue.remove"))
