"""Gist commands."""

import logging
from datetime import datetime

from gh_commands.commands.base import CommandGroup, compact, require, segment
from gh_commands.github.errors import InvalidParameterError, NotFoundError
from gh_commands.objects import GitHubObject

logger = logging.getLogger(__name__)


class GistCommands(CommandGroup):
    """Create, read, update, delete, star and fork gists."""

    kind = "gist"

    async def list_gists(
        self,
        user: str | None = None,
        public: bool = False,
        starred: bool = False,
        since: datetime | str | None = None,
    ) -> list[GitHubObject]:
        """List gists.

        ``user`` lists that user's public gists, ``public`` all public gists,
        ``starred`` the authenticated user's starred gists, and with none of
        them the authenticated user's own gists.
        """
        if sum(bool(flag) for flag in (user, public, starred)) > 1:
            msg = "user, public and starred are mutually exclusive"
            raise InvalidParameterError(msg)
        if isinstance(since, datetime):
            since = since.isoformat()

        if user:
            path = f"/users/{segment(user)}/gists"
        elif public:
            path = "/gists/public"
        elif starred:
            path = "/gists/starred"
        else:
            path = "/gists"
        return await self._list(self._listing(path, "gist.list", since=since))

    async def get(self, gist_id: str, sha: str | None = None) -> GitHubObject | None:
        """Get a gist, or one specific revision of it when ``sha`` is given."""
        require(gist_id, "gist_id")
        path = f"/gists/{segment(gist_id)}"
        if sha:
            path = f"{path}/{segment(sha)}"
        return await self._single(self._get(path, "gist.get"))

    async def create(
        self,
        files: dict[str, str],
        description: str | None = None,
        public: bool = False,
    ) -> GitHubObject | None:
        """Create a gist from ``{filename: content}``."""
        if not files:
            msg = "files must contain at least one file"
            raise InvalidParameterError(msg)
        body = compact(
            description=description,
            public=public,
            files={name: {"content": content} for name, content in files.items()},
        )
        return await self._single(self._send("POST", "/gists", "gist.create", body))

    async def update(
        self,
        gist_id: str,
        description: str | None = None,
        files: dict[str, str | None] | None = None,
        renames: dict[str, str] | None = None,
    ) -> GitHubObject | None:
        """Update a gist.

        In ``files`` a ``None`` content deletes that file. ``renames`` maps
        old filenames to new ones.
        """
        require(gist_id, "gist_id")
        changes: dict[str, dict[str, str] | None] = {}
        for name, content in (files or {}).items():
            changes[name] = None if content is None else {"content": content}
        for old_name, new_name in (renames or {}).items():
            entry = changes.get(old_name) or {}
            entry["filename"] = new_name
            changes[old_name] = entry

        body = compact(description=description, files=changes or None)
        if not body:
            msg = "nothing to update: pass description, files or renames"
            raise InvalidParameterError(msg)
        return await self._single(
            self._send("PATCH", f"/gists/{segment(gist_id)}", "gist.update", body)
        )

    async def delete(self, gist_id: str) -> None:
        require(gist_id, "gist_id")
        await self._no_content(self._send("DELETE", f"/gists/{segment(gist_id)}", "gist.delete"))

    async def star(self, gist_id: str) -> None:
        require(gist_id, "gist_id")
        await self._no_content(self._send("PUT", f"/gists/{segment(gist_id)}/star", "gist.star"))

    async def unstar(self, gist_id: str) -> None:
        require(gist_id, "gist_id")
        await self._no_content(
            self._send("DELETE", f"/gists/{segment(gist_id)}/star", "gist.unstar")
        )

    async def is_starred(self, gist_id: str) -> bool:
        """GitHub answers 204 when starred and 404 when not."""
        require(gist_id, "gist_id")
        try:
            await self._invoker.invoke_single(
                self._get(f"/gists/{segment(gist_id)}/star", "gist.starred")
            )
        except NotFoundError:
            return False
        return True

    async def fork(self, gist_id: str) -> GitHubObject | None:
        require(gist_id, "gist_id")
        return await self._single(
            self._send("POST", f"/gists/{segment(gist_id)}/forks", "gist.fork")
        )

    async def list_forks(self, gist_id: str) -> list[GitHubObject]:
        require(gist_id, "gist_id")
        return await self._list(self._listing(f"/gists/{segment(gist_id)}/forks", "gist.forks"))

    async def list_commits(self, gist_id: str) -> list[GitHubObject]:
        """Revision history, newest first."""
        require(gist_id, "gist_id")
        return await self._list(
            self._listing(f"/gists/{segment(gist_id)}/commits", "gist.commits"),
            kind="gist_commit",
            gist_id=gist_id,
        )
