"""Repository content commands."""

import base64
import logging

from gh_commands.commands.base import CommandGroup, compact, require, segment
from gh_commands.objects import GitHubObject

logger = logging.getLogger(__name__)

RAW_ACCEPT = "application/vnd.github.raw"


def _content_path(owner: str, repository: str, path: str) -> str:
    quoted = "/".join(segment(part) for part in path.strip("/").split("/") if part)
    base = f"/repos/{segment(owner)}/{segment(repository)}/contents"
    return f"{base}/{quoted}" if quoted else base


class ContentCommands(CommandGroup):
    kind = "content"

    async def get(
        self,
        path: str = "",
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
        ref: str | None = None,
    ) -> GitHubObject | list[GitHubObject] | None:
        """File metadata, or the entries of a directory."""
        owner, repository = self.resolve_repository(owner, repository, uri)
        result = await self._invoker.invoke_single(
            self._get(_content_path(owner, repository, path), "content.get", ref=ref)
        )
        if isinstance(result.data, list):
            return [self._wrap(item, owner=owner, repository=repository) for item in result.data]
        if result.data is None:
            return None
        return self._wrap(result.data, owner=owner, repository=repository)

    async def get_raw(
        self,
        path: str,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
        ref: str | None = None,
    ) -> str:
        """Raw text of a file."""
        require(path, "path")
        owner, repository = self.resolve_repository(owner, repository, uri)
        result = await self._invoker.invoke_single(
            self._get(
                _content_path(owner, repository, path),
                "content.get.raw",
                accept=RAW_ACCEPT,
                ref=ref,
            )
        )
        return result.data or ""

    async def put_file(
        self,
        path: str,
        content: str | bytes,
        message: str,
        owner: str | None = None,
        repository: str | None = None,
        uri: str | None = None,
        branch: str | None = None,
        sha: str | None = None,
    ) -> GitHubObject | None:
        """Create a file, or update it when ``sha`` of the current blob is given."""
        require(path, "path")
        require(message, "message")
        owner, repository = self.resolve_repository(owner, repository, uri)
        raw = content.encode() if isinstance(content, str) else content
        body = compact(
            message=message,
            content=base64.b64encode(raw).decode("ascii"),
            branch=branch,
            sha=sha,
        )
        logger.info("Writing %s in %s/%s", path, owner, repository)
        return await self._single(
            self._send("PUT", _content_path(owner, repository, path), "content.set", body),
            kind="content_commit",
            owner=owner,
            repository=repository,
        )
