"""User commands."""

from gh_commands.commands.base import CommandGroup, compact, require, segment
from gh_commands.github.errors import InvalidParameterError
from gh_commands.objects import GitHubObject


class UserCommands(CommandGroup):
    kind = "user"

    async def get(self, user: str) -> GitHubObject | None:
        require(user, "user")
        return await self._single(self._get(f"/users/{segment(user)}", "user.get"))

    async def get_authenticated(self) -> GitHubObject | None:
        """The user the credentials belong to."""
        return await self._single(self._get("/user", "user.get.authenticated"))

    async def update_authenticated(
        self,
        name: str | None = None,
        email: str | None = None,
        blog: str | None = None,
        company: str | None = None,
        location: str | None = None,
        hireable: bool | None = None,
        bio: str | None = None,
    ) -> GitHubObject | None:
        body = compact(
            name=name,
            email=email,
            blog=blog,
            company=company,
            location=location,
            hireable=hireable,
            bio=bio,
        )
        if not body:
            msg = "nothing to update"
            raise InvalidParameterError(msg)
        return await self._single(self._send("PATCH", "/user", "user.update", body))
