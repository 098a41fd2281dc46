"""High-level entry point wiring configuration, credentials and commands."""

import logging
from typing import Any

import httpx

from gh_commands.commands import (
    BranchCommands,
    CodespaceCommands,
    CommentCommands,
    ContentCommands,
    EventCommands,
    GistCommands,
    IssueCommands,
    LabelCommands,
    MilestoneCommands,
    ProjectCommands,
    RepositoryCommands,
    TeamCommands,
    TrafficCommands,
    UserCommands,
)
from gh_commands.config import Config
from gh_commands.github.auth import CredentialProvider, GitHubAuth
from gh_commands.github.http import CallDescriptor, RestInvoker, SleepFunc
from gh_commands.telemetry import TelemetrySink

logger = logging.getLogger(__name__)


class GitHub:
    """GitHub REST command facade.

    Example:
        async with GitHub(Config(defaults={"owner": "octo", "repository": "hello"})) as gh:
            issue = await gh.issues.create("Broken link")
            await gh.labels.add_to_issue(issue.identifier, ["bug"])
    """

    def __init__(
        self,
        config: Config | None = None,
        credentials: CredentialProvider | None = None,
        telemetry: TelemetrySink | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: SleepFunc | None = None,
    ) -> None:
        """Initialize the facade.

        Args:
            config: Configuration provider. Defaults to ``Config()``.
            credentials: Credential provider. Defaults to ``GitHubAuth`` built
                from the configured token environment variable.
            telemetry: Telemetry sink, unless disabled in the configuration.
            transport: Optional httpx transport, mainly for tests.
            sleep: Awaitable used for retry waits. Defaults to ``asyncio.sleep``.
        """
        self.config = config or Config()
        if credentials is None:
            credentials = GitHubAuth(
                token_env=self.config.auth.token_env,
                use_gh_cli=self.config.auth.use_gh_cli,
            )
        self.invoker = RestInvoker(
            self.config,
            credentials,
            telemetry=telemetry,
            sleep=sleep,
            transport=transport,
        )

        self.branches = BranchCommands(self.invoker)
        self.codespaces = CodespaceCommands(self.invoker)
        self.comments = CommentCommands(self.invoker)
        self.contents = ContentCommands(self.invoker)
        self.events = EventCommands(self.invoker)
        self.gists = GistCommands(self.invoker)
        self.issues = IssueCommands(self.invoker)
        self.labels = LabelCommands(self.invoker)
        self.milestones = MilestoneCommands(self.invoker)
        self.projects = ProjectCommands(self.invoker)
        self.repositories = RepositoryCommands(self.invoker)
        self.teams = TeamCommands(self.invoker)
        self.traffic = TrafficCommands(self.invoker)
        self.users = UserCommands(self.invoker)

    async def get_rate_limit(self) -> dict[str, Any]:
        """Current rate limit status, broken down by resource."""
        result = await self.invoker.invoke_single(
            CallDescriptor("GET", "/rate_limit", telemetry_event="rate_limit.get")
        )
        return dict(result.data or {})

    async def close(self) -> None:
        await self.invoker.close()

    async def __aenter__(self) -> "GitHub":
        await self.invoker.__aenter__()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
