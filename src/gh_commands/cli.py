"""CLI entry point for gh-commands.

Thin shell over the command layer:
- invoke: run any REST call (optionally following every page)
- rate-limit: show the current quota per resource
- repo: show one repository
- issues: list issues of a repository
"""

import asyncio
import json
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from gh_commands import __version__
from gh_commands.client import GitHub
from gh_commands.config import Config, load_config
from gh_commands.github.errors import GitHubApiError, InvalidParameterError
from gh_commands.github.http import CallDescriptor
from gh_commands.logging import setup_logging
from gh_commands.objects import GitHubObject

console = Console()


def _run(ctx: click.Context, action: Callable[[GitHub], Awaitable[Any]]) -> Any:
    """Run ``action`` against a GitHub facade built from the CLI config."""
    cfg: Config = ctx.obj["config"]

    async def runner() -> Any:
        async with GitHub(cfg) as gh:
            return await action(gh)

    try:
        return asyncio.run(runner())
    except (GitHubApiError, InvalidParameterError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise click.Abort() from e
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        raise click.Abort() from None


def _plain(value: Any) -> Any:
    if isinstance(value, GitHubObject):
        return dict(value.raw)
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


def _parse_params(values: tuple[str, ...]) -> dict[str, str]:
    params = {}
    for value in values:
        key, sep, param_value = value.partition("=")
        if not sep or not key:
            msg = f"Expected key=value, got {value!r}"
            raise click.BadParameter(msg, param_hint="--param")
        params[key] = param_value
    return params


@click.group()
@click.version_option(version=__version__, prog_name="gh-commands")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose output")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to config.yaml file",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, config: Path | None) -> None:
    """Command-line access to the GitHub REST API.

    \b
    Examples:
        gh-commands repo octocat hello-world
        gh-commands issues octocat hello-world --state all
        gh-commands invoke GET /repos/octocat/hello-world/labels --all-pages
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config"] = load_config(config) if config else Config()
    setup_logging(verbose=verbose)


@main.command()
@click.argument(
    "method", type=click.Choice(["GET", "POST", "PATCH", "PUT", "DELETE"], case_sensitive=False)
)
@click.argument("path")
@click.option("--body", "-b", default=None, help="JSON request body")
@click.option("--param", "-p", "params", multiple=True, help="Query parameter as key=value")
@click.option("--all-pages", is_flag=True, default=False, help="Follow pagination (GET only)")
@click.pass_context
def invoke(
    ctx: click.Context,
    method: str,
    path: str,
    body: str | None,
    params: tuple[str, ...],
    all_pages: bool,
) -> None:
    """Call PATH with METHOD and print the JSON response."""
    method = method.upper()
    if body is not None:
        try:
            json.loads(body)
        except ValueError as e:
            raise click.BadParameter(f"Body is not valid JSON: {e}", param_hint="--body") from e
    if all_pages and method != "GET":
        raise click.BadParameter("--all-pages only applies to GET", param_hint="--all-pages")

    try:
        descriptor = CallDescriptor(method, path, body=body, params=_parse_params(params))
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="PATH") from e

    async def action(gh: GitHub) -> Any:
        if all_pages:
            return await gh.invoker.collect(descriptor)
        result = await gh.invoker.invoke_single(descriptor)
        return result.data

    data = _run(ctx, action)
    if data is None:
        console.print("[green]Done (no content)[/green]")
    else:
        console.print_json(data=data, default=str)


@main.command("rate-limit")
@click.pass_context
def rate_limit(ctx: click.Context) -> None:
    """Show the remaining API quota per resource."""
    data = _run(ctx, lambda gh: gh.get_rate_limit())

    table = Table(title="GitHub API rate limits")
    table.add_column("Resource")
    table.add_column("Remaining", justify="right")
    table.add_column("Limit", justify="right")
    table.add_column("Resets at (UTC)")

    for resource, info in sorted(data.get("resources", {}).items()):
        reset = datetime.fromtimestamp(int(info.get("reset", 0)), tz=UTC)
        table.add_row(
            resource,
            str(info.get("remaining", "")),
            str(info.get("limit", "")),
            reset.strftime("%Y-%m-%d %H:%M:%S"),
        )
    console.print(table)


@main.command()
@click.argument("owner")
@click.argument("repository")
@click.pass_context
def repo(ctx: click.Context, owner: str, repository: str) -> None:
    """Show OWNER/REPOSITORY."""
    data = _run(ctx, lambda gh: gh.repositories.get(owner, repository))
    console.print_json(data=_plain(data), default=str)


@main.command()
@click.argument("owner")
@click.argument("repository")
@click.option(
    "--state",
    type=click.Choice(["open", "closed", "all"]),
    default="open",
    show_default=True,
    help="Issue state filter",
)
@click.option("--label", "labels", multiple=True, help="Only issues with this label (repeatable)")
@click.pass_context
def issues(
    ctx: click.Context, owner: str, repository: str, state: str, labels: tuple[str, ...]
) -> None:
    """List issues of OWNER/REPOSITORY."""
    label_filter = list(labels) or None
    found = _run(
        ctx,
        lambda gh: gh.issues.list_issues(owner, repository, state=state, labels=label_filter),
    )

    table = Table(title=f"{owner}/{repository} issues ({state})")
    table.add_column("#", justify="right")
    table.add_column("State")
    table.add_column("Title")
    table.add_column("Labels")
    for issue in found:
        label_names = ", ".join(label.get("name", "") for label in issue.get("labels", []))
        table.add_row(
            str(issue.identifier), issue.get("state", ""), issue.get("title", ""), label_names
        )
    console.print(table)
    console.print(f"[dim]{len(found)} issue(s)[/dim]")
