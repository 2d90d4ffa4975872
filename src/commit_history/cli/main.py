"""Command line interface for commit-history."""

from pathlib import Path
from typing import List, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from commit_history.config import HistoryConfig, load_config
from commit_history.core.replay import StepResult, run_scenario
from commit_history.core.repository import Repository
from commit_history.errors import CommitHistoryError, ConfigError
from commit_history.log import configure_logging
from commit_history.models.scenario import Action, Scenario, Step

console = Console()

DEMO_SCENARIO = Scenario(
    repositories=["repo1", "repo2"],
    steps=[
        Step(action=Action.COMMIT, repo="repo1", message="A"),
        Step(action=Action.COMMIT, repo="repo2", message="C"),
        Step(action=Action.COMMIT, repo="repo1", message="B"),
        Step(action=Action.COMMIT, repo="repo2", message="D"),
        Step(action=Action.SYNCHRONIZE, repo="repo1", other="repo2"),
        Step(action=Action.HISTORY, repo="repo1", count=4),
    ],
)


@click.group()
@click.version_option(package_name="commit-history")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to a JSON config file",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
@click.pass_context
def main(ctx: click.Context, config_path: Optional[str], verbose: bool):
    """Commit History - in-memory linear commit histories."""
    try:
        config = load_config(Path(config_path) if config_path else None)
    except ConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort() from e

    configure_logging("DEBUG" if verbose else config.log_level)
    ctx.obj = config


@main.command()
@click.argument("scenario_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--quiet", "-q", is_flag=True, help="Only print the final histories")
@click.pass_obj
def replay(config: HistoryConfig, scenario_path: str, quiet: bool):
    """Replay the operations in a JSON scenario file."""
    try:
        scenario = Scenario.load(Path(scenario_path))
    except ConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort() from e

    _run_and_show(scenario, config, quiet)


@main.command()
@click.pass_obj
def demo(config: HistoryConfig):
    """Synchronize two interleaved histories and show the result."""
    _run_and_show(DEMO_SCENARIO, config, quiet=False)


def _run_and_show(scenario: Scenario, config: HistoryConfig, quiet: bool) -> None:
    try:
        repos, results = run_scenario(scenario, config=config)
    except CommitHistoryError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort() from e

    if not quiet:
        _show_results(results)
    for repo in repos.values():
        _show_repository(repo, config)


def _show_results(results: List[StepResult]) -> None:
    for result in results:
        label = (
            f"[bold]{result.index}[/bold] {result.action.value} "
            f"[cyan]{escape(result.repo)}[/cyan]"
        )
        if result.action is Action.HISTORY:
            console.print(f"{label}: {len(result.value)} commit(s)")
            for line in result.value:
                console.print(f"    {escape(line)}")
        elif result.action is Action.SYNCHRONIZE:
            console.print(f"{label}: done")
        else:
            console.print(f"{label}: {_format_value(result.value)}")


def _format_value(value) -> str:
    if value is True:
        return "[green]yes[/green]"
    if value is False:
        return "[yellow]no[/yellow]"
    return escape(str(value))


def _show_repository(repo: Repository, config: HistoryConfig) -> None:
    table = Table(title=Text(str(repo.name)), show_lines=False)
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Timestamp")
    table.add_column("Message")

    for commit in repo.commits():
        table.add_row(
            Text(commit.id),
            Text(commit.timestamp.strftime(config.timestamp_format)),
            Text(commit.message),
        )

    if len(repo) == 0:
        console.print(f"[dim]{escape(str(repo))}[/dim]")
    else:
        console.print(table)


if __name__ == "__main__":
    main()
