"""
Click-based CLI for env-version-tracker.
"""

import asyncio
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .application import ConfigureService, HookService, PushService
from .core.env_loader import ENV_FILE_INSTRUCTIONS
from .core.lifecycle import ShutdownHooks, run_with_shutdown
from .domain.results import CommandResult
from .prompts import prompt_for_push_args
from .storage.factory import missing_env_file_hint

console = Console()

INVALID_TAG_HELP = """Valid options:
  - major, minor, patch (auto-increment)
  - Semantic version format: X.Y.Z (e.g., 1.2.3)"""


def _configure_logging(verbose: bool) -> None:
    handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=False)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


def _print_warnings(result: CommandResult) -> None:
    for warning in result.warnings:
        console.print(f"[yellow]⚠ Warning:[/yellow] {warning}")


def _fail(result: CommandResult, environment: str | None = None) -> None:
    console.print(f"[red]✗ Error:[/red] {result.message}")
    if result.code == "invalid_version_tag":
        console.print(INVALID_TAG_HELP)
    elif result.code == "env_file_missing" and environment:
        console.print(missing_env_file_hint(environment))
    elif result.code == "env_file_required":
        console.print("\nExample:\n  evt config remote --storage-env-file .env\n")
        console.print(ENV_FILE_INSTRUCTIONS)
    sys.exit(1)


def _run_push(
    version_tag: str, environment: str, track_author: bool, skip_git_push: bool
) -> CommandResult:
    service = PushService()
    hooks = ShutdownHooks()
    hooks.register(service.manager.close)
    return asyncio.run(
        run_with_shutdown(
            service.run(
                version_tag=version_tag,
                environment=environment,
                track_author=track_author,
                skip_git_push=skip_git_push,
                workspace=Path.cwd(),
            ),
            hooks,
        )
    )


def _push_and_report(
    version_tag: str, environment: str, track_author: bool, skip_git_push: bool
) -> None:
    try:
        result = _run_push(version_tag, environment, track_author, skip_git_push)
    except (KeyboardInterrupt, asyncio.CancelledError):
        console.print("[red]✗ Interrupted[/red]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[red]✗ Unexpected error:[/red] {e}")
        sys.exit(1)

    _print_warnings(result)
    if not result.success:
        _fail(result, environment)
    console.print(f"[green]✓[/green] {result.message}")


@click.group()
@click.version_option(version=__version__, prog_name="evt")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Track deployment versions across multiple environments"""
    _configure_logging(verbose)


@cli.command()
@click.argument("storage", type=click.Choice(["local", "remote"]))
@click.option("--storage-path", help="Path to the tracking file (for local)")
@click.option(
    "--storage-env-file",
    help="Path to .env file containing MongoDB configuration (for remote, all environments)",
)
@click.option("--env-file-dev", help=".env file for the dev environment")
@click.option("--env-file-staging", help=".env file for the staging environment")
@click.option("--env-file-preprod", help=".env file for the preprod environment")
@click.option("--env-file-production", help=".env file for the production environment")
@click.option("--storage-url", help="MongoDB URL (deprecated)")
@click.option("--storage-database", help="MongoDB database (deprecated)")
@click.option("--storage-collection", help="MongoDB collection (deprecated)")
def config(
    storage: str,
    storage_path: str | None,
    storage_env_file: str | None,
    env_file_dev: str | None,
    env_file_staging: str | None,
    env_file_preprod: str | None,
    env_file_production: str | None,
    storage_url: str | None,
    storage_database: str | None,
    storage_collection: str | None,
) -> None:
    """Configure the tracking storage [local, remote]"""
    env_files = {
        "dev": env_file_dev,
        "staging": env_file_staging,
        "preprod": env_file_preprod,
        "production": env_file_production,
    }
    result = ConfigureService().run(
        storage=storage,
        storage_path=storage_path,
        storage_env_file=storage_env_file,
        env_files={k: v for k, v in env_files.items() if v},
        storage_url=storage_url,
        storage_database=storage_database,
        storage_collection=storage_collection,
        workspace=Path.cwd(),
    )
    _print_warnings(result)
    if not result.success:
        _fail(result)

    console.print(f"[green]✓[/green] {result.message}")
    if result.code == "configured" and storage == "remote":
        console.print("\nMake sure your .env files contain the required variables:")
        console.print(ENV_FILE_INSTRUCTIONS)


@cli.command()
@click.argument("version_tag", metavar="VERSION_TAG")
@click.argument("environment", metavar="ENVIRONMENT")
@click.option("--track-author", is_flag=True, help="Store the git user.email with the version")
def push(version_tag: str, environment: str, track_author: bool) -> None:
    """Push the current branch and record the next version

    Examples:
        evt push patch dev
        evt push minor production --track-author
        evt push 2.0.0 staging
    """
    _push_and_report(version_tag, environment, track_author, skip_git_push=False)


@cli.command("post-push-handler")
def post_push_handler() -> None:
    """Internal command called by the git push wrapper after a successful push"""
    console.print("\nPost-push handler triggered! Tracking version...\n")
    args = prompt_for_push_args(console)
    _push_and_report(args.version_tag, args.environment, args.track_author, skip_git_push=True)
    console.print("\n[green]✓ Version tracking completed![/green]\n")


@cli.command("setup-hook")
def setup_hook_cmd() -> None:
    """Setup git alias for automatic version tracking after git push"""
    result = HookService().setup(workspace=Path.cwd())
    if not result.success:
        _fail(result)
    console.print(f"[green]✓[/green] {result.message}")
    console.print(f"  Script: {result.data['script']}")
    console.print("\nUsage: git ppush [options]\n  Example: git ppush origin main")
    console.print("\nTo override 'git push' instead (may conflict): evt setup-push-alias")


@cli.command("setup-push-alias")
def setup_push_alias_cmd() -> None:
    """Override 'git push' with version tracking (may cause conflicts)"""
    result = HookService().setup_push_alias(workspace=Path.cwd())
    if not result.success:
        _fail(result)
    console.print(f"[green]✓[/green] {result.message}")
    console.print("[yellow]⚠ 'git push' is now overridden[/yellow]")
    console.print("  To revert: git config --local --unset alias.push")


@cli.command("remove-hook")
def remove_hook_cmd() -> None:
    """Remove the git push aliases"""
    result = HookService().remove(workspace=Path.cwd())
    for alias in result.data["removed"]:
        console.print(f"[green]✓[/green] Git alias '{alias}' removed")
    if not result.data["removed"]:
        console.print(result.message)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
