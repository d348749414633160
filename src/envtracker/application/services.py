"""Application service layer over command modules.

Services turn domain errors into CommandResult values so that the CLI (and SDK
callers) branch on `result.code` instead of matching exception messages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from envtracker.commands.config import configure_storage
from envtracker.commands.hooks import remove_hook, setup_hook, setup_push_alias
from envtracker.commands.push import push_version
from envtracker.core.git import GitClient
from envtracker.domain.errors import EnvTrackerError
from envtracker.domain.results import CommandResult
from envtracker.storage import ConnectionManager


def _failure(error: EnvTrackerError) -> CommandResult:
    return CommandResult(success=False, code=error.code, message=error.message)


@dataclass(slots=True)
class PushService:
    """Resolve and record the next version of an environment."""

    manager: ConnectionManager = field(default_factory=ConnectionManager)
    git: GitClient | None = None

    async def run(
        self,
        *,
        version_tag: str,
        environment: str,
        track_author: bool = False,
        skip_git_push: bool = False,
        workspace: Path | None = None,
    ) -> CommandResult:
        try:
            result = await push_version(
                version_tag,
                environment,
                track_author=track_author,
                skip_git_push=skip_git_push,
                workspace=workspace,
                git=self.git,
                manager=self.manager,
            )
        except EnvTrackerError as e:
            return _failure(e)
        return CommandResult(
            success=True,
            code="pushed",
            message=f"Version {result.version} pushed to {result.environment}",
            data={
                "version": result.version,
                "environment": result.environment,
                "is_first_version": result.is_first_version,
                "record": result.record.to_json_dict(),
            },
            warnings=result.warnings,
        )


@dataclass(slots=True)
class ConfigureService:
    """Persist storage configuration."""

    def run(
        self,
        *,
        storage: str,
        storage_path: str | None = None,
        storage_env_file: str | None = None,
        env_files: dict[str, str] | None = None,
        storage_url: str | None = None,
        storage_database: str | None = None,
        storage_collection: str | None = None,
        workspace: Path | None = None,
    ) -> CommandResult:
        try:
            result = configure_storage(
                storage,
                storage_path=storage_path,
                storage_env_file=storage_env_file,
                env_files=env_files,
                storage_url=storage_url,
                storage_database=storage_database,
                storage_collection=storage_collection,
                workspace=workspace,
            )
        except EnvTrackerError as e:
            return _failure(e)
        return CommandResult(
            success=True,
            code="configured_legacy" if result.legacy else "configured",
            message="Configuration saved successfully",
            data={"path": str(result.path), "config": result.config.model_dump(by_alias=True)},
            warnings=result.warnings,
        )


@dataclass(slots=True)
class HookService:
    """Install and remove the git push wrapper aliases."""

    git: GitClient | None = None

    def setup(self, *, workspace: Path | None = None) -> CommandResult:
        try:
            installation = setup_hook(workspace, git=self.git)
        except EnvTrackerError as e:
            return _failure(e)
        return CommandResult(
            success=True,
            code="hook_installed",
            message=f"Git alias '{installation.alias}' configured successfully",
            data={"script": str(installation.script_path), "alias": installation.alias_value},
        )

    def setup_push_alias(self, *, workspace: Path | None = None) -> CommandResult:
        try:
            installation = setup_push_alias(workspace, git=self.git)
        except EnvTrackerError as e:
            return _failure(e)
        return CommandResult(
            success=True,
            code="push_alias_installed",
            message="Git 'push' alias configured",
            data={"script": str(installation.script_path)},
        )

    def remove(self, *, workspace: Path | None = None) -> CommandResult:
        removed = remove_hook(workspace, git=self.git)
        return CommandResult(
            success=True,
            code="hook_removed" if removed else "no_hooks",
            message="Removed aliases" if removed else "No aliases found to remove",
            data={"removed": removed},
        )
