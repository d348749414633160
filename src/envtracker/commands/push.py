"""
Push Command Implementation

Validates the request, resolves the next version for an environment, syncs the
current branch upstream and records the new version in the configured storage.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from envtracker.core.config import load_config
from envtracker.core.git import CommitInfo, GitClient, SyncOutcome
from envtracker.core.version import (
    DEFAULT_VERSION,
    next_version,
    parse_semantic_version,
    validate_version_tag,
)
from envtracker.domain.errors import (
    GitCommandError,
    InvalidVersionFormatError,
    SyncError,
    ValidationError,
)
from envtracker.models import TrackerConfig, VersionRecord
from envtracker.storage import ConnectionManager, VersionStorage, create_storage

logger = logging.getLogger(__name__)

EMAIL_HINT = 'To configure git user.email, run: git config --global user.email "you@example.com"'

StorageFactory = Callable[..., VersionStorage]


@dataclass(slots=True)
class PushResult:
    """Outcome of one successful push"""

    record: VersionRecord
    is_first_version: bool
    sync_outcome: SyncOutcome | None
    warnings: list[str] = field(default_factory=list)

    @property
    def version(self) -> str:
        return self.record.version

    @property
    def environment(self) -> str:
        return self.record.environment


def _require(value: str, name: str) -> None:
    if not value or not value.strip():
        raise ValidationError(
            message=f"{name.capitalize()} is required",
            code=f"{name.replace(' ', '_')}_required",
        )


def _warn(warnings: list[str], message: str) -> None:
    logger.warning(message)
    warnings.append(message)


def _check_stored_version(record: VersionRecord) -> None:
    try:
        parse_semantic_version(record.version)
    except InvalidVersionFormatError as e:
        raise ValidationError(
            message=(
                f'Corrupted version in storage: "{record.version}". '
                "The version format must be X.Y.Z (e.g., 1.0.0); "
                "fix the version in your storage manually or reset it."
            ),
            code="corrupted_stored_version",
        ) from e


def capture_author(git: GitClient, warnings: list[str]) -> str | None:
    """Committer email, or None with a warning when git has none"""
    try:
        email = git.user_email()
    except GitCommandError as e:
        _warn(warnings, f"Could not get git email: {e}. {EMAIL_HINT}")
        return None
    if not email:
        _warn(warnings, f"Git user.email is not configured. Author will not be tracked. {EMAIL_HINT}")
        return None
    return email


def capture_commit(git: GitClient, warnings: list[str]) -> CommitInfo:
    """Latest commit, following "Merge commit '<sha>'" subjects to the merged commit"""
    try:
        commit = git.last_commit()
    except GitCommandError as e:
        _warn(warnings, f"Could not get git commit info: {e}")
        return CommitInfo(commit_hash=None, message=None)

    merged = commit.merged_commit
    if not merged:
        return commit
    try:
        original = git.last_commit(merged)
    except GitCommandError as e:
        _warn(warnings, f"Could not get original commit info: {e}")
        return commit
    return CommitInfo(
        commit_hash=original.commit_hash or commit.commit_hash,
        message=original.message or commit.message,
    )


async def push_version(
    version_tag: str,
    environment: str,
    *,
    track_author: bool = False,
    skip_git_push: bool = False,
    workspace: Path | None = None,
    config: TrackerConfig | None = None,
    git: GitClient | None = None,
    manager: ConnectionManager | None = None,
    storage_factory: StorageFactory = create_storage,
) -> PushResult:
    """Record the next version of environment

    Args:
        version_tag: "major", "minor", "patch" or a literal X.Y.Z
        environment: Environment name, stored verbatim
        track_author: Store the git user.email as author
        skip_git_push: Do not push upstream (the post-push hook already did)
        workspace: Project directory holding .env-version-tracker (default: cwd)
        config: Preloaded configuration (default: read from workspace)
        git: Git adapter override for tests/injection
        manager: Shared MongoDB connection manager
        storage_factory: Storage constructor override for tests/injection

    Returns:
        PushResult with the saved record and any metadata warnings

    Raises:
        ValidationError: Missing arguments, bad tag or corrupted stored version
        ConfigurationError: Storage unset or credentials missing
        SyncError: Local branch already matches the remote
        ConnectivityError / StorageIOError: Storage failures
        GitCommandError: The upstream push failed
    """
    _require(version_tag, "version tag")
    _require(environment, "environment")
    validate_version_tag(version_tag)

    if config is None:
        config = load_config(workspace)
    storage = storage_factory(config, environment, manager, base_dir=workspace)
    git = git or GitClient(cwd=workspace)
    warnings: list[str] = []

    try:
        await storage.init()
        latest = await storage.get_latest(environment)
        if latest is not None:
            _check_stored_version(latest)
        is_first_version = latest is None
        current = latest.version if latest is not None else DEFAULT_VERSION
        version = next_version(current, version_tag, is_first_version)
        logger.debug("Resolved %s -> %s for %s", current, version, environment)

        sync_outcome = None
        if not skip_git_push:
            sync_outcome = git.sync_upstream()
            if sync_outcome is SyncOutcome.UP_TO_DATE:
                raise SyncError(
                    message="No changes to push. Local branch is already up-to-date with remote.",
                    code="nothing_to_push",
                )

        author = capture_author(git, warnings) if track_author else None
        commit = capture_commit(git, warnings)

        record = VersionRecord(
            version=version,
            environment=environment,
            commit_hash=commit.commit_hash,
            commit_message=commit.message,
            author=author,
        )
        await storage.save(record)
    finally:
        try:
            await storage.close()
        except Exception as e:
            logger.warning("Error closing storage: %s", e)

    return PushResult(
        record=record,
        is_first_version=is_first_version,
        sync_outcome=sync_outcome,
        warnings=warnings,
    )
