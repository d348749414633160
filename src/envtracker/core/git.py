"""
Git adapter

Thin wrapper over the git executable used by the push workflow and the hook
installation commands.
"""

import logging
import re
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable

from envtracker.domain.errors import GitCommandError

logger = logging.getLogger(__name__)

REMOTE_NAME = "origin"
COMMIT_FORMAT = "--pretty=format:%h|%s"
_MERGE_HASH_PATTERN = re.compile(r"'([a-f0-9]{40})'")

Runner = Callable[..., subprocess.CompletedProcess]


class SyncOutcome(str, Enum):
    """Result of comparing the local branch with its upstream"""

    PUSHED = "pushed"
    UP_TO_DATE = "up_to_date"


@dataclass(slots=True, frozen=True)
class CommitInfo:
    """Abbreviated hash and subject of one commit"""

    commit_hash: str | None
    message: str | None

    @classmethod
    def parse(cls, line: str) -> "CommitInfo":
        commit_hash, _, message = line.partition("|")
        return cls(commit_hash=commit_hash or None, message=message or None)

    @property
    def merged_commit(self) -> str | None:
        """Full hash quoted by a "Merge commit '<sha>'" subject, if any"""
        if not self.message or "Merge commit" not in self.message:
            return None
        match = _MERGE_HASH_PATTERN.search(self.message)
        return match.group(1) if match else None


class GitClient:
    """Runs git commands in a working directory"""

    def __init__(self, cwd: Path | None = None, runner: Runner = subprocess.run):
        self.cwd = cwd
        self._runner = runner

    def run(self, *args: str) -> str:
        """Run one git command and return its stripped stdout

        Raises:
            GitCommandError: If git exits non-zero or cannot be started
        """
        command = ["git", *args]
        logger.debug("Running %s", " ".join(command))
        try:
            completed = self._runner(
                command,
                cwd=self.cwd,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            raise GitCommandError(
                message=f"Command failed: {' '.join(command)} - {e}", code="git_unavailable"
            ) from e
        if completed.returncode != 0:
            detail = (completed.stderr or completed.stdout or "").strip()
            raise GitCommandError(
                message=f"Command failed: {' '.join(command)} - {detail}",
                code="git_command_failed",
            )
        return (completed.stdout or "").strip()

    def is_repository(self) -> bool:
        try:
            self.run("rev-parse", "--git-dir")
        except GitCommandError:
            return False
        return True

    def git_dir(self) -> Path:
        return Path(self.run("rev-parse", "--git-dir"))

    def current_branch(self) -> str:
        return self.run("branch", "--show-current")

    def rev_parse(self, ref: str) -> str | None:
        """Commit id for ref, or None when the ref does not exist"""
        try:
            return self.run("rev-parse", ref)
        except GitCommandError:
            return None

    def push(self, branch: str) -> None:
        self.run("push", REMOTE_NAME, branch, "-u")

    def sync_upstream(self) -> SyncOutcome:
        """Push the current branch unless the remote already has HEAD

        A missing remote branch counts as out of date and is pushed.
        """
        branch = self.current_branch()
        local_commit = self.run("rev-parse", "HEAD")
        remote_commit = self.rev_parse(f"{REMOTE_NAME}/{branch}")

        if remote_commit is not None and remote_commit == local_commit:
            return SyncOutcome.UP_TO_DATE

        logger.info("Pushing %s to %s", branch, REMOTE_NAME)
        self.push(branch)
        return SyncOutcome.PUSHED

    def user_email(self) -> str:
        return self.run("config", "user.email")

    def last_commit(self, ref: str | None = None) -> CommitInfo:
        args = ["log", "-1", COMMIT_FORMAT]
        if ref:
            args.append(ref)
        return CommitInfo.parse(self.run(*args))

    def set_alias(self, name: str, command: str) -> None:
        self.run("config", "--local", f"alias.{name}", command)

    def get_alias(self, name: str) -> str:
        return self.run("config", "--local", f"alias.{name}")

    def unset_alias(self, name: str) -> bool:
        """Remove a local alias; returns False when it did not exist"""
        try:
            self.run("config", "--local", "--unset", f"alias.{name}")
        except GitCommandError:
            return False
        return True
