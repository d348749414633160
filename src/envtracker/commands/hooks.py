"""
Hook Commands

Installs a git push wrapper that runs `evt post-push-handler` after every
successful push, exposed through local git aliases.
"""

import logging
import stat
from dataclasses import dataclass
from pathlib import Path

from envtracker.core.config import get_config_dir
from envtracker.core.git import GitClient
from envtracker.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

WRAPPER_FILENAME = "git-push-wrapper.sh"
WRAPPER_ALIAS = "ppush"
PUSH_ALIAS = "push"
DEBUG_LOG = "/tmp/evt-debug.log"

WRAPPER_SCRIPT = f"""#!/usr/bin/env bash

LOG_FILE="{DEBUG_LOG}"
echo "=== Git Push Wrapper Started at $(date) ===" >> "$LOG_FILE"
echo "Command: git push $@" >> "$LOG_FILE"

command git push "$@"
PUSH_EXIT_CODE=$?

echo "Push exit code: $PUSH_EXIT_CODE" >> "$LOG_FILE"

if [ $PUSH_EXIT_CODE -eq 0 ]; then
  echo "Push successful, running post-push handler..." | tee -a "$LOG_FILE"
  if command -v evt >/dev/null 2>&1; then
    evt post-push-handler
  elif command -v python3 >/dev/null 2>&1; then
    python3 -m envtracker post-push-handler
  else
    echo "evt not found" | tee -a "$LOG_FILE"
  fi
else
  echo "Push failed" >> "$LOG_FILE"
fi

echo "=== Wrapper Ended ===" >> "$LOG_FILE"
exit $PUSH_EXIT_CODE
"""


@dataclass(slots=True)
class HookInstallation:
    script_path: Path
    alias: str
    alias_value: str


def get_wrapper_path(workspace: Path | None = None) -> Path:
    return get_config_dir(workspace) / WRAPPER_FILENAME


def _require_repository(git: GitClient) -> None:
    if not git.is_repository():
        raise ConfigurationError(message="Not a git repository", code="not_a_git_repository")


def setup_hook(workspace: Path | None = None, git: GitClient | None = None) -> HookInstallation:
    """Write the push wrapper and register `git ppush`

    Raises:
        ConfigurationError: Outside a git repository
        GitCommandError: The alias could not be registered
    """
    git = git or GitClient(cwd=workspace)
    _require_repository(git)

    script_path = get_wrapper_path(workspace).resolve()
    script_path.parent.mkdir(parents=True, exist_ok=True)
    script_path.write_text(WRAPPER_SCRIPT, encoding="utf-8")
    script_path.chmod(script_path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    git.set_alias(WRAPPER_ALIAS, f"!{script_path}")
    alias_value = git.get_alias(WRAPPER_ALIAS)
    logger.info("Configured git alias %s -> %s", WRAPPER_ALIAS, alias_value)
    return HookInstallation(script_path=script_path, alias=WRAPPER_ALIAS, alias_value=alias_value)


def setup_push_alias(
    workspace: Path | None = None, git: GitClient | None = None
) -> HookInstallation:
    """Override `git push` with the wrapper; requires setup_hook first"""
    git = git or GitClient(cwd=workspace)
    script_path = get_wrapper_path(workspace).resolve()
    if not script_path.exists():
        raise ConfigurationError(message="Run 'setup-hook' first", code="wrapper_missing")

    git.set_alias(PUSH_ALIAS, f"!{script_path}")
    return HookInstallation(script_path=script_path, alias=PUSH_ALIAS, alias_value=f"!{script_path}")


def remove_hook(workspace: Path | None = None, git: GitClient | None = None) -> list[str]:
    """Unset the push aliases; returns the ones that existed"""
    git = git or GitClient(cwd=workspace)
    removed = []
    for alias in (PUSH_ALIAS, WRAPPER_ALIAS):
        if git.unset_alias(alias):
            removed.append(alias)
    return removed

