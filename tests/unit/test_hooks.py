"""Unit tests for git hook installation."""

import os

import pytest

from envtracker.commands.hooks import (
    get_wrapper_path,
    remove_hook,
    setup_hook,
    setup_push_alias,
)
from envtracker.core.git import GitClient
from envtracker.domain.errors import ConfigurationError
from tests.utils.fakes import FakeGitRunner


def _alias_runner(workspace, alias: str = "ppush") -> FakeGitRunner:
    script = get_wrapper_path(workspace).resolve()
    return FakeGitRunner(
        {
            ("rev-parse", "--git-dir"): ".git",
            ("config", "--local", f"alias.{alias}", f"!{script}"): "",
            ("config", "--local", f"alias.{alias}"): f"!{script}",
        }
    )


def test_setup_hook_writes_executable_wrapper(temp_workspace) -> None:
    runner = _alias_runner(temp_workspace)

    installation = setup_hook(temp_workspace, git=GitClient(runner=runner))

    assert installation.script_path.exists()
    assert os.access(installation.script_path, os.X_OK)
    content = installation.script_path.read_text(encoding="utf-8")
    assert 'command git push "$@"' in content
    assert "post-push-handler" in content
    assert installation.alias_value == f"!{installation.script_path}"


def test_setup_hook_outside_repository(temp_workspace) -> None:
    with pytest.raises(ConfigurationError, match="Not a git repository"):
        setup_hook(temp_workspace, git=GitClient(runner=FakeGitRunner()))
    assert not get_wrapper_path(temp_workspace).exists()


def test_setup_push_alias_requires_wrapper(temp_workspace) -> None:
    with pytest.raises(ConfigurationError, match="setup-hook"):
        setup_push_alias(temp_workspace, git=GitClient(runner=FakeGitRunner()))


def test_setup_push_alias_after_setup_hook(temp_workspace) -> None:
    setup_hook(temp_workspace, git=GitClient(runner=_alias_runner(temp_workspace)))
    runner = _alias_runner(temp_workspace, alias="push")

    installation = setup_push_alias(temp_workspace, git=GitClient(runner=runner))

    assert installation.alias == "push"
    assert runner.called("config", "--local", "alias.push", f"!{installation.script_path}")


def test_remove_hook_reports_removed_aliases(temp_workspace) -> None:
    runner = FakeGitRunner({("config", "--local", "--unset", "alias.ppush"): ""})
    assert remove_hook(temp_workspace, git=GitClient(runner=runner)) == ["ppush"]
    assert remove_hook(temp_workspace, git=GitClient(runner=FakeGitRunner())) == []
