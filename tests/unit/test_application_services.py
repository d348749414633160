"""Unit tests for application service result envelopes."""

from pathlib import Path

import pytest
from _pytest.monkeypatch import MonkeyPatch

from envtracker.application.services import ConfigureService, HookService, PushService
from envtracker.core.git import GitClient
from tests.utils.fakes import FakeGitRunner, git_responses


@pytest.mark.asyncio
async def test_push_service_success(local_workspace: Path) -> None:
    service = PushService(git=GitClient(runner=FakeGitRunner(git_responses())))

    result = await service.run(version_tag="minor", environment="staging", workspace=local_workspace)

    assert result.success is True
    assert result.code == "pushed"
    assert result.message == "Version 0.1.0 pushed to staging"
    assert result.data["is_first_version"] is True
    assert result.data["record"]["commitHash"] == "abc1234"


@pytest.mark.asyncio
async def test_push_service_converts_domain_errors(local_workspace: Path) -> None:
    service = PushService(git=GitClient(runner=FakeGitRunner(git_responses())))

    result = await service.run(version_tag="bogus", environment="dev", workspace=local_workspace)

    assert result.success is False
    assert result.code == "invalid_version_tag"
    assert "bogus" in result.message


@pytest.mark.asyncio
async def test_push_service_nothing_to_push(local_workspace: Path) -> None:
    runner = FakeGitRunner(git_responses(local="e" * 40, remote="e" * 40))

    result = await PushService(git=GitClient(runner=runner)).run(
        version_tag="patch", environment="dev", workspace=local_workspace
    )

    assert result.success is False
    assert result.code == "nothing_to_push"


def test_configure_service_codes(temp_workspace: Path) -> None:
    service = ConfigureService()

    legacy = service.run(storage="remote", storage_url="mongodb://h", workspace=temp_workspace)
    assert legacy.code == "configured_legacy"
    assert legacy.warnings

    current = service.run(storage="remote", storage_env_file=".env", workspace=temp_workspace)
    assert current.code == "configured"
    assert current.data["config"]["storageEnvFile"] == ".env"

    failed = service.run(storage="remote", workspace=temp_workspace)
    assert failed.success is False
    assert failed.code == "env_file_required"


def test_hook_service_setup_outside_repository(temp_workspace: Path) -> None:
    result = HookService(git=GitClient(runner=FakeGitRunner())).setup(workspace=temp_workspace)

    assert result.success is False
    assert result.code == "not_a_git_repository"


def test_hook_service_remove_reports_nothing(
    monkeypatch: MonkeyPatch, temp_workspace: Path
) -> None:
    monkeypatch.setattr("envtracker.application.services.remove_hook", lambda *_a, **_k: [])

    result = HookService().remove(workspace=temp_workspace)

    assert result.success is True
    assert result.code == "no_hooks"
    assert result.data["removed"] == []
