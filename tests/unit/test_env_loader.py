"""Unit tests for credentials file parsing."""

from pathlib import Path

import pytest

from envtracker.core.env_loader import (
    load_env_file,
    load_remote_config,
    remote_config_from_env,
)
from envtracker.domain.errors import ConfigurationError


def _write_env(tmp_path: Path, content: str) -> Path:
    path = tmp_path / ".env"
    path.write_text(content, encoding="utf-8")
    return path


def test_load_skips_comments_and_blank_lines(tmp_path: Path) -> None:
    path = _write_env(
        tmp_path, "# comment\n\nDATABASE_URL=mongodb://x\n   # indented comment\nDB=tracker\n"
    )
    assert load_env_file(path) == {"DATABASE_URL": "mongodb://x", "DB": "tracker"}


def test_load_strips_quotes(tmp_path: Path) -> None:
    path = _write_env(tmp_path, "A=\"quoted\"\nB='single'\n")
    assert load_env_file(path) == {"A": "quoted", "B": "single"}


def test_load_keeps_equals_in_value(tmp_path: Path) -> None:
    path = _write_env(tmp_path, "DATABASE_URL=mongodb://h/?retryWrites=true&w=majority\n")
    assert load_env_file(path)["DATABASE_URL"] == "mongodb://h/?retryWrites=true&w=majority"


def test_load_drops_keys_without_value(tmp_path: Path) -> None:
    path = _write_env(tmp_path, "DATABASE_URL\nDB=tracker\n")
    assert load_env_file(path) == {"DB": "tracker"}


def test_load_does_not_expand_variables(tmp_path: Path) -> None:
    path = _write_env(tmp_path, "DATABASE_URL=mongodb://user:${PASSWORD}@h\n")
    assert load_env_file(path)["DATABASE_URL"] == "mongodb://user:${PASSWORD}@h"


def test_first_synonym_wins() -> None:
    settings = remote_config_from_env(
        {
            "DB_URL": "mongodb://second",
            "DATABASE_URL": "mongodb://first",
            "DB": "db",
            "TABLE": "versions",
        }
    )
    assert settings.url == "mongodb://first"
    assert settings.database == "db"
    assert settings.collection == "versions"


@pytest.mark.parametrize(
    "env,variable",
    [
        ({"DATABASE_NAME": "d", "COLLECTION_NAME": "c"}, "DATABASE_URL"),
        ({"DATABASE_URL": "u", "COLLECTION_NAME": "c"}, "DATABASE_NAME"),
        ({"DATABASE_URL": "u", "DATABASE_NAME": "d"}, "COLLECTION_NAME"),
    ],
)
def test_missing_key_names_expected_variable(env: dict, variable: str) -> None:
    with pytest.raises(ConfigurationError, match=variable):
        remote_config_from_env(env)


def test_relative_path_resolves_against_base_dir(tmp_path: Path) -> None:
    (tmp_path / ".env.dev").write_text(
        "DATABASE_URL=mongodb://localhost:27017\nDATABASE_NAME=tracker\nCOLLECTION_NAME=versions\n",
        encoding="utf-8",
    )
    settings = load_remote_config(".env.dev", base_dir=tmp_path)
    assert settings.url == "mongodb://localhost:27017"
    assert settings.identity == "mongodb://localhost:27017|tracker"


def test_missing_file_is_configuration_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Environment file not found"):
        load_env_file(tmp_path / "missing.env")
