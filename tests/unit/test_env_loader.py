"""Unit tests for environment loader behavior.

These tests exercise reading from a ``.env`` file via python-dotenv and ensure
existing variables are never overridden.
"""

import os
from pathlib import Path

import pytest

from yt_transcript.utils import env_loader


def test_load_project_env_reads_file(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    """Variables from the ``.env`` file should be exported.

    Args:
        monkeypatch (pytest.MonkeyPatch): Fixture for patching modules.
        tmp_path (pathlib.Path): Temporary directory for the test.
    """
    env_file = tmp_path / ".env"
    env_file.write_text("YT_TRANSCRIPT_TEST_VAR=hello\n")
    monkeypatch.setattr(env_loader, "_ENV_FILE", env_file)
    monkeypatch.delenv("YT_TRANSCRIPT_TEST_VAR", raising=False)

    assert env_loader.load_project_env(force=True) is True
    assert os.getenv("YT_TRANSCRIPT_TEST_VAR") == "hello"
    monkeypatch.delenv("YT_TRANSCRIPT_TEST_VAR", raising=False)


def test_load_project_env_does_not_override(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("YT_TRANSCRIPT_TEST_VAR=from-file\n")
    monkeypatch.setattr(env_loader, "_ENV_FILE", env_file)
    monkeypatch.setenv("YT_TRANSCRIPT_TEST_VAR", "from-shell")

    env_loader.load_project_env(force=True)

    assert os.getenv("YT_TRANSCRIPT_TEST_VAR") == "from-shell"


def test_load_project_env_no_file(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    """A missing ``.env`` file is not an error."""
    monkeypatch.setattr(env_loader, "_ENV_FILE", tmp_path / "missing.env")
    assert env_loader.load_project_env(force=True) is False
