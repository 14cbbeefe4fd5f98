"""Test cases for the application-boundary helpers."""

import os
from pathlib import Path

import pytest
from envbinder import EnvBinder, get_default_binder, load_env_file, reset_default_binder


def test_default_binder_is_shared():
    """Test that the process-wide binder is created once and reused."""
    binder = get_default_binder()

    assert isinstance(binder, EnvBinder)
    assert get_default_binder() is binder


def test_reset_default_binder_drops_aliases():
    """Test that resetting discards the binder along with its aliases."""
    get_default_binder().add_alias("ROOT", "/srv/app")

    reset_default_binder()

    assert dict(get_default_binder().aliases) == {}


def test_default_binder_reads_os_environ(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("ENVBINDER_DEFAULT_PORT", "0x1F")

    assert get_default_binder().get_number("ENVBINDER_DEFAULT_PORT", 3000) == 31


def test_load_env_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Test loading a .env file into the environment.

    Given a .env file with plain, quoted and templated values
    When it is loaded and read through a binder
    Then the binder resolves the loaded values
    """
    monkeypatch.delenv("ENVBINDER_FILE_HOST", raising=False)
    monkeypatch.delenv("ENVBINDER_FILE_FEATURES", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("ENVBINDER_FILE_HOST=db.internal\nENVBINDER_FILE_FEATURES=search, export\n")

    try:
        assert load_env_file(env_file) is True

        env = EnvBinder()
        assert env.get_string("ENVBINDER_FILE_HOST") == "db.internal"
        assert env.get_string_array("ENVBINDER_FILE_FEATURES") == ["search", "export"]
    finally:
        os.environ.pop("ENVBINDER_FILE_HOST", None)
        os.environ.pop("ENVBINDER_FILE_FEATURES", None)


def test_load_env_file_respects_existing_values(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Test that existing variables win unless override is requested."""
    monkeypatch.setenv("ENVBINDER_FILE_MODE", "from-process")
    env_file = tmp_path / ".env"
    env_file.write_text("ENVBINDER_FILE_MODE=from-file\n")

    load_env_file(env_file)
    assert os.environ["ENVBINDER_FILE_MODE"] == "from-process"

    load_env_file(env_file, override=True)
    assert os.environ["ENVBINDER_FILE_MODE"] == "from-file"


def test_load_missing_env_file(tmp_path: Path):
    assert load_env_file(tmp_path / "missing.env") is False
