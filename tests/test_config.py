from __future__ import annotations

from pathlib import Path

import pytest

from request_mcp.config import DEFAULT_TIMEOUT, load_settings

ENV_VARS = (
    "REQUEST_MCP_HOME",
    "REQUEST_MCP_CONFIG_FILE",
    "REQUEST_MCP_LOG_DIR",
    "REQUEST_MCP_LOG_LEVEL",
    "REQUEST_MCP_TIMEOUT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # setenv first so values written by load_dotenv are undone at teardown
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_defaults_live_under_home(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("REQUEST_MCP_HOME", str(tmp_path))
    settings = load_settings(env_file=tmp_path / "missing.env")

    assert settings.config_file == tmp_path / "config" / "api_configs.json"
    assert settings.logs_dir == tmp_path / "logs"
    assert settings.log_level == "INFO"
    assert settings.timeout == DEFAULT_TIMEOUT


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("REQUEST_MCP_CONFIG_FILE", str(tmp_path / "apis.json"))
    monkeypatch.setenv("REQUEST_MCP_LOG_DIR", str(tmp_path / "log"))
    monkeypatch.setenv("REQUEST_MCP_LOG_LEVEL", "debug")
    monkeypatch.setenv("REQUEST_MCP_TIMEOUT", "2.5")

    settings = load_settings(env_file=tmp_path / "missing.env")

    assert settings.config_file == tmp_path / "apis.json"
    assert settings.logs_dir == tmp_path / "log"
    assert settings.log_level == "DEBUG"
    assert settings.timeout == 2.5


@pytest.mark.parametrize("value", ["soon", "0", "-3"])
def test_invalid_timeout_falls_back(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, value: str) -> None:
    monkeypatch.setenv("REQUEST_MCP_TIMEOUT", value)
    assert load_settings(env_file=tmp_path / "missing.env").timeout == DEFAULT_TIMEOUT


def test_dotenv_file_is_loaded(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(f"REQUEST_MCP_CONFIG_FILE={tmp_path / 'from_dotenv.json'}\n", encoding="utf-8")

    settings = load_settings(env_file=env_file)

    assert settings.config_file == tmp_path / "from_dotenv.json"


def test_dotenv_in_working_directory_is_loaded(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("REQUEST_MCP_CONFIG_FILE=/from/cwd.json\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    settings = load_settings()

    assert settings.config_file == Path("/from/cwd.json")
