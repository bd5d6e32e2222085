"""
config.py - Every path and setting the server needs.

Values come from the environment (a .env file is loaded first) with the
defaults below. Import from here, never hard-code paths elsewhere.
"""
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

PACKAGE_DIR = Path(__file__).parent
API_INDEX_DIR = PACKAGE_DIR / "api_index"

HOME = os.environ.get("HOME") or os.environ.get("USERPROFILE", "")

DEFAULT_TIMEOUT = 30
DEFAULT_LOG_LEVEL = "INFO"


@dataclass
class Settings:
    config_file: Path
    logs_dir: Path
    log_level: str = DEFAULT_LOG_LEVEL
    timeout: float = DEFAULT_TIMEOUT


def _parse_timeout(value):
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        return DEFAULT_TIMEOUT
    return timeout if timeout > 0 else DEFAULT_TIMEOUT


def load_settings(env_file=None) -> Settings:
    """Build Settings from .env (explicit file, else searched up from the cwd) + environment variables."""
    load_dotenv(env_file or find_dotenv(usecwd=True))

    base_dir = Path(os.environ.get("REQUEST_MCP_HOME") or os.path.join(HOME, ".request-mcp"))
    config_file = os.environ.get("REQUEST_MCP_CONFIG_FILE") or base_dir / "config" / "api_configs.json"
    logs_dir = os.environ.get("REQUEST_MCP_LOG_DIR") or base_dir / "logs"

    return Settings(
        config_file=Path(config_file),
        logs_dir=Path(logs_dir),
        log_level=(os.environ.get("REQUEST_MCP_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        timeout=_parse_timeout(os.environ.get("REQUEST_MCP_TIMEOUT", DEFAULT_TIMEOUT)),
    )
