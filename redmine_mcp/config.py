"""
redmine-mcp configuration: .env loading, constants, and the Config value.
Standalone module — no imports from other project files except exceptions.
"""

import os
from dataclasses import dataclass, replace

from redmine_mcp.exceptions import SetupError

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

VERSION = "1.0.0"
CONTRACT_SCHEMA_VERSION = "1.0"

DEFAULT_JOURNAL_LIMIT = 5
DEFAULT_JOURNAL_OFFSET = 0

API_KEY_HEADER = "X-Redmine-API-Key"

# Keys that fall back to os.environ when missing from the .env file.
KNOWN_ENV_KEYS = (
    "REDMINE_URL",
    "REDMINE_API_KEY",
    "REDMINE_HTTP_TIMEOUT_SECONDS",
    "REDMINE_HTTP_MAX_RESPONSE_BYTES",
    "REDMINE_HTTP_LOG",
    "REDMINE_HTTP_LOG_SAMPLE_RATE",
)

# ---------------------------------------------------------------------------
# .env path and helpers
# ---------------------------------------------------------------------------


def default_env_path():
    """Return the .env path: $REDMINE_ENV_FILE, else ./.env."""
    return os.environ.get("REDMINE_ENV_FILE") or os.path.join(os.getcwd(), ".env")


def load_env(path=None):
    """Parse KEY=VALUE lines from a .env file, then fill known keys from os.environ."""
    path = path or default_env_path()
    env = {}
    if os.path.exists(path):
        with open(path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, val = line.split("=", 1)
                    env[key.strip()] = val.strip()
    for key in KNOWN_ENV_KEYS:
        if key not in env and os.environ.get(key):
            env[key] = os.environ[key]
    return env


def _env_bool(env, key, default=False):
    """Parse common boolean env formats."""
    raw = env.get(key)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(env, key, default):
    """Parse integer env values with fallback."""
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(env, key, default):
    """Parse float env values with fallback."""
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Config value
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Config:
    """Connection settings, built once and handed to RedmineGateway."""

    redmine_url: str
    api_key: str
    http_timeout_seconds: int = 30
    http_max_response_bytes: int = 5_000_000
    http_log_enabled: bool = False
    http_log_sample_rate: float = 1.0

    def __post_init__(self):
        # Frozen: normalize through object.__setattr__.
        object.__setattr__(self, "redmine_url", self.redmine_url.rstrip("/"))

    def with_http_log(self, enabled=True):
        """Return a copy with HTTP logging toggled."""
        return replace(self, http_log_enabled=enabled)


def load_config(env=None):
    """Build a Config from a parsed env mapping (default: load_env()).

    Raises SetupError when REDMINE_URL or REDMINE_API_KEY is missing.
    """
    if env is None:
        env = load_env()
    url = (env.get("REDMINE_URL") or "").strip()
    api_key = (env.get("REDMINE_API_KEY") or "").strip()
    if not url:
        raise SetupError("REDMINE_URL environment variable is required")
    if not api_key:
        raise SetupError("REDMINE_API_KEY environment variable is required")
    return Config(
        redmine_url=url,
        api_key=api_key,
        http_timeout_seconds=max(1, _env_int(env, "REDMINE_HTTP_TIMEOUT_SECONDS", 30)),
        http_max_response_bytes=_env_int(env, "REDMINE_HTTP_MAX_RESPONSE_BYTES", 5_000_000),
        http_log_enabled=_env_bool(env, "REDMINE_HTTP_LOG", False),
        http_log_sample_rate=min(
            1.0, max(0.0, _env_float(env, "REDMINE_HTTP_LOG_SAMPLE_RATE", 1.0))
        ),
    )
