"""Typed configuration loaded from the environment.

The configuration is read once at process start and passed explicitly to
the resolver and the executor. It is never mutated afterwards, so any
number of concurrent requests can share it.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result

__all__ = [
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_TIMEOUT_MS",
    "ENV_LOCAL_WORKING_COPY",
    "ENV_LOG_LEVEL",
    "ENV_PASSWORD",
    "ENV_REPO_URL",
    "ENV_TIMEOUT_MS",
    "ENV_TRUNK_PATH",
    "ENV_USERNAME",
    "ConfigError",
    "SvnConfig",
    "load_config",
    "load_config_or_default",
]

# -----------------------------------------------------------------------------
# Environment variable names
# -----------------------------------------------------------------------------

ENV_USERNAME = "SVN_USERNAME"
ENV_PASSWORD = "SVN_PASSWORD"
ENV_REPO_URL = "SVN_REPO_URL"
ENV_TRUNK_PATH = "SVN_TRUNK_PATH"
ENV_LOCAL_WORKING_COPY = "SVN_LOCAL_WORKING_COPY"
ENV_TIMEOUT_MS = "SVN_MCP_TIMEOUT_MS"
ENV_LOG_LEVEL = "SVN_MCP_LOG_LEVEL"

DEFAULT_TIMEOUT_MS = 30_000
DEFAULT_LOG_LEVEL = "WARNING"

_LOG_LEVELS = frozenset({"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"})


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when the environment holds an unusable value."""

    message: str
    variable: str | None = None


@dataclass(frozen=True, slots=True)
class SvnConfig:
    """Connection settings snapshot.

    Attributes:
        username: Account name passed to ``--username``
        password: Account secret passed to ``--password``
        repo_url: Repository base URL (e.g. ``https://svn.example.com/repo``)
        trunk_path: Trunk sub-path below ``repo_url``, or a full trunk URL
        local_working_copy: Local mirror checkout used before going remote
        timeout_ms: Default per-command timeout in milliseconds
        log_level: loguru level for the stderr sink
    """

    username: str | None = None
    password: str | None = None
    repo_url: str | None = None
    trunk_path: str | None = None
    local_working_copy: Path | None = None
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def has_credentials(self) -> bool:
        """True if both username and password are configured."""
        return bool(self.username and self.password)

    def __repr__(self) -> str:
        # The password must never end up in logs.
        password = "***" if self.password else None
        return (
            f"SvnConfig(username={self.username!r}, password={password!r}, "
            f"repo_url={self.repo_url!r}, trunk_path={self.trunk_path!r}, "
            f"local_working_copy={self.local_working_copy!r}, "
            f"timeout_ms={self.timeout_ms!r}, log_level={self.log_level!r})"
        )


def _get(env: Mapping[str, str], key: str) -> str | None:
    """Get a variable, treating blank values as unset.

    Non-blank values are returned as-is (a password may contain spaces).
    """
    value = env.get(key)
    if value is None or not value.strip():
        return None
    return value


def load_config(env: Mapping[str, str] | None = None) -> Result[SvnConfig, ConfigError]:
    """Build the configuration from environment variables.

    Args:
        env: Variables to read (defaults to ``os.environ``)

    Returns:
        Ok(SvnConfig) on success, Err(ConfigError) if a value is invalid
    """
    source: Mapping[str, str] = os.environ if env is None else env

    timeout_ms = DEFAULT_TIMEOUT_MS
    raw_timeout = _get(source, ENV_TIMEOUT_MS)
    if raw_timeout is not None:
        raw_timeout = raw_timeout.strip()
        if not (raw_timeout.isascii() and raw_timeout.isdigit()) or int(raw_timeout) <= 0:
            return Err(
                ConfigError(
                    f"{ENV_TIMEOUT_MS} must be a positive integer, got '{raw_timeout}'",
                    variable=ENV_TIMEOUT_MS,
                )
            )
        timeout_ms = int(raw_timeout)

    log_level = (_get(source, ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).strip().upper()
    if log_level not in _LOG_LEVELS:
        return Err(
            ConfigError(
                f"{ENV_LOG_LEVEL} must be one of {', '.join(sorted(_LOG_LEVELS))}, "
                f"got '{log_level}'",
                variable=ENV_LOG_LEVEL,
            )
        )

    local = _get(source, ENV_LOCAL_WORKING_COPY)

    return Ok(
        SvnConfig(
            username=_get(source, ENV_USERNAME),
            password=_get(source, ENV_PASSWORD),
            repo_url=_get(source, ENV_REPO_URL),
            trunk_path=_get(source, ENV_TRUNK_PATH),
            local_working_copy=Path(local).expanduser() if local else None,
            timeout_ms=timeout_ms,
            log_level=log_level,
        )
    )


def load_config_or_default(env: Mapping[str, str] | None = None) -> SvnConfig:
    """Load config, or return the default (anonymous, no remote) config.

    This is useful where a bad optional setting should not stop startup.
    """
    result = load_config(env)
    if isinstance(result, Ok):
        return result.value
    return SvnConfig()
