from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

import ytimport.config as config
from ytimport.env.paths import CONFIG_DIR, playlists_dir

# ------------------------------------------------------------
# dotenv (read-only helper, bootstrap owns usage)
# ------------------------------------------------------------


def load_env_file(path: Path) -> bool:
    """
    Load a dotenv file into os.environ.
    Never overrides existing variables; CLI / Docker / CI always win.
    """
    if not path.exists():
        return False
    return load_dotenv(path, override=False)


DEFAULT_ENV_FILE = CONFIG_DIR / ".env"

# ------------------------------------------------------------
# Errors / helpers
# ------------------------------------------------------------


class ConfigError(RuntimeError):
    pass


def _as_bool(v: str) -> bool:
    return v.strip().lower() in {"1", "true", "yes", "on"}


def _as_int(v: str, default: int) -> int:
    try:
        return int(v)
    except Exception:
        return default


def _as_float(v: str, default: float) -> float:
    try:
        return float(v)
    except Exception:
        return default


def _choice(name: str, default: str, choices: tuple[str, ...]) -> str:
    v = (os.environ.get(name) or default).strip().lower()
    if v not in choices:
        raise ConfigError(
            f"Invalid value for {name}: {v!r} (expected one of {', '.join(choices)})"
        )
    return v


# ------------------------------------------------------------
# Logging environment (SAFE ANYWHERE)
# ------------------------------------------------------------


@dataclass(frozen=True)
class LoggingEnvironment:
    log_level: str
    log_retention: int
    verbose: bool
    quiet: bool


def get_logging_env() -> LoggingEnvironment:
    log_level = os.environ.get("LOG_LEVEL", config.DEFAULT_LOG_LEVEL)
    log_retention = _as_int(
        os.environ.get("LOG_RETENTION", str(config.DEFAULT_LOG_RETENTION)),
        config.DEFAULT_LOG_RETENTION,
    )

    verbose = _as_bool(os.environ.get("YTIMPORT_VERBOSE", "0"))
    quiet = _as_bool(os.environ.get("YTIMPORT_QUIET", "0"))

    return LoggingEnvironment(
        log_level=log_level,
        log_retention=log_retention,
        verbose=verbose,
        quiet=quiet,
    )


# ------------------------------------------------------------
# Full runtime environment
# ------------------------------------------------------------


class Environment:
    def __init__(self):
        # Logging snapshot (immutable)
        self._logging = get_logging_env()

        # ---- CACHE ----
        self.cache_backend = _choice(
            "YTIMPORT_CACHE_BACKEND",
            config.DEFAULT_CACHE_BACKEND,
            config.CACHE_BACKEND_CHOICES,
        )
        self.redis_url = os.environ.get("REDIS_URL", config.DEFAULT_REDIS_URL)
        self.cache_timeout = _as_float(
            os.environ.get("YTIMPORT_CACHE_TIMEOUT", ""),
            config.DEFAULT_CACHE_TIMEOUT_SEC,
        )

        # ---- PLAYLIST ----
        self.playlist_privacy = _choice(
            "YTIMPORT_PLAYLIST_PRIVACY",
            config.DEFAULT_PLAYLIST_PRIVACY,
            config.PLAYLIST_PRIVACY_CHOICES,
        )

        # ---- RUN CONTEXT ----
        self.command = os.environ.get("YTIMPORT_COMMAND", "bootstrap")
        self.csv_path = os.environ.get("YTIMPORT_CSV", "")
        self.playlist_title = os.environ.get("YTIMPORT_PLAYLIST_TITLE", "")

        # ---- FLAGS ----
        self.dry_run = _as_bool(os.environ.get("YTIMPORT_DRY_RUN", "0"))

    def as_dict(self) -> dict:
        return {
            "Logging": {
                "log_level": self.log_level,
                "log_retention": self.log_retention,
                "verbose": self.verbose,
                "quiet": self.quiet,
            },
            "Run": {
                "command": self.command,
                "csv_path": self.csv_path or "(prompt)",
                "playlist_title": self.playlist_title or "(from file name)",
                "playlists_dir": str(playlists_dir()),
            },
            "Behavior": {
                "dry_run": self.dry_run,
                "playlist_privacy": self.playlist_privacy,
            },
            "Cache": {
                "backend": self.cache_backend,
                "redis_url": self.redis_url,
                "timeout_sec": self.cache_timeout,
                "ttl_sec": config.CACHE_TTL_SECONDS,
            },
        }

    # ---- logging passthrough ----
    @property
    def log_level(self) -> str:
        return self._logging.log_level

    @property
    def log_retention(self) -> int:
        return self._logging.log_retention

    @property
    def verbose(self) -> bool:
        return self._logging.verbose

    @property
    def quiet(self) -> bool:
        return self._logging.quiet


_ENV: Optional[Environment] = None


def reset_env_caches() -> None:
    """Invalidate cached views of environment variables."""
    global _ENV
    _ENV = None


def get_env() -> Environment:
    global _ENV
    if _ENV is None:
        _ENV = Environment()
    return _ENV
