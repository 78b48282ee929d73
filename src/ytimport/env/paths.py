from __future__ import annotations

import os
from pathlib import Path

import ytimport.config as config

# ---------------------------------------------------------------------
# Project root
# ---------------------------------------------------------------------

# This file lives in src/ytimport/env/, so project root is four levels up
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"


# ---------------------------------------------------------------------
# Base directories (override-friendly)
# ---------------------------------------------------------------------


def _resolve_dir(env_var: str, default: Path) -> Path:
    """
    Resolve a directory path from an environment variable or default.
    Ensures the directory exists.
    """
    raw = os.environ.get(env_var)
    path = Path(raw).expanduser().resolve() if raw else default
    path.mkdir(parents=True, exist_ok=True)
    return path


# ---------------------------------------------------------------------
# Public paths
# ---------------------------------------------------------------------


def logs_dir() -> Path:
    return _resolve_dir("YTIMPORT_LOGS_DIR", PROJECT_ROOT / "logs")


def auth_dir() -> Path:
    """OAuth tokens and client secrets."""
    return _resolve_dir("YTIMPORT_AUTH_DIR", PROJECT_ROOT / "auth")


def cache_dir() -> Path:
    """File-backed search cache."""
    return _resolve_dir("YTIMPORT_CACHE_DIR", PROJECT_ROOT / "cache")


def playlists_dir() -> Path:
    """CSV exports offered by the interactive picker."""
    return _resolve_dir("YTIMPORT_PLAYLISTS_DIR", PROJECT_ROOT / "playlists")


# ---------------------------------------------------------------------
# Utility / internal paths
# ---------------------------------------------------------------------


def auth_token_file(filename: str = "oauth_token.json") -> Path:
    """
    Path to an auth token file inside the auth directory.
    """
    return auth_dir() / filename


def auth_client_secrets_file(filename: str = "client_secret.json") -> Path:
    """
    Path to an OAuth client secrets file inside the auth directory.
    """
    return auth_dir() / filename


def cache_file(name: str = config.FILE_CACHE_BASENAME) -> Path:
    return cache_dir() / name


# ---------------------------------------------------------------------
# Log layout helpers (used by logger)
# ---------------------------------------------------------------------


def module_logs_dir(module: str) -> Path:
    """
    Base log directory for a CLI command (e.g. import, auth).
    """
    path = logs_dir() / module
    path.mkdir(parents=True, exist_ok=True)
    return path
