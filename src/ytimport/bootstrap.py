"""bootstrap.py

Process bootstrap for ytimport.

This module is intentionally tiny and side-effectful.

Rules:
1) Only bootstrap is allowed to *mutate* os.environ for shared run context.
2) Call bootstrap_base_env() exactly once at the true entrypoint.
3) Call bootstrap_run_context() after argparse parsing, before init_logging().

Everything else should treat environment variables as the source of truth.
"""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path

from ytimport.env import DEFAULT_ENV_FILE, load_env_file, reset_env_caches


_BOOTSTRAPPED = False


def bootstrap_base_env(env_file: Path | None = None) -> None:
    """Load config/.env (optional) and stamp a run id."""
    global _BOOTSTRAPPED
    if _BOOTSTRAPPED:
        return

    load_env_file(env_file or DEFAULT_ENV_FILE)

    os.environ.setdefault(
        "YTIMPORT_RUN_ID",
        datetime.now().strftime("%Y-%m-%d_%H-%M-%S"),
    )

    reset_env_caches()
    _BOOTSTRAPPED = True


def bootstrap_run_context(
    *,
    command: str,
    csv_path: str | None = None,
    playlist_title: str | None = None,
    dry_run: bool | None = None,
    verbose: bool | None = None,
    quiet: bool | None = None,
) -> None:
    """Establish run-scoped context used by logging + the import pipeline."""

    os.environ["YTIMPORT_COMMAND"] = command

    if csv_path:
        os.environ["YTIMPORT_CSV"] = csv_path
    if playlist_title:
        os.environ["YTIMPORT_PLAYLIST_TITLE"] = playlist_title

    if dry_run is not None:
        os.environ["YTIMPORT_DRY_RUN"] = "1" if dry_run else "0"
    if verbose is not None:
        os.environ["YTIMPORT_VERBOSE"] = "1" if verbose else "0"
    if quiet is not None:
        os.environ["YTIMPORT_QUIET"] = "1" if quiet else "0"

    # Context changes must invalidate cached env views.
    reset_env_caches()
