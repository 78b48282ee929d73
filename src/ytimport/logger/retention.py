from __future__ import annotations

from pathlib import Path

from .log_paths import run_log_glob


def enforce_retention(log_dir: Path, keep: int, command: str | None = None) -> list[Path]:
    """
    Keep the ``keep`` newest run logs in ``log_dir`` and delete the rest.

    With ``command`` set only that command's run logs are considered.
    Returns the files removed.
    """
    if keep <= 0:
        return []

    pattern = run_log_glob(command) if command else "*.log"
    logs = sorted(
        log_dir.glob(pattern),
        key=lambda p: p.stat().st_mtime,
        reverse=True,
    )

    removed: list[Path] = []
    for old in logs[keep:]:
        try:
            old.unlink()
        except FileNotFoundError:
            continue
        removed.append(old)
    return removed
