from __future__ import annotations

from pathlib import Path

from ytimport.env.paths import module_logs_dir

__all__ = ["module_logs_dir", "run_log_glob", "run_logfile"]


def run_logfile(command: str, run_id: str) -> Path:
    return module_logs_dir(command) / f"{command}-{run_id}.log"


def run_log_glob(command: str) -> str:
    return f"{command}-*.log"
