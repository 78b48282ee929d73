from __future__ import annotations

import logging
from pathlib import Path

FILE_FORMAT = "%(asctime)s | %(run_id)s | [%(levelname)s] | %(name)s | %(message)s"


class RunIdFilter(logging.Filter):
    """Stamps every record with the import run it belongs to."""

    def __init__(self, run_id: str) -> None:
        super().__init__()
        self.run_id = run_id

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = self.run_id
        return True


def _run_id_filter(handler: logging.Handler) -> RunIdFilter | None:
    for f in handler.filters:
        if isinstance(f, RunIdFilter):
            return f
    return None


def build_file_handler(logfile: Path, run_id: str) -> logging.FileHandler:
    logfile.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(logfile, encoding="utf-8")
    handler.setLevel(logging.NOTSET)
    handler.addFilter(RunIdFilter(run_id))
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def repoint_file_handler(
    handler: logging.FileHandler, new_logfile: Path, run_id: str
) -> None:
    """Move an open handler to a new run's file without re-adding it."""
    new_logfile.parent.mkdir(parents=True, exist_ok=True)

    handler.acquire()
    try:
        handler.close()
        handler.baseFilename = str(new_logfile.resolve())
        handler.stream = handler._open()
    finally:
        handler.release()

    existing = _run_id_filter(handler)
    if existing is None:
        handler.addFilter(RunIdFilter(run_id))
    else:
        existing.run_id = run_id
