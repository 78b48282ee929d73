from __future__ import annotations

import argparse

from rich.table import Table
from rich.text import Text

from ytimport.branding import BANNER, SYMBOLS
from ytimport.logger import get_logger
from ytimport.logger.console import UI_CONSOLE
from ytimport.env import get_logging_env
from ytimport.stages import PopulateSummary, TrackStatus


# ------------------------------------------------------------
# Parser
# ------------------------------------------------------------


def build_import_parser(subparsers: argparse._SubParsersAction) -> None:
    imp = subparsers.add_parser(
        "import", help="Import a CSV playlist export into a YouTube playlist"
    )

    imp.add_argument(
        "csv",
        nargs="?",
        help="CSV export to import (omit to pick one from the playlists directory)",
    )
    imp.add_argument(
        "--title",
        help="Target playlist title (default: derived from the file name)",
    )
    imp.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve and check tracks; create nothing, insert nothing",
    )
    imp.add_argument("--verbose", action="store_true")
    imp.add_argument("--quiet", action="store_true")


# ------------------------------------------------------------
# Rendering
# ------------------------------------------------------------

_STATUS_STYLE = {
    TrackStatus.ADDED: ("green", SYMBOLS.ADD),
    TrackStatus.WOULD_ADD: ("cyan", SYMBOLS.ADD),
    TrackStatus.DUPLICATE: ("dim", SYMBOLS.SKIPPED),
    TrackStatus.NOT_FOUND: ("yellow", SYMBOLS.WARN),
    TrackStatus.FAILED: ("red", SYMBOLS.FAIL),
}


def render_summary(summary: PopulateSummary) -> Table:
    table = Table(title=f"{SYMBOLS.PLAYLIST} {summary.title}", show_lines=False)
    table.add_column("#", justify="right")
    table.add_column("Track")
    table.add_column("Status")
    table.add_column("Video")
    table.add_column("Detail", overflow="fold")

    for o in summary.outcomes:
        style, symbol = _STATUS_STYLE[o.status]
        table.add_row(
            str(o.index),
            Text(o.track.label),
            f"[{style}]{symbol} {o.status.value}[/{style}]",
            o.video_id or "",
            Text(o.reason),
        )
    return table


# ------------------------------------------------------------
# Handler
# ------------------------------------------------------------


def handle_import(args: argparse.Namespace) -> int:
    from ytimport.runner import RunResult, run_import

    log = get_logger("ytimport")
    log.info(BANNER)

    result = run_import(args.csv, args.title, dry_run=args.dry_run or None)

    if result.overall == RunResult.CANCELLED:
        return 0

    if result.overall == RunResult.AUTH_INVALID:
        log.error("Done: OAuth invalid (reauth required)")
        return 12

    if result.overall != RunResult.OK or result.summary is None:
        log.error(f"Done: failed ({result.reason})")
        return 20

    summary = result.summary

    if not get_logging_env().quiet:
        UI_CONSOLE.print(render_summary(summary))

    log.info("")
    log.info("Run summary:")
    log.info(f"  - Playlist:  {summary.title} ({summary.playlist_id or 'none'})")
    if summary.created:
        log.info("  - Created:   yes")
    for status, n in summary.counts.items():
        log.info(f"  - {status:<10} {n}")
    log.info("")

    if summary.failed:
        log.warning(
            f"Done: {summary.failed}/{summary.total} track(s) not imported; re-run to retry"
        )
    else:
        log.info("Done: OK")
    return 0
