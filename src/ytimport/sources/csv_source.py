"""
csv_source.py

Playlist export reader.

Reads a header-based CSV (Exportify / Spotify export layout) into
TrackRecords and derives a display name from the file name.
"""

from __future__ import annotations

import csv
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.prompt import Prompt

import ytimport.config as config
from ytimport.logger import get_logger
from ytimport.models import TrackRecord

logger = get_logger(__name__)


class SourceError(Exception):
    """The CSV export could not be read."""


@dataclass(frozen=True)
class TrackSource:
    records: List[TrackRecord]
    display_name: str
    path: Path


def display_name_from_filename(filename: str) -> str:
    """
    my_road_trip.csv -> "My Road Trip"
    """
    words: List[str] = []
    for word in Path(filename).name.split("_"):
        if word.endswith(".csv"):
            word = word[: -len(".csv")]
        words.append(word[:1].upper() + word[1:])
    return " ".join(words)


def _row_to_record(row: dict) -> TrackRecord:
    artist = row.get(config.CSV_ARTIST_COLUMN) or ""
    track = row.get(config.CSV_TRACK_COLUMN) or ""
    extra = {
        str(k): v if isinstance(v, str) else ""
        for k, v in row.items()
        if k is not None
        and k not in (config.CSV_ARTIST_COLUMN, config.CSV_TRACK_COLUMN)
    }
    return TrackRecord(artist=artist, track=track, extra=extra)


def load_track_records(path: Path) -> TrackSource:
    if not path.exists():
        raise SourceError(f"CSV file not found: {path}")

    records: List[TrackRecord] = []
    try:
        with path.open("r", encoding="utf-8-sig", newline="") as f:
            reader = csv.DictReader(f)
            fields = reader.fieldnames or []
            for col in (config.CSV_ARTIST_COLUMN, config.CSV_TRACK_COLUMN):
                if col not in fields:
                    logger.warning(f"{path.name}: missing column {col!r}")

            for row in reader:
                if not any((v or "").strip() for v in row.values() if isinstance(v, str)):
                    continue
                records.append(_row_to_record(row))
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        logger.error(f"Error parsing csv file {path}: {e}")
        raise SourceError(f"Failed to read {path}: {e}") from e

    logger.debug(f"Parsed {len(records)} track records from {path.name}")
    return TrackSource(
        records=records,
        display_name=display_name_from_filename(path.name),
        path=path,
    )


def list_csv_files(directory: Path) -> List[str]:
    if not directory.exists():
        return []
    return sorted(p.name for p in directory.iterdir() if p.is_file() and p.suffix == ".csv")


def prompt_for_csv(directory: Path, console: Optional[Console] = None) -> Optional[Path]:
    """
    Let the operator pick one of the exports in ``directory``.
    Returns None when they choose exit or there is nothing to choose.
    """
    files = list_csv_files(directory)
    if not files:
        logger.error(f"No CSV files found in {directory}")
        return None

    choices = files + [config.EXIT_CHOICE]
    console = console or Console()
    console.print("[bold]Select an item from the list below[/bold]")
    for i, name in enumerate(choices, start=1):
        console.print(f"  {i}. {name}")

    answer = Prompt.ask(
        "File",
        choices=[str(i) for i in range(1, len(choices) + 1)],
        console=console,
    )
    picked = choices[int(answer) - 1]
    if picked == config.EXIT_CHOICE:
        return None

    logger.info(f"Parsing file: {picked}")
    return directory / picked
