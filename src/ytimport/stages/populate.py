"""
populate.py

Playlist population pipeline:
- Locate the target playlist by title, or create it
- Resolve every track record to a video (cache first, then search)
- Skip videos already in the playlist
- Insert the rest, in input order

Per-track failures are reported and the loop moves on. Only a failed
playlist lookup aborts the run (raised to the caller as PlaylistLookupFailed).
A failed playlist creation does not abort: every track that would need the
playlist is reported as a dependent failure instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Set

from ytimport.cache.stores import CacheError
from ytimport.logger import get_logger
from ytimport.models import TrackRecord
from ytimport.providers.base import PlaylistProvider
from ytimport.providers.youtube.api_manager import APIError
from ytimport.stages.errors import (
    InsertFailed,
    MembershipCheckFailed,
    NoSearchResults,
    PlaylistCreateFailed,
    PlaylistUnavailable,
)
from ytimport.stages.guard import DuplicateGuard
from ytimport.stages.locator import PlaylistLocator
from ytimport.stages.resolver import TrackResolver

logger = get_logger(__name__)


class TrackStatus(str, Enum):
    ADDED = "added"
    WOULD_ADD = "would_add"
    DUPLICATE = "duplicate"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class TrackOutcome:
    index: int
    track: TrackRecord
    status: TrackStatus
    video_id: Optional[str] = None
    video_title: str = ""
    reason: str = ""


@dataclass
class PopulateSummary:
    title: str
    playlist_id: Optional[str] = None
    created: bool = False
    create_error: Optional[str] = None
    dry_run: bool = False
    outcomes: List[TrackOutcome] = field(default_factory=list)

    def count(self, status: TrackStatus) -> int:
        return sum(1 for o in self.outcomes if o.status == status)

    @property
    def counts(self) -> Dict[str, int]:
        return {s.value: self.count(s) for s in TrackStatus}

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def failed(self) -> int:
        return self.count(TrackStatus.FAILED) + self.count(TrackStatus.NOT_FOUND)


class PlaylistPopulator:
    def __init__(
        self,
        provider: PlaylistProvider,
        resolver: TrackResolver,
        locator: PlaylistLocator,
        guard: DuplicateGuard,
        *,
        dry_run: bool = False,
        privacy: Optional[str] = None,
    ) -> None:
        self.provider = provider
        self.resolver = resolver
        self.locator = locator
        self.guard = guard
        self.dry_run = dry_run
        self.privacy = privacy

    # ----------------------------
    # Playlist
    # ----------------------------

    def _ensure_playlist(self, summary: PopulateSummary) -> None:
        found = self.locator.locate(summary.title)
        if found.exists:
            summary.playlist_id = found.playlist_id
            logger.info(f"Using existing playlist {summary.title!r} ({found.playlist_id})")
            return

        if self.dry_run:
            logger.info(f"[DRY-RUN] Would create playlist {summary.title!r}")
            return

        try:
            playlist = self.provider.create_playlist(summary.title, self.privacy)
        except (APIError, ValueError) as e:
            err = PlaylistCreateFailed(f"Could not create playlist {summary.title!r}: {e}")
            summary.create_error = str(err)
            logger.error(str(err))
            return

        summary.playlist_id = playlist.playlist_id
        summary.created = True
        logger.info(f"Created playlist {summary.title!r} ({playlist.playlist_id})")

    # ----------------------------
    # Tracks
    # ----------------------------

    def _process(
        self,
        index: int,
        track: TrackRecord,
        summary: PopulateSummary,
        would_add: Set[str],
    ) -> TrackOutcome:
        if not track.has_identity:
            return TrackOutcome(
                index, track, TrackStatus.FAILED, reason="no artist or track name"
            )

        try:
            candidate = self.resolver.resolve(track)
        except NoSearchResults as e:
            return TrackOutcome(index, track, TrackStatus.NOT_FOUND, reason=str(e))
        except (APIError, CacheError) as e:
            return TrackOutcome(
                index, track, TrackStatus.FAILED, reason=f"resolve failed: {e}"
            )

        vid = candidate.video_id
        playlist_id = summary.playlist_id

        # Dry runs insert nothing, so the guard cannot see earlier repeats.
        if vid in would_add:
            return TrackOutcome(
                index,
                track,
                TrackStatus.DUPLICATE,
                vid,
                candidate.title,
                "already present",
            )

        if playlist_id is None:
            if self.dry_run and summary.create_error is None:
                return TrackOutcome(
                    index, track, TrackStatus.WOULD_ADD, vid, candidate.title
                )
            err = PlaylistUnavailable(f"no playlist id for {summary.title!r}")
            return TrackOutcome(
                index, track, TrackStatus.FAILED, vid, candidate.title, str(err)
            )

        try:
            if self.guard.is_member(vid, playlist_id):
                return TrackOutcome(
                    index,
                    track,
                    TrackStatus.DUPLICATE,
                    vid,
                    candidate.title,
                    "already present",
                )
        except MembershipCheckFailed as e:
            return TrackOutcome(
                index, track, TrackStatus.FAILED, vid, candidate.title, str(e)
            )

        if self.dry_run:
            return TrackOutcome(index, track, TrackStatus.WOULD_ADD, vid, candidate.title)

        try:
            self.provider.insert_item(playlist_id, vid)
        except APIError as e:
            err = InsertFailed(track, e)
            return TrackOutcome(
                index, track, TrackStatus.FAILED, vid, candidate.title, str(err)
            )

        return TrackOutcome(index, track, TrackStatus.ADDED, vid, candidate.title)

    def _report(self, outcome: TrackOutcome, total: int) -> None:
        prefix = f"[{outcome.index}/{total}] {outcome.track.label}"
        if outcome.status == TrackStatus.ADDED:
            logger.info(f"{prefix}: added {outcome.video_id} ({outcome.video_title})")
        elif outcome.status == TrackStatus.WOULD_ADD:
            logger.info(f"{prefix}: [DRY-RUN] would add {outcome.video_id}")
        elif outcome.status == TrackStatus.DUPLICATE:
            logger.info(f"{prefix}: skipped, {outcome.video_id} already present")
        elif outcome.status == TrackStatus.NOT_FOUND:
            logger.warning(f"{prefix}: {outcome.reason}")
        else:
            logger.error(f"{prefix}: {outcome.reason}")

    def populate(self, title: str, records: Iterable[TrackRecord]) -> PopulateSummary:
        """
        One pass over ``records`` in input order; each record is attempted
        exactly once.
        """
        summary = PopulateSummary(title=title, dry_run=self.dry_run)
        tracks = list(records)

        self._ensure_playlist(summary)
        would_add: Set[str] = set()

        for i, track in enumerate(tracks, start=1):
            outcome = self._process(i, track, summary, would_add)
            if outcome.status == TrackStatus.WOULD_ADD and outcome.video_id:
                would_add.add(outcome.video_id)
            summary.outcomes.append(outcome)
            self._report(outcome, len(tracks))

        return summary
