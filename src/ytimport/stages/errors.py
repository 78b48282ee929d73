from __future__ import annotations

from typing import Optional

from ytimport.models import TrackRecord


class PipelineError(Exception):
    """Base exception for playlist import operations."""


class NoSearchResults(PipelineError):
    """Neither the cache nor the search produced a candidate for a track."""

    def __init__(self, query: str) -> None:
        super().__init__(f"No search results for {query!r}")
        self.query = query


class PlaylistLookupFailed(PipelineError):
    """Listing the account's playlists failed."""


class PlaylistCreateFailed(PipelineError):
    """Creating the target playlist failed after no match was found."""


class PlaylistUnavailable(PipelineError):
    """A track could not be inserted because no playlist id was resolved."""


class MembershipCheckFailed(PipelineError):
    """Listing the playlist's items for a video failed."""


class InsertFailed(PipelineError):
    def __init__(self, track: TrackRecord, cause: Optional[BaseException]) -> None:
        super().__init__(f"Insert failed for {track.label}: {cause}")
        self.track = track
        self.cause = cause
