"""
models.py

Domain records shared by the cache, the YouTube provider and the pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class TrackRecord:
    """
    One row of a playlist export.

    Identity is the (artist, track) pair; everything else in the row is
    carried through untouched in ``extra``.
    """

    artist: str
    track: str
    extra: Mapping[str, str] = field(default_factory=dict)

    @property
    def has_identity(self) -> bool:
        return bool(self.artist.strip() or self.track.strip())

    @property
    def query(self) -> str:
        return f"{self.artist} {self.track}"

    @property
    def label(self) -> str:
        return f"{self.artist} - {self.track}"


@dataclass(frozen=True)
class VideoCandidate:
    video_id: str
    title: str
    rank: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"videoId": self.video_id, "title": self.title, "rank": self.rank}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Optional[VideoCandidate]:
        """Returns None when the mapping carries no usable video id."""
        vid = data.get("videoId")
        if not isinstance(vid, str) or not vid.strip():
            return None
        title = data.get("title")
        rank = data.get("rank")
        return cls(
            video_id=vid.strip(),
            title=str(title) if title else "",
            rank=rank if isinstance(rank, int) else 0,
        )


@dataclass(frozen=True)
class Playlist:
    playlist_id: str
    title: str


@dataclass(frozen=True)
class PlaylistMembership:
    playlist_id: str
    video_id: str
    playlist_item_id: str = ""
