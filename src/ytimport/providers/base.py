from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from ytimport.models import Playlist, PlaylistMembership, VideoCandidate


class PlaylistProvider(ABC):
    """
    Abstract interface for the remote video/playlist service.
    """

    name: str

    @abstractmethod
    def search(self, query: str, max_results: int) -> List[VideoCandidate]:
        """Free-text video search, ranked best first."""
        raise NotImplementedError

    @abstractmethod
    def list_playlists(self, mine: bool, max_results: int) -> List[Playlist]:
        """First page of playlists; no pagination follow-up."""
        raise NotImplementedError

    @abstractmethod
    def create_playlist(self, title: str, privacy: Optional[str] = None) -> Playlist:
        raise NotImplementedError

    @abstractmethod
    def list_items(
        self, playlist_id: str, video_id: Optional[str], max_results: int
    ) -> List[PlaylistMembership]:
        """Playlist items, optionally filtered to a single video id."""
        raise NotImplementedError

    @abstractmethod
    def insert_item(self, playlist_id: str, video_id: str) -> None:
        raise NotImplementedError
