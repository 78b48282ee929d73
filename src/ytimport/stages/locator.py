from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import ytimport.config as config
from ytimport.logger import get_logger
from ytimport.providers.base import PlaylistProvider
from ytimport.providers.youtube.api_manager import APIError
from ytimport.stages.errors import PlaylistLookupFailed

logger = get_logger(__name__)


@dataclass(frozen=True)
class LocateResult:
    exists: bool
    playlist_id: Optional[str] = None


class PlaylistLocator:
    def __init__(self, provider: PlaylistProvider) -> None:
        self.provider = provider

    def locate(self, title: str) -> LocateResult:
        """
        Find one of the account's own playlists by exact, case-sensitive title.

        Only the first page is read, so a match beyond it is reported as
        not found.
        """
        try:
            playlists = self.provider.list_playlists(
                mine=True, max_results=config.PLAYLIST_LOOKUP_MAX_RESULTS
            )
        except APIError as e:
            raise PlaylistLookupFailed(f"Could not list playlists: {e}") from e

        for p in playlists:
            if p.title == title:
                logger.debug(f"Found playlist {title!r} ({p.playlist_id})")
                return LocateResult(exists=True, playlist_id=p.playlist_id)

        return LocateResult(exists=False, playlist_id=None)
