from __future__ import annotations

import ytimport.config as config
from ytimport.providers.base import PlaylistProvider
from ytimport.providers.youtube.api_manager import APIError
from ytimport.stages.errors import MembershipCheckFailed


class DuplicateGuard:
    """
    Asks the playlist, every time, whether a video is already in it.

    Nothing is cached: membership changes between runs and within a run
    after each successful insert.
    """

    def __init__(self, provider: PlaylistProvider) -> None:
        self.provider = provider

    def is_member(self, video_id: str, playlist_id: str) -> bool:
        try:
            items = self.provider.list_items(
                playlist_id,
                video_id=video_id,
                max_results=config.MEMBERSHIP_MAX_RESULTS,
            )
        except APIError as e:
            raise MembershipCheckFailed(
                f"Could not check {video_id} in {playlist_id}: {e}"
            ) from e
        return len(items) > 0
