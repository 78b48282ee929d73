"""
client.py

YouTube Data API implementation of PlaylistProvider.

Responsibilities:
- Request construction for search / playlists / playlistItems
- Response parsing into domain records

Does NOT:
- Perform OAuth (see ytimport.auth)
- Cache anything
- Decide what to insert
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, TypeAlias

import ytimport.config as config
from ytimport.logger import get_logger
from ytimport.models import Playlist, PlaylistMembership, VideoCandidate
from ytimport.providers.base import PlaylistProvider
from ytimport.providers.youtube.api_manager import execute_once

logger = get_logger(__name__)

YouTubeClient: TypeAlias = Any


def _parse_search_items(resp: Dict[str, Any]) -> List[VideoCandidate]:
    out: List[VideoCandidate] = []
    for it in resp.get("items", []) or []:
        rid = it.get("id") or {}
        vid = rid.get("videoId") if isinstance(rid, dict) else None
        if not isinstance(vid, str) or not vid:
            continue
        title = (it.get("snippet") or {}).get("title", "")
        out.append(VideoCandidate(video_id=vid, title=str(title), rank=len(out)))
    return out


class YouTubeProvider(PlaylistProvider):
    name = "youtube"

    def __init__(
        self,
        youtube: YouTubeClient,
        privacy: str = config.DEFAULT_PLAYLIST_PRIVACY,
    ) -> None:
        self.youtube = youtube
        self.privacy = privacy

    def search(self, query: str, max_results: int) -> List[VideoCandidate]:
        def _op() -> Any:
            return (
                self.youtube.search()
                .list(
                    part="snippet",
                    q=query,
                    type="video",
                    maxResults=max_results,
                )
                .execute()
            )

        resp = execute_once(_op, name=f"search.list q={query!r}")
        return _parse_search_items(resp)

    def list_playlists(self, mine: bool, max_results: int) -> List[Playlist]:
        def _op() -> Any:
            return (
                self.youtube.playlists()
                .list(
                    part="snippet",
                    mine=mine,
                    maxResults=max_results,
                )
                .execute()
            )

        resp = execute_once(_op, name="playlists.list")

        playlists: List[Playlist] = []
        for it in resp.get("items", []) or []:
            pid = it.get("id")
            title = (it.get("snippet") or {}).get("title")
            if isinstance(pid, str) and isinstance(title, str):
                playlists.append(Playlist(playlist_id=pid, title=title))
        return playlists

    def create_playlist(self, title: str, privacy: Optional[str] = None) -> Playlist:
        def _op() -> Any:
            return (
                self.youtube.playlists()
                .insert(
                    part="snippet,status",
                    body={
                        "snippet": {"title": title},
                        "status": {"privacyStatus": privacy or self.privacy},
                    },
                )
                .execute()
            )

        resp = execute_once(_op, name=f"playlists.insert title={title!r}")
        pid = resp.get("id")
        if not isinstance(pid, str) or not pid:
            raise ValueError(f"playlists.insert returned no id for {title!r}")
        return Playlist(playlist_id=pid, title=title)

    def list_items(
        self, playlist_id: str, video_id: Optional[str], max_results: int
    ) -> List[PlaylistMembership]:
        params: Dict[str, Any] = {
            "part": "contentDetails",
            "playlistId": playlist_id,
            "maxResults": max_results,
        }
        if video_id:
            params["videoId"] = video_id

        def _op() -> Any:
            return self.youtube.playlistItems().list(**params).execute()

        resp = execute_once(_op, name=f"playlistItems.list {playlist_id}")

        items: List[PlaylistMembership] = []
        for it in resp.get("items", []) or []:
            cd = it.get("contentDetails") or {}
            vid = cd.get("videoId")
            if isinstance(vid, str):
                items.append(
                    PlaylistMembership(
                        playlist_id=playlist_id,
                        video_id=vid,
                        playlist_item_id=str(it.get("id") or ""),
                    )
                )
        return items

    def insert_item(self, playlist_id: str, video_id: str) -> None:
        def _op() -> Any:
            return (
                self.youtube.playlistItems()
                .insert(
                    part="snippet",
                    body={
                        "snippet": {
                            "playlistId": playlist_id,
                            "resourceId": {"kind": "youtube#video", "videoId": video_id},
                        }
                    },
                )
                .execute()
            )

        resp = execute_once(_op, name=f"playlistItems.insert {video_id}")
        logger.debug(f"Inserted {video_id} (playlistItemId={resp.get('id')})")
