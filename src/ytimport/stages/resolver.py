from __future__ import annotations

from typing import List, Optional

import ytimport.config as config
from ytimport.cache.gateway import CacheGateway
from ytimport.logger import get_logger
from ytimport.models import TrackRecord, VideoCandidate
from ytimport.providers.base import PlaylistProvider
from ytimport.stages.errors import NoSearchResults

logger = get_logger(__name__)


class TrackResolver:
    """
    Maps a track record to one video, cache first.

    A live cache entry is authoritative: while it exists no search is issued.
    Every successful resolve rewrites the entry and re-arms the full TTL, so
    entries age from their last use rather than their first write.
    """

    def __init__(self, cache: CacheGateway, provider: PlaylistProvider) -> None:
        self.cache = cache
        self.provider = provider

    def resolve(self, track: TrackRecord) -> VideoCandidate:
        query = track.query
        if not track.has_identity:
            raise NoSearchResults(query)

        candidates: Optional[List[VideoCandidate]] = self.cache.get_candidates(track)

        if candidates:
            left = self.cache.remaining_ttl(track)
            if left is None:
                logger.debug(f"Cache hit for {track.label}")
            else:
                logger.debug(f"Cache hit for {track.label} ({int(left)}s left, re-arming)")
        else:
            logger.debug(f"Cache miss for {track.label}; searching {query!r}")
            candidates = self.provider.search(query, config.SEARCH_MAX_RESULTS)

        if not candidates:
            raise NoSearchResults(query)

        self.cache.store_candidates(track, candidates)
        return candidates[0]
