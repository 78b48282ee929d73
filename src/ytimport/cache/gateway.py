"""
gateway.py

Search-result cache keyed by a track's (artist, track) identity.
"""

from __future__ import annotations

import json
from typing import List, Optional, Sequence

import ytimport.config as config
from ytimport.cache.stores import CacheStore
from ytimport.logger import get_logger
from ytimport.models import TrackRecord, VideoCandidate

logger = get_logger(__name__)


def cache_key(track: TrackRecord) -> str:
    return config.CACHE_KEY_TEMPLATE.format(artist=track.artist, track=track.track)


class CacheGateway:
    def __init__(
        self, store: CacheStore, ttl_seconds: int = config.CACHE_TTL_SECONDS
    ) -> None:
        self.store = store
        self.ttl_seconds = ttl_seconds

    def get_candidates(self, track: TrackRecord) -> Optional[List[VideoCandidate]]:
        """
        Cached candidates for a track.

        Returns None on a miss or when the stored value is not a JSON list.
        Malformed list members are dropped.
        """
        key = cache_key(track)
        raw = self.store.get(key)
        if raw is None:
            return None

        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning(f"Ignoring undecodable cache entry {key!r}")
            return None

        if not isinstance(data, list):
            logger.warning(f"Ignoring non-list cache entry {key!r}")
            return None

        out: List[VideoCandidate] = []
        for item in data:
            if isinstance(item, dict):
                cand = VideoCandidate.from_dict(item)
                if cand is not None:
                    out.append(cand)
        return out

    def remaining_ttl(self, track: TrackRecord) -> Optional[float]:
        return self.store.ttl(cache_key(track))

    def store_candidates(
        self, track: TrackRecord, candidates: Sequence[VideoCandidate]
    ) -> None:
        """Write candidates and (re)arm the full TTL."""
        key = cache_key(track)
        self.store.set(key, json.dumps([c.to_dict() for c in candidates]))
        self.store.expire(key, self.ttl_seconds)
