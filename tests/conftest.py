import logging
import os

import pytest

from ytimport.models import Playlist, PlaylistMembership, VideoCandidate
from ytimport.providers.base import PlaylistProvider
from ytimport.providers.youtube.api_manager import APIError


@pytest.fixture(autouse=True)
def clean_env_and_logger(monkeypatch, tmp_path):
    """
    Ensure tests don't leak env, logger state, or directories into the repo.
    """

    for k in list(os.environ):
        if k.startswith("YTIMPORT_"):
            monkeypatch.delenv(k, raising=False)
    for k in ("REDIS_URL", "LOG_LEVEL", "LOG_RETENTION"):
        monkeypatch.delenv(k, raising=False)

    monkeypatch.setenv("YTIMPORT_LOGS_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("YTIMPORT_AUTH_DIR", str(tmp_path / "auth"))
    monkeypatch.setenv("YTIMPORT_CACHE_DIR", str(tmp_path / "cache"))
    monkeypatch.setenv("YTIMPORT_PLAYLISTS_DIR", str(tmp_path / "playlists"))

    # No Redis server in tests
    monkeypatch.setenv("YTIMPORT_CACHE_BACKEND", "file")

    from ytimport.env import reset_env_caches
    import ytimport.logger.state

    reset_env_caches()

    ytimport.logger.state.reset()

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    yield

    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    reset_env_caches()


# ------------------------------------------------------------
# Fakes
# ------------------------------------------------------------


class FakeClock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class MemoryStore:
    """Dict-backed cache store that records every call."""

    def __init__(self, clock=None):
        self.clock = clock or FakeClock()
        self.values = {}
        self.expires_at = {}
        self.calls = []

    def _live(self, key):
        exp = self.expires_at.get(key)
        if exp is not None and exp <= self.clock():
            self.values.pop(key, None)
            self.expires_at.pop(key, None)
        return key in self.values

    def get(self, key):
        self.calls.append(("get", key))
        return self.values[key] if self._live(key) else None

    def set(self, key, value):
        self.calls.append(("set", key))
        self.values[key] = value
        self.expires_at.pop(key, None)

    def expire(self, key, seconds):
        self.calls.append(("expire", key, seconds))
        if not self._live(key):
            return False
        self.expires_at[key] = self.clock() + seconds
        return True

    def ttl(self, key):
        if not self._live(key) or key not in self.expires_at:
            return None
        return self.expires_at[key] - self.clock()

    def close(self):
        self.calls.append(("close",))


class FakeProvider(PlaylistProvider):
    """
    In-memory playlist service.

    ``results`` maps a search query to its ranked candidates.
    ``fail`` maps a method name to an exception raised on every call.
    ``fail_insert_for`` holds video ids whose insert is rejected.
    """

    name = "fake"

    def __init__(self, results=None, playlists=None):
        self.results = dict(results or {})
        self.playlists = list(playlists or [])
        self.items = {p.playlist_id: [] for p in self.playlists}
        self.fail = {}
        self.fail_insert_for = set()
        self.calls = []
        self._next = 1

    def _enter(self, method, *args):
        self.calls.append((method,) + args)
        exc = self.fail.get(method)
        if exc is not None:
            raise exc

    def calls_to(self, method):
        return [c for c in self.calls if c[0] == method]

    def search(self, query, max_results):
        self._enter("search", query, max_results)
        return list(self.results.get(query, []))[:max_results]

    def list_playlists(self, mine, max_results):
        self._enter("list_playlists", mine, max_results)
        return list(self.playlists)[:max_results]

    def create_playlist(self, title, privacy=None):
        self._enter("create_playlist", title, privacy)
        p = Playlist(playlist_id=f"PL{self._next}", title=title)
        self._next += 1
        self.playlists.append(p)
        self.items[p.playlist_id] = []
        return p

    def list_items(self, playlist_id, video_id, max_results):
        self._enter("list_items", playlist_id, video_id, max_results)
        vids = self.items.get(playlist_id, [])
        if video_id:
            vids = [v for v in vids if v == video_id]
        return [PlaylistMembership(playlist_id, v) for v in vids[:max_results]]

    def insert_item(self, playlist_id, video_id):
        self._enter("insert_item", playlist_id, video_id)
        if video_id in self.fail_insert_for:
            raise APIError(f"insert rejected for {video_id}", 400)
        self.items.setdefault(playlist_id, []).append(video_id)


def candidate(video_id, title=None, rank=0):
    return VideoCandidate(video_id=video_id, title=title or video_id, rank=rank)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return MemoryStore(clock)


@pytest.fixture
def provider():
    return FakeProvider(
        results={
            "A X": [candidate("vidAX", "A - X (Official Video)")],
            "B Y": [candidate("vidBY", "B - Y")],
            "C Z": [candidate("vidCZ", "C - Z")],
        }
    )
