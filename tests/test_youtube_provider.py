import json

import pytest
from googleapiclient.errors import HttpError

from ytimport.providers.youtube import YouTubeProvider
from ytimport.providers.youtube.api_manager import (
    APIError,
    AuthRejectedError,
    QuotaExhaustedError,
    classify_http_error,
    execute_once,
)


class _Resp:
    def __init__(self, status, reason=""):
        self.status = status
        self.reason = reason


def _http_error(status, payload):
    content = json.dumps(payload).encode("utf-8") if payload is not None else b""
    return HttpError(_Resp(status, "err"), content)


QUOTA = {
    "error": {
        "code": 403,
        "message": "The request cannot be completed because you have exceeded your quota.",
        "errors": [{"reason": "quotaExceeded", "domain": "youtube.quota"}],
    }
}


def test_classify_quota():
    assert classify_http_error(_http_error(403, QUOTA)) == "quota"


def test_classify_auth():
    e = _http_error(401, {"error": {"code": 401, "message": "Invalid Credentials"}})
    assert classify_http_error(e) == "auth"


def test_classify_other():
    e = _http_error(404, {"error": {"code": 404, "message": "Playlist not found"}})
    assert classify_http_error(e) == "other"


def test_execute_once_translates_errors():
    def _raise(e):
        def _op():
            raise e

        return _op

    with pytest.raises(QuotaExhaustedError):
        execute_once(_raise(_http_error(403, QUOTA)), "search.list")

    with pytest.raises(AuthRejectedError):
        execute_once(_raise(_http_error(401, None)), "search.list")

    with pytest.raises(APIError) as exc:
        execute_once(_raise(_http_error(500, {"error": {"message": "backend"}})), "x")
    assert exc.value.status == 500

    with pytest.raises(APIError):
        execute_once(_raise(TimeoutError("read timed out")), "x")


def test_execute_once_runs_exactly_once():
    calls = []

    def _op():
        calls.append(1)
        raise _http_error(500, None)

    with pytest.raises(APIError):
        execute_once(_op, "x")
    assert len(calls) == 1


# ------------------------------------------------------------
# Fake googleapiclient resource
# ------------------------------------------------------------


class _Request:
    def __init__(self, resp):
        self.resp = resp

    def execute(self):
        if isinstance(self.resp, Exception):
            raise self.resp
        return self.resp


class _Collection:
    def __init__(self, log, name, responses):
        self.log = log
        self.name = name
        self.responses = responses

    def list(self, **kwargs):
        self.log.append((self.name, "list", kwargs))
        return _Request(self.responses.get((self.name, "list"), {}))

    def insert(self, **kwargs):
        self.log.append((self.name, "insert", kwargs))
        return _Request(self.responses.get((self.name, "insert"), {}))


class _YouTube:
    def __init__(self, responses=None):
        self.log = []
        self.responses = responses or {}

    def search(self):
        return _Collection(self.log, "search", self.responses)

    def playlists(self):
        return _Collection(self.log, "playlists", self.responses)

    def playlistItems(self):
        return _Collection(self.log, "playlistItems", self.responses)


def test_search_parses_video_results():
    yt = _YouTube(
        {
            ("search", "list"): {
                "items": [
                    {"id": {"kind": "youtube#channel", "channelId": "c1"}},
                    {"id": {"videoId": "v1"}, "snippet": {"title": "Song"}},
                ]
            }
        }
    )

    got = YouTubeProvider(yt).search("A X", 1)

    assert [(c.video_id, c.title, c.rank) for c in got] == [("v1", "Song", 0)]
    assert yt.log == [
        ("search", "list", {"part": "snippet", "q": "A X", "type": "video", "maxResults": 1})
    ]


def test_search_with_no_items():
    assert YouTubeProvider(_YouTube({("search", "list"): {}})).search("q", 1) == []


def test_list_playlists():
    yt = _YouTube(
        {
            ("playlists", "list"): {
                "items": [{"id": "PL1", "snippet": {"title": "Chill"}}, {"id": "PL2"}]
            }
        }
    )

    got = YouTubeProvider(yt).list_playlists(mine=True, max_results=20)

    assert [(p.playlist_id, p.title) for p in got] == [("PL1", "Chill")]
    assert yt.log[0][2] == {"part": "snippet", "mine": True, "maxResults": 20}


def test_create_playlist_sends_privacy():
    yt = _YouTube({("playlists", "insert"): {"id": "PLnew"}})

    p = YouTubeProvider(yt, privacy="unlisted").create_playlist("Road Trip")

    assert p.playlist_id == "PLnew"
    body = yt.log[0][2]["body"]
    assert body == {
        "snippet": {"title": "Road Trip"},
        "status": {"privacyStatus": "unlisted"},
    }


def test_create_playlist_without_id_raises():
    with pytest.raises(ValueError):
        YouTubeProvider(_YouTube()).create_playlist("Road Trip")


def test_list_items_filters_by_video():
    yt = _YouTube(
        {
            ("playlistItems", "list"): {
                "items": [{"id": "item1", "contentDetails": {"videoId": "v1"}}]
            }
        }
    )

    got = YouTubeProvider(yt).list_items("PL1", "v1", 50)

    assert [(m.playlist_id, m.video_id, m.playlist_item_id) for m in got] == [
        ("PL1", "v1", "item1")
    ]
    assert yt.log[0][2] == {
        "part": "contentDetails",
        "playlistId": "PL1",
        "maxResults": 50,
        "videoId": "v1",
    }


def test_insert_item_body():
    yt = _YouTube({("playlistItems", "insert"): {"id": "item9"}})

    YouTubeProvider(yt).insert_item("PL1", "v1")

    assert yt.log[0][2]["body"]["snippet"] == {
        "playlistId": "PL1",
        "resourceId": {"kind": "youtube#video", "videoId": "v1"},
    }


def test_provider_errors_are_api_errors():
    yt = _YouTube({("playlistItems", "insert"): _http_error(403, QUOTA)})

    with pytest.raises(QuotaExhaustedError):
        YouTubeProvider(yt).insert_item("PL1", "v1")
