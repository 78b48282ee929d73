import pytest

from ytimport.cache import CacheGateway
from ytimport.models import Playlist, TrackRecord
from ytimport.providers.youtube.api_manager import APIError, QuotaExhaustedError
from ytimport.stages import (
    DuplicateGuard,
    PlaylistLocator,
    PlaylistLookupFailed,
    PlaylistPopulator,
    TrackResolver,
    TrackStatus,
)


def _populator(provider, store, **kw):
    return PlaylistPopulator(
        provider=provider,
        resolver=TrackResolver(CacheGateway(store), provider),
        locator=PlaylistLocator(provider),
        guard=DuplicateGuard(provider),
        **kw,
    )


def _statuses(summary):
    return [o.status for o in summary.outcomes]


def test_new_playlist_with_repeated_track(provider, store):
    records = [TrackRecord("A", "X"), TrackRecord("A", "X"), TrackRecord("B", "Y")]

    summary = _populator(provider, store).populate("MyList", records)

    assert [c[1] for c in provider.calls_to("create_playlist")] == ["MyList"]
    assert [c[1] for c in provider.calls_to("search")] == ["A X", "B Y"]
    assert _statuses(summary) == [
        TrackStatus.ADDED,
        TrackStatus.DUPLICATE,
        TrackStatus.ADDED,
    ]
    assert summary.outcomes[1].video_id == "vidAX"
    assert summary.created is True
    assert provider.items[summary.playlist_id] == ["vidAX", "vidBY"]


def test_populate_twice_is_idempotent(provider, store):
    records = [TrackRecord("A", "X"), TrackRecord("B", "Y"), TrackRecord("C", "Z")]

    first = _populator(provider, store).populate("MyList", records)
    second = _populator(provider, store).populate("MyList", records)

    assert first.playlist_id == second.playlist_id
    assert len(provider.calls_to("create_playlist")) == 1
    assert len(provider.calls_to("search")) == 3
    assert _statuses(second) == [TrackStatus.DUPLICATE] * 3
    assert provider.items[first.playlist_id] == ["vidAX", "vidBY", "vidCZ"]


def test_existing_playlist_is_reused(provider, store):
    provider.playlists = [Playlist("PL_existing", "MyList")]
    provider.items["PL_existing"] = ["vidAX"]

    summary = _populator(provider, store).populate(
        "MyList", [TrackRecord("A", "X"), TrackRecord("B", "Y")]
    )

    assert provider.calls_to("create_playlist") == []
    assert summary.created is False
    assert {c[1] for c in provider.calls_to("list_items")} == {"PL_existing"}
    assert {c[1] for c in provider.calls_to("insert_item")} == {"PL_existing"}
    assert provider.items["PL_existing"] == ["vidAX", "vidBY"]


def test_member_is_never_inserted(provider, store):
    provider.playlists = [Playlist("PL_existing", "MyList")]
    provider.items["PL_existing"] = ["vidAX", "vidBY"]

    summary = _populator(provider, store).populate(
        "MyList", [TrackRecord("A", "X"), TrackRecord("B", "Y")]
    )

    assert provider.calls_to("insert_item") == []
    assert summary.count(TrackStatus.DUPLICATE) == 2


def test_unresolvable_track_does_not_stop_the_run(provider, store):
    records = [
        TrackRecord("A", "X"),
        TrackRecord("Nobody", "Nothing"),
        TrackRecord("B", "Y"),
        TrackRecord("C", "Z"),
    ]

    summary = _populator(provider, store).populate("MyList", records)

    assert _statuses(summary) == [
        TrackStatus.ADDED,
        TrackStatus.NOT_FOUND,
        TrackStatus.ADDED,
        TrackStatus.ADDED,
    ]
    assert "Nobody Nothing" in summary.outcomes[1].reason
    assert provider.items[summary.playlist_id] == ["vidAX", "vidBY", "vidCZ"]
    assert summary.failed == 1


def test_insert_failure_continues(provider, store):
    provider.fail_insert_for = {"vidBY"}

    summary = _populator(provider, store).populate(
        "MyList", [TrackRecord("A", "X"), TrackRecord("B", "Y"), TrackRecord("C", "Z")]
    )

    assert _statuses(summary) == [
        TrackStatus.ADDED,
        TrackStatus.FAILED,
        TrackStatus.ADDED,
    ]
    assert "Insert failed for B - Y" in summary.outcomes[1].reason


def test_create_failure_fails_every_dependent_track(provider, store):
    provider.fail["create_playlist"] = APIError("forbidden", 403)

    summary = _populator(provider, store).populate(
        "MyList", [TrackRecord("A", "X"), TrackRecord("B", "Y")]
    )

    assert summary.playlist_id is None
    assert summary.create_error
    assert _statuses(summary) == [TrackStatus.FAILED, TrackStatus.FAILED]
    assert all("no playlist id" in o.reason for o in summary.outcomes)
    assert provider.calls_to("insert_item") == []
    assert provider.calls_to("list_items") == []


def test_lookup_failure_aborts(provider, store):
    provider.fail["list_playlists"] = APIError("boom", 500)

    with pytest.raises(PlaylistLookupFailed):
        _populator(provider, store).populate("MyList", [TrackRecord("A", "X")])

    assert provider.calls_to("create_playlist") == []
    assert provider.calls_to("search") == []


def test_blank_record_is_reported(provider, store):
    summary = _populator(provider, store).populate(
        "MyList", [TrackRecord("", ""), TrackRecord("A", "X")]
    )

    assert _statuses(summary) == [TrackStatus.FAILED, TrackStatus.ADDED]
    assert summary.outcomes[0].reason == "no artist or track name"


def test_quota_during_search_is_a_track_failure(provider, store):
    provider.fail["search"] = QuotaExhaustedError("search.list: quota exhausted", 403)

    summary = _populator(provider, store).populate(
        "MyList", [TrackRecord("A", "X"), TrackRecord("B", "Y")]
    )

    assert _statuses(summary) == [TrackStatus.FAILED, TrackStatus.FAILED]
    assert len(provider.calls_to("search")) == 2


def test_membership_check_failure_skips_insert(provider, store):
    provider.fail["list_items"] = APIError("boom", 500)

    summary = _populator(provider, store).populate("MyList", [TrackRecord("A", "X")])

    assert _statuses(summary) == [TrackStatus.FAILED]
    assert provider.calls_to("insert_item") == []


def test_dry_run_creates_and_inserts_nothing(provider, store):
    summary = _populator(provider, store, dry_run=True).populate(
        "MyList", [TrackRecord("A", "X"), TrackRecord("B", "Y")]
    )

    assert provider.calls_to("create_playlist") == []
    assert provider.calls_to("insert_item") == []
    assert _statuses(summary) == [TrackStatus.WOULD_ADD, TrackStatus.WOULD_ADD]
    assert summary.dry_run is True


def test_dry_run_against_existing_playlist_checks_membership(provider, store):
    provider.playlists = [Playlist("PL_existing", "MyList")]
    provider.items["PL_existing"] = ["vidAX"]

    summary = _populator(provider, store, dry_run=True).populate(
        "MyList", [TrackRecord("A", "X"), TrackRecord("B", "Y")]
    )

    assert _statuses(summary) == [TrackStatus.DUPLICATE, TrackStatus.WOULD_ADD]
    assert provider.items["PL_existing"] == ["vidAX"]


def test_privacy_is_passed_to_create(provider, store):
    _populator(provider, store, privacy="unlisted").populate(
        "MyList", [TrackRecord("A", "X")]
    )

    assert provider.calls_to("create_playlist") == [
        ("create_playlist", "MyList", "unlisted")
    ]


def test_summary_counts(provider, store):
    summary = _populator(provider, store).populate(
        "MyList",
        [TrackRecord("A", "X"), TrackRecord("A", "X"), TrackRecord("Q", "Q")],
    )

    assert summary.total == 3
    assert summary.counts == {
        "added": 1,
        "would_add": 0,
        "duplicate": 1,
        "not_found": 1,
        "failed": 0,
    }


@pytest.mark.parametrize("existing", [True, False])
def test_dry_run_reports_repeats_like_a_real_run(provider, store, existing):
    if existing:
        provider.playlists = [Playlist("PL_existing", "MyList")]
        provider.items["PL_existing"] = []
    records = [TrackRecord("A", "X"), TrackRecord("A", "X"), TrackRecord("B", "Y")]

    summary = _populator(provider, store, dry_run=True).populate("MyList", records)

    assert _statuses(summary) == [
        TrackStatus.WOULD_ADD,
        TrackStatus.DUPLICATE,
        TrackStatus.WOULD_ADD,
    ]
    assert summary.outcomes[1].reason == "already present"
    assert provider.calls_to("insert_item") == []
    assert provider.calls_to("create_playlist") == []
