from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from ytimport.auth import AuthInvalid, get_provider
from ytimport.auth.errors import AuthFailed
from ytimport.branding import HEADER
from ytimport.cache import (
    CacheError,
    CacheGateway,
    CacheStore,
    JsonFileCacheStore,
    RedisCacheStore,
)
from ytimport.env import Environment, get_env
from ytimport.env.paths import cache_file, playlists_dir
from ytimport.logger import get_logger
from ytimport.providers.base import PlaylistProvider
from ytimport.providers.youtube import YouTubeProvider
from ytimport.sources.csv_source import SourceError, load_track_records, prompt_for_csv
from ytimport.stages import (
    DuplicateGuard,
    PlaylistLocator,
    PlaylistLookupFailed,
    PlaylistPopulator,
    PopulateSummary,
    TrackResolver,
)

log = get_logger("ytimport.runner")


class RunResult(str, Enum):
    OK = "ok"
    CANCELLED = "cancelled"
    AUTH_INVALID = "auth_invalid"
    FAILED = "failed"


@dataclass(frozen=True)
class RunOutcome:
    overall: RunResult
    summary: Optional[PopulateSummary] = None
    reason: Optional[str] = None


# ------------------------------------------------------------
# Builders
# ------------------------------------------------------------


def build_cache_store(env: Environment) -> CacheStore:
    if env.cache_backend == "file":
        path = cache_file()
        log.debug(f"Search cache: file {path}")
        return JsonFileCacheStore(path)

    log.debug(f"Search cache: redis {env.redis_url}")
    store = RedisCacheStore.from_url(env.redis_url, env.cache_timeout)
    store.ping()
    return store


def build_youtube_provider(env: Environment) -> YouTubeProvider:
    auth = get_provider("youtube")
    credentials = auth.get_authorized_handle()
    youtube = auth.build_client(credentials)
    return YouTubeProvider(youtube, privacy=env.playlist_privacy)


# ------------------------------------------------------------
# Entry point
# ------------------------------------------------------------


def run_import(
    csv_path: str | Path | None = None,
    title: str | None = None,
    *,
    dry_run: bool | None = None,
    provider: PlaylistProvider | None = None,
    store: CacheStore | None = None,
) -> RunOutcome:
    """
    Import one CSV export into one YouTube playlist, in a single pass.

    ``provider`` and ``store`` are built from the environment when omitted.
    """
    env = get_env()
    ctx_dry_run = env.dry_run if dry_run is None else bool(dry_run)

    # 1) Track records
    resolved_csv: Optional[Path] = None
    if csv_path:
        resolved_csv = Path(csv_path)
    elif env.csv_path:
        resolved_csv = Path(env.csv_path)
    else:
        resolved_csv = prompt_for_csv(playlists_dir())

    if resolved_csv is None:
        log.info("No file selected; nothing to import")
        return RunOutcome(overall=RunResult.CANCELLED, reason="no file selected")

    try:
        source = load_track_records(resolved_csv)
    except SourceError as e:
        log.error(str(e))
        return RunOutcome(overall=RunResult.FAILED, reason=str(e))

    playlist_title = title or env.playlist_title or source.display_name

    log.info(HEADER(f"Import: {playlist_title}").rstrip("\n"))
    log.info(f"CSV: {source.path}")
    log.info(f"Tracks: {len(source.records)}")
    if ctx_dry_run:
        log.info("Dry run: no playlist will be created and nothing inserted")

    # 2) Cache
    owns_store = store is None
    if store is None:
        try:
            store = build_cache_store(env)
        except CacheError as e:
            log.error(f"Search cache unavailable: {e}")
            return RunOutcome(overall=RunResult.FAILED, reason=str(e))

    try:
        # 3) Credentials + API client
        if provider is None:
            try:
                provider = build_youtube_provider(env)
            except AuthInvalid as e:
                log.error(f"Authorization failed: {e}")
                return RunOutcome(overall=RunResult.AUTH_INVALID, reason=str(e))
            except AuthFailed as e:
                log.error(f"Could not build YouTube client: {e}")
                return RunOutcome(overall=RunResult.FAILED, reason=str(e))

        # 4) Populate
        populator = PlaylistPopulator(
            provider=provider,
            resolver=TrackResolver(CacheGateway(store), provider),
            locator=PlaylistLocator(provider),
            guard=DuplicateGuard(provider),
            dry_run=ctx_dry_run,
            privacy=env.playlist_privacy,
        )

        try:
            summary = populator.populate(playlist_title, source.records)
        except PlaylistLookupFailed as e:
            log.error(str(e))
            return RunOutcome(overall=RunResult.FAILED, reason=str(e))

        return RunOutcome(overall=RunResult.OK, summary=summary)

    finally:
        if owns_store:
            store.close()
