from ytimport.stages.errors import (
    InsertFailed,
    MembershipCheckFailed,
    NoSearchResults,
    PipelineError,
    PlaylistCreateFailed,
    PlaylistLookupFailed,
    PlaylistUnavailable,
)
from ytimport.stages.guard import DuplicateGuard
from ytimport.stages.locator import LocateResult, PlaylistLocator
from ytimport.stages.populate import (
    PlaylistPopulator,
    PopulateSummary,
    TrackOutcome,
    TrackStatus,
)
from ytimport.stages.resolver import TrackResolver

__all__ = [
    "DuplicateGuard",
    "InsertFailed",
    "LocateResult",
    "MembershipCheckFailed",
    "NoSearchResults",
    "PipelineError",
    "PlaylistCreateFailed",
    "PlaylistLocator",
    "PlaylistLookupFailed",
    "PlaylistPopulator",
    "PlaylistUnavailable",
    "PopulateSummary",
    "TrackOutcome",
    "TrackResolver",
    "TrackStatus",
]
