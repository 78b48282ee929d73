"""
config.py

Central constants for ytimport.

This file intentionally contains ONLY:
- Constants
- Tunables
- Key templates
- CSV column names

It must NOT contain:
- Business logic
- API calls
- Reading environment variables

Runtime configuration (env vars) belongs in:
- env/env.py
- bootstrap.py (CLI bootstrap)
"""

from __future__ import annotations

# ============================================================
# YOUTUBE API
# ============================================================

YOUTUBE_OAUTH_SCOPES = ["https://www.googleapis.com/auth/youtube"]

YOUTUBE_API_SERVICE = "youtube"
YOUTUBE_API_VERSION = "v3"

# ============================================================
# PAGE SIZES
# ============================================================

# Only the top search hit is ever used.
SEARCH_MAX_RESULTS = 1

# Playlist lookup reads a single page; a match beyond it is not found.
PLAYLIST_LOOKUP_MAX_RESULTS = 20

# YouTube API max page size for playlistItems.list is 50
MEMBERSHIP_MAX_RESULTS = 50

# ============================================================
# PLAYLIST DEFAULTS (env.py may override)
# ============================================================

DEFAULT_PLAYLIST_PRIVACY = "private"
PLAYLIST_PRIVACY_CHOICES = ("private", "unlisted", "public")

# ============================================================
# SEARCH CACHE
# ============================================================

# Raw field values, no normalisation. Existing caches depend on this format.
CACHE_KEY_TEMPLATE = "youtube-data-for-{artist}-{track}"

CACHE_TTL_SECONDS = 24 * 60 * 60

DEFAULT_CACHE_BACKEND = "redis"
CACHE_BACKEND_CHOICES = ("redis", "file")
DEFAULT_REDIS_URL = "redis://localhost:6379/0"
DEFAULT_CACHE_TIMEOUT_SEC = 5.0
FILE_CACHE_BASENAME = "search_cache.json"

# ============================================================
# CSV EXPORT COLUMNS
# ============================================================

CSV_ARTIST_COLUMN = "Artist Name(s)"
CSV_TRACK_COLUMN = "Track Name"

# Choice appended to the interactive file prompt
EXIT_CHOICE = "exit"

# ============================================================
# LOGGING DEFAULTS (logger/env control actual behavior)
# ============================================================

DEFAULT_LOG_RETENTION = 30
DEFAULT_LOG_LEVEL = "INFO"
