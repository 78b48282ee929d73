"""ytimport: import CSV playlist exports into YouTube playlists."""

__version__ = "1.0.0"
