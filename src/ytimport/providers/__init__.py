from ytimport.providers.base import PlaylistProvider

__all__ = ["PlaylistProvider"]
