from ytimport.providers.youtube.client import YouTubeProvider

__all__ = ["YouTubeProvider"]
