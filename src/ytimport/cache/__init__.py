from ytimport.cache.gateway import CacheGateway, cache_key
from ytimport.cache.stores import (
    CacheError,
    CacheStore,
    JsonFileCacheStore,
    RedisCacheStore,
)

__all__ = [
    "CacheError",
    "CacheGateway",
    "CacheStore",
    "JsonFileCacheStore",
    "RedisCacheStore",
    "cache_key",
]
