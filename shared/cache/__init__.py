from .redis_cache import CacheLookup, CacheStatus, RedisCache, get_cache

__all__ = ["CacheLookup", "CacheStatus", "RedisCache", "get_cache"]
