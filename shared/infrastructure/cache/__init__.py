# Cache module
from .redis_cache import RedisCache

__all__ = ['RedisCache']
