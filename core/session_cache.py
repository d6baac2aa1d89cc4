"""Remembers which profile a wallet address last logged in with."""

import logging
from typing import Optional, Sequence

import redis

logger = logging.getLogger(__name__)


class RedisSessionCache:
    def __init__(self, redis_url: str, *, client: Optional[redis.Redis] = None):
        self._client = client or redis.Redis.from_url(redis_url, decode_responses=True)

    def set_default_profile(self, address: str, profile_id: str) -> None:
        self._client.set(address.lower(), profile_id)

    def get_default_profile(self, address: str) -> Optional[str]:
        return self._client.get(address.lower())


def resolve_default_profile(cache, *, owner: str, profiles: Sequence):
    """The cached profile if it is one of ``profiles``, else the first one, else None."""
    if not profiles:
        return None
    cached_id = cache.get_default_profile(owner)
    if cached_id:
        for profile in profiles:
            if profile.id == cached_id:
                return profile
    return profiles[0]
