"""Redis-backed message bus.

Topics are plain redis pub/sub channels; payloads are strings (usually a
publish or profile id).
"""

import logging
from typing import Iterator, Optional

import redis

logger = logging.getLogger(__name__)


class RedisMessageBus:
    def __init__(self, redis_url: str, *, client: Optional[redis.Redis] = None):
        self._client = client or redis.Redis.from_url(redis_url, decode_responses=True)

    def publish(self, topic: str, payload: str) -> None:
        receivers = self._client.publish(topic, payload)
        logger.debug("Published to %s | receivers=%s", topic, receivers)

    def listen(self, subscription: str) -> Iterator[str]:
        psub = self._client.pubsub(ignore_subscribe_messages=True)
        psub.subscribe(subscription)
        logger.info("Subscribed to %s", subscription)
        try:
            for msg in psub.listen():
                if msg is None or msg.get("type") != "message":
                    continue
                yield msg["data"]
        finally:
            psub.close()
