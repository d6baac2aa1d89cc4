from __future__ import annotations

import logging
import time

from config import ENVIRONMENT, LOG_LEVEL, get_settings
from core.logging import configure_logging
from core.pubsub import RedisMessageBus

from .handlers import handle_video_deleted

logger = logging.getLogger("worker")


def main() -> None:
    configure_logging(environment=ENVIRONMENT, log_level=LOG_LEVEL)
    settings = get_settings()
    bus = RedisMessageBus(settings.redis_url)
    subscription = settings.video_deletion_subscription
    logger.info("Worker started | subscription=%s", subscription)

    for message in bus.listen(subscription):
        try:
            handle_video_deleted(message, bus=bus, settings=settings)
        except Exception as exc:
            logger.exception("Video deletion failed: %s", exc)
            time.sleep(0.25)


if __name__ == "__main__":
    main()
