"""Message handlers run by the background listener."""

import logging

from config import Settings
from core.db import get_db_context
from core.ports.bus import MessageBusPort
from routers.webhooks.service import delete_video_publish

logger = logging.getLogger(__name__)


def handle_video_deleted(message, *, bus: MessageBusPort, settings: Settings) -> bool:
    """A video was removed from the CDN: drop its publish and announce the deletion."""
    publish_id = message.strip() if isinstance(message, str) else ""
    if not publish_id:
        logger.warning("Ignoring video deletion message with unexpected shape: %r", message)
        return False
    with get_db_context() as db:
        return delete_video_publish(
            db, bus=bus, deletion_topic=settings.publish_deletion_topic, publish_id=publish_id
        )
