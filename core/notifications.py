"""Notification rows plus the live-delivery nudge that follows them.

The row is written inside the caller's unit of work. The receiver id is
published to the notification topic only after that unit commits, and a
publish failure is logged, never raised: storage is the source of truth,
live delivery is best effort.
"""

import logging

from core.db import UnitOfWork

logger = logging.getLogger(__name__)


def _kind_label(publish_type) -> str:
    value = getattr(publish_type, "value", publish_type) or "publish"
    return "blog" if value == "Blog" else str(value).lower()


def like_publish_content(actor_name: str, title: str, publish_type) -> str:
    return f"{actor_name} liked your {_kind_label(publish_type)}: {title or 'Untitled'}"


def like_comment_content(actor_name: str) -> str:
    return f"{actor_name} liked your comment"


def comment_content(actor_name: str, title: str, publish_type) -> str:
    return f"{actor_name} commented on your {_kind_label(publish_type)}: {title or 'Untitled'}"


def follow_content(actor_name: str) -> str:
    return f"{actor_name} started following you"


def tip_content(actor_name: str, amount: str, title: str) -> str:
    return f"{actor_name} sent you {amount} tips on {title or 'Untitled'}"


class NotificationEmitter:
    def __init__(self, bus, topic: str):
        self.bus = bus
        self.topic = topic

    def emit(self, uow: UnitOfWork, *, receiver_id: str, actor_id: str, kind, content: str):
        from models import Notification

        notification = Notification(
            profile_id=actor_id,
            receiver_id=receiver_id,
            type=kind,
            content=content,
        )
        uow.db.add(notification)
        uow.after_commit(self._publish, receiver_id)
        return notification

    def _publish(self, receiver_id: str) -> None:
        try:
            self.bus.publish(self.topic, receiver_id)
        except Exception as exc:
            logger.warning(
                "Notification publish failed | topic=%s | receiver=%s | %s",
                self.topic,
                receiver_id,
                exc,
            )
