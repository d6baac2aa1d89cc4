import pytest
from sqlalchemy import insert

from core.db import insert_if_absent, unit_of_work
from core.notifications import NotificationEmitter
from models import Follow, Notification, NotificationType


class FailingBus:
    def publish(self, topic, payload):
        raise ConnectionError("redis is down")


def test_after_commit_runs_only_on_commit(test_db):
    ran = []
    with unit_of_work(test_db) as uow:
        uow.after_commit(ran.append, "committed")
    assert ran == ["committed"]

    with pytest.raises(RuntimeError):
        with unit_of_work(test_db) as uow:
            uow.after_commit(ran.append, "rolled back")
            raise RuntimeError("boom")
    assert ran == ["committed"]


def test_insert_if_absent_reports_duplicates(test_db, alice, bob):
    statement = insert(Follow).values(follower_id=alice["profile_id"], following_id=bob["profile_id"])
    with unit_of_work(test_db):
        assert insert_if_absent(test_db, statement) is True
        assert insert_if_absent(test_db, statement) is False
    assert test_db.query(Follow).count() == 1


def test_emitter_publishes_after_commit(test_db, bus, alice, bob):
    emitter = NotificationEmitter(bus, "new-notification")
    with unit_of_work(test_db) as uow:
        emitter.emit(
            uow,
            receiver_id=alice["profile_id"],
            actor_id=bob["profile_id"],
            kind=NotificationType.OTHER,
            content="hi",
        )
        assert bus.published == []
    assert bus.published == [("new-notification", alice["profile_id"])]
    assert test_db.query(Notification).count() == 1


def test_emitter_publish_failure_keeps_notification(test_db, alice, bob):
    emitter = NotificationEmitter(FailingBus(), "new-notification")
    with unit_of_work(test_db) as uow:
        emitter.emit(
            uow,
            receiver_id=alice["profile_id"],
            actor_id=bob["profile_id"],
            kind=NotificationType.OTHER,
            content="hi",
        )
    assert test_db.query(Notification).count() == 1
