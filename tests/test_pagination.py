from datetime import datetime, timedelta

import pytest

from core.pagination import ASC, DESC, paginate, to_connection
from models import Publish


@pytest.fixture
def publishes(make_publish):
    start = datetime(2024, 1, 1)
    return [make_publish(title=f"P{i}", created_at=start + timedelta(minutes=i)) for i in range(5)]


def titles(page):
    return [item.title for item in page.items]


def test_pages_follow_the_cursor(test_db, publishes):
    query = test_db.query(Publish)
    order = [(Publish.created_at, DESC)]

    first = paginate(query, key=Publish.id, order=order, take=2, with_count=True)
    assert titles(first) == ["P4", "P3"]
    assert first.has_next_page is True
    assert first.count == 5

    second = paginate(query, key=Publish.id, order=order, cursor=first.end_cursor, take=2)
    assert titles(second) == ["P2", "P1"]

    last = paginate(query, key=Publish.id, order=order, cursor=second.end_cursor, take=2)
    assert titles(last) == ["P0"]
    assert last.end_cursor is None
    assert last.has_next_page is False


def test_full_last_page_has_no_next_page(test_db, publishes):
    page = paginate(test_db.query(Publish), key=Publish.id, order=[(Publish.created_at, ASC)], take=5)
    assert titles(page) == ["P0", "P1", "P2", "P3", "P4"]
    assert page.end_cursor == publishes[-1].id
    assert page.has_next_page is False


def test_ties_are_broken_by_key(test_db, make_publish):
    same = datetime(2024, 1, 1)
    for i in range(3):
        make_publish(title=f"T{i}", created_at=same)
    query = test_db.query(Publish)
    order = [(Publish.created_at, DESC)]

    first = paginate(query, key=Publish.id, order=order, take=2)
    rest = paginate(query, key=Publish.id, order=order, cursor=first.end_cursor, take=2)
    seen = [item.id for item in first.items + rest.items]
    assert sorted(seen) == sorted(p.id for p in query.all())


def test_unknown_cursor_returns_empty_page(test_db, publishes):
    page = paginate(
        test_db.query(Publish), key=Publish.id, order=[(Publish.created_at, DESC)], cursor="missing", with_count=True
    )
    assert page.items == []
    assert page.count == 5


def test_to_connection_maps_nodes(test_db, publishes):
    page = paginate(test_db.query(Publish), key=Publish.id, order=[(Publish.created_at, DESC)], take=1)
    connection = to_connection(page, lambda publish: {"title": publish.title})
    assert connection["edges"] == [{"cursor": publishes[-1].id, "node": {"title": "P4"}}]
    assert connection["page_info"] == {"end_cursor": publishes[-1].id, "has_next_page": True, "count": None}
