from datetime import datetime, timedelta

import pytest

from models import Playlist, PlaylistItem, WatchLater


@pytest.fixture
def playlist(client, test_db, make_publish, alice, alice_headers):
    publish = make_publish(title="First")
    response = client.post("/playlist", json=dict(alice, name="Favorites", publish_id=publish.id), headers=alice_headers)
    assert response.status_code == 200
    return test_db.query(Playlist).filter(Playlist.name == "Favorites").one()


def test_add_to_new_playlist_reuses_name(client, test_db, make_publish, playlist, alice, alice_headers):
    stale = datetime.utcnow() - timedelta(days=1)
    playlist.updated_at = stale
    test_db.commit()
    second = make_publish(title="Second")
    response = client.post("/playlist", json=dict(alice, name="Favorites", publish_id=second.id), headers=alice_headers)
    assert response.status_code == 200
    assert test_db.query(Playlist).count() == 1
    assert test_db.query(PlaylistItem).count() == 2

    test_db.expire_all()
    assert test_db.get(Playlist, playlist.id).updated_at > stale


def test_add_to_new_playlist_unknown_publish(client, alice, alice_headers):
    response = client.post("/playlist", json=dict(alice, name="Later", publish_id="missing"), headers=alice_headers)
    assert response.status_code == 404


def test_add_to_playlist_is_idempotent(client, test_db, make_publish, playlist, alice, alice_headers):
    publish = make_publish()
    body = dict(alice, playlist_id=playlist.id, publish_id=publish.id)
    assert client.post("/playlist/add", json=body, headers=alice_headers).status_code == 200
    assert client.post("/playlist/add", json=body, headers=alice_headers).status_code == 200
    assert test_db.query(PlaylistItem).filter(PlaylistItem.publish_id == publish.id).count() == 1


def test_cannot_touch_someone_elses_playlist(client, make_publish, playlist, bob, bob_headers):
    publish = make_publish()
    body = dict(bob, playlist_id=playlist.id, publish_id=publish.id)
    assert client.post("/playlist/add", json=body, headers=bob_headers).status_code == 403
    assert client.post("/playlist/items", json=dict(bob, playlist_id=playlist.id), headers=bob_headers).status_code == 403


def test_fetch_my_and_preview_playlists(client, make_publish, playlist, alice, alice_headers):
    mine = client.post("/playlist/mine", json=alice, headers=alice_headers).json()
    assert [edge["node"]["name"] for edge in mine["edges"]] == ["Favorites"]

    preview = client.post("/playlist/preview", json=alice, headers=alice_headers).json()
    node = preview["edges"][0]["node"]
    assert node["count"] == 1
    assert node["last_item"]["title"] == "First"
    assert preview["page_info"]["count"] == 1


def test_fetch_playlist_items(client, make_publish, playlist, alice, alice_headers):
    second = make_publish(title="Second")
    client.post("/playlist/add", json=dict(alice, playlist_id=playlist.id, publish_id=second.id), headers=alice_headers)

    response = client.post(
        "/playlist/items", json=dict(alice, playlist_id=playlist.id, order_by="oldest"), headers=alice_headers
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["playlist_name"] == "Favorites"
    assert [edge["node"]["publish"]["title"] for edge in payload["edges"]] == ["First", "Second"]
    assert payload["page_info"]["count"] == 2


def test_check_publish_playlists(client, test_db, playlist, alice, alice_headers):
    item = test_db.query(PlaylistItem).one()
    test_db.add(WatchLater(profile_id=alice["profile_id"], publish_id=item.publish_id))
    test_db.commit()

    response = client.post("/playlist/check", json=dict(alice, publish_id=item.publish_id), headers=alice_headers)
    assert response.status_code == 200
    payload = response.json()
    assert payload["is_in_watch_later"] is True
    assert [i["playlist_id"] for i in payload["items"]] == [playlist.id]


def test_batch_update_adds_and_removes(client, test_db, make_publish, playlist, alice, alice_headers):
    client.post("/playlist", json=dict(alice, name="Other", publish_id=make_publish().id), headers=alice_headers)
    other = test_db.query(Playlist).filter(Playlist.name == "Other").one()
    publish_id = test_db.query(PlaylistItem).filter(PlaylistItem.playlist_id == playlist.id).one().publish_id

    body = dict(
        alice,
        publish_id=publish_id,
        playlists=[
            {"playlist_id": playlist.id, "is_in_playlist": False},
            {"playlist_id": other.id, "is_in_playlist": True},
        ],
    )
    assert client.put("/playlist/batch", json=body, headers=alice_headers).status_code == 200
    assert test_db.query(PlaylistItem).filter(PlaylistItem.playlist_id == playlist.id).count() == 0
    assert test_db.query(PlaylistItem).filter(PlaylistItem.playlist_id == other.id).count() == 2

    assert client.put("/playlist/batch", json=dict(body, playlists=[]), headers=alice_headers).status_code == 422


def test_rename_and_describe(client, test_db, make_publish, playlist, alice, alice_headers):
    client.post("/playlist", json=dict(alice, name="Other", publish_id=make_publish().id), headers=alice_headers)

    taken = client.put("/playlist/name", json=dict(alice, playlist_id=playlist.id, name="Other"), headers=alice_headers)
    assert taken.status_code == 400

    renaming = dict(alice, playlist_id=playlist.id, name="Best")
    assert client.put("/playlist/name", json=renaming, headers=alice_headers).status_code == 200
    body = dict(alice, playlist_id=playlist.id, description="My best videos")
    assert client.put("/playlist/description", json=body, headers=alice_headers).status_code == 200

    test_db.expire_all()
    renamed = test_db.get(Playlist, playlist.id)
    assert (renamed.name, renamed.description) == ("Best", "My best videos")


def test_remove_clear_and_delete(client, test_db, make_publish, playlist, alice, alice_headers):
    item = test_db.query(PlaylistItem).one()
    body = dict(alice, playlist_id=playlist.id, publish_id=item.publish_id)
    assert client.post("/playlist/remove", json=body, headers=alice_headers).status_code == 200
    assert test_db.query(PlaylistItem).count() == 0

    client.post("/playlist/add", json=body, headers=alice_headers)
    target = dict(alice, playlist_id=playlist.id)
    assert client.post("/playlist/clear", json=target, headers=alice_headers).status_code == 200
    assert test_db.query(PlaylistItem).count() == 0

    assert client.post("/playlist/delete", json=target, headers=alice_headers).status_code == 200
    assert test_db.query(Playlist).count() == 0
