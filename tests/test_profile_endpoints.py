from config import get_settings
from models import Follow, Notification, NotificationType, Profile


def test_get_profile_by_id_and_name(client, alice, bob):
    response = client.get(f"/profile/{alice['profile_id']}", params={"requestor_id": bob["profile_id"]})
    assert response.status_code == 200
    payload = response.json()
    assert payload["name"] == "alice"
    assert payload["followers_count"] == 0
    assert payload["is_following"] is False
    assert payload["is_owner"] is False

    assert client.get("/profile/by-name/bob").json()["id"] == bob["profile_id"]
    assert client.get("/profile/by-name/nobody").json() is None
    assert client.get("/profile/missing").json() is None


def test_validate_name(client):
    assert client.get("/profile/validate-name", params={"name": "alice"}).json() is False
    assert client.get("/profile/validate-name", params={"name": "carol"}).json() is True
    assert client.get("/profile/validate-name").json() is False


def test_create_profile(client, test_db, alice_headers, alice):
    body = {"owner": alice["owner"], "account_id": alice["account_id"], "name": "alice_music"}
    response = client.post("/profile", json=body, headers=alice_headers)
    assert response.status_code == 200
    assert response.json()["display_name"] == "alice_music"
    assert response.json()["default_color"].startswith("#")

    taken = client.post("/profile", json=dict(body, name="bob"), headers=alice_headers)
    assert taken.status_code == 400
    assert taken.json()["detail"] == "This name was taken."
    assert test_db.query(Profile).count() == 3


def test_update_name_requires_ownership(client, alice_headers, alice, bob):
    body = dict(alice, profile_id=bob["profile_id"], new_name="bobby")
    response = client.put("/profile/name", json=body, headers=alice_headers)
    assert response.status_code == 403
    assert response.json()["code"] == "UN_AUTHORIZED"


def test_update_display_name(client, test_db, alice_headers, alice):
    response = client.put("/profile/display-name", json=dict(alice, new_name="Alice A."), headers=alice_headers)
    assert response.status_code == 200
    test_db.expire_all()
    assert test_db.get(Profile, alice["profile_id"]).display_name == "Alice A."


def test_update_image_deletes_previous_upload(client, upload, alice_headers, alice):
    first = dict(alice, image="https://cdn/a.png", image_ref="profiles/a.png")
    assert client.put("/profile/image", json=first, headers=alice_headers).status_code == 200
    assert upload.deleted_images == []

    second = dict(alice, image="https://cdn/b.png", image_ref="profiles/b.png")
    assert client.put("/profile/image", json=second, headers=alice_headers).status_code == 200
    assert upload.deleted_images == ["profiles/a.png"]


def test_follow_toggles_and_notifies(client, test_db, bus, alice_headers, alice, bob):
    body = dict(alice, follower_id=bob["profile_id"])

    assert client.post("/profile/follow", json=body, headers=alice_headers).status_code == 200
    assert test_db.query(Follow).count() == 1
    notification = test_db.query(Notification).one()
    assert notification.receiver_id == bob["profile_id"]
    assert notification.type == NotificationType.FOLLOW
    assert (get_settings().new_notification_topic, bob["profile_id"]) in bus.published

    followers = client.get(f"/profile/{bob['profile_id']}/followers").json()
    assert [edge["node"]["id"] for edge in followers["edges"]] == [alice["profile_id"]]
    following = client.get(f"/profile/{alice['profile_id']}/following").json()
    assert [edge["node"]["id"] for edge in following["edges"]] == [bob["profile_id"]]

    assert client.post("/profile/follow", json=body, headers=alice_headers).status_code == 200
    assert test_db.query(Follow).count() == 0


def test_follow_self_is_bad_request(client, alice_headers, alice):
    response = client.post("/profile/follow", json=dict(alice, follower_id=alice["profile_id"]), headers=alice_headers)
    assert response.status_code == 400


def test_update_preferences(client, test_db, alice_headers, alice):
    body = dict(alice, preferences=["Music", "Gaming"])
    response = client.put("/profile/watch-preferences", json=body, headers=alice_headers)
    assert response.status_code == 200
    payload = client.get(f"/profile/{alice['profile_id']}").json()
    assert payload["watch_preferences"] == ["Music", "Gaming"]

    bad = client.put("/profile/read-preferences", json=dict(alice, preferences=["NotACategory"]), headers=alice_headers)
    assert bad.status_code == 422
