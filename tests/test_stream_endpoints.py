from core.errors import ExternalServiceError
from models import LiveStatus, Playback, Publish, StreamType, ThumbnailType


def live_request(profile, **fields):
    body = dict(
        profile,
        title="Going live",
        primary_category="Gaming",
        visibility="public",
        broadcast_type="software",
    )
    body.update(fields)
    return body


def test_request_live_stream_creates_publish_and_playback(client, test_db, stream, alice, alice_headers):
    response = client.post("/stream", json=live_request(alice), headers=alice_headers)
    assert response.status_code == 200
    publish_id = response.json()["id"]

    publish = test_db.get(Publish, publish_id)
    assert publish.stream_type == StreamType.Live
    assert publish.thumbnail_type == ThumbnailType.custom
    assert publish.thumbnail == "https://images.example.com/live.png"
    assert publish.live_input_uid == f"live-{publish_id}"

    playback = test_db.query(Playback).filter(Playback.publish_id == publish_id).one()
    assert playback.hls == f"https://live.example.com/live-{publish_id}/video.m3u8"
    assert playback.dash == f"https://live.example.com/live-{publish_id}/video.mpd"
    assert playback.live_status == LiveStatus.inprogress


def test_request_live_stream_keeps_publish_when_live_input_fails(client, test_db, stream, alice, alice_headers):
    stream.create_live_input = lambda *, publish_id: {"success": False, "errors": ["quota"], "result": None}

    response = client.post("/stream", json=live_request(alice), headers=alice_headers)
    assert response.status_code == 200
    publish = test_db.get(Publish, response.json()["id"])
    assert publish.live_input_uid is None
    assert test_db.query(Playback).count() == 0


def test_request_live_stream_validates_enums(client, alice, alice_headers):
    response = client.post("/stream", json=live_request(alice, broadcast_type="satellite"), headers=alice_headers)
    assert response.status_code == 422


def test_get_live_stream_publish(client, alice, bob, alice_headers, bob_headers):
    publish_id = client.post("/stream", json=live_request(alice), headers=alice_headers).json()["id"]

    response = client.post("/stream/publish", json=dict(alice, publish_id=publish_id), headers=alice_headers)
    assert response.status_code == 200
    payload = response.json()
    assert payload["publish"]["id"] == publish_id
    assert payload["live_input"]["result"]["uid"] == f"live-{publish_id}"

    foreign = client.post("/stream/publish", json=dict(bob, publish_id=publish_id), headers=bob_headers)
    assert foreign.status_code == 403

    missing = client.post("/stream/publish", json=dict(alice, publish_id="missing"), headers=alice_headers)
    assert missing.status_code == 200
    assert missing.json() is None


def test_get_live_stream_publish_without_live_input(client, make_publish, alice, alice_headers):
    publish = make_publish()
    response = client.post("/stream/publish", json=dict(alice, publish_id=publish.id), headers=alice_headers)
    assert response.status_code == 400


def test_get_live_stream_publish_cdn_failure(client, stream, alice, alice_headers):
    publish_id = client.post("/stream", json=live_request(alice), headers=alice_headers).json()["id"]

    def broken(uid):
        raise ExternalServiceError("stream", "cdn down")

    stream.get_live_input = broken
    response = client.post("/stream/publish", json=dict(alice, publish_id=publish_id), headers=alice_headers)
    assert response.status_code == 200
    assert response.json() is None


def test_fetch_my_live_stream(client, make_publish, alice, alice_headers):
    client.post("/stream", json=live_request(alice, title="Live one"), headers=alice_headers)
    make_publish(title="On demand")

    body = {"owner": alice["owner"], "account_id": alice["account_id"], "creator_id": alice["profile_id"]}
    response = client.post("/stream/mine", json=body, headers=alice_headers)
    assert response.status_code == 200
    assert [edge["node"]["title"] for edge in response.json()["edges"]] == ["Live one"]
