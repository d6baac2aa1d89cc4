import base64
import hashlib
import hmac
import json
import time

from models import LiveStatus, Playback, Publish, PublishType, StreamType, ThumbnailType
from utils.crypto import encrypt_string


def sign(key, payload):
    return hmac.new(key.encode(), payload, hashlib.sha256).hexdigest()


def cloudflare_headers(settings, raw_body, timestamp=None):
    timestamp = str(int(timestamp or time.time()))
    signature = sign(settings.cloudflare_webhook_signing_key, timestamp.encode() + b"." + raw_body)
    return {"webhook-signature": f"time={timestamp},sig1={signature}", "Content-Type": "application/json"}


def transcoded_body(publish_id, duration=120.0, **fields):
    body = {
        "uid": "video-uid",
        "readyToStream": True,
        "thumbnail": "https://cdn.example.com/thumb.jpg",
        "preview": "https://cdn.example.com/watch",
        "duration": duration,
        "playback": {"hls": "https://cdn.example.com/video.m3u8", "dash": "https://cdn.example.com/video.mpd"},
        "meta": {"name": f"{publish_id} holiday.mp4", "contentURI": "ipfs://video", "contentRef": "videos/1"},
        "status": {"state": "ready"},
    }
    body.update(fields)
    return body


# =================================
#  Alchemy
# =================================
def test_address_updated_accepts_signed_body(client, settings):
    raw = b'{"event": {"activity": []}}'
    headers = {"x-alchemy-signature": sign(settings.alchemy_webhook_signing_key, raw)}
    assert client.post("/webhooks/address-updated", content=raw, headers=headers).status_code == 200


def test_address_updated_rejects_bad_signature(client):
    response = client.post(
        "/webhooks/address-updated", content=b'{"event": {}}', headers={"x-alchemy-signature": "nope"}
    )
    assert response.status_code == 403


def test_address_updated_requires_signature(client):
    assert client.post("/webhooks/address-updated", content=b"{}").status_code == 400


# =================================
#  Cloudflare
# =================================
def test_transcoding_finished_stores_playback(client, test_db, bus, settings, make_publish):
    publish = make_publish(uploading=True)
    raw = json.dumps(transcoded_body(publish.id)).encode()

    response = client.post("/webhooks/cloudflare/finished", content=raw, headers=cloudflare_headers(settings, raw))
    assert response.status_code == 200

    test_db.expire_all()
    stored = test_db.get(Publish, publish.id)
    assert stored.uploading is False
    assert stored.publish_type == PublishType.Video
    assert stored.stream_type == StreamType.onDemand
    assert stored.thumbnail_type == ThumbnailType.generated
    assert stored.content_uri == "ipfs://video"
    playback = test_db.query(Playback).filter(Playback.publish_id == publish.id).one()
    assert playback.video_id == "video-uid"
    assert playback.hls == "https://cdn.example.com/video.m3u8"
    assert bus.published == [(settings.publish_processing_topic, publish.id)]


def test_short_videos_become_shorts(client, test_db, settings, make_publish):
    publish = make_publish()
    raw = json.dumps(transcoded_body(publish.id, duration=45.5)).encode()
    client.post("/webhooks/cloudflare/finished", content=raw, headers=cloudflare_headers(settings, raw))

    test_db.expire_all()
    assert test_db.get(Publish, publish.id).publish_type == PublishType.Short


def test_live_recording_is_ready(client, test_db, settings, make_publish):
    publish = make_publish(stream_type=StreamType.Live)
    raw = json.dumps(transcoded_body(publish.id, duration=30)).encode()
    client.post("/webhooks/cloudflare/finished", content=raw, headers=cloudflare_headers(settings, raw))

    test_db.expire_all()
    assert test_db.get(Publish, publish.id).publish_type == PublishType.Video
    playback = test_db.query(Playback).filter(Playback.publish_id == publish.id).one()
    assert playback.live_status == LiveStatus.ready


def test_transcoding_error_marks_publish(client, test_db, bus, settings, make_publish):
    publish = make_publish(uploading=True)
    body = transcoded_body(publish.id, readyToStream=False, status={"state": "error"})
    raw = json.dumps(body).encode()

    assert client.post(
        "/webhooks/cloudflare/finished", content=raw, headers=cloudflare_headers(settings, raw)
    ).status_code == 200

    test_db.expire_all()
    stored = test_db.get(Publish, publish.id)
    assert stored.transcode_error is True
    assert stored.uploading is False
    assert test_db.query(Playback).count() == 0
    assert bus.published == [(settings.publish_processing_topic, publish.id)]


def test_transcoding_finished_rejects_bad_signatures(client, settings, make_publish):
    publish = make_publish()
    raw = json.dumps(transcoded_body(publish.id)).encode()

    missing = client.post("/webhooks/cloudflare/finished", content=raw)
    assert missing.status_code == 403

    expired = cloudflare_headers(settings, raw, timestamp=time.time() - 2 * 60 * 60)
    assert client.post("/webhooks/cloudflare/finished", content=raw, headers=expired).status_code == 403

    tampered = cloudflare_headers(settings, raw)
    assert client.post("/webhooks/cloudflare/finished", content=raw + b" ", headers=tampered).status_code == 403


def test_transcoding_finished_rejects_invalid_json(client, settings):
    raw = b"not json"
    response = client.post("/webhooks/cloudflare/finished", content=raw, headers=cloudflare_headers(settings, raw))
    assert response.status_code == 400


# =================================
#  Pub/Sub push
# =================================
def pubsub_envelope(settings, publish_id):
    encrypted = encrypt_string(publish_id, settings.encrypt_key, salt=b"12345678")
    return {"message": {"data": base64.b64encode(encrypted.encode()).decode(), "messageId": "1"}}


def test_video_deleted_removes_publish(client, test_db, bus, settings, make_publish):
    publish_id = make_publish().id
    response = client.post("/webhooks/pubsub/video-deleted", json=pubsub_envelope(settings, publish_id))
    assert response.status_code == 204

    test_db.expire_all()
    assert test_db.get(Publish, publish_id) is None
    assert bus.published == [(settings.publish_deletion_topic, publish_id)]


def test_video_deleted_for_unknown_publish_is_acknowledged(client, bus, settings):
    response = client.post("/webhooks/pubsub/video-deleted", json=pubsub_envelope(settings, "missing"))
    assert response.status_code == 204
    assert bus.published == []


def test_video_deleted_rejects_malformed_envelopes(client, settings):
    assert client.post("/webhooks/pubsub/video-deleted", json={}).status_code == 400
    assert client.post("/webhooks/pubsub/video-deleted", json={"subscription": "s"}).status_code == 400
    assert client.post("/webhooks/pubsub/video-deleted", json={"message": {"data": ""}}).status_code == 400

    garbage = base64.b64encode(b"plain-text").decode()
    assert client.post("/webhooks/pubsub/video-deleted", json={"message": {"data": garbage}}).status_code == 400
