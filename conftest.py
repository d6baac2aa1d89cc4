import os

os.environ.setdefault("TESTING", "true")

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config import Settings, get_settings
from core.db import Base, get_db, install_sqlite_pragmas
from core.errors import install_error_handlers, unauthenticated
from models import Account, AccountType, Profile, Publish, PublishType, Visibility
from routers.account import api as account_api
from routers.bookmark import api as bookmark_api
from routers.comment import api as comment_api
from routers.dependencies import (
    get_message_bus,
    get_session_cache,
    get_stream_client,
    get_upload_client,
    get_wallet_client,
)
from routers.dont_recommend import api as dont_recommend_api
from routers.notification import api as notification_api
from routers.playlist import api as playlist_api
from routers.profile import api as profile_api
from routers.publish import api as publish_api
from routers.report import api as report_api
from routers.stream import api as stream_api
from routers.watch_later import api as watch_later_api
from routers.webhooks import api as webhooks_api

DOMAIN_APIS = (
    account_api,
    profile_api,
    publish_api,
    comment_api,
    playlist_api,
    watch_later_api,
    bookmark_api,
    notification_api,
    dont_recommend_api,
    report_api,
    stream_api,
    webhooks_api,
)

ALICE = {
    "account_id": "account-alice",
    "owner": "0x00000000000000000000000000000000000000a1",
    "profile_id": "profile-alice",
    "auth_uid": "uid-alice",
    "token": "token-alice",
}
BOB = {
    "account_id": "account-bob",
    "owner": "0x00000000000000000000000000000000000000b2",
    "profile_id": "profile-bob",
    "auth_uid": "uid-bob",
    "token": "token-bob",
}


class FakeWallet:
    """Stands in for the private wallet service."""

    def __init__(self):
        self.uids = {ALICE["token"]: ALICE["auth_uid"], BOB["token"]: BOB["auth_uid"]}
        self.addresses = {ALICE["token"]: ALICE["owner"], BOB["token"]: BOB["owner"]}
        self.sent = []

    def verify_user(self, id_token):
        if id_token not in self.uids:
            raise unauthenticated()
        return self.uids[id_token]

    def get_wallet_address(self, id_token):
        return self.addresses.get(id_token, "")

    def create_wallet(self, id_token):
        return {"address": self.addresses[id_token], "uid": self.verify_user(id_token)}

    def get_balance(self, id_token, *, address):
        return "1.5"

    def calculate_tips(self, id_token, *, qty):
        return 0.25 * qty

    def send_tips(self, id_token, *, to, qty):
        self.sent.append((to, qty))
        return {"from": self.addresses[id_token], "to": to, "amount": str(0.25 * qty), "fee": "0.01"}


class FakeUpload:
    def __init__(self):
        self.deleted_videos = []
        self.deleted_images = []

    def delete_video(self, id_token, *, ref, publish_id, video_id=None):
        self.deleted_videos.append((ref, publish_id, video_id))

    def delete_image(self, id_token, *, ref):
        self.deleted_images.append(ref)


class FakeStream:
    def __init__(self):
        self.deleted = []
        self.live_inputs = {}

    def delete_video(self, video_id):
        self.deleted.append(video_id)

    def create_live_input(self, *, publish_id):
        uid = f"live-{publish_id}"
        result = {"uid": uid, "rtmps": {"url": "rtmps://live.example/", "streamKey": "key"}}
        self.live_inputs[uid] = result
        return {"success": True, "result": result, "errors": [], "messages": []}

    def get_live_input(self, uid):
        return {"success": True, "result": self.live_inputs[uid], "errors": [], "messages": []}


class FakeBus:
    def __init__(self, messages=None):
        self.published = []
        self.messages = list(messages or [])

    def publish(self, topic, payload):
        self.published.append((topic, payload))

    def listen(self, subscription):
        yield from self.messages


class FakeCache:
    def __init__(self):
        self.profiles = {}

    def set_default_profile(self, address, profile_id):
        self.profiles[address.lower()] = profile_id

    def get_default_profile(self, address):
        return self.profiles.get(address.lower())


@pytest.fixture(scope="session")
def test_engine():
    """In-memory SQLite shared by every connection of the test session."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    install_sqlite_pragmas(engine)
    return engine


@pytest.fixture(scope="function")
def test_db(test_engine):
    """Create all tables before each test and drop them after"""
    Base.metadata.create_all(bind=test_engine)
    TestingSessionLocal = sessionmaker(bind=test_engine, autoflush=False)
    db = TestingSessionLocal()

    try:
        for person, name in ((ALICE, "alice"), (BOB, "bob")):
            db.add(
                Account(
                    id=person["account_id"],
                    owner=person["owner"],
                    auth_uid=person["auth_uid"],
                    type=AccountType.TRADITIONAL,
                )
            )
            db.add(
                Profile(
                    id=person["profile_id"],
                    owner=person["owner"],
                    account_id=person["account_id"],
                    name=name,
                    display_name=name.title(),
                    default_color="#3f51b5",
                )
            )
        db.commit()

        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def wallet():
    return FakeWallet()


@pytest.fixture
def upload():
    return FakeUpload()


@pytest.fixture
def stream():
    return FakeStream()


@pytest.fixture
def bus():
    return FakeBus()


@pytest.fixture
def cache():
    return FakeCache()


@pytest.fixture
def settings():
    return Settings(
        environment="test",
        live_stream_playback_base_url="https://live.example.com",
        default_live_stream_thumbnail="https://images.example.com/live.png",
        alchemy_webhook_signing_key="alchemy-signing-key",
        cloudflare_webhook_signing_key="cloudflare-signing-key",
        encrypt_key="test-encrypt-key",
    )


@pytest.fixture
def client(test_db, wallet, upload, stream, bus, cache, settings):
    app = FastAPI()
    for module in DOMAIN_APIS:
        app.include_router(module.router)
    install_error_handlers(app)

    def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_wallet_client] = lambda: wallet
    app.dependency_overrides[get_upload_client] = lambda: upload
    app.dependency_overrides[get_stream_client] = lambda: stream
    app.dependency_overrides[get_message_bus] = lambda: bus
    app.dependency_overrides[get_session_cache] = lambda: cache
    app.dependency_overrides[get_settings] = lambda: settings

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides = {}


@pytest.fixture
def alice_headers():
    return {"Authorization": f"Bearer {ALICE['token']}"}


@pytest.fixture
def bob_headers():
    return {"Authorization": f"Bearer {BOB['token']}"}


@pytest.fixture
def alice():
    return {"owner": ALICE["owner"], "account_id": ALICE["account_id"], "profile_id": ALICE["profile_id"]}


@pytest.fixture
def bob():
    return {"owner": BOB["owner"], "account_id": BOB["account_id"], "profile_id": BOB["profile_id"]}


@pytest.fixture
def make_publish(test_db):
    def _make_publish(creator_id=ALICE["profile_id"], **fields):
        fields.setdefault("title", "A publish")
        fields.setdefault("publish_type", PublishType.Video)
        fields.setdefault("visibility", Visibility.public)
        publish = Publish(creator_id=creator_id, **fields)
        test_db.add(publish)
        test_db.commit()
        test_db.refresh(publish)
        return publish

    return _make_publish
