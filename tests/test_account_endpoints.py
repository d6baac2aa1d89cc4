import pytest

from models import Account, AccountType


@pytest.fixture
def carol_headers(wallet):
    wallet.uids["token-carol"] = "uid-carol"
    wallet.addresses["token-carol"] = "0x00000000000000000000000000000000000000C3"
    return {"Authorization": "Bearer token-carol"}


def test_missing_token_is_unauthenticated(client):
    response = client.get("/account/me", params={"account_type": "TRADITIONAL"})
    assert response.status_code == 401
    assert response.json()["code"] == "UN_AUTHENTICATED"


def test_unknown_token_is_unauthenticated(client):
    response = client.get(
        "/account/me",
        params={"account_type": "TRADITIONAL"},
        headers={"Authorization": "Bearer nope"},
    )
    assert response.status_code == 401


def test_get_my_account_returns_profiles_and_default(client, alice_headers, alice):
    response = client.get("/account/me", params={"account_type": "TRADITIONAL"}, headers=alice_headers)
    assert response.status_code == 200
    payload = response.json()
    assert payload["id"] == alice["account_id"]
    assert [p["id"] for p in payload["profiles"]] == [alice["profile_id"]]
    assert payload["default_profile"]["id"] == alice["profile_id"]


def test_get_my_account_is_null_without_account(client, carol_headers):
    response = client.get("/account/me", params={"account_type": "TRADITIONAL"}, headers=carol_headers)
    assert response.status_code == 200
    assert response.json() is None


def test_create_traditional_account_is_idempotent(client, test_db, carol_headers):
    first = client.post("/account", json={"account_type": "TRADITIONAL"}, headers=carol_headers)
    assert first.status_code == 200
    assert first.json()["owner"] == "0x00000000000000000000000000000000000000c3"
    assert first.json()["auth_uid"] == "uid-carol"

    second = client.post("/account", json={"account_type": "TRADITIONAL"}, headers=carol_headers)
    assert second.status_code == 200
    assert second.json()["id"] == first.json()["id"]
    assert test_db.query(Account).filter(Account.type == AccountType.TRADITIONAL).count() == 3


def test_wallet_account_requires_signature(client, carol_headers):
    response = client.post("/account", json={"account_type": "WALLET"}, headers=carol_headers)
    assert response.status_code == 403
    assert response.json()["code"] == "UN_AUTHORIZED"


def test_balance_requires_address(client, alice_headers):
    assert client.get("/account/balance", headers=alice_headers).status_code == 422

    response = client.get("/account/balance", params={"address": "0xabc"}, headers=alice_headers)
    assert response.status_code == 200
    assert response.json() == {"balance": "1.5"}


def test_cache_session_sets_default_profile(client, cache, alice_headers, alice):
    response = client.post(
        "/account/cache-session",
        json={"address": alice["owner"], "profile_id": alice["profile_id"], "account_id": alice["account_id"]},
        headers=alice_headers,
    )
    assert response.status_code == 200
    assert cache.get_default_profile(alice["owner"]) == alice["profile_id"]


def test_cache_session_rejects_foreign_profile(client, cache, alice_headers, alice, bob):
    response = client.post(
        "/account/cache-session",
        json={"address": alice["owner"], "profile_id": bob["profile_id"], "account_id": alice["account_id"]},
        headers=alice_headers,
    )
    assert response.status_code == 403
    assert cache.profiles == {}


def test_validate_auth_soft_fails(client, alice_headers, alice, bob):
    assert client.post("/account/validate-auth", json=alice).json() == {"is_authenticated": False}

    response = client.post("/account/validate-auth", json=alice, headers=alice_headers)
    assert response.json() == {"is_authenticated": True}

    foreign = dict(alice, profile_id=bob["profile_id"])
    response = client.post("/account/validate-auth", json=foreign, headers=alice_headers)
    assert response.json() == {"is_authenticated": False}


def test_validate_auth_with_malformed_signature_is_not_authenticated(client, carol_headers, alice):
    headers = dict(carol_headers, **{"auth-wallet-signature": "0x1234"})
    response = client.post("/account/validate-auth", json=alice, headers=headers)
    assert response.status_code == 200
    assert response.json() == {"is_authenticated": False}
