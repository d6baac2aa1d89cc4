from models import DontRecommend


def test_dont_recommend_is_idempotent(client, test_db, alice, bob, alice_headers):
    body = dict(alice, target_id=bob["profile_id"])
    assert client.post("/dont-recommend", json=body, headers=alice_headers).status_code == 200
    assert client.post("/dont-recommend", json=body, headers=alice_headers).status_code == 200
    assert test_db.query(DontRecommend).count() == 1


def test_cannot_exclude_self(client, alice, alice_headers):
    response = client.post("/dont-recommend", json=dict(alice, target_id=alice["profile_id"]), headers=alice_headers)
    assert response.status_code == 400


def test_unknown_target(client, alice, alice_headers):
    response = client.post("/dont-recommend", json=dict(alice, target_id="missing"), headers=alice_headers)
    assert response.status_code == 404


def test_list_and_remove(client, test_db, alice, bob, alice_headers):
    client.post("/dont-recommend", json=dict(alice, target_id=bob["profile_id"]), headers=alice_headers)

    body = {"owner": alice["owner"], "account_id": alice["account_id"], "requestor_id": alice["profile_id"]}
    listing = client.post("/dont-recommend/list", json=body, headers=alice_headers).json()
    assert [edge["node"]["target"]["name"] for edge in listing["edges"]] == ["bob"]

    removal = dict(alice, target_id=bob["profile_id"])
    assert client.post("/dont-recommend/remove", json=removal, headers=alice_headers).status_code == 200
    assert client.post("/dont-recommend/remove", json=removal, headers=alice_headers).status_code == 200
    assert test_db.query(DontRecommend).count() == 0
