from models import Bookmark


def test_bookmark_toggles(client, test_db, make_publish, alice, alice_headers):
    publish = make_publish()
    body = dict(alice, publish_id=publish.id)

    assert client.post("/bookmark", json=body, headers=alice_headers).status_code == 200
    assert test_db.query(Bookmark).count() == 1

    node = client.get(f"/publish/{publish.id}", params={"requestor_id": alice["profile_id"]}).json()
    assert node["bookmarked"] is True

    assert client.post("/bookmark", json=body, headers=alice_headers).status_code == 200
    assert test_db.query(Bookmark).count() == 0


def test_bookmark_unknown_publish(client, alice, alice_headers):
    response = client.post("/bookmark", json=dict(alice, publish_id="missing"), headers=alice_headers)
    assert response.status_code == 404


def test_preview_and_list(client, make_publish, alice, alice_headers):
    for title in ("One", "Two", "Three"):
        publish = make_publish(title=title)
        client.post("/bookmark", json=dict(alice, publish_id=publish.id), headers=alice_headers)

    preview = client.post("/bookmark/preview", json=alice, headers=alice_headers).json()
    assert [edge["node"]["publish"]["title"] for edge in preview["edges"]] == ["Three", "Two"]
    assert preview["page_info"]["count"] == 3

    listing = client.post("/bookmark/list", json=alice, headers=alice_headers).json()
    assert len(listing["edges"]) == 3
    assert listing["page_info"]["has_next_page"] is False


def test_remove_and_clear(client, test_db, make_publish, alice, alice_headers):
    first, second = make_publish(), make_publish()
    for publish in (first, second):
        client.post("/bookmark", json=dict(alice, publish_id=publish.id), headers=alice_headers)

    assert client.post("/bookmark/remove", json=dict(alice, publish_id=first.id), headers=alice_headers).status_code == 200
    assert [b.publish_id for b in test_db.query(Bookmark).all()] == [second.id]

    assert client.post("/bookmark/clear", json=alice, headers=alice_headers).status_code == 200
    assert test_db.query(Bookmark).count() == 0


def test_lists_require_authentication(client, alice):
    assert client.post("/bookmark/list", json=alice).status_code == 401
