from models import Comment, CommentDisLike, CommentLike, CommentType, Notification, NotificationType, PublishType


def _comment(client, headers, body, publish_id, **fields):
    return client.post("/comment", json=dict(body, publish_id=publish_id, **fields), headers=headers)


def _ids(payload):
    return [edge["node"]["id"] for edge in payload["edges"]]


def test_comment_on_video_notifies_creator(client, test_db, make_publish, bob, bob_headers):
    publish = make_publish(title="Cats")
    response = _comment(client, bob_headers, bob, publish.id, content="Nice!")
    assert response.status_code == 200

    comment = test_db.query(Comment).one()
    assert comment.comment_type == CommentType.PUBLISH
    assert comment.content == "Nice!"
    notification = test_db.query(Notification).one()
    assert notification.type == NotificationType.COMMENT
    assert notification.content == "bob commented on your video: Cats"


def test_own_comment_still_notifies(client, test_db, make_publish, alice, alice_headers):
    publish = make_publish()
    assert _comment(client, alice_headers, alice, publish.id, content="First").status_code == 200
    notification = test_db.query(Notification).one()
    assert notification.type == NotificationType.COMMENT
    assert notification.receiver_id == alice["profile_id"]


def test_video_comment_requires_content(client, make_publish, bob, bob_headers):
    publish = make_publish()
    response = _comment(client, bob_headers, bob, publish.id)
    assert response.status_code == 422


def test_blog_comment_needs_rich_content_and_word_limit(client, make_publish, bob, bob_headers):
    publish = make_publish(publish_type=PublishType.Blog)
    assert _comment(client, bob_headers, bob, publish.id, content="plain").status_code == 422

    too_long = "<p>" + "word " * 5001 + "</p>"
    response = _comment(
        client, bob_headers, bob, publish.id, content_blog={"blocks": []}, html_content_blog=too_long
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Comment is too long."

    response = _comment(
        client, bob_headers, bob, publish.id, content_blog={"blocks": []}, html_content_blog="<p>great read</p>"
    )
    assert response.status_code == 200


def test_reply_must_belong_to_same_publish(client, make_publish, test_db, bob, bob_headers):
    publish = make_publish()
    other = make_publish()
    _comment(client, bob_headers, bob, publish.id, content="Top")
    parent = test_db.query(Comment).one()

    assert _comment(client, bob_headers, bob, other.id, content="Reply", comment_id=parent.id).status_code == 404
    assert _comment(client, bob_headers, bob, publish.id, content="Reply", comment_id=parent.id).status_code == 200

    replies = client.get(f"/comment/{parent.id}/replies").json()
    assert len(replies["edges"]) == 1
    assert replies["edges"][0]["node"]["comment_type"] == "COMMENT"


def test_comments_ordered_by_reply_count(client, test_db, make_publish, bob, bob_headers):
    publish = make_publish()
    _comment(client, bob_headers, bob, publish.id, content="quiet")
    _comment(client, bob_headers, bob, publish.id, content="busy")
    busy = test_db.query(Comment).filter(Comment.content == "busy").one()
    quiet = test_db.query(Comment).filter(Comment.content == "quiet").one()
    _comment(client, bob_headers, bob, publish.id, content="reply", comment_id=quiet.id)
    _comment(client, bob_headers, bob, publish.id, content="reply", comment_id=quiet.id)

    payload = client.get(f"/comment/publish/{publish.id}").json()
    assert _ids(payload) == [quiet.id, busy.id]
    assert payload["page_info"]["count"] == 2
    assert payload["edges"][0]["node"]["comments_count"] == 2

    newest = client.get(f"/comment/publish/{publish.id}", params={"order_by": "newest"}).json()
    assert _ids(newest) == [busy.id, quiet.id]


def test_like_and_dislike_comment_are_exclusive(client, test_db, make_publish, alice, alice_headers, bob, bob_headers):
    publish = make_publish()
    _comment(client, alice_headers, alice, publish.id, content="mine")
    comment = test_db.query(Comment).one()
    body = dict(bob, comment_id=comment.id)

    assert client.post("/comment/like", json=body, headers=bob_headers).status_code == 200
    assert test_db.query(CommentLike).count() == 1
    liked = test_db.query(Notification).filter(Notification.type == NotificationType.LIKE).one()
    assert liked.content == "bob liked your comment"

    assert client.post("/comment/dislike", json=body, headers=bob_headers).status_code == 200
    assert test_db.query(CommentLike).count() == 0
    assert test_db.query(CommentDisLike).count() == 1

    node = client.get(f"/comment/publish/{publish.id}", params={"requestor_id": bob["profile_id"]}).json()
    assert node["edges"][0]["node"]["disliked"] is True
    assert node["edges"][0]["node"]["liked"] is False


def test_only_creator_deletes_comment(client, test_db, make_publish, alice, alice_headers, bob, bob_headers):
    publish = make_publish()
    _comment(client, alice_headers, alice, publish.id, content="mine")
    comment_id = test_db.query(Comment).one().id

    assert client.post("/comment/delete", json=dict(bob, comment_id=comment_id), headers=bob_headers).status_code == 403
    assert client.post("/comment/delete", json=dict(alice, comment_id=comment_id), headers=alice_headers).status_code == 200
    assert test_db.query(Comment).count() == 0
    assert client.post("/comment/delete", json=dict(alice, comment_id=comment_id), headers=alice_headers).status_code == 404
