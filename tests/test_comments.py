"""Integration tests for comments, including best-effort author notification."""

from foodblog.services.notification_service import NotificationDispatcher


def add_comment(client, account, blog_id, content="Looks tasty"):
    return client.post(
        "/api/comments", json={"blogId": blog_id, "content": content}, headers=account.headers
    )


class TestCreateComment:
    def test_comment_is_attached_to_blog(self, client, make_user, create_review):
        alice = make_user("alice")
        bob = make_user("bob")
        blog = create_review(alice)

        resp = add_comment(client, bob, blog["id"], "  yum  ")
        assert resp.status_code == 201
        body = resp.json()
        assert body["message"] == "Comment added"
        assert body["comment"]["content"] == "yum"
        assert body["comment"]["user"]["username"] == "bob"

        detail = client.get(f"/api/blogs/{blog['id']}", headers=alice.headers).json()
        assert [c["id"] for c in detail["comments"]] == [body["comment"]["id"]]
        assert detail["comments"][0]["user"]["id"] == bob.id

    def test_comment_notifies_author(self, client, make_user, create_review):
        alice = make_user("alice")
        bob = make_user("bob")
        blog = create_review(alice)
        add_comment(client, bob, blog["id"])

        notes = client.get("/api/notifications", headers=alice.headers).json()
        assert [n["type"] for n in notes] == ["comment"]
        assert notes[0]["message"] == 'bob commented on your review "Tacos"'

    def test_own_comment_does_not_notify(self, client, make_user, create_review):
        alice = make_user("alice")
        blog = create_review(alice)
        add_comment(client, alice, blog["id"])
        assert client.get("/api/notifications", headers=alice.headers).json() == []

    def test_notification_failure_keeps_comment(self, client, make_user, create_review, monkeypatch):
        alice = make_user("alice")
        bob = make_user("bob")
        blog = create_review(alice)

        async def broken_notify(self, *args, **kwargs):
            raise RuntimeError("notification store unavailable")

        monkeypatch.setattr(NotificationDispatcher, "notify", broken_notify)

        resp = add_comment(client, bob, blog["id"])
        assert resp.status_code == 201
        assert len(client.get(f"/api/comments/{blog['id']}").json()) == 1
        assert client.get("/api/notifications", headers=alice.headers).json() == []

    def test_empty_content_rejected(self, client, make_user, create_review):
        alice = make_user("alice")
        blog = create_review(alice)
        resp = add_comment(client, alice, blog["id"], "   ")
        assert resp.status_code == 400
        assert resp.json()["message"] == "Blog ID and content are required"

    def test_unknown_blog_is_404(self, client, make_user):
        bob = make_user("bob")
        resp = add_comment(client, bob, 777)
        assert resp.status_code == 404
        assert resp.json()["message"] == "Blog not found"


class TestListComments:
    def test_newest_first(self, client, make_user, create_review):
        alice = make_user("alice")
        blog = create_review(alice)
        first = add_comment(client, alice, blog["id"], "first").json()["comment"]
        second = add_comment(client, alice, blog["id"], "second").json()["comment"]

        listed = client.get(f"/api/comments/{blog['id']}").json()
        assert [c["id"] for c in listed] == [second["id"], first["id"]]


class TestUpdateDeleteComment:
    def test_owner_can_update(self, client, make_user, create_review):
        alice = make_user("alice")
        blog = create_review(alice)
        comment = add_comment(client, alice, blog["id"]).json()["comment"]

        resp = client.put(
            f"/api/comments/{comment['id']}", json={"content": "edited"}, headers=alice.headers
        )
        assert resp.status_code == 200
        assert resp.json()["message"] == "Comment updated"
        assert resp.json()["comment"]["content"] == "edited"

    def test_update_requires_content(self, client, make_user, create_review):
        alice = make_user("alice")
        blog = create_review(alice)
        comment = add_comment(client, alice, blog["id"]).json()["comment"]
        resp = client.put(f"/api/comments/{comment['id']}", json={}, headers=alice.headers)
        assert resp.status_code == 400
        assert resp.json()["message"] == "Content is required"

    def test_blog_author_cannot_edit_others_comment(self, client, make_user, create_review):
        alice = make_user("alice")
        bob = make_user("bob")
        blog = create_review(alice)
        comment = add_comment(client, bob, blog["id"]).json()["comment"]

        resp = client.put(
            f"/api/comments/{comment['id']}", json={"content": "x"}, headers=alice.headers
        )
        assert resp.status_code == 403
        assert client.delete(f"/api/comments/{comment['id']}", headers=alice.headers).status_code == 403

    def test_delete_detaches_from_blog(self, client, make_user, create_review):
        alice = make_user("alice")
        bob = make_user("bob")
        blog = create_review(alice)
        keep = add_comment(client, bob, blog["id"], "keep").json()["comment"]
        drop = add_comment(client, bob, blog["id"], "drop").json()["comment"]

        resp = client.delete(f"/api/comments/{drop['id']}", headers=bob.headers)
        assert resp.status_code == 200
        assert resp.json() == {"message": "Comment deleted"}

        detail = client.get(f"/api/blogs/{blog['id']}", headers=alice.headers).json()
        assert [c["id"] for c in detail["comments"]] == [keep["id"]]
        assert client.delete(f"/api/comments/{drop['id']}", headers=bob.headers).status_code == 404

    def test_admin_can_delete_any_comment(self, client, make_user, create_review):
        alice = make_user("alice")
        admin = make_user("root", role="admin")
        blog = create_review(alice)
        comment = add_comment(client, alice, blog["id"]).json()["comment"]
        assert client.delete(f"/api/comments/{comment['id']}", headers=admin.headers).status_code == 200

    def test_delete_comment_of_deleted_blog(self, client, make_user, create_review):
        alice = make_user("alice")
        bob = make_user("bob")
        blog = create_review(alice)
        comment = add_comment(client, bob, blog["id"]).json()["comment"]
        client.delete(f"/api/blogs/{blog['id']}", headers=alice.headers)

        assert client.delete(f"/api/comments/{comment['id']}", headers=bob.headers).status_code == 200
