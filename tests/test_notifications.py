"""Integration tests for the notification inbox."""


def like(client, account, blog_id):
    return client.post(f"/api/likes/{blog_id}", headers=account.headers)


class TestNotificationInbox:
    def test_newest_first(self, client, make_user, create_review):
        alice = make_user("alice")
        bob = make_user("bob")
        first = create_review(alice, title="first")
        second = create_review(alice, title="second")

        like(client, bob, first["id"])
        like(client, bob, second["id"])

        notes = client.get("/api/notifications", headers=alice.headers).json()
        assert [n["blogId"] for n in notes] == [second["id"], first["id"]]

    def test_mark_as_read(self, client, make_user, create_review):
        alice = make_user("alice")
        bob = make_user("bob")
        blog = create_review(alice)
        like(client, bob, blog["id"])
        note = client.get("/api/notifications", headers=alice.headers).json()[0]

        resp = client.patch(f"/api/notifications/{note['id']}/read", headers=alice.headers)
        assert resp.status_code == 200
        assert resp.json() == {"message": "Notification marked as read"}
        assert client.get("/api/notifications", headers=alice.headers).json()[0]["isRead"] is True

    def test_only_recipient_can_modify(self, client, make_user, create_review):
        alice = make_user("alice")
        bob = make_user("bob")
        blog = create_review(alice)
        like(client, bob, blog["id"])
        note = client.get("/api/notifications", headers=alice.headers).json()[0]

        # the sender is not the owner of the notification
        assert client.patch(f"/api/notifications/{note['id']}/read", headers=bob.headers).status_code == 403
        assert client.delete(f"/api/notifications/{note['id']}", headers=bob.headers).status_code == 403

    def test_admin_can_delete(self, client, make_user, create_review):
        alice = make_user("alice")
        bob = make_user("bob")
        admin = make_user("root", role="admin")
        blog = create_review(alice)
        like(client, bob, blog["id"])
        note = client.get("/api/notifications", headers=alice.headers).json()[0]

        assert client.delete(f"/api/notifications/{note['id']}", headers=admin.headers).status_code == 200
        assert client.get("/api/notifications", headers=alice.headers).json() == []

    def test_recipient_can_delete(self, client, make_user, create_review):
        alice = make_user("alice")
        bob = make_user("bob")
        blog = create_review(alice)
        like(client, bob, blog["id"])
        note = client.get("/api/notifications", headers=alice.headers).json()[0]

        resp = client.delete(f"/api/notifications/{note['id']}", headers=alice.headers)
        assert resp.json() == {"message": "Notification deleted"}
        assert client.delete(f"/api/notifications/{note['id']}", headers=alice.headers).status_code == 404

    def test_deleted_blog_leaves_notification_with_null_blog(self, client, make_user, create_review):
        alice = make_user("alice")
        bob = make_user("bob")
        blog = create_review(alice)
        like(client, bob, blog["id"])
        client.delete(f"/api/blogs/{blog['id']}", headers=alice.headers)

        notes = client.get("/api/notifications", headers=alice.headers).json()
        assert len(notes) == 1
        assert notes[0]["blog"] is None
        assert notes[0]["blogId"] == blog["id"]

    def test_requires_authentication(self, client):
        assert client.get("/api/notifications").status_code == 401
