"""Integration tests for like toggling and the notifications it fans out."""


def notifications_of(client, account):
    resp = client.get("/api/notifications", headers=account.headers)
    assert resp.status_code == 200
    return resp.json()


class TestToggleLike:
    def test_like_then_unlike(self, client, make_user, create_review):
        alice = make_user("alice")
        bob = make_user("bob")
        blog = create_review(alice)

        liked = client.post(f"/api/likes/{blog['id']}", headers=bob.headers)
        assert liked.status_code == 201
        assert liked.json() == {"message": "Liked successfully", "totalLikes": 1, "liked": True}

        unliked = client.post(f"/api/likes/{blog['id']}", headers=bob.headers)
        assert unliked.status_code == 200
        assert unliked.json() == {"message": "Unliked successfully", "totalLikes": 0, "liked": False}

    def test_count_is_recomputed_from_likes(self, client, make_user, create_review):
        alice = make_user("alice")
        bob = make_user("bob")
        carol = make_user("carol")
        blog = create_review(alice)

        client.post(f"/api/likes/{blog['id']}", headers=bob.headers)
        resp = client.post(f"/api/likes/{blog['id']}", headers=carol.headers)
        assert resp.json()["totalLikes"] == 2

        assert client.get(f"/api/likes/{blog['id']}/count").json() == {"totalLikes": 2}
        assert client.get(f"/api/blogs/{blog['id']}", headers=alice.headers).json()["totalLikes"] == 2

    def test_status_and_users(self, client, make_user, create_review):
        alice = make_user("alice")
        bob = make_user("bob")
        blog = create_review(alice)
        client.post(f"/api/likes/{blog['id']}", headers=bob.headers)

        assert client.get(f"/api/likes/{blog['id']}/status", headers=bob.headers).json() == {"liked": True}
        assert client.get(f"/api/likes/{blog['id']}/status", headers=alice.headers).json() == {"liked": False}

        users = client.get(f"/api/likes/{blog['id']}/users").json()["users"]
        assert [u["id"] for u in users] == [bob.id]
        assert users[0]["username"] == "bob"

    def test_unknown_blog_is_404(self, client, make_user):
        bob = make_user("bob")
        resp = client.post("/api/likes/404", headers=bob.headers)
        assert resp.status_code == 404

    def test_requires_authentication(self, client, make_user, create_review):
        blog = create_review(make_user("alice"))
        assert client.post(f"/api/likes/{blog['id']}").status_code == 401


class TestLikeNotifications:
    def test_like_notifies_author(self, client, make_user, create_review):
        alice = make_user("alice")
        bob = make_user("bob")
        blog = create_review(alice)

        client.post(f"/api/likes/{blog['id']}", headers=bob.headers)

        notes = notifications_of(client, alice)
        assert len(notes) == 1
        note = notes[0]
        assert note["type"] == "like"
        assert note["message"] == 'bob liked your review "Tacos"'
        assert note["isRead"] is False
        assert note["sender"]["username"] == "bob"
        assert note["blog"] == {"id": blog["id"], "title": "Tacos"}
        assert notifications_of(client, bob) == []

    def test_self_like_does_not_notify(self, client, make_user, create_review):
        alice = make_user("alice")
        blog = create_review(alice)

        resp = client.post(f"/api/likes/{blog['id']}", headers=alice.headers)
        assert resp.status_code == 201
        assert notifications_of(client, alice) == []

    def test_unlike_does_not_notify(self, client, make_user, create_review):
        alice = make_user("alice")
        bob = make_user("bob")
        blog = create_review(alice)

        client.post(f"/api/likes/{blog['id']}", headers=bob.headers)
        client.post(f"/api/likes/{blog['id']}", headers=bob.headers)
        assert len(notifications_of(client, alice)) == 1
