"""Integration tests for bookmark toggling and the bookmarks listing."""


class TestBookmarks:
    def test_toggle_round_trip(self, client, make_user, create_review):
        alice = make_user("alice")
        bob = make_user("bob")
        blog = create_review(alice)

        on = client.post(f"/api/blogs/{blog['id']}/bookmark", headers=bob.headers)
        assert on.status_code == 200
        assert on.json() == {"message": "Blog bookmarked successfully", "isBookmarked": True}
        assert client.get(f"/api/blogs/{blog['id']}", headers=bob.headers).json()["isBookmarked"] is True

        off = client.post(f"/api/blogs/{blog['id']}/bookmark", headers=bob.headers)
        assert off.json() == {"message": "Blog unbookmarked successfully", "isBookmarked": False}
        assert client.get(f"/api/blogs/{blog['id']}", headers=bob.headers).json()["isBookmarked"] is False

    def test_bookmark_is_per_user(self, client, make_user, create_review):
        alice = make_user("alice")
        bob = make_user("bob")
        blog = create_review(alice)
        client.post(f"/api/blogs/{blog['id']}/bookmark", headers=bob.headers)

        assert client.get(f"/api/blogs/{blog['id']}", headers=alice.headers).json()["isBookmarked"] is False

    def test_list_bookmarks(self, client, make_user, create_review):
        alice = make_user("alice")
        bob = make_user("bob")
        first = create_review(alice, title="first")
        create_review(alice, title="second")
        third = create_review(alice, title="third")

        client.post(f"/api/blogs/{third['id']}/bookmark", headers=bob.headers)
        client.post(f"/api/blogs/{first['id']}/bookmark", headers=bob.headers)

        listed = client.get("/api/blogs/bookmarks", headers=bob.headers).json()
        assert [b["id"] for b in listed] == [third["id"], first["id"]]
        assert all(b["isBookmarked"] for b in listed)

    def test_deleted_blog_is_skipped_in_listing(self, client, make_user, create_review):
        alice = make_user("alice")
        bob = make_user("bob")
        blog = create_review(alice)
        client.post(f"/api/blogs/{blog['id']}/bookmark", headers=bob.headers)
        client.delete(f"/api/blogs/{blog['id']}", headers=alice.headers)

        assert client.get("/api/blogs/bookmarks", headers=bob.headers).json() == []

    def test_unknown_blog_is_404(self, client, make_user):
        bob = make_user("bob")
        resp = client.post("/api/blogs/12345/bookmark", headers=bob.headers)
        assert resp.status_code == 404

    def test_requires_authentication(self, client):
        assert client.get("/api/blogs/bookmarks").status_code == 401
