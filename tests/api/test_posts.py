"""
Tests for the /api/posts endpoints.
"""

import uuid


async def test_create_post(client, blog):
    response = await client.post(
        "/api/posts",
        json={
            "title": "Second",
            "content": "More",
            "authorId": blog["user"].id,
            "categoryId": blog["category"].id,
        },
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["published"] is False
    assert data["authorId"] == blog["user"].id


async def test_create_post_unknown_author_is_server_error(client, blog):
    response = await client.post(
        "/api/posts",
        json={
            "title": "Orphan",
            "content": "No author",
            "authorId": str(uuid.uuid4()),
            "categoryId": blog["category"].id,
        },
    )

    assert response.status_code == 500
    assert response.json()["success"] is False


async def test_create_post_validation(client):
    response = await client.post("/api/posts", json={"title": "T", "content": "C", "authorId": "x"})

    validation = response.json()["error"]["details"]["validation"]
    assert response.status_code == 400
    assert validation["authorId"] == ["Invalid author ID"]
    assert validation["categoryId"] == ["Required"]


async def test_get_post_embeds_relations(client, blog):
    response = await client.get(f"/api/posts/{blog['post'].id}")

    data = response.json()["data"]
    assert data["author"] == {
        "id": blog["user"].id,
        "name": "Alice",
        "avatarUrl": "https://example.com/a.png",
    }
    assert data["category"]["slug"] == "development"
    assert data["comments"][0]["content"] == "Nice!"
    assert data["comments"][0]["author"]["name"] == "Alice"


async def test_list_posts_filters(client, blog, services):
    await services.posts.create(
        title="Draft",
        content="Later",
        author_id=blog["user"].id,
        category_id=blog["category"].id,
    )

    published = await client.get("/api/posts", params={"published": "true"})
    drafts = await client.get("/api/posts", params={"published": "false"})
    by_slug = await client.get("/api/posts", params={"categorySlug": "development"})
    by_author = await client.get("/api/posts", params={"authorId": blog["user"].id})

    assert [p["title"] for p in published.json()["data"]] == ["Hello"]
    assert [p["title"] for p in drafts.json()["data"]] == ["Draft"]
    assert len(by_slug.json()["data"]) == 2
    assert len(by_author.json()["data"]) == 2


async def test_list_posts_invalid_filter(client):
    response = await client.get("/api/posts", params={"categoryId": "abc"})

    assert response.status_code == 400
    assert response.json()["error"]["details"]["validation"] == {
        "categoryId": ["Invalid category ID"]
    }


async def test_post_comments(client, blog):
    response = await client.get(f"/api/posts/{blog['post'].id}/comments")

    assert [c["id"] for c in response.json()["data"]] == [blog["comment"].id]
    assert (await client.get(f"/api/posts/{uuid.uuid4()}/comments")).status_code == 404


async def test_update_post(client, blog):
    response = await client.put(
        f"/api/posts/{blog['post'].id}", json={"published": False, "title": "Renamed"}
    )

    data = response.json()["data"]
    assert data["published"] is False
    assert data["title"] == "Renamed"
    assert data["content"] == "First post"


async def test_update_post_rejects_null_title(client, blog):
    response = await client.put(f"/api/posts/{blog['post'].id}", json={"title": None})

    assert response.status_code == 400
    assert response.json()["error"]["details"]["validation"] == {"title": ["Title is required"]}


async def test_delete_post(client, blog):
    response = await client.delete(f"/api/posts/{blog['post'].id}")

    assert response.json()["data"] == {"message": "Post deleted successfully"}
    assert (await client.get(f"/api/comments/{blog['comment'].id}")).status_code == 404
