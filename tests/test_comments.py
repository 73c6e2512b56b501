"""
Comment endpoint tests: create, list, edit and delete through the API.
Writes that target a missing row or another user's comment answer with
success and change nothing.
"""
import pytest
from httpx import AsyncClient


async def _setup(client: AsyncClient) -> int:
    """Create users ``uno`` and ``haco`` and an article by ``uno``; return its id."""
    for user_id in ("uno", "haco"):
        resp = await client.post(
            "/api/v1/users", json={"user_id": user_id, "user_password": "hashed"}
        )
        assert resp.status_code == 201
    resp = await client.post(
        "/api/v1/articles",
        json={"title": "Article", "content": "content"},
        headers={"X-User-Id": "uno"},
    )
    return resp.json()["id"]


async def _comment(client: AsyncClient, user_id: str, article_id: int, content: str):
    return await client.post(
        "/api/v1/comments",
        json={"article_id": article_id, "content": content},
        headers={"X-User-Id": user_id},
    )


@pytest.mark.asyncio
async def test_add_and_list_comments(async_client: AsyncClient):
    article_id = await _setup(async_client)

    for i in range(3):
        resp = await _comment(async_client, "haco", article_id, f"Comment {i}")
        assert resp.status_code == 201
        assert resp.json()["id"] is not None

    resp = await async_client.get(f"/api/v1/articles/{article_id}/comments")
    comments = resp.json()

    assert resp.status_code == 200
    assert [c["content"] for c in comments] == ["Comment 0", "Comment 1", "Comment 2"]
    assert comments[0]["user_id"] == "haco"


@pytest.mark.asyncio
async def test_comment_on_missing_article_is_ignored(async_client: AsyncClient):
    await _setup(async_client)

    resp = await _comment(async_client, "haco", 9999, "into the void")

    assert resp.status_code == 201
    assert resp.json()["id"] is None
    assert (await async_client.get("/api/v1/articles/9999/comments")).json() == []


@pytest.mark.asyncio
async def test_comment_validation(async_client: AsyncClient):
    article_id = await _setup(async_client)

    assert (await _comment(async_client, "haco", article_id, "")).status_code == 422
    assert (await _comment(async_client, "haco", article_id, "x" * 501)).status_code == 422


@pytest.mark.asyncio
async def test_edit_comment_only_by_author(async_client: AsyncClient):
    article_id = await _setup(async_client)
    comment_id = (await _comment(async_client, "haco", article_id, "original")).json()["id"]

    resp = await async_client.put(
        f"/api/v1/comments/{comment_id}",
        json={"article_id": article_id, "content": "by uno"},
        headers={"X-User-Id": "uno"},
    )
    assert resp.status_code == 204
    resp = await async_client.put(
        f"/api/v1/comments/{comment_id}",
        json={"article_id": article_id, "content": "edited"},
        headers={"X-User-Id": "haco"},
    )
    assert resp.status_code == 204

    comments = (await async_client.get(f"/api/v1/articles/{article_id}/comments")).json()
    assert [c["content"] for c in comments] == ["edited"]


@pytest.mark.asyncio
async def test_delete_comment_only_by_author(async_client: AsyncClient):
    article_id = await _setup(async_client)
    comment_id = (await _comment(async_client, "haco", article_id, "bye")).json()["id"]

    resp = await async_client.delete(f"/api/v1/comments/{comment_id}", headers={"X-User-Id": "uno"})
    assert resp.status_code == 204
    assert len((await async_client.get(f"/api/v1/articles/{article_id}/comments")).json()) == 1

    resp = await async_client.delete(f"/api/v1/comments/{comment_id}", headers={"X-User-Id": "haco"})
    assert resp.status_code == 204
    assert (await async_client.get(f"/api/v1/articles/{article_id}/comments")).json() == []
