"""
User account endpoint and service tests.
"""
import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from board.services import user_account_service


@pytest.mark.asyncio
async def test_create_user(async_client: AsyncClient):
    resp = await async_client.post("/api/v1/users", json={
        "user_id": "uno",
        "user_password": "hashed",
        "email": "uno@mail.com",
        "nickname": "Uno",
        "memo": "hello",
    })

    assert resp.status_code == 201
    body = resp.json()
    assert body["user_id"] == "uno"
    assert body["nickname"] == "Uno"
    assert body["created_at"] is not None
    assert "user_password" not in body


@pytest.mark.asyncio
async def test_create_duplicate_user(async_client: AsyncClient):
    payload = {"user_id": "uno", "user_password": "hashed", "email": "uno@mail.com"}
    assert (await async_client.post("/api/v1/users", json=payload)).status_code == 201

    resp = await async_client.post("/api/v1/users", json=payload)
    assert resp.status_code == 409

    resp = await async_client.post(
        "/api/v1/users", json={"user_id": "other", "user_password": "x", "email": "uno@mail.com"}
    )
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_get_user(async_client: AsyncClient):
    await async_client.post("/api/v1/users", json={"user_id": "uno", "user_password": "hashed"})

    assert (await async_client.get("/api/v1/users/uno")).json()["user_id"] == "uno"
    assert (await async_client.get("/api/v1/users/ghost")).status_code == 404


@pytest.mark.asyncio
async def test_registered_user_audits_itself(db_session: AsyncSession, uno):
    user = await user_account_service.get_user_account(db_session, "uno")
    assert user.created_by == "uno"
    assert user.modified_by == "uno"
    assert await user_account_service.get_user_account(db_session, "ghost") is None
