"""
Integration tests for GET /auth/verify-reset-token/{token} and POST /auth/reset-password
"""
import asyncio
from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.services.token_generator import TokenGenerator
from src.domain.base import utcnow
from src.domain.entities import PasswordResetRequest
from tests.integration.api.helpers import register, request_reset


async def login_status(client: AsyncClient, password: str) -> int:
    response = await client.post("/auth/login", json={"email": "a@x.com", "password": password})
    return response.status_code


@pytest.mark.asyncio
async def test_verify_live_token(client: AsyncClient, notifier):
    await register(client)
    secret = await request_reset(client, notifier)

    response = await client.get(f"/auth/verify-reset-token/{secret}")

    assert response.status_code == 200
    assert response.json() == {"valid": True, "email": "a@x.com"}


@pytest.mark.asyncio
async def test_verify_unknown_token(client: AsyncClient):
    response = await client.get("/auth/verify-reset-token/not-a-real-token")

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_successful_reset(client: AsyncClient, db_session: AsyncSession, notifier):
    await register(client)
    secret = await request_reset(client, notifier)

    response = await client.post("/auth/reset-password", json={
        "token": secret,
        "password": "newpass1",
    })

    assert response.status_code == 200
    assert response.json()["status"] == "success"

    result = await db_session.exec(select(PasswordResetRequest))
    assert result.one().consumed is True

    assert await login_status(client, "secret1") == 400
    assert await login_status(client, "newpass1") == 200


@pytest.mark.asyncio
async def test_token_is_single_use(client: AsyncClient, notifier):
    await register(client)
    secret = await request_reset(client, notifier)

    first = await client.post("/auth/reset-password", json={"token": secret, "password": "newpass1"})
    second = await client.post("/auth/reset-password", json={"token": secret, "password": "newpass2"})
    verify = await client.get(f"/auth/verify-reset-token/{secret}")

    assert first.status_code == 200
    assert second.status_code == 400
    assert second.json()["error"]["code"] == "INVALID_TOKEN"
    assert verify.status_code == 400
    assert await login_status(client, "newpass1") == 200


@pytest.mark.asyncio
async def test_older_token_is_invalidated_by_newer(client: AsyncClient, notifier):
    await register(client)
    old_secret = await request_reset(client, notifier)
    new_secret = await request_reset(client, notifier)

    old = await client.post("/auth/reset-password", json={"token": old_secret, "password": "newpass1"})
    new = await client.post("/auth/reset-password", json={"token": new_secret, "password": "newpass2"})

    assert old.status_code == 400
    assert old.json()["error"]["code"] == "INVALID_TOKEN"
    assert new.status_code == 200


@pytest.mark.asyncio
async def test_expired_token_fails_like_unknown(client: AsyncClient, db_session: AsyncSession):
    await register(client)
    secret = "expired-secret"
    db_session.add(PasswordResetRequest(
        email="a@x.com",
        token_hash=TokenGenerator.fingerprint(secret),
        consumed=False,
        expires_at=utcnow() - timedelta(minutes=1),
    ))
    await db_session.commit()

    expired = await client.post("/auth/reset-password", json={"token": secret, "password": "newpass1"})
    unknown = await client.post("/auth/reset-password", json={"token": "never-issued", "password": "newpass1"})
    expired_verify = await client.get(f"/auth/verify-reset-token/{secret}")
    unknown_verify = await client.get("/auth/verify-reset-token/never-issued")

    assert expired.status_code == unknown.status_code == 400
    assert expired.content == unknown.content
    assert expired_verify.content == unknown_verify.content
    assert await login_status(client, "secret1") == 200


@pytest.mark.asyncio
async def test_weak_password_keeps_token_usable(client: AsyncClient, notifier):
    await register(client)
    secret = await request_reset(client, notifier)

    weak = await client.post("/auth/reset-password", json={"token": secret, "password": "12345"})
    verify = await client.get(f"/auth/verify-reset-token/{secret}")

    assert weak.status_code == 400
    assert weak.json()["error"]["code"] == "INVALID_PASSWORD"
    assert verify.status_code == 200


@pytest.mark.asyncio
async def test_concurrent_resets_with_same_token(client: AsyncClient, notifier):
    await register(client)
    secret = await request_reset(client, notifier)

    responses = await asyncio.gather(
        client.post("/auth/reset-password", json={"token": secret, "password": "newpass1"}),
        client.post("/auth/reset-password", json={"token": secret, "password": "newpass2"}),
    )

    assert sorted(r.status_code for r in responses) == [200, 400]
    (failure,) = [r for r in responses if r.status_code == 400]
    assert failure.json()["error"]["code"] == "INVALID_TOKEN"
