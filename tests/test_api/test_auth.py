"""Tests for registration, login and bearer token checks."""
import uuid
from datetime import timedelta

import pytest
from httpx import AsyncClient

from app.core.security import create_access_token
from tests.factories import make_sale_payload


@pytest.mark.asyncio
async def test_register_user(client: AsyncClient):
    resp = await client.post(
        "/api/v1/auth/register",
        json={"name": "Carla", "email": "Carla@Example.com", "password": "password123"},
    )
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["name"] == "Carla"
    assert data["email"] == "carla@example.com"
    assert uuid.UUID(data["id"])
    assert "password" not in data


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient):
    payload = {"name": "Carla", "email": "carla@example.com", "password": "password123"}
    await client.post("/api/v1/auth/register", json=payload)
    resp = await client.post("/api/v1/auth/register", json=payload)
    assert resp.status_code == 409
    assert resp.json()["status"] == 409


@pytest.mark.asyncio
async def test_register_rejects_short_password(client: AsyncClient):
    resp = await client.post(
        "/api/v1/auth/register",
        json={"name": "Carla", "email": "carla@example.com", "password": "short"},
    )
    assert resp.status_code == 400
    assert "password" in resp.json()["message"]


@pytest.mark.asyncio
async def test_login_returns_bearer_token(client: AsyncClient):
    await client.post(
        "/api/v1/auth/register",
        json={"name": "Carla", "email": "carla@example.com", "password": "password123"},
    )
    resp = await client.post("/api/v1/auth/login", json={"email": "carla@example.com", "password": "password123"})
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["tokenType"] == "Bearer"
    assert data["expiresIn"] == 3600
    assert data["accessToken"]


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient):
    await client.post(
        "/api/v1/auth/register",
        json={"name": "Carla", "email": "carla@example.com", "password": "password123"},
    )
    resp = await client.post("/api/v1/auth/login", json={"email": "carla@example.com", "password": "wrong-one"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_login_unknown_email(client: AsyncClient):
    resp = await client.post("/api/v1/auth/login", json={"email": "nobody@example.com", "password": "password123"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_tampered_token_is_rejected(client: AsyncClient, auth_headers: dict):
    headers = {"Authorization": auth_headers["Authorization"] + "x"}
    resp = await client.post("/api/v1/properties/sale", json=make_sale_payload(), headers=headers)
    assert resp.status_code == 401
    assert resp.headers.get("WWW-Authenticate") == "Bearer"


@pytest.mark.asyncio
async def test_expired_token_is_rejected(client: AsyncClient):
    token = create_access_token(str(uuid.uuid4()), ["USER"], expires_delta=timedelta(seconds=-5))
    resp = await client.post(
        "/api/v1/properties/sale",
        json=make_sale_payload(),
        headers={"Authorization": f"Bearer {token}"},
    )
    assert resp.status_code == 401
    assert resp.json()["message"] == "Access token expired"


@pytest.mark.asyncio
async def test_admin_may_modify_any_property(client: AsyncClient, auth_headers: dict):
    created = (await client.post(
        "/api/v1/properties/sale", json=make_sale_payload(), headers=auth_headers
    )).json()["data"]

    admin_token = create_access_token(str(uuid.uuid4()), ["USER", "ADMIN"])
    resp = await client.delete(
        f"/api/v1/properties/{created['id']}",
        headers={"Authorization": f"Bearer {admin_token}"},
    )
    assert resp.status_code == 200
