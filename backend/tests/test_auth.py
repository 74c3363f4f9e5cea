"""Bearer token authentication."""

from datetime import timedelta

from kanbanhub.api.v1.auth import DEV_TOKEN, DEV_USER_ID, create_access_token
from kanbanhub.models.user import User


async def test_requests_without_token_are_401(anon_client):
    response = await anon_client.get("/api/workspaces")

    assert response.status_code == 401
    assert response.json() == {"message": "Not authenticated"}
    assert response.headers["WWW-Authenticate"] == "Bearer"


async def test_garbage_token_is_401(anon_client):
    response = await anon_client.get(
        "/api/workspaces",
        headers={"Authorization": "Bearer not-a-jwt"},
    )

    assert response.status_code == 401
    assert response.json() == {"message": "Invalid token"}


async def test_expired_token_is_401(anon_client):
    token = create_access_token("user-9", expires_delta=timedelta(minutes=-5))

    response = await anon_client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


async def test_valid_token_identifies_user(anon_client, session_factory):
    async with session_factory() as session:
        session.add(User(id="user-9", email="nine@example.com", display_name="Nine"))
        await session.commit()
    token = create_access_token("user-9")

    response = await anon_client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json() == {"id": "user-9", "email": "nine@example.com", "displayName": "Nine"}


async def test_token_for_unknown_user_is_401(anon_client):
    token = create_access_token("ghost")

    response = await anon_client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json() == {"message": "User not found"}


async def test_disabled_user_is_403(anon_client, session_factory):
    async with session_factory() as session:
        session.add(User(id="user-0", email="zero@example.com", display_name="Zero", is_active=False))
        await session.commit()
    token = create_access_token("user-0")

    response = await anon_client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 403


async def test_dev_token_creates_dev_user(anon_client):
    headers = {"Authorization": f"Bearer {DEV_TOKEN}"}

    first = await anon_client.get("/api/auth/me", headers=headers)
    second = await anon_client.get("/api/auth/me", headers=headers)

    assert first.status_code == 200
    assert first.json()["id"] == DEV_USER_ID
    assert second.json() == first.json()
