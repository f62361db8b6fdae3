from datetime import timedelta

import pytest

from locket.config.settings import settings
from locket.shared.utils.security import SecurityUtils


async def test_register_then_login(client) -> None:
    response = await client.post(
        "/api/auth/register",
        json={"email": "ann@example.com", "password": "correct horse", "name": "Ann"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["errors"] is False
    assert body["payload"]["user"]["email"] == "ann@example.com"
    token = body["payload"]["access_token"]

    response = await client.get("/api/user", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200

    response = await client.post(
        "/api/auth/login",
        json={"email": "ann@example.com", "password": "correct horse"},
    )
    assert response.status_code == 200
    assert response.json()["payload"]["token_type"] == "bearer"

    response = await client.post(
        "/api/auth/login",
        json={"email": "ann@example.com", "password": "wrong horse"},
    )
    assert response.status_code == 401

    response = await client.post(
        "/api/auth/register",
        json={"email": "ann@example.com", "password": "another one"},
    )
    assert response.status_code == 409


async def test_register_validates_body(client) -> None:
    response = await client.post("/api/auth/register", json={"email": "not-an-email", "password": "short"})

    assert response.status_code == 400
    assert response.json()["errors"] is True
    assert response.json()["payload"] is None


async def test_expired_token_is_rejected(client, make_user) -> None:
    user, _ = await make_user()
    token = SecurityUtils.create_access_token(
        data={"user_id": str(user.id)},
        secret_key=settings.SECRET_KEY,
        expires_delta=timedelta(minutes=-1),
        algorithm=settings.JWT_ALGORITHM,
    )

    response = await client.get("/api/user", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["message"] == "invalid token"


async def test_token_for_deleted_user_is_rejected(client, make_user) -> None:
    user, headers = await make_user()

    response = await client.delete(f"/api/user/{user.id}", headers=headers)
    assert response.status_code == 200

    response = await client.get("/api/user", headers=headers)
    assert response.status_code == 401


def test_password_hashing() -> None:
    hashed = SecurityUtils.hash_password("correct horse")

    assert SecurityUtils.verify_password("correct horse", hashed)
    assert not SecurityUtils.verify_password("wrong horse", hashed)


def test_decode_rejects_foreign_signature() -> None:
    token = SecurityUtils.create_access_token(
        data={"user_id": "x"},
        secret_key="some-other-secret",
        expires_delta=timedelta(minutes=5),
        algorithm=settings.JWT_ALGORITHM,
    )

    with pytest.raises(ValueError):
        SecurityUtils.decode_access_token(token, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
