from app.core.permissions import PERMISSIONS, is_allowed
from app.core.security import TokenError, create_access_token, decode_token
from app.crud.users import create_user
from app.db.models.user import Role
from app.schemas.auth import UserCreateIn

import pytest


def test_permission_table():
    assert is_allowed("workItem.create", Role.admin.value)
    assert is_allowed("workItem.create", Role.copilot.value)
    assert not is_allowed("workItem.create", Role.customer.value)
    assert not is_allowed("workItem.delete", Role.admin.value)
    assert set(PERMISSIONS) == {"workItem.create"}


def test_token_round_trip_and_expiry():
    payload = decode_token(create_access_token(sub="alice", user_id=3, role="manager"))
    assert payload["sub"] == "alice"
    assert payload["userId"] == 3

    with pytest.raises(TokenError):
        decode_token(create_access_token(sub="alice", user_id=3, role="manager", expires_min=-1))


def test_login_and_me(client, db):
    create_user(db, UserCreateIn(login="alice", password="secret123", role=Role.manager.value, full_name="Alice"))

    assert client.post("/auth/login", json={"login": "alice", "password": "wrong"}).status_code == 401

    r = client.post("/auth/login", json={"login": "alice", "password": "secret123"})
    assert r.status_code == 200
    token = r.json()["access_token"]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["login"] == "alice"
    assert me.json()["role"] == Role.manager.value
