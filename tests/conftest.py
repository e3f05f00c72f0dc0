import os
import tempfile
from pathlib import Path

import httpx
import pytest

_DB_DIR = tempfile.mkdtemp(prefix="mark_it_down_tests_")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{Path(_DB_DIR) / 'test.db'}")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("GITHUB_CLIENT_ID", "test-client")
os.environ.setdefault("GITHUB_CLIENT_SECRET", "test-client-secret")

from mark_it_down.core.db import Base, engine, init_models
from mark_it_down.core.security import create_session_token
from mark_it_down.infrastructure.github import get_github_transport
from mark_it_down.main import app as fastapi_app

from tests.fake_github import FakeGitHub


@pytest.fixture()
async def app():
    await init_models()
    try:
        yield fastapi_app
    finally:
        fastapi_app.dependency_overrides.clear()
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        await engine.dispose()


@pytest.fixture()
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture()
def fake_github(app):
    github = FakeGitHub()
    app.dependency_overrides[get_github_transport] = lambda: httpx.MockTransport(github.handler)
    return github


@pytest.fixture()
def make_user(client):
    async def _mk(email: str = "alice@example.com", password: str = "secret123", name: str = None) -> dict:
        payload = {"email": email, "password": password}
        if name:
            payload["name"] = name
        r = await client.post("/register", json=payload)
        assert r.status_code == 201, r.text
        user_id = r.json()["userId"]

        r = await client.post("/auth/login", json={"email": email, "password": password})
        assert r.status_code == 200, r.text
        token = r.json()["access_token"]
        return {
            "id": user_id,
            "email": email,
            "token": token,
            "headers": {"Authorization": f"Bearer {token}"},
        }

    return _mk


@pytest.fixture()
async def user(make_user):
    return await make_user()


@pytest.fixture()
def github_headers(user):
    """Та же учётная запись, но с токеном GitHub в сессии"""
    token = create_session_token(user["id"], "gho_test_token")
    return {"Authorization": f"Bearer {token}"}
