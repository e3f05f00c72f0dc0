from mark_it_down.core.security import GITHUB_TOKEN_CLAIM, verify_token


async def test_login_returns_session_token(client, make_user):
    user = await make_user("a@example.com", "pw123456", "Alice")

    payload = verify_token(user["token"])
    assert payload["sub"] == user["id"]
    assert GITHUB_TOKEN_CLAIM not in payload


async def test_login_token_type(client, user):
    r = await client.post("/auth/login", json={"email": user["email"], "password": "secret123"})
    assert r.json()["token_type"] == "bearer"


async def test_login_wrong_password(client, user):
    r = await client.post("/auth/login", json={"email": user["email"], "password": "wrong"})
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid password"}


async def test_login_unknown_email(client):
    r = await client.post("/auth/login", json={"email": "ghost@example.com", "password": "pw"})
    assert r.status_code == 401
    assert r.json() == {"error": "No user found with this email"}


async def test_login_missing_fields(client):
    r = await client.post("/auth/login", json={"email": "a@example.com"})
    assert r.status_code == 400
    assert r.json() == {"error": "Please enter an email and password"}


async def test_me_returns_profile(client, make_user):
    user = await make_user("a@example.com", "pw123456", "Alice")

    r = await client.get("/auth/me", headers=user["headers"])
    assert r.status_code == 200
    body = r.json()
    assert body["id"] == user["id"]
    assert body["email"] == "a@example.com"
    assert body["name"] == "Alice"
    assert body["githubConnected"] is False
    assert body["githubUsername"] is None


async def test_me_requires_session(client):
    r = await client.get("/auth/me")
    assert r.status_code == 401

    r = await client.get("/auth/me", headers={"Authorization": "Bearer nonsense"})
    assert r.status_code == 401
    assert r.json() == {"error": "Unauthorized"}
