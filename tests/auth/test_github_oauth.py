from urllib.parse import parse_qs, urlparse

from mark_it_down.core.auth import session_from_token
from mark_it_down.core.security import create_oauth_state, verify_oauth_state, verify_token


async def test_github_login_redirects_with_state(client):
    r = await client.get("/auth/github/login")
    assert r.status_code in (302, 307)

    location = urlparse(r.headers["location"])
    assert location.netloc == "github.com"
    assert location.path == "/login/oauth/authorize"

    query = parse_qs(location.query)
    assert query["client_id"] == ["test-client"]
    assert "repo" in query["scope"][0].split()
    assert verify_oauth_state(query["state"][0])


async def test_callback_creates_user_with_github_token(client, fake_github):
    r = await client.get("/auth/github/callback", params={"code": "good-code", "state": create_oauth_state()})
    assert r.status_code == 200, r.text

    token = r.json()["access_token"]
    assert session_from_token(token).github_access_token == "gho_from_oauth"

    me = (await client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})).json()
    # email скрыт в профиле и берётся из /user/emails
    assert me["email"] == "octocat@example.com"
    assert me["name"] == "The Octocat"
    assert me["githubUsername"] == "octocat"
    assert me["githubConnected"] is True

    exchange = fake_github.calls("POST", "/login/oauth/access_token")[0]
    assert parse_qs(exchange.content.decode())["client_secret"] == ["test-client-secret"]


async def test_callback_links_existing_account_and_refreshes_token(client, fake_github, make_user):
    user = await make_user("octocat@example.com", "pw123456", "Local Name")

    r = await client.get("/auth/github/callback", params={"code": "good-code", "state": create_oauth_state()})
    token = r.json()["access_token"]
    assert verify_token(token)["sub"] == user["id"]

    fake_github.oauth_token = "gho_second"
    r = await client.get("/auth/github/callback", params={"code": "good-code", "state": create_oauth_state()})
    session = session_from_token(r.json()["access_token"])
    assert str(session.user_id) == user["id"]
    assert session.github_access_token == "gho_second"

    me = (await client.get("/auth/me", headers=user["headers"])).json()
    assert me["name"] == "Local Name"
    assert me["githubConnected"] is True

    # пароль продолжает работать, но сессия без токена GitHub
    r = await client.post("/auth/login", json={"email": "octocat@example.com", "password": "pw123456"})
    assert r.status_code == 200
    password_token = r.json()["access_token"]
    session = session_from_token(password_token)
    assert str(session.user_id) == user["id"]
    assert session.github_access_token is None

    r = await client.get("/github/repos", headers={"Authorization": f"Bearer {password_token}"})
    assert r.status_code == 401


async def test_callback_rejects_bad_state(client, fake_github):
    r = await client.get("/auth/github/callback", params={"code": "good-code", "state": "forged"})
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid OAuth state"}
    assert fake_github.requests == []


async def test_callback_requires_code(client, fake_github):
    r = await client.get("/auth/github/callback", params={"state": create_oauth_state()})
    assert r.status_code == 400
    assert r.json() == {"error": "OAuth code is required"}


async def test_callback_bad_code(client, fake_github):
    r = await client.get("/auth/github/callback", params={"code": "stale", "state": create_oauth_state()})
    assert r.status_code == 401
    body = r.json()
    assert body["error"] == "Failed to exchange OAuth code"
    assert body["details"] == {"error": "bad_verification_code"}


async def test_callback_without_verified_email(client, fake_github):
    fake_github.emails = [{"email": "x@example.com", "primary": True, "verified": False}]

    r = await client.get("/auth/github/callback", params={"code": "good-code", "state": create_oauth_state()})
    assert r.status_code == 400
    assert r.json() == {"error": "GitHub account has no verified email"}


async def test_oauth_only_account_cannot_use_password(client, fake_github):
    await client.get("/auth/github/callback", params={"code": "good-code", "state": create_oauth_state()})

    r = await client.post("/auth/login", json={"email": "octocat@example.com", "password": "anything"})
    assert r.status_code == 401
