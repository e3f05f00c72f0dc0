import logging
from typing import Any, Dict, List, Optional

import httpx

from mark_it_down.core.config import settings
from mark_it_down.core.exceptions import UpstreamFailure

logger = logging.getLogger(__name__)

GITHUB_ACCEPT = "application/vnd.github.v3+json"


def get_github_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Транспорт для запросов к GitHub; в тестах подменяется на MockTransport"""
    return None


def _error_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class GitHubClient:
    """Клиент REST API GitHub с bearer-токеном пользователя"""

    def __init__(self, access_token: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._client = httpx.AsyncClient(
            base_url=settings.github_api_url,
            headers={
                "Authorization": f"Bearer {access_token}",
                "Accept": GITHUB_ACCEPT,
            },
            timeout=settings.github_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            return await self._client.request(method, url, **kwargs)
        except httpx.RequestError as exc:
            logger.error(f"GitHub request {method} {url} failed: {exc}")
            raise UpstreamFailure("GitHub is unreachable", details=str(exc))

    def _expect(self, response: httpx.Response, error_message: str) -> Any:
        if response.is_success:
            return response.json()
        body = _error_body(response)
        logger.warning(f"{error_message}: {response.status_code} {body}")
        raise UpstreamFailure(error_message, status_code=response.status_code, details=body)

    # Профиль и репозитории пользователя

    async def get_authenticated_user(self) -> Dict[str, Any]:
        response = await self._request("GET", "/user")
        return self._expect(response, "Failed to fetch GitHub profile")

    async def list_emails(self) -> List[Dict[str, Any]]:
        response = await self._request("GET", "/user/emails")
        return self._expect(response, "Failed to fetch GitHub emails")

    async def list_repositories(self) -> List[Dict[str, Any]]:
        response = await self._request("GET", "/user/repos", params={"sort": "updated", "per_page": 100})
        return self._expect(response, "Failed to fetch repositories")

    async def create_repository(self, name: str, description: str, private: bool) -> Dict[str, Any]:
        response = await self._request(
            "POST",
            "/user/repos",
            json={
                "name": name,
                "description": description,
                "private": private,
                "auto_init": True,
            },
        )
        return self._expect(response, "Failed to create repository")

    async def get_repository(self, owner: str, repo: str) -> Dict[str, Any]:
        response = await self._request("GET", f"/repos/{owner}/{repo}")
        return self._expect(response, "Failed to fetch repository")

    # Git Data API

    async def find_branch_ref(self, owner: str, repo: str, branch: str) -> Optional[Dict[str, Any]]:
        """Ссылка на ветку или None, если ветки ещё нет"""
        response = await self._request("GET", f"/repos/{owner}/{repo}/git/refs/heads/{branch}")
        if not response.is_success:
            logger.info(f"Branch {branch} of {owner}/{repo} not found ({response.status_code})")
            return None
        return response.json()

    async def find_commit(self, owner: str, repo: str, sha: str) -> Optional[Dict[str, Any]]:
        response = await self._request("GET", f"/repos/{owner}/{repo}/git/commits/{sha}")
        if not response.is_success:
            logger.info(f"Commit {sha} of {owner}/{repo} not readable ({response.status_code})")
            return None
        return response.json()

    async def create_tree(
        self,
        owner: str,
        repo: str,
        tree: List[Dict[str, Any]],
        base_tree: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"tree": tree}
        if base_tree:
            payload["base_tree"] = base_tree
        response = await self._request("POST", f"/repos/{owner}/{repo}/git/trees", json=payload)
        return self._expect(response, "Failed to create tree")

    async def create_commit(
        self,
        owner: str,
        repo: str,
        message: str,
        tree: str,
        parents: List[str],
    ) -> Dict[str, Any]:
        response = await self._request(
            "POST",
            f"/repos/{owner}/{repo}/git/commits",
            json={"message": message, "tree": tree, "parents": parents},
        )
        return self._expect(response, "Failed to create commit")

    async def update_branch_ref(self, owner: str, repo: str, branch: str, sha: str) -> Dict[str, Any]:
        """Перевод ветки на коммит без force: не пройдёт, если ветку сдвинули"""
        response = await self._request(
            "PATCH",
            f"/repos/{owner}/{repo}/git/refs/heads/{branch}",
            json={"sha": sha, "force": False},
        )
        return self._expect(response, "Failed to update reference")

    async def create_branch_ref(self, owner: str, repo: str, branch: str, sha: str) -> Dict[str, Any]:
        response = await self._request(
            "POST",
            f"/repos/{owner}/{repo}/git/refs",
            json={"ref": f"refs/heads/{branch}", "sha": sha},
        )
        return self._expect(response, "Failed to create reference")


class GitHubOAuthClient:
    """Обмен OAuth-кода на токен и чтение профиля"""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._transport = transport

    def authorize_url(self, state: str) -> str:
        request = httpx.Request(
            "GET",
            f"{settings.github_oauth_url}/authorize",
            params={
                "client_id": settings.github_client_id,
                "scope": settings.github_oauth_scope,
                "state": state,
            },
        )
        return str(request.url)

    async def exchange_code(self, code: str) -> str:
        """Код авторизации -> access token"""
        async with httpx.AsyncClient(timeout=settings.github_timeout, transport=self._transport) as client:
            try:
                response = await client.post(
                    f"{settings.github_oauth_url}/access_token",
                    data={
                        "client_id": settings.github_client_id,
                        "client_secret": settings.github_client_secret,
                        "code": code,
                    },
                    headers={"Accept": "application/json"},
                )
            except httpx.RequestError as exc:
                logger.error(f"GitHub token exchange failed: {exc}")
                raise UpstreamFailure("GitHub is unreachable", details=str(exc))

        body = _error_body(response)
        # GitHub отвечает 200 и на неверный код, ошибка приходит в теле
        if not response.is_success or not isinstance(body, dict) or "access_token" not in body:
            logger.warning(f"GitHub token exchange rejected: {response.status_code} {body}")
            status_code = response.status_code if not response.is_success else 401
            raise UpstreamFailure("Failed to exchange OAuth code", status_code=status_code, details=body)

        return body["access_token"]

    async def fetch_profile(self, access_token: str) -> Dict[str, Any]:
        """Профиль пользователя; email берётся из /user/emails, если скрыт"""
        async with GitHubClient(access_token, transport=self._transport) as github:
            profile = await github.get_authenticated_user()

            if not profile.get("email"):
                emails = await github.list_emails()
                primary = next(
                    (item for item in emails if item.get("primary") and item.get("verified")),
                    None,
                )
                profile["email"] = primary["email"] if primary else None

        return profile
