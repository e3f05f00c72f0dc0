import uuid
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from mark_it_down.core.exceptions import Unauthorized
from mark_it_down.core.security import GITHUB_TOKEN_CLAIM, unseal_secret, verify_token

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class SessionContext:
    """Данные сессии текущего запроса"""
    user_id: uuid.UUID
    github_access_token: Optional[str] = None


def session_from_token(token: Optional[str]) -> SessionContext:
    """Разбор токена сессии в контекст запроса"""
    payload = verify_token(token) if token else None
    if not payload or not payload.get("sub"):
        raise Unauthorized("Unauthorized")

    try:
        user_id = uuid.UUID(payload["sub"])
    except (TypeError, ValueError):
        raise Unauthorized("Unauthorized")

    github_access_token = None
    sealed = payload.get(GITHUB_TOKEN_CLAIM)
    if sealed:
        github_access_token = unseal_secret(sealed)
        if github_access_token is None:
            raise Unauthorized("Unauthorized")

    return SessionContext(user_id=user_id, github_access_token=github_access_token)


async def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> SessionContext:
    """Зависимость: сессия обязательна"""
    return session_from_token(credentials.credentials if credentials else None)


async def get_github_session(session: SessionContext = Depends(get_current_session)) -> SessionContext:
    """Зависимость: сессия с токеном GitHub"""
    if not session.github_access_token:
        raise Unauthorized("GitHub authentication required")
    return session
