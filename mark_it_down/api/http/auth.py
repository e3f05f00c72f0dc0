import logging

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

import httpx

from mark_it_down.core.auth import SessionContext, get_current_session
from mark_it_down.core.db import get_db
from mark_it_down.core.exceptions import InvalidInput, Unauthorized
from mark_it_down.core.security import create_oauth_state, verify_oauth_state
from mark_it_down.domains.identity.entities import CredentialLogin, OAuthLogin
from mark_it_down.domains.identity.schemas import (
    RegisterRequest, RegisterResponse, LoginBody, UserResponse, Token
)
from mark_it_down.domains.identity.services import IdentityService
from mark_it_down.infrastructure.github import GitHubOAuthClient, get_github_transport

logger = logging.getLogger(__name__)

router = APIRouter(tags=["authentication"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: RegisterRequest,
    db: AsyncSession = Depends(get_db)
):
    """Регистрация нового пользователя"""
    identity_service = IdentityService(db)

    user = await identity_service.register_user(user_data.email, user_data.password, user_data.name)
    return RegisterResponse(message="User created successfully", user_id=user.uuid)


@router.post("/auth/login", response_model=Token)
async def login(
    login_data: LoginBody,
    db: AsyncSession = Depends(get_db)
):
    """Вход по email и паролю"""
    identity_service = IdentityService(db)

    token = await identity_service.login_user(
        CredentialLogin(email=login_data.email or "", password=login_data.password or "")
    )
    return Token(access_token=token)


@router.get("/auth/github/login")
async def github_login():
    """Редирект на страницу авторизации GitHub"""
    oauth = GitHubOAuthClient()
    return RedirectResponse(oauth.authorize_url(create_oauth_state()))


@router.get("/auth/github/callback", response_model=Token)
async def github_callback(
    code: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_github_transport)
):
    """Возврат от GitHub: обмен кода на токен и вход"""
    if not code:
        raise InvalidInput("OAuth code is required")
    if not state or not verify_oauth_state(state):
        raise Unauthorized("Invalid OAuth state")

    oauth = GitHubOAuthClient(transport=transport)
    access_token = await oauth.exchange_code(code)
    profile = await oauth.fetch_profile(access_token)

    identity_service = IdentityService(db)
    token = await identity_service.login_user(
        OAuthLogin(
            email=profile.get("email") or "",
            access_token=access_token,
            name=profile.get("name"),
            github_username=profile.get("login") or profile.get("name"),
        )
    )
    logger.info(f"GitHub sign-in for {profile.get('login')}")
    return Token(access_token=token)


@router.get("/auth/me", response_model=UserResponse)
async def get_current_user_info(
    session: SessionContext = Depends(get_current_session),
    db: AsyncSession = Depends(get_db)
):
    """Информация о текущем пользователе"""
    identity_service = IdentityService(db)

    user = await identity_service.get_user(session.user_id)
    return UserResponse(
        id=user.uuid,
        email=user.email,
        name=user.name,
        github_username=user.github_username,
        github_connected=bool(user.github_access_token),
        created_at=user.created_at,
        updated_at=user.updated_at
    )
