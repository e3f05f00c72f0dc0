import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from mark_it_down.core.exceptions import InvalidInput, NotFound, Unauthorized
from mark_it_down.core.security import create_session_token
from mark_it_down.db.repositories.user_repository import UserRepository
from mark_it_down.domains.identity.entities import User, CredentialLogin, OAuthLogin, LoginRequest

logger = logging.getLogger(__name__)


class IdentityService:
    """Сервис для работы с идентификацией и аутентификацией пользователей"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repository = UserRepository(session)

    async def register_user(self, email: Optional[str], password: Optional[str], name: Optional[str] = None) -> User:
        """Регистрация нового пользователя"""
        if not email or not password:
            raise InvalidInput("Email and password are required")

        if await self.user_repository.email_exists(email):
            raise InvalidInput("User already exists")

        user = User.create_user(email=email, password=password, name=name)
        created = await self.user_repository.create(user)
        logger.info(f"Registered user {created.uuid}")
        return created

    async def sign_in(self, login: LoginRequest) -> User:
        """Вход: разбор варианта входа выполняется один раз здесь"""
        if isinstance(login, CredentialLogin):
            return await self._sign_in_with_credentials(login)
        if isinstance(login, OAuthLogin):
            return await self._sign_in_with_github(login)
        raise TypeError(f"Unsupported login: {type(login).__name__}")

    async def login_user(self, login: LoginRequest) -> str:
        """Вход пользователя и создание токена сессии.

        Токен GitHub попадает в сессию только при входе через GitHub.
        """
        user = await self.sign_in(login)
        github_token = user.github_access_token if isinstance(login, OAuthLogin) else None
        return create_session_token(str(user.uuid), github_token)

    async def _sign_in_with_credentials(self, login: CredentialLogin) -> User:
        if not login.email or not login.password:
            raise InvalidInput("Please enter an email and password")

        user = await self.user_repository.get_by_email(login.email)
        if not user:
            raise Unauthorized("No user found with this email")

        if not user.authenticate(login.password):
            raise Unauthorized("Invalid password")

        return user

    async def _sign_in_with_github(self, login: OAuthLogin) -> User:
        if not login.email:
            raise InvalidInput("GitHub account has no verified email")

        existing = await self.user_repository.get_by_email(login.email)
        if existing:
            # повторный вход: обновляем токен и логин GitHub
            existing.link_github(login.access_token, login.github_username)
            logger.info(f"Refreshed GitHub token for user {existing.uuid}")
            return await self.user_repository.update_github(existing)

        user = await self.user_repository.create(User.create_from_github(login))
        logger.info(f"Created user {user.uuid} from GitHub sign-in")
        return user

    async def get_user(self, user_uuid: uuid.UUID) -> User:
        """Получение пользователя по UUID"""
        user = await self.user_repository.get_by_uuid(user_uuid)
        if not user:
            raise NotFound("User not found")
        return user
