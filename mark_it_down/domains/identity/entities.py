import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from mark_it_down.core.security import get_password_hash, verify_password


class User:
    """Сущность пользователя домена Identity"""

    def __init__(
        self,
        uuid: uuid.UUID,
        email: str,
        password_hash: str = "",
        name: str = "",
        github_username: Optional[str] = None,
        github_access_token: Optional[str] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.email = email
        self.password_hash = password_hash
        self.name = name
        self.github_username = github_username
        self.github_access_token = github_access_token
        self.created_at = created_at or datetime.utcnow()
        self.updated_at = updated_at or datetime.utcnow()

    def authenticate(self, password: str) -> bool:
        """Проверка пароля пользователя"""
        return verify_password(password, self.password_hash)

    def link_github(self, access_token: str, username: Optional[str]) -> None:
        """Обновление данных GitHub при повторном входе"""
        self.github_access_token = access_token
        self.github_username = username
        self.updated_at = datetime.utcnow()

    @classmethod
    def create_user(cls, email: str, password: str, name: Optional[str] = None) -> "User":
        """Создание нового пользователя с хешированием пароля"""
        return cls(
            uuid=uuid.uuid4(),
            email=email,
            password_hash=get_password_hash(password),
            name=name or email
        )

    @classmethod
    def create_from_github(cls, login: "OAuthLogin") -> "User":
        """Создание пользователя при первом входе через GitHub"""
        return cls(
            uuid=uuid.uuid4(),
            email=login.email,
            password_hash="",
            name=login.name or "",
            github_username=login.github_username,
            github_access_token=login.access_token
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return False
        return self.uuid == other.uuid

    def __repr__(self) -> str:
        return f"User(uuid={self.uuid}, email={self.email})"


@dataclass(frozen=True)
class CredentialLogin:
    email: str
    password: str


@dataclass(frozen=True)
class OAuthLogin:
    """Пользователь уже подтверждён провайдером"""
    email: str
    access_token: str
    name: Optional[str] = None
    github_username: Optional[str] = None


LoginRequest = Union[CredentialLogin, OAuthLogin]
