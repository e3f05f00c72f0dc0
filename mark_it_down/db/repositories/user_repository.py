from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
import uuid

from mark_it_down.core.exceptions import InvalidInput
from mark_it_down.db.models.user import User as UserModel
from mark_it_down.domains.identity.entities import User


class UserRepository:
    """Репозиторий для работы с пользователями"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user: User) -> User:
        """Создание нового пользователя"""
        db_user = UserModel(
            uuid=user.uuid,
            email=user.email,
            password_hash=user.password_hash,
            name=user.name,
            github_username=user.github_username,
            github_access_token=user.github_access_token,
            created_at=user.created_at,
            updated_at=user.updated_at
        )

        self.session.add(db_user)
        try:
            await self.session.commit()
            await self.session.refresh(db_user)
            return self._to_domain(db_user)
        except IntegrityError:
            await self.session.rollback()
            raise InvalidInput("User already exists")

    async def get_by_uuid(self, user_uuid: uuid.UUID) -> Optional[User]:
        """Получение пользователя по UUID"""
        result = await self.session.execute(
            select(UserModel).where(UserModel.uuid == user_uuid)
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    async def get_by_email(self, email: str) -> Optional[User]:
        """Получение пользователя по email"""
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    async def update_github(self, user: User) -> User:
        """Сохранение токена и логина GitHub"""
        stmt = (
            update(UserModel)
            .where(UserModel.uuid == user.uuid)
            .values(
                github_access_token=user.github_access_token,
                github_username=user.github_username,
                updated_at=user.updated_at
            )
        )

        await self.session.execute(stmt)
        await self.session.commit()

        return await self.get_by_uuid(user.uuid)

    async def email_exists(self, email: str) -> bool:
        """Проверка существования email"""
        result = await self.session.execute(
            select(UserModel.uuid).where(UserModel.email == email)
        )
        return result.scalar_one_or_none() is not None

    def _to_domain(self, db_user: UserModel) -> User:
        """Преобразование модели БД в доменную сущность"""
        return User(
            uuid=db_user.uuid,
            email=db_user.email,
            password_hash=db_user.password_hash,
            name=db_user.name,
            github_username=db_user.github_username,
            github_access_token=db_user.github_access_token,
            created_at=db_user.created_at,
            updated_at=db_user.updated_at
        )
