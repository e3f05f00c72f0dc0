from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete
import uuid

from mark_it_down.db.models.folder import Folder as FolderModel
from mark_it_down.domains.hierarchy.entities import Folder


class FolderRepository:
    """Репозиторий папок. Каждый запрос фильтруется по владельцу"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, folder: Folder) -> Folder:
        """Создание папки"""
        db_folder = FolderModel(
            uuid=folder.uuid,
            owner_id=folder.owner_id,
            name=folder.name,
            parent_id=folder.parent_id,
            path=folder.path,
            created_at=folder.created_at,
            updated_at=folder.updated_at
        )

        self.session.add(db_folder)
        await self.session.commit()
        await self.session.refresh(db_folder)
        return self._to_domain(db_folder)

    async def get(self, folder_uuid: uuid.UUID, owner_id: uuid.UUID) -> Optional[Folder]:
        """Получение папки владельца по UUID"""
        result = await self.session.execute(
            select(FolderModel).where(
                FolderModel.uuid == folder_uuid,
                FolderModel.owner_id == owner_id
            )
        )
        db_folder = result.scalar_one_or_none()
        return self._to_domain(db_folder) if db_folder else None

    async def get_by_owner(self, owner_id: uuid.UUID) -> List[Folder]:
        """Все папки владельца, упорядоченные по пути"""
        result = await self.session.execute(
            select(FolderModel)
            .where(FolderModel.owner_id == owner_id)
            .order_by(FolderModel.path.asc())
        )
        return [self._to_domain(folder) for folder in result.scalars().all()]

    async def update(self, folder: Folder) -> bool:
        """Сохранение имени и пути папки"""
        stmt = (
            update(FolderModel)
            .where(
                FolderModel.uuid == folder.uuid,
                FolderModel.owner_id == folder.owner_id
            )
            .values(
                name=folder.name,
                path=folder.path,
                updated_at=folder.updated_at
            )
        )

        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    async def delete(self, folder_uuid: uuid.UUID, owner_id: uuid.UUID) -> bool:
        """Удаление папки"""
        stmt = delete(FolderModel).where(
            FolderModel.uuid == folder_uuid,
            FolderModel.owner_id == owner_id
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    def _to_domain(self, db_folder: FolderModel) -> Folder:
        """Преобразование модели БД в доменную сущность"""
        return Folder(
            uuid=db_folder.uuid,
            owner_id=db_folder.owner_id,
            name=db_folder.name,
            path=db_folder.path,
            parent_id=db_folder.parent_id,
            created_at=db_folder.created_at,
            updated_at=db_folder.updated_at
        )
