from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete
import uuid

from mark_it_down.db.models.file import File as FileModel
from mark_it_down.domains.hierarchy.entities import File


class FileRepository:
    """Репозиторий файлов. Каждый запрос фильтруется по владельцу"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, file: File) -> File:
        """Создание файла"""
        db_file = FileModel(
            uuid=file.uuid,
            owner_id=file.owner_id,
            folder_id=file.folder_id,
            name=file.name,
            content=file.content,
            type=file.type,
            path=file.path,
            created_at=file.created_at,
            updated_at=file.updated_at
        )

        self.session.add(db_file)
        await self.session.commit()
        await self.session.refresh(db_file)
        return self._to_domain(db_file)

    async def get(self, file_uuid: uuid.UUID, owner_id: uuid.UUID) -> Optional[File]:
        """Получение файла владельца по UUID"""
        result = await self.session.execute(
            select(FileModel).where(
                FileModel.uuid == file_uuid,
                FileModel.owner_id == owner_id
            )
        )
        db_file = result.scalar_one_or_none()
        return self._to_domain(db_file) if db_file else None

    async def get_by_owner(self, owner_id: uuid.UUID) -> List[File]:
        """Все файлы владельца, упорядоченные по пути"""
        result = await self.session.execute(
            select(FileModel)
            .where(FileModel.owner_id == owner_id)
            .order_by(FileModel.path.asc())
        )
        return [self._to_domain(file) for file in result.scalars().all()]

    async def update(self, file: File) -> bool:
        """Сохранение имени, пути и содержимого (последняя запись побеждает)"""
        stmt = (
            update(FileModel)
            .where(
                FileModel.uuid == file.uuid,
                FileModel.owner_id == file.owner_id
            )
            .values(
                name=file.name,
                path=file.path,
                content=file.content,
                updated_at=file.updated_at
            )
        )

        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    async def delete(self, file_uuid: uuid.UUID, owner_id: uuid.UUID) -> bool:
        """Удаление файла"""
        stmt = delete(FileModel).where(
            FileModel.uuid == file_uuid,
            FileModel.owner_id == owner_id
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    async def delete_by_folder(self, folder_uuid: uuid.UUID, owner_id: uuid.UUID) -> int:
        """Удаление файлов, лежащих непосредственно в папке"""
        stmt = delete(FileModel).where(
            FileModel.folder_id == folder_uuid,
            FileModel.owner_id == owner_id
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount

    def _to_domain(self, db_file: FileModel) -> File:
        """Преобразование модели БД в доменную сущность"""
        return File(
            uuid=db_file.uuid,
            owner_id=db_file.owner_id,
            name=db_file.name,
            path=db_file.path,
            content=db_file.content,
            type=db_file.type,
            folder_id=db_file.folder_id,
            created_at=db_file.created_at,
            updated_at=db_file.updated_at
        )
