import logging
from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from mark_it_down.core.exceptions import InvalidInput, NotFound
from mark_it_down.db.repositories.file_repository import FileRepository
from mark_it_down.db.repositories.folder_repository import FolderRepository
from mark_it_down.domains.hierarchy.entities import Folder, File

logger = logging.getLogger(__name__)


class HierarchyService:
    """Папки и файлы пользователя.

    Все операции ограничены владельцем owner_id: чужой id ведёт себя
    так же, как несуществующий.

    Пути материализованы и не каскадируются: переименование папки меняет
    только её собственный path, а удаление папки удаляет лишь файлы,
    лежащие в ней непосредственно. Вложенные папки остаются сиротами.
    """

    def __init__(self, session: AsyncSession, owner_id: uuid.UUID):
        self.session = session
        self.owner_id = owner_id
        self.folder_repository = FolderRepository(session)
        self.file_repository = FileRepository(session)

    # Папки

    async def list_folders(self) -> List[Folder]:
        return await self.folder_repository.get_by_owner(self.owner_id)

    async def create_folder(self, name: Optional[str], parent_id: Optional[uuid.UUID] = None) -> Folder:
        """Создание папки; неизвестный parent_id кладёт папку в корень, но сохраняется в записи"""
        if not name:
            raise InvalidInput("Folder name is required")

        parent = await self._find_folder(parent_id)
        folder = Folder.create_folder(self.owner_id, name, parent, parent_id)
        return await self.folder_repository.create(folder)

    async def rename_folder(self, folder_id: Optional[uuid.UUID], new_name: Optional[str]) -> Folder:
        """Переименование папки без пересчёта путей потомков"""
        if not folder_id or not new_name:
            raise InvalidInput("Folder ID and name are required")

        folder = await self.folder_repository.get(folder_id, self.owner_id)
        if not folder:
            raise NotFound("Folder not found")

        folder.rename(new_name)
        if not await self.folder_repository.update(folder):
            raise NotFound("Folder not found")
        return folder

    async def delete_folder(self, folder_id: Optional[uuid.UUID]) -> int:
        """Удаление папки и её непосредственных файлов; возвращает число удалённых файлов"""
        if not folder_id:
            raise InvalidInput("Folder ID is required")

        if not await self.folder_repository.delete(folder_id, self.owner_id):
            raise NotFound("Folder not found")

        removed = await self.file_repository.delete_by_folder(folder_id, self.owner_id)
        logger.info(f"Deleted folder {folder_id} with {removed} file(s)")
        return removed

    # Файлы

    async def list_files(self) -> List[File]:
        return await self.file_repository.get_by_owner(self.owner_id)

    async def get_file(self, file_id: uuid.UUID) -> File:
        file = await self.file_repository.get(file_id, self.owner_id)
        if not file:
            raise NotFound("File not found")
        return file

    async def create_file(
        self,
        name: Optional[str],
        file_type: Optional[str],
        content: Optional[str] = None,
        folder_id: Optional[uuid.UUID] = None
    ) -> File:
        """Создание файла; неизвестный folder_id кладёт файл в корень, но сохраняется в записи"""
        if not name or not file_type:
            raise InvalidInput("File name and type are required")

        folder = await self._find_folder(folder_id)
        file = File.create_file(self.owner_id, name, file_type, content, folder, folder_id)
        return await self.file_repository.create(file)

    async def update_file(
        self,
        file_id: Optional[uuid.UUID],
        content: Optional[str] = None,
        name: Optional[str] = None
    ) -> File:
        """Перезапись содержимого и/или переименование файла"""
        if not file_id:
            raise InvalidInput("File ID is required")

        file = await self.get_file(file_id)

        if content is not None:
            file.update_content(content)
        if name is not None:
            file.rename(name)
        file.touch()

        if not await self.file_repository.update(file):
            raise NotFound("File not found")
        return file

    async def delete_file(self, file_id: Optional[uuid.UUID]) -> None:
        if not file_id:
            raise InvalidInput("File ID is required")

        if not await self.file_repository.delete(file_id, self.owner_id):
            raise NotFound("File not found")

    async def _find_folder(self, folder_id: Optional[uuid.UUID]) -> Optional[Folder]:
        if not folder_id:
            return None
        folder = await self.folder_repository.get(folder_id, self.owner_id)
        if not folder:
            logger.info(f"Folder {folder_id} not found for {self.owner_id}, placing node at root")
        return folder
