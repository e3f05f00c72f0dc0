import uuid
from datetime import datetime
from typing import Optional


def build_path(name: str, parent_path: Optional[str] = None) -> str:
    """Материализованный путь узла: путь родителя + "/" + имя"""
    if parent_path:
        return f"{parent_path}/{name}"
    return f"/{name}"


def rename_path(path: str, new_name: str) -> str:
    """Замена последнего сегмента пути"""
    parts = path.split("/")
    parts[-1] = new_name
    return "/".join(parts)


def normalize_file_type(file_type: str) -> str:
    return "markdown" if file_type == "markdown" else "text"


class Folder:
    """Папка пользователя"""

    def __init__(
        self,
        uuid: uuid.UUID,
        owner_id: uuid.UUID,
        name: str,
        path: str,
        parent_id: Optional[uuid.UUID] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.owner_id = owner_id
        self.name = name
        self.path = path
        self.parent_id = parent_id
        self.created_at = created_at or datetime.utcnow()
        self.updated_at = updated_at or datetime.utcnow()

    def rename(self, new_name: str) -> None:
        """Переименование: меняется только собственный путь, потомки не трогаются"""
        self.name = new_name
        self.path = rename_path(self.path, new_name)
        self.updated_at = datetime.utcnow()

    @classmethod
    def create_folder(
        cls,
        owner_id: uuid.UUID,
        name: str,
        parent: Optional["Folder"] = None,
        parent_id: Optional[uuid.UUID] = None
    ) -> "Folder":
        """Создание папки в корне или внутри parent.

        parent_id сохраняется как передан, даже если такой папки нет:
        путь тогда строится от корня.
        """
        return cls(
            uuid=uuid.uuid4(),
            owner_id=owner_id,
            name=name,
            path=build_path(name, parent.path if parent else None),
            parent_id=parent_id or (parent.uuid if parent else None)
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Folder):
            return False
        return self.uuid == other.uuid

    def __repr__(self) -> str:
        return f"Folder(uuid={self.uuid}, path={self.path})"


class File:
    """Текстовый или markdown-файл пользователя"""

    def __init__(
        self,
        uuid: uuid.UUID,
        owner_id: uuid.UUID,
        name: str,
        path: str,
        content: str = "",
        type: str = "text",
        folder_id: Optional[uuid.UUID] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.owner_id = owner_id
        self.name = name
        self.path = path
        self.content = content
        self.type = type
        self.folder_id = folder_id
        self.created_at = created_at or datetime.utcnow()
        self.updated_at = updated_at or datetime.utcnow()

    def rename(self, new_name: str) -> None:
        self.name = new_name
        self.path = rename_path(self.path, new_name)
        self.updated_at = datetime.utcnow()

    def update_content(self, new_content: str) -> None:
        """Полная перезапись содержимого"""
        self.content = new_content
        self.updated_at = datetime.utcnow()

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()

    def get_sync_path(self) -> str:
        """Путь в репозитории GitHub: без ведущего слэша"""
        return self.path[1:] if self.path.startswith("/") else self.path

    @classmethod
    def create_file(
        cls,
        owner_id: uuid.UUID,
        name: str,
        file_type: str,
        content: Optional[str] = None,
        folder: Optional[Folder] = None,
        folder_id: Optional[uuid.UUID] = None
    ) -> "File":
        """Создание файла в корне или внутри folder; folder_id сохраняется как передан"""
        return cls(
            uuid=uuid.uuid4(),
            owner_id=owner_id,
            name=name,
            path=build_path(name, folder.path if folder else None),
            content=content or "",
            type=normalize_file_type(file_type),
            folder_id=folder_id or (folder.uuid if folder else None)
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, File):
            return False
        return self.uuid == other.uuid

    def __repr__(self) -> str:
        return f"File(uuid={self.uuid}, path={self.path})"
