from mark_it_down.db.repositories.user_repository import UserRepository
from mark_it_down.db.repositories.folder_repository import FolderRepository
from mark_it_down.db.repositories.file_repository import FileRepository

__all__ = [
    "UserRepository",
    "FolderRepository",
    "FileRepository"
]
