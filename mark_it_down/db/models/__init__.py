from mark_it_down.db.models.user import User
from mark_it_down.db.models.folder import Folder
from mark_it_down.db.models.file import File

__all__ = [
    "User",
    "Folder",
    "File"
]
