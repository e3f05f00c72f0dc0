from typing import Optional, List
import uuid
from datetime import datetime

from mark_it_down.core.schemas import CamelModel


class FolderCreate(CamelModel):
    """Схема для создания папки"""
    name: Optional[str] = None
    parent_id: Optional[uuid.UUID] = None


class FolderRename(CamelModel):
    """Схема для переименования папки"""
    id: Optional[uuid.UUID] = None
    name: Optional[str] = None


class FolderResponse(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    parent_id: Optional[uuid.UUID] = None
    path: str
    created_at: datetime
    updated_at: datetime


class FolderListResponse(CamelModel):
    folders: List[FolderResponse]


class FolderEnvelope(CamelModel):
    folder: FolderResponse


class FileCreate(CamelModel):
    """Схема для создания файла"""
    name: Optional[str] = None
    type: Optional[str] = None
    content: Optional[str] = None
    folder_id: Optional[uuid.UUID] = None


class FileUpdate(CamelModel):
    """Схема для обновления файла: содержимое и/или имя"""
    id: Optional[uuid.UUID] = None
    content: Optional[str] = None
    name: Optional[str] = None


class FileResponse(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    folder_id: Optional[uuid.UUID] = None
    name: str
    content: str
    type: str
    path: str
    created_at: datetime
    updated_at: datetime


class FileListResponse(CamelModel):
    files: List[FileResponse]


class FileEnvelope(CamelModel):
    file: FileResponse


class MessageResponse(CamelModel):
    message: str
