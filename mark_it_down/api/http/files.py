from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import uuid

from mark_it_down.core.auth import SessionContext, get_current_session
from mark_it_down.core.db import get_db
from mark_it_down.domains.hierarchy.entities import File
from mark_it_down.domains.hierarchy.schemas import (
    FileCreate, FileUpdate, FileResponse, FileListResponse, FileEnvelope, MessageResponse
)
from mark_it_down.domains.hierarchy.services import HierarchyService

router = APIRouter(prefix="/files", tags=["files"])


def to_file_response(file: File) -> FileResponse:
    return FileResponse(
        id=file.uuid,
        user_id=file.owner_id,
        folder_id=file.folder_id,
        name=file.name,
        content=file.content,
        type=file.type,
        path=file.path,
        created_at=file.created_at,
        updated_at=file.updated_at
    )


@router.get("")
async def get_files(
    id: Optional[uuid.UUID] = Query(None),
    session: SessionContext = Depends(get_current_session),
    db: AsyncSession = Depends(get_db)
):
    """Все файлы пользователя по пути или один файл по id"""
    service = HierarchyService(db, session.user_id)

    if id:
        file = await service.get_file(id)
        return FileEnvelope(file=to_file_response(file))

    files = await service.list_files()
    return FileListResponse(files=[to_file_response(file) for file in files])


@router.post("", response_model=FileEnvelope, status_code=status.HTTP_201_CREATED)
async def create_file(
    file_data: FileCreate,
    session: SessionContext = Depends(get_current_session),
    db: AsyncSession = Depends(get_db)
):
    """Создание файла"""
    service = HierarchyService(db, session.user_id)

    file = await service.create_file(
        file_data.name,
        file_data.type,
        file_data.content,
        file_data.folder_id
    )
    return FileEnvelope(file=to_file_response(file))


@router.put("", response_model=MessageResponse)
async def update_file(
    update_data: FileUpdate,
    session: SessionContext = Depends(get_current_session),
    db: AsyncSession = Depends(get_db)
):
    """Автосохранение содержимого и/или переименование"""
    service = HierarchyService(db, session.user_id)

    await service.update_file(update_data.id, update_data.content, update_data.name)
    return MessageResponse(message="File updated successfully")


@router.delete("", response_model=MessageResponse)
async def delete_file(
    id: Optional[uuid.UUID] = Query(None),
    session: SessionContext = Depends(get_current_session),
    db: AsyncSession = Depends(get_db)
):
    """Удаление файла"""
    service = HierarchyService(db, session.user_id)

    await service.delete_file(id)
    return MessageResponse(message="File deleted successfully")
