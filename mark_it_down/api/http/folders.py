from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import uuid

from mark_it_down.core.auth import SessionContext, get_current_session
from mark_it_down.core.db import get_db
from mark_it_down.domains.hierarchy.entities import Folder
from mark_it_down.domains.hierarchy.schemas import (
    FolderCreate, FolderRename, FolderResponse, FolderListResponse, FolderEnvelope, MessageResponse
)
from mark_it_down.domains.hierarchy.services import HierarchyService

router = APIRouter(prefix="/folders", tags=["folders"])


def to_folder_response(folder: Folder) -> FolderResponse:
    return FolderResponse(
        id=folder.uuid,
        user_id=folder.owner_id,
        name=folder.name,
        parent_id=folder.parent_id,
        path=folder.path,
        created_at=folder.created_at,
        updated_at=folder.updated_at
    )


@router.get("", response_model=FolderListResponse)
async def get_folders(
    session: SessionContext = Depends(get_current_session),
    db: AsyncSession = Depends(get_db)
):
    """Все папки пользователя по пути"""
    service = HierarchyService(db, session.user_id)

    folders = await service.list_folders()
    return FolderListResponse(folders=[to_folder_response(folder) for folder in folders])


@router.post("", response_model=FolderEnvelope, status_code=status.HTTP_201_CREATED)
async def create_folder(
    folder_data: FolderCreate,
    session: SessionContext = Depends(get_current_session),
    db: AsyncSession = Depends(get_db)
):
    """Создание папки"""
    service = HierarchyService(db, session.user_id)

    folder = await service.create_folder(folder_data.name, folder_data.parent_id)
    return FolderEnvelope(folder=to_folder_response(folder))


@router.put("", response_model=MessageResponse)
async def rename_folder(
    rename_data: FolderRename,
    session: SessionContext = Depends(get_current_session),
    db: AsyncSession = Depends(get_db)
):
    """Переименование папки"""
    service = HierarchyService(db, session.user_id)

    await service.rename_folder(rename_data.id, rename_data.name)
    return MessageResponse(message="Folder updated successfully")


@router.delete("", response_model=MessageResponse)
async def delete_folder(
    id: Optional[uuid.UUID] = Query(None),
    session: SessionContext = Depends(get_current_session),
    db: AsyncSession = Depends(get_db)
):
    """Удаление папки вместе с её файлами (на один уровень)"""
    service = HierarchyService(db, session.user_id)

    await service.delete_folder(id)
    return MessageResponse(message="Folder deleted successfully")
