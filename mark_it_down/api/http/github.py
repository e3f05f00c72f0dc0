from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

import httpx

from mark_it_down.core.auth import SessionContext, get_github_session
from mark_it_down.core.db import get_db
from mark_it_down.domains.github_sync.schemas import (
    RepositoryCreate, RepositoryResponse, RepositoryListResponse, RepositoryEnvelope,
    SyncRequest, SyncResponse
)
from mark_it_down.domains.github_sync.services import GitHubSyncService, RepositoryService
from mark_it_down.infrastructure.github import GitHubClient, get_github_transport

router = APIRouter(prefix="/github", tags=["github"])


async def get_github_client(
    session: SessionContext = Depends(get_github_session),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_github_transport)
):
    """Клиент GitHub с токеном из сессии, закрывается после запроса"""
    async with GitHubClient(session.github_access_token, transport=transport) as client:
        yield client


@router.get("/repos", response_model=RepositoryListResponse)
async def list_repositories(github: GitHubClient = Depends(get_github_client)):
    """Репозитории пользователя на GitHub"""
    repos = await RepositoryService(github).list_repositories()
    return RepositoryListResponse(repositories=[RepositoryResponse(**repo) for repo in repos])


@router.post("/repos", response_model=RepositoryEnvelope, status_code=status.HTTP_201_CREATED)
async def create_repository(
    repo_data: RepositoryCreate,
    github: GitHubClient = Depends(get_github_client)
):
    """Создание репозитория для синхронизации"""
    repo = await RepositoryService(github).create_repository(
        repo_data.name,
        repo_data.description,
        repo_data.is_private
    )
    return RepositoryEnvelope(repository=RepositoryResponse(**repo))


@router.post("/sync", response_model=SyncResponse)
async def sync_files(
    sync_data: SyncRequest,
    session: SessionContext = Depends(get_github_session),
    github: GitHubClient = Depends(get_github_client),
    db: AsyncSession = Depends(get_db)
):
    """Выгрузка всех файлов пользователя в репозиторий одним коммитом"""
    service = GitHubSyncService(db, github)

    result = await service.sync_all(session.user_id, sync_data.repository_owner, sync_data.repository_name)
    return SyncResponse(
        message="Files synced successfully",
        commit_sha=result.commit_sha,
        files_count=result.files_count
    )
