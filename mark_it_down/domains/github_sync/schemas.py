from typing import Optional, List

from mark_it_down.core.schemas import CamelModel


class RepositoryCreate(CamelModel):
    """Схема для создания репозитория на GitHub"""
    name: Optional[str] = None
    description: Optional[str] = None
    is_private: Optional[bool] = None


class RepositoryResponse(CamelModel):
    id: int
    name: str
    full_name: str
    owner: str
    private: bool
    description: Optional[str] = None
    url: str


class RepositoryListResponse(CamelModel):
    repositories: List[RepositoryResponse]


class RepositoryEnvelope(CamelModel):
    repository: RepositoryResponse


class SyncRequest(CamelModel):
    """Схема запроса синхронизации"""
    repository_owner: Optional[str] = None
    repository_name: Optional[str] = None


class SyncResponse(CamelModel):
    message: str
    commit_sha: str
    files_count: int
