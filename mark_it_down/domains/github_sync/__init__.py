from mark_it_down.domains.github_sync.schemas import (
    RepositoryCreate, RepositoryResponse, RepositoryListResponse, RepositoryEnvelope,
    SyncRequest, SyncResponse
)

__all__ = [
    "RepositoryCreate", "RepositoryResponse", "RepositoryListResponse", "RepositoryEnvelope",
    "SyncRequest", "SyncResponse"
]
