import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from mark_it_down.core.exceptions import InvalidInput
from mark_it_down.db.repositories.file_repository import FileRepository
from mark_it_down.domains.hierarchy.entities import File
from mark_it_down.infrastructure.github import GitHubClient

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = "main"
DEFAULT_REPOSITORY_DESCRIPTION = "Synced from mark-it-down"
BLOB_MODE = "100644"


@dataclass(frozen=True)
class SyncResult:
    commit_sha: str
    files_count: int


def build_tree_entries(files: List[File]) -> List[Dict[str, Any]]:
    """Blob-записи дерева GitHub, по одной на файл"""
    return [
        {
            "path": file.get_sync_path(),
            "mode": BLOB_MODE,
            "type": "blob",
            "content": file.content,
        }
        for file in files
    ]


def sync_commit_message(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"Sync from mark-it-down - {now.isoformat()}"


def map_repository(repo: Dict[str, Any]) -> Dict[str, Any]:
    """Ответ GitHub -> поля RepositoryResponse"""
    return {
        "id": repo["id"],
        "name": repo["name"],
        "full_name": repo["full_name"],
        "owner": repo["owner"]["login"],
        "private": repo["private"],
        "description": repo.get("description"),
        "url": repo["html_url"],
    }


class RepositoryService:
    """Репозитории GitHub текущего пользователя"""

    def __init__(self, github: GitHubClient):
        self.github = github

    async def list_repositories(self) -> List[Dict[str, Any]]:
        repos = await self.github.list_repositories()
        return [map_repository(repo) for repo in repos]

    async def create_repository(
        self,
        name: Optional[str],
        description: Optional[str] = None,
        private: Optional[bool] = None
    ) -> Dict[str, Any]:
        if not name:
            raise InvalidInput("Repository name is required")

        repo = await self.github.create_repository(
            name=name,
            description=description or DEFAULT_REPOSITORY_DESCRIPTION,
            private=bool(private),
        )
        logger.info(f"Created GitHub repository {repo.get('full_name')}")
        return map_repository(repo)


class GitHubSyncService:
    """Выгрузка всех файлов пользователя в ветку репозитория одним коммитом.

    Цепочка строго последовательная: репозиторий -> ветка -> коммит ->
    новое дерево -> новый коммит -> перевод ветки. Любой неуспешный шаг
    прерывает синхронизацию с UpstreamFailure; локально ничего не меняется,
    а на GitHub изменения видны только после перевода ветки.
    """

    def __init__(self, session: AsyncSession, github: GitHubClient):
        self.session = session
        self.github = github
        self.file_repository = FileRepository(session)

    async def sync_all(self, owner_id: uuid.UUID, repository_owner: Optional[str], repository_name: Optional[str]) -> SyncResult:
        if not repository_owner or not repository_name:
            raise InvalidInput("Repository name and owner are required")

        files = await self.file_repository.get_by_owner(owner_id)
        tree = build_tree_entries(files)
        logger.info(f"Syncing {len(tree)} file(s) of {owner_id} to {repository_owner}/{repository_name}")

        repo = await self.github.get_repository(repository_owner, repository_name)
        branch = repo.get("default_branch") or DEFAULT_BRANCH

        # первая синхронизация: ветки и коммита может ещё не быть
        parent_sha = None
        base_tree_sha = None
        ref = await self.github.find_branch_ref(repository_owner, repository_name, branch)
        if ref:
            commit = await self.github.find_commit(repository_owner, repository_name, ref["object"]["sha"])
            if commit:
                parent_sha = commit["sha"]
                base_tree_sha = commit["tree"]["sha"]

        new_tree = await self.github.create_tree(repository_owner, repository_name, tree, base_tree_sha)

        new_commit = await self.github.create_commit(
            repository_owner,
            repository_name,
            message=sync_commit_message(),
            tree=new_tree["sha"],
            parents=[parent_sha] if parent_sha else [],
        )

        if ref:
            await self.github.update_branch_ref(repository_owner, repository_name, branch, new_commit["sha"])
        else:
            await self.github.create_branch_ref(repository_owner, repository_name, branch, new_commit["sha"])

        logger.info(f"Synced {len(files)} file(s) to {repository_owner}/{repository_name}@{branch}: {new_commit['sha']}")
        return SyncResult(commit_sha=new_commit["sha"], files_count=len(files))
