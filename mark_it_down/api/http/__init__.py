from mark_it_down.api.http.health import router as health_router
from mark_it_down.api.http.auth import router as auth_router
from mark_it_down.api.http.files import router as files_router
from mark_it_down.api.http.folders import router as folders_router
from mark_it_down.api.http.github import router as github_router

__all__ = [
    "health_router",
    "auth_router",
    "files_router",
    "folders_router",
    "github_router"
]
