from mark_it_down.domains.hierarchy.entities import Folder, File, build_path, rename_path
from mark_it_down.domains.hierarchy.schemas import (
    FolderCreate, FolderRename, FolderResponse, FolderListResponse, FolderEnvelope,
    FileCreate, FileUpdate, FileResponse, FileListResponse, FileEnvelope,
    MessageResponse
)

__all__ = [
    "Folder", "File", "build_path", "rename_path",
    "FolderCreate", "FolderRename", "FolderResponse", "FolderListResponse", "FolderEnvelope",
    "FileCreate", "FileUpdate", "FileResponse", "FileListResponse", "FileEnvelope",
    "MessageResponse"
]
