"""Knowledge base data models package.

Contains the filesystem gateway and the value types it returns.
"""

from models.filesystem import (
    DirectoryEntry,
    FileGateway,
    FsError,
    FsErrorKind,
    FsOk,
    FsResult,
    guess_mime_type,
    resolve_path,
)

__all__ = [
    "DirectoryEntry",
    "FileGateway",
    "FsError",
    "FsErrorKind",
    "FsOk",
    "FsResult",
    "guess_mime_type",
    "resolve_path",
]
