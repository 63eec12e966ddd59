"""Filesystem gateway for the knowledge base server.

Every operation returns an explicit result value (``FsOk`` or ``FsError``)
instead of raising for expected failures such as a missing file or a
permission problem. Front doors (the HTTP router and the shell IPC bridge)
decide how each error kind is reported to their callers.

Known limitations:
    - Reads are unbounded: a whole file is loaded into memory at once.
    - Writes are not atomic: a crash mid-write can leave a partial file.
    - Paths are not sandboxed. All client-supplied paths pass through
      ``resolve_path()`` so a jail can be added there later.
    - Directory listings keep the order the operating system yields,
      which is not guaranteed to be stable or sorted.
"""

import logging
import os
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Generic, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field


logger = logging.getLogger(__name__)

T = TypeVar("T")

TEXT_ENCODING = "utf-8"

MIME_TYPES = {
    ".html": "text/html",
    ".js": "text/javascript",
    ".css": "text/css",
    ".json": "application/json",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".gif": "image/gif",
    ".ico": "image/x-icon",
}
DEFAULT_MIME_TYPE = "text/plain"


class FsErrorKind(str, Enum):
    """Category of a failed filesystem operation."""

    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    NOT_A_DIRECTORY = "not_a_directory"
    IS_A_DIRECTORY = "is_a_directory"
    DECODE_ERROR = "decode_error"
    OS_ERROR = "os_error"


class FsOk(BaseModel, Generic[T]):
    """Successful filesystem operation.

    Attributes:
        value: The operation's payload (entries, text, bytes, or None).
    """

    ok: bool = True
    value: T


class FsError(BaseModel):
    """Failed filesystem operation.

    Attributes:
        kind: What went wrong.
        message: The native error message from the operating system or codec.
    """

    ok: bool = False
    kind: FsErrorKind
    message: str


# Not subscriptable; annotate with FsOk[...] | FsError
FsResult = Union[FsOk, FsError]


class DirectoryEntry(BaseModel):
    """One immediate child of a listed directory.

    Serialized with camelCase keys to match what the front-end expects.
    ``is_file`` and ``size`` are only filled in for the desktop shell.

    Attributes:
        name: Child name without any directory component.
        path: Listed directory joined with ``name``.
        is_directory: Whether the entry itself is a directory (symlinks are not followed).
        is_file: Whether the entry itself is a regular file (shell only).
        size: Size in bytes (shell only).
        modified: Last modification time, UTC.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    path: str
    is_directory: bool = Field(alias="isDirectory")
    is_file: bool | None = Field(default=None, alias="isFile")
    size: int | None = None
    modified: datetime

    def to_payload(self) -> dict:
        """Return the JSON-ready dict with camelCase keys and shell-only fields dropped when unset."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def classify_error(exc: Exception) -> FsErrorKind:
    """Map an exception raised by an OS or codec call to an ``FsErrorKind``."""
    if isinstance(exc, FileNotFoundError):
        return FsErrorKind.NOT_FOUND
    if isinstance(exc, PermissionError):
        return FsErrorKind.PERMISSION_DENIED
    if isinstance(exc, NotADirectoryError):
        return FsErrorKind.NOT_A_DIRECTORY
    if isinstance(exc, IsADirectoryError):
        return FsErrorKind.IS_A_DIRECTORY
    if isinstance(exc, UnicodeError):
        return FsErrorKind.DECODE_ERROR
    return FsErrorKind.OS_ERROR


def _failure(operation: str, target: str, exc: Exception) -> FsError:
    error = FsError(kind=classify_error(exc), message=str(exc))
    logger.warning("%s failed for %s (%s): %s", operation, target, error.kind.value, error.message)
    return error


def resolve_path(raw_path: str) -> str:
    """Turn a client-supplied path into the path handed to the OS.

    Relative paths stay relative to the server's working directory and
    ``..`` segments are not rejected.
    """
    return os.fspath(raw_path)


def replace_lone_surrogates(text: str) -> str:
    """Replace unpaired UTF-16 surrogates with U+FFFD so the text can be encoded as UTF-8.

    JSON bodies may carry escapes such as ``\\ud800`` that decode to a lone
    surrogate; properly paired surrogates are joined into one character.
    """
    return text.encode("utf-16", "surrogatepass").decode("utf-16", "replace")


def guess_mime_type(file_path: str | Path) -> str:
    """Return the Content-Type for a file based on its extension."""
    extension = os.path.splitext(os.fspath(file_path))[1].lower()
    return MIME_TYPES.get(extension, DEFAULT_MIME_TYPE)


class FileGateway:
    """Performs the filesystem operations exposed by the server.

    All methods are synchronous and block on the OS; async callers should
    run them through ``asyncio.to_thread``.

    Attributes:
        asset_root: Directory static assets are resolved against.
    """

    def __init__(self, asset_root: str | Path) -> None:
        self.asset_root = Path(asset_root)

    def list_directory(self, dir_path: str, include_file_details: bool = False) -> FsOk[list[DirectoryEntry]] | FsError:
        """List the immediate children of a directory.

        Each child is stat'ed for its modification time. If any stat fails
        (for example a dangling symlink) the whole listing fails.

        Args:
            dir_path: Directory to list.
            include_file_details: Also fill ``is_file`` and ``size`` (desktop shell shape).

        Returns:
            FsOk with entries in OS order, or FsError.
        """
        target = resolve_path(dir_path)
        entries: list[DirectoryEntry] = []

        try:
            with os.scandir(target) as iterator:
                for item in iterator:
                    child_path = os.path.normpath(os.path.join(target, item.name))
                    stats = os.stat(child_path)
                    details = {}
                    if include_file_details:
                        details = {
                            "is_file": item.is_file(follow_symlinks=False),
                            "size": stats.st_size,
                        }
                    entries.append(
                        DirectoryEntry(
                            name=item.name,
                            path=child_path,
                            is_directory=item.is_dir(follow_symlinks=False),
                            modified=datetime.fromtimestamp(stats.st_mtime, tz=timezone.utc),
                            **details,
                        )
                    )
        except (OSError, ValueError) as e:
            return _failure("list_directory", target, e)

        logger.debug("Listed %d entries in %s", len(entries), target)
        return FsOk(value=entries)

    def read_file(self, file_path: str) -> FsOk[str] | FsError:
        """Read a whole file as strict UTF-8 text, keeping line endings as stored."""
        target = resolve_path(file_path)
        try:
            with open(target, "r", encoding=TEXT_ENCODING, newline="") as f:
                content = f.read()
        except (OSError, ValueError) as e:
            return _failure("read_file", target, e)
        return FsOk(value=content)

    def write_file(self, file_path: str, content: str) -> FsOk[None] | FsError:
        """Create or truncate a file and write ``content`` as UTF-8."""
        return self._write(file_path, content, mode="w")

    def append_file(self, file_path: str, content: str) -> FsOk[None] | FsError:
        """Append ``content`` to a file, creating it if absent."""
        return self._write(file_path, content, mode="a")

    def _write(self, file_path: str, content: str, mode: str) -> FsOk[None] | FsError:
        target = resolve_path(file_path)
        operation = "write_file" if mode == "w" else "append_file"
        try:
            # Encode before opening so a failure never truncates the target
            data = replace_lone_surrogates(content).encode(TEXT_ENCODING)
            with open(target, mode + "b") as f:
                f.write(data)
        except (OSError, ValueError) as e:
            return _failure(operation, target, e)

        logger.info("%s: %d characters to %s", operation, len(content), target)
        return FsOk(value=None)

    def resolve_asset(self, asset_path: str) -> Path:
        """Resolve a URL path against the asset root.

        ``..`` segments are collapsed lexically, so they can climb out of
        the asset root.
        """
        relative = asset_path.lstrip("/")
        return Path(os.path.normpath(os.path.join(self.asset_root, relative)))

    def read_asset(self, asset_path: str) -> FsOk[bytes] | FsError:
        """Read a static asset's raw bytes."""
        target = self.resolve_asset(asset_path)
        try:
            data = target.read_bytes()
        except (OSError, ValueError) as e:
            return _failure("read_asset", str(target), e)
        return FsOk(value=data)
