"""IPC bridge exposing the file gateway to the desktop shell's renderer.

The renderer invokes a named channel with positional arguments and either
gets a payload back or has the invocation rejected. The contract of each
channel matches the HTTP API: same parameters, same success data, and
every gateway failure becomes an error for the caller.

Channels:
    read-directory(dir_path) -> list of entry dicts (with isFile and size)
    read-file(file_path) -> file content
    write-file(file_path, content) -> True
"""

import logging
from typing import Any, Callable

from models.filesystem import FileGateway, FsError


logger = logging.getLogger(__name__)

UNKNOWN_CHANNEL = "unknown_channel"
INVALID_ARGUMENT = "invalid_argument"


class IpcError(Exception):
    """Raised to reject an IPC invocation.

    Args:
        kind: Error category (an FsErrorKind value, or a bridge-level kind).
        message: Human-readable description.
    """

    def __init__(self, kind: str, message: str):
        self.kind = kind
        self.message = message
        super().__init__(message)

    @classmethod
    def from_fs_error(cls, error: FsError) -> "IpcError":
        """Build the rejection for a failed gateway operation, keeping its kind and message."""
        return cls(error.kind.value, error.message)


class IpcBridge:
    """Dispatches IPC channel invocations to a FileGateway.

    Attributes:
        gateway: The gateway performing filesystem work.
    """

    def __init__(self, gateway: FileGateway) -> None:
        self.gateway = gateway
        self._handlers: dict[str, Callable[..., Any]] = {
            "read-directory": self.read_directory,
            "read-file": self.read_file,
            "write-file": self.write_file,
        }

    @property
    def channels(self) -> list[str]:
        """Names of the registered channels."""
        return list(self._handlers)

    def handle(self, channel: str, *args: Any) -> Any:
        """Invoke a channel.

        Args:
            channel: Channel name.
            *args: Positional arguments sent by the renderer.

        Returns:
            The channel's payload.

        Raises:
            IpcError: If the channel is unknown or the operation fails.
        """
        handler = self._handlers.get(channel)
        if handler is None:
            raise IpcError(UNKNOWN_CHANNEL, f"No handler registered for '{channel}'")

        logger.debug("IPC %s %r", channel, args)
        return handler(*args)

    def read_directory(self, dir_path: str) -> list[dict]:
        """List a directory with the shell entry shape.

        Args:
            dir_path: Directory to list.

        Returns:
            Entry dicts with camelCase keys, including ``isFile`` and ``size``.

        Raises:
            IpcError: If the directory cannot be listed.
        """
        result = self.gateway.list_directory(dir_path, include_file_details=True)
        if isinstance(result, FsError):
            raise IpcError.from_fs_error(result)
        return [entry.to_payload() for entry in result.value]

    def read_file(self, file_path: str) -> str:
        """Read a whole text file.

        Raises:
            IpcError: If the file cannot be read or decoded.
        """
        result = self.gateway.read_file(file_path)
        if isinstance(result, FsError):
            raise IpcError.from_fs_error(result)
        return result.value

    def write_file(self, file_path: str, content: str) -> bool:
        """Create or overwrite a file.

        Args:
            file_path: File to write.
            content: Text to store.

        Returns:
            True once the file is written.

        Raises:
            IpcError: If ``content`` is not a string or the write fails.
        """
        if not isinstance(content, str):
            raise IpcError(INVALID_ARGUMENT, "content must be a string")

        result = self.gateway.write_file(file_path, content)
        if isinstance(result, FsError):
            raise IpcError.from_fs_error(result)
        return True
