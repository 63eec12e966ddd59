"""File operations sub-client for the knowledge base API.

This module provides FilesClient and AsyncFilesClient for the /api/*
endpoints.

This is an internal module. Import from `client` instead.
"""

from client._base import AsyncBaseClient, BaseClient
from client.models import DirectoryEntry, FileContentResponse, FileOperationResponse


class FilesClient(BaseClient):
    """Synchronous client for the file endpoints (/api/*).

    Example:
        with KnowledgeBaseClient() as client:
            for entry in client.files.list_directory("/home/me/notes"):
                print(entry.name, entry.is_directory)

            text = client.files.read_file("/home/me/notes/todo.md")
            client.files.append_file("/home/me/notes/todo.md", "\\n- new item")
    """

    _BASE_PATH = "/api"

    def list_directory(self, path: str) -> list[DirectoryEntry]:
        """List the immediate children of a directory.

        Args:
            path: Directory to list on the server's filesystem.

        Returns:
            Entries in the order the server's OS returned them.

        Raises:
            ValidationError: If path is empty.
            ServerError: If the directory cannot be read.
        """
        data = self._get(f"{self._BASE_PATH}/read-directory", params={"path": path})
        return [DirectoryEntry.model_validate(item) for item in data]

    def read_file(self, path: str) -> str:
        """Read a whole text file.

        Raises:
            ValidationError: If path is empty.
            ServerError: If the file cannot be read or decoded.
        """
        data = self._get(f"{self._BASE_PATH}/read-file", params={"path": path})
        return FileContentResponse.model_validate(data).content

    def write_file(self, path: str, content: str) -> FileOperationResponse:
        """Create or overwrite a file.

        Raises:
            ValidationError: If path is empty.
            ServerError: If the file cannot be written.
        """
        data = self._post(f"{self._BASE_PATH}/write-file", json={"path": path, "content": content})
        return FileOperationResponse.model_validate(data)

    def append_file(self, path: str, content: str) -> FileOperationResponse:
        """Append to a file, creating it if needed.

        Raises:
            ValidationError: If path is empty.
            ServerError: If the file cannot be written.
        """
        data = self._post(f"{self._BASE_PATH}/append-file", json={"path": path, "content": content})
        return FileOperationResponse.model_validate(data)


class AsyncFilesClient(AsyncBaseClient):
    """Asynchronous client for the file endpoints (/api/*).

    Same methods as FilesClient, awaited.
    """

    _BASE_PATH = "/api"

    async def list_directory(self, path: str) -> list[DirectoryEntry]:
        data = await self._get(f"{self._BASE_PATH}/read-directory", params={"path": path})
        return [DirectoryEntry.model_validate(item) for item in data]

    async def read_file(self, path: str) -> str:
        data = await self._get(f"{self._BASE_PATH}/read-file", params={"path": path})
        return FileContentResponse.model_validate(data).content

    async def write_file(self, path: str, content: str) -> FileOperationResponse:
        data = await self._post(f"{self._BASE_PATH}/write-file", json={"path": path, "content": content})
        return FileOperationResponse.model_validate(data)

    async def append_file(self, path: str, content: str) -> FileOperationResponse:
        data = await self._post(f"{self._BASE_PATH}/append-file", json={"path": path, "content": content})
        return FileOperationResponse.model_validate(data)
