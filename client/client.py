"""Main knowledge base client classes.

This module provides the entry points for talking to the file server:
- KnowledgeBaseClient: Synchronous client
- AsyncKnowledgeBaseClient: Asynchronous client

Example:
    Synchronous usage::

        from client import KnowledgeBaseClient

        with KnowledgeBaseClient(base_url="http://localhost:3000") as client:
            client.files.write_file("/tmp/note.md", "# Title\\n")
            print(client.files.read_file("/tmp/note.md"))

    Asynchronous usage::

        from client import AsyncKnowledgeBaseClient

        async with AsyncKnowledgeBaseClient() as client:
            entries = await client.files.list_directory("/tmp")
"""

from typing import Any

from client._files import AsyncFilesClient, FilesClient
from client._http import AsyncHTTPClient, HTTPClient


DEFAULT_BASE_URL = "http://localhost:3000"


class KnowledgeBaseClient:
    """Synchronous client for the knowledge base file server.

    Attributes:
        base_url: The base URL of the server.
        timeout: Request timeout in seconds.
        retry_enabled: Whether automatic retry is enabled.
        max_retries: Maximum number of retry attempts.

    Example:
        client = KnowledgeBaseClient()
        try:
            client.files.append_file("/tmp/log.md", "entry\\n")
        finally:
            client.close()
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: Any = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: The base URL of the server (default: http://localhost:3000).
            timeout: Request timeout in seconds (default: 30.0).
            retry_enabled: Whether to retry connection errors, timeouts, and
                HTTP 502/503/504 with exponential backoff (default: False).
            max_retries: Maximum number of retry attempts (default: 3).
            transport: Custom HTTP transport (e.g., MockTransport for testing).
        """
        self._http = HTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )
        self._files: FilesClient | None = None

    @property
    def base_url(self) -> str:
        return self._http.base_url

    @property
    def timeout(self) -> float:
        return self._http.timeout

    @property
    def retry_enabled(self) -> bool:
        return self._http.retry_enabled

    @property
    def max_retries(self) -> int:
        return self._http.max_retries

    def __enter__(self) -> "KnowledgeBaseClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the client and release resources."""
        self._http.close()

    @property
    def files(self) -> FilesClient:
        """Access the file endpoints (/api/*).

        Returns:
            FilesClient instance for directory and file operations.
        """
        if self._files is None:
            self._files = FilesClient(self._http)
        return self._files


class AsyncKnowledgeBaseClient:
    """Asynchronous client for the knowledge base file server.

    Same constructor arguments as KnowledgeBaseClient; use ``async with``.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: Any = None,
    ) -> None:
        self._http = AsyncHTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )
        self._files: AsyncFilesClient | None = None

    @property
    def base_url(self) -> str:
        return self._http.base_url

    async def __aenter__(self) -> "AsyncKnowledgeBaseClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._http.close()

    @property
    def files(self) -> AsyncFilesClient:
        """Access the file endpoints (/api/*)."""
        if self._files is None:
            self._files = AsyncFilesClient(self._http)
        return self._files
