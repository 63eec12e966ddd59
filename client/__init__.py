"""Knowledge base API client library.

A typed Python client for the file server's /api/* endpoints, in
synchronous and asynchronous flavours.

Example:
    Synchronous usage::

        from client import KnowledgeBaseClient

        with KnowledgeBaseClient(base_url="http://localhost:3000") as client:
            entries = client.files.list_directory("/home/me/notes")

    Asynchronous usage::

        from client import AsyncKnowledgeBaseClient

        async with AsyncKnowledgeBaseClient() as client:
            text = await client.files.read_file("/home/me/notes/index.md")

Exports:
    KnowledgeBaseClient: Synchronous client.
    AsyncKnowledgeBaseClient: Asynchronous client.

    Exceptions:
        KnowledgeBaseClientError: Base exception for all client errors.
        ConnectionError: Failed to connect to the server.
        TimeoutError: Request timed out.
        APIError: Server returned an error response.
        ValidationError: Missing parameter or body field (HTTP 400).
        NotFoundError: Unknown route or missing asset (HTTP 404).
        ServerError: Filesystem or internal error (HTTP 5xx).
"""

from client._files import AsyncFilesClient, FilesClient
from client.client import AsyncKnowledgeBaseClient, KnowledgeBaseClient
from client.exceptions import (
    APIError,
    ConnectionError,
    KnowledgeBaseClientError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
)
from client.models import (
    DirectoryEntry,
    ErrorResponse,
    FileContentResponse,
    FileOperationResponse,
)

__all__ = [
    # Main clients
    "KnowledgeBaseClient",
    "AsyncKnowledgeBaseClient",
    # Sub-clients
    "FilesClient",
    "AsyncFilesClient",
    # Models
    "DirectoryEntry",
    "ErrorResponse",
    "FileContentResponse",
    "FileOperationResponse",
    # Exceptions
    "KnowledgeBaseClientError",
    "ConnectionError",
    "TimeoutError",
    "APIError",
    "ValidationError",
    "NotFoundError",
    "ServerError",
]
