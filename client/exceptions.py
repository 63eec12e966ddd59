"""Exception hierarchy for the knowledge base API client.

Exception Hierarchy:
    KnowledgeBaseClientError (base)
    ├── ConnectionError - Network/connection failures
    ├── TimeoutError - Request timeout
    └── APIError - Server returned an error response
        ├── ValidationError (HTTP 400)
        ├── NotFoundError (HTTP 404)
        └── ServerError (HTTP 5xx)

Example:
    Catching specific errors::

        try:
            client.files.read_file("/notes/missing.md")
        except ServerError as e:
            print(f"Read failed: {e.message}")
        except ValidationError:
            print("A path is required")
"""

from typing import Any


class KnowledgeBaseClientError(Exception):
    """Base exception for all client errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ConnectionError(KnowledgeBaseClientError):
    """Failed to connect to the server.

    Attributes:
        message: Human-readable error description.
        url: The URL that failed to connect.
        cause: The underlying exception that caused the connection failure.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.url = url
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.url:
            return f"{self.message} (url: {self.url})"
        return self.message


class TimeoutError(KnowledgeBaseClientError):
    """Request timed out.

    Attributes:
        message: Human-readable error description.
        timeout: The timeout value in seconds.
        url: The URL that timed out.
    """

    def __init__(
        self,
        message: str,
        timeout: float | None = None,
        url: str | None = None,
    ) -> None:
        self.timeout = timeout
        self.url = url
        super().__init__(message)

    def __str__(self) -> str:
        parts = []
        if self.timeout is not None:
            parts.append(f"timeout: {self.timeout}s")
        if self.url:
            parts.append(f"url: {self.url}")
        if not parts:
            return self.message
        return f"{self.message} ({', '.join(parts)})"


class APIError(KnowledgeBaseClientError):
    """Server returned an error response.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code from the server.
        error_type: Error category assigned by the client (if any).
        response_body: Raw response body for debugging.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        error_type: str | None = None,
        response_body: Any = None,
    ) -> None:
        self.status_code = status_code
        self.error_type = error_type
        self.response_body = response_body
        super().__init__(message)

    def __str__(self) -> str:
        if self.error_type:
            return f"[HTTP {self.status_code}] [{self.error_type}] {self.message}"
        return f"[HTTP {self.status_code}] {self.message}"


class ValidationError(APIError):
    """A required parameter or body field was missing (HTTP 400)."""

    def __init__(self, message: str, response_body: Any = None) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_type="validation_error",
            response_body=response_body,
        )


class NotFoundError(APIError):
    """Unknown API route or missing asset (HTTP 404)."""

    def __init__(self, message: str, response_body: Any = None) -> None:
        super().__init__(
            message=message,
            status_code=404,
            error_type="not_found",
            response_body=response_body,
        )


class ServerError(APIError):
    """Server-side error (HTTP 5xx).

    The file API reports every filesystem failure (missing file, permission
    denied, invalid UTF-8) this way, with the native error message.
    """

    def __init__(self, message: str, status_code: int = 500, response_body: Any = None) -> None:
        super().__init__(
            message=message,
            status_code=status_code,
            error_type="server_error",
            response_body=response_body,
        )
