"""Request and response models for the file API endpoints.

Field names follow the JSON the front-end already speaks, so these models
are dumped as-is without aliasing (except DirectoryEntry, which lives in
``models.filesystem`` and carries its own camelCase aliases).
"""

from pydantic import BaseModel, Field


class FileWriteRequest(BaseModel):
    """Body of write-file and append-file requests.

    ``content`` may be an empty string, but it must be present and not null.

    Attributes:
        path: Target file path (absolute or relative to the server's working directory).
        content: Text to write or append.
    """

    path: str = Field(..., min_length=1)
    content: str


class FileContentResponse(BaseModel):
    """Response for read-file.

    Attributes:
        content: Entire file content as text.
    """

    content: str


class FileOperationResponse(BaseModel):
    """Response for successful write-file and append-file calls.

    Attributes:
        success: Always True for this response.
        message: Human-readable confirmation.
    """

    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """Error body for every JSON error response.

    Attributes:
        error: Human-readable error message.
    """

    error: str
