"""File API endpoints (/api/*).

These endpoints let the editor front-end browse directories and read,
overwrite, or append to text files anywhere the server process can reach.
Filesystem calls run in a worker thread so a slow disk only stalls the
request that issued them.
"""

import asyncio
import json
import logging
from typing import Any

from fastapi import APIRouter, Query, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from api.dependencies import FileGatewayDep
from api.exceptions import API_ROUTE_NOT_FOUND, error_response
from api.models import FileContentResponse, FileOperationResponse, FileWriteRequest
from models.filesystem import FsError


logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["files"],
)

MISSING_PATH = "missing path parameter"
MISSING_FILE_PATH = "missing file path parameter"
MISSING_PATH_OR_CONTENT = "missing file path or content parameter"

FILE_SAVED = "file saved"
CONTENT_APPENDED = "content appended"


async def parse_json_body(request: Request) -> dict[str, Any]:
    """Parse the request body as a JSON object.

    Anything that is not a JSON object (empty body, malformed JSON, a bare
    array or scalar) is treated as an empty object, so handlers report the
    missing fields themselves.

    Args:
        request: The incoming request.

    Returns:
        The decoded object, or an empty dict.
    """
    raw = await request.body()
    try:
        payload = json.loads(raw)
    except ValueError:
        logger.debug("Ignoring malformed JSON body on %s", request.url.path)
        return {}
    return payload if isinstance(payload, dict) else {}


def operation_failed(action: str, error: FsError) -> JSONResponse:
    """Build the 500 response for a failed filesystem operation."""
    return error_response(
        f"failed to {action}: {error.message}",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


# Route Handlers


@router.get("/read-directory")
async def read_directory(gateway: FileGatewayDep, path: str | None = Query(None)):
    """List the immediate children of a directory.

    Args:
        gateway: The FileGateway instance (injected by FastAPI).
        path: Directory to list.

    Returns:
        JSON array of directory entries, in the order the OS yields them.
    """
    if not path:
        return error_response(MISSING_PATH, status.HTTP_400_BAD_REQUEST)

    result = await asyncio.to_thread(gateway.list_directory, path)
    if isinstance(result, FsError):
        return operation_failed("read directory", result)

    return JSONResponse(content=[entry.to_payload() for entry in result.value])


@router.get("/read-file")
async def read_file(gateway: FileGatewayDep, path: str | None = Query(None)):
    """Read a whole text file.

    Args:
        gateway: The FileGateway instance (injected by FastAPI).
        path: File to read.

    Returns:
        The file content wrapped in ``{"content": ...}``.
    """
    if not path:
        return error_response(MISSING_FILE_PATH, status.HTTP_400_BAD_REQUEST)

    result = await asyncio.to_thread(gateway.read_file, path)
    if isinstance(result, FsError):
        return operation_failed("read file", result)

    return FileContentResponse(content=result.value)


@router.post("/write-file")
async def write_file(request: Request, gateway: FileGatewayDep):
    """Create or overwrite a file with the given content.

    Args:
        request: The incoming request; its body must be ``{"path", "content"}``.
        gateway: The FileGateway instance (injected by FastAPI).

    Returns:
        Confirmation of the save.
    """
    body = await _read_write_request(request)
    if body is None:
        return error_response(MISSING_PATH_OR_CONTENT, status.HTTP_400_BAD_REQUEST)

    result = await asyncio.to_thread(gateway.write_file, body.path, body.content)
    if isinstance(result, FsError):
        return operation_failed("write file", result)

    return FileOperationResponse(message=FILE_SAVED)


@router.post("/append-file")
async def append_file(request: Request, gateway: FileGatewayDep):
    """Append content to the end of a file, creating it if needed.

    Args:
        request: The incoming request; its body must be ``{"path", "content"}``.
        gateway: The FileGateway instance (injected by FastAPI).

    Returns:
        Confirmation of the append.
    """
    body = await _read_write_request(request)
    if body is None:
        return error_response(MISSING_PATH_OR_CONTENT, status.HTTP_400_BAD_REQUEST)

    result = await asyncio.to_thread(gateway.append_file, body.path, body.content)
    if isinstance(result, FsError):
        return operation_failed("append file", result)

    return FileOperationResponse(message=CONTENT_APPENDED)


@router.api_route(
    "/{api_path:path}",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def api_route_not_found(api_path: str):
    """Answer any other /api/* request, including known paths with the wrong method."""
    return error_response(API_ROUTE_NOT_FOUND, status.HTTP_404_NOT_FOUND)


async def _read_write_request(request: Request) -> FileWriteRequest | None:
    payload = await parse_json_body(request)
    try:
        return FileWriteRequest.model_validate(payload)
    except ValidationError:
        return None
