"""Static asset endpoints.

Serves the three editor pages under friendly paths and any other path as
a file relative to the asset root. This router must be registered after
the API router because its last route matches everything.
"""

import asyncio

from fastapi import APIRouter, Response, status
from fastapi.responses import PlainTextResponse

from api.dependencies import FileGatewayDep
from models.filesystem import FileGateway, FsError, guess_mime_type


router = APIRouter(tags=["assets"])

PRIMARY_ASSET = "enhanced.html"
BASIC_ASSET = "web.html"
PROJECT_MANAGER_ASSET = "project-manager.html"

ASSET_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"]


async def send_asset(gateway: FileGateway, asset_path: str) -> Response:
    """Send a file from the asset root with a Content-Type inferred from its extension.

    Any failure to read the file is reported as 404 with a plain-text body.
    """
    result = await asyncio.to_thread(gateway.read_asset, asset_path)
    if isinstance(result, FsError):
        return PlainTextResponse("File not found", status_code=status.HTTP_404_NOT_FOUND)

    return Response(
        content=result.value,
        headers={"Content-Type": guess_mime_type(asset_path)},
    )


@router.api_route("/", methods=ASSET_METHODS, include_in_schema=False)
@router.api_route("/index.html", methods=ASSET_METHODS, include_in_schema=False)
async def primary_editor(gateway: FileGatewayDep):
    """Serve the primary markdown editor page."""
    return await send_asset(gateway, PRIMARY_ASSET)


@router.api_route("/basic", methods=ASSET_METHODS, include_in_schema=False)
async def basic_editor(gateway: FileGatewayDep):
    """Serve the basic editor page."""
    return await send_asset(gateway, BASIC_ASSET)


@router.api_route("/projects", methods=ASSET_METHODS, include_in_schema=False)
@router.api_route("/project-manager", methods=ASSET_METHODS, include_in_schema=False)
async def project_manager(gateway: FileGatewayDep):
    """Serve the project manager page."""
    return await send_asset(gateway, PROJECT_MANAGER_ASSET)


@router.api_route("/{asset_path:path}", methods=ASSET_METHODS, include_in_schema=False)
async def static_asset(asset_path: str, gateway: FileGatewayDep):
    """Serve any other path as a file under the asset root."""
    return await send_asset(gateway, asset_path)
