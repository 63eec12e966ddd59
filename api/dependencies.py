"""Dependency injection providers for the FastAPI application.

Route handlers get the shared FileGateway through ``FileGatewayDep``.
Tests swap it out with ``app.dependency_overrides[get_file_gateway]``.
"""

from typing import Annotated

from fastapi import Depends

from config import ServerConfig, get_config
from models.filesystem import FileGateway


_file_gateway: FileGateway | None = None


def get_file_gateway() -> FileGateway:
    """Get the shared FileGateway instance.

    Returns:
        The shared FileGateway instance.

    Raises:
        RuntimeError: If the gateway hasn't been initialized yet.
    """
    if _file_gateway is None:
        raise RuntimeError(
            "FileGateway not initialized. Call initialize_file_gateway() first."
        )

    return _file_gateway


def initialize_file_gateway(config: ServerConfig | None = None) -> FileGateway:
    """Create the shared FileGateway from the server configuration.

    Called once when the app starts up.

    Args:
        config: Configuration to use (defaults to ``get_config()``).

    Returns:
        The newly created FileGateway.
    """
    global _file_gateway

    cfg = config or get_config()
    _file_gateway = FileGateway(asset_root=cfg.asset_root)
    return _file_gateway


def shutdown_file_gateway() -> None:
    """Drop the shared FileGateway."""
    global _file_gateway
    _file_gateway = None


FileGatewayDep = Annotated[FileGateway, Depends(get_file_gateway)]
