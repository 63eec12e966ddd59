"""Main entry point for the knowledge base file server.

This module creates and configures the FastAPI app that serves the editor
pages and the file API used by the markdown front-end.

To run the server:
    kb-server          # or: python main.py

Or directly with uvicorn (port and host then come from the command line):
    uvicorn main:app --port 3000
"""

import asyncio
import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.dependencies import initialize_file_gateway, shutdown_file_gateway
from api.exceptions import http_exception_handler, request_validation_handler
from api.middleware import CORSGuardMiddleware
from api.routes import assets as asset_routes
from api.routes import files as file_routes
from config import ServerConfig, get_config, setup_logging


logger = logging.getLogger(__name__)


def log_uncaught_exception(exc_type, exc_value, exc_traceback) -> None:
    """``sys.excepthook`` replacement that logs instead of printing and exiting."""
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return
    logger.error("Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback))


def log_unhandled_task_error(loop: asyncio.AbstractEventLoop, context: dict) -> None:
    """Event loop exception handler that logs failures from unawaited tasks."""
    exc = context.get("exception")
    logger.error("Unhandled asynchronous error: %s", context.get("message"), exc_info=exc)


def print_banner(config: ServerConfig) -> None:
    """Print the startup banner with usage hints."""
    print("\n🚀 Knowledge base server started!")
    print(f"📱 Open in your browser: http://localhost:{config.port}")
    print("💡 Usage:")
    print("   1. Enter your folder path at the top of the page")
    print("   2. Click 'Load' to browse the files")
    print("   3. Click a Markdown file to start editing")
    print("   4. Ctrl+S saves, Ctrl+P toggles preview")
    print("\nPress Ctrl+C to stop the server\n")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events.

    Startup installs the process-level error hooks and creates the shared
    FileGateway; shutdown undoes both.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to FastAPI to handle requests.
    """
    config = get_config()

    sys.excepthook = log_uncaught_exception
    asyncio.get_running_loop().set_exception_handler(log_unhandled_task_error)

    initialize_file_gateway(config)
    logger.info("Serving assets from %s", config.asset_root)
    print_banner(config)

    yield

    print("\nShutting down server...")
    shutdown_file_gateway()
    asyncio.get_running_loop().set_exception_handler(None)
    sys.excepthook = sys.__excepthook__
    print("Server closed")


app = FastAPI(
    title="Knowledge Base File Server",
    description="Directory browsing and text file editing API for the markdown knowledge base editor",
    version="0.1.0",
    lifespan=lifespan,
    # Every unmatched path is a static file, so the generated docs stay off
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

app.add_middleware(CORSGuardMiddleware)

app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)

# API routes first: the asset router ends with a catch-all path
app.include_router(file_routes.router)
app.include_router(asset_routes.router)


def run() -> None:
    """Start uvicorn with the configured host and port.

    uvicorn handles SIGINT/SIGTERM: it stops accepting connections, lets
    in-flight requests finish, runs the lifespan shutdown, and exits 0.
    """
    config = get_config()
    setup_logging(config)
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=logging.getLogger().getEffectiveLevel(),
        access_log=False,
    )


if __name__ == "__main__":
    run()
