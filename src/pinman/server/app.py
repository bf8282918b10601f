# Author: PB
# Maintainer: PB
# Original date: 2026.10.19
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/pinman/server/app.py

"""
HTTP surface of pinman.

Endpoints are plain `def` functions, so FastAPI runs each request on its
worker thread pool. Nothing here holds state between requests; every
endpoint receives the path it operates on.
"""

import threading
import webbrowser
from pathlib import Path

import loguru
import uvicorn
from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import HTMLResponse, Response
from pydantic import BaseModel
from rich.console import Console

from pinman.config.manager import UserConfig
from pinman.core import operations
from pinman.core.operations import DirectoryListing, MutationResult
from pinman.system.exceptions import (
    FileServiceError,
    InvalidNameError,
    NotADirectoryPathError,
    PathNotFoundError,
    TargetExistsError,
)

logger = loguru.logger

_STATIC_DIR = Path(__file__).parent / "static"
_INDEX_HTML = _STATIC_DIR / "index.html"


class RenameRequest(BaseModel):
    old_path: str
    new_name: str


def _http_error(error: FileServiceError) -> HTTPException:
    """Map a file service error onto the status code the page expects."""
    if isinstance(error, PathNotFoundError):
        status_code = 404
    elif isinstance(error, (NotADirectoryPathError, InvalidNameError)):
        status_code = 400
    elif isinstance(error, TargetExistsError):
        status_code = 409
    else:
        status_code = 500
    return HTTPException(status_code=status_code, detail=str(error))


def create_app(config: UserConfig | None = None) -> FastAPI:
    """Build the FastAPI application for the given settings."""
    config = config or UserConfig()
    image_extensions = frozenset(config.image_extensions)

    app = FastAPI(title="pinman", docs_url=None, redoc_url=None)

    @app.get("/", response_class=HTMLResponse)
    def root() -> HTMLResponse:
        return HTMLResponse(_INDEX_HTML.read_text(encoding="utf-8"))

    @app.get("/api/list", response_model=DirectoryListing)
    def list_directory(path: str = Query(...)) -> DirectoryListing:
        try:
            return operations.list_directory(Path(path), image_extensions)
        except FileServiceError as error:
            raise _http_error(error) from error

    @app.get("/image/{file_path:path}")
    def serve_image(file_path: str) -> Response:
        try:
            target = operations.resolve_file(Path(file_path))
            content = target.read_bytes()
        except FileServiceError as error:
            raise _http_error(error) from error
        except OSError as error:
            logger.error(f"Cannot read {file_path}: {error}")
            raise HTTPException(status_code=500, detail=str(error)) from error

        return Response(content=content, media_type=operations.content_type_for(target))

    @app.post("/api/delete", response_model=MutationResult)
    def delete_file(path: str = Query(...)) -> MutationResult:
        try:
            return operations.delete_file(Path(path))
        except FileServiceError as error:
            raise _http_error(error) from error

    @app.post("/api/rename", response_model=MutationResult)
    def rename_file(request: RenameRequest) -> MutationResult:
        try:
            return operations.rename_file(Path(request.old_path), request.new_name)
        except FileServiceError as error:
            raise _http_error(error) from error

    return app


def _print_banner(console: Console, config: UserConfig) -> None:
    console.print("[bold green]pinman server started[/bold green]")
    console.print(f"Server running at: [link={config.url}]{config.url}[/link]")
    console.print("Backups are saved to [bold].safety_net[/bold] folders next to the files")
    console.print("[dim]Press Ctrl+C to stop the server[/dim]\n")


def _open_browser(url: str) -> None:
    try:
        webbrowser.open(url)
    except Exception as error:  # pragma: no cover - best effort
        logger.warning(f"Unable to open browser at {url}: {error}")


def run_server(config: UserConfig, console: Console, open_browser: bool = True) -> None:
    """Serve the app with uvicorn until interrupted."""
    app = create_app(config)

    _print_banner(console, config)
    if open_browser:
        threading.Timer(0.5, _open_browser, args=(config.url,)).start()

    logger.debug(f"Starting uvicorn on {config.host}:{config.port}")
    server = uvicorn.Server(uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_config=None,
    ))
    server.run()
