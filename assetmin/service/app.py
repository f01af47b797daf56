"""FastAPI application serving combined CSS and JavaScript bundles."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, List, Mapping, Sequence

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from ..config import AssetConfig, load_config
from ..errors import AssetError
from ..logging import get_logger
from ..models import AssetResponse, MediaKind
from ..server import AssetServer


class HealthResponse(BaseModel):
    status: str


class BundleInfo(BaseModel):
    name: str
    kind: str
    files: List[str]


def _default_config() -> AssetConfig:
    return load_config(Path.cwd())


def create_app(
    config: AssetConfig | None = None,
    server_factory: Callable[[AssetConfig], AssetServer] = AssetServer.from_config,
) -> FastAPI:
    """Create the FastAPI application exposing bundle endpoints."""

    settings = config or _default_config()
    server = server_factory(settings)
    logger = get_logger("service")

    app = FastAPI(title="assetmin", version="0.1.0")
    app.state.config = settings
    app.state.server = server

    async def get_server() -> AssetServer:
        return server

    async def _serve(
        asset_server: AssetServer,
        files: Sequence[str],
        kind: MediaKind,
        headers: Mapping[str, str],
    ) -> Response:
        def _run() -> AssetResponse:
            return asset_server.serve(files, kind, headers)

        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, _run)
        return Response(content=result.body, status_code=result.status, headers=result.headers)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/bundles", response_model=List[BundleInfo])
    async def list_bundles() -> List[BundleInfo]:
        return [
            BundleInfo(name=bundle.name, kind=bundle.kind.extension, files=bundle.files)
            for bundle in settings.bundles.values()
        ]

    @app.get("/bundles/{name}")
    async def serve_bundle(
        name: str,
        request: Request,
        asset_server: AssetServer = Depends(get_server),
    ) -> Response:
        bundle = settings.bundles.get(name)
        if bundle is None:
            raise HTTPException(status_code=404, detail=f"Unknown bundle: {name}")
        return await _serve(asset_server, settings.bundle_paths(name), bundle.kind, request.headers)

    @app.get("/css")
    async def serve_css(
        request: Request,
        f: List[str] = Query(..., description="Stylesheets relative to the asset root, in order."),
        asset_server: AssetServer = Depends(get_server),
    ) -> Response:
        files = _resolve_files(settings.assets_root, f)
        return await _serve(asset_server, files, MediaKind.STYLE, request.headers)

    @app.get("/js")
    async def serve_js(
        request: Request,
        f: List[str] = Query(..., description="Scripts relative to the asset root, in order."),
        asset_server: AssetServer = Depends(get_server),
    ) -> Response:
        files = _resolve_files(settings.assets_root, f)
        return await _serve(asset_server, files, MediaKind.SCRIPT, request.headers)

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(AssetError)
    async def asset_error_handler(_: Any, exc: AssetError) -> JSONResponse:
        logger.error("Bundle request failed: %s", exc)
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    return app


def _resolve_files(assets_root: Path, names: Sequence[str]) -> List[str]:
    """Map request paths onto files below ``assets_root``; others are not found."""
    root = assets_root.resolve()
    resolved: List[str] = []
    for name in names:
        candidate = (root / name.lstrip("/")).resolve()
        if not candidate.is_relative_to(root):
            raise FileNotFoundError(f"Asset not found: {name}")
        resolved.append(str(candidate))
    return resolved


def run_service(
    config: AssetConfig | None = None,
    *,
    host: str | None = None,
    port: int | None = None,
) -> None:  # pragma: no cover - integration path
    import uvicorn

    settings = config or _default_config()
    app = create_app(settings)
    uvicorn.run(app, host=host or settings.serve.host, port=port or settings.serve.port)
