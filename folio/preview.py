"""folio.preview

Local preview server: FastAPI serving the built site.

Two read-only endpoints live under `/_folio/`; everything else is the static output.
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from folio import __version__
from folio.content.loader import load_site
from folio.core.config import Config
from folio.core.exceptions import ContentError, FolioError, TemplateError
from folio.render.index import render_index

PREFIX = "/_folio"

_STATUS_BY_ERROR: list[tuple[type[FolioError], int]] = [
    (ContentError, 422),
    (TemplateError, 422),
]


class HealthResponse(BaseModel):
    version: str
    uptime_seconds: float
    posts: int


class IndexEntryOut(BaseModel):
    date: str
    title: str
    url: str


async def folio_error_handler(request: Request, exc: FolioError) -> JSONResponse:
    status = next((code for cls, code in _STATUS_BY_ERROR if isinstance(exc, cls)), 500)
    body = {"error": {"code": type(exc).__name__, "message": str(exc)}}
    return JSONResponse(status_code=status, content=body)


def _config(request: Request) -> Config:
    return request.app.state.config


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health(request: Request) -> HealthResponse:
    started_at = float(getattr(request.app.state, "started_at", time.monotonic()))
    collection = load_site(_config(request))
    return HealthResponse(
        version=__version__,
        uptime_seconds=time.monotonic() - started_at,
        posts=len(collection.posts),
    )


@router.get("/index", response_model=list[IndexEntryOut])
def index(request: Request) -> list[IndexEntryOut]:
    collection = load_site(_config(request))
    return [IndexEntryOut(**e.as_dict()) for e in render_index(collection.posts)]


def create_app(config: Config) -> FastAPI:
    start = time.monotonic()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.started_at = start
        yield

    app = FastAPI(title="folio preview", docs_url=None, redoc_url=None, lifespan=lifespan)
    app.state.config = config
    app.state.started_at = start

    app.add_exception_handler(FolioError, folio_error_handler)
    app.include_router(router, prefix=PREFIX)

    # Mounted last so the `/_folio` routes win.
    app.mount("/", StaticFiles(directory=config.destination_dir, html=True, check_dir=False), name="site")
    return app
