from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from versecast.core.config import settings
from versecast.core.errors import NoTracksAvailable, RangeNotSatisfiable, StoreError, TrackNotFound
from versecast.core.logging import logger, setup_logging
from versecast.api.routes.stream import router as stream_router
from versecast.api.routes.playlist import router as playlist_router
from versecast.api.routes.upload import router as upload_router

setup_logging()

app = FastAPI(title="Versecast scripture radio")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["Authorization", "Range"],
    expose_headers=["Content-Range", "Accept-Ranges", "Content-Length", "X-Track-Filename"],
)

app.include_router(stream_router, tags=["stream"])
app.include_router(playlist_router, tags=["playlist"])
app.include_router(upload_router, tags=["upload"])


@app.exception_handler(TrackNotFound)
@app.exception_handler(NoTracksAvailable)
async def not_found_handler(request: Request, exc: Exception):
    return PlainTextResponse(str(exc), status_code=404)


@app.exception_handler(RangeNotSatisfiable)
async def range_handler(request: Request, exc: RangeNotSatisfiable):
    logger.warning("416 for %s: %s", request.url.path, exc)
    return PlainTextResponse(
        "Range Not Satisfiable",
        status_code=416,
        headers={"Content-Range": f"bytes */{exc.total}", "Accept-Ranges": "bytes"},
    )


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse({"detail": "Storage backend failure"}, status_code=500)


@app.get("/health")
def health():
    return {"status": "ok", "env": settings.APP_ENV, "storage": settings.STORAGE_BACKEND}
