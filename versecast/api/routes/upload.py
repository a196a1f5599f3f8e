import asyncio
import os

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from starlette.status import HTTP_201_CREATED

from versecast.api.deps import get_indexer, get_store, require_upload_token
from versecast.core.config import Settings, get_settings
from versecast.schemas.track import UploadOut
from versecast.services.audio.indexer import Indexer
from versecast.services.ingest import ingest_track
from versecast.services.store.base import BlobStore

router = APIRouter()


@router.post(
    "/upload",
    status_code=HTTP_201_CREATED,
    response_model=UploadOut,
    dependencies=[Depends(require_upload_token)],
)
async def upload_track(
    audio: UploadFile | None = File(None),
    store: BlobStore = Depends(get_store),
    indexer: Indexer = Depends(get_indexer),
    cfg: Settings = Depends(get_settings),
):
    if audio is None:
        raise HTTPException(400, "No file provided")

    # keys are flat; never let a client-supplied path leak into them
    filename = os.path.basename((audio.filename or "").replace("\\", "/"))
    if not filename:
        raise HTTPException(400, "No file provided")
    ext = os.path.splitext(filename)[1].lower()
    if ext not in [e.lower() for e in cfg.ALLOWED_EXTENSIONS]:
        raise HTTPException(400, "Unsupported file type")

    data = await audio.read()
    record = await asyncio.to_thread(
        ingest_track, store, indexer, filename, data, cfg.AUDIO_CONTENT_TYPE
    )
    return UploadOut(
        filename=filename,
        duration=record.metadata.duration,
        seekPoints=len(record.timestampIndex),
    )
