import asyncio
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, Header, Query, Response

from versecast.api.deps import get_store
from versecast.core.config import Settings, get_settings
from versecast.core.errors import TrackNotFound
from versecast.core.logging import logger
from versecast.schemas.track import TrackIndexRecord
from versecast.services.audio.seek import ByteWindow, resolve_range
from versecast.services.broadcast import BroadcastState, select_track
from versecast.services.playlist import PlaylistRegistry
from versecast.services.store.base import BlobStore, audio_key, get_json, index_key

router = APIRouter()


def _load_index(store: BlobStore, filename: str) -> Optional[TrackIndexRecord]:
    data = get_json(store, index_key(filename))
    if data is None:
        return None
    return TrackIndexRecord.model_validate(data)


def _serve(
    store: BlobStore,
    requested: Optional[str],
    seek: Optional[str],
    range_header: Optional[str],
) -> tuple[str, bytes, ByteWindow, Optional[TrackIndexRecord]]:
    filename = select_track(requested, PlaylistRegistry(store))
    audio = store.get(audio_key(filename))
    if audio is None:
        raise TrackNotFound(filename)

    record = _load_index(store, filename)
    if record is not None and record.metadata.size != len(audio):
        # index was built for other bytes under the same name
        logger.warning(
            "Ignoring stale index for %s (indexed %d bytes, stored %d)",
            filename, record.metadata.size, len(audio),
        )
        record = None
    index = record.timestampIndex if record else None
    window = resolve_range(len(audio), index, seek, range_header)
    logger.debug(
        "stream %s t=%s range=%s -> %s (partial=%s)",
        filename, seek, range_header, window.content_range, window.partial,
    )

    BroadcastState(store).announce(filename)
    return filename, audio, window, record


@router.get("/stream")
@router.get("/stream/{filename}")
async def stream_audio(
    filename: Optional[str] = None,
    t: Optional[str] = Query(None, description="Seek position in seconds"),
    range_header: Optional[str] = Header(None, alias="range"),
    store: BlobStore = Depends(get_store),
    cfg: Settings = Depends(get_settings),
):
    filename, audio, window, record = await asyncio.to_thread(
        _serve, store, filename, t, range_header
    )
    content_type = record.metadata.contentType if record else cfg.AUDIO_CONTENT_TYPE
    headers = {
        "Accept-Ranges": "bytes",
        "Cache-Control": f"public, max-age={cfg.CACHE_MAX_AGE}",
        "X-Track-Filename": quote(filename, safe=""),
    }
    if window.partial:
        headers["Content-Range"] = window.content_range
        return Response(
            audio[window.start:window.end + 1],
            status_code=206,
            headers=headers,
            media_type=content_type,
        )
    return Response(audio, status_code=200, headers=headers, media_type=content_type)
