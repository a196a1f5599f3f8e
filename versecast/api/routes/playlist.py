import asyncio

from fastapi import APIRouter, Depends, HTTPException

from versecast.api.deps import get_store
from versecast.schemas.track import NowPlayingOut, PlaylistOut, TrackIndexRecord, TrackInfoOut
from versecast.services.audio.verse import DEFAULT_BOOK, extract_verse_info
from versecast.services.broadcast import BroadcastState
from versecast.services.playlist import PlaylistRegistry
from versecast.services.store.base import BlobStore, get_json, index_key

router = APIRouter()

NOTHING_PLAYING = NowPlayingOut(song="No song playing", verse="", book=DEFAULT_BOOK)


@router.get("/playlist", response_model=PlaylistOut)
async def get_playlist(store: BlobStore = Depends(get_store)):
    return await asyncio.to_thread(PlaylistRegistry(store).load)


@router.get("/now-playing", response_model=NowPlayingOut)
async def now_playing(store: BlobStore = Depends(get_store)):
    current = await asyncio.to_thread(BroadcastState(store).current)
    if current is None:
        return NOTHING_PLAYING
    info = extract_verse_info(current)
    return NowPlayingOut(song=info.title, verse=info.verse, book=info.book)


@router.get("/metadata/{filename}", response_model=TrackInfoOut)
async def track_metadata(filename: str, store: BlobStore = Depends(get_store)):
    data = await asyncio.to_thread(get_json, store, index_key(filename))
    if data is None:
        raise HTTPException(404, "Metadata not found")
    record = TrackIndexRecord.model_validate(data)
    return TrackInfoOut(
        **record.metadata.model_dump(),
        seekable=True,
        timestampIndex=len(record.timestampIndex),
    )
