from datetime import datetime, timezone

from versecast.core.errors import StoreError
from versecast.core.logging import logger
from versecast.schemas.track import TrackIndexRecord, TrackMetadata
from versecast.services.audio.indexer import Indexer
from versecast.services.playlist import PlaylistRegistry
from versecast.services.store.base import BlobStore, audio_key, index_key, put_json


def ingest_track(
    store: BlobStore,
    indexer: Indexer,
    filename: str,
    audio: bytes,
    content_type: str = "audio/mpeg",
) -> TrackIndexRecord:
    """
    Index and persist one track: audio bytes, then index record, then the
    playlist entry. A failure at any step raises StoreError before the
    playlist is touched, so it never lists a track without an index. If the
    index write fails on a re-upload, the previous audio is put back so the
    stored bytes still match the stored index.
    """
    result = indexer.build_index(audio)
    record = TrackIndexRecord(
        metadata=TrackMetadata(
            filename=filename,
            size=len(audio),
            duration=result.duration,
            uploadedAt=datetime.now(timezone.utc),
            contentType=content_type,
        ),
        timestampIndex=result.offsets,
    )

    previous = store.get(audio_key(filename))
    store.put(audio_key(filename), audio)
    try:
        put_json(store, index_key(filename), record.model_dump(mode="json"))
    except StoreError:
        if previous is not None:
            logger.warning("Index write failed for %s, restoring previous audio", filename)
            store.put(audio_key(filename), previous)
        raise
    PlaylistRegistry(store).append(record.metadata)

    logger.info(
        "Ingested %s: %d bytes, ~%ds, %d seek points",
        filename, len(audio), result.duration, result.seek_points,
    )
    return record
