import random
from datetime import datetime, timezone
from typing import List, Optional

from versecast.core.errors import NoTracksAvailable
from versecast.schemas.track import PlaylistOut, TrackMetadata
from versecast.services.store.base import REGISTRY_KEY, BlobStore, get_json, put_json


class PlaylistRegistry:
    """Insertion-ordered track list persisted as one JSON document."""

    def __init__(self, store: BlobStore):
        self.store = store

    def load(self) -> PlaylistOut:
        data = get_json(self.store, REGISTRY_KEY)
        if not data:
            return PlaylistOut()
        return PlaylistOut.model_validate(data)

    def list(self) -> List[TrackMetadata]:
        return self.load().tracks

    def append(self, metadata: TrackMetadata) -> PlaylistOut:
        # read-modify-write; concurrent appends are last-writer-wins
        playlist = self.load()
        for i, existing in enumerate(playlist.tracks):
            if existing.filename == metadata.filename:
                playlist.tracks[i] = metadata
                break
        else:
            playlist.tracks.append(metadata)
        playlist.updatedAt = datetime.now(timezone.utc)
        put_json(self.store, REGISTRY_KEY, playlist.model_dump(mode="json"))
        return playlist

    def random_track(self, rng: Optional[random.Random] = None) -> TrackMetadata:
        tracks = self.list()
        if not tracks:
            raise NoTracksAvailable()
        return (rng or random).choice(tracks)
