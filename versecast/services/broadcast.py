import random
from typing import Optional

from versecast.services.playlist import PlaylistRegistry
from versecast.services.store.base import CURRENT_TRACK_KEY, BlobStore


class BroadcastState:
    """
    The station-wide "now playing" value.

    A single shared key, written by every served stream response and read by
    the now-playing endpoint. There is no per-listener isolation: the last
    writer wins, so with two listeners it names whichever track was served
    most recently. Clients that need their own track should read the
    ``X-Track-Filename`` header on the stream response instead.
    """

    def __init__(self, store: BlobStore):
        self.store = store

    def announce(self, filename: str) -> None:
        self.store.put(CURRENT_TRACK_KEY, filename.encode("utf-8"))

    def current(self) -> Optional[str]:
        raw = self.store.get(CURRENT_TRACK_KEY)
        if not raw:
            return None
        return raw.decode("utf-8", errors="replace")


def select_track(
    requested: Optional[str],
    registry: PlaylistRegistry,
    rng: Optional[random.Random] = None,
) -> str:
    """Use the requested filename as-is, or pick uniformly from the playlist."""
    if requested:
        return requested
    return registry.random_track(rng).filename
