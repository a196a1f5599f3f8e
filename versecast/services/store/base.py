import json
from typing import Any, List, Optional, Protocol

from versecast.core.errors import StoreError

AUDIO_PREFIX = "audio:"
INDEX_PREFIX = "audio-index:"
REGISTRY_KEY = "audio-metadata"
CURRENT_TRACK_KEY = "__current_song"


def audio_key(filename: str) -> str:
    return f"{AUDIO_PREFIX}{filename}"


def index_key(filename: str) -> str:
    return f"{INDEX_PREFIX}{filename}"


class BlobStore(Protocol):
    """Key -> bytes storage with atomic per-key put/get."""

    def get(self, key: str) -> Optional[bytes]: ...

    def put(self, key: str, value: bytes) -> None: ...

    def list(self, prefix: str = "") -> List[str]: ...


def get_json(store: BlobStore, key: str) -> Optional[Any]:
    raw = store.get(key)
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise StoreError(f"Corrupt JSON under key {key!r}") from exc


def put_json(store: BlobStore, key: str, value: Any) -> None:
    store.put(key, json.dumps(value, separators=(",", ":")).encode("utf-8"))
