import random
from datetime import datetime, timezone

import pytest

from versecast.core.errors import NoTracksAvailable, StoreError
from versecast.schemas.track import TrackMetadata
from versecast.services.audio.indexer import AssumedBitrateIndexer
from versecast.services.broadcast import BroadcastState, select_track
from versecast.services.ingest import ingest_track
from versecast.services.playlist import PlaylistRegistry
from versecast.services.store.base import REGISTRY_KEY, audio_key, get_json, index_key
from versecast.services.store.local import LocalBlobStore


def _meta(name, size=10):
    return TrackMetadata(filename=name, size=size, duration=0, uploadedAt=datetime.now(timezone.utc))


def test_local_store_roundtrip(store):
    assert store.get("missing") is None
    store.put("audio:a/b:c.mp3", b"xyz")
    store.put("audio-index:a/b:c.mp3", b"{}")
    assert store.get("audio:a/b:c.mp3") == b"xyz"
    assert store.list("audio:") == ["audio:a/b:c.mp3"]
    assert len(list(store.root.iterdir())) == 2


def test_corrupt_json_is_store_error(store):
    store.put(REGISTRY_KEY, b"{not json")
    with pytest.raises(StoreError):
        PlaylistRegistry(store).list()


def test_empty_registry(store):
    registry = PlaylistRegistry(store)
    assert registry.list() == []
    assert registry.load().updatedAt is None
    with pytest.raises(NoTracksAvailable):
        registry.random_track()


def test_append_is_idempotent_by_filename(store):
    registry = PlaylistRegistry(store)
    first = registry.append(_meta("a.mp3", size=1))
    registry.append(_meta("b.mp3"))
    second = registry.append(_meta("a.mp3", size=2))

    tracks = registry.list()
    assert [t.filename for t in tracks] == ["a.mp3", "b.mp3"]
    assert tracks[0].size == 2
    assert second.updatedAt >= first.updatedAt


def test_select_track(store):
    registry = PlaylistRegistry(store)
    assert select_track("given.mp3", registry) == "given.mp3"
    with pytest.raises(NoTracksAvailable):
        select_track(None, registry)

    for name in ("a.mp3", "b.mp3", "c.mp3"):
        registry.append(_meta(name))
    rng = random.Random(7)
    picks = {select_track(None, registry, rng) for _ in range(200)}
    assert picks == {"a.mp3", "b.mp3", "c.mp3"}


def test_broadcast_last_writer_wins(store):
    state = BroadcastState(store)
    assert state.current() is None
    state.announce("one.mp3")
    state.announce("two.mp3")
    assert state.current() == "two.mp3"
    assert BroadcastState(store).current() == "two.mp3"


def test_ingest_persists_audio_index_and_registry(store):
    record = ingest_track(store, AssumedBitrateIndexer(), "Psalms23.mp3", b"\x01" * 32_000)
    assert record.metadata.duration == 2
    stored = get_json(store, index_key("Psalms23.mp3"))
    assert stored["metadata"]["size"] == 32_000
    assert stored["timestampIndex"]["1"] == 16_000
    assert [t.filename for t in PlaylistRegistry(store).list()] == ["Psalms23.mp3"]


class _FailingIndexWrites(LocalBlobStore):
    fail_index = True

    def put(self, key, value):
        if self.fail_index and key.startswith("audio-index:"):
            raise StoreError("disk full")
        super().put(key, value)


def test_failed_index_write_leaves_registry_untouched(tmp_path):
    store = _FailingIndexWrites(tmp_path)
    with pytest.raises(StoreError):
        ingest_track(store, AssumedBitrateIndexer(), "x.mp3", b"\x00" * 1000)
    assert PlaylistRegistry(store).list() == []


def test_failed_index_write_on_reupload_restores_audio(tmp_path):
    store = _FailingIndexWrites(tmp_path)
    store.fail_index = False
    original = b"\x01" * 160_000
    ingest_track(store, AssumedBitrateIndexer(), "Psalms23.mp3", original)

    store.fail_index = True
    with pytest.raises(StoreError):
        ingest_track(store, AssumedBitrateIndexer(), "Psalms23.mp3", b"\x02" * 48_000)

    assert store.get(audio_key("Psalms23.mp3")) == original
    stored = get_json(store, index_key("Psalms23.mp3"))
    assert stored["metadata"]["size"] == len(original)
    assert [t.size for t in PlaylistRegistry(store).list()] == [len(original)]


class _FakeRedis:
    def __init__(self, fail=False):
        self.data = {}
        self.fail = fail

    def _check(self):
        if self.fail:
            from redis import ConnectionError
            raise ConnectionError("down")

    def get(self, key):
        self._check()
        return self.data.get(key)

    def set(self, key, value):
        self._check()
        self.data[key] = value

    def scan_iter(self, match):
        self._check()
        prefix = match.rstrip("*").replace("\\", "")
        return iter(k.encode() for k in self.data if k.startswith(prefix))


def test_redis_store_namespaces_keys():
    from versecast.services.store.redis_store import RedisBlobStore

    conn = _FakeRedis()
    store = RedisBlobStore(conn, key_prefix="vc:")
    store.put("audio:a.mp3", b"123")
    store.put("audio-metadata", b"{}")
    assert conn.data == {"vc:audio:a.mp3": b"123", "vc:audio-metadata": b"{}"}
    assert store.get("audio:a.mp3") == b"123"
    assert store.get("audio:b.mp3") is None
    assert store.list("audio:") == ["audio:a.mp3"]


def test_redis_errors_become_store_errors():
    from versecast.services.store.redis_store import RedisBlobStore

    store = RedisBlobStore(_FakeRedis(fail=True))
    with pytest.raises(StoreError):
        store.get("audio:a.mp3")
    with pytest.raises(StoreError):
        store.put("audio:a.mp3", b"")
