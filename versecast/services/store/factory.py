from versecast.core.config import Settings
from versecast.core.logging import logger
from versecast.services.store.base import BlobStore
from versecast.services.store.local import LocalBlobStore
from versecast.services.store.redis_store import RedisBlobStore


def build_store(cfg: Settings) -> BlobStore:
    backend = cfg.STORAGE_BACKEND.lower()
    if backend == "local":
        logger.info("Using local blob store at %s", cfg.STORAGE_DIR)
        return LocalBlobStore(cfg.STORAGE_DIR)
    if backend == "redis":
        logger.info("Using redis blob store at %s", cfg.REDIS_URL)
        return RedisBlobStore.from_url(cfg.REDIS_URL, key_prefix=cfg.REDIS_KEY_PREFIX)
    raise ValueError(f"Unknown STORAGE_BACKEND: {cfg.STORAGE_BACKEND}")
