import secrets
from functools import lru_cache

from fastapi import Depends, Header, HTTPException
from starlette.status import HTTP_401_UNAUTHORIZED

from versecast.core.config import Settings, get_settings, settings
from versecast.core.logging import logger
from versecast.services.audio.indexer import AssumedBitrateIndexer, Indexer
from versecast.services.store.base import BlobStore
from versecast.services.store.factory import build_store


@lru_cache
def _default_store() -> BlobStore:
    return build_store(settings)


def get_store() -> BlobStore:
    return _default_store()


def get_indexer(cfg: Settings = Depends(get_settings)) -> Indexer:
    return AssumedBitrateIndexer(cfg.ASSUMED_BITRATE_BPS)


def require_upload_token(
    authorization: str | None = Header(None),
    cfg: Settings = Depends(get_settings),
) -> None:
    expected = cfg.UPLOAD_SECRET
    if not expected:
        logger.warning("Upload rejected: UPLOAD_SECRET is not configured")
        raise HTTPException(HTTP_401_UNAUTHORIZED, "Unauthorized")
    if not authorization or not secrets.compare_digest(
        authorization.encode("utf-8"), f"Bearer {expected}".encode("utf-8")
    ):
        logger.warning("Upload rejected: bad or missing bearer token")
        raise HTTPException(HTTP_401_UNAUTHORIZED, "Unauthorized")
