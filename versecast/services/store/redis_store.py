from typing import List, Optional

from redis import Redis, RedisError

from versecast.core.errors import StoreError


class RedisBlobStore:
    def __init__(self, redis_conn: Redis, key_prefix: str = ""):
        self.redis = redis_conn
        self.key_prefix = key_prefix

    @classmethod
    def from_url(cls, url: str, key_prefix: str = "") -> "RedisBlobStore":
        return cls(Redis.from_url(url), key_prefix=key_prefix)

    def get(self, key: str) -> Optional[bytes]:
        try:
            return self.redis.get(self.key_prefix + key)
        except RedisError as exc:
            raise StoreError(f"Redis GET failed for {key!r}") from exc

    def put(self, key: str, value: bytes) -> None:
        try:
            self.redis.set(self.key_prefix + key, value)
        except RedisError as exc:
            raise StoreError(f"Redis SET failed for {key!r}") from exc

    def list(self, prefix: str = "") -> List[str]:
        pattern = _escape_glob(self.key_prefix + prefix) + "*"
        try:
            raw_keys = list(self.redis.scan_iter(match=pattern))
        except RedisError as exc:
            raise StoreError(f"Redis SCAN failed for prefix {prefix!r}") from exc
        n = len(self.key_prefix)
        return sorted(k.decode("utf-8")[n:] for k in raw_keys)


def _escape_glob(s: str) -> str:
    for ch in "\\*?[]":
        s = s.replace(ch, "\\" + ch)
    return s
