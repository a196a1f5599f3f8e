import os
import tempfile
from pathlib import Path
from typing import List, Optional
from urllib.parse import quote, unquote

from versecast.core.errors import StoreError


class LocalBlobStore:
    """
    Filesystem-backed store: one file per key under ``root``.

    Keys are percent-encoded into flat file names, so keys containing ``/``
    or ``:`` never escape the root directory. Writes go to a temp file in the
    same directory and are swapped in with ``os.replace``.
    """

    def __init__(self, root: str | os.PathLike):
        self.root = Path(root)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StoreError(f"Cannot create storage dir {self.root}") from exc

    def _path(self, key: str) -> Path:
        return self.root / quote(key, safe="")

    def get(self, key: str) -> Optional[bytes]:
        try:
            return self._path(key).read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StoreError(f"Failed to read key {key!r}") from exc

    def put(self, key: str, value: bytes) -> None:
        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile(dir=self.root, prefix=".tmp-", delete=False) as tmp:
                tmp_path = tmp.name
                tmp.write(value)
            os.replace(tmp_path, self._path(key))
        except OSError as exc:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise StoreError(f"Failed to write key {key!r}") from exc

    def list(self, prefix: str = "") -> List[str]:
        try:
            names = os.listdir(self.root)
        except OSError as exc:
            raise StoreError(f"Failed to list {self.root}") from exc
        keys = [unquote(n) for n in names if not n.startswith(".tmp-")]
        return sorted(k for k in keys if k.startswith(prefix))
