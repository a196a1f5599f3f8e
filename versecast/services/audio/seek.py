import math
import re
from dataclasses import dataclass
from typing import Mapping, Optional

from versecast.core.errors import RangeNotSatisfiable

_RANGE_RE = re.compile(r"^\s*bytes\s*=\s*(\d*)\s*-\s*(\d*)\s*$", re.IGNORECASE)


@dataclass(frozen=True)
class ByteWindow:
    start: int
    end: int          # inclusive
    total: int
    partial: bool = False

    @classmethod
    def checked(cls, start: int, end: int, total: int, partial: bool = True) -> "ByteWindow":
        if not (0 <= start <= end < total):
            raise RangeNotSatisfiable(total, f"bytes {start}-{end} outside 0-{total - 1}")
        return cls(start, end, total, partial)

    @classmethod
    def full(cls, total: int) -> "ByteWindow":
        return cls(0, total - 1, total, False)

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    @property
    def content_range(self) -> str:
        return f"bytes {self.start}-{self.end}/{self.total}"


def parse_range_header(header: str, total: int) -> ByteWindow:
    """
    Parse a single ``bytes=`` range against a body of ``total`` bytes.

    Supports ``a-b``, open ``a-`` and suffix ``-n``. Anything else, including
    multi-range requests, is unsatisfiable.
    """
    m = _RANGE_RE.match(header)
    if not m:
        raise RangeNotSatisfiable(total, f"malformed range {header!r}")
    first, last = m.groups()
    if not first and not last:
        raise RangeNotSatisfiable(total, f"malformed range {header!r}")

    if not first:
        suffix = int(last)
        if suffix == 0:
            raise RangeNotSatisfiable(total, "empty suffix range")
        return ByteWindow.checked(max(total - suffix, 0), total - 1, total)

    start = int(first)
    end = int(last) if last else total - 1
    return ByteWindow.checked(start, end, total)


def _seek_second(seek: str | float) -> Optional[int]:
    try:
        value = float(seek)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return math.floor(value)


def resolve_range(
    total: int,
    index: Optional[Mapping[int, int]],
    seek: Optional[str | float],
    range_header: Optional[str],
) -> ByteWindow:
    """
    Turn a time seek (``t``) or a Range header into the byte window to send.

    ``t`` wins over Range, but only when an index is available; without one
    the request falls through to Range, then to the whole file. A second
    outside the index streams from byte 0. ``t`` only moves the start, the
    window always runs to end of file.
    """
    if total == 0:
        if range_header:
            raise RangeNotSatisfiable(0, "empty track")
        return ByteWindow.full(0)

    if seek is not None and index is not None:
        second = _seek_second(seek)
        start = index.get(second, 0) if second is not None else 0
        return ByteWindow.checked(start, total - 1, total)

    if range_header:
        return parse_range_header(range_header, total)

    return ByteWindow.full(total)
