from dataclasses import dataclass
from typing import Dict, Protocol

import numpy as np

DEFAULT_BITRATE_BPS = 128_000


@dataclass(frozen=True)
class IndexResult:
    duration: int              # seconds
    offsets: Dict[int, int]    # second -> byte offset

    @property
    def seek_points(self) -> int:
        return len(self.offsets)


class Indexer(Protocol):
    def build_index(self, audio: bytes) -> IndexResult: ...


class AssumedBitrateIndexer:
    """
    Duration and per-second seek table from byte length alone.

    Assumes a constant average bitrate, so offsets are linear in time. Audio
    frames are never inspected: VBR files get approximate seek points and
    malformed input still yields an index.
    """

    def __init__(self, bitrate_bps: int = DEFAULT_BITRATE_BPS):
        if bitrate_bps <= 0:
            raise ValueError(f"bitrate must be positive, got {bitrate_bps}")
        self.bitrate_bps = bitrate_bps

    def estimate_duration(self, size: int) -> int:
        return (size * 8) // self.bitrate_bps

    def build_index(self, audio: bytes) -> IndexResult:
        size = len(audio)
        duration = self.estimate_duration(size)
        if duration == 0:
            return IndexResult(duration=0, offsets={0: 0})

        # floor(s / duration * size), in integers so index[duration] == size exactly
        seconds = np.arange(duration + 1, dtype=np.int64)
        offsets = seconds * size // duration
        return IndexResult(duration=duration, offsets=dict(enumerate(offsets.tolist())))
