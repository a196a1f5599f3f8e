from datetime import datetime
from typing import Dict, List

from pydantic import BaseModel, Field


class TrackMetadata(BaseModel):
    filename: str
    size: int = Field(ge=0)
    duration: int = Field(ge=0)
    uploadedAt: datetime
    contentType: str = "audio/mpeg"


class TrackIndexRecord(BaseModel):
    """Persisted under ``audio-index:<filename>``."""
    metadata: TrackMetadata
    timestampIndex: Dict[int, int]


class PlaylistOut(BaseModel):
    tracks: List[TrackMetadata] = []
    updatedAt: datetime | None = None


class TrackInfoOut(TrackMetadata):
    seekable: bool = True
    timestampIndex: int


class NowPlayingOut(BaseModel):
    song: str
    verse: str
    book: str


class UploadOut(BaseModel):
    success: bool = True
    filename: str
    duration: int
    seekPoints: int
