class VersecastError(Exception):
    """Base class for errors surfaced to clients as an HTTP status."""


class TrackNotFound(VersecastError):
    def __init__(self, filename: str):
        super().__init__(f"Audio not found: {filename}")
        self.filename = filename


class NoTracksAvailable(VersecastError):
    def __init__(self):
        super().__init__("No songs available")


class RangeNotSatisfiable(VersecastError):
    def __init__(self, total: int, reason: str = ""):
        super().__init__(reason or "Requested range not satisfiable")
        self.total = total


class StoreError(VersecastError):
    """A blob store backend failed to read or write a key."""
